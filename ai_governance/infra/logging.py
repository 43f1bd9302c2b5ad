# ai_governance/infra/logging.py
from __future__ import annotations
import logging
from typing import Optional

from ai_governance.config import settings

_LEVELS: dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def setup_logging(service_name: Optional[str] = None, level: Optional[str] = None) -> None:
    """
    Pipe-separated logging shared by the pipeline, stores and adapters.
    """
    svc = service_name or settings.service_name
    resolved = _LEVELS.get((level or settings.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format=(
            "%(asctime)s | %(levelname)s | %(name)s | "
            f"svc={svc} | %(message)s"
        ),
    )
    # quiet noisy deps
    logging.getLogger("aio_pika").setLevel(logging.WARNING)
    logging.getLogger("aiormq").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
