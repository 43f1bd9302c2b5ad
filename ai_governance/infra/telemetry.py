# ai_governance/infra/telemetry.py
from __future__ import annotations
import time
from contextlib import contextmanager
from typing import Dict, Iterator


@contextmanager
def timer() -> Iterator[Dict[str, int]]:
    """
    Measures wall-clock time of the enclosed block.
    The yielded dict gets `ms` filled in on exit.
    """
    box: Dict[str, int] = {"ms": 0}
    start = time.perf_counter()
    try:
        yield box
    finally:
        box["ms"] = int((time.perf_counter() - start) * 1000.0)


def elapsed_ms(started: float) -> int:
    """Milliseconds since a `time.perf_counter()` reading."""
    return int((time.perf_counter() - started) * 1000.0)
