# ai_governance/llm/invoker.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from ai_governance.config import Settings, settings as default_settings
from ai_governance.infra.telemetry import timer
from ai_governance.llm.execution_base import ExecLLM
from ai_governance.llm.execution_factory import build_exec_llm

logger = logging.getLogger("ai_governance.llm.invoker")


class ModelInvocationError(RuntimeError):
    """Timeout, transport failure or empty response from the model."""


class ModelInvoker(Protocol):
    model_name: Optional[str]

    async def generate(
        self,
        rendered_prompt: str,
        *,
        system_prompt: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> str:
        ...


class AdapterModelInvoker:
    """
    ModelInvoker over a provider adapter. Enforces the timeout itself and
    never retries.
    """

    def __init__(
        self,
        llm: ExecLLM,
        *,
        default_timeout: float,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> None:
        self._llm = llm
        self._default_timeout = default_timeout
        self._temperature = temperature
        self._max_tokens = max_tokens
        self.model_name: Optional[str] = getattr(llm, "model", None)

    async def generate(
        self,
        rendered_prompt: str,
        *,
        system_prompt: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> str:
        limit = timeout or self._default_timeout
        with timer() as t:
            try:
                res = await asyncio.wait_for(
                    self._llm.acomplete(
                        system_prompt=system_prompt,
                        user_prompt=rendered_prompt,
                        temperature=self._temperature,
                        max_tokens=self._max_tokens,
                    ),
                    timeout=limit,
                )
            except asyncio.TimeoutError as e:
                raise ModelInvocationError(f"model call timed out after {limit:g}s") from e
            except Exception as e:
                raise ModelInvocationError(f"model call failed: {type(e).__name__}: {e}") from e

        text = (res.text or "").strip()
        logger.info("[llm] model=%s chars=%d latency_ms=%d", res.model or self.model_name, len(text), t["ms"])
        if not text:
            raise ModelInvocationError("model returned an empty response")
        return text


def build_model_invoker(cfg: Optional[Settings] = None) -> AdapterModelInvoker:
    cfg = cfg or default_settings
    llm = build_exec_llm(
        provider=cfg.llm_provider,
        model=cfg.llm_model,
        base_url=cfg.llm_base_url or None,
        api_key=cfg.openai_api_key or None,
        timeout_sec=cfg.model_timeout_seconds,
    )
    return AdapterModelInvoker(
        llm,
        default_timeout=cfg.model_timeout_seconds,
        temperature=cfg.llm_temperature,
        max_tokens=cfg.llm_max_tokens,
    )
