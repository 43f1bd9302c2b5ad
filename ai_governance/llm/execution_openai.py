# ai_governance/llm/execution_openai.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from ai_governance.llm.execution_base import ExecLLM, ExecResult

logger = logging.getLogger("ai_governance.llm.openai")

# Every task answers with a JSON document.
_JSON_MODE = {"type": "json_object"}


def _messages(system_prompt: Optional[str], user_prompt: str) -> List[Dict[str, str]]:
    out: List[Dict[str, str]] = []
    if system_prompt:
        out.append({"role": "system", "content": system_prompt})
    out.append({"role": "user", "content": user_prompt})
    return out


class OpenAIExecAdapter(ExecLLM):
    """
    Chat-completions adapter for OpenAI and Azure OpenAI (Azure via `base_url`).
    SDK retries are disabled; the pipeline makes exactly one attempt.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: Optional[str],
        model: str,
        timeout_sec: float,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.model = model
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url or None,
            default_headers=headers or None,
            timeout=timeout_sec,
            max_retries=0,
        )

    async def acomplete(
        self,
        *,
        system_prompt: Optional[str],
        user_prompt: str,
        temperature: Optional[float],
        max_tokens: Optional[int],
    ) -> ExecResult:
        kwargs: Dict[str, Any] = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        resp = await self.client.chat.completions.create(
            model=self.model,
            messages=_messages(system_prompt, user_prompt),
            response_format=_JSON_MODE,
            **kwargs,
        )
        choice = resp.choices[0] if resp.choices else None
        text = ((choice.message.content if choice else None) or "").strip()
        logger.debug(
            "[llm.openai] model=%s finish=%s chars=%d",
            resp.model, choice.finish_reason if choice else None, len(text),
        )
        return ExecResult(text=text, raw=resp.model_dump(), model=resp.model)
