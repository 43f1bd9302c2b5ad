# ai_governance/llm/execution_http.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ai_governance.llm.execution_base import ExecLLM, ExecResult

logger = logging.getLogger("ai_governance.llm.http")


class GenericHTTPExecAdapter(ExecLLM):
    """
    Adapter for a self-hosted model or internal gateway.

    Request:  POST <base_url>  {"model", "system", "user", "temperature", "max_tokens"}
    Response: {"text": "<model output>", "model": "<optional>"}

    A response without a `text` field is returned as empty text, which the
    invoker then reports as an empty response.
    """

    def __init__(
        self,
        *,
        base_url: str,
        model: str,
        timeout_sec: float,
        headers: Optional[Dict[str, str]] = None,
        auth_header: Optional[str] = None,
    ) -> None:
        self.base_url = base_url
        self.model = model
        self.timeout = timeout_sec
        self._headers: Dict[str, str] = {"Accept": "application/json", **(headers or {})}
        if auth_header:
            self._headers["Authorization"] = auth_header

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def _body(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        temperature: Optional[float],
        max_tokens: Optional[int],
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"model": self.model, "user": user_prompt}
        if system_prompt:
            body["system"] = system_prompt
        if temperature is not None:
            body["temperature"] = temperature
        if max_tokens is not None:
            body["max_tokens"] = max_tokens
        return body

    async def acomplete(
        self,
        *,
        system_prompt: Optional[str],
        user_prompt: str,
        temperature: Optional[float],
        max_tokens: Optional[int],
    ) -> ExecResult:
        async with httpx.AsyncClient(timeout=self.timeout, headers=self._headers) as client:
            resp = await client.post(
                self.base_url, json=self._body(system_prompt, user_prompt, temperature, max_tokens)
            )
            resp.raise_for_status()
            data = resp.json()

        if not isinstance(data, dict):
            raise ValueError(f"gateway returned {type(data).__name__}, expected an object")
        text = str(data.get("text") or "").strip()
        logger.debug("[llm.http] status=%d chars=%d", resp.status_code, len(text))
        return ExecResult(text=text, raw=data, model=data.get("model") or self.model)
