# ai_governance/llm/execution_factory.py
from __future__ import annotations
from typing import Dict, Optional

from ai_governance.llm.execution_base import ExecLLM
from ai_governance.llm.execution_http import GenericHTTPExecAdapter
from ai_governance.llm.execution_openai import OpenAIExecAdapter


def build_exec_llm(
    *,
    provider: str,
    model: str,
    base_url: Optional[str],
    api_key: Optional[str],
    timeout_sec: float,
    headers: Optional[Dict[str, str]] = None,
) -> ExecLLM:
    provider = (provider or "").lower()

    if provider in {"openai", "azure_openai"}:
        return OpenAIExecAdapter(
            api_key=api_key,
            base_url=base_url,
            model=model,
            timeout_sec=timeout_sec,
            headers=headers,
        )

    # Anything else goes through the generic HTTP gateway contract
    if not base_url:
        raise ValueError(f"LLM_BASE_URL is required for provider '{provider or '<unset>'}'")
    return GenericHTTPExecAdapter(
        base_url=base_url,
        model=model,
        timeout_sec=timeout_sec,
        headers=headers,
        auth_header=f"Bearer {api_key}" if api_key else None,
    )
