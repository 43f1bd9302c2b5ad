# ai_governance/llm/execution_base.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol


@dataclass
class ExecResult:
    """
    Generic return object for one provider completion.
    - text:  the main text output (trimmed string)
    - raw:   the full provider response (already JSON-serializable)
    - model: the model the provider reports having used, when known
    """
    text: str
    raw: Dict[str, Any] = field(default_factory=dict)
    model: Optional[str] = None


class ExecLLM(Protocol):
    """
    Unified async interface for provider adapters (OpenAIExecAdapter,
    GenericHTTPExecAdapter). AdapterModelInvoker is the only caller.
    """

    model: str

    async def acomplete(
        self,
        *,
        system_prompt: Optional[str],
        user_prompt: str,
        temperature: Optional[float],
        max_tokens: Optional[int],
    ) -> ExecResult:
        """
        Perform one completion call.
        Implementations must return an ExecResult.
        """
