# ai_governance/llm/__init__.py
from .execution_base import ExecLLM, ExecResult
from .execution_factory import build_exec_llm
from .invoker import AdapterModelInvoker, ModelInvocationError, ModelInvoker, build_model_invoker

__all__ = [
    "ExecLLM",
    "ExecResult",
    "build_exec_llm",
    "AdapterModelInvoker",
    "ModelInvocationError",
    "ModelInvoker",
    "build_model_invoker",
]
