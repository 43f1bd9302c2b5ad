# ai_governance/__init__.py
from ai_governance.models import (
    ErrorKind,
    ExecutionContext,
    ExecutionResult,
    PipelineError,
    PipelineException,
    RejectionReason,
    ValidationStatus,
)
from ai_governance.pipeline import ExecutionOrchestrator, build_orchestrator

__all__ = [
    "ErrorKind",
    "ExecutionContext",
    "ExecutionResult",
    "PipelineError",
    "PipelineException",
    "RejectionReason",
    "ValidationStatus",
    "ExecutionOrchestrator",
    "build_orchestrator",
]
