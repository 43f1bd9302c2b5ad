# ai_governance/pipeline/__init__.py
from .graph import build_pipeline_graph
from .orchestrator import ExecutionOrchestrator, build_orchestrator
from .state import AuditTrace, PipelineState

__all__ = [
    "build_pipeline_graph",
    "ExecutionOrchestrator",
    "build_orchestrator",
    "AuditTrace",
    "PipelineState",
]
