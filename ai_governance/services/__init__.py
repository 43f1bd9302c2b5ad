# ai_governance/services/__init__.py
from .acknowledgement_service import AcknowledgementService
from .execution_log import AcknowledgementStore, ExecutionLog
from .governance import (
    GovernanceError,
    GovernanceService,
    GovernanceStore,
    decide,
    is_task_enabled,
)
from .prompt_renderer import RenderedPrompt, build_prompt, render_template
from .schema_validator import SchemaValidator, output_status

__all__ = [
    "AcknowledgementService",
    "AcknowledgementStore",
    "ExecutionLog",
    "GovernanceError",
    "GovernanceService",
    "GovernanceStore",
    "decide",
    "is_task_enabled",
    "RenderedPrompt",
    "build_prompt",
    "render_template",
    "SchemaValidator",
    "output_status",
]
