# ai_governance/models/__init__.py
from .task_models import (
    EntityType,
    ActionType,
    SensitivityLevel,
    TaskDefinition,
    TaskAuthorization,
)

from .governance_models import (
    GovernanceSettings,
    GovernanceSettingsUpdate,
    GovernanceDecision,
    DEFAULT_GOVERNANCE_SETTINGS,
)

from .catalog_models import (
    PromptTemplate,
    SchemaDefinition,
)

from .validation_models import (
    ValidationStatus,
    ValidationIssue,
    ValidationReport,
)

from .execution_models import (
    ErrorKind,
    RejectionReason,
    PipelineError,
    PipelineException,
    ExecutionContext,
    ExecutionResult,
    ExecutionOutcome,
    PayloadDigest,
    ExecutionLogEntry,
    ExecutionLogFilters,
    Acknowledgement,
)

__all__ = [
    "EntityType",
    "ActionType",
    "SensitivityLevel",
    "TaskDefinition",
    "TaskAuthorization",
    "GovernanceSettings",
    "GovernanceSettingsUpdate",
    "GovernanceDecision",
    "DEFAULT_GOVERNANCE_SETTINGS",
    "PromptTemplate",
    "SchemaDefinition",
    "ValidationStatus",
    "ValidationIssue",
    "ValidationReport",
    "ErrorKind",
    "RejectionReason",
    "PipelineError",
    "PipelineException",
    "ExecutionContext",
    "ExecutionResult",
    "ExecutionOutcome",
    "PayloadDigest",
    "ExecutionLogEntry",
    "ExecutionLogFilters",
    "Acknowledgement",
]
