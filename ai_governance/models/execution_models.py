# ai_governance/models/execution_models.py
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from ai_governance.models.validation_models import ValidationStatus


# ─────────────────────────────────────────────────────────────
# Error taxonomy
# ─────────────────────────────────────────────────────────────

class ErrorKind(str, Enum):
    PERMISSION_DENIED = "permission_denied"
    INVALID_ARGUMENT = "invalid_argument"
    INTERNAL = "internal"


class RejectionReason(str, Enum):
    GOVERNANCE_DISABLED = "governance_disabled"
    TASK_DISABLED = "task_disabled"
    GOVERNANCE_UNAVAILABLE = "governance_unavailable"
    TASK_NOT_REGISTERED = "task_not_registered"
    ACTION_TYPE_MISMATCH = "action_type_mismatch"
    ENTITY_TYPE_NOT_ALLOWED = "entity_type_not_allowed"
    OUTPUT_SCHEMA_MISMATCH = "output_schema_mismatch"
    CATALOG_MISCONFIGURED = "catalog_misconfigured"
    INPUT_INVALID = "input_invalid"
    MODEL_ERROR = "model_error"
    CANCELLED = "cancelled"
    AUDIT_WRITE_FAILED = "audit_write_failed"
    INTERNAL_ERROR = "internal_error"


REASON_KINDS: Dict[RejectionReason, ErrorKind] = {
    RejectionReason.GOVERNANCE_DISABLED: ErrorKind.PERMISSION_DENIED,
    RejectionReason.TASK_DISABLED: ErrorKind.PERMISSION_DENIED,
    RejectionReason.ACTION_TYPE_MISMATCH: ErrorKind.PERMISSION_DENIED,
    RejectionReason.ENTITY_TYPE_NOT_ALLOWED: ErrorKind.PERMISSION_DENIED,
    RejectionReason.TASK_NOT_REGISTERED: ErrorKind.INVALID_ARGUMENT,
    RejectionReason.OUTPUT_SCHEMA_MISMATCH: ErrorKind.INVALID_ARGUMENT,
    RejectionReason.INPUT_INVALID: ErrorKind.INVALID_ARGUMENT,
    RejectionReason.GOVERNANCE_UNAVAILABLE: ErrorKind.INTERNAL,
    RejectionReason.CATALOG_MISCONFIGURED: ErrorKind.INTERNAL,
    RejectionReason.MODEL_ERROR: ErrorKind.INTERNAL,
    RejectionReason.CANCELLED: ErrorKind.INTERNAL,
    RejectionReason.AUDIT_WRITE_FAILED: ErrorKind.INTERNAL,
    RejectionReason.INTERNAL_ERROR: ErrorKind.INTERNAL,
}


class PipelineException(RuntimeError):
    def __init__(self, error: "PipelineError") -> None:
        super().__init__(f"{error.kind.value}: {error.message}")
        self.error = error


class PipelineError(BaseModel):
    """
    Typed failure returned by ExecutionOrchestrator.execute_task.
    `execution_log_id` points at the audit entry recording the failure; it is
    None only when the audit write itself failed.
    """
    kind: ErrorKind
    reason: RejectionReason
    message: str
    details: List[str] = Field(default_factory=list)
    execution_log_id: Optional[str] = None

    @classmethod
    def of(cls, reason: RejectionReason, message: str, **kwargs: Any) -> "PipelineError":
        return cls(kind=REASON_KINDS[reason], reason=reason, message=message, **kwargs)

    def raise_for_error(self) -> None:
        raise PipelineException(self)


# ─────────────────────────────────────────────────────────────
# Call envelope
# ─────────────────────────────────────────────────────────────

class ExecutionContext(BaseModel):
    """Caller-supplied attribution and policy inputs for one call."""
    model_config = ConfigDict(frozen=True)

    org_id: str = Field(..., min_length=1)
    entity_type: str
    entity_id: str
    executed_by: str
    executed_by_role: str
    action_type: str


class ExecutionResult(BaseModel):
    execution_log_id: str
    validation_status: ValidationStatus
    warnings: List[str] = Field(default_factory=list)
    output: Any = None


# ─────────────────────────────────────────────────────────────
# Audit trail
# ─────────────────────────────────────────────────────────────

class ExecutionOutcome(str, Enum):
    REJECTED = "rejected"
    SUCCEEDED = "succeeded"
    MODEL_ERROR = "model_error"


class PayloadDigest(BaseModel):
    """
    Stand-in for a payload in the audit trail: hash, size and top-level keys
    only; values are never stored.
    """
    sha256: str
    size_bytes: int
    summary: str


class ExecutionLogEntry(BaseModel):
    """
    One audit record per ExecuteTask attempt. Append-only: the pipeline
    never updates or deletes entries.
    """
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str = Field(default_factory=lambda: str(uuid4()))
    org_id: str
    task_id: Optional[str] = None
    prompt_template_id: str
    prompt_version: Optional[str] = None
    output_schema_id: Optional[str] = None
    schema_version: Optional[str] = None

    entity_type: str
    entity_id: str
    executed_by: str
    executed_by_role: str
    action_type: str

    requested_at: datetime
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    duration_ms: Optional[int] = None

    outcome: ExecutionOutcome
    error_kind: Optional[ErrorKind] = None
    rejection_reason: Optional[RejectionReason] = None
    rejection_detail: Optional[str] = None

    validation_status: Optional[ValidationStatus] = None
    validation_errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    input_digest: PayloadDigest
    output_digest: Optional[PayloadDigest] = None

    model_name: Optional[str] = None
    requires_acknowledgement: bool = False


class ExecutionLogFilters(BaseModel):
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    task_id: Optional[str] = None
    outcome: Optional[ExecutionOutcome] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    limit: int = Field(default=100, ge=1)


class Acknowledgement(BaseModel):
    """Human review of a succeeded execution; stored separately from the entry."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    org_id: str
    execution_log_id: str
    acknowledged_by: str
    acknowledged_by_role: str
    note: Optional[str] = Field(default=None, max_length=2000)
    acknowledged_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
