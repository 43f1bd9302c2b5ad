# ai_governance/pipeline/state.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, TypedDict, Union

from ai_governance.models import (
    ExecutionContext,
    ExecutionResult,
    GovernanceSettings,
    PipelineError,
    PromptTemplate,
    SchemaDefinition,
    TaskDefinition,
    ValidationReport,
    ValidationStatus,
)


@dataclass
class AuditTrace:
    """
    Mutable per-call record shared between the orchestrator and the nodes.
    Lets the orchestrator write the audit entry itself when the graph is
    interrupted before record_execution runs.
    """
    settings: Optional[GovernanceSettings] = None
    task: Optional[TaskDefinition] = None
    template: Optional[PromptTemplate] = None
    output_schema: Optional[SchemaDefinition] = None
    model_reached: bool = False
    recorded: bool = False


class PipelineState(TypedDict, total=False):
    # request (set by the orchestrator)
    prompt_template_id: str
    output_schema_id: Optional[str]
    input: Any
    context: ExecutionContext
    requested_at: datetime
    started: float
    trace: AuditTrace

    # gates
    settings: GovernanceSettings
    task: TaskDefinition
    template: PromptTemplate
    output_schema: SchemaDefinition
    rejection: Optional[PipelineError]

    # model + output validation
    output: Any
    validation_report: ValidationReport
    validation_status: ValidationStatus

    # terminal
    result: Union[ExecutionResult, PipelineError]
