# ai_governance/pipeline/audit.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from ai_governance.infra.telemetry import elapsed_ms
from ai_governance.models import (
    ExecutionLogEntry,
    ExecutionOutcome,
    PipelineError,
    RejectionReason,
)
from ai_governance.pipeline.state import AuditTrace, PipelineState
from ai_governance.services.execution_log import ExecutionLog
from ai_governance.utils.json_utils import digest_payload

logger = logging.getLogger("ai_governance.pipeline.audit")

_MODEL_STAGE_REASONS = frozenset({RejectionReason.CANCELLED, RejectionReason.INTERNAL_ERROR})


async def shielded_append(execution_log: ExecutionLog, entry: ExecutionLogEntry) -> str:
    """
    Append that outlives caller cancellation. When the caller is cancelled
    the insert keeps running and CancelledError propagates immediately.
    """
    write = asyncio.ensure_future(execution_log.append(entry))
    try:
        return await asyncio.shield(write)
    except asyncio.CancelledError:
        write.add_done_callback(lambda fut: _report_orphaned_write(fut, entry.id))
        raise


def _report_orphaned_write(fut: "asyncio.Future[str]", entry_id: str) -> None:
    if fut.cancelled():
        logger.error("[pipeline] audit write cancelled after caller left id=%s", entry_id)
        return
    exc = fut.exception()
    if exc is not None:
        logger.error("[pipeline] audit write failed after caller left id=%s err=%s", entry_id, exc)


def outcome_for(error: Optional[PipelineError], model_reached: bool = False) -> ExecutionOutcome:
    """
    Failures during or after the model call are model errors; anything
    earlier is a rejection.
    """
    if error is None:
        return ExecutionOutcome.SUCCEEDED
    if error.reason == RejectionReason.MODEL_ERROR:
        return ExecutionOutcome.MODEL_ERROR
    if model_reached and error.reason in _MODEL_STAGE_REASONS:
        return ExecutionOutcome.MODEL_ERROR
    return ExecutionOutcome.REJECTED


def build_log_entry(
    state: PipelineState,
    *,
    error: Optional[PipelineError] = None,
    model_name: Optional[str] = None,
    summary_keys: int = 5,
) -> ExecutionLogEntry:
    """
    One audit record from whatever the pipeline resolved so far.
    Payloads enter the entry only as digests.
    """
    trace: AuditTrace = state["trace"]
    ctx = state["context"]
    task = trace.task
    template = trace.template
    out_schema = trace.output_schema
    outcome = outcome_for(error, trace.model_reached)

    fields: dict[str, Any] = {}
    if outcome == ExecutionOutcome.SUCCEEDED:
        report = state.get("validation_report")
        issues = report.issues if report is not None else []
        fields.update(
            validation_status=state.get("validation_status"),
            validation_errors=[i.render() for i in issues if i.severity == "error"],
            warnings=[i.render() for i in issues if i.severity == "warning"],
            output_digest=digest_payload(state.get("output"), max_keys=summary_keys),
            requires_acknowledgement=bool(trace.settings and trace.settings.require_acknowledgement),
        )
    else:
        fields.update(
            error_kind=error.kind,
            rejection_reason=error.reason,
            rejection_detail=error.message,
            validation_errors=list(error.details) if error.reason == RejectionReason.INPUT_INVALID else [],
        )

    return ExecutionLogEntry(
        org_id=ctx.org_id,
        task_id=task.task_id if task else None,
        prompt_template_id=state["prompt_template_id"],
        prompt_version=template.version if template else None,
        output_schema_id=task.output_schema_id if task else state.get("output_schema_id"),
        schema_version=out_schema.version if out_schema else None,
        entity_type=ctx.entity_type,
        entity_id=ctx.entity_id,
        executed_by=ctx.executed_by,
        executed_by_role=ctx.executed_by_role,
        action_type=ctx.action_type,
        requested_at=state["requested_at"],
        completed_at=datetime.now(timezone.utc),
        duration_ms=elapsed_ms(state["started"]),
        outcome=outcome,
        input_digest=digest_payload(state.get("input"), max_keys=summary_keys),
        model_name=model_name if trace.model_reached else None,
        **fields,
    )
