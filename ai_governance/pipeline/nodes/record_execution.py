# ai_governance/pipeline/nodes/record_execution.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ai_governance.llm.invoker import ModelInvoker
from ai_governance.models import (
    ExecutionLogEntry,
    ExecutionResult,
    PipelineError,
    RejectionReason,
)
from ai_governance.pipeline.audit import build_log_entry, shielded_append
from ai_governance.pipeline.state import PipelineState
from ai_governance.services.execution_log import ExecutionLog

logger = logging.getLogger("ai_governance.pipeline.record")


def audit_failure(entry: ExecutionLogEntry, exc: BaseException) -> PipelineError:
    """An unaudited execution is reported as internal, whatever the gates decided."""
    details = [f"outcome={entry.outcome.value}"]
    if entry.rejection_reason is not None:
        details.append(f"reason={entry.rejection_reason.value}")
    if entry.validation_status is not None:
        details.append(f"validation_status={entry.validation_status.value}")
    details.append(f"error={type(exc).__name__}: {exc}")
    return PipelineError.of(
        RejectionReason.AUDIT_WRITE_FAILED,
        "Execution could not be recorded in the audit trail",
        details=details,
    )


def record_execution_node(*, execution_log: ExecutionLog, invoker: ModelInvoker, summary_keys: int):
    """
    Terminal node; every path through the graph ends here, so each call
    appends exactly one entry. The append is shielded, so a caller cancelled
    mid-write still leaves the entry behind.
    """

    async def _node(state: PipelineState) -> Dict[str, Any]:
        ctx = state["context"]
        rejection: Optional[PipelineError] = state.get("rejection")
        entry = build_log_entry(
            state,
            error=rejection,
            model_name=getattr(invoker, "model_name", None),
            summary_keys=summary_keys,
        )

        state["trace"].recorded = True
        try:
            log_id = await shielded_append(execution_log, entry)
        except Exception as e:
            logger.error(
                "[pipeline] audit write failed org=%s prompt=%s outcome=%s err=%s: %s",
                ctx.org_id, entry.prompt_template_id, entry.outcome.value, type(e).__name__, e,
            )
            return {"result": audit_failure(entry, e)}

        if rejection is not None:
            return {"result": rejection.model_copy(update={"execution_log_id": log_id})}

        report = state.get("validation_report")
        logger.info(
            "[pipeline] succeeded org=%s task=%s status=%s log=%s duration_ms=%s",
            ctx.org_id, entry.task_id, entry.validation_status.value if entry.validation_status else None,
            log_id, entry.duration_ms,
        )
        return {
            "result": ExecutionResult(
                execution_log_id=log_id,
                validation_status=state["validation_status"],
                warnings=report.errors if report is not None else [],
                output=state.get("output"),
            )
        }

    return _node
