# ai_governance/pipeline/nodes/input_validation_gate.py
from __future__ import annotations

import logging
from typing import Any, Dict

from ai_governance.models import PipelineError, RejectionReason
from ai_governance.pipeline.state import PipelineState
from ai_governance.services.schema_validator import SchemaValidator

logger = logging.getLogger("ai_governance.pipeline.input")


def input_validation_gate_node(*, validator: SchemaValidator):
    """Any input issue rejects, warnings included. The model is never called with bad input."""

    async def _node(state: PipelineState) -> Dict[str, Any]:
        task = state["task"]
        report = validator.validate(task.input_schema_id, state.get("input"))
        if report.valid:
            return {"rejection": None}

        logger.warning(
            "[pipeline] rejected gate=input org=%s task=%s schema=%s issues=%d",
            state["context"].org_id, task.task_id, task.input_schema_id, len(report.issues),
        )
        return {
            "rejection": PipelineError.of(
                RejectionReason.INPUT_INVALID,
                f"Input failed validation against {task.input_schema_id}",
                details=report.errors,
            )
        }

    return _node
