# ai_governance/pipeline/nodes/output_validation_gate.py
from __future__ import annotations

import logging
from typing import Any, Dict

from ai_governance.models import SensitivityLevel, ValidationStatus
from ai_governance.pipeline.state import PipelineState
from ai_governance.services.schema_validator import SchemaValidator, output_status

logger = logging.getLogger("ai_governance.pipeline.output")


def output_validation_gate_node(*, validator: SchemaValidator):
    """Flags the output; never discards it."""

    async def _node(state: PipelineState) -> Dict[str, Any]:
        task = state["task"]
        settings = state["settings"]
        report = validator.validate(task.output_schema_id, state.get("output"))
        effective = SensitivityLevel.highest(task.sensitivity_level, settings.sensitivity_level)
        status = output_status(report, effective)

        if status != ValidationStatus.PASSED:
            logger.warning(
                "[pipeline] output %s org=%s task=%s sensitivity=%s issues=%d",
                status.value, state["context"].org_id, task.task_id, effective.value, len(report.issues),
            )
        return {"validation_report": report, "validation_status": status}

    return _node
