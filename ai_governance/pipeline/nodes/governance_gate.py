# ai_governance/pipeline/nodes/governance_gate.py
from __future__ import annotations

import logging
from typing import Any, Dict

from ai_governance.models import PipelineError, RejectionReason
from ai_governance.pipeline.state import PipelineState
from ai_governance.registry import TaskRegistry
from ai_governance.services.governance import GovernanceStore, decide

logger = logging.getLogger("ai_governance.pipeline.governance")


def governance_gate_node(*, store: GovernanceStore, registry: TaskRegistry):
    """
    First gate. Reads the org's settings and applies the kill switch and the
    per-task enable/disable lists. Unknown prompts pass through here so the
    registry gate can reject them as unregistered.
    """

    async def _node(state: PipelineState) -> Dict[str, Any]:
        ctx = state["context"]
        trace = state["trace"]
        task = registry.lookup(state["prompt_template_id"])
        trace.task = task

        try:
            settings = await store.get_settings(ctx.org_id)
        except Exception as e:
            logger.error(
                "[pipeline] governance read failed org=%s prompt=%s err=%s: %s",
                ctx.org_id, state["prompt_template_id"], type(e).__name__, e,
            )
            return {
                "rejection": PipelineError.of(
                    RejectionReason.GOVERNANCE_UNAVAILABLE,
                    "Governance settings could not be read",
                    details=[f"{type(e).__name__}: {e}"],
                )
            }
        trace.settings = settings

        decision = decide(ctx.org_id, task.task_id if task else None, settings)
        if not decision.allowed:
            logger.warning(
                "[pipeline] rejected gate=governance org=%s task=%s code=%s",
                ctx.org_id, decision.task_id, decision.code,
            )
            return {
                "settings": settings,
                "rejection": PipelineError.of(RejectionReason(decision.code), decision.reason or "Denied by governance"),
            }

        update: Dict[str, Any] = {"settings": settings}
        if task is not None:
            update["task"] = task
        return update

    return _node
