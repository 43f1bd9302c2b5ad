# ai_governance/pipeline/nodes/registry_gate.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

from ai_governance.models import PipelineError, RejectionReason
from ai_governance.pipeline.state import PipelineState
from ai_governance.registry import PromptTemplateStore, SchemaStore, TaskRegistry

logger = logging.getLogger("ai_governance.pipeline.registry")


def registry_gate_node(*, registry: TaskRegistry, prompts: PromptTemplateStore, schemas: SchemaStore):
    async def _node(state: PipelineState) -> Dict[str, Any]:
        ctx = state["context"]
        trace = state["trace"]
        prompt_id = state["prompt_template_id"]

        auth = registry.authorize(prompt_id, ctx.entity_type, ctx.action_type)
        if not auth.allowed:
            logger.warning(
                "[pipeline] rejected gate=registry org=%s prompt=%s entity=%s action=%s code=%s",
                ctx.org_id, prompt_id, ctx.entity_type, ctx.action_type, auth.code,
            )
            return {"rejection": PipelineError.of(RejectionReason(auth.code), auth.reason or "Task not allowed")}

        task = auth.task
        requested_schema = state.get("output_schema_id")
        if requested_schema and requested_schema != task.output_schema_id:
            logger.warning(
                "[pipeline] rejected gate=registry org=%s task=%s output_schema=%s expected=%s",
                ctx.org_id, task.task_id, requested_schema, task.output_schema_id,
            )
            return {
                "rejection": PipelineError.of(
                    RejectionReason.OUTPUT_SCHEMA_MISMATCH,
                    f"Output schema {requested_schema} does not match task {task.task_id} "
                    f"(expected {task.output_schema_id})",
                )
            }

        template = prompts.get(task.prompt_template_id)
        output_schema = schemas.get(task.output_schema_id)
        missing: List[str] = []
        if template is None:
            missing.append(f"prompt template {task.prompt_template_id}")
        if task.input_schema_id not in schemas:
            missing.append(f"schema {task.input_schema_id}")
        if output_schema is None:
            missing.append(f"schema {task.output_schema_id}")
        if missing:
            logger.error("[pipeline] catalog misconfigured task=%s missing=%s", task.task_id, missing)
            return {
                "rejection": PipelineError.of(
                    RejectionReason.CATALOG_MISCONFIGURED,
                    f"Task {task.task_id} is misconfigured",
                    details=[f"missing {m}" for m in missing],
                )
            }

        trace.template = template
        trace.output_schema = output_schema
        return {"task": task, "template": template, "output_schema": output_schema}

    return _node
