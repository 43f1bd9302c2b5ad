# ai_governance/pipeline/nodes/model_invocation.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from ai_governance.llm.invoker import ModelInvoker
from ai_governance.models import PipelineError, RejectionReason
from ai_governance.pipeline.state import PipelineState
from ai_governance.services.prompt_renderer import build_prompt
from ai_governance.utils.json_utils import parse_json_strict

logger = logging.getLogger("ai_governance.pipeline.model")


def model_invocation_node(*, invoker: ModelInvoker, timeout: float):
    """
    Renders the prompt and makes exactly one model call, bounded by `timeout`.
    No retries: any failure of the call or of parsing its output ends the
    pipeline as model_error.
    """

    async def _node(state: PipelineState) -> Dict[str, Any]:
        ctx = state["context"]
        task = state["task"]
        data = state.get("input")
        rendered = build_prompt(state["template"], state["output_schema"], data if isinstance(data, dict) else {})

        state["trace"].model_reached = True
        try:
            raw = await asyncio.wait_for(
                invoker.generate(rendered.prompt, system_prompt=rendered.system_prompt, timeout=timeout),
                timeout=timeout,
            )
            output = parse_json_strict(raw)
        except asyncio.TimeoutError:
            reason = f"model call timed out after {timeout:g}s"
        except Exception as e:
            reason = str(e) or type(e).__name__
        else:
            logger.debug("[pipeline] model ok task=%s prompt_chars=%d", task.task_id, len(rendered.prompt))
            return {"output": output}

        logger.error(
            "[pipeline] model_error org=%s task=%s template=%s@%s err=%s",
            ctx.org_id, task.task_id, rendered.template_id, rendered.template_version, reason,
        )
        return {"rejection": PipelineError.of(RejectionReason.MODEL_ERROR, f"AI execution failed: {reason}")}

    return _node
