# ai_governance/pipeline/orchestrator.py
from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional, Union

from ai_governance.config import Settings, settings as default_settings
from ai_governance.llm.invoker import ModelInvoker
from ai_governance.models import (
    ExecutionContext,
    ExecutionResult,
    PipelineError,
    RejectionReason,
)
from ai_governance.pipeline.audit import build_log_entry, shielded_append
from ai_governance.pipeline.graph import build_pipeline_graph
from ai_governance.pipeline.nodes.record_execution import audit_failure
from ai_governance.pipeline.state import AuditTrace, PipelineState
from ai_governance.registry import PromptTemplateStore, SchemaStore, TaskRegistry
from ai_governance.services.execution_log import ExecutionLog
from ai_governance.services.governance import GovernanceStore
from ai_governance.services.schema_validator import SchemaValidator

logger = logging.getLogger("ai_governance.pipeline.orchestrator")


class ExecutionOrchestrator:
    """
    Single entry point for every AI-backed feature.

    `execute_task` never raises for policy, validation or model failures: it
    returns a PipelineError. Each call appends exactly one execution log
    entry, or reports `audit_write_failed` when that append fails.
    Cancellation is re-raised after a best-effort `cancelled` entry.
    """

    def __init__(
        self,
        *,
        governance: GovernanceStore,
        registry: TaskRegistry,
        prompts: PromptTemplateStore,
        schemas: SchemaStore,
        invoker: ModelInvoker,
        execution_log: ExecutionLog,
        model_timeout: Optional[float] = None,
        summary_keys: Optional[int] = None,
    ) -> None:
        self._log = execution_log
        self._invoker = invoker
        self._summary_keys = summary_keys or default_settings.snapshot_summary_keys
        self._graph = build_pipeline_graph(
            governance=governance,
            registry=registry,
            prompts=prompts,
            schemas=schemas,
            validator=SchemaValidator(schemas),
            invoker=invoker,
            execution_log=execution_log,
            model_timeout=model_timeout or default_settings.model_timeout_seconds,
            summary_keys=self._summary_keys,
        )

    async def execute_task(
        self,
        prompt_template_id: str,
        output_schema_id: Optional[str],
        input: Any,
        context: ExecutionContext,
    ) -> Union[ExecutionResult, PipelineError]:
        state: PipelineState = {
            "prompt_template_id": prompt_template_id,
            "output_schema_id": output_schema_id,
            "input": input,
            "context": context,
            "requested_at": datetime.now(timezone.utc),
            "started": time.perf_counter(),
            "trace": AuditTrace(),
        }
        trace = state["trace"]

        try:
            final: PipelineState = await self._graph.ainvoke(state)
        except asyncio.CancelledError:
            logger.warning(
                "[pipeline] cancelled org=%s prompt=%s model_reached=%s",
                context.org_id, prompt_template_id, trace.model_reached,
            )
            if not trace.recorded:
                await self._record_abandoned(state)
            raise
        except Exception as e:
            logger.exception("[pipeline] unexpected failure org=%s prompt=%s", context.org_id, prompt_template_id)
            err = PipelineError.of(
                RejectionReason.INTERNAL_ERROR,
                "AI execution failed unexpectedly",
                details=[f"{type(e).__name__}: {e}"],
            )
            if trace.recorded:
                return err
            return await self._record_failure(state, err)

        return final["result"]

    # ---------- fallbacks outside the graph ---------- #

    async def _record_failure(self, state: PipelineState, err: PipelineError) -> PipelineError:
        entry = build_log_entry(state, error=err, model_name=self._model_name(), summary_keys=self._summary_keys)
        state["trace"].recorded = True
        try:
            log_id = await shielded_append(self._log, entry)
        except Exception as e:
            logger.error("[pipeline] audit write failed for internal error id=%s err=%s", entry.id, e)
            return audit_failure(entry, e)
        return err.model_copy(update={"execution_log_id": log_id})

    async def _record_abandoned(self, state: PipelineState) -> None:
        trace = state["trace"]
        message = "Model call abandoned: request cancelled" if trace.model_reached else "Request cancelled"
        entry = build_log_entry(
            state,
            error=PipelineError.of(RejectionReason.CANCELLED, message),
            model_name=self._model_name(),
            summary_keys=self._summary_keys,
        )
        trace.recorded = True

        try:
            await shielded_append(self._log, entry)
        except asyncio.CancelledError:
            logger.warning("[pipeline] cancelled again while recording abandonment id=%s; write continues", entry.id)
        except Exception:
            logger.error("[pipeline] could not record cancelled execution id=%s", entry.id, exc_info=True)

    def _model_name(self) -> Optional[str]:
        return getattr(self._invoker, "model_name", None)


def build_orchestrator(
    cfg: Optional[Settings] = None,
    *,
    invoker: Optional[ModelInvoker] = None,
) -> ExecutionOrchestrator:
    """
    Production wiring: Mongo stores, the code-defined catalog and the
    configured model provider. Raises ValueError if the catalog is inconsistent.
    """
    from ai_governance.dal import MongoExecutionLog, MongoGovernanceStore
    from ai_governance.db.mongodb import get_client
    from ai_governance.llm.invoker import build_model_invoker

    cfg = cfg or default_settings
    registry = TaskRegistry.default()
    prompts = PromptTemplateStore.default()
    schemas = SchemaStore.default()
    registry.ensure_catalog_consistent(prompts, schemas)

    client = get_client(cfg)
    return ExecutionOrchestrator(
        governance=MongoGovernanceStore(client, cfg.mongo_db, cfg.governance_collection),
        registry=registry,
        prompts=prompts,
        schemas=schemas,
        invoker=invoker or build_model_invoker(cfg),
        execution_log=MongoExecutionLog(
            client, cfg.mongo_db, cfg.execution_log_collection, max_limit=cfg.audit_query_max_limit
        ),
        model_timeout=cfg.model_timeout_seconds,
        summary_keys=cfg.snapshot_summary_keys,
    )
