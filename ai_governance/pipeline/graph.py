# ai_governance/pipeline/graph.py
from __future__ import annotations

from langgraph.graph import StateGraph
from langgraph.graph.state import END

from ai_governance.llm.invoker import ModelInvoker
from ai_governance.pipeline.nodes import (
    governance_gate_node,
    input_validation_gate_node,
    model_invocation_node,
    output_validation_gate_node,
    record_execution_node,
    registry_gate_node,
)
from ai_governance.pipeline.state import PipelineState
from ai_governance.registry import PromptTemplateStore, SchemaStore, TaskRegistry
from ai_governance.services.execution_log import ExecutionLog
from ai_governance.services.governance import GovernanceStore
from ai_governance.services.schema_validator import SchemaValidator

RECORD = "record_execution"


def _next_or_record(next_node: str):
    def _route(state: PipelineState) -> str:
        return RECORD if state.get("rejection") is not None else next_node

    return _route


def build_pipeline_graph(
    *,
    governance: GovernanceStore,
    registry: TaskRegistry,
    prompts: PromptTemplateStore,
    schemas: SchemaStore,
    validator: SchemaValidator,
    invoker: ModelInvoker,
    execution_log: ExecutionLog,
    model_timeout: float,
    summary_keys: int,
):
    """
    governance_gate -> registry_gate -> input_validation_gate -> model_invocation
        -> output_validation_gate -> record_execution -> END

    Each gate short-circuits to record_execution on rejection.
    """
    graph = StateGraph(PipelineState)

    graph.add_node("governance_gate", governance_gate_node(store=governance, registry=registry))
    graph.add_node("registry_gate", registry_gate_node(registry=registry, prompts=prompts, schemas=schemas))
    graph.add_node("input_validation_gate", input_validation_gate_node(validator=validator))
    graph.add_node("model_invocation", model_invocation_node(invoker=invoker, timeout=model_timeout))
    graph.add_node("output_validation_gate", output_validation_gate_node(validator=validator))
    graph.add_node(
        RECORD,
        record_execution_node(execution_log=execution_log, invoker=invoker, summary_keys=summary_keys),
    )

    graph.set_entry_point("governance_gate")
    graph.add_conditional_edges(
        "governance_gate", _next_or_record("registry_gate"), ["registry_gate", RECORD]
    )
    graph.add_conditional_edges(
        "registry_gate", _next_or_record("input_validation_gate"), ["input_validation_gate", RECORD]
    )
    graph.add_conditional_edges(
        "input_validation_gate", _next_or_record("model_invocation"), ["model_invocation", RECORD]
    )
    graph.add_conditional_edges(
        "model_invocation", _next_or_record("output_validation_gate"), ["output_validation_gate", RECORD]
    )
    graph.add_edge("output_validation_gate", RECORD)
    graph.add_edge(RECORD, END)

    return graph.compile()
