# ai_governance/pipeline/nodes/__init__.py
from .governance_gate import governance_gate_node
from .input_validation_gate import input_validation_gate_node
from .model_invocation import model_invocation_node
from .output_validation_gate import output_validation_gate_node
from .record_execution import record_execution_node
from .registry_gate import registry_gate_node

__all__ = [
    "governance_gate_node",
    "input_validation_gate_node",
    "model_invocation_node",
    "output_validation_gate_node",
    "record_execution_node",
    "registry_gate_node",
]
