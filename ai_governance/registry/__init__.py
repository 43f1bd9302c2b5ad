# ai_governance/registry/__init__.py
from .prompt_store import PromptTemplateStore
from .schema_store import SchemaStore
from .task_registry import TaskRegistry

__all__ = ["PromptTemplateStore", "SchemaStore", "TaskRegistry"]
