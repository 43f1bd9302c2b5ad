# ai_governance/registry/task_registry.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError

from ai_governance.models import (
    ActionType,
    EntityType,
    RejectionReason,
    TaskAuthorization,
    TaskDefinition,
)
from ai_governance.registry.prompt_store import PromptTemplateStore
from ai_governance.registry.schema_store import SchemaStore

logger = logging.getLogger("ai_governance.registry.tasks")


def _as_entity(value: str) -> Optional[EntityType]:
    try:
        return EntityType(value)
    except ValueError:
        return None


def _as_action(value: str) -> Optional[ActionType]:
    try:
        return ActionType(value)
    except ValueError:
        return None


class TaskRegistry:
    """
    Static allow-list of AI tasks, indexed by prompt template id.

    Callers identify a task by the prompt they intend to run, so `lookup` and
    `authorize` key on `prompt_template_id`. A template without a task entry
    cannot run. Nothing here mutates after construction.
    """

    def __init__(self, tasks: Iterable[TaskDefinition]) -> None:
        self._by_prompt: Dict[str, TaskDefinition] = {}
        self._by_task_id: Dict[str, TaskDefinition] = {}
        for t in tasks:
            if t.prompt_template_id in self._by_prompt:
                raise ValueError(
                    f"Prompt template '{t.prompt_template_id}' is bound to more than one task "
                    f"('{self._by_prompt[t.prompt_template_id].task_id}', '{t.task_id}')"
                )
            if t.task_id in self._by_task_id:
                raise ValueError(f"Duplicate task id '{t.task_id}'")
            self._by_prompt[t.prompt_template_id] = t
            self._by_task_id[t.task_id] = t

    @classmethod
    def default(cls) -> "TaskRegistry":
        from ai_governance.seeds import TASKS

        return cls(TASKS)

    # ---------- lookups ---------- #

    def lookup(self, prompt_template_id: str) -> Optional[TaskDefinition]:
        return self._by_prompt.get(prompt_template_id)

    def get_by_task_id(self, task_id: str) -> Optional[TaskDefinition]:
        return self._by_task_id.get(task_id)

    def list_tasks(self) -> List[TaskDefinition]:
        return sorted(self._by_task_id.values(), key=lambda t: t.task_id)

    def task_ids(self) -> Set[str]:
        return set(self._by_task_id)

    # ---------- gate ---------- #

    def authorize(self, prompt_template_id: str, entity_type: str, action_type: str) -> TaskAuthorization:
        """
        Registry gate. Checks run in a fixed order and the first failure wins:
        unknown prompt, then action type, then entity type.
        """
        task = self.lookup(prompt_template_id)
        if task is None:
            return TaskAuthorization(
                allowed=False,
                reason=f"Task for prompt {prompt_template_id} is not registered",
                code=RejectionReason.TASK_NOT_REGISTERED.value,
            )

        if _as_action(action_type) != task.required_action_type:
            return TaskAuthorization(
                allowed=False,
                reason=f"Action type mismatch: expected {task.required_action_type.value}",
                code=RejectionReason.ACTION_TYPE_MISMATCH.value,
                task=task,
            )

        if _as_entity(entity_type) not in task.allowed_entity_types:
            return TaskAuthorization(
                allowed=False,
                reason=f"Entity type {entity_type} not allowed for task {task.task_id}",
                code=RejectionReason.ENTITY_TYPE_NOT_ALLOWED.value,
                task=task,
            )

        return TaskAuthorization(allowed=True, task=task)

    # ---------- startup check ---------- #

    def ensure_catalog_consistent(self, prompts: PromptTemplateStore, schemas: SchemaStore) -> None:
        """
        Cross-check every task against the prompt and schema stores.
        Raises ValueError listing all problems found.
        """
        problems: List[str] = []
        checked: Set[str] = set()

        for task in self.list_tasks():
            tpl = prompts.get(task.prompt_template_id)
            if tpl is None:
                problems.append(f"{task.task_id}: prompt template '{task.prompt_template_id}' not found")
            elif tpl.action_type != task.required_action_type:
                problems.append(
                    f"{task.task_id}: template action '{tpl.action_type.value}' "
                    f"!= task action '{task.required_action_type.value}'"
                )

            for schema_id in (task.input_schema_id, task.output_schema_id):
                doc = schemas.get(schema_id)
                if doc is None:
                    problems.append(f"{task.task_id}: schema '{schema_id}' not found")
                    continue
                if schema_id in checked:
                    continue
                checked.add(schema_id)
                try:
                    Draft202012Validator.check_schema(doc.json_schema)
                except SchemaError as e:
                    problems.append(f"{task.task_id}: schema '{schema_id}' is invalid: {e.message}")

        if problems:
            raise ValueError("AI task catalog is inconsistent: " + "; ".join(problems))
        logger.info("[registry] catalog ok tasks=%d schemas_checked=%d", len(self._by_task_id), len(checked))
