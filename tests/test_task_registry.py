"""Unit tests for the task allow-list and catalog stores."""

import pytest

from ai_governance.models import (
    ActionType,
    EntityType,
    PromptTemplate,
    RejectionReason,
    SchemaDefinition,
    SensitivityLevel,
    TaskDefinition,
)
from ai_governance.registry import PromptTemplateStore, SchemaStore, TaskRegistry


def _task(**overrides) -> TaskDefinition:
    data = dict(
        task_id="t1",
        purpose="test",
        prompt_template_id="p1",
        input_schema_id="in-1",
        output_schema_id="out-1",
        allowed_entity_types=["project"],
        sensitivity_level="low",
        required_action_type="summarize",
    )
    data.update(overrides)
    return TaskDefinition(**data)


def _template(id="p1", action_type=ActionType.SUMMARIZE) -> PromptTemplate:
    return PromptTemplate(id=id, name=id, description="", action_type=action_type, version="1.0.0", template="x")


def _schema(id, json_schema=None) -> SchemaDefinition:
    return SchemaDefinition(id=id, name=id, version="1.0.0", description="", json_schema=json_schema or {"type": "object"})


class TestAuthorize:
    """Registry gate ordering and messages."""

    def test_allows_registered_task(self, registry):
        auth = registry.authorize("risk-detection-v1", "project", "detect")

        assert auth.allowed is True
        assert auth.task.task_id == "risk_detection"
        assert auth.reason is None

    def test_unknown_prompt_is_not_registered(self, registry):
        auth = registry.authorize("free-form-v9", "project", "detect")

        assert auth.allowed is False
        assert auth.code == RejectionReason.TASK_NOT_REGISTERED.value
        assert "not registered" in auth.reason
        assert auth.task is None

    def test_action_type_mismatch(self, registry):
        auth = registry.authorize("risk-detection-v1", "project", "generate")

        assert auth.allowed is False
        assert auth.code == RejectionReason.ACTION_TYPE_MISMATCH.value
        assert auth.reason == "Action type mismatch: expected detect"

    def test_entity_type_not_allowed(self, registry):
        auth = registry.authorize("proposal-risk-analysis-v1", "project", "analyze")

        assert auth.allowed is False
        assert auth.code == RejectionReason.ENTITY_TYPE_NOT_ALLOWED.value
        assert auth.reason == "Entity type project not allowed for task proposal_sanity_check"

    def test_action_checked_before_entity(self, registry):
        auth = registry.authorize("proposal-risk-analysis-v1", "project", "summarize")

        assert auth.code == RejectionReason.ACTION_TYPE_MISMATCH.value

    def test_unknown_entity_vocabulary_is_rejected(self, registry):
        auth = registry.authorize("decision-brief-v1", "invoice", "generate")

        assert auth.allowed is False
        assert auth.code == RejectionReason.ENTITY_TYPE_NOT_ALLOWED.value


class TestRegistryConstruction:
    def test_lookup_is_by_prompt_template_id(self, registry):
        assert registry.lookup("client-summary-v1").task_id == "client_engagement_summary"
        assert registry.lookup("client_engagement_summary") is None
        assert registry.get_by_task_id("client_engagement_summary").prompt_template_id == "client-summary-v1"

    def test_every_task_has_its_own_prompt(self, registry):
        tasks = registry.list_tasks()
        assert len({t.prompt_template_id for t in tasks}) == len(tasks)
        assert len(tasks) == 9

    def test_rejects_two_tasks_for_one_prompt(self):
        with pytest.raises(ValueError, match="bound to more than one task"):
            TaskRegistry([_task(), _task(task_id="t2")])

    def test_rejects_duplicate_task_id(self):
        with pytest.raises(ValueError, match="Duplicate task id"):
            TaskRegistry([_task(), _task(prompt_template_id="p2")])

    def test_task_definition_requires_entities(self):
        with pytest.raises(ValueError):
            _task(allowed_entity_types=[])

    def test_task_definition_is_frozen(self, registry):
        task = registry.lookup("risk-detection-v1")
        with pytest.raises(Exception):
            task.task_id = "other"

    def test_allowed_entities_are_enums(self, registry):
        task = registry.lookup("proposal-risk-analysis-v1")
        assert task.allowed_entity_types == frozenset({EntityType.PROPOSAL, EntityType.ORG})
        assert task.sensitivity_level == SensitivityLevel.MEDIUM


class TestCatalogConsistency:
    def test_default_catalog_is_consistent(self, registry, prompts, schemas):
        registry.ensure_catalog_consistent(prompts, schemas)

    def test_missing_schema_is_reported(self):
        registry = TaskRegistry([_task()])
        prompts = PromptTemplateStore([_template()])
        schemas = SchemaStore([_schema("in-1")])

        with pytest.raises(ValueError, match="schema 'out-1' not found"):
            registry.ensure_catalog_consistent(prompts, schemas)

    def test_invalid_json_schema_is_reported(self):
        registry = TaskRegistry([_task()])
        prompts = PromptTemplateStore([_template()])
        schemas = SchemaStore([_schema("in-1"), _schema("out-1", {"type": "not-a-type"})])

        with pytest.raises(ValueError, match="'out-1' is invalid"):
            registry.ensure_catalog_consistent(prompts, schemas)

    def test_template_action_must_match_task(self):
        registry = TaskRegistry([_task()])
        prompts = PromptTemplateStore([_template(action_type=ActionType.GENERATE)])
        schemas = SchemaStore([_schema("in-1"), _schema("out-1")])

        with pytest.raises(ValueError, match="template action 'generate'"):
            registry.ensure_catalog_consistent(prompts, schemas)


class TestStores:
    def test_schema_get_with_version(self, schemas):
        assert schemas.get("risk-detection-v1", "1.0.0") is not None
        assert schemas.get("risk-detection-v1", "2.0.0") is None
        assert schemas.get("nope") is None

    def test_schema_list_by_entity_type(self, schemas):
        proposal_ids = {s.id for s in schemas.list_schemas("proposal")}
        assert "proposal-content-v1" in proposal_ids
        assert "engagement-summary-v1" not in proposal_ids

    def test_prompt_list_by_action_type(self, prompts):
        ids = {t.id for t in prompts.list_templates("generate")}
        assert ids == {"proposal-generation-v1", "case-study-draft-v1", "decision-brief-v1"}

    def test_deprecated_templates_hidden_by_default(self):
        store = PromptTemplateStore(
            [_template(), _template(id="p0").model_copy(update={"deprecated": True, "replaced_by": "p1"})]
        )
        assert [t.id for t in store.list_templates()] == ["p1"]
        assert len(store.list_templates(include_deprecated=True)) == 2

    def test_duplicate_schema_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate schema id"):
            SchemaStore([_schema("a"), _schema("a")])
