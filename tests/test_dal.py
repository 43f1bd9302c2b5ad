"""Unit tests for the Mongo DAL classes with a mocked motor client."""

from datetime import datetime, timezone
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from ai_governance.dal import AuditWriteError, MongoAcknowledgementStore, MongoExecutionLog, MongoGovernanceStore
from ai_governance.models import (
    Acknowledgement,
    ExecutionLogEntry,
    ExecutionLogFilters,
    ExecutionOutcome,
    GovernanceSettingsUpdate,
    PayloadDigest,
    SensitivityLevel,
)


class FakeCursor:
    """Stands in for a motor cursor: chainable sort/limit and async iteration."""

    def __init__(self, docs: List[Dict[str, Any]]) -> None:
        self.docs = docs
        self.sorted_by = None
        self.limited_to = None

    def sort(self, key, direction):
        self.sorted_by = (key, direction)
        return self

    def limit(self, n):
        self.limited_to = n
        return self

    def __aiter__(self):
        self._it = iter(self.docs)
        return self

    async def __anext__(self):
        try:
            return next(self._it)
        except StopIteration:
            raise StopAsyncIteration


@pytest.fixture
def mongo():
    """Returns (client, collection); every db/collection lookup yields the same collection mock."""
    client = MagicMock()
    col = client.__getitem__.return_value.__getitem__.return_value
    col.find_one = AsyncMock(return_value=None)
    col.find_one_and_update = AsyncMock()
    col.insert_one = AsyncMock(return_value=MagicMock(acknowledged=True))
    col.create_index = AsyncMock()
    col.distinct = AsyncMock(return_value=[])
    return client, col


def _entry(**overrides) -> ExecutionLogEntry:
    data = dict(
        org_id="org-1",
        task_id="risk_detection",
        prompt_template_id="risk-detection-v1",
        entity_type="project",
        entity_id="proj-42",
        executed_by="user-7",
        executed_by_role="staff",
        action_type="detect",
        requested_at=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
        outcome=ExecutionOutcome.SUCCEEDED,
        input_digest=PayloadDigest(sha256="0" * 64, size_bytes=2, summary="Object with 0 keys: "),
    )
    data.update(overrides)
    return ExecutionLogEntry(**data)


class TestMongoGovernanceStore:
    """Settings reads, defaults and upserts."""

    @pytest.mark.asyncio
    async def test_missing_document_yields_defaults(self, mongo):
        client, col = mongo
        store = MongoGovernanceStore(client, "db")

        s = await store.get_settings("org-new")

        assert s.enabled is True
        assert s.sensitivity_level == SensitivityLevel.MEDIUM
        assert s.enabled_tasks == set()
        assert s.disabled_tasks == set()
        assert s.require_acknowledgement is True
        col.find_one.assert_awaited_once_with({"org_id": "org-new"}, projection={"_id": 0})

    @pytest.mark.asyncio
    async def test_stored_fields_merge_over_defaults(self, mongo):
        client, col = mongo
        col.find_one.return_value = {"org_id": "org-1", "enabled": False, "disabled_tasks": ["risk_detection"]}
        store = MongoGovernanceStore(client, "db")

        s = await store.get_settings("org-1")

        assert s.enabled is False
        assert s.disabled_tasks == {"risk_detection"}
        assert s.require_acknowledgement is True

    @pytest.mark.asyncio
    async def test_read_is_retried(self, mongo):
        client, col = mongo
        col.find_one.side_effect = [ConnectionError("blip"), {"org_id": "org-1", "enabled": False}]
        store = MongoGovernanceStore(client, "db")

        s = await store.get_settings("org-1")

        assert s.enabled is False
        assert col.find_one.await_count == 2

    @pytest.mark.asyncio
    async def test_save_upserts_partial_patch(self, mongo):
        client, col = mongo
        col.find_one_and_update.return_value = {
            "org_id": "org-1",
            "enabled": True,
            "enabled_tasks": ["engagement_summary", "risk_detection"],
            "updated_by": "admin-1",
        }
        store = MongoGovernanceStore(client, "db")

        saved = await store.save_settings(
            "org-1", GovernanceSettingsUpdate(enabled_tasks={"risk_detection", "engagement_summary"}), "admin-1"
        )

        args, kwargs = col.find_one_and_update.await_args
        assert args[0] == {"org_id": "org-1"}
        update = args[1]["$set"]
        assert update["enabled_tasks"] == ["engagement_summary", "risk_detection"]
        assert update["updated_by"] == "admin-1"
        assert "enabled" not in update
        assert "disabled_tasks" not in update
        assert kwargs["upsert"] is True
        assert saved.enabled_tasks == {"engagement_summary", "risk_detection"}

    @pytest.mark.asyncio
    async def test_ensure_indexes(self, mongo):
        client, col = mongo

        await MongoGovernanceStore(client, "db").ensure_indexes()

        assert col.create_index.await_args.kwargs == {"name": "uk_org", "unique": True}


class TestMongoExecutionLog:
    @pytest.mark.asyncio
    async def test_append_stores_native_datetimes(self, mongo):
        client, col = mongo
        log = MongoExecutionLog(client, "db")
        entry = _entry()

        log_id = await log.append(entry)

        assert log_id == entry.id
        doc = col.insert_one.await_args.args[0]
        assert doc["requested_at"] == entry.requested_at
        assert isinstance(doc["completed_at"], datetime)
        assert doc["outcome"] == "succeeded"
        assert doc["input_digest"]["sha256"] == "0" * 64

    @pytest.mark.asyncio
    async def test_unacknowledged_write_raises(self, mongo):
        client, col = mongo
        col.insert_one.return_value = MagicMock(acknowledged=False)

        with pytest.raises(AuditWriteError):
            await MongoExecutionLog(client, "db").append(_entry())

    @pytest.mark.asyncio
    async def test_list_by_org_builds_query_and_caps_limit(self, mongo):
        client, col = mongo
        cursor = FakeCursor([_entry().model_dump(mode="json")])
        col.find = MagicMock(return_value=cursor)
        log = MongoExecutionLog(client, "db", max_limit=50)
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)

        out = await log.list_by_org(
            "org-1",
            ExecutionLogFilters(task_id="risk_detection", outcome=ExecutionOutcome.SUCCEEDED, start=start, limit=500),
        )

        query = col.find.call_args.args[0]
        assert query == {
            "org_id": "org-1",
            "task_id": "risk_detection",
            "outcome": "succeeded",
            "requested_at": {"$gte": start},
        }
        assert cursor.sorted_by == ("requested_at", -1)
        assert cursor.limited_to == 50
        assert len(out) == 1
        assert out[0].task_id == "risk_detection"

    @pytest.mark.asyncio
    async def test_history_for_entity(self, mongo):
        client, col = mongo
        col.find = MagicMock(return_value=FakeCursor([]))

        out = await MongoExecutionLog(client, "db").history_for_entity("org-1", "project", "proj-42", limit=3)

        assert out == []
        query = col.find.call_args.args[0]
        assert query == {"org_id": "org-1", "entity_type": "project", "entity_id": "proj-42"}

    @pytest.mark.asyncio
    async def test_get_scopes_by_org(self, mongo):
        client, col = mongo
        col.find_one.return_value = _entry(id="e-1").model_dump(mode="json")

        found = await MongoExecutionLog(client, "db").get("org-1", "e-1")

        assert found.id == "e-1"
        col.find_one.assert_awaited_once_with({"org_id": "org-1", "id": "e-1"}, projection={"_id": 0})


class TestMongoAcknowledgementStore:
    @pytest.mark.asyncio
    async def test_append(self, mongo):
        client, col = mongo
        ack = Acknowledgement(
            org_id="org-1", execution_log_id="e-1", acknowledged_by="u-1", acknowledged_by_role="admin"
        )

        assert await MongoAcknowledgementStore(client, "db").append(ack) == ack.id
        doc = col.insert_one.await_args.args[0]
        assert doc["acknowledged_at"] == ack.acknowledged_at

    @pytest.mark.asyncio
    async def test_acknowledged_ids_uses_distinct(self, mongo):
        client, col = mongo
        col.distinct.return_value = ["e-1"]

        ids = await MongoAcknowledgementStore(client, "db").acknowledged_ids("org-1", ["e-1", "e-2"])

        assert ids == ["e-1"]
        col.distinct.assert_awaited_once_with(
            "execution_log_id", {"org_id": "org-1", "execution_log_id": {"$in": ["e-1", "e-2"]}}
        )

    @pytest.mark.asyncio
    async def test_acknowledged_ids_empty_input_skips_query(self, mongo):
        client, col = mongo

        assert await MongoAcknowledgementStore(client, "db").acknowledged_ids("org-1", []) == []
        col.distinct.assert_not_awaited()
