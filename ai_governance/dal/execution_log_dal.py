# ai_governance/dal/execution_log_dal.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING

from ai_governance.config import settings
from ai_governance.models import ExecutionLogEntry, ExecutionLogFilters

logger = logging.getLogger("ai_governance.dal.executions")


class AuditWriteError(RuntimeError):
    pass


class MongoExecutionLog:
    """
    DAL for the 'ai_executions' collection.
    - One document per ExecuteTask attempt, including rejections.
    - Insert only: no update or delete methods exist.
    """

    def __init__(
        self,
        client: AsyncIOMotorClient,
        db_name: str,
        collection: Optional[str] = None,
        max_limit: Optional[int] = None,
    ) -> None:
        self._db = client[db_name]
        self._col: AsyncIOMotorCollection = self._db[collection or settings.execution_log_collection]
        self._max_limit = max_limit or settings.audit_query_max_limit

    # ---------- bootstrap ---------- #

    async def ensure_indexes(self) -> None:
        await self._col.create_index([("id", ASCENDING)], name="uk_id", unique=True)
        await self._col.create_index([("org_id", ASCENDING), ("requested_at", DESCENDING)], name="ix_org_requested")
        await self._col.create_index(
            [("org_id", ASCENDING), ("entity_type", ASCENDING), ("entity_id", ASCENDING), ("requested_at", DESCENDING)],
            name="ix_org_entity_requested",
        )
        await self._col.create_index(
            [("org_id", ASCENDING), ("task_id", ASCENDING), ("requested_at", DESCENDING)],
            name="ix_org_task_requested",
        )

    # ---------- write ---------- #

    async def append(self, entry: ExecutionLogEntry) -> str:
        doc = entry.model_dump(mode="json")
        # native datetimes so range filters compare chronologically
        doc["requested_at"] = entry.requested_at
        doc["completed_at"] = entry.completed_at
        res = await self._col.insert_one(doc)
        if not res.acknowledged:
            raise AuditWriteError(f"execution log insert not acknowledged id={entry.id}")
        return entry.id

    # ---------- read ---------- #

    async def get(self, org_id: str, execution_log_id: str) -> Optional[ExecutionLogEntry]:
        doc = await self._col.find_one({"org_id": org_id, "id": execution_log_id}, projection={"_id": 0})
        return ExecutionLogEntry.model_validate(doc) if doc else None

    async def list_by_org(self, org_id: str, filters: Optional[ExecutionLogFilters] = None) -> List[ExecutionLogEntry]:
        f = filters or ExecutionLogFilters()
        q: Dict[str, Any] = {"org_id": org_id}
        if f.entity_type:
            q["entity_type"] = f.entity_type
        if f.entity_id:
            q["entity_id"] = f.entity_id
        if f.task_id:
            q["task_id"] = f.task_id
        if f.outcome:
            q["outcome"] = f.outcome.value
        if f.start or f.end:
            window: Dict[str, Any] = {}
            if f.start:
                window["$gte"] = f.start
            if f.end:
                window["$lt"] = f.end
            q["requested_at"] = window

        limit = min(f.limit, self._max_limit)
        cursor = self._col.find(q, projection={"_id": 0}).sort("requested_at", DESCENDING).limit(limit)
        return [ExecutionLogEntry.model_validate(d) async for d in cursor]

    async def history_for_entity(
        self, org_id: str, entity_type: str, entity_id: str, limit: int = 10
    ) -> List[ExecutionLogEntry]:
        return await self.list_by_org(
            org_id, ExecutionLogFilters(entity_type=entity_type, entity_id=entity_id, limit=max(limit, 1))
        )
