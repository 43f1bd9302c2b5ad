# ai_governance/dal/acknowledgement_dal.py
from __future__ import annotations

from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING

from ai_governance.config import settings
from ai_governance.models import Acknowledgement


class MongoAcknowledgementStore:
    """
    Append-only human reviews of AI executions.
    Collection: 'ai_execution_acknowledgements'
    """

    def __init__(self, client: AsyncIOMotorClient, db_name: str, collection: Optional[str] = None) -> None:
        self._db = client[db_name]
        self._col: AsyncIOMotorCollection = self._db[collection or settings.acknowledgement_collection]

    async def ensure_indexes(self) -> None:
        await self._col.create_index([("id", ASCENDING)], name="uk_id", unique=True)
        await self._col.create_index(
            [("org_id", ASCENDING), ("execution_log_id", ASCENDING)], name="ix_org_execution"
        )

    async def append(self, ack: Acknowledgement) -> str:
        doc = ack.model_dump(mode="json")
        doc["acknowledged_at"] = ack.acknowledged_at
        await self._col.insert_one(doc)
        return ack.id

    async def list_for_execution(self, org_id: str, execution_log_id: str) -> List[Acknowledgement]:
        cursor = self._col.find(
            {"org_id": org_id, "execution_log_id": execution_log_id}, projection={"_id": 0}
        ).sort("acknowledged_at", DESCENDING)
        return [Acknowledgement.model_validate(d) async for d in cursor]

    async def acknowledged_ids(self, org_id: str, execution_log_ids: List[str]) -> List[str]:
        if not execution_log_ids:
            return []
        return await self._col.distinct(
            "execution_log_id", {"org_id": org_id, "execution_log_id": {"$in": execution_log_ids}}
        )
