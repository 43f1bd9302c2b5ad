# ai_governance/dal/governance_dal.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, ReturnDocument
from tenacity import retry, stop_after_attempt, wait_exponential_jitter

from ai_governance.config import settings
from ai_governance.models import GovernanceSettings, GovernanceSettingsUpdate

logger = logging.getLogger("ai_governance.dal.governance")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _strip_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


# A conservative retry wrapper for idempotent reads only
def retryable_read(fn):
    return retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=0.2, max=2.0),
        reraise=True,
    )(fn)


class MongoGovernanceStore:
    """
    Per-org AI governance settings.
    Collection: 'ai_governance_settings' (one document per org, keyed by org_id).
    A missing document means "defaults", never an error.
    """

    def __init__(self, client: AsyncIOMotorClient, db_name: str, collection: Optional[str] = None) -> None:
        self._db = client[db_name]
        self._col: AsyncIOMotorCollection = self._db[collection or settings.governance_collection]

    async def ensure_indexes(self) -> None:
        await self._col.create_index([("org_id", ASCENDING)], name="uk_org", unique=True)

    @staticmethod
    def _to_settings(doc: Optional[Dict[str, Any]]) -> GovernanceSettings:
        if not doc:
            return GovernanceSettings()
        stored = _strip_none({k: doc.get(k) for k in GovernanceSettings.model_fields})
        return GovernanceSettings.model_validate(stored)

    @retryable_read
    async def get_settings(self, org_id: str) -> GovernanceSettings:
        doc = await self._col.find_one({"org_id": org_id}, projection={"_id": 0})
        return self._to_settings(doc)

    async def save_settings(self, org_id: str, update: GovernanceSettingsUpdate, actor: str) -> GovernanceSettings:
        patch = _strip_none(update.model_dump(mode="json"))
        for key in ("enabled_tasks", "disabled_tasks"):
            if key in patch:
                patch[key] = sorted(patch[key])
        doc = await self._col.find_one_and_update(
            {"org_id": org_id},
            {"$set": {**patch, "updated_at": _utcnow(), "updated_by": actor}},
            upsert=True,
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )
        logger.debug("[governance.dal] saved org=%s fields=%s", org_id, sorted(patch))
        return self._to_settings(doc)
