# ai_governance/db/mongodb.py
from __future__ import annotations

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from ai_governance.config import Settings, settings as default_settings

_client: Optional[AsyncIOMotorClient] = None


def get_client(cfg: Optional[Settings] = None) -> AsyncIOMotorClient:
    """
    Singleton Motor client. tz_aware so audit timestamps come back as UTC-aware datetimes.
    The first caller's settings pick the server; later calls share that client.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient((cfg or default_settings).mongo_uri, tz_aware=True)
    return _client


async def init_indexes(cfg: Optional[Settings] = None) -> None:
    """
    Create indexes for every collection the pipeline owns, in the database
    and collections named by `cfg`. Index definitions live on the DAL classes.
    """
    from ai_governance.dal import MongoAcknowledgementStore, MongoExecutionLog, MongoGovernanceStore

    cfg = cfg or default_settings
    client = get_client(cfg)
    await MongoGovernanceStore(client, cfg.mongo_db, cfg.governance_collection).ensure_indexes()
    await MongoExecutionLog(client, cfg.mongo_db, cfg.execution_log_collection).ensure_indexes()
    await MongoAcknowledgementStore(client, cfg.mongo_db, cfg.acknowledgement_collection).ensure_indexes()


async def close_client() -> None:
    """
    Optional graceful shutdown hook.
    """
    global _client
    if _client is not None:
        _client.close()
        _client = None
