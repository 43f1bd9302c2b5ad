# ai_governance/runtime.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from ai_governance.config import Settings, settings as default_settings
from ai_governance.dal import MongoAcknowledgementStore, MongoExecutionLog, MongoGovernanceStore
from ai_governance.db.mongodb import close_client, get_client, init_indexes
from ai_governance.events.rabbit import RabbitBus, get_bus
from ai_governance.infra.logging import setup_logging
from ai_governance.llm.invoker import ModelInvoker
from ai_governance.pipeline import ExecutionOrchestrator, build_orchestrator
from ai_governance.registry import TaskRegistry
from ai_governance.services import AcknowledgementService, GovernanceService

logger = logging.getLogger("ai_governance.runtime")


@dataclass
class AIRuntime:
    """Everything a host application needs to run and administer AI tasks."""
    orchestrator: ExecutionOrchestrator
    governance: GovernanceService
    acknowledgements: AcknowledgementService
    execution_log: MongoExecutionLog


def _wire(cfg: Settings, bus: Optional[RabbitBus], invoker: Optional[ModelInvoker]) -> AIRuntime:
    client = get_client(cfg)
    execution_log = MongoExecutionLog(
        client, cfg.mongo_db, cfg.execution_log_collection, max_limit=cfg.audit_query_max_limit
    )
    return AIRuntime(
        orchestrator=build_orchestrator(cfg, invoker=invoker),
        governance=GovernanceService(
            MongoGovernanceStore(client, cfg.mongo_db, cfg.governance_collection),
            TaskRegistry.default(),
            bus,
        ),
        acknowledgements=AcknowledgementService(
            execution_log,
            MongoAcknowledgementStore(client, cfg.mongo_db, cfg.acknowledgement_collection),
            bus,
        ),
        execution_log=execution_log,
    )


@asynccontextmanager
async def lifespan(
    cfg: Optional[Settings] = None,
    *,
    invoker: Optional[ModelInvoker] = None,
    connect_bus: bool = True,
) -> AsyncIterator[AIRuntime]:
    """
    Host lifespan:
      - configure logging
      - connect event bus (RabbitMQ)
      - init Mongo indexes
      - wire orchestrator and admin services
      - graceful shutdown: bus, Mongo client (also when startup fails)
    """
    cfg = cfg or default_settings
    setup_logging(cfg.service_name, cfg.log_level)
    logger.info("%s starting up", cfg.service_name)

    bus: Optional[RabbitBus] = get_bus(cfg) if connect_bus else None
    try:
        if bus is not None:
            await bus.connect()
            logger.info("RabbitMQ connected (exchange=%s)", cfg.rabbitmq_exchange)

        await init_indexes(cfg)
        logger.info("Mongo indexes ensured (db=%s)", cfg.mongo_db)

        yield _wire(cfg, bus, invoker)
    finally:
        if bus is not None:
            try:
                await bus.close()
            except Exception:
                logger.warning("Error closing RabbitMQ", exc_info=True)
        try:
            await close_client()
            logger.info("Mongo client closed")
        except Exception:
            logger.warning("Error closing Mongo client", exc_info=True)

        logger.info("%s shutdown complete", cfg.service_name)
