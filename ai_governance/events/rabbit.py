# ai_governance/events/rabbit.py
from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import aio_pika
from aio_pika import ExchangeType, Message

from ai_governance.config import Settings, settings

logger = logging.getLogger("ai_governance.events")

SERVICE = "ai"


def rk(org: str, service: str, event: str, version: str = "v1") -> str:
    """Topic routing key: <org>.<service>.<event>.<version>"""
    return f"{org}.{service}.{event}.{version}"


def _standard_headers(service: str, event: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    h: Dict[str, Any] = {
        "x-service": service,
        "x-event": event,
        "x-at": datetime.now(timezone.utc).isoformat(),
    }
    if payload.get("org_id"):
        h["x-org-id"] = payload["org_id"]
    if payload.get("by"):
        h["x-actor"] = payload["by"]
    return h


class RabbitBus:
    """
    Async topic publisher for governance and acknowledgement events.
    Connects lazily on first publish; callers treat publish failures as best-effort.
    """

    def __init__(
        self, uri: Optional[str] = None, exchange: Optional[str] = None, org: Optional[str] = None
    ) -> None:
        self._uri = uri or settings.rabbitmq_uri
        self._exchange_name = exchange or settings.rabbitmq_exchange
        self._org = org or settings.events_org
        self._conn: Optional[aio_pika.abc.AbstractRobustConnection] = None
        self._ex: Optional[aio_pika.abc.AbstractExchange] = None
        self._lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._ex is not None and self._conn is not None and not self._conn.is_closed

    async def connect(self) -> "RabbitBus":
        async with self._lock:
            if self.connected:
                return self
            logger.info("[events] connecting exchange=%s", self._exchange_name)
            self._conn = await aio_pika.connect_robust(self._uri)
            channel = await self._conn.channel(publisher_confirms=False)
            self._ex = await channel.declare_exchange(self._exchange_name, ExchangeType.TOPIC, durable=True)
        return self

    async def close(self) -> None:
        if self._conn is not None and not self._conn.is_closed:
            await self._conn.close()
            logger.info("[events] connection closed")
        self._ex = None

    async def publish(
        self,
        *,
        service: str,
        event: str,
        payload: Dict[str, Any],
        version: str = "v1",
        org: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ) -> None:
        if self._ex is None:
            await self.connect()

        routing_key = rk(org or self._org, service, event, version)
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        message = Message(
            body=body,
            delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
            content_type="application/json",
            headers={**_standard_headers(service, event, payload), **(headers or {})},
        )
        await self._ex.publish(message, routing_key=routing_key)
        logger.info("[events] published rk=%s bytes=%d", routing_key, len(body))


_bus: Optional[RabbitBus] = None


def get_bus(cfg: Optional[Settings] = None) -> RabbitBus:
    """Process-wide bus; `cfg` applies only when it is first created."""
    global _bus
    if _bus is None:
        cfg = cfg or settings
        _bus = RabbitBus(cfg.rabbitmq_uri, cfg.rabbitmq_exchange, cfg.events_org)
    return _bus
