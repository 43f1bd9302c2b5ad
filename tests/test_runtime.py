"""Lifespan wiring with Mongo and RabbitMQ patched out."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ai_governance import runtime as runtime_mod
from ai_governance.config import Settings
from ai_governance.db import mongodb
from ai_governance.pipeline import ExecutionOrchestrator
from ai_governance.services import AcknowledgementService, GovernanceService


class RecordingClient:
    """Motor client double; remembers (db, collection, index name) for each create_index."""

    def __init__(self) -> None:
        self.indexes = []

    def __getitem__(self, db_name):
        client = self

        class _Db:
            def __getitem__(self, col_name):
                col = MagicMock()

                async def create_index(keys, **kwargs):
                    client.indexes.append((db_name, col_name, kwargs.get("name")))
                    return kwargs.get("name")

                col.create_index = create_index
                return col

        return _Db()


@pytest.fixture
def bus():
    b = MagicMock()
    b.connect = AsyncMock()
    b.close = AsyncMock()
    return b


@pytest.fixture
def patched(monkeypatch, bus):
    client = MagicMock()
    init_indexes = AsyncMock()
    close_client = AsyncMock()

    monkeypatch.setattr(runtime_mod, "get_bus", lambda cfg=None: bus)
    monkeypatch.setattr(runtime_mod, "init_indexes", init_indexes)
    monkeypatch.setattr(runtime_mod, "close_client", close_client)
    monkeypatch.setattr(runtime_mod, "get_client", lambda cfg=None: client)
    monkeypatch.setattr(mongodb, "get_client", lambda cfg=None: client)
    return bus, init_indexes, close_client


class TestLifespan:
    @pytest.mark.asyncio
    async def test_wires_services_and_shuts_down(self, patched, make_invoker):
        bus, init_indexes, close_client = patched
        cfg = Settings()

        async with runtime_mod.lifespan(cfg, invoker=make_invoker()) as rt:
            assert isinstance(rt.orchestrator, ExecutionOrchestrator)
            assert isinstance(rt.governance, GovernanceService)
            assert isinstance(rt.acknowledgements, AcknowledgementService)
            bus.connect.assert_awaited_once()
            init_indexes.assert_awaited_once_with(cfg)

        bus.close.assert_awaited_once()
        close_client.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_without_bus(self, patched, make_invoker):
        bus, _, close_client = patched

        async with runtime_mod.lifespan(Settings(), invoker=make_invoker(), connect_bus=False):
            pass

        bus.connect.assert_not_awaited()
        close_client.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_startup_still_closes_connections(self, patched, monkeypatch, make_invoker):
        bus, _, close_client = patched

        def broken_catalog(cfg=None, *, invoker=None):
            raise ValueError("catalog inconsistent: prompt 'x' has no schema")

        monkeypatch.setattr(runtime_mod, "build_orchestrator", broken_catalog)

        with pytest.raises(ValueError, match="catalog inconsistent"):
            async with runtime_mod.lifespan(Settings(), invoker=make_invoker()):
                pass

        bus.close.assert_awaited_once()
        close_client.assert_awaited_once()


class TestIndexesFollowSettings:
    @pytest.mark.asyncio
    async def test_indexes_land_on_configured_collections(self, monkeypatch, bus, make_invoker):
        client = RecordingClient()
        monkeypatch.setattr(runtime_mod, "get_bus", lambda cfg=None: bus)
        monkeypatch.setattr(runtime_mod, "close_client", AsyncMock())
        monkeypatch.setattr(mongodb, "get_client", lambda cfg=None: client)
        monkeypatch.setattr(runtime_mod, "get_client", lambda cfg=None: client)
        cfg = Settings(
            mongo_db="tenant_db",
            governance_collection="gov_x",
            execution_log_collection="audit_x",
            acknowledgement_collection="acks_x",
        )

        async with runtime_mod.lifespan(cfg, invoker=make_invoker()):
            pass

        assert {(db, col) for db, col, _ in client.indexes} == {
            ("tenant_db", "gov_x"),
            ("tenant_db", "audit_x"),
            ("tenant_db", "acks_x"),
        }
        assert ("tenant_db", "audit_x", "uk_id") in client.indexes

    def test_client_uses_configured_uri(self, monkeypatch):
        created = []
        monkeypatch.setattr(mongodb, "_client", None)
        monkeypatch.setattr(
            mongodb, "AsyncIOMotorClient", lambda uri, **kw: created.append((uri, kw)) or MagicMock()
        )

        mongodb.get_client(Settings(mongo_uri="mongodb://tenant-host:27017"))

        assert created == [("mongodb://tenant-host:27017", {"tz_aware": True})]
