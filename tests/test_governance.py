"""Unit tests for governance precedence and administration."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from ai_governance.models import (
    ErrorKind,
    GovernanceSettings,
    GovernanceSettingsUpdate,
    RejectionReason,
    SensitivityLevel,
)
from ai_governance.services import GovernanceError, GovernanceService, decide, is_task_enabled


class TestIsTaskEnabled:
    """Kill switch > explicit deny > allow-list > default allow."""

    def test_kill_switch_dominates_allow_list(self):
        settings = GovernanceSettings(enabled=False, enabled_tasks={"risk_detection"})

        assert is_task_enabled("risk_detection", settings) is False
        assert is_task_enabled("engagement_summary", settings) is False

    def test_explicit_deny_beats_explicit_allow(self):
        settings = GovernanceSettings(enabled=True, enabled_tasks={"X"}, disabled_tasks={"X"})

        assert is_task_enabled("X", settings) is False

    def test_non_empty_allow_list_denies_everything_else(self):
        settings = GovernanceSettings(enabled_tasks={"X"})

        assert is_task_enabled("X", settings) is True
        assert is_task_enabled("Y", settings) is False

    def test_default_allow(self):
        assert is_task_enabled("anything", GovernanceSettings()) is True

    def test_disabled_task_without_allow_list(self):
        settings = GovernanceSettings(disabled_tasks={"risk_detection"})

        assert is_task_enabled("risk_detection", settings) is False
        assert is_task_enabled("engagement_summary", settings) is True


class TestDefaults:
    def test_default_settings_shape(self):
        s = GovernanceSettings()

        assert s.enabled is True
        assert s.sensitivity_level == SensitivityLevel.MEDIUM
        assert s.enabled_tasks == set()
        assert s.disabled_tasks == set()
        assert s.require_acknowledgement is True


class TestDecide:
    def test_kill_switch_code(self):
        d = decide("org-1", "risk_detection", GovernanceSettings(enabled=False))

        assert d.allowed is False
        assert d.code == RejectionReason.GOVERNANCE_DISABLED.value

    def test_task_disabled_code(self):
        d = decide("org-1", "risk_detection", GovernanceSettings(disabled_tasks={"risk_detection"}))

        assert d.allowed is False
        assert d.code == RejectionReason.TASK_DISABLED.value
        assert "risk_detection" in d.reason

    def test_unknown_task_only_checks_kill_switch(self):
        assert decide("org-1", None, GovernanceSettings(enabled_tasks={"X"})).allowed is True
        assert decide("org-1", None, GovernanceSettings(enabled=False)).allowed is False


class TestGovernanceService:
    """Admin operations over the governance store."""

    @pytest.fixture
    def bus(self):
        bus = MagicMock()
        bus.publish = AsyncMock()
        return bus

    @pytest.mark.asyncio
    async def test_update_persists_and_publishes(self, governance_store, registry, bus):
        svc = GovernanceService(governance_store, registry, bus)

        saved = await svc.update_settings(
            "org-1", GovernanceSettingsUpdate(disabled_tasks={"risk_detection"}), actor="admin-1"
        )

        assert saved.disabled_tasks == {"risk_detection"}
        assert saved.enabled is True
        assert saved.updated_by == "admin-1"
        bus.publish.assert_awaited_once()
        kwargs = bus.publish.await_args.kwargs
        assert kwargs["event"] == "ai_governance.updated"
        assert kwargs["payload"]["org_id"] == "org-1"
        assert kwargs["payload"]["disabled_tasks"] == ["risk_detection"]

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, governance_store, registry):
        svc = GovernanceService(governance_store, registry)
        await svc.update_settings("org-1", GovernanceSettingsUpdate(sensitivity_level="high"), actor="a")

        saved = await svc.update_settings("org-1", GovernanceSettingsUpdate(enabled=False), actor="a")

        assert saved.enabled is False
        assert saved.sensitivity_level == SensitivityLevel.HIGH

    @pytest.mark.asyncio
    async def test_unknown_task_ids_rejected(self, governance_store, registry, bus):
        svc = GovernanceService(governance_store, registry, bus)

        with pytest.raises(GovernanceError) as exc:
            await svc.update_settings("org-1", GovernanceSettingsUpdate(enabled_tasks={"made_up"}), actor="a")

        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT
        assert "made_up" in exc.value.message
        assert governance_store.docs == {}
        bus.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_publish_failure_does_not_fail_update(self, governance_store, registry, bus):
        bus.publish.side_effect = ConnectionError("broker down")
        svc = GovernanceService(governance_store, registry, bus)

        saved = await svc.update_settings("org-1", GovernanceSettingsUpdate(enabled=False), actor="a")

        assert saved.enabled is False
        assert governance_store.docs["org-1"].enabled is False

    @pytest.mark.asyncio
    async def test_evaluate(self, governance_store, registry):
        governance_store.docs["org-1"] = GovernanceSettings(enabled_tasks={"engagement_summary"})
        svc = GovernanceService(governance_store, registry)

        allowed = await svc.evaluate("org-1", "engagement_summary")
        denied = await svc.evaluate("org-1", "risk_detection")

        assert allowed.allowed is True
        assert denied.allowed is False
        assert denied.code == RejectionReason.TASK_DISABLED.value

    @pytest.mark.asyncio
    async def test_evaluate_unknown_task(self, governance_store, registry):
        svc = GovernanceService(governance_store, registry)

        with pytest.raises(GovernanceError):
            await svc.evaluate("org-1", "nope")
