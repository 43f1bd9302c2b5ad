# ai_governance/services/governance.py
from __future__ import annotations

import logging
from typing import Optional, Protocol

from ai_governance.events.rabbit import SERVICE, RabbitBus
from ai_governance.events.schemas import GOVERNANCE_UPDATED, GovernanceUpdatedEvent
from ai_governance.models import (
    ErrorKind,
    GovernanceDecision,
    GovernanceSettings,
    GovernanceSettingsUpdate,
    RejectionReason,
)
from ai_governance.registry import TaskRegistry

logger = logging.getLogger("ai_governance.services.governance")


class GovernanceError(Exception):
    """Raised by administrative operations (settings updates, acknowledgements)."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class GovernanceStore(Protocol):
    async def get_settings(self, org_id: str) -> GovernanceSettings:
        """Stored settings merged over defaults; an org with no document gets pure defaults."""
        ...

    async def save_settings(
        self, org_id: str, update: GovernanceSettingsUpdate, actor: str
    ) -> GovernanceSettings:
        ...


def is_task_enabled(task_id: str, settings: GovernanceSettings) -> bool:
    """
    Precedence: kill switch > explicit deny > allow-list > default allow.
    A non-empty `enabled_tasks` is exhaustive: every task not listed is denied.
    """
    if not settings.enabled:
        return False
    if task_id in settings.disabled_tasks:
        return False
    if settings.enabled_tasks:
        return task_id in settings.enabled_tasks
    return True


def decide(org_id: str, task_id: Optional[str], settings: GovernanceSettings) -> GovernanceDecision:
    """
    Governance decision for one call. `task_id=None` (prompt not registered)
    only checks the kill switch; the registry gate rejects unknown prompts.
    """
    if not settings.enabled:
        return GovernanceDecision(
            org_id=org_id,
            task_id=task_id,
            allowed=False,
            reason="AI features are disabled for this organization",
            code=RejectionReason.GOVERNANCE_DISABLED.value,
            settings=settings,
        )
    if task_id is not None and not is_task_enabled(task_id, settings):
        return GovernanceDecision(
            org_id=org_id,
            task_id=task_id,
            allowed=False,
            reason=f"Task {task_id} is disabled by organization governance settings",
            code=RejectionReason.TASK_DISABLED.value,
            settings=settings,
        )
    return GovernanceDecision(org_id=org_id, task_id=task_id, allowed=True, settings=settings)


class GovernanceService:
    """
    Admin-facing governance operations. The pipeline reads settings through
    the store directly; this service adds validation and change events.
    """

    def __init__(
        self,
        store: GovernanceStore,
        registry: TaskRegistry,
        bus: Optional[RabbitBus] = None,
    ) -> None:
        self._store = store
        self._registry = registry
        self._bus = bus

    async def get_settings(self, org_id: str) -> GovernanceSettings:
        return await self._store.get_settings(org_id)

    async def evaluate(self, org_id: str, task_id: str) -> GovernanceDecision:
        if self._registry.get_by_task_id(task_id) is None:
            raise GovernanceError(ErrorKind.INVALID_ARGUMENT, f"Unknown task id: {task_id}")
        settings = await self._store.get_settings(org_id)
        return decide(org_id, task_id, settings)

    async def update_settings(
        self, org_id: str, update: GovernanceSettingsUpdate, actor: str
    ) -> GovernanceSettings:
        if not org_id:
            raise GovernanceError(ErrorKind.INVALID_ARGUMENT, "org_id is required")

        known = self._registry.task_ids()
        unknown = sorted(
            set(update.enabled_tasks or set()).union(update.disabled_tasks or set()) - known
        )
        if unknown:
            raise GovernanceError(ErrorKind.INVALID_ARGUMENT, f"Unknown task ids: {', '.join(unknown)}")

        saved = await self._store.save_settings(org_id, update, actor)
        logger.info(
            "[governance] updated org=%s by=%s enabled=%s enabled_tasks=%d disabled_tasks=%d",
            org_id, actor, saved.enabled, len(saved.enabled_tasks), len(saved.disabled_tasks),
        )
        await self._publish_updated(org_id, saved, actor)
        return saved

    async def _publish_updated(self, org_id: str, saved: GovernanceSettings, actor: str) -> None:
        if self._bus is None:
            return
        evt = GovernanceUpdatedEvent(
            org_id=org_id,
            enabled=saved.enabled,
            sensitivity_level=saved.sensitivity_level.value,
            enabled_tasks=sorted(saved.enabled_tasks),
            disabled_tasks=sorted(saved.disabled_tasks),
            require_acknowledgement=saved.require_acknowledgement,
            by=actor,
        )
        try:
            await self._bus.publish(
                service=SERVICE,
                event=GOVERNANCE_UPDATED,
                payload=evt.model_dump(mode="json"),
            )
        except Exception:
            logger.warning("[governance] event publish failed org=%s", org_id, exc_info=True)
