# ai_governance/services/acknowledgement_service.py
from __future__ import annotations

import logging
from typing import List, Optional

from ai_governance.events.rabbit import SERVICE, RabbitBus
from ai_governance.events.schemas import EXECUTION_ACKNOWLEDGED, ExecutionAcknowledgedEvent
from ai_governance.models import (
    Acknowledgement,
    ErrorKind,
    ExecutionLogEntry,
    ExecutionLogFilters,
    ExecutionOutcome,
)
from ai_governance.services.execution_log import AcknowledgementStore, ExecutionLog
from ai_governance.services.governance import GovernanceError

logger = logging.getLogger("ai_governance.services.acknowledgements")

REVIEWER_ROLES = frozenset({"admin", "staff"})


class AcknowledgementService:
    """
    Human review of AI outputs. Reviews are stored as their own append-only
    records; the execution log entry they point at is never touched.
    """

    def __init__(
        self,
        executions: ExecutionLog,
        acks: AcknowledgementStore,
        bus: Optional[RabbitBus] = None,
    ) -> None:
        self._executions = executions
        self._acks = acks
        self._bus = bus

    async def acknowledge(
        self,
        org_id: str,
        execution_log_id: str,
        acknowledged_by: str,
        role: str,
        note: Optional[str] = None,
    ) -> Acknowledgement:
        if not org_id or not execution_log_id:
            raise GovernanceError(ErrorKind.INVALID_ARGUMENT, "org_id and execution_log_id required")
        if role not in REVIEWER_ROLES:
            raise GovernanceError(ErrorKind.PERMISSION_DENIED, "Staff/admin only")

        entry = await self._executions.get(org_id, execution_log_id)
        if entry is None:
            raise GovernanceError(ErrorKind.INVALID_ARGUMENT, "Execution log not found")
        if entry.outcome != ExecutionOutcome.SUCCEEDED:
            raise GovernanceError(
                ErrorKind.INVALID_ARGUMENT,
                f"Only succeeded executions can be acknowledged (outcome={entry.outcome.value})",
            )

        ack = Acknowledgement(
            org_id=org_id,
            execution_log_id=execution_log_id,
            acknowledged_by=acknowledged_by,
            acknowledged_by_role=role,
            note=note,
        )
        await self._acks.append(ack)
        logger.info("[ack] org=%s execution=%s by=%s role=%s", org_id, execution_log_id, acknowledged_by, role)

        if self._bus is not None:
            evt = ExecutionAcknowledgedEvent(
                org_id=org_id,
                execution_log_id=execution_log_id,
                acknowledgement_id=ack.id,
                by=acknowledged_by,
                role=role,
                at=ack.acknowledged_at,
            )
            try:
                await self._bus.publish(service=SERVICE, event=EXECUTION_ACKNOWLEDGED, payload=evt.model_dump(mode="json"))
            except Exception:
                logger.warning("[ack] event publish failed execution=%s", execution_log_id, exc_info=True)
        return ack

    async def pending_acknowledgements(self, org_id: str, limit: int = 100) -> List[ExecutionLogEntry]:
        """Succeeded entries flagged for review that nobody has acknowledged yet."""
        entries = await self._executions.list_by_org(
            org_id, ExecutionLogFilters(outcome=ExecutionOutcome.SUCCEEDED, limit=limit)
        )
        flagged = [e for e in entries if e.requires_acknowledgement]
        if not flagged:
            return []
        done = set(await self._acks.acknowledged_ids(org_id, [e.id for e in flagged]))
        return [e for e in flagged if e.id not in done]
