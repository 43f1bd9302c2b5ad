# ai_governance/services/execution_log.py
from __future__ import annotations

from typing import List, Optional, Protocol

from ai_governance.models import Acknowledgement, ExecutionLogEntry, ExecutionLogFilters


class ExecutionLog(Protocol):
    """
    Append-only audit trail; entries have no update or delete.
    `append` must raise when the write did not happen.
    """

    async def append(self, entry: ExecutionLogEntry) -> str:
        ...

    async def get(self, org_id: str, execution_log_id: str) -> Optional[ExecutionLogEntry]:
        ...

    async def list_by_org(self, org_id: str, filters: Optional[ExecutionLogFilters] = None) -> List[ExecutionLogEntry]:
        ...

    async def history_for_entity(
        self, org_id: str, entity_type: str, entity_id: str, limit: int = 10
    ) -> List[ExecutionLogEntry]:
        ...


class AcknowledgementStore(Protocol):
    async def append(self, ack: Acknowledgement) -> str:
        ...

    async def list_for_execution(self, org_id: str, execution_log_id: str) -> List[Acknowledgement]:
        ...

    async def acknowledged_ids(self, org_id: str, execution_log_ids: List[str]) -> List[str]:
        ...
