# ai_governance/events/schemas.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

GOVERNANCE_UPDATED = "ai_governance.updated"
EXECUTION_ACKNOWLEDGED = "ai_execution.acknowledged"


class GovernanceUpdatedEvent(BaseModel):
    org_id: str
    enabled: bool
    sensitivity_level: str
    enabled_tasks: List[str] = Field(default_factory=list)
    disabled_tasks: List[str] = Field(default_factory=list)
    require_acknowledgement: bool
    by: Optional[str] = None
    at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ExecutionAcknowledgedEvent(BaseModel):
    org_id: str
    execution_log_id: str
    acknowledgement_id: str
    by: str
    role: str
    at: datetime
