# ai_governance/models/governance_models.py
from __future__ import annotations

from datetime import datetime
from typing import Optional, Set

from pydantic import BaseModel, Field

from ai_governance.models.task_models import SensitivityLevel


class GovernanceSettings(BaseModel):
    """
    Per-organization AI policy. Field defaults are the values an org gets
    when no settings document was ever written.
    """
    enabled: bool = True
    sensitivity_level: SensitivityLevel = SensitivityLevel.MEDIUM
    enabled_tasks: Set[str] = Field(default_factory=set)
    disabled_tasks: Set[str] = Field(default_factory=set)
    require_acknowledgement: bool = True

    updated_at: Optional[datetime] = None
    updated_by: Optional[str] = None


DEFAULT_GOVERNANCE_SETTINGS = GovernanceSettings()


class GovernanceSettingsUpdate(BaseModel):
    """Partial update; `None` means "leave as is"."""
    enabled: Optional[bool] = None
    sensitivity_level: Optional[SensitivityLevel] = None
    enabled_tasks: Optional[Set[str]] = None
    disabled_tasks: Optional[Set[str]] = None
    require_acknowledgement: Optional[bool] = None


class GovernanceDecision(BaseModel):
    org_id: str
    task_id: Optional[str] = None
    allowed: bool
    reason: Optional[str] = None
    # machine-readable counterpart of `reason`
    code: Optional[str] = None
    settings: GovernanceSettings
