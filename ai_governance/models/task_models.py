# ai_governance/models/task_models.py
from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ─────────────────────────────────────────────────────────────
# Vocabularies
# ─────────────────────────────────────────────────────────────

class EntityType(str, Enum):
    PROPOSAL = "proposal"
    PROJECT = "project"
    CLIENT = "client"
    ORG = "org"


class ActionType(str, Enum):
    GENERATE = "generate"
    REGENERATE = "regenerate"
    ANALYZE = "analyze"
    SUMMARIZE = "summarize"
    EXTRACT = "extract"
    DETECT = "detect"
    ASSESS = "assess"


class SensitivityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SENSITIVITY_RANK[self]

    @classmethod
    def highest(cls, *levels: "SensitivityLevel") -> "SensitivityLevel":
        return max(levels, key=lambda lvl: lvl.rank)


_SENSITIVITY_RANK = {
    SensitivityLevel.LOW: 0,
    SensitivityLevel.MEDIUM: 1,
    SensitivityLevel.HIGH: 2,
}


# ─────────────────────────────────────────────────────────────
# Allow-list entry
# ─────────────────────────────────────────────────────────────

class TaskDefinition(BaseModel):
    """
    Code-defined allow-list entry. One per prompt template; never mutated at runtime.
    """
    model_config = ConfigDict(frozen=True)

    task_id: str
    purpose: str
    prompt_template_id: str
    input_schema_id: str
    output_schema_id: str
    allowed_entity_types: FrozenSet[EntityType]
    sensitivity_level: SensitivityLevel
    required_action_type: ActionType

    @field_validator("allowed_entity_types", mode="before")
    @classmethod
    def _coerce_entities(cls, v):
        if isinstance(v, (str, EntityType)):
            return frozenset([v])
        return frozenset(v or [])

    @field_validator("allowed_entity_types")
    @classmethod
    def _non_empty(cls, v):
        if not v:
            raise ValueError("allowed_entity_types must not be empty")
        return v


class TaskAuthorization(BaseModel):
    """Outcome of the registry gate."""
    allowed: bool
    reason: Optional[str] = None
    # machine-readable counterpart of `reason`
    code: Optional[str] = None
    task: Optional[TaskDefinition] = Field(default=None)
