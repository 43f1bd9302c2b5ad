# ai_governance/models/catalog_models.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ai_governance.models.task_models import ActionType


class PromptTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable template id (e.g., risk-detection-v1)")
    name: str
    description: str
    action_type: ActionType
    version: str
    template: str
    system_prompt: Optional[str] = None
    constraints: List[str] = Field(default_factory=list)
    deprecated: bool = False
    replaced_by: Optional[str] = None


class SchemaDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    version: str
    description: str
    entity_type: Optional[str] = None

    # NOTE: use `json_schema` to avoid clashes with pydantic internals.
    json_schema: Dict[str, Any] = Field(
        default_factory=dict,
        description="JSON Schema (Draft 2020-12) describing the payload shape.",
    )
    validation_rules: List[str] = Field(default_factory=list)
    deprecated: bool = False
