# ai_governance/models/validation_models.py
from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field
from typing_extensions import Literal


class ValidationStatus(str, Enum):
    PASSED = "passed"
    PASSED_WITH_WARNINGS = "passed_with_warnings"
    FAILED = "failed"


class ValidationIssue(BaseModel):
    path: str = ""
    message: str
    keyword: str = ""
    severity: Literal["warning", "error"] = "error"

    def render(self) -> str:
        where = self.path or "<root>"
        return f"{self.message} at path: {where}"


class ValidationReport(BaseModel):
    """
    Result of validating one payload against one schema id.
    `schema_found=False` means the schema store has no such id; the report is
    then invalid regardless of the payload.
    """
    schema_id: str
    valid: bool
    schema_found: bool = True
    issues: List[ValidationIssue] = Field(default_factory=list)

    @property
    def errors(self) -> List[str]:
        return [i.render() for i in self.issues]

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)
