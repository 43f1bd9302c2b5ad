# ai_governance/services/schema_validator.py
from __future__ import annotations

import logging
from typing import Any, FrozenSet, List, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError, ValidationError

from ai_governance.models import (
    SensitivityLevel,
    ValidationIssue,
    ValidationReport,
    ValidationStatus,
)
from ai_governance.registry import SchemaStore

logger = logging.getLogger("ai_governance.services.validator")

# Keywords whose violations downgrade output to a warning instead of a failure.
WARNING_KEYWORDS: FrozenSet[str] = frozenset(
    {"minLength", "maxLength", "minItems", "maxItems", "format", "uniqueItems"}
)


def _issue_from(err: ValidationError) -> ValidationIssue:
    keyword = str(err.validator or "")
    return ValidationIssue(
        path="/".join(str(p) for p in err.absolute_path),
        message=err.message,
        keyword=keyword,
        severity="warning" if keyword in WARNING_KEYWORDS else "error",
    )


class SchemaValidator:
    """
    Validates payloads against schemas held by a SchemaStore.
    Unknown schema ids fail closed.
    """

    def __init__(self, schemas: SchemaStore) -> None:
        self._schemas = schemas

    def validate(self, schema_id: str, payload: Any, version: Optional[str] = None) -> ValidationReport:
        doc = self._schemas.get(schema_id, version)
        if doc is None:
            logger.error("[validator] schema not found schema_id=%s version=%s", schema_id, version or "*")
            return ValidationReport(
                schema_id=schema_id,
                valid=False,
                schema_found=False,
                issues=[ValidationIssue(message=f"Schema {schema_id} not found", keyword="$ref")],
            )

        try:
            Draft202012Validator.check_schema(doc.json_schema)
            validator = Draft202012Validator(doc.json_schema, format_checker=Draft202012Validator.FORMAT_CHECKER)
            errors = sorted(validator.iter_errors(payload), key=lambda e: (e.json_path, e.message))
        except SchemaError as e:
            logger.error("[validator] schema invalid schema_id=%s err=%s", schema_id, e.message)
            return ValidationReport(
                schema_id=schema_id,
                valid=False,
                issues=[ValidationIssue(message=f"Schema {schema_id} is invalid: {e.message}", keyword="$schema")],
            )

        issues: List[ValidationIssue] = [_issue_from(e) for e in errors]
        return ValidationReport(schema_id=schema_id, valid=not issues, issues=issues)


def output_status(report: ValidationReport, effective_sensitivity: SensitivityLevel) -> ValidationStatus:
    """
    Maps an output validation report to a status.
    Any error-severity issue fails. Warnings alone pass with warnings, except
    at high sensitivity where they fail too.
    """
    if not report.issues:
        return ValidationStatus.PASSED
    if report.has_errors or not report.schema_found:
        return ValidationStatus.FAILED
    if effective_sensitivity == SensitivityLevel.HIGH:
        return ValidationStatus.FAILED
    return ValidationStatus.PASSED_WITH_WARNINGS
