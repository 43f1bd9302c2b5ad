# ai_governance/seeds/__init__.py
from __future__ import annotations

from ai_governance.seeds.seed_prompt_templates import PROMPT_TEMPLATES
from ai_governance.seeds.seed_schemas import INPUT_SCHEMAS, OUTPUT_SCHEMAS, SCHEMA_DOCS
from ai_governance.seeds.seed_tasks import TASKS

__all__ = ["PROMPT_TEMPLATES", "INPUT_SCHEMAS", "OUTPUT_SCHEMAS", "SCHEMA_DOCS", "TASKS"]
