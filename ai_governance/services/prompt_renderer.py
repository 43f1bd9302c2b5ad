# ai_governance/services/prompt_renderer.py
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ai_governance.models import PromptTemplate, SchemaDefinition
from ai_governance.utils.json_utils import get_by_dotted_path

_IF_BLOCK = re.compile(r"\{\{#if\s+([^}]+?)\s*\}\}(.*?)\{\{/if\}\}", re.DOTALL)
_PLACEHOLDER = re.compile(r"\{\{\s*([^#/}][^}]*?)\s*\}\}")


@dataclass(frozen=True)
class RenderedPrompt:
    template_id: str
    template_version: str
    system_prompt: Optional[str]
    prompt: str


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list, bool)):
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return str(value)


def render_template(template: str, data: Dict[str, Any]) -> str:
    """
    Minimal mustache-style rendering.
      {{a.b.c}}           -> value at dotted path (objects/lists as indented JSON, missing as "")
      {{#if a}}..{{/if}}  -> body kept only when the value is truthy; no nesting
    """

    def _keep_if(m: "re.Match[str]") -> str:
        return m.group(2) if get_by_dotted_path(data, m.group(1).strip()) else ""

    text = _IF_BLOCK.sub(_keep_if, template)
    return _PLACEHOLDER.sub(lambda m: _format_value(get_by_dotted_path(data, m.group(1).strip())), text)


def build_prompt(template: PromptTemplate, output_schema: SchemaDefinition, data: Dict[str, Any]) -> RenderedPrompt:
    parts = [render_template(template.template, data).strip()]
    if template.constraints:
        parts.append("Constraints:\n" + "\n".join(f"- {c}" for c in template.constraints))
    parts.append("Output JSON Schema:\n" + json.dumps(output_schema.json_schema, indent=2, ensure_ascii=False))
    return RenderedPrompt(
        template_id=template.id,
        template_version=template.version,
        system_prompt=template.system_prompt,
        prompt="\n\n".join(parts),
    )
