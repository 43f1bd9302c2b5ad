# ai_governance/registry/prompt_store.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Union

from ai_governance.models import ActionType, PromptTemplate

logger = logging.getLogger("ai_governance.registry.prompts")


class PromptTemplateStore:
    def __init__(self, templates: Iterable[PromptTemplate]) -> None:
        self._by_id: Dict[str, PromptTemplate] = {}
        for t in templates:
            if t.id in self._by_id:
                raise ValueError(f"Duplicate prompt template id '{t.id}'")
            self._by_id[t.id] = t
        logger.debug("[prompts] loaded count=%d", len(self._by_id))

    @classmethod
    def default(cls) -> "PromptTemplateStore":
        from ai_governance.seeds import PROMPT_TEMPLATES

        return cls(PROMPT_TEMPLATES)

    def get(self, template_id: str, version: Optional[str] = None) -> Optional[PromptTemplate]:
        tpl = self._by_id.get(template_id)
        if tpl is None:
            return None
        if version is not None and tpl.version != version:
            return None
        return tpl

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._by_id

    def list_templates(
        self,
        action_type: Optional[Union[ActionType, str]] = None,
        *,
        include_deprecated: bool = False,
    ) -> List[PromptTemplate]:
        items = sorted(self._by_id.values(), key=lambda t: t.id)
        if not include_deprecated:
            items = [t for t in items if not t.deprecated]
        if action_type is None:
            return items
        wanted = ActionType(action_type)
        return [t for t in items if t.action_type == wanted]
