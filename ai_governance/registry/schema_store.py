# ai_governance/registry/schema_store.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from ai_governance.models import SchemaDefinition

logger = logging.getLogger("ai_governance.registry.schemas")


class SchemaStore:
    """
    In-process lookup of JSON Schema definitions keyed by schema id.
    Pure lookup: validation lives in SchemaValidator.
    """

    def __init__(self, schemas: Iterable[SchemaDefinition]) -> None:
        self._by_id: Dict[str, SchemaDefinition] = {}
        for s in schemas:
            if s.id in self._by_id:
                raise ValueError(f"Duplicate schema id '{s.id}'")
            self._by_id[s.id] = s
        logger.debug("[schemas] loaded count=%d", len(self._by_id))

    @classmethod
    def default(cls) -> "SchemaStore":
        from ai_governance.seeds import SCHEMA_DOCS

        return cls(SCHEMA_DOCS)

    def get(self, schema_id: str, version: Optional[str] = None) -> Optional[SchemaDefinition]:
        doc = self._by_id.get(schema_id)
        if doc is None:
            return None
        if version is not None and doc.version != version:
            return None
        return doc

    def __contains__(self, schema_id: object) -> bool:
        return schema_id in self._by_id

    def list_schemas(self, entity_type: Optional[str] = None) -> List[SchemaDefinition]:
        items = sorted(self._by_id.values(), key=lambda s: s.id)
        if entity_type is None:
            return items
        return [s for s in items if s.entity_type == entity_type]
