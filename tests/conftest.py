"""Pytest configuration and shared fixtures."""

import asyncio
import json
from typing import Any, Dict, List, Optional

import pytest

from ai_governance.models import (
    Acknowledgement,
    ExecutionContext,
    ExecutionLogEntry,
    ExecutionLogFilters,
    GovernanceSettings,
    GovernanceSettingsUpdate,
)
from ai_governance.pipeline import ExecutionOrchestrator
from ai_governance.registry import PromptTemplateStore, SchemaStore, TaskRegistry


# ─────────────────────────────────────────────────────────────
# In-memory collaborators
# ─────────────────────────────────────────────────────────────

class InMemoryGovernanceStore:
    """GovernanceStore backed by a dict; `fail_with` makes every read raise."""

    def __init__(self) -> None:
        self.docs: Dict[str, GovernanceSettings] = {}
        self.fail_with: Optional[Exception] = None
        self.reads: List[str] = []

    async def get_settings(self, org_id: str) -> GovernanceSettings:
        self.reads.append(org_id)
        if self.fail_with is not None:
            raise self.fail_with
        return self.docs.get(org_id, GovernanceSettings())

    async def save_settings(self, org_id: str, update: GovernanceSettingsUpdate, actor: str) -> GovernanceSettings:
        current = self.docs.get(org_id, GovernanceSettings())
        patch = {k: v for k, v in update.model_dump().items() if v is not None}
        saved = current.model_copy(update={**patch, "updated_by": actor})
        self.docs[org_id] = saved
        return saved


class InMemoryExecutionLog:
    """
    ExecutionLog keeping entries in insertion order; `fail_with` makes append
    raise, `delay` makes it sleep before storing.
    """

    def __init__(self) -> None:
        self.entries: List[ExecutionLogEntry] = []
        self.fail_with: Optional[Exception] = None
        self.delay: float = 0.0
        self.writing = asyncio.Event()

    async def append(self, entry: ExecutionLogEntry) -> str:
        self.writing.set()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        self.entries.append(entry)
        return entry.id

    async def get(self, org_id: str, execution_log_id: str) -> Optional[ExecutionLogEntry]:
        for e in self.entries:
            if e.org_id == org_id and e.id == execution_log_id:
                return e
        return None

    async def list_by_org(self, org_id: str, filters: Optional[ExecutionLogFilters] = None) -> List[ExecutionLogEntry]:
        f = filters or ExecutionLogFilters()
        out = [e for e in self.entries if e.org_id == org_id]
        if f.entity_type:
            out = [e for e in out if e.entity_type == f.entity_type]
        if f.entity_id:
            out = [e for e in out if e.entity_id == f.entity_id]
        if f.task_id:
            out = [e for e in out if e.task_id == f.task_id]
        if f.outcome:
            out = [e for e in out if e.outcome == f.outcome]
        out.sort(key=lambda e: e.requested_at, reverse=True)
        return out[: f.limit]

    async def history_for_entity(
        self, org_id: str, entity_type: str, entity_id: str, limit: int = 10
    ) -> List[ExecutionLogEntry]:
        return await self.list_by_org(
            org_id, ExecutionLogFilters(entity_type=entity_type, entity_id=entity_id, limit=limit)
        )


class InMemoryAcknowledgementStore:
    def __init__(self) -> None:
        self.acks: List[Acknowledgement] = []

    async def append(self, ack: Acknowledgement) -> str:
        self.acks.append(ack)
        return ack.id

    async def list_for_execution(self, org_id: str, execution_log_id: str) -> List[Acknowledgement]:
        return [a for a in self.acks if a.org_id == org_id and a.execution_log_id == execution_log_id]

    async def acknowledged_ids(self, org_id: str, execution_log_ids: List[str]) -> List[str]:
        wanted = set(execution_log_ids)
        return sorted({a.execution_log_id for a in self.acks if a.org_id == org_id and a.execution_log_id in wanted})


class SpyInvoker:
    """
    ModelInvoker double. Returns `response` (JSON-encoded when not a str),
    raises `error`, or blocks until cancelled when `block` is set.
    """

    def __init__(self, response: Any = None, error: Optional[BaseException] = None, block: bool = False) -> None:
        self.model_name = "spy-model"
        self.response = response
        self.error = error
        self.block = block
        self.calls: List[Dict[str, Any]] = []
        self.started = asyncio.Event()

    async def generate(self, rendered_prompt: str, *, system_prompt: Optional[str] = None, timeout: Optional[float] = None) -> str:
        self.calls.append({"prompt": rendered_prompt, "system_prompt": system_prompt, "timeout": timeout})
        self.started.set()
        if self.block:
            await asyncio.Event().wait()
        if self.error is not None:
            raise self.error
        if isinstance(self.response, str):
            return self.response
        return json.dumps(self.response)


# ─────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────

@pytest.fixture
def registry() -> TaskRegistry:
    return TaskRegistry.default()


@pytest.fixture
def prompts() -> PromptTemplateStore:
    return PromptTemplateStore.default()


@pytest.fixture
def schemas() -> SchemaStore:
    return SchemaStore.default()


@pytest.fixture
def governance_store() -> InMemoryGovernanceStore:
    return InMemoryGovernanceStore()


@pytest.fixture
def execution_log() -> InMemoryExecutionLog:
    return InMemoryExecutionLog()


@pytest.fixture
def ack_store() -> InMemoryAcknowledgementStore:
    return InMemoryAcknowledgementStore()


@pytest.fixture
def make_invoker():
    """Factory for SpyInvoker doubles."""
    return SpyInvoker


@pytest.fixture
def make_orchestrator(governance_store, registry, prompts, schemas, execution_log):
    """Builds an orchestrator over the in-memory stores with the given invoker."""

    def _make(invoker: SpyInvoker, **kwargs) -> ExecutionOrchestrator:
        return ExecutionOrchestrator(
            governance=kwargs.get("governance", governance_store),
            registry=kwargs.get("registry", registry),
            prompts=kwargs.get("prompts", prompts),
            schemas=kwargs.get("schemas", schemas),
            invoker=invoker,
            execution_log=kwargs.get("execution_log", execution_log),
            model_timeout=kwargs.get("model_timeout", 5),
            summary_keys=5,
        )

    return _make


@pytest.fixture
def make_context():
    def _make(**overrides) -> ExecutionContext:
        data = {
            "org_id": "org-1",
            "entity_type": "project",
            "entity_id": "proj-42",
            "executed_by": "user-7",
            "executed_by_role": "staff",
            "action_type": "detect",
        }
        data.update(overrides)
        return ExecutionContext(**data)

    return _make


@pytest.fixture
def risk_detection_input() -> Dict[str, Any]:
    return {
        "signals": {
            "missedMilestones": 2,
            "repeatedRevisions": 3,
            "delayedResponses": 1,
            "scopeChanges": 0,
            "decisionVelocity": 6,
        },
        "projectContext": {"name": "Website relaunch", "phase": "delivery"},
    }


@pytest.fixture
def risk_detection_output() -> Dict[str, Any]:
    return {
        "riskScore": 55,
        "riskLevel": "medium",
        "detectedIssues": [
            {
                "type": "schedule",
                "severity": "medium",
                "description": "Two milestones slipped",
                "evidence": ["M2 missed", "M3 missed"],
            }
        ],
        "recommendedMitigations": [
            {"action": "Re-baseline plan", "priority": "high", "rationale": "Slippage compounding"}
        ],
    }


@pytest.fixture
def sanity_check_input() -> Dict[str, Any]:
    return {
        "proposalData": {
            "pricing": {"total": 42000, "model": "fixed"},
            "scope": "Brand refresh and website",
            "timeline": {"weeks": 6},
            "deliverables": ["Brand guide", "Website"],
        }
    }


@pytest.fixture
def case_study_input() -> Dict[str, Any]:
    return {"projectOutcomes": {"conversionLift": "32%"}, "anonymize": True}


@pytest.fixture
def case_study_output() -> Dict[str, Any]:
    return {
        "draft": {
            "title": "Lifting conversions for a regional retailer",
            "tagline": "A 32% conversion lift in six weeks",
            "challenge": "Stagnant online sales",
            "approach": "Checkout redesign and A/B testing",
            "outcome": "Conversions up by a third",
            "metrics": [{"label": "Conversion lift", "value": "32%", "emphasis": True}],
        },
        "seoSuggestions": {
            "keywords": ["retail", "conversion"],
            "metaDescription": "How a checkout redesign lifted conversions by 32%.",
            "slug": "retail-conversion-lift",
        },
    }
