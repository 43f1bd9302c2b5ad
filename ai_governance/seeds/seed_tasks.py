# ai_governance/seeds/seed_tasks.py
from __future__ import annotations

from typing import List

from ai_governance.models import ActionType, EntityType, SensitivityLevel, TaskDefinition

# Allow-list of AI tasks. A prompt template with no entry here can never run.
TASKS: List[TaskDefinition] = [
    TaskDefinition(
        task_id="proposal_generation",
        purpose="Draft a complete proposal from discovery answers and business context",
        prompt_template_id="proposal-generation-v1",
        input_schema_id="proposal-generation-input-v1",
        output_schema_id="proposal-content-v1",
        allowed_entity_types=[EntityType.PROPOSAL],
        sensitivity_level=SensitivityLevel.MEDIUM,
        required_action_type=ActionType.GENERATE,
    ),
    TaskDefinition(
        task_id="section_regeneration",
        purpose="Regenerate one unlocked proposal section without touching the rest",
        prompt_template_id="section-regeneration-v1",
        input_schema_id="section-regeneration-input-v1",
        output_schema_id="section-content-v1",
        allowed_entity_types=[EntityType.PROPOSAL],
        sensitivity_level=SensitivityLevel.MEDIUM,
        required_action_type=ActionType.REGENERATE,
    ),
    TaskDefinition(
        task_id="proposal_sanity_check",
        purpose="Analyze proposal for pricing/scope/timeline risks before sending",
        prompt_template_id="proposal-risk-analysis-v1",
        input_schema_id="risk-analysis-input-v1",
        output_schema_id="risk-analysis-v1",
        allowed_entity_types=[EntityType.PROPOSAL, EntityType.ORG],
        sensitivity_level=SensitivityLevel.MEDIUM,
        required_action_type=ActionType.ANALYZE,
    ),
    TaskDefinition(
        task_id="engagement_summary",
        purpose="Summarize delivery reality into clear, structured status",
        prompt_template_id="engagement-summary-v1",
        input_schema_id="engagement-summary-input-v1",
        output_schema_id="engagement-summary-v1",
        allowed_entity_types=[EntityType.PROJECT, EntityType.ORG],
        sensitivity_level=SensitivityLevel.LOW,
        required_action_type=ActionType.SUMMARIZE,
    ),
    TaskDefinition(
        task_id="risk_detection",
        purpose="Flag early warning signals from engagement behavior",
        prompt_template_id="risk-detection-v1",
        input_schema_id="risk-detection-input-v1",
        output_schema_id="risk-detection-v1",
        allowed_entity_types=[EntityType.PROJECT, EntityType.ORG],
        sensitivity_level=SensitivityLevel.MEDIUM,
        required_action_type=ActionType.DETECT,
    ),
    TaskDefinition(
        task_id="knowledge_extraction",
        purpose="Extract reusable patterns and pitfalls from a completed project",
        prompt_template_id="knowledge-extraction-v1",
        input_schema_id="knowledge-extraction-input-v1",
        output_schema_id="knowledge-extraction-v1",
        allowed_entity_types=[EntityType.PROJECT],
        sensitivity_level=SensitivityLevel.LOW,
        required_action_type=ActionType.EXTRACT,
    ),
    TaskDefinition(
        task_id="case_study_draft",
        purpose="Draft a publishable case study from project outcomes",
        prompt_template_id="case-study-draft-v1",
        input_schema_id="case-study-draft-input-v1",
        output_schema_id="case-study-draft-v1",
        allowed_entity_types=[EntityType.PROJECT],
        sensitivity_level=SensitivityLevel.MEDIUM,
        required_action_type=ActionType.GENERATE,
    ),
    TaskDefinition(
        task_id="decision_brief",
        purpose="Structure a decision with options, risks, and assumptions",
        prompt_template_id="decision-brief-v1",
        input_schema_id="decision-brief-input-v1",
        output_schema_id="decision-brief-v1",
        allowed_entity_types=[EntityType.PROJECT, EntityType.PROPOSAL, EntityType.CLIENT, EntityType.ORG],
        sensitivity_level=SensitivityLevel.HIGH,
        required_action_type=ActionType.GENERATE,
    ),
    TaskDefinition(
        task_id="client_engagement_summary",
        purpose="Client-safe engagement status summary (sanitized)",
        prompt_template_id="client-summary-v1",
        input_schema_id="client-summary-input-v1",
        output_schema_id="client-summary-v1",
        allowed_entity_types=[EntityType.PROJECT, EntityType.CLIENT, EntityType.ORG],
        sensitivity_level=SensitivityLevel.LOW,
        required_action_type=ActionType.SUMMARIZE,
    ),
]
