# ai_governance/seeds/seed_schemas.py
from __future__ import annotations

from typing import List

from ai_governance.models import SchemaDefinition

_STR = {"type": "string"}
_STR_LIST = {"type": "array", "items": {"type": "string"}}
_LMH = {"type": "string", "enum": ["low", "medium", "high"]}


# ─────────────────────────────────────────────────────────────
# Input schemas (what callers may send)
# ─────────────────────────────────────────────────────────────

INPUT_SCHEMAS: List[SchemaDefinition] = [
    SchemaDefinition(
        id="proposal-generation-input-v1",
        name="Proposal Generation Input",
        version="1.0.0",
        description="Discovery data and business context for proposal drafting",
        entity_type="proposal",
        json_schema={
            "type": "object",
            "required": ["businessProfile", "clientProfile", "discoveryAnswers"],
            "properties": {
                "businessProfile": {
                    "type": "object",
                    "required": ["name", "services"],
                    "properties": {
                        "name": _STR,
                        "industry": _STR,
                        "services": _STR_LIST,
                        "differentiators": _STR_LIST,
                        "methodology": _STR_LIST,
                    },
                },
                "clientProfile": {
                    "type": "object",
                    "required": ["companyName"],
                    "properties": {
                        "companyName": _STR,
                        "industry": _STR,
                        "challenges": _STR_LIST,
                        "goals": _STR_LIST,
                    },
                },
                "discoveryAnswers": {"type": "object"},
                "serviceTemplateId": _STR,
                "serviceTemplate": {"type": "object"},
                "historicalReferences": {"type": "array"},
            },
        },
    ),
    SchemaDefinition(
        id="section-regeneration-input-v1",
        name="Section Regeneration Input",
        version="1.0.0",
        description="Section to regenerate plus surrounding proposal context",
        entity_type="proposal",
        json_schema={
            "type": "object",
            "required": ["sectionKey", "currentContent", "fullProposalContext", "lockedSections"],
            "properties": {
                "sectionKey": _STR,
                "currentContent": {},
                "fullProposalContext": {"type": "object"},
                "lockedSections": _STR_LIST,
                "instructions": _STR,
            },
        },
    ),
    SchemaDefinition(
        id="risk-analysis-input-v1",
        name="Proposal Risk Analysis Input",
        version="1.0.0",
        description="Proposal commercial data and historical baseline",
        entity_type="proposal",
        json_schema={
            "type": "object",
            "required": ["proposalData"],
            "properties": {
                "proposalData": {"type": "object"},
                "historicalProposals": {"type": "array"},
            },
        },
    ),
    SchemaDefinition(
        id="engagement-summary-input-v1",
        name="Engagement Summary Input",
        version="1.0.0",
        description="Delivery signals for a project status summary",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["projectData"],
            "properties": {
                "projectData": {"type": "object"},
                "recentUpdates": {"type": "array"},
                "recentRisks": {"type": "array"},
                "changeRequests": {"type": "array"},
                "clientInteractions": {"type": "array"},
            },
        },
    ),
    SchemaDefinition(
        id="risk-detection-input-v1",
        name="Engagement Risk Detection Input",
        version="1.0.0",
        description="Behavioral engagement signals",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["signals", "projectContext"],
            "properties": {
                "signals": {
                    "type": "object",
                    "required": [
                        "missedMilestones",
                        "repeatedRevisions",
                        "delayedResponses",
                        "scopeChanges",
                        "decisionVelocity",
                    ],
                    "properties": {
                        "missedMilestones": {"type": "number", "minimum": 0},
                        "repeatedRevisions": {"type": "number", "minimum": 0},
                        "delayedResponses": {"type": "number", "minimum": 0},
                        "scopeChanges": {"type": "number", "minimum": 0},
                        "decisionVelocity": {"type": "number", "minimum": 0},
                    },
                },
                "projectContext": {"type": "object"},
                "historicalBaseline": {"type": "object"},
            },
        },
    ),
    SchemaDefinition(
        id="knowledge-extraction-input-v1",
        name="Knowledge Extraction Input",
        version="1.0.0",
        description="Completed project outcomes and deliverables",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["projectData", "deliverables"],
            "properties": {
                "projectData": {"type": "object"},
                "proposalData": {"type": "object"},
                "deliverables": {"type": "array"},
                "debriefNotes": _STR,
                "clientFeedback": _STR,
            },
        },
    ),
    SchemaDefinition(
        id="case-study-draft-input-v1",
        name="Case Study Draft Input",
        version="1.0.0",
        description="Project outcomes for case study drafting",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["projectOutcomes", "anonymize"],
            "properties": {
                "projectOutcomes": {"type": "object"},
                "clientQuotes": _STR_LIST,
                "anonymize": {"type": "boolean"},
                "targetAudience": _STR,
            },
        },
    ),
    SchemaDefinition(
        id="decision-brief-input-v1",
        name="Decision Brief Input",
        version="1.0.0",
        description="Context for an executive decision brief",
        json_schema={
            "type": "object",
            "required": ["contextEntityType", "contextEntityId", "recentActivity"],
            "properties": {
                "contextEntityType": _STR,
                "contextEntityId": _STR,
                "recentActivity": {"type": "array"},
                "risks": {"type": "array"},
                "financials": {"type": "object"},
                "options": {"type": "array"},
            },
        },
    ),
    SchemaDefinition(
        id="client-summary-input-v1",
        name="Client Summary Input",
        version="1.0.0",
        description="Client-safe project status data",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["projectStatus"],
            "properties": {
                "projectStatus": {"type": "object"},
                "completedItems": {"type": "array"},
                "upcomingItems": {"type": "array"},
                "changesSinceLastReview": {"type": "array"},
                "requiredActions": {"type": "array"},
            },
        },
    ),
]


# ─────────────────────────────────────────────────────────────
# Output schemas (what the model must return)
# ─────────────────────────────────────────────────────────────

OUTPUT_SCHEMAS: List[SchemaDefinition] = [
    SchemaDefinition(
        id="proposal-content-v1",
        name="Proposal Content Schema",
        version="1.0.0",
        description="Complete proposal structure with all required sections",
        entity_type="proposal",
        json_schema={
            "type": "object",
            "required": ["executiveSummary", "diagnosis", "scope", "methodology", "deliverables"],
            "properties": {
                "executiveSummary": {"type": "string", "minLength": 100},
                "diagnosis": {"type": "string", "minLength": 100},
                "scope": {"type": "string", "minLength": 100},
                "methodology": {"type": "string", "minLength": 100},
                "deliverables": {
                    "type": "array",
                    "minItems": 1,
                    "items": {
                        "type": "object",
                        "required": ["name", "description"],
                        "properties": {
                            "name": _STR,
                            "description": _STR,
                            "acceptanceCriteria": _STR_LIST,
                        },
                    },
                },
                "timeline": {
                    "type": "object",
                    "required": ["estimatedDuration", "milestones"],
                    "properties": {
                        "estimatedDuration": {"type": "number", "minimum": 1},
                        "milestones": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "required": ["name", "description", "dueOffset"],
                                "properties": {
                                    "name": _STR,
                                    "description": _STR,
                                    "dueOffset": {"type": "number"},
                                },
                            },
                        },
                    },
                },
                "assumptions": _STR_LIST,
                "exclusions": _STR_LIST,
                "acceptanceCriteria": _STR_LIST,
                "nextSteps": _STR_LIST,
            },
        },
    ),
    SchemaDefinition(
        id="section-content-v1",
        name="Section Content Schema",
        version="1.0.0",
        description="Regenerated content for a single proposal section",
        entity_type="proposal",
        json_schema={
            "type": "object",
            "required": ["sectionContent"],
            "properties": {
                "sectionContent": {},
                "changesSummary": _STR,
            },
        },
    ),
    SchemaDefinition(
        id="risk-analysis-v1",
        name="Risk Analysis Schema",
        version="1.0.0",
        description="Structured risk assessment output",
        entity_type="proposal",
        json_schema={
            "type": "object",
            "required": ["riskFlags", "overallRiskScore", "confidenceScore"],
            "properties": {
                "riskFlags": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["category", "severity", "title", "description"],
                        "properties": {
                            "category": {
                                "type": "string",
                                "enum": ["pricing", "scope", "timeline", "deliverables", "resources"],
                            },
                            "severity": {"type": "string", "enum": ["low", "medium", "high", "critical"]},
                            "title": _STR,
                            "description": _STR,
                            "evidence": _STR,
                            "suggestedAction": _STR,
                        },
                    },
                },
                "overallRiskScore": {"type": "number", "minimum": 0, "maximum": 100},
                "confidenceScore": {"type": "number", "minimum": 0, "maximum": 1},
                "suggestedAdjustments": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["field", "currentValue", "suggestedValue", "rationale"],
                        "properties": {
                            "field": _STR,
                            "currentValue": {},
                            "suggestedValue": {},
                            "rationale": _STR,
                        },
                    },
                },
            },
        },
    ),
    SchemaDefinition(
        id="engagement-summary-v1",
        name="Engagement Summary Schema",
        version="1.0.0",
        description="Project status summary structure",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["executiveSummary", "progressVsPlan", "majorRisks", "upcomingDecisions"],
            "properties": {
                "executiveSummary": _STR,
                "progressVsPlan": {
                    "type": "object",
                    "required": ["status", "percentComplete", "details"],
                    "properties": {
                        "status": {"type": "string", "enum": ["on-track", "at-risk", "delayed"]},
                        "percentComplete": {"type": "number", "minimum": 0, "maximum": 100},
                        "details": _STR,
                    },
                },
                "majorRisks": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["title", "impact", "description"],
                        "properties": {"title": _STR, "impact": _LMH, "description": _STR},
                    },
                },
                "upcomingDecisions": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["title", "importance", "context"],
                        "properties": {
                            "title": _STR,
                            "deadline": _STR,
                            "importance": _LMH,
                            "context": _STR,
                        },
                    },
                },
                "clientSentiment": {"type": "string", "enum": ["positive", "neutral", "negative"]},
            },
        },
    ),
    SchemaDefinition(
        id="risk-detection-v1",
        name="Risk Detection Schema",
        version="1.0.0",
        description="Early warning risk detection output",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["riskScore", "riskLevel", "detectedIssues", "recommendedMitigations"],
            "properties": {
                "riskScore": {"type": "number", "minimum": 0, "maximum": 100},
                "riskLevel": {"type": "string", "enum": ["low", "medium", "high", "critical"]},
                "detectedIssues": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["type", "severity", "description", "evidence"],
                        "properties": {
                            "type": _STR,
                            "severity": _LMH,
                            "description": _STR,
                            "evidence": _STR_LIST,
                        },
                    },
                },
                "recommendedMitigations": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["action", "priority", "rationale"],
                        "properties": {"action": _STR, "priority": _LMH, "rationale": _STR},
                    },
                },
            },
        },
    ),
    SchemaDefinition(
        id="knowledge-extraction-v1",
        name="Knowledge Extraction Schema",
        version="1.0.0",
        description="Extracted insights and knowledge entries",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["insights", "draftKnowledgeEntry"],
            "properties": {
                "insights": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["type", "title", "description", "applicability", "confidence"],
                        "properties": {
                            "type": {
                                "type": "string",
                                "enum": ["pattern", "framework", "pitfall", "best-practice"],
                            },
                            "title": _STR,
                            "description": _STR,
                            "applicability": _STR_LIST,
                            "confidence": {"type": "number", "minimum": 0, "maximum": 1},
                        },
                    },
                },
                "suggestedTags": _STR_LIST,
                "draftKnowledgeEntry": {
                    "type": "object",
                    "required": ["title", "summary", "context", "approach", "outcome", "lessonsLearned"],
                    "properties": {
                        "title": _STR,
                        "summary": _STR,
                        "context": _STR,
                        "approach": _STR,
                        "outcome": _STR,
                        "lessonsLearned": _STR_LIST,
                    },
                },
            },
        },
    ),
    SchemaDefinition(
        id="case-study-draft-v1",
        name="Case Study Draft Schema",
        version="1.0.0",
        description="Structured case study content",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["draft", "seoSuggestions"],
            "properties": {
                "draft": {
                    "type": "object",
                    "required": ["title", "tagline", "challenge", "approach", "outcome", "metrics"],
                    "properties": {
                        "title": _STR,
                        "tagline": {"type": "string", "maxLength": 100},
                        "challenge": _STR,
                        "approach": _STR,
                        "outcome": _STR,
                        "metrics": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "required": ["label", "value"],
                                "properties": {
                                    "label": _STR,
                                    "value": _STR,
                                    "emphasis": {"type": "boolean"},
                                },
                            },
                        },
                        "testimonial": _STR,
                    },
                },
                "seoSuggestions": {
                    "type": "object",
                    "required": ["keywords", "metaDescription", "slug"],
                    "properties": {
                        "keywords": _STR_LIST,
                        "metaDescription": {"type": "string", "maxLength": 155},
                        "slug": _STR,
                    },
                },
            },
        },
    ),
    SchemaDefinition(
        id="decision-brief-v1",
        name="Decision Brief Schema",
        version="1.0.0",
        description="Executive decision brief structure",
        json_schema={
            "type": "object",
            "required": ["situation", "options", "recommendation", "risks"],
            "properties": {
                "situation": _STR,
                "options": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["name", "description", "pros", "cons", "risks"],
                        "properties": {
                            "name": _STR,
                            "description": _STR,
                            "pros": _STR_LIST,
                            "cons": _STR_LIST,
                            "risks": _STR_LIST,
                        },
                    },
                },
                "recommendation": {
                    "type": "object",
                    "required": ["option", "rationale", "assumptions"],
                    "properties": {"option": _STR, "rationale": _STR, "assumptions": _STR_LIST},
                },
                "risks": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["description", "likelihood", "impact"],
                        "properties": {
                            "description": _STR,
                            "likelihood": _LMH,
                            "impact": _LMH,
                            "mitigation": _STR,
                        },
                    },
                },
            },
        },
    ),
    SchemaDefinition(
        id="client-summary-v1",
        name="Client Summary Schema",
        version="1.0.0",
        description="Client-facing summary (limited scope)",
        entity_type="project",
        json_schema={
            "type": "object",
            "required": ["currentStatus", "progressUpdate", "completedItems", "upcomingItems", "requiredActions"],
            "properties": {
                "currentStatus": _STR,
                "progressUpdate": _STR,
                "completedItems": _STR_LIST,
                "upcomingItems": _STR_LIST,
                "requiredActions": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["title", "description"],
                        "properties": {"title": _STR, "description": _STR, "deadline": _STR},
                    },
                },
                "changesSinceLastReview": _STR_LIST,
            },
        },
        validation_rules=[
            "Must not contain internal risk assessments",
            "Must not contain pricing or margin details",
            "Must not contain speculative business advice",
        ],
    ),
]


SCHEMA_DOCS: List[SchemaDefinition] = INPUT_SCHEMAS + OUTPUT_SCHEMAS
