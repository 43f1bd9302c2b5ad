# ai_governance/seeds/seed_prompt_templates.py
from __future__ import annotations

from typing import List

from ai_governance.models import ActionType, PromptTemplate

PROMPT_TEMPLATES: List[PromptTemplate] = [
    PromptTemplate(
        id="proposal-generation-v1",
        name="Proposal Generation",
        description="Generate comprehensive proposal from discovery data and business context",
        action_type=ActionType.GENERATE,
        version="1.0.0",
        system_prompt=(
            "You are an expert business consultant creating professional proposals.\n"
            "Your outputs must be factual, based on provided business data, and structured "
            "according to the schema.\n"
            "Never invent information not provided in the context. Be specific and actionable."
        ),
        template="""Generate a comprehensive business proposal with the following context:

BUSINESS PROFILE:
Name: {{businessProfile.name}}
Industry: {{businessProfile.industry}}
Services: {{businessProfile.services}}
Differentiators: {{businessProfile.differentiators}}
Methodology: {{businessProfile.methodology}}

CLIENT PROFILE:
Company: {{clientProfile.companyName}}
Industry: {{clientProfile.industry}}
Challenges: {{clientProfile.challenges}}
Goals: {{clientProfile.goals}}

DISCOVERY ANSWERS:
{{discoveryAnswers}}

{{#if serviceTemplate}}
SERVICE TEMPLATE:
{{serviceTemplate}}
{{/if}}

{{#if historicalReferences}}
HISTORICAL REFERENCES:
{{historicalReferences}}
{{/if}}

Generate a structured proposal with these sections:
1. Executive Summary - Clear value proposition and expected outcomes
2. Diagnosis - Current situation analysis based on discovery
3. Scope - Specific services and deliverables
4. Methodology - How work will be performed
5. Deliverables - Concrete outputs with acceptance criteria
6. Timeline - Duration and key milestones
7. Assumptions - What we're assuming to be true
8. Exclusions - What is NOT included
9. Acceptance Criteria - How success will be measured
10. Next Steps - Immediate actions required

Return ONLY valid JSON matching the schema. No markdown formatting.""",
        constraints=[
            "Must use only information from provided context",
            "Must not invent metrics or guarantees",
            "Must follow business methodology and terminology",
            "All deliverables must have clear acceptance criteria",
            "Timeline must be realistic based on scope",
        ],
    ),
    PromptTemplate(
        id="section-regeneration-v1",
        name="Section Regeneration",
        description="Regenerate a specific section of a proposal non-destructively",
        action_type=ActionType.REGENERATE,
        version="1.0.0",
        system_prompt=(
            "You are regenerating a specific section of a business proposal.\n"
            "Maintain consistency with the rest of the proposal. Never modify locked sections.\n"
            "Preserve all pricing, milestones, and contractual terms unless explicitly instructed."
        ),
        template="""Regenerate the {{sectionKey}} section of this proposal:

CURRENT SECTION CONTENT:
{{currentContent}}

FULL PROPOSAL CONTEXT:
{{fullProposalContext}}

LOCKED SECTIONS (DO NOT REFERENCE OR MODIFY):
{{lockedSections}}

{{#if instructions}}
SPECIFIC INSTRUCTIONS:
{{instructions}}
{{/if}}

REQUIREMENTS:
- Only regenerate the specified section
- Maintain consistency with the proposal context
- Do not modify locked sections
- Preserve all pricing, timeline commitments, and terms
- Return ONLY the new section content in the required format""",
        constraints=[
            "Never modify locked sections",
            "Preserve pricing and contractual terms",
            "Maintain proposal consistency",
            "Follow specific instructions if provided",
        ],
    ),
    PromptTemplate(
        id="proposal-risk-analysis-v1",
        name="Proposal Risk Analysis",
        description="Analyze proposal for pricing, scope, and delivery risks",
        action_type=ActionType.ANALYZE,
        version="1.0.0",
        system_prompt=(
            "You are an expert business analyst assessing proposal risks.\n"
            "Identify potential issues with pricing, scope, timeline, and deliverables.\n"
            "Compare against historical data and industry benchmarks. Be specific and evidence-based."
        ),
        template="""Analyze this proposal for potential risks:

PROPOSAL DATA:
Pricing: {{proposalData.pricing}}
Scope: {{proposalData.scope}}
Timeline: {{proposalData.timeline}}
Deliverables: {{proposalData.deliverables}}

{{#if historicalProposals}}
HISTORICAL PROPOSALS (for comparison):
{{historicalProposals}}
{{/if}}

Assess risks in these categories:
1. PRICING - Underpricing, pricing model mismatch, unrealistic margins
2. SCOPE - Unclear requirements, scope creep potential, missing critical items
3. TIMELINE - Unrealistic deadlines, insufficient buffer, resource conflicts
4. DELIVERABLES - Ambiguous acceptance criteria, quality concerns
5. RESOURCES - Skill gaps, capacity constraints

For each risk:
- Provide severity (low/medium/high/critical)
- Cite specific evidence from the proposal
- Suggest concrete adjustments if needed

Return structured risk assessment as JSON.""",
        constraints=[
            "Base analysis on evidence, not speculation",
            "Compare to historical data when available",
            "Provide actionable suggestions",
            "Score risks consistently",
        ],
    ),
    PromptTemplate(
        id="engagement-summary-v1",
        name="Engagement Summary",
        description="Generate comprehensive project status summary",
        action_type=ActionType.SUMMARIZE,
        version="1.0.0",
        system_prompt=(
            "You are a project manager creating a concise status summary.\n"
            "Focus on progress, risks, and decisions. Be factual and actionable."
        ),
        template="""Generate an engagement summary for this project:

PROJECT DATA:
{{projectData}}

RECENT UPDATES:
{{recentUpdates}}

RISKS:
{{recentRisks}}

CHANGE REQUESTS:
{{changeRequests}}

CLIENT INTERACTIONS:
{{clientInteractions}}

Provide:
1. Executive Summary (2-3 sentences)
2. Progress vs Plan (status, percentage, details)
3. Major Risks (title, impact, description)
4. Upcoming Decisions (title, deadline, importance, context)
5. Client Sentiment (positive/neutral/negative) based on interactions

Be concise but complete. Focus on what leadership needs to know.""",
    ),
    PromptTemplate(
        id="risk-detection-v1",
        name="Engagement Risk Detection",
        description="Detect early warning signals in project engagement",
        action_type=ActionType.DETECT,
        version="1.0.0",
        system_prompt=(
            "You are an expert at detecting project risks from behavioral signals.\n"
            "Identify patterns that indicate trouble. Be proactive but not alarmist."
        ),
        template="""Analyze these engagement signals for risks:

SIGNALS:
- Missed Milestones: {{signals.missedMilestones}}
- Repeated Revisions: {{signals.repeatedRevisions}}
- Delayed Responses: {{signals.delayedResponses}}
- Scope Changes: {{signals.scopeChanges}}
- Decision Velocity: {{signals.decisionVelocity}} days

PROJECT CONTEXT:
{{projectContext}}

{{#if historicalBaseline}}
HISTORICAL BASELINE:
{{historicalBaseline}}
{{/if}}

Assess:
1. Overall Risk Score (0-100)
2. Risk Level (low/medium/high/critical)
3. Detected Issues with evidence
4. Recommended Mitigations with priority

Focus on actionable insights.""",
    ),
    PromptTemplate(
        id="knowledge-extraction-v1",
        name="Knowledge Extraction",
        description="Extract reusable insights from completed projects",
        action_type=ActionType.EXTRACT,
        version="1.0.0",
        system_prompt=(
            "You are extracting valuable lessons and patterns from completed work.\n"
            "Focus on reusable insights, frameworks, and pitfalls that will help future projects."
        ),
        template="""Extract reusable knowledge from this completed project:

PROJECT DATA:
{{projectData}}

PROPOSAL DATA:
{{proposalData}}

DELIVERABLES:
{{deliverables}}

{{#if debriefNotes}}
DEBRIEF NOTES:
{{debriefNotes}}
{{/if}}

{{#if clientFeedback}}
CLIENT FEEDBACK:
{{clientFeedback}}
{{/if}}

Identify:
1. Patterns - Repeatable approaches or techniques
2. Frameworks - Structured methodologies that worked
3. Pitfalls - Things to avoid in similar situations
4. Best Practices - What went exceptionally well

For each insight:
- Provide clear title and description
- Specify applicability (when/where to use)
- Rate confidence (0-1)

Also draft a knowledge base entry with:
- Title, Summary, Context, Approach, Outcome, Lessons Learned""",
    ),
    PromptTemplate(
        id="case-study-draft-v1",
        name="Case Study Draft",
        description="Draft compelling case study from project outcomes",
        action_type=ActionType.GENERATE,
        version="1.0.0",
        system_prompt=(
            "You are writing a compelling case study that showcases results.\n"
            "Focus on challenge, approach, and measurable outcomes. Make it engaging and credible."
        ),
        template="""Draft a case study for this project:

PROJECT OUTCOMES:
{{projectOutcomes}}

{{#if clientQuotes}}
CLIENT QUOTES (approved):
{{clientQuotes}}
{{/if}}

ANONYMIZATION: {{anonymize}}
{{#if targetAudience}}
TARGET AUDIENCE: {{targetAudience}}
{{/if}}

Create a structured case study with:
1. Title - Compelling and outcome-focused
2. Tagline - One-sentence value proposition
3. Challenge - What problem was being solved
4. Approach - How we addressed it (methodology, tools, strategy)
5. Outcome - Measurable results and achievements
6. Metrics - Key numbers that demonstrate impact
7. Testimonial - Client quote if available

Also provide SEO suggestions:
- Keywords for search optimization
- Meta description (155 characters)
- URL slug

{{#if anonymize}}
IMPORTANT: Anonymize client/company names while keeping story compelling.
{{/if}}""",
    ),
    PromptTemplate(
        id="decision-brief-v1",
        name="Decision Brief",
        description="Generate executive decision brief with options and recommendations",
        action_type=ActionType.GENERATE,
        version="1.0.0",
        system_prompt=(
            "You are preparing a decision brief for executives.\n"
            "Be concise, clear, and actionable. Present options objectively, then recommend."
        ),
        template="""Generate a decision brief for:

CONTEXT:
Entity Type: {{contextEntityType}}
Entity ID: {{contextEntityId}}

RECENT ACTIVITY:
{{recentActivity}}

RISKS:
{{risks}}

{{#if financials}}
FINANCIALS:
{{financials}}
{{/if}}

{{#if options}}
OPTIONS UNDER CONSIDERATION:
{{options}}
{{/if}}

Create a 1-2 page brief with:
1. SITUATION - Current state and what triggered this decision point
2. OPTIONS - Each option with pros, cons, and risks
3. RECOMMENDATION - Preferred option with clear rationale and assumptions
4. RISKS - Key risks with likelihood, impact, and mitigation

Be objective but decisive. Help executives make informed choices quickly.""",
    ),
    PromptTemplate(
        id="client-summary-v1",
        name="Client Engagement Summary",
        description="Generate client-facing status summary (no internal risks/pricing)",
        action_type=ActionType.SUMMARIZE,
        version="1.0.0",
        system_prompt=(
            "You are creating a clear status update for a client.\n"
            "Focus on what they need to know and do. Be transparent but professional.\n"
            "NEVER include internal risks, pricing logic, or speculative advice."
        ),
        template="""Generate a client-facing summary:

PROJECT STATUS:
{{projectStatus}}

COMPLETED WORK:
{{completedItems}}

UPCOMING WORK:
{{upcomingItems}}

CHANGES SINCE LAST UPDATE:
{{changesSinceLastReview}}

REQUIRED CLIENT ACTIONS:
{{requiredActions}}

Provide a clear, jargon-free summary:
1. Current Status - Where we are in the project
2. Progress Update - What's been accomplished recently
3. Completed Items - List of finished deliverables
4. Upcoming Items - What's coming next
5. Required Actions - What client needs to do (with deadlines)
6. Changes - Any updates to plan or scope

Keep it positive, clear, and action-oriented.
DO NOT include: internal risks, profit margins, resource constraints, speculative advice.""",
        constraints=[
            "No internal risk assessment",
            "No pricing or margin details",
            "No speculative business advice",
            "Focus on clarity and required actions",
        ],
    ),
]
