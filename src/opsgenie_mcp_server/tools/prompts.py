"""Prompt registration for the OpsGenie MCP server.

Prompts are fixed guidance texts with argument substitution; they never call
the OpsGenie API.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..registry import CapabilityRegistry, PromptArgumentDef, PromptDef
from ..server_defaults import DEFAULT_TRIAGE_QUERY

ANALYZE_INCIDENT_TEMPLATE = """Please analyze the OpsGenie alert with ID "{alert_id}".

First, retrieve the alert details and notes using the available tools, then provide:

1. **Severity Assessment**: Based on the alert priority, status, and description
2. **Impact Analysis**: Potential business and technical impact
3. **Root Cause Indicators**: What the alert suggests about underlying issues
4. **Immediate Actions**: What should be done first to address this alert
5. **Escalation Recommendations**: When and to whom this should be escalated

Use the available tools to gather all relevant information about this alert before providing your analysis."""

INCIDENT_RESPONSE_TEMPLATE = """Guide me through responding to the incident for alert ID "{alert_id}"{incident_type}.

Please follow this incident response workflow:

1. **Initial Assessment**
   - Retrieve and analyze the alert details
   - Determine the current status and severity
   - Check if the alert has been acknowledged

2. **Impact Evaluation**
   - Assess the scope and impact of the issue
   - Identify affected systems or users
   - Determine urgency level

3. **Response Actions**
   - Acknowledge the alert if not already done
   - Recommend immediate mitigation steps
   - Suggest who should be involved in resolution

4. **Communication Plan**
   - Determine if stakeholders need to be notified
   - Draft status update if necessary
   - Plan follow-up communications

5. **Next Steps**
   - Create action items for resolution
   - Set up monitoring for the issue
   - Plan post-incident review

Start by gathering all available information about this alert, then guide me through each step."""

TRIAGE_ALERTS_TEMPLATE = """Help me triage alerts using the query "{query}".

Please:

1. **Search for Alerts**: Use the search tool to find alerts matching the criteria
2. **Prioritization Matrix**: Group alerts by:
   - High Priority: P1/P2 alerts or critical systems
   - Medium Priority: P3 alerts or important but not critical
   - Low Priority: P4/P5 alerts or informational
3. **Category Analysis**: Group alerts by:
   - System type (database, web service, infrastructure, etc.)
   - Alert pattern (if multiple similar alerts exist)
   - Time-sensitive vs. can-wait items
4. **Action Recommendations**: For each priority group, suggest:
   - Which alerts to handle first
   - Which can be batched together
   - Which might be duplicates or related
5. **Assignment Suggestions**: Recommend which team member types should handle each category

Start by searching for the alerts, then provide the triage analysis."""

POST_INCIDENT_REVIEW_TEMPLATE = """Conduct a post-incident review for alert ID "{alert_id}"{resolution}.

Please structure a comprehensive post-incident review:

1. **Incident Summary**
   - Retrieve the alert details and timeline
   - Document what happened and when
   - Note the duration and impact

2. **Timeline Analysis**
   - When was the issue first detected?
   - When was it acknowledged and by whom?
   - What were the key milestones in resolution?

3. **Root Cause Analysis**
   - What was the underlying cause?
   - What contributing factors were involved?
   - Were there warning signs that were missed?

4. **Response Evaluation**
   - What went well in the response?
   - What could have been handled better?
   - Were the right people involved quickly enough?

5. **Process Improvements**
   - What monitoring gaps were identified?
   - What process changes would prevent recurrence?
   - What documentation needs updating?

6. **Action Items**
   - Specific tasks to prevent recurrence
   - Process improvements to implement
   - Monitoring or alerting changes needed

Start by gathering all information about this alert and its resolution."""


def render_analyze_incident(args: Mapping[str, str]) -> str:
    return ANALYZE_INCIDENT_TEMPLATE.format(alert_id=args["alertId"])


def render_incident_response(args: Mapping[str, str]) -> str:
    incident_type = args.get("incidentType")
    return INCIDENT_RESPONSE_TEMPLATE.format(
        alert_id=args["alertId"],
        incident_type=f" (incident type: {incident_type})" if incident_type else "",
    )


def render_triage_alerts(args: Mapping[str, str]) -> str:
    return TRIAGE_ALERTS_TEMPLATE.format(query=args.get("query") or DEFAULT_TRIAGE_QUERY)


def render_post_incident_review(args: Mapping[str, str]) -> str:
    resolution_summary = args.get("resolutionSummary")
    return POST_INCIDENT_REVIEW_TEMPLATE.format(
        alert_id=args["alertId"],
        resolution=f" which was resolved: {resolution_summary}" if resolution_summary else "",
    )


def register_prompts(registry: CapabilityRegistry) -> None:
    """Register incident-handling prompts on the capability registry."""
    registry.add_prompt(
        PromptDef(
            name="analyze-incident",
            title="Analyze Incident",
            description="Analyze an alert to determine severity, impact, and recommended actions",
            arguments=(PromptArgumentDef("alertId", "The alert identifier to analyze"),),
            render=render_analyze_incident,
        )
    )
    registry.add_prompt(
        PromptDef(
            name="incident-response",
            title="Incident Response Workflow",
            description="Guide through a structured incident response process",
            arguments=(
                PromptArgumentDef("alertId", "The alert identifier for the incident"),
                PromptArgumentDef(
                    "incidentType",
                    "Type of incident (e.g., 'outage', 'performance', 'security')",
                    required=False,
                ),
            ),
            render=render_incident_response,
        )
    )
    registry.add_prompt(
        PromptDef(
            name="triage-alerts",
            title="Alert Triage",
            description="Help prioritize and categorize multiple alerts for efficient handling",
            arguments=(
                PromptArgumentDef(
                    "query",
                    "Search query to find alerts to triage (default: open alerts)",
                    required=False,
                    default=DEFAULT_TRIAGE_QUERY,
                ),
            ),
            render=render_triage_alerts,
        )
    )
    registry.add_prompt(
        PromptDef(
            name="post-incident-review",
            title="Post-Incident Review",
            description="Structure a comprehensive post-incident review and analysis",
            arguments=(
                PromptArgumentDef("alertId", "The alert identifier for the resolved incident"),
                PromptArgumentDef(
                    "resolutionSummary",
                    "Brief summary of how the incident was resolved",
                    required=False,
                ),
            ),
            render=render_post_incident_review,
        )
    )
