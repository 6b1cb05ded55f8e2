"""Default server constants and text formatting helpers."""

from __future__ import annotations

from .models import Alert, AlertNote, BaseAlert

DEFAULT_SERVER_NAME = "opsgenie-mcp-server"

# Resource URIs
ALERT_DETAILS_URI = "opsgenie://alerts/{alertId}"
ALERT_NOTES_URI = "opsgenie://alerts/{alertId}/notes"
ALERT_SEARCH_URI = "opsgenie://search?query={query}"
RECENT_ALERTS_URI = "opsgenie://alerts/recent"

# Page sizes used by tools and resources
DEFAULT_NOTES_LIMIT = 10
DEFAULT_SEARCH_LIMIT = 20
RESOURCE_NOTES_LIMIT = 50
RESOURCE_SEARCH_LIMIT = 20
RECENT_ALERTS_LIMIT = 25
RECENT_ALERTS_QUERY = "status:open OR status:acknowledged"

DEFAULT_TRIAGE_QUERY = "status:open"


def _yes_no(value: bool | None) -> str:
    return "Yes" if value else "No"


def _format_alert_details(alert: Alert) -> str:
    """Render a single alert as a human-readable block."""
    responders = ", ".join(r.label() for r in alert.responders or [])
    return "\n".join(
        [
            "Alert Details:",
            f"ID: {alert.id}",
            f"Message: {alert.message or 'N/A'}",
            f"Description: {alert.description or 'N/A'}",
            f"Status: {alert.status or 'N/A'}",
            f"Priority: {alert.priority or 'N/A'}",
            f"Created At: {alert.created_at or 'N/A'}",
            f"Updated At: {alert.updated_at or 'N/A'}",
            f"Owner: {alert.owner or 'N/A'}",
            f"Tags: {', '.join(alert.tags or []) or 'N/A'}",
            f"Responders: {responders or 'N/A'}",
            f"Acknowledged: {_yes_no(alert.acknowledged)}",
            f"Is Seen: {_yes_no(alert.is_seen)}",
            f"Snoozed: {_yes_no(alert.snoozed)}",
        ]
    )


def _format_alert_list(alerts: list[BaseAlert]) -> str:
    return "\n\n".join(
        f"{index}. {alert.message} (ID: {alert.id})\n"
        f"   Status: {alert.status} | Priority: {alert.priority}\n"
        f"   Created: {alert.created_at}"
        for index, alert in enumerate(alerts, start=1)
    )


def _format_note_list(notes: list[AlertNote]) -> str:
    return "\n\n".join(
        f"{index}. {note.note}\n   By: {note.owner}\n   Created: {note.created_at}"
        for index, note in enumerate(notes, start=1)
    )
