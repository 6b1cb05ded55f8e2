"""MCP resource registration for the OpsGenie MCP server."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..alerts import AlertOperations
from ..models import AlertNotesParams, AlertSearchParams
from ..registry import CapabilityRegistry, ResourceDef
from ..server_defaults import (
    ALERT_DETAILS_URI,
    ALERT_NOTES_URI,
    ALERT_SEARCH_URI,
    RECENT_ALERTS_LIMIT,
    RECENT_ALERTS_QUERY,
    RECENT_ALERTS_URI,
    RESOURCE_NOTES_LIMIT,
    RESOURCE_SEARCH_LIMIT,
)
from ..uri_templates import UriTemplate

JsonDocument = Any


def register_resource_handlers(registry: CapabilityRegistry, operations: AlertOperations) -> None:
    """Register alert resources. Read failures are raised, not returned."""

    async def alert_details(params: Mapping[str, str]) -> JsonDocument:
        response = await operations.get_alert(params["alertId"])
        return response.data.to_document()

    async def alert_notes(params: Mapping[str, str]) -> JsonDocument:
        response = await operations.get_alert_notes(
            params["alertId"], AlertNotesParams(limit=RESOURCE_NOTES_LIMIT)
        )
        return [note.to_document() for note in response.data]

    async def alert_search(params: Mapping[str, str]) -> JsonDocument:
        response = await operations.search_alerts(
            AlertSearchParams(query=params["query"], limit=RESOURCE_SEARCH_LIMIT)
        )
        return [alert.to_document() for alert in response.data]

    async def recent_alerts(params: Mapping[str, str]) -> JsonDocument:
        response = await operations.search_alerts(
            AlertSearchParams(
                query=RECENT_ALERTS_QUERY,
                limit=RECENT_ALERTS_LIMIT,
                sort="updatedAt",
                order="desc",
            )
        )
        return [alert.to_document() for alert in response.data]

    registry.add_resource(
        ResourceDef(
            name="alert-details",
            uri_template=UriTemplate(ALERT_DETAILS_URI),
            title="Alert Details",
            description="Detailed information about a specific OpsGenie alert",
            handler=alert_details,
        )
    )
    registry.add_resource(
        ResourceDef(
            name="alert-notes",
            uri_template=UriTemplate(ALERT_NOTES_URI),
            title="Alert Notes",
            description="Notes and comments for a specific OpsGenie alert",
            handler=alert_notes,
        )
    )
    registry.add_resource(
        ResourceDef(
            name="alert-search",
            uri_template=UriTemplate(ALERT_SEARCH_URI),
            title="Alert Search",
            description="Search OpsGenie alerts based on query criteria",
            handler=alert_search,
        )
    )
    registry.add_resource(
        ResourceDef(
            name="recent-alerts",
            uri_template=UriTemplate(RECENT_ALERTS_URI),
            title="Recent Alerts",
            description="Recently updated OpsGenie alerts",
            handler=recent_alerts,
        )
    )
