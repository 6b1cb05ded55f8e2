"""Alert tool registration for the OpsGenie MCP server."""

from __future__ import annotations

from typing import Annotated, Literal

from mcp.types import ResourceLink
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from ..alerts import AlertOperations
from ..models import (
    AlertCountParams,
    AlertNotesParams,
    AlertSearchParams,
    CreateAlertRequest,
    Priority,
    Responder,
)
from ..registry import CapabilityRegistry, OperationDef, OperationOutcome
from ..server_defaults import (
    ALERT_DETAILS_URI,
    ALERT_NOTES_URI,
    ALERT_SEARCH_URI,
    DEFAULT_NOTES_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    _format_alert_details,
    _format_alert_list,
    _format_note_list,
)
from ..uri_templates import UriTemplate

ALERT_DETAILS = UriTemplate(ALERT_DETAILS_URI)
ALERT_NOTES = UriTemplate(ALERT_NOTES_URI)
ALERT_SEARCH = UriTemplate(ALERT_SEARCH_URI)

Identifier = Annotated[
    str,
    Field(min_length=1, description="The alert identifier (full ID, including suffix)"),
]


class ToolArguments(BaseModel):
    """Declared argument shape of a tool."""

    model_config = ConfigDict(populate_by_name=True)


class AlertIdentifierArguments(ToolArguments):
    identifier: Identifier


class NoteActionArguments(AlertIdentifierArguments):
    note: Annotated[
        str | None, Field(description="Optional note to add to the alert with this action")
    ] = None


class GetAlertNotesArguments(AlertIdentifierArguments):
    limit: Annotated[
        StrictInt, Field(ge=1, le=100, description="Number of notes to fetch (1-100, default: 10)")
    ] = DEFAULT_NOTES_LIMIT
    offset: Annotated[
        str | None, Field(description="Offset token of the note to start from")
    ] = None
    direction: Annotated[
        Literal["next", "prev"] | None, Field(description="Page direction relative to offset")
    ] = None
    order: Annotated[
        Literal["asc", "desc"] | None, Field(description="Sort order of notes by creation time")
    ] = None


class SearchAlertsArguments(ToolArguments):
    query: Annotated[
        str,
        Field(
            description="OpsGenie search query (e.g., 'status:open', 'priority:P1', 'tag:database')"
        ),
    ]
    limit: Annotated[
        StrictInt, Field(ge=1, le=100, description="Number of alerts to return (1-100, default: 20)")
    ] = DEFAULT_SEARCH_LIMIT
    offset: Annotated[
        StrictInt | None, Field(ge=0, description="Start index of the result page")
    ] = None
    sort: Annotated[
        str | None, Field(description="Field to sort by (e.g., 'createdAt', 'updatedAt')")
    ] = None
    order: Annotated[Literal["asc", "desc"] | None, Field(description="Sort order")] = None


class GetAlertCountArguments(ToolArguments):
    query: Annotated[
        str | None, Field(description="OpsGenie search query to filter alerts (optional)")
    ] = None
    search_identifier: Annotated[
        str | None,
        Field(alias="searchIdentifier", description="Identifier of a saved search (optional)"),
    ] = None
    search_identifier_type: Annotated[
        Literal["id", "name"] | None,
        Field(alias="searchIdentifierType", description="Type of searchIdentifier: 'id' or 'name'"),
    ] = None


class CreateAlertArguments(ToolArguments):
    message: Annotated[str, Field(min_length=1, description="Alert message/title")]
    description: Annotated[str | None, Field(description="Detailed description of the alert")] = None
    priority: Annotated[
        Priority | None, Field(description="Alert priority (P1=Critical, P5=Informational)")
    ] = None
    tags: Annotated[list[str] | None, Field(description="Array of tags to add to the alert")] = None
    alias: Annotated[str | None, Field(description="Unique alert alias for deduplication")] = None
    entity: Annotated[
        str | None, Field(description="Entity field (e.g., hostname, service name)")
    ] = None
    source: Annotated[str | None, Field(description="Source of the alert")] = None
    note: Annotated[str | None, Field(description="Additional note to add to the alert")] = None
    responders: Annotated[
        list[Responder] | None,
        Field(description="Teams, users, escalations or schedules to notify"),
    ] = None
    visible_to: Annotated[
        list[Responder] | None,
        Field(alias="visibleTo", description="Teams and users the alert becomes visible to"),
    ] = None
    actions: Annotated[
        list[str] | None, Field(description="Custom actions available for the alert")
    ] = None
    details: Annotated[
        dict[str, str] | None, Field(description="Custom key-value properties of the alert")
    ] = None
    user: Annotated[str | None, Field(description="Display name of the request owner")] = None


class AddNoteArguments(AlertIdentifierArguments):
    note: Annotated[str, Field(min_length=1, description="The note content to add to the alert")]


class AssignAlertArguments(NoteActionArguments):
    responder_type: Annotated[
        Literal["user", "team", "escalation"],
        Field(alias="responderType", description="Type of responder to assign"),
    ]
    responder_id: Annotated[
        str,
        Field(
            alias="responderId",
            min_length=1,
            description="ID or username/team name of the responder",
        ),
    ]


class SnoozeAlertArguments(NoteActionArguments):
    end_time: Annotated[
        str,
        Field(
            alias="endTime",
            min_length=1,
            description="End time for snooze in ISO 8601 format (e.g., '2024-12-31T23:59:59Z')",
        ),
    ]


class EscalateAlertArguments(NoteActionArguments):
    escalation_name: Annotated[
        str,
        Field(
            alias="escalationName",
            min_length=1,
            description="Name of the escalation policy to escalate to",
        ),
    ]


class TagsArguments(NoteActionArguments):
    tags: Annotated[list[str], Field(min_length=1, description="Array of tags")]


def register_alert_tools(registry: CapabilityRegistry, operations: AlertOperations) -> None:
    """Register alert tools on the capability registry."""

    async def get_alert_details(args: AlertIdentifierArguments) -> OperationOutcome:
        response = await operations.get_alert(args.identifier)
        alert = response.data
        return OperationOutcome(
            text=_format_alert_details(alert),
            links=[
                ResourceLink(
                    type="resource_link",
                    uri=ALERT_DETAILS.expand(alertId=alert.id),
                    name=f"Alert {alert.id}",
                    description=f"Detailed JSON data for alert {alert.id}",
                    mimeType="application/json",
                )
            ],
        )

    async def get_alert_notes(args: GetAlertNotesArguments) -> OperationOutcome:
        response = await operations.get_alert_notes(
            args.identifier,
            AlertNotesParams(
                limit=args.limit,
                offset=args.offset,
                direction=args.direction,
                order=args.order,
            ),
        )
        if not response.data:
            return OperationOutcome(text="No notes found for this alert.")
        return OperationOutcome(
            text=f"Notes for alert {args.identifier}:\n\n{_format_note_list(response.data)}",
            links=[
                ResourceLink(
                    type="resource_link",
                    uri=ALERT_NOTES.expand(alertId=args.identifier),
                    name=f"Notes for Alert {args.identifier}",
                    description=f"Complete JSON data for notes on alert {args.identifier}",
                    mimeType="application/json",
                )
            ],
        )

    async def search_alerts(args: SearchAlertsArguments) -> OperationOutcome:
        response = await operations.search_alerts(
            AlertSearchParams(
                query=args.query,
                limit=args.limit,
                offset=args.offset,
                sort=args.sort,
                order=args.order,
            )
        )
        alerts = response.data
        if not alerts:
            return OperationOutcome(text=f'No alerts found matching query: "{args.query}"')
        return OperationOutcome(
            text=f'Found {len(alerts)} alerts matching "{args.query}":\n\n{_format_alert_list(alerts)}',
            links=[
                ResourceLink(
                    type="resource_link",
                    uri=ALERT_SEARCH.expand(query=args.query),
                    name=f"Search Results: {args.query}",
                    description=f'Complete JSON data for alerts matching "{args.query}"',
                    mimeType="application/json",
                )
            ],
        )

    async def get_alert_count(args: GetAlertCountArguments) -> OperationOutcome:
        response = await operations.count_alerts(
            AlertCountParams(
                query=args.query,
                search_identifier=args.search_identifier,
                search_identifier_type=args.search_identifier_type,
            )
        )
        count = response.data.count
        if args.query:
            return OperationOutcome(text=f'Found {count} alerts matching query "{args.query}"')
        return OperationOutcome(text=f"Total alerts: {count}")

    async def create_alert(args: CreateAlertArguments) -> OperationOutcome:
        request = CreateAlertRequest.model_validate(
            args.model_dump(exclude_none=True, by_alias=True)
        )
        response = await operations.create_alert(request)
        alert_id = response.data.alert_id if response.data is not None else None
        return OperationOutcome(
            text=(
                f"Successfully created alert. Alert ID: {alert_id or 'N/A'}, "
                f"Request ID: {response.request_id}. Result: {response.result_text('Request accepted')}"
            )
        )

    async def close_alert(args: NoteActionArguments) -> OperationOutcome:
        response = await operations.close_alert(args.identifier, args.note)
        return OperationOutcome(
            text=(
                f"Successfully closed alert {args.identifier}. "
                f"Result: {response.result_text('Alert closed')}"
            )
        )

    async def acknowledge_alert(args: NoteActionArguments) -> OperationOutcome:
        response = await operations.acknowledge_alert(args.identifier, args.note)
        return OperationOutcome(
            text=(
                f"Successfully acknowledged alert {args.identifier}. "
                f"Result: {response.result_text('Alert acknowledged')}"
            )
        )

    async def unacknowledge_alert(args: NoteActionArguments) -> OperationOutcome:
        response = await operations.unacknowledge_alert(args.identifier, args.note)
        return OperationOutcome(
            text=(
                f"Successfully unacknowledged alert {args.identifier}. "
                f"Request ID: {response.request_id}"
            )
        )

    async def snooze_alert(args: SnoozeAlertArguments) -> OperationOutcome:
        response = await operations.snooze_alert(args.identifier, args.end_time, args.note)
        return OperationOutcome(
            text=(
                f"Successfully snoozed alert {args.identifier} until {args.end_time}. "
                f"Request ID: {response.request_id}"
            )
        )

    async def assign_alert(args: AssignAlertArguments) -> OperationOutcome:
        owner = Responder(type=args.responder_type, id=args.responder_id)
        response = await operations.assign_alert(args.identifier, owner, args.note)
        return OperationOutcome(
            text=(
                f"Successfully assigned alert {args.identifier} to "
                f"{args.responder_type} {args.responder_id}. Request ID: {response.request_id}"
            )
        )

    async def escalate_alert(args: EscalateAlertArguments) -> OperationOutcome:
        response = await operations.escalate_alert(
            args.identifier, args.escalation_name, args.note
        )
        return OperationOutcome(
            text=(
                f"Successfully escalated alert {args.identifier} to {args.escalation_name}. "
                f"Request ID: {response.request_id}"
            )
        )

    async def add_note_to_alert(args: AddNoteArguments) -> OperationOutcome:
        response = await operations.add_note_to_alert(args.identifier, args.note)
        return OperationOutcome(
            text=(
                f"Successfully added note to alert {args.identifier}. "
                f"Request ID: {response.request_id}"
            )
        )

    async def add_tags_to_alert(args: TagsArguments) -> OperationOutcome:
        response = await operations.add_tags_to_alert(args.identifier, args.tags, args.note)
        return OperationOutcome(
            text=(
                f"Successfully added tags [{', '.join(args.tags)}] to alert {args.identifier}. "
                f"Request ID: {response.request_id}"
            )
        )

    async def remove_tags_from_alert(args: TagsArguments) -> OperationOutcome:
        response = await operations.remove_tags_from_alert(args.identifier, args.tags, args.note)
        return OperationOutcome(
            text=(
                f"Successfully removed tags [{', '.join(args.tags)}] from alert {args.identifier}. "
                f"Request ID: {response.request_id}"
            )
        )

    definitions = [
        OperationDef(
            name="get-alert-details",
            title="Get Alert Details",
            description="Fetch comprehensive details for an alert by its identifier",
            arguments=AlertIdentifierArguments,
            handler=get_alert_details,
            error_context="fetching alert details",
        ),
        OperationDef(
            name="get-alert-notes",
            title="Get Alert Notes",
            description="Fetch notes/comments for an alert",
            arguments=GetAlertNotesArguments,
            handler=get_alert_notes,
            error_context="fetching alert notes",
        ),
        OperationDef(
            name="search-alerts",
            title="Search Alerts",
            description="Search for alerts using OpsGenie query syntax",
            arguments=SearchAlertsArguments,
            handler=search_alerts,
            error_context="searching alerts",
        ),
        OperationDef(
            name="get-alert-count",
            title="Get Alert Count",
            description="Get the count of alerts matching specific criteria",
            arguments=GetAlertCountArguments,
            handler=get_alert_count,
            error_context="getting alert count",
        ),
        OperationDef(
            name="create-alert",
            title="Create Alert",
            description="Create a new alert in OpsGenie",
            arguments=CreateAlertArguments,
            handler=create_alert,
            error_context="creating alert",
        ),
        OperationDef(
            name="close-alert",
            title="Close Alert",
            description="Close an alert by its identifier",
            arguments=NoteActionArguments,
            handler=close_alert,
            error_context="closing alert",
        ),
        OperationDef(
            name="acknowledge-alert",
            title="Acknowledge Alert",
            description="Acknowledge an alert by its identifier",
            arguments=NoteActionArguments,
            handler=acknowledge_alert,
            error_context="acknowledging alert",
        ),
        OperationDef(
            name="unacknowledge-alert",
            title="Unacknowledge Alert",
            description="Remove acknowledgment from an alert",
            arguments=NoteActionArguments,
            handler=unacknowledge_alert,
            error_context="unacknowledging alert",
        ),
        OperationDef(
            name="snooze-alert",
            title="Snooze Alert",
            description="Snooze an alert until a specified time",
            arguments=SnoozeAlertArguments,
            handler=snooze_alert,
            error_context="snoozing alert",
        ),
        OperationDef(
            name="assign-alert",
            title="Assign Alert",
            description="Assign an alert to a specific responder (user, team, or escalation)",
            arguments=AssignAlertArguments,
            handler=assign_alert,
            error_context="assigning alert",
        ),
        OperationDef(
            name="escalate-alert",
            title="Escalate Alert",
            description="Escalate an alert to the next escalation level",
            arguments=EscalateAlertArguments,
            handler=escalate_alert,
            error_context="escalating alert",
        ),
        OperationDef(
            name="add-note-to-alert",
            title="Add Note to Alert",
            description="Add a note/comment to an existing alert",
            arguments=AddNoteArguments,
            handler=add_note_to_alert,
            error_context="adding note to alert",
        ),
        OperationDef(
            name="add-tags-to-alert",
            title="Add Tags to Alert",
            description="Add one or more tags to an existing alert",
            arguments=TagsArguments,
            handler=add_tags_to_alert,
            error_context="adding tags to alert",
        ),
        OperationDef(
            name="remove-tags-from-alert",
            title="Remove Tags from Alert",
            description="Remove one or more tags from an existing alert",
            arguments=TagsArguments,
            handler=remove_tags_from_alert,
            error_context="removing tags from alert",
        ),
    ]
    for definition in definitions:
        registry.add_operation(definition)
