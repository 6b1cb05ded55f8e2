"""OpsGenie alert operations built on the HTTP adapter.

Each method maps typed arguments to exactly one API call. Alert-identifying
calls always pin ``identifierType=id``.
"""

from __future__ import annotations

from urllib.parse import quote

from .client import OpsGenieClient
from .errors import NotFoundError
from .models import (
    AlertActionResponse,
    AlertCountParams,
    AlertNotesParams,
    AlertSearchParams,
    CountAlertsResponse,
    CreateAlertRequest,
    GetAlertResponse,
    ListAlertNotesResponse,
    ListAlertsResponse,
    Responder,
)
from .payloads import RequestBody, build_query, note_body

ALERTS_PATH = "/v2/alerts"
ID_IDENTIFIER = {"identifierType": "id"}


def alert_path(identifier: str, suffix: str = "") -> str:
    """Return ``/v2/alerts/{identifier}[/suffix]`` with the identifier percent-encoded."""
    if not identifier:
        raise NotFoundError("Alert identifier is required")
    path = f"{ALERTS_PATH}/{quote(identifier, safe='')}"
    return f"{path}/{suffix}" if suffix else path


class AlertOperations:
    """The alert operation set exposed by the server."""

    def __init__(self, client: OpsGenieClient):
        self.client = client

    # Retrieval

    async def get_alert(self, identifier: str) -> GetAlertResponse:
        return await self.client.execute(
            alert_path(identifier),
            params=ID_IDENTIFIER,
            response_model=GetAlertResponse,
        )

    async def search_alerts(self, params: AlertSearchParams | None = None) -> ListAlertsResponse:
        params = params or AlertSearchParams()
        query = build_query(
            [
                ("query", params.query),
                ("searchIdentifier", params.search_identifier),
                ("searchIdentifierType", params.search_identifier_type),
                ("offset", params.offset),
                ("limit", params.limit),
                ("sort", params.sort),
                ("order", params.order),
            ]
        )
        return await self.client.execute(
            ALERTS_PATH, params=query, response_model=ListAlertsResponse
        )

    async def count_alerts(self, params: AlertCountParams | None = None) -> CountAlertsResponse:
        params = params or AlertCountParams()
        query = build_query(
            [
                ("query", params.query),
                ("searchIdentifier", params.search_identifier),
                ("searchIdentifierType", params.search_identifier_type),
            ]
        )
        return await self.client.execute(
            f"{ALERTS_PATH}/count", params=query, response_model=CountAlertsResponse
        )

    async def get_alert_notes(
        self, identifier: str, params: AlertNotesParams | None = None
    ) -> ListAlertNotesResponse:
        params = params or AlertNotesParams()
        query = build_query(
            [
                ("offset", params.offset),
                ("direction", params.direction),
                ("limit", params.limit),
                ("order", params.order),
            ]
        )
        query.update(ID_IDENTIFIER)
        return await self.client.execute(
            alert_path(identifier, "notes"),
            params=query,
            response_model=ListAlertNotesResponse,
        )

    # Creation

    async def create_alert(self, request: CreateAlertRequest) -> AlertActionResponse:
        body = (
            RequestBody(message=request.message)
            .include("alias", request.alias)
            .include("description", request.description)
            .include("responders", request.responders)
            .include("visibleTo", request.visible_to)
            .include("actions", request.actions)
            .include("tags", request.tags)
            .include("details", request.details)
            .include("entity", request.entity)
            .include("source", request.source)
            .include("priority", request.priority)
            .include("user", request.user)
            .include("note", request.note)
            .build()
        )
        return await self.client.execute(
            ALERTS_PATH, method="POST", body=body, response_model=AlertActionResponse
        )

    # Actions

    async def _post_action(self, identifier: str, action: str, body: dict) -> AlertActionResponse:
        return await self.client.execute(
            alert_path(identifier, action),
            method="POST",
            params=ID_IDENTIFIER,
            body=body,
            response_model=AlertActionResponse,
        )

    async def close_alert(self, identifier: str, note: str | None = None) -> AlertActionResponse:
        return await self._post_action(identifier, "close", note_body(note))

    async def acknowledge_alert(
        self, identifier: str, note: str | None = None
    ) -> AlertActionResponse:
        return await self._post_action(identifier, "acknowledge", note_body(note))

    async def unacknowledge_alert(
        self, identifier: str, note: str | None = None
    ) -> AlertActionResponse:
        return await self._post_action(identifier, "unacknowledge", note_body(note))

    async def snooze_alert(
        self, identifier: str, end_time: str, note: str | None = None
    ) -> AlertActionResponse:
        body = RequestBody(endTime=end_time).include("note", note).build()
        return await self._post_action(identifier, "snooze", body)

    async def assign_alert(
        self, identifier: str, owner: Responder, note: str | None = None
    ) -> AlertActionResponse:
        body = RequestBody(owner=owner).include("note", note).build()
        return await self._post_action(identifier, "assign", body)

    async def escalate_alert(
        self, identifier: str, escalation_name: str, note: str | None = None
    ) -> AlertActionResponse:
        body = RequestBody(escalation={"name": escalation_name}).include("note", note).build()
        return await self._post_action(identifier, "escalate", body)

    # Notes and tags

    async def add_note_to_alert(self, identifier: str, note: str) -> AlertActionResponse:
        return await self._post_action(identifier, "notes", RequestBody(note=note).build())

    async def add_tags_to_alert(
        self, identifier: str, tags: list[str], note: str | None = None
    ) -> AlertActionResponse:
        body = RequestBody(tags=list(tags)).include("note", note).build()
        return await self._post_action(identifier, "tags", body)

    async def remove_tags_from_alert(
        self, identifier: str, tags: list[str], note: str | None = None
    ) -> AlertActionResponse:
        body = RequestBody(tags=list(tags)).include("note", note).build()
        return await self.client.execute(
            alert_path(identifier, "tags"),
            method="DELETE",
            params=ID_IDENTIFIER,
            body=body,
            response_model=AlertActionResponse,
        )
