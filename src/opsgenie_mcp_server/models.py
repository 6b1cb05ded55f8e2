"""Typed request and response models for the OpsGenie alert API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Priority = Literal["P1", "P2", "P3", "P4", "P5"]


class OpsGenieModel(BaseModel):
    """Base model: camelCase aliases on the wire, unknown remote fields preserved."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_document(self) -> dict[str, Any]:
        """Dump only the fields the remote actually sent, under their wire names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class Responder(OpsGenieModel):
    type: str
    id: str | None = None
    name: str | None = None
    username: str | None = None

    def label(self) -> str:
        return f"{self.type}:{self.id or self.name or self.username or 'N/A'}"


class BaseAlert(OpsGenieModel):
    id: str
    tiny_id: str | None = Field(default=None, alias="tinyId")
    alias: str | None = None
    message: str | None = None
    status: str | None = None
    acknowledged: bool | None = None
    is_seen: bool | None = Field(default=None, alias="isSeen")
    tags: list[str] | None = None
    snoozed: bool | None = None
    snoozed_until: str | None = Field(default=None, alias="snoozedUntil")
    count: int | None = None
    last_occurred_at: str | None = Field(default=None, alias="lastOccurredAt")
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    source: str | None = None
    owner: str | None = None
    priority: str | None = None
    responders: list[Responder] | None = None
    integration: dict[str, Any] | None = None
    report: dict[str, Any] | None = None


class Alert(BaseAlert):
    actions: list[str] | None = None
    entity: str | None = None
    description: str | None = None
    details: dict[str, str] | None = None


class AlertNote(OpsGenieModel):
    note: str
    owner: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")
    offset: str | None = None


class Paging(OpsGenieModel):
    first: str | None = None
    next: str | None = None
    prev: str | None = None
    last: str | None = None


class GetAlertResponse(OpsGenieModel):
    request_id: str | None = Field(default=None, alias="requestId")
    data: Alert


class ListAlertsResponse(OpsGenieModel):
    request_id: str | None = Field(default=None, alias="requestId")
    data: list[BaseAlert] = Field(default_factory=list)
    paging: Paging | None = None


class AlertCount(OpsGenieModel):
    count: int


class CountAlertsResponse(OpsGenieModel):
    request_id: str | None = Field(default=None, alias="requestId")
    data: AlertCount


class ListAlertNotesResponse(OpsGenieModel):
    request_id: str | None = Field(default=None, alias="requestId")
    data: list[AlertNote] = Field(default_factory=list)
    paging: Paging | None = None


class ActionData(OpsGenieModel):
    alert_id: str | None = Field(default=None, alias="alertId")
    result: str | None = None


class AlertActionResponse(OpsGenieModel):
    """Acknowledgement returned by every asynchronous alert mutation."""

    result: str | None = None
    took: float | None = None
    request_id: str | None = Field(default=None, alias="requestId")
    data: ActionData | None = None

    def result_text(self, fallback: str) -> str:
        if self.result:
            return self.result
        if self.data is not None and self.data.result:
            return self.data.result
        return fallback


# Query parameter sets. Every field is optional; None means "not sent".


class AlertSearchParams(BaseModel):
    query: str | None = None
    search_identifier: str | None = None
    search_identifier_type: str | None = None
    offset: int | None = None
    limit: int | None = None
    sort: str | None = None
    order: str | None = None


class AlertCountParams(BaseModel):
    query: str | None = None
    search_identifier: str | None = None
    search_identifier_type: str | None = None


class AlertNotesParams(BaseModel):
    offset: str | int | None = None
    direction: str | None = None
    limit: int | None = None
    order: str | None = None


class CreateAlertRequest(BaseModel):
    """Fields accepted by POST /v2/alerts. Only ``message`` is required."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    alias: str | None = None
    description: str | None = None
    responders: list[Responder] | None = None
    visible_to: list[Responder] | None = Field(default=None, alias="visibleTo")
    actions: list[str] | None = None
    tags: list[str] | None = None
    details: dict[str, str] | None = None
    entity: str | None = None
    source: str | None = None
    priority: Priority | None = None
    user: str | None = None
    note: str | None = None
