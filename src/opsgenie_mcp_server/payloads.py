"""Request body and query-string builders for the OpsGenie alert API.

Optional values follow one rule everywhere: ``None`` means the caller did not
provide the field and it is left out; any other value, including an empty
string, is sent as given.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


class RequestBody:
    """Ordered builder for JSON request bodies.

    Starts from the required fields and applies "include if present" steps in
    the order they are called, so the serialized key order is stable.
    """

    def __init__(self, **required: Any):
        self._fields: dict[str, Any] = {}
        for key, value in required.items():
            self._fields[key] = _to_wire(value)

    def include(self, key: str, value: Any) -> RequestBody:
        """Add ``key`` when ``value`` is not None."""
        if value is not None:
            self._fields[key] = _to_wire(value)
        return self

    def build(self) -> dict[str, Any]:
        return dict(self._fields)


def _to_wire(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [_to_wire(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _to_wire(item) for key, item in value.items()}
    return value


def note_body(note: str | None) -> dict[str, Any]:
    """Body for close/acknowledge/unacknowledge: ``{}`` or ``{"note": ...}``."""
    return RequestBody().include("note", note).build()


def build_query(pairs: list[tuple[str, Any]]) -> dict[str, str]:
    """Build query parameters from ordered ``(key, value)`` pairs, skipping None values."""
    query: dict[str, str] = {}
    for key, value in pairs:
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query
