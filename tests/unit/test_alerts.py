"""
Unit tests for the alert operation set.

Each operation is checked for the single request it issues: method, path,
query parameters and JSON body.
"""

import pytest

from opsgenie_mcp_server.alerts import alert_path
from opsgenie_mcp_server.errors import NotFoundError, RemoteApiError
from opsgenie_mcp_server.models import (
    AlertCountParams,
    AlertNotesParams,
    AlertSearchParams,
    CreateAlertRequest,
    Responder,
)


class TestAlertPath:
    def test_plain_identifier(self):
        assert alert_path("abc-123") == "/v2/alerts/abc-123"

    def test_suffix(self):
        assert alert_path("abc", "notes") == "/v2/alerts/abc/notes"

    def test_identifier_is_percent_encoded(self):
        assert alert_path("a/b c") == "/v2/alerts/a%2Fb%20c"

    def test_empty_identifier_raises(self):
        with pytest.raises(NotFoundError):
            alert_path("")


@pytest.mark.asyncio
class TestRetrieval:
    """Tests for read-only alert operations."""

    async def test_get_alert(self, operations, stub, sample_alert):
        stub.queue(200, {"requestId": "r", "data": sample_alert})
        response = await operations.get_alert(sample_alert["id"])

        request = stub.last
        assert request.method == "GET"
        assert request.url.path == f"/v2/alerts/{sample_alert['id']}"
        assert dict(request.url.params) == {"identifierType": "id"}
        assert response.data.id == sample_alert["id"]
        assert response.data.details == {"serverName": "Zion", "region": "Oregon"}

    async def test_get_alert_encodes_identifier(self, operations, stub, sample_alert):
        stub.queue(200, {"data": sample_alert})
        await operations.get_alert("a/b c")
        assert "/v2/alerts/a%2Fb%20c?" in str(stub.last.url)

    async def test_get_alert_not_found(self, operations, stub):
        stub.queue(404, text='{"message":"Alert does not exist"}')
        with pytest.raises(RemoteApiError) as exc_info:
            await operations.get_alert("missing")
        assert exc_info.value.status == 404
        assert "Alert does not exist" in str(exc_info.value)

    async def test_search_sends_only_defined_keys(self, operations, stub):
        stub.queue(200, {"data": []})
        await operations.search_alerts(AlertSearchParams(query="status:open", limit=5))

        request = stub.last
        assert request.method == "GET"
        assert request.url.path == "/v2/alerts"
        assert dict(request.url.params) == {"query": "status:open", "limit": "5"}

    async def test_search_keeps_empty_query(self, operations, stub):
        stub.queue(200, {"data": []})
        await operations.search_alerts(AlertSearchParams(query=""))
        assert dict(stub.last.url.params) == {"query": ""}

    async def test_search_all_parameters(self, operations, stub):
        stub.queue(200, {"data": []})
        await operations.search_alerts(
            AlertSearchParams(
                query="priority:P1",
                search_identifier="saved-1",
                search_identifier_type="id",
                offset=0,
                limit=20,
                sort="createdAt",
                order="desc",
            )
        )
        assert dict(stub.last.url.params) == {
            "query": "priority:P1",
            "searchIdentifier": "saved-1",
            "searchIdentifierType": "id",
            "offset": "0",
            "limit": "20",
            "sort": "createdAt",
            "order": "desc",
        }

    async def test_search_without_params(self, operations, stub, sample_alert):
        stub.queue(200, {"data": [sample_alert]})
        response = await operations.search_alerts()
        assert stub.last.url.query == b""
        assert len(response.data) == 1

    async def test_count(self, operations, stub):
        stub.queue(200, {"data": {"count": 7}})
        response = await operations.count_alerts(AlertCountParams(query="status:open"))

        assert stub.last.url.path == "/v2/alerts/count"
        assert dict(stub.last.url.params) == {"query": "status:open"}
        assert response.data.count == 7

    async def test_notes_query_and_identifier_type(self, operations, stub, sample_notes):
        stub.queue(200, {"data": sample_notes})
        response = await operations.get_alert_notes(
            "abc", AlertNotesParams(direction="next", limit=10, order="desc")
        )

        request = stub.last
        assert request.url.path == "/v2/alerts/abc/notes"
        assert list(request.url.params.items()) == [
            ("direction", "next"),
            ("limit", "10"),
            ("order", "desc"),
            ("identifierType", "id"),
        ]
        assert [note.note for note in response.data] == ["We are looking into it", "Mitigated"]


@pytest.mark.asyncio
class TestCreateAlert:
    async def test_minimal_body(self, operations, stub):
        await operations.create_alert(CreateAlertRequest(message="X"))

        assert stub.last.method == "POST"
        assert stub.last.url.path == "/v2/alerts"
        assert stub.last.url.query == b""
        assert stub.last_json() == {"message": "X"}

    async def test_full_body_uses_wire_names(self, operations, stub):
        await operations.create_alert(
            CreateAlertRequest(
                message="Disk full",
                alias="disk-full-web01",
                description="",
                responders=[Responder(type="team", name="SRE")],
                visible_to=[Responder(type="user", username="neo@example.com")],
                tags=["disk"],
                details={"host": "web01"},
                priority="P2",
            )
        )
        assert stub.last_json() == {
            "message": "Disk full",
            "alias": "disk-full-web01",
            "description": "",
            "responders": [{"type": "team", "name": "SRE"}],
            "visibleTo": [{"type": "user", "username": "neo@example.com"}],
            "tags": ["disk"],
            "details": {"host": "web01"},
            "priority": "P2",
        }

    async def test_response_is_parsed(self, operations, stub):
        stub.queue(202, {"result": "Request will be processed", "took": 0.3, "requestId": "r-9"})
        response = await operations.create_alert(CreateAlertRequest(message="X"))
        assert response.request_id == "r-9"
        assert response.result_text("fallback") == "Request will be processed"


@pytest.mark.asyncio
class TestAlertActions:
    """Tests for asynchronous alert mutations."""

    @pytest.mark.parametrize(
        "method_name,action",
        [
            ("close_alert", "close"),
            ("acknowledge_alert", "acknowledge"),
            ("unacknowledge_alert", "unacknowledge"),
        ],
    )
    async def test_note_actions_without_note(self, operations, stub, method_name, action):
        await getattr(operations, method_name)("abc")

        assert stub.last.method == "POST"
        assert stub.last.url.path == f"/v2/alerts/abc/{action}"
        assert dict(stub.last.url.params) == {"identifierType": "id"}
        assert stub.last_json() == {}

    async def test_close_with_note(self, operations, stub):
        await operations.close_alert("abc", note="done")
        assert stub.last_json() == {"note": "done"}

    async def test_empty_note_is_sent(self, operations, stub):
        await operations.acknowledge_alert("abc", note="")
        assert stub.last_json() == {"note": ""}

    async def test_snooze(self, operations, stub):
        await operations.snooze_alert("abc", "2024-01-01T10:00:00Z", note="later")
        assert stub.last.url.path == "/v2/alerts/abc/snooze"
        assert stub.last_json() == {"endTime": "2024-01-01T10:00:00Z", "note": "later"}

    async def test_assign(self, operations, stub):
        await operations.assign_alert("abc", Responder(type="user", username="neo@example.com"))
        assert stub.last.url.path == "/v2/alerts/abc/assign"
        assert stub.last_json() == {"owner": {"type": "user", "username": "neo@example.com"}}

    async def test_escalate(self, operations, stub):
        await operations.escalate_alert("abc", "Night Shift")
        assert stub.last.url.path == "/v2/alerts/abc/escalate"
        assert stub.last_json() == {"escalation": {"name": "Night Shift"}}

    async def test_add_note(self, operations, stub):
        await operations.add_note_to_alert("abc", "investigating")
        assert stub.last.method == "POST"
        assert stub.last.url.path == "/v2/alerts/abc/notes"
        assert dict(stub.last.url.params) == {"identifierType": "id"}
        assert stub.last_json() == {"note": "investigating"}

    async def test_add_tags(self, operations, stub):
        await operations.add_tags_to_alert("abc", ["x", "y"], note="tagged")
        assert stub.last.method == "POST"
        assert stub.last.url.path == "/v2/alerts/abc/tags"
        assert stub.last_json() == {"tags": ["x", "y"], "note": "tagged"}

    async def test_remove_tags_uses_delete_with_body(self, operations, stub):
        await operations.remove_tags_from_alert("abc", ["x", "y"])
        assert stub.last.method == "DELETE"
        assert stub.last.url.path == "/v2/alerts/abc/tags"
        assert dict(stub.last.url.params) == {"identifierType": "id"}
        assert stub.last_json() == {"tags": ["x", "y"]}

    async def test_action_response(self, operations, stub):
        response = await operations.close_alert("abc")
        assert response.request_id == "req-1"
        assert response.result_text("Alert closed") == "Request will be processed"
