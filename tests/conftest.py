"""
Pytest configuration and fixtures for OpsGenie MCP server tests.
"""

import json
import os

import httpx
import pytest

from opsgenie_mcp_server.alerts import AlertOperations
from opsgenie_mcp_server.client import OpsGenieClient


class StubOpsGenie:
    """Records outgoing requests and answers from a queue or a default response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []
        self.default_body = {"result": "Request will be processed", "took": 0.1, "requestId": "req-1"}

    def queue(self, status_code=200, json_body=None, text=None):
        if text is not None:
            self.responses.append(httpx.Response(status_code, text=text))
        else:
            self.responses.append(httpx.Response(status_code, json=json_body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(202, json=self.default_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content.decode()) if self.last.content else None


@pytest.fixture
def stub():
    """Stub OpsGenie API."""
    return StubOpsGenie()


@pytest.fixture
def client(stub):
    """OpsGenie client wired to the stub API."""
    return OpsGenieClient(api_key="test-api-key", transport=stub.transport)


@pytest.fixture
def operations(client):
    return AlertOperations(client)


@pytest.fixture
def sample_alert():
    """A realistic alert document as returned by GET /v2/alerts/{id}."""
    return {
        "id": "70413a06-38d6-4c85-92b8-5ebc900d42e2-1568207424473",
        "tinyId": "1791",
        "alias": "event_573",
        "message": "Our servers are in danger",
        "status": "open",
        "acknowledged": False,
        "isSeen": True,
        "tags": ["OverwriteQuietHours", "Critical"],
        "snoozed": True,
        "snoozedUntil": "2017-04-03T20:32:35.143Z",
        "count": 79,
        "lastOccurredAt": "2017-04-03T20:05:50.894Z",
        "createdAt": "2017-03-21T20:32:52.353Z",
        "updatedAt": "2017-04-03T20:32:57.301Z",
        "source": "Isengard",
        "owner": "morpheus@opsgenie.com",
        "priority": "P5",
        "responders": [
            {"type": "team", "id": "8418d193-2dab-4490-b331-8c02cdd196b7"},
            {"type": "user", "id": "4513b7ea-3b91-438f-b7e4-e3e54af9147c"},
        ],
        "integration": {"id": "4513b7ea-3b91-438f-b7e4-e3e54af9147c", "name": "Nebuchadnezzar", "type": "API"},
        "report": {"ackTime": 15702, "closeTime": 60503, "acknowledgedBy": "agent_smith@opsgenie.com"},
        "actions": ["Restart", "Ping"],
        "entity": "EC2",
        "description": "Example description",
        "details": {"serverName": "Zion", "region": "Oregon"},
    }


@pytest.fixture
def sample_notes():
    return [
        {
            "note": "We are looking into it",
            "owner": "neo@opsgenie.com",
            "createdAt": "2017-04-03T20:10:01.000Z",
            "offset": "1492462000000_1492462001000",
        },
        {
            "note": "Mitigated",
            "owner": "trinity@opsgenie.com",
            "createdAt": "2017-04-03T20:30:01.000Z",
            "offset": "1492462000000_1492462002000",
        },
    ]


@pytest.fixture(autouse=True)
def clean_environment():
    """Ensure clean environment for each test."""
    # Store original environment
    original_env = os.environ.copy()

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)
