"""HTTP adapter for the OpsGenie REST API."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx
import pydantic

from . import __version__
from .errors import ConfigurationError, RemoteApiError, TransportError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.opsgenie.com"
DEFAULT_TIMEOUT = 30.0

_GENIE_KEY_PREFIX = re.compile(r"^GenieKey\s+", re.IGNORECASE)

ResponseT = TypeVar("ResponseT", bound=pydantic.BaseModel)


class OpsGenieClient:
    """Builds authenticated requests against the OpsGenie API and normalizes outcomes.

    The credential and base URL are fixed at construction. Every request uses a
    short-lived ``httpx.AsyncClient``; nothing is shared between calls.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        key = _GENIE_KEY_PREFIX.sub("", (api_key or "").lstrip()).strip()
        if not key:
            raise ConfigurationError("OPSGENIE_API_KEY environment variable is required")

        self._api_key = key
        self._authorization = f"GenieKey {key}"
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport

        self._default_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"opsgenie-mcp-server/{__version__}",
        }

        logger.info(f"OpsGenieClient init: base_url={self.base_url}, timeout={timeout}")

    @property
    def authorization(self) -> str:
        return self._authorization

    def _build_headers(self, overrides: Mapping[str, str] | None) -> httpx.Headers:
        """Merge call-site headers over the defaults; Authorization is never overridden."""
        headers = httpx.Headers(self._default_headers)
        for key, value in (overrides or {}).items():
            if key.lower() == "authorization":
                logger.warning("Ignoring Authorization header override; the configured API key is used")
                continue
            headers[key] = value
        headers["Authorization"] = self._authorization
        return headers

    @staticmethod
    def _encode_body(body: Any) -> str | None:
        if body is None:
            return None
        if isinstance(body, str):
            return body
        if isinstance(body, Mapping):
            return json.dumps(body)
        raise ValidationError(
            f"Request body must be a JSON object or a serialized string, got {type(body).__name__}"
        )

    async def execute(
        self,
        endpoint: str,
        method: str = "GET",
        params: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        response_model: type[ResponseT] | None = None,
    ) -> Any:
        """Issue one request and return the parsed JSON body (or ``response_model`` instance).

        Raises:
            RemoteApiError: the response status is not 2xx.
            TransportError: no response was received.
            ValidationError: ``body`` is neither a mapping nor a string.
        """
        url = f"{self.base_url}{endpoint}"
        query = {key: value for key, value in (params or {}).items() if value is not None}
        content = self._encode_body(body)
        request_headers = self._build_headers(headers)

        logger.debug(f"Request: {method} {url} params={query}")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    params=query or None,
                    content=content,
                    headers=request_headers,
                )
        except httpx.TransportError as e:
            logger.error(f"Transport error for {method} {url}: {e}")
            raise TransportError(f"Failed to reach OpsGenie API ({method} {url}): {e}") from e

        logger.debug(f"Response: {method} {url} -> {response.status_code}")

        if not response.is_success:
            body_text = response.text
            log_message = (
                f"HTTP {response.status_code} error for {method} {url}: "
                f"{body_text[:500] if body_text else 'No response body'}"
            )
            if response.status_code >= 500:
                logger.error(log_message)
            else:
                logger.warning(log_message)
            raise RemoteApiError(response.status_code, response.reason_phrase, body_text)

        try:
            payload = response.json()
            if response_model is not None:
                return response_model.model_validate(payload)
            return payload
        except (json.JSONDecodeError, pydantic.ValidationError) as e:
            logger.warning(f"Unexpected response body for {method} {url}: {e}")
            raise RemoteApiError(
                response.status_code,
                f"{response.reason_phrase} (unexpected response body)",
                response.text,
            ) from e
