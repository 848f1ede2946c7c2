"""GraphQL-over-HTTP transport built on httpx."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Final, Self

import httpx
import msgspec

from core_types import JsonDict
from kibel_client.errors import ApiError, TransportError

logger = logging.getLogger(__name__)

GRAPHQL_ACCEPT_HEADER: Final[str] = "application/graphql-response+json, application/json;q=0.9"
API_PATH: Final[str] = "/api/v1"
DEFAULT_TIMEOUT_SECS: Final[float] = 5.0


def endpoint_from_origin(origin: str) -> str:
    """Return the GraphQL endpoint for a service origin.

    Parameters
    ----------
    origin
        Service origin such as ``https://example.kibe.la``.

    Returns
    -------
    str
        Origin with trailing slashes removed and ``/api/v1`` appended unless
        it is already present.
    """
    normalized = origin.strip().rstrip("/")
    if normalized.endswith(API_PATH):
        return normalized
    return f"{normalized}{API_PATH}"


def extract_graphql_error(payload: object) -> tuple[str, str] | None:
    """Return ``(code, message)`` for the first GraphQL error, if any.

    Returns
    -------
    tuple[str, str] | None
        Error code from ``extensions.code`` and message, or None.
    """
    if not isinstance(payload, Mapping):
        return None
    errors = payload.get("errors")
    if not isinstance(errors, list) or not errors:
        return None
    first = errors[0]
    if not isinstance(first, Mapping):
        return "UNKNOWN_ERROR", "GraphQL request failed"
    extensions = first.get("extensions")
    code = extensions.get("code") if isinstance(extensions, Mapping) else None
    message = first.get("message")
    return (
        code if isinstance(code, str) else "UNKNOWN_ERROR",
        message if isinstance(message, str) else "GraphQL request failed",
    )


class GraphqlTransport:
    """POST GraphQL documents to a single endpoint with a bearer token.

    Parameters
    ----------
    endpoint
        GraphQL endpoint URL.
    token
        Access token sent as ``Authorization: Bearer``.
    timeout
        Request timeout in seconds.
    client
        Optional preconfigured ``httpx.Client`` (tests pass one backed by
        ``httpx.MockTransport``).
    """

    def __init__(
        self,
        endpoint: str,
        token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECS,
        client: httpx.Client | None = None,
    ) -> None:
        self.endpoint = endpoint
        self._headers = {
            "Content-Type": "application/json",
            "Accept": GRAPHQL_ACCEPT_HEADER,
            "Authorization": f"Bearer {token}",
        }
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=max(timeout, 0.1))

    def execute(self, query: str, variables: Mapping[str, object] | None = None) -> JsonDict:
        """Send a GraphQL document and return the decoded response.

        Parameters
        ----------
        query
            GraphQL document.
        variables
            Request variables.

        Returns
        -------
        JsonDict
            Decoded response payload (including ``data``).

        Raises
        ------
        ApiError
            Raised when the response carries GraphQL errors.
        TransportError
            Raised when the request fails, the body is not a JSON object, or
            the status is an error without GraphQL errors.
        """
        body = msgspec.json.encode({"query": query, "variables": dict(variables or {})})
        try:
            response = self._client.post(self.endpoint, content=body, headers=self._headers)
        except httpx.HTTPError as exc:
            msg = f"request failed: {exc}"
            raise TransportError(msg) from exc
        status_code = response.status_code if response.is_error else None
        try:
            payload = msgspec.json.decode(response.content)
        except msgspec.DecodeError as exc:
            msg = f"invalid JSON response: {exc}"
            raise TransportError(msg, status_code=status_code) from exc
        error = extract_graphql_error(payload)
        if error is not None:
            code, message = error
            logger.debug("GraphQL error %s from %s: %s", code, self.endpoint, message)
            raise ApiError(code, message, status_code=status_code)
        if status_code is not None:
            msg = f"http status {status_code} without graphql errors"
            raise TransportError(msg, status_code=status_code)
        if not isinstance(payload, dict):
            msg = "GraphQL response must be a JSON object"
            raise TransportError(msg)
        return payload

    def close(self) -> None:
        """Close the underlying client when this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "DEFAULT_TIMEOUT_SECS",
    "GRAPHQL_ACCEPT_HEADER",
    "GraphqlTransport",
    "endpoint_from_origin",
    "extract_graphql_error",
]
