"""Tests for the httpx-backed GraphQL transport."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import msgspec
import pytest

from kibel_client.errors import ApiError, TransportError
from kibel_client.transport import (
    GRAPHQL_ACCEPT_HEADER,
    GraphqlTransport,
    endpoint_from_origin,
    extract_graphql_error,
)

ENDPOINT = "https://example.kibe.la/api/v1"


def _transport(handler: Callable[[httpx.Request], httpx.Response]) -> GraphqlTransport:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return GraphqlTransport(ENDPOINT, "secret", client=client)


@pytest.mark.parametrize(
    ("origin", "expected"),
    [
        ("https://example.kibe.la", ENDPOINT),
        ("https://example.kibe.la/", ENDPOINT),
        (" https://example.kibe.la/api/v1 ", ENDPOINT),
    ],
)
def test_endpoint_from_origin(origin: str, expected: str) -> None:
    """The API path is appended once."""
    assert endpoint_from_origin(origin) == expected


def test_execute_posts_query_with_headers() -> None:
    """Requests carry the bearer token, accept header and JSON body."""
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"data": {"note": {"id": "N1"}}})

    payload = _transport(handler).execute("query { note { id } }", {"id": "N1"})
    assert payload == {"data": {"note": {"id": "N1"}}}
    (request,) = captured
    assert request.method == "POST"
    assert str(request.url) == ENDPOINT
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Accept"] == GRAPHQL_ACCEPT_HEADER
    assert msgspec.json.decode(request.content) == {
        "query": "query { note { id } }",
        "variables": {"id": "N1"},
    }


def test_graphql_errors_raise_api_error() -> None:
    """The first GraphQL error is surfaced with its extension code."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"errors": [{"message": "not allowed", "extensions": {"code": "FORBIDDEN"}}]},
        )

    with pytest.raises(ApiError, match="FORBIDDEN: not allowed") as exc_info:
        _transport(handler).execute("query { a }")
    assert exc_info.value.code == "FORBIDDEN"
    assert exc_info.value.status_code is None


def test_error_status_with_graphql_errors_keeps_status() -> None:
    """GraphQL errors on an error status still raise ApiError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"errors": [{"message": "bad token"}]})

    with pytest.raises(ApiError) as exc_info:
        _transport(handler).execute("query { a }")
    assert exc_info.value.code == "UNKNOWN_ERROR"
    assert exc_info.value.status_code == 401


def test_error_status_without_graphql_errors() -> None:
    """Plain HTTP failures raise TransportError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"message": "unavailable"})

    with pytest.raises(TransportError, match="http status 503") as exc_info:
        _transport(handler).execute("query { a }")
    assert exc_info.value.status_code == 503


def test_invalid_json_raises_transport_error() -> None:
    """Non-JSON bodies are transport failures."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(TransportError, match="invalid JSON response"):
        _transport(handler).execute("query { a }")


def test_network_failure_raises_transport_error() -> None:
    """httpx errors are wrapped."""

    def handler(request: httpx.Request) -> httpx.Response:
        msg = "connection refused"
        raise httpx.ConnectError(msg, request=request)

    with pytest.raises(TransportError, match="request failed"):
        _transport(handler).execute("query { a }")


def test_extract_graphql_error_defaults() -> None:
    """Malformed error entries fall back to generic values."""
    assert extract_graphql_error({"data": {}}) is None
    assert extract_graphql_error({"errors": []}) is None
    assert extract_graphql_error({"errors": ["boom"]}) == (
        "UNKNOWN_ERROR",
        "GraphQL request failed",
    )
