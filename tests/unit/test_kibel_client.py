"""Tests for the runtime client over a mocked HTTP transport."""

from __future__ import annotations

import httpx
import msgspec
import pytest

from kibel_client.client import KibelClient, build_create_note_input
from kibel_client.create_note_schema import CreateNoteSchema, CreateNoteSchemaOptions
from kibel_client.errors import InputInvalidError, TransportError
from kibel_client.models import CreateNoteRequest, FolderRef, UpdateNoteRequest
from runtime_models.client import ClientSettingsRuntime
from tests._support.introspection import create_note_payload

ORIGIN = "https://example.kibe.la"
CREATED = {
    "data": {
        "createNote": {
            "clientMutationId": "m-1",
            "note": {"id": "N1", "title": "Hello", "content": "Body", "url": "https://x/n/1"},
        }
    }
}


class _Server:
    """Record GraphQL requests and answer from a queue."""

    def __init__(self, *responses: object) -> None:
        self.responses = list(responses)
        self.requests: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(msgspec.json.decode(request.content))
        return httpx.Response(200, json=self.responses.pop(0))


def _client(server: _Server, options: CreateNoteSchemaOptions | None = None) -> KibelClient:
    settings = ClientSettingsRuntime(origin=ORIGIN, token="secret")
    http_client = httpx.Client(transport=httpx.MockTransport(server))
    return KibelClient.from_settings(
        settings,
        schema_options=options or CreateNoteSchemaOptions(disable_introspection=True),
        http_client=http_client,
    )


def test_from_settings_derives_endpoint() -> None:
    """The endpoint defaults to the origin's API path."""
    client = _client(_Server())
    assert client.endpoint == f"{ORIGIN}/api/v1"


def test_create_note_with_default_schema() -> None:
    """Creating a note sends supported fields and parses the payload."""
    server = _Server(CREATED)
    request = CreateNoteRequest(
        title=" Hello ",
        content="Body",
        group_ids=("G1", " "),
        folders=(FolderRef(group_id="G1", folder_name="Docs"),),
        client_mutation_id="m-1",
    )
    result = _client(server).create_note(request)
    assert result.note.id == "N1"
    assert result.note.url == "https://x/n/1"
    assert result.client_mutation_id == "m-1"
    (sent,) = server.requests
    assert sent["query"].startswith("mutation CreateNote($input: CreateNoteInput!)")
    assert sent["variables"]["input"] == {
        "title": "Hello",
        "content": "Body",
        "groupIds": ["G1"],
        "coediting": False,
        "folders": [{"groupId": "G1", "folderName": "Docs"}],
        "clientMutationId": "m-1",
    }


def test_create_note_uses_live_schema_once() -> None:
    """With introspection enabled the schema is fetched before the first create only."""
    live = create_note_payload(
        ("title", "content", "groupIds", "coediting"),
        payload_fields=("note",),
        note_fields=("id", "title"),
    )
    created = {"data": {"createNote": {"note": {"id": "N2", "title": "T"}}}}
    server = _Server(live, created, created)
    client = _client(server, CreateNoteSchemaOptions(disable_introspection=False))
    request = CreateNoteRequest(
        title="T",
        content="C",
        group_ids=("G1",),
        draft=True,
        client_mutation_id="m-2",
    )
    client.create_note(request)
    result = client.create_note(request)
    assert result.client_mutation_id is None
    assert len(server.requests) == 3
    assert "__type" in server.requests[0]["query"]
    for sent in server.requests[1:]:
        assert "clientMutationId" not in sent["query"]
        assert sent["variables"]["input"] == {
            "title": "T",
            "content": "C",
            "groupIds": ["G1"],
            "coediting": False,
        }


def test_create_note_survives_failed_introspection() -> None:
    """A failed schema fetch falls back to the default and still creates."""
    server = _Server({"errors": [{"message": "denied"}]}, CREATED)
    client = _client(server, CreateNoteSchemaOptions(disable_introspection=False))
    result = client.create_note(CreateNoteRequest(title="T", content="C", group_ids=("G1",)))
    assert result.note.id == "N1"


def test_get_note() -> None:
    """Notes are fetched through the trusted getNote operation."""
    server = _Server({"data": {"note": {"id": "N1", "title": "T", "content": "C"}}})
    note = _client(server).get_note(" N1 ")
    assert (note.id, note.title, note.content) == ("N1", "T", "C")
    assert server.requests[0]["variables"] == {"id": "N1"}


def test_get_note_missing_payload() -> None:
    """A response without the note is a transport error."""
    server = _Server({"data": {"note": None}})
    with pytest.raises(TransportError, match="/data/note"):
        _client(server).get_note("N1")


def test_update_note() -> None:
    """Content updates send the base and new content."""
    server = _Server({"data": {"updateNoteContent": {"note": {"id": "N1", "content": "new"}}}})
    note = _client(server).update_note(
        UpdateNoteRequest(id="N1", base_content="old", new_content="new")
    )
    assert note.content == "new"
    assert server.requests[0]["variables"] == {
        "input": {"id": "N1", "baseContent": "old", "newContent": "new"}
    }


@pytest.mark.parametrize(
    ("request_kwargs", "message"),
    [
        ({"title": " ", "content": "C", "group_ids": ("G1",)}, "title is required"),
        ({"title": "T", "content": "", "group_ids": ("G1",)}, "content is required"),
        ({"title": "T", "content": "C", "group_ids": (" ",)}, "group id"),
        (
            {
                "title": "T",
                "content": "C",
                "group_ids": ("G1",),
                "folders": (FolderRef(group_id="G1", folder_name=" "),),
            },
            "folder requires",
        ),
    ],
)
def test_build_create_note_input_validation(request_kwargs: dict, message: str) -> None:
    """Blank required inputs are rejected before any request is sent."""
    with pytest.raises(InputInvalidError, match=message):
        build_create_note_input(CreateNoteRequest(**request_kwargs), CreateNoteSchema.default())


def test_build_create_note_input_skips_unsupported_fields() -> None:
    """Optional fields are sent only when the schema accepts them."""
    schema = CreateNoteSchema.from_field_names(
        ("title", "content", "groupIds", "coediting", "draft"), ("note",), ("id",)
    )
    assert schema is not None
    values = build_create_note_input(
        CreateNoteRequest(
            title="T",
            content="C",
            group_ids=("G1",),
            coediting=True,
            draft=False,
            author_id="U1",
            published_at="2026-01-01T00:00:00Z",
        ),
        schema,
    )
    assert values == {
        "title": "T",
        "content": "C",
        "groupIds": ["G1"],
        "coediting": True,
        "draft": False,
    }
