"""Runtime client for the note service's trusted GraphQL operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Final, Self

import httpx
import msgspec

from core_types import JsonDict
from kibel_client.create_note_schema import (
    CREATE_NOTE_SCHEMA_QUERY,
    AdaptiveCreateNoteSchemaResolver,
    CreateNoteSchema,
    CreateNoteSchemaOptions,
)
from kibel_client.errors import InputInvalidError, TransportError
from kibel_client.models import (
    CreateNoteRequest,
    CreateNoteResult,
    FolderRef,
    Note,
    UpdateNoteRequest,
)
from kibel_client.transport import GraphqlTransport, endpoint_from_origin
from kibel_client.trusted import trusted_contract, validate_trusted_request
from runtime_models.client import ClientSettingsRuntime
from serde_msgspec import convert, mapping_at

logger = logging.getLogger(__name__)

QUERY_NOTE_GET: Final[str] = """query GetNote($id: ID!) {
  note(id: $id) {
    id
    title
    content
  }
}
"""

MUTATION_UPDATE_NOTE_CONTENT: Final[str] = """\
mutation UpdateNoteContent($input: UpdateNoteContentInput!) {
  updateNoteContent(input: $input) {
    note {
      id
      title
      content
    }
  }
}
"""


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _required(value: str, message: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise InputInvalidError(message)
    return stripped


def _folder_input(folder: FolderRef) -> dict[str, str]:
    group_id = folder.group_id.strip()
    folder_name = folder.folder_name.strip()
    if not group_id or not folder_name:
        msg = "folder requires non-empty group_id and folder_name"
        raise InputInvalidError(msg)
    return {"groupId": group_id, "folderName": folder_name}


def build_create_note_input(request: CreateNoteRequest, schema: CreateNoteSchema) -> JsonDict:
    """Build the ``CreateNoteInput`` variables supported by ``schema``.

    Parameters
    ----------
    request
        Caller input.
    schema
        Resolved create-note schema.

    Returns
    -------
    JsonDict
        Input object containing only fields the schema accepts.

    Raises
    ------
    InputInvalidError
        Raised when title, content or group ids are blank, or a folder is
        incomplete.
    """
    title = _required(request.title, "title is required")
    content = _required(request.content, "content is required")
    group_ids = [value.strip() for value in request.group_ids if value.strip()]
    if not group_ids:
        msg = "at least one group id is required"
        raise InputInvalidError(msg)

    values: JsonDict = {}
    if schema.supports_input("title"):
        values["title"] = title
    if schema.supports_input("content"):
        values["content"] = content
    if schema.supports_input("groupIds"):
        values["groupIds"] = group_ids
    if schema.supports_input("coediting"):
        values["coediting"] = request.coediting
    if schema.supports_input("draft") and request.draft is not None:
        values["draft"] = request.draft
    if schema.supports_input("folders") and request.folders:
        values["folders"] = [_folder_input(folder) for folder in request.folders]
    optional_strings = (
        ("authorId", request.author_id),
        ("publishedAt", request.published_at),
        ("clientMutationId", request.client_mutation_id),
    )
    for field, raw in optional_strings:
        value = _optional(raw)
        if value is not None and schema.supports_input(field):
            values[field] = value
    return values


def _note_at(payload: object, *path: str) -> Note:
    value = mapping_at(payload, *path)
    pointer = "/" + "/".join(path)
    if not isinstance(value, Mapping):
        msg = f"missing `{pointer}` field in GraphQL response"
        raise TransportError(msg)
    if not isinstance(value.get("id"), str):
        msg = f"missing `id` in `{pointer}`"
        raise TransportError(msg)
    try:
        return convert(
            {key: value[key] for key in ("id", "title", "content", "url") if value.get(key)},
            target_type=Note,
        )
    except msgspec.ValidationError as exc:
        msg = f"invalid note payload: {exc}"
        raise TransportError(msg) from exc


class KibelClient:
    """Client for the trusted operations the CLI issues.

    Parameters
    ----------
    transport
        GraphQL transport bound to the service endpoint.
    schema_options
        Create-note schema resolver configuration.
    """

    def __init__(
        self,
        transport: GraphqlTransport,
        *,
        schema_options: CreateNoteSchemaOptions | None = None,
    ) -> None:
        self._transport = transport
        self._schema_resolver = AdaptiveCreateNoteSchemaResolver(
            self._fetch_create_note_schema,
            schema_options,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettingsRuntime,
        *,
        schema_options: CreateNoteSchemaOptions | None = None,
        http_client: httpx.Client | None = None,
    ) -> Self:
        """Build a client from validated connection settings.

        Resolver options default to ``CreateNoteSchemaOptions.from_env()``.

        Returns
        -------
        Self
            Client bound to ``settings.endpoint`` or the origin's API path.
        """
        if schema_options is None:
            schema_options = CreateNoteSchemaOptions.from_env()
        endpoint = settings.endpoint or endpoint_from_origin(settings.origin)
        transport = GraphqlTransport(
            endpoint,
            settings.token,
            timeout=settings.timeout_secs,
            client=http_client,
        )
        return cls(transport, schema_options=schema_options)

    @property
    def endpoint(self) -> str:
        return self._transport.endpoint

    @property
    def schema_resolver(self) -> AdaptiveCreateNoteSchemaResolver:
        return self._schema_resolver

    def close(self) -> None:
        self._transport.close()

    def _fetch_create_note_schema(self) -> JsonDict:
        return self._transport.execute(CREATE_NOTE_SCHEMA_QUERY, {})

    def _request_trusted(
        self,
        resource: str,
        query: str,
        variables: Mapping[str, object],
    ) -> JsonDict:
        validate_trusted_request(trusted_contract(resource), query, variables)
        logger.debug("Sending trusted operation %s", resource)
        return self._transport.execute(query, variables)

    def get_note(self, note_id: str) -> Note:
        """Fetch a note by id.

        Returns
        -------
        Note
            Note with id, title and content.

        Raises
        ------
        InputInvalidError
            Raised when ``note_id`` is blank.
        """
        note_id = _required(note_id, "note id is required")
        payload = self._request_trusted("getNote", QUERY_NOTE_GET, {"id": note_id})
        return _note_at(payload, "data", "note")

    def create_note(self, request: CreateNoteRequest) -> CreateNoteResult:
        """Create a note, sending only fields the resolved schema accepts.

        Parameters
        ----------
        request
            Caller input.

        Returns
        -------
        CreateNoteResult
            Created note and the echoed client mutation id, if any.
        """
        schema = self._schema_resolver.resolve()
        variables = {"input": build_create_note_input(request, schema)}
        payload = self._request_trusted("createNote", schema.create_note_mutation(), variables)
        note = _note_at(payload, "data", "createNote", "note")
        client_mutation_id = mapping_at(payload, "data", "createNote", "clientMutationId")
        return CreateNoteResult(
            note=note,
            client_mutation_id=client_mutation_id if isinstance(client_mutation_id, str) else None,
        )

    def update_note(self, request: UpdateNoteRequest) -> Note:
        """Replace note content, guarded by the expected current content.

        Returns
        -------
        Note
            Updated note.
        """
        note_id = _required(request.id, "note id is required")
        base_content = _required(request.base_content, "base content is required")
        new_content = _required(request.new_content, "new content is required")
        payload = self._request_trusted(
            "updateNoteContent",
            MUTATION_UPDATE_NOTE_CONTENT,
            {
                "input": {
                    "id": note_id,
                    "baseContent": base_content,
                    "newContent": new_content,
                }
            },
        )
        return _note_at(payload, "data", "updateNoteContent", "note")


__all__ = ["KibelClient", "build_create_note_input"]
