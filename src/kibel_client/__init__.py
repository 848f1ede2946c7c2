"""Runtime GraphQL client for the note service."""

from kibel_client.client import KibelClient
from kibel_client.create_note_schema import (
    AdaptiveCreateNoteSchemaResolver,
    CreateNoteSchema,
    CreateNoteSchemaOptions,
    ResolutionSource,
)
from kibel_client.errors import ApiError, InputInvalidError, KibelClientError, TransportError
from kibel_client.models import (
    CreateNoteRequest,
    CreateNoteResult,
    FolderRef,
    Note,
    UpdateNoteRequest,
)
from kibel_client.transport import GraphqlTransport, endpoint_from_origin

__all__ = [
    "AdaptiveCreateNoteSchemaResolver",
    "ApiError",
    "CreateNoteRequest",
    "CreateNoteResult",
    "CreateNoteSchema",
    "CreateNoteSchemaOptions",
    "FolderRef",
    "GraphqlTransport",
    "InputInvalidError",
    "KibelClient",
    "KibelClientError",
    "Note",
    "ResolutionSource",
    "TransportError",
    "UpdateNoteRequest",
    "endpoint_from_origin",
]
