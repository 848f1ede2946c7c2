"""Create-note field contract: load, validate and build from introspection."""

from __future__ import annotations

from typing import Final

import msgspec

from contracts.errors import InputInvalidError
from contracts.introspection import collect_name_list
from contracts.models import (
    CREATE_NOTE_CONTRACT_FORMAT_VERSION,
    CreateNoteContractSnapshot,
    CreateNoteContractSource,
)
from contracts.normalizer import normalize_string_list
from serde_msgspec import convert, mapping_at, validation_error_message

REQUIRED_CREATE_NOTE_INPUT_FIELDS: Final[tuple[str, ...]] = (
    "title",
    "content",
    "groupIds",
    "coediting",
)
REQUIRED_CREATE_NOTE_PAYLOAD_FIELDS: Final[tuple[str, ...]] = ("note",)
REQUIRED_NOTE_PROJECTION_FIELD: Final[str] = "id"


def _check_required(
    snapshot: CreateNoteContractSnapshot,
) -> None:
    input_fields = set(snapshot.create_note_input_fields)
    missing_input = [
        field for field in snapshot.required_input_fields if field not in input_fields
    ]
    if missing_input:
        msg = f"missing required input fields: {', '.join(missing_input)}"
        raise InputInvalidError(msg)
    payload_fields = set(snapshot.create_note_payload_fields)
    missing_payload = [
        field for field in snapshot.required_payload_fields if field not in payload_fields
    ]
    if missing_payload:
        msg = f"missing required payload fields: {', '.join(missing_payload)}"
        raise InputInvalidError(msg)
    if REQUIRED_NOTE_PROJECTION_FIELD not in snapshot.create_note_note_projection_fields:
        msg = "create_note_note_projection_fields must include `id`"
        raise InputInvalidError(msg)


def canonicalize_create_note_snapshot(
    snapshot: CreateNoteContractSnapshot,
) -> CreateNoteContractSnapshot:
    """Normalize field lists and validate required fields.

    Returns
    -------
    CreateNoteContractSnapshot
        Snapshot with trimmed, de-duplicated field lists.

    Raises
    ------
    InputInvalidError
        Raised when a required field is not listed.
    """
    canonical = msgspec.structs.replace(
        snapshot,
        create_note_input_fields=normalize_string_list(snapshot.create_note_input_fields),
        create_note_payload_fields=normalize_string_list(snapshot.create_note_payload_fields),
        create_note_note_projection_fields=normalize_string_list(
            snapshot.create_note_note_projection_fields
        ),
        required_input_fields=normalize_string_list(snapshot.required_input_fields),
        required_payload_fields=normalize_string_list(snapshot.required_payload_fields),
    )
    _check_required(canonical)
    return canonical


def load_create_note_snapshot(payload: object) -> CreateNoteContractSnapshot:
    """Decode and validate a persisted create-note contract snapshot.

    Parameters
    ----------
    payload
        Decoded JSON object of the snapshot file.

    Returns
    -------
    CreateNoteContractSnapshot
        Canonical snapshot.

    Raises
    ------
    InputInvalidError
        Raised when the payload is malformed or lacks required fields.
    """
    try:
        snapshot = convert(payload, target_type=CreateNoteContractSnapshot)
    except msgspec.ValidationError as exc:
        msg = validation_error_message(exc, context="create note snapshot is invalid")
        raise InputInvalidError(msg) from exc
    return canonicalize_create_note_snapshot(snapshot)


def build_create_note_snapshot(
    payload: object,
    *,
    origin: str,
    endpoint: str,
    captured_at: str,
) -> CreateNoteContractSnapshot:
    """Build a create-note contract snapshot from a live introspection response.

    Parameters
    ----------
    payload
        Response to ``CREATE_NOTE_SCHEMA_QUERY``.
    origin
        Service origin.
    endpoint
        GraphQL endpoint the response came from.
    captured_at
        RFC 3339 capture timestamp.

    Returns
    -------
    CreateNoteContractSnapshot
        Snapshot carrying the live field lists and the fixed required sets.

    Raises
    ------
    InputInvalidError
        Raised when a type is missing or lacks required fields.
    """
    lists: list[tuple[str, ...]] = []
    for alias, key in (
        ("createNoteInput", "inputFields"),
        ("createNotePayload", "fields"),
        ("noteType", "fields"),
    ):
        value = mapping_at(payload, "data", alias, key)
        if value is None:
            msg = f"missing /data/{alias}/{key}"
            raise InputInvalidError(msg)
        lists.append(collect_name_list(value, context=f"{alias}.{key}"))
    input_fields, payload_fields, note_fields = lists
    snapshot = CreateNoteContractSnapshot(
        schema_contract_version=CREATE_NOTE_CONTRACT_FORMAT_VERSION,
        captured_at=captured_at,
        source=CreateNoteContractSource(
            origin=origin,
            artifact=f"live-introspection:{endpoint}",
        ),
        create_note_input_fields=input_fields,
        create_note_payload_fields=payload_fields,
        create_note_note_projection_fields=note_fields,
        required_input_fields=REQUIRED_CREATE_NOTE_INPUT_FIELDS,
        required_payload_fields=REQUIRED_CREATE_NOTE_PAYLOAD_FIELDS,
    )
    _check_required(snapshot)
    return snapshot


__all__ = [
    "REQUIRED_CREATE_NOTE_INPUT_FIELDS",
    "REQUIRED_CREATE_NOTE_PAYLOAD_FIELDS",
    "REQUIRED_NOTE_PROJECTION_FIELD",
    "build_create_note_snapshot",
    "canonicalize_create_note_snapshot",
    "load_create_note_snapshot",
]
