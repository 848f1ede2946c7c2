"""msgspec struct bases and JSON helpers shared by contracts, client and CLI."""

from __future__ import annotations

import re
from collections.abc import Mapping

import msgspec

# Artifacts keep struct field order; pretty output is what gets committed.
_ARTIFACT_INDENT = 2

_VALIDATION_RE = re.compile(r"^(?P<summary>.*?)(?:\s+-\s+at\s+`(?P<path>[^`]+)`)?$")


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=False,
    forbid_unknown_fields=True,
):
    """Base struct for contract models that reject unknown keys."""


class StructBaseCompat(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=False,
    forbid_unknown_fields=False,
):
    """Base struct for persisted snapshots that tolerate extra keys."""


JSON_ENCODER = msgspec.json.Encoder(order="deterministic")


def dumps_json(obj: object, *, pretty: bool = False) -> bytes:
    """Encode ``obj`` as JSON.

    Parameters
    ----------
    obj
        Struct, mapping or builtin value.
    pretty
        Indent with two spaces, as committed artifacts are.

    Returns
    -------
    bytes
        Encoded payload without a trailing newline.
    """
    raw = JSON_ENCODER.encode(obj)
    return msgspec.json.format(raw, indent=_ARTIFACT_INDENT) if pretty else raw


def decode_json(buf: bytes | str) -> object:
    """Decode a JSON document into builtin values.

    Raises
    ------
    msgspec.DecodeError
        Raised when ``buf`` is not valid JSON.
    """
    return msgspec.json.decode(buf)


def convert[T](obj: object, *, target_type: type[T], strict: bool = True) -> T:
    """Convert decoded JSON into ``target_type``.

    Returns
    -------
    T
        Converted value.

    Raises
    ------
    msgspec.ValidationError
        Raised when ``obj`` does not match ``target_type``.
    """
    return msgspec.convert(obj, type=target_type, strict=strict)


def validation_error_payload(exc: msgspec.ValidationError) -> dict[str, str]:
    """Split a msgspec validation message into its summary and location.

    msgspec reports errors as ``"<summary> - at `$.path`"``.

    Parameters
    ----------
    exc
        Error raised by ``convert``.

    Returns
    -------
    dict[str, str]
        ``summary`` and, when present, ``path``.
    """
    message = str(exc).strip()
    match = _VALIDATION_RE.match(message)
    if match is None:
        return {"summary": message}
    payload = {"summary": (match.group("summary") or message).strip()}
    if match.group("path"):
        payload["path"] = match.group("path")
    return payload


def validation_error_message(exc: msgspec.ValidationError, *, context: str) -> str:
    """Return ``"<context>: <summary> (at <path>)"`` for a validation error."""
    details = validation_error_payload(exc)
    msg = f"{context}: {details['summary']}"
    if "path" in details:
        msg = f"{msg} (at {details['path']})"
    return msg


def mapping_at(payload: object, *path: str) -> object | None:
    """Walk nested mappings by key and return the value at the end of the path.

    Parameters
    ----------
    payload
        Decoded JSON payload.
    *path
        Keys to follow.

    Returns
    -------
    object | None
        Value at the path, or None when any step is missing or not a mapping.
    """
    current: object = payload
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
        if current is None:
            return None
    return current


__all__ = [
    "JSON_ENCODER",
    "StructBaseCompat",
    "StructBaseStrict",
    "convert",
    "decode_json",
    "dumps_json",
    "mapping_at",
    "validation_error_message",
    "validation_error_payload",
]
