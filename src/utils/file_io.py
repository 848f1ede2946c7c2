"""UTF-8 file helpers for committed artifacts and config files."""

from __future__ import annotations

from pathlib import Path

import msgspec

from serde_msgspec import decode_json, dumps_json


def read_text(path: Path) -> str:
    """Return the UTF-8 contents of ``path``."""
    return path.read_text(encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    """Write ``content`` with LF line endings, creating parent directories.

    Generated modules are compared byte-for-byte, so newline translation is
    turned off on every platform.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="\n")


def read_json(path: Path) -> object:
    """Decode the JSON document stored at ``path``.

    Raises
    ------
    msgspec.DecodeError
        Raised when the file is not valid JSON.
    """
    return decode_json(path.read_bytes())


def write_json(path: Path, payload: object) -> None:
    """Write ``payload`` as two-space indented JSON ending in a newline."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(dumps_json(payload, pretty=True) + b"\n")


def read_toml(path: Path) -> dict[str, object]:
    """Read a TOML document.

    Parameters
    ----------
    path
        ``kibel-tools.toml`` or ``pyproject.toml``.

    Returns
    -------
    dict[str, object]
        Top-level table.

    Raises
    ------
    TypeError
        Raised when the document does not decode to a table.
    """
    payload = msgspec.toml.decode(path.read_bytes())
    if not isinstance(payload, dict):
        msg = f"Expected a TOML table in {path}, got {type(payload).__name__}."
        raise TypeError(msg)
    return payload


__all__ = ["read_json", "read_text", "read_toml", "write_json", "write_text"]
