"""Read and write contract artifacts on disk."""

from __future__ import annotations

import logging
from pathlib import Path

import msgspec

from contracts.errors import ArtifactIOError, InputInvalidError
from utils.file_io import read_json, read_text, write_json, write_text

logger = logging.getLogger(__name__)


def load_json_artifact(path: Path) -> object:
    """Read a JSON artifact.

    Returns
    -------
    object
        Decoded JSON payload.

    Raises
    ------
    ArtifactIOError
        Raised when the file cannot be read.
    InputInvalidError
        Raised when the file is not valid JSON.
    """
    try:
        return read_json(path)
    except OSError as exc:
        msg = f"failed to read {path}: {exc}"
        raise ArtifactIOError(msg) from exc
    except msgspec.DecodeError as exc:
        msg = f"failed to parse {path}: {exc}"
        raise InputInvalidError(msg) from exc


def store_json_artifact(path: Path, payload: object) -> None:
    """Write a pretty-printed JSON artifact.

    Raises
    ------
    ArtifactIOError
        Raised when the file cannot be written.
    """
    try:
        write_json(path, payload)
    except OSError as exc:
        msg = f"failed to write {path}: {exc}"
        raise ArtifactIOError(msg) from exc
    logger.info("Wrote %s", path)


def load_text_artifact(path: Path) -> str:
    """Read a generated text artifact.

    Returns
    -------
    str
        File contents.

    Raises
    ------
    ArtifactIOError
        Raised when the file cannot be read.
    """
    try:
        return read_text(path)
    except OSError as exc:
        msg = f"failed to read {path}: {exc}"
        raise ArtifactIOError(msg) from exc


def store_text_artifact(path: Path, content: str) -> None:
    """Write a generated text artifact.

    Raises
    ------
    ArtifactIOError
        Raised when the file cannot be written.
    """
    try:
        write_text(path, content)
    except OSError as exc:
        msg = f"failed to write {path}: {exc}"
        raise ArtifactIOError(msg) from exc
    logger.info("Wrote %s", path)


def repo_relative(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` in POSIX form.

    Returns
    -------
    str
        Relative path string.

    Raises
    ------
    InputInvalidError
        Raised when ``path`` is outside ``root``.
    """
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError as exc:
        msg = f"{path} is not in repository root {root}"
        raise InputInvalidError(msg) from exc


__all__ = [
    "load_json_artifact",
    "load_text_artifact",
    "repo_relative",
    "store_json_artifact",
    "store_text_artifact",
]
