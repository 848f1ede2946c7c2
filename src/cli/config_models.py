"""Typed configuration models for kibel-tools."""

from __future__ import annotations

import msgspec

from contracts.workflows import (
    DEFAULT_CONTRACT_MODULE,
    DEFAULT_CONTRACT_SNAPSHOT,
    DEFAULT_CREATE_NOTE_MODULE,
    DEFAULT_CREATE_NOTE_SNAPSHOT,
    DEFAULT_ENDPOINT_SNAPSHOT,
)
from serde_msgspec import StructBaseStrict


class ArtifactPathsConfig(StructBaseStrict, frozen=True):
    """Artifact locations relative to the repository root."""

    endpoint_snapshot: str = msgspec.field(
        default=DEFAULT_ENDPOINT_SNAPSHOT,
        name="endpoint-snapshot",
    )
    contract_snapshot: str = msgspec.field(
        default=DEFAULT_CONTRACT_SNAPSHOT,
        name="contract-snapshot",
    )
    contract_module: str = msgspec.field(
        default=DEFAULT_CONTRACT_MODULE,
        name="contract-module",
    )
    create_note_snapshot: str = msgspec.field(
        default=DEFAULT_CREATE_NOTE_SNAPSHOT,
        name="create-note-snapshot",
    )
    create_note_module: str = msgspec.field(
        default=DEFAULT_CREATE_NOTE_MODULE,
        name="create-note-module",
    )


class ConnectionConfig(StructBaseStrict, frozen=True):
    """Defaults for commands that talk to a live endpoint.

    Tokens are never read from config files.
    """

    origin: str | None = None
    endpoint: str | None = None
    timeout_secs: float | None = msgspec.field(default=None, name="timeout-secs")


class ToolsConfigSpec(StructBaseStrict, frozen=True):
    """Root configuration model for kibel-tools."""

    paths: ArtifactPathsConfig = msgspec.field(default_factory=ArtifactPathsConfig)
    connection: ConnectionConfig = msgspec.field(default_factory=ConnectionConfig)


__all__ = ["ArtifactPathsConfig", "ConnectionConfig", "ToolsConfigSpec"]
