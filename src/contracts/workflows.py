"""Check, write and refresh workflows behind the ``kibel-tools`` commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from contracts.artifacts import (
    load_json_artifact,
    load_text_artifact,
    repo_relative,
    store_json_artifact,
    store_text_artifact,
)
from contracts.builder import build_contract_snapshot
from contracts.canonical import load_contract_snapshot
from contracts.codegen import (
    CREATE_NOTE_CONTRACT_WRITE_COMMAND,
    RESOURCE_CONTRACT_WRITE_COMMAND,
    render_create_note_contract_module,
    render_resource_contract_module,
)
from contracts.create_note import build_create_note_snapshot, load_create_note_snapshot
from contracts.diff import compute_contract_diff
from contracts.errors import StaleArtifactError
from contracts.introspection import EndpointIntrospector
from contracts.models import (
    ContractDiffResult,
    CreateNoteContractSnapshot,
    EndpointSnapshot,
    ResourceContractSnapshot,
)
from contracts.normalizer import load_endpoint_snapshot, normalize_endpoint_snapshot

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT_SNAPSHOT = "schema/introspection/resource_contracts.endpoint.snapshot.json"
DEFAULT_CONTRACT_SNAPSHOT = "schema/resource_contracts.snapshot.json"
DEFAULT_CONTRACT_MODULE = "src/kibel_client/generated/resource_contracts.py"
DEFAULT_CREATE_NOTE_SNAPSHOT = "schema/create_note_contract.snapshot.json"
DEFAULT_CREATE_NOTE_MODULE = "src/kibel_client/generated/create_note_contract.py"


@dataclass(frozen=True)
class ContractPaths:
    """Resolved artifact locations for one repository checkout."""

    root: Path
    endpoint_snapshot: Path
    contract_snapshot: Path
    contract_module: Path
    create_note_snapshot: Path
    create_note_module: Path

    @classmethod
    def under(
        cls,
        root: Path,
        *,
        endpoint_snapshot: str = DEFAULT_ENDPOINT_SNAPSHOT,
        contract_snapshot: str = DEFAULT_CONTRACT_SNAPSHOT,
        contract_module: str = DEFAULT_CONTRACT_MODULE,
        create_note_snapshot: str = DEFAULT_CREATE_NOTE_SNAPSHOT,
        create_note_module: str = DEFAULT_CREATE_NOTE_MODULE,
    ) -> ContractPaths:
        """Resolve artifact paths relative to ``root``.

        Absolute paths are kept as given.

        Returns
        -------
        ContractPaths
            Resolved paths.
        """
        return cls(
            root=root,
            endpoint_snapshot=root / endpoint_snapshot,
            contract_snapshot=root / contract_snapshot,
            contract_module=root / contract_module,
            create_note_snapshot=root / create_note_snapshot,
            create_note_module=root / create_note_module,
        )


def now_rfc3339() -> str:
    """Return the current UTC time in RFC 3339 form with second precision."""
    return datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def _expected_contract_snapshot(paths: ContractPaths) -> ResourceContractSnapshot:
    endpoint_snapshot = load_endpoint_snapshot(load_json_artifact(paths.endpoint_snapshot))
    return build_contract_snapshot(
        endpoint_snapshot,
        endpoint_snapshot_ref=repo_relative(paths.endpoint_snapshot, paths.root),
    )


def check_resource_contract(paths: ContractPaths) -> ResourceContractSnapshot:
    """Verify the contract snapshot and generated module are up to date.

    Parameters
    ----------
    paths
        Artifact locations.

    Returns
    -------
    ResourceContractSnapshot
        The persisted, canonical snapshot.

    Raises
    ------
    StaleArtifactError
        Raised when the snapshot differs canonically from the one built from
        the endpoint snapshot, or the module differs from a fresh render.
    """
    expected = _expected_contract_snapshot(paths)
    actual = load_contract_snapshot(load_json_artifact(paths.contract_snapshot))
    if actual != expected:
        raise StaleArtifactError("resource snapshot", RESOURCE_CONTRACT_WRITE_COMMAND)
    rendered = render_resource_contract_module(actual)
    if load_text_artifact(paths.contract_module) != rendered:
        raise StaleArtifactError(
            "generated resource contract module", RESOURCE_CONTRACT_WRITE_COMMAND
        )
    return actual


def write_resource_contract(paths: ContractPaths) -> ResourceContractSnapshot:
    """Write the contract snapshot, then render the module from the written file.

    Returns
    -------
    ResourceContractSnapshot
        Snapshot as re-read from disk.
    """
    snapshot = _expected_contract_snapshot(paths)
    store_json_artifact(paths.contract_snapshot, snapshot)
    persisted = load_contract_snapshot(load_json_artifact(paths.contract_snapshot))
    store_text_artifact(paths.contract_module, render_resource_contract_module(persisted))
    return persisted


def refresh_endpoint_snapshot(
    paths: ContractPaths,
    introspector: EndpointIntrospector,
    *,
    origin: str,
    endpoint: str,
    captured_at: str | None = None,
) -> EndpointSnapshot:
    """Introspect the live endpoint and persist a fresh endpoint snapshot.

    Parameters
    ----------
    paths
        Artifact locations.
    introspector
        Introspector bound to the live endpoint.
    origin
        Service origin recorded in the snapshot.
    endpoint
        GraphQL endpoint recorded in the snapshot.
    captured_at
        Capture timestamp; defaults to now.

    Returns
    -------
    EndpointSnapshot
        Snapshot that was written.
    """
    payload = introspector.fetch_endpoint_schema()
    snapshot = normalize_endpoint_snapshot(
        payload,
        origin=origin,
        endpoint=endpoint,
        captured_at=captured_at or now_rfc3339(),
    )
    store_json_artifact(paths.endpoint_snapshot, snapshot)
    return snapshot


def diff_resource_contracts(base: Path, target: Path) -> ContractDiffResult:
    """Diff two contract snapshot files.

    Returns
    -------
    ContractDiffResult
        Breaking changes and notes.
    """
    return compute_contract_diff(
        load_contract_snapshot(load_json_artifact(base)),
        load_contract_snapshot(load_json_artifact(target)),
    )


def check_create_note_contract(paths: ContractPaths) -> CreateNoteContractSnapshot:
    """Verify the generated create-note module matches its snapshot.

    Raises
    ------
    StaleArtifactError
        Raised when the module differs from a fresh render.
    """
    snapshot = load_create_note_snapshot(load_json_artifact(paths.create_note_snapshot))
    rendered = render_create_note_contract_module(snapshot)
    if load_text_artifact(paths.create_note_module) != rendered:
        raise StaleArtifactError("generated file", CREATE_NOTE_CONTRACT_WRITE_COMMAND)
    return snapshot


def write_create_note_contract(paths: ContractPaths) -> CreateNoteContractSnapshot:
    """Render the create-note module from the persisted snapshot.

    Returns
    -------
    CreateNoteContractSnapshot
        Snapshot the module was rendered from.
    """
    snapshot = load_create_note_snapshot(load_json_artifact(paths.create_note_snapshot))
    store_text_artifact(paths.create_note_module, render_create_note_contract_module(snapshot))
    return snapshot


def refresh_create_note_snapshot(
    paths: ContractPaths,
    introspector: EndpointIntrospector,
    *,
    origin: str,
    endpoint: str,
    captured_at: str | None = None,
) -> CreateNoteContractSnapshot:
    """Introspect the create-note types and persist a fresh snapshot.

    Returns
    -------
    CreateNoteContractSnapshot
        Snapshot that was written.
    """
    snapshot = build_create_note_snapshot(
        introspector.fetch_create_note_schema(),
        origin=origin,
        endpoint=endpoint,
        captured_at=captured_at or now_rfc3339(),
    )
    store_json_artifact(paths.create_note_snapshot, snapshot)
    return snapshot


__all__ = [
    "DEFAULT_CONTRACT_MODULE",
    "DEFAULT_CONTRACT_SNAPSHOT",
    "DEFAULT_CREATE_NOTE_MODULE",
    "DEFAULT_CREATE_NOTE_SNAPSHOT",
    "DEFAULT_ENDPOINT_SNAPSHOT",
    "ContractPaths",
    "check_create_note_contract",
    "check_resource_contract",
    "diff_resource_contracts",
    "now_rfc3339",
    "refresh_create_note_snapshot",
    "refresh_endpoint_snapshot",
    "write_create_note_contract",
    "write_resource_contract",
]
