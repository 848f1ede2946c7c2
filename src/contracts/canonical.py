"""Canonical form shared by every resource contract snapshot consumer.

Built, persisted, re-loaded, diffed and rendered snapshots all pass through
``canonicalize_snapshot`` first. Two snapshots are equal when their canonical
forms compare equal, regardless of formatting or field order on disk.
"""

from __future__ import annotations

import msgspec

from contracts.errors import InputInvalidError, RequiredVariableNotDeclaredError
from contracts.models import ContractSource, NormalizedResource, ResourceContractSnapshot
from contracts.normalizer import normalize_string_list
from core_types import is_resource_kind
from serde_msgspec import convert, validation_error_message


def canonicalize_resource(resource: NormalizedResource) -> NormalizedResource:
    """Return the canonical form of a single contract resource.

    Parameters
    ----------
    resource
        Resource as built or decoded.

    Returns
    -------
    NormalizedResource
        Resource with trimmed strings and normalized variable lists.

    Raises
    ------
    InputInvalidError
        Raised for an empty name or an unknown kind.
    RequiredVariableNotDeclaredError
        Raised when required variables are not listed in ``all_variables``.
    """
    name = resource.name.strip()
    if not name:
        msg = "contract resource has empty name"
        raise InputInvalidError(msg)
    kind = resource.kind.strip()
    if not is_resource_kind(kind):
        msg = f"resource `{name}` has invalid kind: {kind}"
        raise InputInvalidError(msg)
    all_variables = normalize_string_list(resource.all_variables)
    required_variables = normalize_string_list(resource.required_variables)
    declared = set(all_variables)
    missing = [value for value in required_variables if value not in declared]
    if missing:
        raise RequiredVariableNotDeclaredError(name, missing)
    return NormalizedResource(
        name=name,
        kind=kind,
        operation=resource.operation.strip(),
        all_variables=all_variables,
        required_variables=required_variables,
        graphql_file=resource.graphql_file.strip(),
        client_method=resource.client_method.strip(),
    )


def _canonical_source(source: ContractSource) -> ContractSource:
    return ContractSource(
        mode=source.mode.strip(),
        endpoint_snapshot=source.endpoint_snapshot.strip(),
        captured_at=source.captured_at.strip(),
        origin=source.origin.strip(),
        endpoint=source.endpoint.strip(),
        upstream_commit=source.upstream_commit.strip(),
    )


def canonicalize_snapshot(snapshot: ResourceContractSnapshot) -> ResourceContractSnapshot:
    """Return the canonical form of a resource contract snapshot.

    Canonicalizing a canonical snapshot returns an equal snapshot.

    Parameters
    ----------
    snapshot
        Snapshot to canonicalize.

    Returns
    -------
    ResourceContractSnapshot
        Snapshot with resources sorted by name.

    Raises
    ------
    InputInvalidError
        Raised for an empty resource list, duplicate names or a non-positive
        version.
    """
    if snapshot.schema_contract_version <= 0:
        msg = "`schema_contract_version` must be a positive integer"
        raise InputInvalidError(msg)
    if not snapshot.resources:
        msg = "snapshot must contain at least one resource"
        raise InputInvalidError(msg)
    resources = [canonicalize_resource(resource) for resource in snapshot.resources]
    seen: set[str] = set()
    for resource in resources:
        if resource.name in seen:
            msg = f"duplicate resource name in snapshot: {resource.name}"
            raise InputInvalidError(msg)
        seen.add(resource.name)
    resources.sort(key=lambda resource: resource.name)
    return ResourceContractSnapshot(
        schema_contract_version=snapshot.schema_contract_version,
        captured_at=snapshot.captured_at.strip(),
        source=_canonical_source(snapshot.source),
        resources=tuple(resources),
    )


def load_contract_snapshot(payload: object) -> ResourceContractSnapshot:
    """Decode a persisted contract snapshot and canonicalize it.

    Parameters
    ----------
    payload
        Decoded JSON object of the snapshot file.

    Returns
    -------
    ResourceContractSnapshot
        Canonical snapshot.

    Raises
    ------
    InputInvalidError
        Raised when the payload does not match the snapshot shape.
    """
    try:
        snapshot = convert(payload, target_type=ResourceContractSnapshot)
    except msgspec.ValidationError as exc:
        msg = validation_error_message(exc, context="resource contract snapshot is invalid")
        raise InputInvalidError(msg) from exc
    return canonicalize_snapshot(snapshot)


def snapshots_equal(left: ResourceContractSnapshot, right: ResourceContractSnapshot) -> bool:
    """Return True when two snapshots share a canonical form.

    Returns
    -------
    bool
        Canonical equality.
    """
    return canonicalize_snapshot(left) == canonicalize_snapshot(right)


__all__ = [
    "canonicalize_resource",
    "canonicalize_snapshot",
    "load_contract_snapshot",
    "snapshots_equal",
]
