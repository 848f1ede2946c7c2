"""Build resource contract snapshots from endpoint snapshots."""

from __future__ import annotations

import logging

from contracts.canonical import canonicalize_snapshot
from contracts.definitions import RESOURCE_DEFINITIONS, ResourceDefinition, definition_names
from contracts.errors import ContractResourceMissingError, UnexpectedResourceError
from contracts.models import (
    ENDPOINT_SNAPSHOT_MODE,
    RESOURCE_CONTRACT_FORMAT_VERSION,
    ContractSource,
    EndpointSnapshot,
    NormalizedResource,
    ResourceContractSnapshot,
)

logger = logging.getLogger(__name__)


def graphql_file_tag(kind: str, field: str) -> str:
    """Return the provenance tag recorded for a resource's root field.

    Returns
    -------
    str
        Tag of the form ``endpoint:<kind>.<field>``.
    """
    return f"endpoint:{kind}.{field}"


def build_contract_snapshot(
    endpoint_snapshot: EndpointSnapshot,
    *,
    endpoint_snapshot_ref: str,
    upstream_commit: str = "",
    definitions: tuple[ResourceDefinition, ...] = RESOURCE_DEFINITIONS,
) -> ResourceContractSnapshot:
    """Build the canonical contract snapshot for an endpoint snapshot.

    Parameters
    ----------
    endpoint_snapshot
        Normalized endpoint snapshot.
    endpoint_snapshot_ref
        Repository-relative path of the endpoint snapshot file.
    upstream_commit
        Optional upstream revision recorded in provenance.
    definitions
        Static resource table.

    Returns
    -------
    ResourceContractSnapshot
        Canonical snapshot with one resource per definition.

    Raises
    ------
    ContractResourceMissingError
        Raised when a definition has no matching endpoint resource.
    UnexpectedResourceError
        Raised when the endpoint snapshot names unknown resources.
    """
    by_name = endpoint_snapshot.resource_map()
    known = definition_names(definitions)
    unexpected = sorted(name for name in by_name if name not in known)
    if unexpected:
        raise UnexpectedResourceError(unexpected)

    resources: list[NormalizedResource] = []
    for definition in definitions:
        item = by_name.get(definition.name)
        if item is None:
            raise ContractResourceMissingError(definition.name)
        resources.append(
            NormalizedResource(
                name=item.name,
                kind=item.kind,
                operation=item.operation,
                all_variables=item.all_variables,
                required_variables=item.required_variables,
                graphql_file=graphql_file_tag(item.kind, item.field),
                client_method=item.client_method,
            )
        )

    snapshot = ResourceContractSnapshot(
        schema_contract_version=RESOURCE_CONTRACT_FORMAT_VERSION,
        captured_at=endpoint_snapshot.captured_at,
        source=ContractSource(
            mode=ENDPOINT_SNAPSHOT_MODE,
            endpoint_snapshot=endpoint_snapshot_ref,
            captured_at=endpoint_snapshot.captured_at,
            origin=endpoint_snapshot.origin,
            endpoint=endpoint_snapshot.endpoint,
            upstream_commit=upstream_commit,
        ),
        resources=tuple(resources),
    )
    logger.debug("Built contract snapshot with %d resources", len(resources))
    return canonicalize_snapshot(snapshot)


__all__ = ["build_contract_snapshot", "graphql_file_tag"]
