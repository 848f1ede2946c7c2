"""Small snapshot factories for contract tests."""

from __future__ import annotations

from collections.abc import Sequence

from contracts.models import (
    ENDPOINT_SNAPSHOT_MODE,
    ContractSource,
    EndpointResource,
    EndpointSnapshot,
    NormalizedResource,
    ResourceContractSnapshot,
)


def resource(
    name: str,
    *,
    kind: str = "query",
    field: str | None = None,
    all_variables: Sequence[str] = (),
    required_variables: Sequence[str] = (),
) -> NormalizedResource:
    root = field or name
    return NormalizedResource(
        name=name,
        kind=kind,
        operation=name[:1].upper() + name[1:],
        all_variables=tuple(all_variables),
        required_variables=tuple(required_variables),
        graphql_file=f"endpoint:{kind}.{root}",
        client_method=name.lower(),
    )


def contract(*resources: NormalizedResource, version: int = 1) -> ResourceContractSnapshot:
    return ResourceContractSnapshot(
        schema_contract_version=version,
        captured_at="2026-02-24T00:00:00Z",
        source=ContractSource(
            mode=ENDPOINT_SNAPSHOT_MODE,
            endpoint_snapshot="schema/introspection/resource_contracts.endpoint.snapshot.json",
            captured_at="2026-02-24T00:00:00Z",
            origin="https://example.kibe.la",
            endpoint="https://example.kibe.la/api/v1",
        ),
        resources=tuple(resources),
    )


def endpoint_resource(
    name: str,
    *,
    kind: str = "query",
    field: str | None = None,
    all_variables: Sequence[str] = (),
    required_variables: Sequence[str] = (),
) -> EndpointResource:
    return EndpointResource(
        name=name,
        kind=kind,
        field=field or name,
        operation=name[:1].upper() + name[1:],
        client_method=name.lower(),
        all_variables=tuple(all_variables),
        required_variables=tuple(required_variables),
    )


def endpoint(*resources: EndpointResource) -> EndpointSnapshot:
    return EndpointSnapshot(
        captured_at="2026-02-24T00:00:00Z",
        origin="https://example.kibe.la",
        endpoint="https://example.kibe.la/api/v1",
        resources=tuple(resources),
    )
