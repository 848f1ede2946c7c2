"""Normalize a raw introspection response into an endpoint snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import msgspec

from contracts.definitions import RESOURCE_DEFINITIONS, ResourceDefinition, definition_names
from contracts.errors import (
    InputInvalidError,
    RequiredVariableNotDeclaredError,
    SchemaFieldMissingError,
    UnexpectedResourceError,
)
from contracts.introspection import parse_root_fields
from contracts.models import EndpointResource, EndpointSnapshot, GraphqlFieldSpec
from core_types import is_resource_kind
from serde_msgspec import convert, validation_error_message

logger = logging.getLogger(__name__)


def normalize_string_list(values: Iterable[str]) -> tuple[str, ...]:
    """Trim entries and drop blanks and duplicates, keeping first-seen order.

    Returns
    -------
    tuple[str, ...]
        Normalized names.
    """
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        normalized = value.strip()
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        result.append(normalized)
    return tuple(result)


def _variables_for(field: GraphqlFieldSpec) -> tuple[tuple[str, ...], tuple[str, ...]]:
    seen: set[str] = set()
    all_variables: list[str] = []
    required: list[str] = []
    for arg in field.args:
        if arg.name in seen:
            continue
        seen.add(arg.name)
        all_variables.append(arg.name)
        if arg.required:
            required.append(arg.name)
    return tuple(all_variables), tuple(required)


def normalize_endpoint_snapshot(
    payload: object,
    *,
    origin: str,
    endpoint: str,
    captured_at: str,
    definitions: tuple[ResourceDefinition, ...] = RESOURCE_DEFINITIONS,
) -> EndpointSnapshot:
    """Build an endpoint snapshot from a root-field introspection response.

    Variable order mirrors the order the server lists arguments in. It is
    recorded as-is and carries no meaning of its own.

    Parameters
    ----------
    payload
        Introspection response from ``EndpointIntrospector.fetch_endpoint_schema``.
    origin
        Service origin the response was fetched from.
    endpoint
        GraphQL endpoint URL.
    captured_at
        RFC 3339 capture timestamp.
    definitions
        Static resource table to resolve.

    Returns
    -------
    EndpointSnapshot
        One resource per definition, in definition order.

    Raises
    ------
    SchemaFieldMissingError
        Raised when a definition's root field is absent from the schema.
    """
    root_fields = {
        "query": parse_root_fields(payload, "query"),
        "mutation": parse_root_fields(payload, "mutation"),
    }
    resources: list[EndpointResource] = []
    for definition in definitions:
        field = root_fields[definition.kind].get(definition.field)
        if field is None:
            raise SchemaFieldMissingError(definition.kind, definition.field)
        all_variables, required_variables = _variables_for(field)
        resources.append(
            EndpointResource(
                name=definition.name,
                kind=definition.kind,
                field=definition.field,
                operation=definition.operation,
                client_method=definition.client_method,
                all_variables=all_variables,
                required_variables=required_variables,
            )
        )
    logger.debug("Normalized %d endpoint resources from introspection", len(resources))
    return EndpointSnapshot(
        captured_at=captured_at,
        origin=origin,
        endpoint=endpoint,
        resources=tuple(resources),
    )


def load_endpoint_snapshot(
    payload: object,
    *,
    definitions: tuple[ResourceDefinition, ...] = RESOURCE_DEFINITIONS,
) -> EndpointSnapshot:
    """Decode and validate a persisted endpoint snapshot.

    Parameters
    ----------
    payload
        Decoded JSON object of the endpoint snapshot file.
    definitions
        Static resource table the snapshot must match.

    Returns
    -------
    EndpointSnapshot
        Snapshot with trimmed strings and normalized variable lists.

    Raises
    ------
    InputInvalidError
        Raised when the payload is malformed.
    UnexpectedResourceError
        Raised when the snapshot names resources outside the static table.
    """
    try:
        raw = convert(payload, target_type=EndpointSnapshot)
    except msgspec.ValidationError as exc:
        msg = validation_error_message(exc, context="endpoint snapshot is invalid")
        raise InputInvalidError(msg) from exc

    seen: set[str] = set()
    resources: list[EndpointResource] = []
    for index, item in enumerate(raw.resources):
        resource = _normalize_endpoint_resource(item, index)
        if resource.name in seen:
            msg = f"duplicate resource name in endpoint snapshot: {resource.name}"
            raise InputInvalidError(msg)
        seen.add(resource.name)
        resources.append(resource)

    known = definition_names(definitions)
    unexpected = [name for name in seen if name not in known]
    if unexpected:
        raise UnexpectedResourceError(sorted(unexpected))

    return msgspec.structs.replace(
        raw,
        captured_at=raw.captured_at.strip(),
        origin=raw.origin.strip(),
        endpoint=raw.endpoint.strip(),
        resources=tuple(resources),
    )


def _normalize_endpoint_resource(item: EndpointResource, index: int) -> EndpointResource:
    name = item.name.strip()
    if not name:
        msg = f"resources[{index}] has empty name"
        raise InputInvalidError(msg)
    kind = item.kind.strip()
    if not is_resource_kind(kind):
        msg = f"resource `{name}` has invalid kind: {kind}"
        raise InputInvalidError(msg)
    field = item.field.strip()
    operation = item.operation.strip()
    client_method = item.client_method.strip()
    if not (field and operation and client_method):
        msg = f"resource `{name}` must have non-empty field/operation/client_method"
        raise InputInvalidError(msg)
    all_variables = normalize_string_list(item.all_variables)
    required_variables = normalize_string_list(item.required_variables)
    declared = set(all_variables)
    missing = [value for value in required_variables if value not in declared]
    if missing:
        raise RequiredVariableNotDeclaredError(name, missing)
    return EndpointResource(
        name=name,
        kind=kind,
        field=field,
        operation=operation,
        client_method=client_method,
        all_variables=all_variables,
        required_variables=required_variables,
    )


__all__ = [
    "load_endpoint_snapshot",
    "normalize_endpoint_snapshot",
    "normalize_string_list",
]
