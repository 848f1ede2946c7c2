"""Validate trusted operation requests against the generated contract table."""

from __future__ import annotations

import re
from collections.abc import Mapping
from functools import cache

from kibel_client.contract_types import ResourceContract
from kibel_client.errors import InputInvalidError
from kibel_client.generated.resource_contracts import RESOURCE_CONTRACTS

_IDENTIFIER_RE = re.compile(r"\s*([A-Za-z0-9_]+)\s*")
_VARIABLE_RE = re.compile(r"\$([A-Za-z0-9_]+)")


@cache
def _contracts_by_name() -> dict[str, ResourceContract]:
    return {contract.name: contract for contract in RESOURCE_CONTRACTS}


def trusted_contract(name: str) -> ResourceContract:
    """Return the generated contract for a resource name.

    Raises
    ------
    KeyError
        Raised when the resource is not in the generated table.
    """
    contract = _contracts_by_name().get(name)
    if contract is None:
        msg = f"unknown trusted operation: {name}"
        raise KeyError(msg)
    return contract


def extract_root_field(query: str) -> str | None:
    """Return the first root field selected by a GraphQL document.

    Aliased selections (``alias: field``) resolve to the field name.

    Returns
    -------
    str | None
        Root field name, or None when it cannot be located.
    """
    start = query.find("{")
    if start < 0:
        return None
    match = _IDENTIFIER_RE.match(query, start + 1)
    if match is None:
        return None
    field = match.group(1)
    index = match.end()
    if query.startswith(":", index):
        aliased = _IDENTIFIER_RE.match(query, index + 1)
        if aliased is None:
            return None
        field = aliased.group(1)
    return field


def extract_declared_variables(query: str) -> frozenset[str]:
    """Return variable names declared in the operation header.

    Returns
    -------
    frozenset[str]
        ``$name`` tokens appearing before the first ``{``.
    """
    header_end = query.find("{")
    header = query if header_end < 0 else query[:header_end]
    return frozenset(_VARIABLE_RE.findall(header))


def validate_trusted_request(
    contract: ResourceContract,
    query: str,
    variables: Mapping[str, object],
) -> None:
    """Check a request against its contract before it is sent.

    Parameters
    ----------
    contract
        Generated contract for the operation.
    query
        GraphQL document about to be sent.
    variables
        Variables about to be sent.

    Raises
    ------
    InputInvalidError
        Raised when the root field differs from the contract, a required
        variable is undeclared or missing, or an undeclared variable is sent.
    """
    expected_root = contract.root_field
    if not expected_root:
        msg = f"empty root field in trusted contract `{contract.name}`"
        raise InputInvalidError(msg)
    actual_root = extract_root_field(query)
    if actual_root is None:
        msg = f"failed to extract root field for trusted operation `{contract.name}`"
        raise InputInvalidError(msg)
    if actual_root != expected_root:
        msg = (
            f"trusted operation `{contract.name}` root field mismatch: "
            f"expected `{expected_root}`, got `{actual_root}`"
        )
        raise InputInvalidError(msg)

    declared = extract_declared_variables(query)
    undeclared_required = [name for name in contract.required_variables if name not in declared]
    if undeclared_required:
        msg = (
            f"trusted operation `{contract.name}` required variable(s) are not declared "
            f"in query: {', '.join(undeclared_required)}"
        )
        raise InputInvalidError(msg)

    missing = [name for name in contract.required_variables if variables.get(name) is None]
    if missing:
        msg = (
            f"trusted operation `{contract.name}` missing required variable(s): "
            f"{', '.join(missing)}"
        )
        raise InputInvalidError(msg)

    unsupported = [name for name in variables if name not in declared]
    if unsupported:
        msg = (
            f"trusted operation `{contract.name}` has undeclared variable(s): "
            f"{', '.join(unsupported)}"
        )
        raise InputInvalidError(msg)


__all__ = [
    "extract_declared_variables",
    "extract_root_field",
    "trusted_contract",
    "validate_trusted_request",
]
