"""Shared type aliases and small typing helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Annotated, Literal

from msgspec import Meta

type ResourceKind = Literal["query", "mutation"]

RESOURCE_KINDS: frozenset[str] = frozenset({"query", "mutation"})

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | Mapping[str, JsonValue] | Sequence[JsonValue]
type JsonDict = dict[str, JsonValue]

PositiveInt = Annotated[int, Meta(gt=0)]


def is_resource_kind(value: str) -> bool:
    """Return True when the value names a GraphQL root operation kind.

    Parameters
    ----------
    value
        Candidate kind string.

    Returns
    -------
    bool
        True for ``"query"`` or ``"mutation"``.
    """
    return value in RESOURCE_KINDS


__all__ = [
    "RESOURCE_KINDS",
    "JsonDict",
    "JsonPrimitive",
    "JsonValue",
    "PositiveInt",
    "ResourceKind",
    "is_resource_kind",
]
