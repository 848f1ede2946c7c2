"""Adaptive resolution of the create-note field schema.

The client asks the server which create-note input, payload and note fields
exist, and falls back to the compiled-in contract whenever that is not
possible. Resolution never raises: every path ends in a usable schema.

Resolution order, first success wins:

1. an override schema from ``CreateNoteSchemaOptions`` (never cached),
2. the compiled-in default when introspection is disabled,
3. the schema already memoized for this resolver,
4. a fresh live introspection result that passes validation,
5. the compiled-in default.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Self

from kibel_client.generated.create_note_contract import (
    CREATE_NOTE_INPUT_FIELDS,
    CREATE_NOTE_NOTE_PROJECTION_FIELDS,
    CREATE_NOTE_PAYLOAD_FIELDS,
)
from serde_msgspec import mapping_at
from utils.env_utils import env_flag

logger = logging.getLogger(__name__)

ENABLE_INTROSPECTION_ENV: Final[str] = "KIBEL_ENABLE_RUNTIME_INTROSPECTION"
DISABLE_INTROSPECTION_ENV: Final[str] = "KIBEL_DISABLE_RUNTIME_INTROSPECTION"

CREATE_NOTE_SCHEMA_QUERY: Final[str] = """query CreateNoteSchema {
  createNoteInput: __type(name: "CreateNoteInput") {
    inputFields {
      name
    }
  }
  createNotePayload: __type(name: "CreateNotePayload") {
    fields {
      name
    }
  }
  noteType: __type(name: "Note") {
    fields {
      name
    }
  }
}
"""

REQUIRED_INPUT_FIELDS: Final[frozenset[str]] = frozenset(
    {"title", "content", "groupIds", "coediting"}
)
REQUIRED_PAYLOAD_FIELDS: Final[frozenset[str]] = frozenset({"note"})
REQUIRED_NOTE_FIELDS: Final[frozenset[str]] = frozenset({"id"})
PREFERRED_NOTE_FIELDS: Final[tuple[str, ...]] = ("id", "title", "content", "url")


def _name_set(value: object) -> frozenset[str]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        return frozenset()
    names: set[str] = set()
    for item in value:
        name = item.get("name") if isinstance(item, Mapping) else None
        if isinstance(name, str) and name.strip():
            names.add(name.strip())
    return frozenset(names)


@dataclass(frozen=True)
class CreateNoteSchema:
    """Field names usable in a create-note request.

    Parameters
    ----------
    input_fields
        Accepted ``CreateNoteInput`` fields.
    payload_fields
        Fields exposed by ``CreateNotePayload``.
    note_fields
        Fields exposed by ``Note``.
    """

    input_fields: frozenset[str]
    payload_fields: frozenset[str]
    note_fields: frozenset[str]

    @classmethod
    def default(cls) -> Self:
        """Return the schema compiled in from the create-note contract.

        Returns
        -------
        Self
            Schema built from the generated create-note module.
        """
        return cls(
            input_fields=frozenset(CREATE_NOTE_INPUT_FIELDS),
            payload_fields=frozenset(CREATE_NOTE_PAYLOAD_FIELDS),
            note_fields=frozenset(CREATE_NOTE_NOTE_PROJECTION_FIELDS),
        )

    @classmethod
    def from_field_names(
        cls,
        input_fields: Iterable[str],
        payload_fields: Iterable[str],
        note_fields: Iterable[str],
    ) -> Self | None:
        """Build a schema from name lists when they satisfy the minimum shape.

        Returns
        -------
        Self | None
            Schema, or None when a set is empty or lacks a required field.
        """
        schema = cls(
            input_fields=frozenset(input_fields),
            payload_fields=frozenset(payload_fields),
            note_fields=frozenset(note_fields),
        )
        return schema if schema.is_usable() else None

    @classmethod
    def from_introspection(cls, payload: object) -> Self | None:
        """Build a schema from a create-note introspection response.

        Parameters
        ----------
        payload
            Response to the create-note schema query.

        Returns
        -------
        Self | None
            Schema, or None when the response is malformed or incomplete.
        """
        return cls.from_field_names(
            _name_set(mapping_at(payload, "data", "createNoteInput", "inputFields")),
            _name_set(mapping_at(payload, "data", "createNotePayload", "fields")),
            _name_set(mapping_at(payload, "data", "noteType", "fields")),
        )

    def is_usable(self) -> bool:
        """Return True when every set is non-empty and holds its required fields."""
        if not (self.input_fields and self.payload_fields and self.note_fields):
            return False
        return (
            REQUIRED_INPUT_FIELDS <= self.input_fields
            and REQUIRED_PAYLOAD_FIELDS <= self.payload_fields
            and REQUIRED_NOTE_FIELDS <= self.note_fields
        )

    def supports_input(self, field: str) -> bool:
        return field in self.input_fields

    def supports_payload(self, field: str) -> bool:
        return field in self.payload_fields

    def selected_note_fields(self) -> tuple[str, ...]:
        """Return the note fields to request back, ``id`` alone at minimum.

        Returns
        -------
        tuple[str, ...]
            Supported fields among id, title, content and url.
        """
        fields = tuple(field for field in PREFERRED_NOTE_FIELDS if field in self.note_fields)
        return fields or ("id",)

    def create_note_mutation(self) -> str:
        """Render the create-note mutation for this schema.

        Returns
        -------
        str
            GraphQL mutation document.
        """
        payload_lines: list[str] = []
        if self.supports_payload("clientMutationId"):
            payload_lines.append("clientMutationId")
        note_fields = "\n      ".join(self.selected_note_fields())
        payload_lines.append(f"note {{\n      {note_fields}\n    }}")
        selection = "\n    ".join(payload_lines)
        return (
            "mutation CreateNote($input: CreateNoteInput!) {\n"
            "  createNote(input: $input) {\n"
            f"    {selection}\n"
            "  }\n"
            "}"
        )


@dataclass(frozen=True)
class CreateNoteSchemaOptions:
    """Explicit resolver configuration.

    Parameters
    ----------
    override_schema
        Schema used as-is on every call, bypassing resolution.
    disable_introspection
        Skip the network and use the compiled-in default.
    """

    override_schema: CreateNoteSchema | None = None
    disable_introspection: bool = False

    @classmethod
    def from_env(cls) -> Self:
        """Read introspection flags from the process environment.

        Runtime introspection stays off unless
        ``KIBEL_ENABLE_RUNTIME_INTROSPECTION`` is truthy, and
        ``KIBEL_DISABLE_RUNTIME_INTROSPECTION`` turns it off again.

        Returns
        -------
        Self
            Options derived from the environment.
        """
        enabled = env_flag(ENABLE_INTROSPECTION_ENV, default=False)
        disabled = env_flag(DISABLE_INTROSPECTION_ENV, default=False)
        return cls(disable_introspection=disabled or not enabled)


class ResolutionSource(StrEnum):
    """Which resolution path produced a schema."""

    OVERRIDE = "override"
    DISABLED_DEFAULT = "disabled_default"
    CACHED = "cached"
    LIVE = "live"
    DEFAULT_FALLBACK = "default_fallback"


class ResolverState(StrEnum):
    """Lifecycle of a resolver's cached schema."""

    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class SchemaCell:
    """Single-assignment cache cell for a resolved schema.

    Reads are lock-free. Only the final write takes the lock, and the first
    stored value is kept for the lifetime of the cell.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: CreateNoteSchema | None = None

    def get(self) -> CreateNoteSchema | None:
        return self._value

    def _store(self, schema: CreateNoteSchema) -> CreateNoteSchema:
        with self._lock:
            if self._value is None:
                self._value = schema
            return self._value

    def get_or_resolve(
        self,
        resolve: Callable[[], CreateNoteSchema | None],
    ) -> tuple[CreateNoteSchema | None, bool]:
        """Return the stored schema, resolving and storing one when empty.

        Parameters
        ----------
        resolve
            Producer called without the lock held. Returning None stores
            nothing.

        Returns
        -------
        tuple[CreateNoteSchema | None, bool]
            The stored schema (or None), and whether it was already present.
        """
        current = self._value
        if current is not None:
            return current, True
        candidate = resolve()
        if candidate is None:
            return None, False
        return self._store(candidate), False


class AdaptiveCreateNoteSchemaResolver:
    """Resolve the create-note schema once per client instance.

    Parameters
    ----------
    fetch
        Callable returning the raw create-note introspection response.
        Any exception it raises is logged and treated as an unavailable
        schema.
    options
        Resolver configuration.
    """

    def __init__(
        self,
        fetch: Callable[[], object],
        options: CreateNoteSchemaOptions | None = None,
    ) -> None:
        self._fetch = fetch
        self._options = options or CreateNoteSchemaOptions()
        self._cell = SchemaCell()
        self._default = CreateNoteSchema.default()
        self._in_flight = 0
        self._in_flight_lock = threading.Lock()

    @property
    def state(self) -> ResolverState:
        if self._cell.get() is not None:
            return ResolverState.RESOLVED
        if self._in_flight:
            return ResolverState.RESOLVING
        return ResolverState.UNRESOLVED

    def resolve(self) -> CreateNoteSchema:
        """Return the schema to use for the next create-note request."""
        schema, _ = self.resolve_with_source()
        return schema

    def resolve_with_source(self) -> tuple[CreateNoteSchema, ResolutionSource]:
        """Resolve the schema and report which path produced it.

        Returns
        -------
        tuple[CreateNoteSchema, ResolutionSource]
            Resolved schema and its source.
        """
        if self._options.override_schema is not None:
            return self._options.override_schema, ResolutionSource.OVERRIDE
        if self._options.disable_introspection:
            logger.debug("Runtime introspection disabled; using compiled-in create-note schema")
            return self._default, ResolutionSource.DISABLED_DEFAULT
        schema, was_cached = self._cell.get_or_resolve(self._fetch_live)
        if schema is None:
            logger.debug("Falling back to compiled-in create-note schema")
            return self._default, ResolutionSource.DEFAULT_FALLBACK
        if was_cached:
            return schema, ResolutionSource.CACHED
        return schema, ResolutionSource.LIVE

    def _fetch_live(self) -> CreateNoteSchema | None:
        with self._in_flight_lock:
            self._in_flight += 1
        try:
            payload = self._fetch()
        except Exception as exc:  # noqa: BLE001 - any failure falls back to the default
            logger.debug("Create-note schema introspection failed: %s", exc)
            return None
        finally:
            with self._in_flight_lock:
                self._in_flight -= 1
        schema = CreateNoteSchema.from_introspection(payload)
        if schema is None:
            logger.debug("Discarding create-note schema introspection with unexpected shape")
        return schema


__all__ = [
    "CREATE_NOTE_SCHEMA_QUERY",
    "DISABLE_INTROSPECTION_ENV",
    "ENABLE_INTROSPECTION_ENV",
    "AdaptiveCreateNoteSchemaResolver",
    "CreateNoteSchema",
    "CreateNoteSchemaOptions",
    "ResolutionSource",
    "ResolverState",
    "SchemaCell",
]
