"""Tests for adaptive create-note schema resolution."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from kibel_client.create_note_schema import (
    DISABLE_INTROSPECTION_ENV,
    ENABLE_INTROSPECTION_ENV,
    AdaptiveCreateNoteSchemaResolver,
    CreateNoteSchema,
    CreateNoteSchemaOptions,
    ResolutionSource,
    ResolverState,
    SchemaCell,
)
from kibel_client.errors import ApiError, TransportError
from tests._support.introspection import FULL_CREATE_NOTE_INPUT, create_note_payload

LIVE_INPUT = ("title", "content", "groupIds", "coediting", "folders")


class _CountingFetch:
    def __init__(self, result: object = None, error: Exception | None = None) -> None:
        self.calls = 0
        self.result = result
        self.error = error

    def __call__(self) -> object:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


def _enabled() -> CreateNoteSchemaOptions:
    return CreateNoteSchemaOptions(disable_introspection=False)


def test_invalid_live_schema_falls_back_to_default() -> None:
    """A live schema without ``coediting`` is discarded silently."""
    fetch = _CountingFetch(create_note_payload(("title", "content", "groupIds")))
    resolver = AdaptiveCreateNoteSchemaResolver(fetch, _enabled())
    schema, source = resolver.resolve_with_source()
    assert schema == CreateNoteSchema.default()
    assert source is ResolutionSource.DEFAULT_FALLBACK
    assert resolver.state is ResolverState.UNRESOLVED


def test_live_schema_is_fetched_once_then_cached() -> None:
    """A valid live schema is memoized for the resolver's lifetime."""
    fetch = _CountingFetch(create_note_payload(LIVE_INPUT))
    resolver = AdaptiveCreateNoteSchemaResolver(fetch, _enabled())
    first, first_source = resolver.resolve_with_source()
    second, second_source = resolver.resolve_with_source()
    assert first_source is ResolutionSource.LIVE
    assert second_source is ResolutionSource.CACHED
    assert first is second
    assert first.input_fields == frozenset(LIVE_INPUT)
    assert fetch.calls == 1
    assert resolver.state is ResolverState.RESOLVED


@pytest.mark.parametrize(
    "error",
    [
        TransportError("connection refused"),
        ApiError("FORBIDDEN", "introspection disabled"),
        httpx.InvalidURL("bad endpoint"),
        RuntimeError("unexpected"),
    ],
)
def test_fetch_errors_fall_back_and_retry(error: Exception) -> None:
    """Failures are not cached, so a later call tries again."""
    fetch = _CountingFetch(error=error)
    resolver = AdaptiveCreateNoteSchemaResolver(fetch, _enabled())
    assert resolver.resolve_with_source()[1] is ResolutionSource.DEFAULT_FALLBACK
    assert resolver.state is ResolverState.UNRESOLVED
    fetch.error = None
    fetch.result = create_note_payload(LIVE_INPUT)
    assert resolver.resolve_with_source()[1] is ResolutionSource.LIVE
    assert fetch.calls == 2


def test_override_bypasses_fetch_and_cache() -> None:
    """An override schema is returned on every call without a fetch."""
    override = CreateNoteSchema.from_field_names(LIVE_INPUT, ("note",), ("id",))
    assert override is not None
    fetch = _CountingFetch(create_note_payload(FULL_CREATE_NOTE_INPUT))
    resolver = AdaptiveCreateNoteSchemaResolver(
        fetch, CreateNoteSchemaOptions(override_schema=override)
    )
    for _ in range(2):
        assert resolver.resolve_with_source() == (override, ResolutionSource.OVERRIDE)
    assert fetch.calls == 0
    assert resolver.state is ResolverState.UNRESOLVED


def test_disabled_introspection_uses_default() -> None:
    """Disabled introspection never touches the network."""
    fetch = _CountingFetch(create_note_payload(LIVE_INPUT))
    resolver = AdaptiveCreateNoteSchemaResolver(
        fetch, CreateNoteSchemaOptions(disable_introspection=True)
    )
    assert resolver.resolve_with_source() == (
        CreateNoteSchema.default(),
        ResolutionSource.DISABLED_DEFAULT,
    )
    assert fetch.calls == 0


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"data": None},
        {"data": {"createNoteInput": {"inputFields": "title"}}},
        create_note_payload(LIVE_INPUT, payload_fields=("clientMutationId",)),
        create_note_payload(LIVE_INPUT, note_fields=("title",)),
        create_note_payload((), payload_fields=(), note_fields=()),
    ],
)
def test_malformed_payloads_never_raise(payload: object) -> None:
    """Every malformed response resolves to the compiled-in default."""
    resolver = AdaptiveCreateNoteSchemaResolver(_CountingFetch(payload), _enabled())
    assert resolver.resolve() == CreateNoteSchema.default()


def test_state_is_resolving_during_fetch() -> None:
    """The resolver reports an in-flight fetch."""
    seen: list[ResolverState] = []
    resolver: AdaptiveCreateNoteSchemaResolver

    def fetch() -> object:
        seen.append(resolver.state)
        return create_note_payload(LIVE_INPUT)

    resolver = AdaptiveCreateNoteSchemaResolver(fetch, _enabled())
    assert resolver.state is ResolverState.UNRESOLVED
    resolver.resolve()
    assert seen == [ResolverState.RESOLVING]
    assert resolver.state is ResolverState.RESOLVED


def test_concurrent_first_calls_agree() -> None:
    """Racing callers all observe the single stored schema."""
    workers = 8
    barrier = threading.Barrier(workers)
    counter = iter(range(workers))
    lock = threading.Lock()

    def fetch() -> object:
        with lock:
            index = next(counter)
        barrier.wait(timeout=5)
        return create_note_payload((*LIVE_INPUT, f"extra{index}"))

    resolver = AdaptiveCreateNoteSchemaResolver(fetch, _enabled())
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda _: resolver.resolve(), range(workers)))
    assert all(result is results[0] for result in results)
    assert resolver.resolve() is results[0]


def test_schema_cell_keeps_first_value() -> None:
    """The cell ignores later producers once a value is stored."""
    cell = SchemaCell()
    first = CreateNoteSchema.default()
    other = CreateNoteSchema.from_field_names(LIVE_INPUT, ("note",), ("id",))
    assert cell.get_or_resolve(lambda: None) == (None, False)
    assert cell.get_or_resolve(lambda: first) == (first, False)
    assert cell.get_or_resolve(lambda: other) == (first, True)
    assert cell.get() is first


@pytest.mark.parametrize(
    ("enable", "disable", "expected_disabled"),
    [
        (None, None, True),
        ("1", None, False),
        ("true", "0", False),
        ("1", "1", True),
        ("0", None, True),
        (None, "yes", True),
    ],
)
def test_options_from_env(
    monkeypatch: pytest.MonkeyPatch,
    enable: str | None,
    disable: str | None,
    *,
    expected_disabled: bool,
) -> None:
    """Introspection is opt-in and the disable flag always wins."""
    for name, value in ((ENABLE_INTROSPECTION_ENV, enable), (DISABLE_INTROSPECTION_ENV, disable)):
        if value is None:
            monkeypatch.delenv(name, raising=False)
        else:
            monkeypatch.setenv(name, value)
    options = CreateNoteSchemaOptions.from_env()
    assert options.disable_introspection is expected_disabled
    assert options.override_schema is None


def test_schema_predicates_and_projection() -> None:
    """Membership predicates and the note projection follow the field sets."""
    schema = CreateNoteSchema.from_field_names(LIVE_INPUT, ("note",), ("id", "url", "createdAt"))
    assert schema is not None
    assert schema.supports_input("folders")
    assert not schema.supports_input("draft")
    assert not schema.supports_payload("clientMutationId")
    assert schema.selected_note_fields() == ("id", "url")


def test_create_note_mutation_text() -> None:
    """The mutation selects clientMutationId only when the payload has it."""
    schema = CreateNoteSchema.default()
    assert schema.create_note_mutation() == (
        "mutation CreateNote($input: CreateNoteInput!) {\n"
        "  createNote(input: $input) {\n"
        "    clientMutationId\n"
        "    note {\n"
        "      id\n"
        "      title\n"
        "      content\n"
        "      url\n"
        "    }\n"
        "  }\n"
        "}"
    )
    minimal = CreateNoteSchema.from_field_names(LIVE_INPUT, ("note",), ("id",))
    assert minimal is not None
    assert "clientMutationId" not in minimal.create_note_mutation()
