"""Create-note field contract commands."""

from __future__ import annotations

from typing import Annotated

import httpx
from cyclopts import Parameter

from cli.commands._connection import ConnectionOptions, open_transport
from cli.context import RunContext
from cli.result import CliResult
from contracts.introspection import EndpointIntrospector
from contracts.workflows import (
    check_create_note_contract,
    refresh_create_note_snapshot,
    write_create_note_contract,
)

_DEFAULT_CONNECTION = ConnectionOptions()


def check_command(
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Verify the generated create-note module matches its snapshot.

    Returns
    -------
    CliResult
        Success when the module is current.
    """
    context = run_context or RunContext.discover()
    paths = context.paths
    check_create_note_contract(paths)
    return CliResult.success(
        summary="create-note contract is up to date",
        artifacts={"module": paths.create_note_module},
    )


def write_command(
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Render the create-note module from the persisted snapshot.

    Returns
    -------
    CliResult
        Success with the module path.
    """
    context = run_context or RunContext.discover()
    paths = context.paths
    write_create_note_contract(paths)
    return CliResult.success(
        summary="wrote create-note contract module",
        artifacts={"module": paths.create_note_module},
    )


def refresh_snapshot_command(
    *,
    connection: Annotated[ConnectionOptions, Parameter(name="*")] = _DEFAULT_CONNECTION,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
    http_client: Annotated[httpx.Client | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Introspect the create-note types and rewrite the snapshot.

    Returns
    -------
    CliResult
        Success with the snapshot path.
    """
    context = run_context or RunContext.discover()
    settings = connection.settings(context.connection)
    paths = context.paths
    with open_transport(settings, http_client=http_client) as transport:
        snapshot = refresh_create_note_snapshot(
            paths,
            EndpointIntrospector(transport),
            origin=settings.origin,
            endpoint=transport.endpoint,
        )
    return CliResult.success(
        summary=(
            f"captured {len(snapshot.create_note_input_fields)} input fields; "
            "run `kibel-tools create-note-contract write` next"
        ),
        artifacts={"snapshot": paths.create_note_snapshot},
    )


__all__ = ["check_command", "refresh_snapshot_command", "write_command"]
