"""Resource contract governance commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import httpx
from cyclopts import Parameter

from cli.commands._connection import ConnectionOptions, open_transport
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import output_group
from cli.result import CliResult
from contracts.diff import diff_to_json, render_diff_text
from contracts.introspection import EndpointIntrospector
from contracts.workflows import (
    check_resource_contract,
    diff_resource_contracts,
    refresh_endpoint_snapshot,
    write_resource_contract,
)
from serde_msgspec import dumps_json

_DEFAULT_CONNECTION = ConnectionOptions()


def check_command(
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Verify the resource snapshot and generated module are current.

    Returns
    -------
    CliResult
        Success when both artifacts match what ``write`` would produce.
    """
    context = run_context or RunContext.discover()
    paths = context.paths
    snapshot = check_resource_contract(paths)
    return CliResult.success(
        summary=f"resource contract is up to date ({len(snapshot.resources)} resources)",
        artifacts={
            "snapshot": paths.contract_snapshot,
            "module": paths.contract_module,
        },
    )


def write_command(
    *,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Regenerate the resource snapshot and module from the endpoint snapshot.

    Returns
    -------
    CliResult
        Success with the written artifact paths.
    """
    context = run_context or RunContext.discover()
    paths = context.paths
    snapshot = write_resource_contract(paths)
    return CliResult.success(
        summary=f"wrote resource contract ({len(snapshot.resources)} resources)",
        artifacts={
            "snapshot": paths.contract_snapshot,
            "module": paths.contract_module,
        },
    )


def refresh_endpoint_command(
    *,
    connection: Annotated[ConnectionOptions, Parameter(name="*")] = _DEFAULT_CONNECTION,
    run_context: Annotated[RunContext | None, Parameter(parse=False)] = None,
    http_client: Annotated[httpx.Client | None, Parameter(parse=False)] = None,
) -> CliResult:
    """Introspect the live endpoint and rewrite the endpoint snapshot.

    Returns
    -------
    CliResult
        Success with the endpoint snapshot path.
    """
    context = run_context or RunContext.discover()
    settings = connection.settings(context.connection)
    paths = context.paths
    with open_transport(settings, http_client=http_client) as transport:
        snapshot = refresh_endpoint_snapshot(
            paths,
            EndpointIntrospector(transport),
            origin=settings.origin,
            endpoint=transport.endpoint,
        )
    return CliResult.success(
        summary=(
            f"captured {len(snapshot.resources)} resources from {snapshot.endpoint}; "
            "run `kibel-tools resource-contract write` next"
        ),
        artifacts={"endpoint_snapshot": paths.endpoint_snapshot},
    )


def diff_command(
    *,
    base: Annotated[
        Path,
        Parameter(name="--base", help="Baseline contract snapshot file."),
    ],
    target: Annotated[
        Path,
        Parameter(name="--target", help="Candidate contract snapshot file."),
    ],
    as_json: Annotated[
        bool,
        Parameter(
            name="--json",
            help="Emit a machine-readable report.",
            group=output_group,
        ),
    ] = False,
) -> int:
    """Classify differences between two contract snapshots.

    Returns
    -------
    int
        ``BREAKING_CHANGES`` when any breaking change is found, else 0.
    """
    result = diff_resource_contracts(base, target)
    if as_json:
        sys.stdout.write(dumps_json(diff_to_json(result), pretty=True).decode() + "\n")
    else:
        sys.stdout.write(render_diff_text(result) + "\n")
    return ExitCode.BREAKING_CHANGES if result.has_breaking else ExitCode.SUCCESS


__all__ = [
    "check_command",
    "diff_command",
    "refresh_endpoint_command",
    "write_command",
]
