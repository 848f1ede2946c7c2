"""Main application setup for the kibel-tools CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Parameter
from cyclopts.exceptions import CycloptsError

from cli.commands.version import get_version
from cli.config_loader import resolve_config
from cli.context import RunContext
from cli.exit_codes import ExitCode
from cli.groups import session_group
from cli.result import CliResult
from cli.result_action import cli_result_action
from contracts.errors import ContractError
from kibel_client.errors import KibelClientError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_HELP_EPILOGUE = """
Examples:
  kibel-tools resource-contract check              Fail when generated artifacts are stale
  kibel-tools resource-contract write              Regenerate snapshot and module
  kibel-tools resource-contract refresh-endpoint   Re-introspect the live endpoint
  kibel-tools resource-contract diff --base a.json --target b.json --json
  kibel-tools create-note-contract check           Verify the create-note module

Environment Variables:
  KIBEL_LOG_LEVEL       Default log level (DEBUG, INFO, WARNING, ERROR)
  KIBELA_ORIGIN         Service origin for refresh commands
  KIBELA_ACCESS_TOKEN   Access token for refresh commands
"""

app = App(
    name="kibel-tools",
    help="Schema-contract governance for the note service GraphQL API.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    result_action=cli_result_action,
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    config_file: Annotated[
        str | None,
        Parameter(
            name="--config",
            help="Path to kibel-tools.toml or pyproject.toml (overrides default search).",
            group=session_group,
        ),
    ] = None
    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="KIBEL_LOG_LEVEL",
            group=session_group,
        ),
    ] = "INFO"


_DEFAULT_SESSION_OPTIONS = SessionOptions()


def invoke(app: App, tokens: list[str], *, run_context: RunContext) -> int:
    """Parse tokens, inject the run context and run the selected command.

    Parameters
    ----------
    app
        CLI app instance.
    tokens
        Command tokens, without session options.
    run_context
        Context injected into commands that declare ``run_context``.

    Returns
    -------
    int
        Exit status code. Errors are reported on stderr and mapped through
        ``ExitCode.from_exception``.
    """
    try:
        command, bound, ignored = app.parse_args(
            tokens,
            exit_on_error=False,
            print_error=True,
        )
    except CycloptsError as exc:
        return ExitCode.from_exception(exc)

    for name, hint in ignored.items():
        if hint is RunContext or name == "run_context":
            bound.arguments[name] = run_context

    try:
        result = command(*bound.args, **bound.kwargs)
    except (ContractError, KibelClientError, ValueError, OSError) as exc:
        logger.debug("Command failed", exc_info=exc)
        result = CliResult.failure(exc)
    return cli_result_action(app, command, result)


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Meta launcher for config selection and context injection.

    Returns
    -------
    int
        Exit status code from command execution.

    Raises
    ------
    ValueError
        Raised when the log level is invalid.
    """
    if session.log_level not in LOG_LEVELS:
        msg = f"Unsupported log level {session.log_level!r}."
        raise ValueError(msg)
    logging.basicConfig(level=session.log_level)

    try:
        config = resolve_config(session.config_file)
    except ValueError as exc:
        return cli_result_action(app, meta_launcher, CliResult.failure(exc))

    run_context = RunContext(log_level=session.log_level, config=config)
    return invoke(app, list(tokens), run_context=run_context)


_resource_contract_app = App(
    name="resource-contract",
    help="Resource contract snapshot and generated lookup table.",
)
_resource_contract_app.command(
    "cli.commands.resource_contract:check_command",
    name="check",
)
_resource_contract_app.command(
    "cli.commands.resource_contract:write_command",
    name="write",
)
_resource_contract_app.command(
    "cli.commands.resource_contract:refresh_endpoint_command",
    name="refresh-endpoint",
)
_resource_contract_app.command(
    "cli.commands.resource_contract:diff_command",
    name="diff",
)
app.command(_resource_contract_app)

_create_note_app = App(
    name="create-note-contract",
    help="Create-note field contract snapshot and generated module.",
)
_create_note_app.command(
    "cli.commands.create_note_contract:check_command",
    name="check",
)
_create_note_app.command(
    "cli.commands.create_note_contract:write_command",
    name="write",
)
_create_note_app.command(
    "cli.commands.create_note_contract:refresh_snapshot_command",
    name="refresh-snapshot",
)
app.command(_create_note_app)

app.command("cli.commands.version:version_command", name="version", alias="v")


def main() -> None:
    """Run the kibel-tools CLI."""
    raise SystemExit(app.meta())


__all__ = ["SessionOptions", "app", "invoke", "main", "meta_launcher"]
