"""Cyclopts result action turning command returns into exit codes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console

from cli.exit_codes import ExitCode
from cli.result import CliResult

if TYPE_CHECKING:
    from cyclopts import App


def _print_cli_result(result: CliResult) -> None:
    console = Console(stderr=not result.ok)
    if result.summary:
        console.print(result.summary, style=None if result.ok else "bold red", markup=False)
    if result.ok and result.artifacts:
        for role, path in sorted(result.artifacts.items()):
            console.print(f"  {role}: {path}", markup=False, soft_wrap=True)


def cli_result_action(app: App, cmd: object, result: Any) -> int:
    """Report a command's return value and return the process exit code.

    Registered as the app's ``result_action``. Commands return ``CliResult``,
    a bare exit code, or None for success.

    Parameters
    ----------
    app
        Application that ran the command.
    cmd
        Command that produced ``result``.
    result
        Command return value.

    Returns
    -------
    int
        Exit code.
    """
    _ = (app, cmd)
    if result is None:
        return ExitCode.SUCCESS
    if isinstance(result, CliResult):
        _print_cli_result(result)
        return int(result.exit_code)
    if isinstance(result, int) and not isinstance(result, bool):
        return int(result)
    Console(stderr=True).print(
        f"Unexpected command return type: {type(result).__name__}", markup=False
    )
    return ExitCode.GENERAL_ERROR


__all__ = ["cli_result_action"]
