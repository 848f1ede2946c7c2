"""Structured return value for kibel-tools commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


@dataclass(frozen=True)
class CliResult:
    """Outcome of one command.

    Parameters
    ----------
    exit_code
        Process exit status.
    summary
        One-line message; printed to stderr when the command failed.
    artifacts
        Artifact files checked or written, keyed by role.
    """

    exit_code: int
    summary: str | None = None
    artifacts: Mapping[str, Path] = field(default_factory=dict)

    @classmethod
    def success(
        cls,
        *,
        summary: str | None = None,
        artifacts: Mapping[str, Path] | None = None,
    ) -> CliResult:
        """Return a zero-exit result.

        Returns
        -------
        CliResult
            Successful result.
        """
        return cls(exit_code=ExitCode.SUCCESS, summary=summary, artifacts=artifacts or {})

    @classmethod
    def failure(cls, exc: BaseException) -> CliResult:
        """Return the result reported for a command that raised ``exc``.

        Returns
        -------
        CliResult
            Result whose exit code comes from ``ExitCode.from_exception``.
        """
        return cls(exit_code=ExitCode.from_exception(exc), summary=f"error: {exc}")

    @property
    def ok(self) -> bool:
        return self.exit_code == ExitCode.SUCCESS


__all__ = ["CliResult"]
