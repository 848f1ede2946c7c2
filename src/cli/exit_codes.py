"""Exit statuses reported by kibel-tools."""

from __future__ import annotations

from enum import IntEnum

from cyclopts.exceptions import CycloptsError, ValidationError

from cli.config_loader import ConfigError
from contracts.errors import (
    ArtifactIOError,
    ContractError,
    InputInvalidError,
    StaleArtifactError,
)
from kibel_client.errors import ApiError, KibelClientError, TransportError


class ExitCode(IntEnum):
    """Process exit statuses.

    - 0: success
    - 1-9: usage, validation and config problems
    - 10-19: contract governance outcomes
    - 20-29: live endpoint failures
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4

    STALE_ARTIFACT = 10
    BREAKING_CHANGES = 11
    CONTRACT_ERROR = 12
    ARTIFACT_IO_ERROR = 13

    TRANSPORT_ERROR = 20
    API_ERROR = 21

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Return the exit status for a failed command.

        The first matching entry wins, so subclasses are listed before
        their bases (``InputInvalidError`` before ``ValueError``,
        ``ArtifactIOError`` before ``OSError``).

        Returns
        -------
        ExitCode
            Matching status, ``GENERAL_ERROR`` when nothing matches.
        """
        for exc_type, exit_code in _EXCEPTION_CODES:
            if isinstance(exc, exc_type):
                return exit_code
        return cls.GENERAL_ERROR


_EXCEPTION_CODES: tuple[tuple[type[BaseException], ExitCode], ...] = (
    (ValidationError, ExitCode.VALIDATION_ERROR),
    (CycloptsError, ExitCode.PARSE_ERROR),
    (ConfigError, ExitCode.CONFIG_ERROR),
    (StaleArtifactError, ExitCode.STALE_ARTIFACT),
    (ArtifactIOError, ExitCode.ARTIFACT_IO_ERROR),
    (InputInvalidError, ExitCode.VALIDATION_ERROR),
    (ContractError, ExitCode.CONTRACT_ERROR),
    (ApiError, ExitCode.API_ERROR),
    (TransportError, ExitCode.TRANSPORT_ERROR),
    (KibelClientError, ExitCode.VALIDATION_ERROR),
    (ValueError, ExitCode.VALIDATION_ERROR),
    (TypeError, ExitCode.VALIDATION_ERROR),
    (OSError, ExitCode.ARTIFACT_IO_ERROR),
)


__all__ = ["ExitCode"]
