"""Run context for CLI command injection."""

from __future__ import annotations

from dataclasses import dataclass

from cli.config_loader import ConfigResolution, resolve_config
from cli.config_models import ConnectionConfig
from contracts.workflows import ContractPaths


@dataclass(frozen=True)
class RunContext:
    """Injected run context for CLI commands.

    Parameters
    ----------
    log_level
        Logging level applied to the invocation.
    config
        Resolved configuration and repository root.
    """

    log_level: str
    config: ConfigResolution

    @classmethod
    def discover(cls, *, log_level: str = "WARNING") -> RunContext:
        """Build a context from config discovery in the working directory.

        Returns
        -------
        RunContext
            Context for commands invoked without the meta launcher.
        """
        return cls(log_level=log_level, config=resolve_config(None))

    @property
    def paths(self) -> ContractPaths:
        return self.config.contract_paths()

    @property
    def connection(self) -> ConnectionConfig:
        return self.config.config.connection


__all__ = ["RunContext"]
