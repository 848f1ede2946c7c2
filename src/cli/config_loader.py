"""Config discovery and decoding for the kibel-tools CLI."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import msgspec

from cli.config_models import ToolsConfigSpec
from contracts.workflows import ContractPaths
from serde_msgspec import convert, validation_error_message
from utils.file_io import read_toml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "kibel-tools.toml"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEY = "kibel-tools"


class ConfigError(ValueError):
    """Raised when a config file cannot be read or fails validation."""


@dataclass(frozen=True)
class ConfigResolution:
    """Decoded config plus the repository root it applies to.

    Parameters
    ----------
    config
        Decoded configuration.
    root
        Directory relative artifact paths resolve against.
    location
        Where the config came from, or None when defaults were used.
    """

    config: ToolsConfigSpec
    root: Path
    location: str | None = None

    def contract_paths(self) -> ContractPaths:
        """Resolve configured artifact paths under ``root``.

        Returns
        -------
        ContractPaths
            Absolute artifact locations.
        """
        paths = self.config.paths
        return ContractPaths.under(
            self.root,
            endpoint_snapshot=paths.endpoint_snapshot,
            contract_snapshot=paths.contract_snapshot,
            contract_module=paths.contract_module,
            create_note_snapshot=paths.create_note_snapshot,
            create_note_module=paths.create_note_module,
        )


def resolve_config(config_file: str | None, *, cwd: Path | None = None) -> ConfigResolution:
    """Load config from ``--config`` or the nearest config file.

    Discovery walks up from ``cwd``. A ``kibel-tools.toml`` wins over a
    ``[tool.kibel-tools]`` table in ``pyproject.toml``. Without either, the
    defaults apply and the root is the nearest directory holding a
    ``pyproject.toml`` (or ``cwd`` itself).

    Parameters
    ----------
    config_file
        Optional explicit config file path.
    cwd
        Starting directory for discovery; defaults to the process cwd.

    Returns
    -------
    ConfigResolution
        Decoded config and repository root.

    Raises
    ------
    ConfigError
        Raised when an explicit config file does not exist.
    """
    start = (cwd or Path.cwd()).resolve()
    if config_file is not None:
        path = Path(config_file)
        if not path.is_absolute():
            path = start / path
        if not path.is_file():
            msg = f"Config file not found: {config_file!r}."
            raise ConfigError(msg)
        return _load_config_file(path.resolve())

    config_path = _find_in_parents(start, CONFIG_FILENAME)
    if config_path is not None:
        return _load_config_file(config_path)

    pyproject_path = _find_in_parents(start, PYPROJECT_FILENAME)
    if pyproject_path is not None:
        return _load_config_file(pyproject_path)

    logger.debug("No kibel-tools config found above %s; using defaults", start)
    return ConfigResolution(config=ToolsConfigSpec(), root=start)


def _find_in_parents(start: Path, filename: str) -> Path | None:
    path = start
    while True:
        candidate = path / filename
        if candidate.is_file():
            return candidate
        if path.parent == path:
            return None
        path = path.parent


def _load_config_file(path: Path) -> ConfigResolution:
    raw = _read_config_toml(path)
    location = str(path)
    if path.name == PYPROJECT_FILENAME:
        tool = raw.get("tool")
        nested = tool.get(PYPROJECT_TOOL_KEY) if isinstance(tool, Mapping) else None
        if not isinstance(nested, Mapping):
            return ConfigResolution(config=ToolsConfigSpec(), root=path.parent)
        raw = nested
        location = f"{path}:tool.{PYPROJECT_TOOL_KEY}"
    config = decode_tools_config(raw, location=location)
    logger.debug("Loaded kibel-tools config from %s", location)
    return ConfigResolution(config=config, root=path.parent, location=location)


def _read_config_toml(path: Path) -> Mapping[str, object]:
    try:
        return read_toml(path)
    except (OSError, msgspec.DecodeError, TypeError) as exc:
        msg = f"Failed to read config file {path}: {exc}"
        raise ConfigError(msg) from exc


def decode_tools_config(raw: Mapping[str, object], *, location: str) -> ToolsConfigSpec:
    """Decode a raw config table into ``ToolsConfigSpec``.

    Returns
    -------
    ToolsConfigSpec
        Validated config.

    Raises
    ------
    ConfigError
        Raised when the table has unknown keys or wrongly typed values.
    """
    try:
        return convert(dict(raw), target_type=ToolsConfigSpec)
    except msgspec.ValidationError as exc:
        msg = validation_error_message(exc, context=f"Config validation failed for {location}")
        raise ConfigError(msg) from exc


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ConfigResolution",
    "decode_tools_config",
    "resolve_config",
]
