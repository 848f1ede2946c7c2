"""Tests for kibel-tools config discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from cli.config_loader import ConfigError, resolve_config
from contracts.workflows import DEFAULT_CONTRACT_SNAPSHOT


def test_defaults_without_config(tmp_path: Path) -> None:
    """Without config files the defaults apply under the working directory."""
    resolution = resolve_config(None, cwd=tmp_path)
    assert resolution.location is None
    assert resolution.root == tmp_path.resolve()
    assert resolution.contract_paths().contract_snapshot == (
        tmp_path.resolve() / DEFAULT_CONTRACT_SNAPSHOT
    )


def test_tools_toml_found_in_parent(tmp_path: Path) -> None:
    """``kibel-tools.toml`` is discovered upward and anchors the root."""
    (tmp_path / "kibel-tools.toml").write_text(
        '[paths]\ncontract-snapshot = "contracts/snapshot.json"\n\n'
        '[connection]\norigin = "https://example.kibe.la"\ntimeout-secs = 2.5\n',
        encoding="utf-8",
    )
    nested = tmp_path / "src" / "pkg"
    nested.mkdir(parents=True)
    resolution = resolve_config(None, cwd=nested)
    assert resolution.root == tmp_path.resolve()
    assert resolution.config.connection.origin == "https://example.kibe.la"
    assert resolution.config.connection.timeout_secs == pytest.approx(2.5)
    paths = resolution.contract_paths()
    assert paths.contract_snapshot == tmp_path.resolve() / "contracts" / "snapshot.json"


def test_pyproject_tool_table(tmp_path: Path) -> None:
    """A ``[tool.kibel-tools]`` table in pyproject.toml is honored."""
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\n\n[tool.kibel-tools.paths]\n'
        'contract-module = "gen/contracts.py"\n',
        encoding="utf-8",
    )
    resolution = resolve_config(None, cwd=tmp_path)
    assert resolution.location is not None
    assert resolution.location.endswith(":tool.kibel-tools")
    assert resolution.contract_paths().contract_module == tmp_path.resolve() / "gen/contracts.py"


def test_pyproject_without_table_uses_defaults(tmp_path: Path) -> None:
    """A pyproject.toml without the table still anchors the root."""
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")
    nested = tmp_path / "docs"
    nested.mkdir()
    resolution = resolve_config(None, cwd=nested)
    assert resolution.root == tmp_path.resolve()
    assert resolution.location is None


def test_explicit_config_must_exist(tmp_path: Path) -> None:
    """A missing ``--config`` file is a config error."""
    with pytest.raises(ConfigError, match="Config file not found"):
        resolve_config("missing.toml", cwd=tmp_path)


def test_unknown_keys_rejected(tmp_path: Path) -> None:
    """Unknown config keys fail strict decoding."""
    path = tmp_path / "custom.toml"
    path.write_text('[paths]\nbogus = "x"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="Config validation failed"):
        resolve_config(str(path), cwd=tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    """Unparseable TOML is a config error."""
    path = tmp_path / "kibel-tools.toml"
    path.write_text("[paths\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Failed to read config file"):
        resolve_config(str(path), cwd=tmp_path)
