"""Shared pytest configuration for kibel-tools tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from contracts.workflows import ContractPaths

REPO_ROOT = Path(__file__).resolve().parents[1]

_ARTIFACTS = (
    "schema/introspection/resource_contracts.endpoint.snapshot.json",
    "schema/resource_contracts.snapshot.json",
    "schema/create_note_contract.snapshot.json",
    "src/kibel_client/generated/resource_contracts.py",
    "src/kibel_client/generated/create_note_contract.py",
)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add --update-golden option for regenerating golden files."""
    parser.addoption(
        "--update-golden",
        action="store_true",
        default=False,
        help="Update golden snapshot files with current output",
    )


@pytest.fixture
def update_golden(request: pytest.FixtureRequest) -> bool:
    """Fixture to check if golden files should be updated.

    Returns
    -------
    bool
        True if --update-golden was passed.
    """
    return bool(request.config.getoption("--update-golden"))


@pytest.fixture
def repo_root() -> Path:
    """Return the checkout root holding the committed artifacts.

    Returns
    -------
    Path
        Repository root.
    """
    return REPO_ROOT


@pytest.fixture
def artifact_repo(tmp_path: Path) -> ContractPaths:
    """Copy the committed artifacts into a scratch repository.

    Returns
    -------
    ContractPaths
        Artifact paths under ``tmp_path``.
    """
    for relative in _ARTIFACTS:
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(REPO_ROOT / relative, target)
    return ContractPaths.under(tmp_path)
