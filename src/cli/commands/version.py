"""``kibel-tools version``: package and compiled-in contract versions."""

from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from kibel_client.generated.create_note_contract import CREATE_NOTE_INPUT_FIELDS
from kibel_client.generated.resource_contracts import (
    RESOURCE_CONTRACT_UPSTREAM_COMMIT,
    RESOURCE_CONTRACT_VERSION,
    RESOURCE_CONTRACTS,
)
from serde_msgspec import dumps_json

PACKAGE_NAME = "kibel-tools"
_REPORTED_DEPENDENCIES = ("cyclopts", "httpx", "msgspec", "pydantic", "rich")


def get_version() -> str:
    """Return the installed kibel-tools version, or ``0.0.0-dev`` from a checkout."""
    return _package_version(PACKAGE_NAME) or "0.0.0-dev"


def get_version_info() -> dict[str, object]:
    """Collect the version report.

    Returns
    -------
    dict[str, object]
        Package, interpreter and dependency versions plus the contract
        tables compiled into this build.
    """
    return {
        PACKAGE_NAME: get_version(),
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "resource_contract": {
            "version": RESOURCE_CONTRACT_VERSION,
            "upstream_commit": RESOURCE_CONTRACT_UPSTREAM_COMMIT,
            "resources": len(RESOURCE_CONTRACTS),
        },
        "create_note_contract": {
            "input_fields": len(CREATE_NOTE_INPUT_FIELDS),
        },
        "dependencies": {name: _package_version(name) for name in _REPORTED_DEPENDENCIES},
    }


def version_command() -> int:
    """Print the version report as JSON.

    Returns
    -------
    int
        Always 0.
    """
    sys.stdout.write(dumps_json(get_version_info(), pretty=True).decode() + "\n")
    return 0


def _package_version(name: str) -> str | None:
    try:
        return pkg_version(name)
    except PackageNotFoundError:
        return None


__all__ = ["get_version", "get_version_info", "version_command"]
