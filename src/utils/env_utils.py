"""Environment flag parsing for runtime toggles."""

from __future__ import annotations

import logging
import os

_LOGGER = logging.getLogger(__name__)

_FLAG_VALUES: dict[str, bool] = {
    "1": True,
    "true": True,
    "yes": True,
    "y": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "n": False,
    "off": False,
}


def env_value(name: str) -> str | None:
    """Return the trimmed value of ``name``; blank counts as unset."""
    raw = os.environ.get(name, "").strip()
    return raw or None


def env_flag(name: str, *, default: bool = False) -> bool:
    """Read ``name`` as an on/off flag.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Value used when the variable is unset, blank or unrecognized.

    Returns
    -------
    bool
        Parsed flag.
    """
    raw = env_value(name)
    if raw is None:
        return default
    flag = _FLAG_VALUES.get(raw.lower())
    if flag is None:
        _LOGGER.warning("Ignoring unrecognized value for %s: %r", name, raw)
        return default
    return flag


__all__ = ["env_flag", "env_value"]
