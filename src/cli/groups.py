"""Shared help-panel groups for the kibel-tools CLI."""

from __future__ import annotations

from cyclopts import Group

session_group = Group(
    "Session",
    help="Session and run context options.",
    sort_key=0,
)

connection_group = Group(
    "Connection",
    help="Live endpoint connection used by refresh commands.",
    sort_key=1,
)

output_group = Group(
    "Output",
    help="Configure command output.",
    sort_key=2,
)

__all__ = ["connection_group", "output_group", "session_group"]
