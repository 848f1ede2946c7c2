"""Shared utilities for kibel-tools."""

from utils.env_utils import env_flag, env_value
from utils.file_io import read_json, read_text, read_toml, write_json, write_text

__all__ = [
    "env_flag",
    "env_value",
    "read_json",
    "read_text",
    "read_toml",
    "write_json",
    "write_text",
]
