"""Pydantic runtime models for connection settings."""

from runtime_models.adapters import CLIENT_SETTINGS_ADAPTER
from runtime_models.base import RuntimeBase
from runtime_models.client import ClientSettingsRuntime

__all__ = [
    "CLIENT_SETTINGS_ADAPTER",
    "ClientSettingsRuntime",
    "RuntimeBase",
]
