"""Centralized TypeAdapter instances for runtime validation."""

from __future__ import annotations

from pydantic import TypeAdapter

from runtime_models.client import ClientSettingsRuntime

CLIENT_SETTINGS_ADAPTER = TypeAdapter(ClientSettingsRuntime)

__all__ = ["CLIENT_SETTINGS_ADAPTER"]
