"""Pydantic base for settings validated at the CLI and client boundary."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RuntimeBase(BaseModel):
    """Immutable model that rejects unknown fields and validates defaults."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        validate_default=True,
        hide_input_in_errors=True,
    )


__all__ = ["RuntimeBase"]
