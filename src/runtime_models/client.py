"""Runtime validation model for client connection settings."""

from __future__ import annotations

from pydantic import Field, field_validator, model_validator

from runtime_models.base import RuntimeBase


class ClientSettingsRuntime(RuntimeBase):
    """Validated origin, token and timeout for a GraphQL client."""

    origin: str
    token: str = Field(repr=False)
    endpoint: str | None = None
    timeout_secs: float = Field(default=5.0, gt=0)

    @field_validator("origin", "token")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            msg = "value must not be empty"
            raise ValueError(msg)
        return stripped

    @field_validator("endpoint")
    @classmethod
    def _strip_endpoint(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None

    @model_validator(mode="after")
    def _validate_origin(self) -> ClientSettingsRuntime:
        if not self.origin.startswith(("http://", "https://")):
            msg = "origin must start with http:// or https://"
            raise ValueError(msg)
        return self


__all__ = ["ClientSettingsRuntime"]
