"""Contract tooling error types."""

from __future__ import annotations

from collections.abc import Sequence


class ContractError(Exception):
    """Base class for contract tooling errors."""


class InputInvalidError(ContractError, ValueError):
    """Raised when an artifact or introspection payload is malformed."""


class SchemaFieldMissingError(ContractError, LookupError):
    """Raised when introspection lacks an expected root field."""

    def __init__(self, kind: str, field: str) -> None:
        super().__init__(f"introspection is missing {kind} field `{field}`")
        self.kind = kind
        self.field = field


class ContractResourceMissingError(ContractError, LookupError):
    """Raised when a declared resource is absent from an endpoint snapshot."""

    def __init__(self, name: str) -> None:
        super().__init__(f"endpoint snapshot is missing resource `{name}`")
        self.name = name


class UnexpectedResourceError(ContractError, ValueError):
    """Raised when an endpoint snapshot names resources the static table does not know."""

    def __init__(self, names: Sequence[str]) -> None:
        joined = ", ".join(names)
        super().__init__(
            "endpoint snapshot contains unknown resources: "
            f"{joined}. Update the resource definition table, client, and tests first."
        )
        self.names = tuple(names)


class RequiredVariableNotDeclaredError(InputInvalidError):
    """Raised when required variables are not part of a resource's variable list."""

    def __init__(self, resource: str, variables: Sequence[str]) -> None:
        joined = ", ".join(variables)
        super().__init__(
            f"resource `{resource}` has required variables not in all_variables: {joined}"
        )
        self.resource = resource
        self.variables = tuple(variables)


class StaleArtifactError(ContractError):
    """Raised by check operations when a persisted artifact is out of date."""

    def __init__(self, artifact: str, remediation: str) -> None:
        super().__init__(f"{artifact} is stale. run:\n  {remediation}")
        self.artifact = artifact
        self.remediation = remediation


class ArtifactIOError(ContractError, OSError):
    """Raised when an artifact cannot be read or written."""


__all__ = [
    "ArtifactIOError",
    "ContractError",
    "ContractResourceMissingError",
    "InputInvalidError",
    "RequiredVariableNotDeclaredError",
    "SchemaFieldMissingError",
    "StaleArtifactError",
    "UnexpectedResourceError",
]
