"""Types shared by the generated contract modules and the client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceContract:
    """Compiled-in contract for one trusted GraphQL operation."""

    name: str
    kind: str
    operation: str
    all_variables: tuple[str, ...]
    required_variables: tuple[str, ...]
    graphql_file: str
    client_method: str

    @property
    def root_field(self) -> str:
        """Return the root field encoded in ``graphql_file``."""
        return self.graphql_file.rsplit(".", 1)[-1].strip()


__all__ = ["ResourceContract"]
