"""msgspec models for persisted schema-contract artifacts."""

from __future__ import annotations

import msgspec

from core_types import PositiveInt
from serde_msgspec import StructBaseCompat, StructBaseStrict

RESOURCE_CONTRACT_FORMAT_VERSION = 1
CREATE_NOTE_CONTRACT_FORMAT_VERSION = 1
ENDPOINT_SNAPSHOT_MODE = "endpoint_introspection_snapshot"


class GraphqlTypeRef(StructBaseStrict, frozen=True):
    """One level of an introspected GraphQL type reference."""

    kind: str
    name: str | None = None
    of_type: GraphqlTypeRef | None = None

    @property
    def is_non_null(self) -> bool:
        """Return True when the outer wrapper is ``NON_NULL``."""
        return self.kind == "NON_NULL"

    def named_type(self) -> str | None:
        """Return the innermost named type, unwrapping list/non-null wrappers.

        Returns
        -------
        str | None
            Named type, or None when the reference carries no name.
        """
        ref: GraphqlTypeRef | None = self
        while ref is not None:
            if ref.name is not None:
                return ref.name
            ref = ref.of_type
        return None


class GraphqlArgument(StructBaseStrict, frozen=True):
    """Root-field argument as seen through introspection."""

    name: str
    required: bool
    type_ref: GraphqlTypeRef


class GraphqlFieldSpec(StructBaseStrict, frozen=True):
    """Root field with its arguments, in server response order."""

    name: str
    args: tuple[GraphqlArgument, ...] = ()


class EndpointResource(StructBaseCompat, frozen=True):
    """Introspected shape of one resource's root field."""

    name: str
    kind: str
    field: str
    operation: str
    client_method: str
    all_variables: tuple[str, ...] = ()
    required_variables: tuple[str, ...] = ()


class EndpointSnapshot(StructBaseCompat, frozen=True):
    """Canonical capture of the live endpoint, keyed by resource name."""

    captured_at: str = ""
    origin: str = ""
    endpoint: str = ""
    resources: tuple[EndpointResource, ...] = ()

    def resource_map(self) -> dict[str, EndpointResource]:
        """Return resources keyed by name.

        Returns
        -------
        dict[str, EndpointResource]
            Mapping of resource name to resource.
        """
        return {resource.name: resource for resource in self.resources}


class ContractSource(StructBaseCompat, frozen=True):
    """Provenance of a resource contract snapshot."""

    mode: str = ""
    endpoint_snapshot: str = ""
    captured_at: str = ""
    origin: str = ""
    endpoint: str = ""
    upstream_commit: str = ""


class NormalizedResource(StructBaseCompat, frozen=True):
    """Contract entry for one resource."""

    name: str
    kind: str
    operation: str
    all_variables: tuple[str, ...]
    required_variables: tuple[str, ...]
    graphql_file: str
    client_method: str

    @property
    def root_field(self) -> str:
        """Return the root field recorded in ``graphql_file``."""
        return self.graphql_file.rsplit(".", 1)[-1].strip()


class ResourceContractSnapshot(StructBaseCompat, frozen=True, kw_only=True):
    """Versioned description of every tracked resource's shape."""

    schema_contract_version: PositiveInt
    captured_at: str = ""
    source: ContractSource
    resources: tuple[NormalizedResource, ...]

    def resource_map(self) -> dict[str, NormalizedResource]:
        """Return resources keyed by name.

        Returns
        -------
        dict[str, NormalizedResource]
            Mapping of resource name to resource.
        """
        return {resource.name: resource for resource in self.resources}


class ContractDiffResult(StructBaseStrict, frozen=True):
    """Classified differences between two contract snapshots."""

    breaking: tuple[str, ...] = ()
    notes: tuple[str, ...] = ()

    @property
    def has_breaking(self) -> bool:
        """Return True when at least one breaking change was found."""
        return bool(self.breaking)


class CreateNoteContractSource(StructBaseCompat, frozen=True):
    """Provenance of the create-note field contract."""

    origin: str = ""
    artifact: str = ""


class CreateNoteContractSnapshot(StructBaseCompat, frozen=True, kw_only=True):
    """Field-name contract for the create-note mutation."""

    schema_contract_version: PositiveInt
    captured_at: str = ""
    source: CreateNoteContractSource = msgspec.field(default_factory=CreateNoteContractSource)
    create_note_input_fields: tuple[str, ...]
    create_note_payload_fields: tuple[str, ...]
    create_note_note_projection_fields: tuple[str, ...]
    required_input_fields: tuple[str, ...]
    required_payload_fields: tuple[str, ...]


__all__ = [
    "CREATE_NOTE_CONTRACT_FORMAT_VERSION",
    "ENDPOINT_SNAPSHOT_MODE",
    "RESOURCE_CONTRACT_FORMAT_VERSION",
    "ContractDiffResult",
    "ContractSource",
    "CreateNoteContractSnapshot",
    "CreateNoteContractSource",
    "EndpointResource",
    "EndpointSnapshot",
    "GraphqlArgument",
    "GraphqlFieldSpec",
    "GraphqlTypeRef",
    "NormalizedResource",
    "ResourceContractSnapshot",
]
