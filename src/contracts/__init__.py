"""Schema-contract governance for the note service's GraphQL API."""

from contracts.builder import build_contract_snapshot
from contracts.canonical import canonicalize_snapshot, load_contract_snapshot
from contracts.codegen import render_create_note_contract_module, render_resource_contract_module
from contracts.definitions import RESOURCE_DEFINITIONS, ResourceDefinition
from contracts.diff import compute_contract_diff, diff_to_json
from contracts.errors import (
    ArtifactIOError,
    ContractError,
    ContractResourceMissingError,
    InputInvalidError,
    RequiredVariableNotDeclaredError,
    SchemaFieldMissingError,
    StaleArtifactError,
    UnexpectedResourceError,
)
from contracts.models import (
    ContractDiffResult,
    EndpointSnapshot,
    NormalizedResource,
    ResourceContractSnapshot,
)
from contracts.normalizer import load_endpoint_snapshot, normalize_endpoint_snapshot

__all__ = [
    "RESOURCE_DEFINITIONS",
    "ArtifactIOError",
    "ContractDiffResult",
    "ContractError",
    "ContractResourceMissingError",
    "EndpointSnapshot",
    "InputInvalidError",
    "NormalizedResource",
    "RequiredVariableNotDeclaredError",
    "ResourceContractSnapshot",
    "ResourceDefinition",
    "SchemaFieldMissingError",
    "StaleArtifactError",
    "UnexpectedResourceError",
    "build_contract_snapshot",
    "canonicalize_snapshot",
    "compute_contract_diff",
    "diff_to_json",
    "load_contract_snapshot",
    "load_endpoint_snapshot",
    "normalize_endpoint_snapshot",
    "render_create_note_contract_module",
    "render_resource_contract_module",
]
