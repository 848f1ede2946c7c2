"""Compatibility diff between two resource contract snapshots."""

from __future__ import annotations

from contracts.canonical import canonicalize_snapshot
from contracts.models import ContractDiffResult, NormalizedResource, ResourceContractSnapshot
from core_types import JsonDict


def _missing(values: tuple[str, ...], reference: tuple[str, ...]) -> list[str]:
    present = set(reference)
    return [value for value in values if value not in present]


def _diff_resource(
    base: NormalizedResource,
    target: NormalizedResource,
    breaking: list[str],
    notes: list[str],
) -> None:
    name = base.name
    if base.kind != target.kind:
        breaking.append(f"{name}: kind changed ({base.kind} -> {target.kind})")
    if base.graphql_file != target.graphql_file:
        breaking.append(
            f"{name}: root field changed ({base.graphql_file} -> {target.graphql_file})"
        )

    newly_required = _missing(target.required_variables, base.required_variables)
    if newly_required:
        breaking.append(f"{name}: required variable(s) added: {', '.join(newly_required)}")
    removed = _missing(base.all_variables, target.all_variables)
    if removed:
        breaking.append(f"{name}: variable(s) removed: {', '.join(removed)}")

    required = set(target.required_variables)
    added_optional = [
        value
        for value in _missing(target.all_variables, base.all_variables)
        if value not in required
    ]
    if added_optional:
        notes.append(f"{name}: optional variable(s) added: {', '.join(added_optional)}")
    still_declared = set(target.all_variables)
    relaxed = [
        value
        for value in _missing(base.required_variables, target.required_variables)
        if value in still_declared
    ]
    if relaxed:
        notes.append(f"{name}: variable(s) no longer required: {', '.join(relaxed)}")


def compute_contract_diff(
    base: ResourceContractSnapshot,
    target: ResourceContractSnapshot,
) -> ContractDiffResult:
    """Classify the differences between a base and a target snapshot.

    Only variable presence and required-ness are compared. Argument types
    and default values are outside the comparison.

    Parameters
    ----------
    base
        Currently shipped contract snapshot.
    target
        Candidate contract snapshot.

    Returns
    -------
    ContractDiffResult
        Breaking changes and informational notes, in resource-name order.
    """
    base = canonicalize_snapshot(base)
    target = canonicalize_snapshot(target)
    target_map = target.resource_map()
    base_names = {resource.name for resource in base.resources}

    breaking: list[str] = []
    notes: list[str] = []
    for resource in base.resources:
        candidate = target_map.get(resource.name)
        if candidate is None:
            breaking.append(f"{resource.name}: resource removed")
            continue
        _diff_resource(resource, candidate, breaking, notes)
    notes.extend(
        f"{resource.name}: resource added"
        for resource in target.resources
        if resource.name not in base_names
    )
    return ContractDiffResult(breaking=tuple(breaking), notes=tuple(notes))


def diff_to_json(result: ContractDiffResult) -> JsonDict:
    """Return the machine-readable report for a diff result.

    Returns
    -------
    JsonDict
        ``breaking_count``, ``notes_count``, ``breaking`` and ``notes``.
    """
    return {
        "breaking_count": len(result.breaking),
        "notes_count": len(result.notes),
        "breaking": list(result.breaking),
        "notes": list(result.notes),
    }


def render_diff_text(result: ContractDiffResult) -> str:
    """Render a diff result as plain text lines."""
    lines = [f"breaking changes: {len(result.breaking)}"]
    lines.extend(f"  - {entry}" for entry in result.breaking)
    lines.append(f"notes: {len(result.notes)}")
    lines.extend(f"  - {entry}" for entry in result.notes)
    return "\n".join(lines)


__all__ = ["compute_contract_diff", "diff_to_json", "render_diff_text"]
