"""Render contract snapshots into importable Python lookup tables.

Rendering is a pure function of the canonical snapshot. The same snapshot
always produces the same bytes, so ``check`` can compare generated modules
as plain text.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from contracts.canonical import canonicalize_snapshot
from contracts.models import (
    CreateNoteContractSnapshot,
    NormalizedResource,
    ResourceContractSnapshot,
)

MAX_LINE_WIDTH: Final[int] = 99
_INDENT: Final[str] = "    "

RESOURCE_CONTRACT_WRITE_COMMAND: Final[str] = "kibel-tools resource-contract write"
CREATE_NOTE_CONTRACT_WRITE_COMMAND: Final[str] = "kibel-tools create-note-contract write"

_SIMPLE_ESCAPES: Final[dict[str, str]] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape_char(char: str) -> str:
    if char in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[char]
    if char < " " or char == "\x7f":
        return f"\\x{ord(char):02x}"
    return char


def python_string(value: str) -> str:
    """Return a double-quoted Python string literal for ``value``.

    Control characters are written as ``\\xNN`` escapes so the literal stays
    on one line and the generated module always compiles.

    Returns
    -------
    str
        Escaped literal.
    """
    return '"' + "".join(_escape_char(char) for char in value) + '"'


def _inline_tuple(values: Sequence[str]) -> str:
    if not values:
        return "()"
    if len(values) == 1:
        return f"({python_string(values[0])},)"
    return "(" + ", ".join(python_string(value) for value in values) + ")"


def render_string_tuple(prefix: str, values: Sequence[str], *, indent: str, suffix: str) -> str:
    """Render ``prefix`` followed by a string tuple, inline when it fits.

    Parameters
    ----------
    prefix
        Text preceding the tuple on its first line (``name=`` or ``NAME = ``).
    values
        Tuple items.
    indent
        Indentation of the first line.
    suffix
        Text following the closing parenthesis (``,`` or empty).

    Returns
    -------
    str
        One line when it fits within ``MAX_LINE_WIDTH``, otherwise one item
        per line with a trailing comma.
    """
    inline = f"{indent}{prefix}{_inline_tuple(values)}{suffix}"
    if len(inline) <= MAX_LINE_WIDTH:
        return inline
    lines = [f"{indent}{prefix}("]
    lines.extend(f"{indent}{_INDENT}{python_string(value)}," for value in values)
    lines.append(f"{indent}){suffix}")
    return "\n".join(lines)


def _generated_header(command: str) -> list[str]:
    return [
        f"# This file is generated by `{command}`.",
        "# Do not edit by hand.",
        "",
        "from __future__ import annotations",
        "",
    ]


def _render_resource(resource: NormalizedResource) -> list[str]:
    field_indent = _INDENT * 2
    return [
        f"{_INDENT}ResourceContract(",
        f"{field_indent}name={python_string(resource.name)},",
        f"{field_indent}kind={python_string(resource.kind)},",
        f"{field_indent}operation={python_string(resource.operation)},",
        render_string_tuple(
            "all_variables=", resource.all_variables, indent=field_indent, suffix=","
        ),
        render_string_tuple(
            "required_variables=", resource.required_variables, indent=field_indent, suffix=","
        ),
        f"{field_indent}graphql_file={python_string(resource.graphql_file)},",
        f"{field_indent}client_method={python_string(resource.client_method)},",
        f"{_INDENT}),",
    ]


def render_resource_contract_module(snapshot: ResourceContractSnapshot) -> str:
    """Render the resource contract lookup module.

    Parameters
    ----------
    snapshot
        Persisted contract snapshot. It is canonicalized before rendering.

    Returns
    -------
    str
        Module source ending with a single newline.
    """
    canonical = canonicalize_snapshot(snapshot)
    lines = _generated_header(RESOURCE_CONTRACT_WRITE_COMMAND)
    lines.extend(
        [
            "from kibel_client.contract_types import ResourceContract",
            "",
            f"RESOURCE_CONTRACT_VERSION = {canonical.schema_contract_version}",
            "RESOURCE_CONTRACT_UPSTREAM_COMMIT = "
            f"{python_string(canonical.source.upstream_commit)}",
            "",
            "RESOURCE_CONTRACTS: tuple[ResourceContract, ...] = (",
        ]
    )
    for resource in canonical.resources:
        lines.extend(_render_resource(resource))
    lines.append(")")
    return "\n".join(lines) + "\n"


def render_create_note_contract_module(snapshot: CreateNoteContractSnapshot) -> str:
    """Render the create-note field contract module.

    Returns
    -------
    str
        Module source ending with a single newline.
    """
    lines = _generated_header(CREATE_NOTE_CONTRACT_WRITE_COMMAND)
    constants = (
        ("CREATE_NOTE_INPUT_FIELDS", snapshot.create_note_input_fields),
        ("CREATE_NOTE_PAYLOAD_FIELDS", snapshot.create_note_payload_fields),
        ("CREATE_NOTE_NOTE_PROJECTION_FIELDS", snapshot.create_note_note_projection_fields),
    )
    for index, (name, values) in enumerate(constants):
        if index:
            lines.append("")
        lines.append(
            render_string_tuple(f"{name}: tuple[str, ...] = ", values, indent="", suffix="")
        )
    return "\n".join(lines) + "\n"


__all__ = [
    "CREATE_NOTE_CONTRACT_WRITE_COMMAND",
    "MAX_LINE_WIDTH",
    "RESOURCE_CONTRACT_WRITE_COMMAND",
    "python_string",
    "render_create_note_contract_module",
    "render_resource_contract_module",
    "render_string_tuple",
]
