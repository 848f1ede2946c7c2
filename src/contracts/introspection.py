"""Fixed introspection documents and parsers for their responses."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Final

from contracts.errors import InputInvalidError
from contracts.models import GraphqlArgument, GraphqlFieldSpec, GraphqlTypeRef
from kibel_client.create_note_schema import CREATE_NOTE_SCHEMA_QUERY
from serde_msgspec import mapping_at

if TYPE_CHECKING:
    from core_types import JsonDict
    from kibel_client.transport import GraphqlTransport

logger = logging.getLogger(__name__)

TYPE_REF_MAX_DEPTH: Final[int] = 8


def _type_ref_fragment(depth: int = TYPE_REF_MAX_DEPTH) -> str:
    lines = ["fragment TypeRef on __Type {"]
    indent = "  "
    for level in range(depth):
        lines.append(f"{indent}kind")
        lines.append(f"{indent}name")
        if level < depth - 1:
            lines.append(f"{indent}ofType {{")
            indent += "  "
    for _ in range(depth - 1):
        indent = indent[:-2]
        lines.append(f"{indent}}}")
    lines.append("}")
    return "\n".join(lines)


_ROOT_FIELDS_SELECTION = """
      fields {
        name
        args {
          name
          defaultValue
          type {
            ...TypeRef
          }
        }
        type {
          ...TypeRef
        }
      }"""

INTROSPECTION_QUERY: Final[str] = (
    "query EndpointIntrospection {\n"
    "  __schema {\n"
    f"    queryType {{{_ROOT_FIELDS_SELECTION}\n    }}\n"
    f"    mutationType {{{_ROOT_FIELDS_SELECTION}\n    }}\n"
    "  }\n"
    "}\n\n" + _type_ref_fragment() + "\n"
)

_ROOT_TYPE_KEYS: Final[Mapping[str, str]] = {
    "query": "queryType",
    "mutation": "mutationType",
}


def parse_type_ref(value: object, *, context: str, depth: int = 0) -> GraphqlTypeRef:
    """Parse one introspected ``__Type`` reference chain.

    Parameters
    ----------
    value
        Decoded ``type`` object from an introspection response.
    context
        Location label used in error messages.
    depth
        Current unwrap depth.

    Returns
    -------
    GraphqlTypeRef
        Parsed type reference, truncated at ``TYPE_REF_MAX_DEPTH`` levels.

    Raises
    ------
    InputInvalidError
        Raised when the value is not an object or has no ``kind``.
    """
    if not isinstance(value, Mapping):
        msg = f"{context} must be an object"
        raise InputInvalidError(msg)
    kind = value.get("kind")
    if not isinstance(kind, str) or not kind.strip():
        msg = f"{context} missing kind"
        raise InputInvalidError(msg)
    raw_name = value.get("name")
    name = raw_name.strip() if isinstance(raw_name, str) and raw_name.strip() else None
    child = value.get("ofType")
    of_type = None
    if child is not None and depth + 1 < TYPE_REF_MAX_DEPTH:
        of_type = parse_type_ref(child, context=f"{context}.ofType", depth=depth + 1)
    return GraphqlTypeRef(kind=kind.strip(), name=name, of_type=of_type)


def render_type_ref(type_ref: GraphqlTypeRef) -> str:
    """Render a type reference in GraphQL SDL notation (``[ID!]!``).

    Returns
    -------
    str
        SDL type string.
    """
    if type_ref.kind == "NON_NULL":
        inner = render_type_ref(type_ref.of_type) if type_ref.of_type else "JSON"
        return f"{inner}!"
    if type_ref.kind == "LIST":
        inner = render_type_ref(type_ref.of_type) if type_ref.of_type else "JSON"
        return f"[{inner}]"
    return type_ref.name or "JSON"


def arg_is_required(arg: Mapping[str, object]) -> bool:
    """Return whether a caller must supply an introspected argument.

    An argument is required when its outer type wrapper is ``NON_NULL`` and
    no default value is declared.

    Returns
    -------
    bool
        True when the argument is mandatory.
    """
    type_value = arg.get("type")
    kind = type_value.get("kind") if isinstance(type_value, Mapping) else None
    return kind == "NON_NULL" and arg.get("defaultValue") is None


def parse_root_fields(payload: object, kind: str) -> dict[str, GraphqlFieldSpec]:
    """Parse the root fields of the query or mutation type.

    Parameters
    ----------
    payload
        Full introspection response (``{"data": {"__schema": ...}}``).
    kind
        ``"query"`` or ``"mutation"``.

    Returns
    -------
    dict[str, GraphqlFieldSpec]
        Root fields keyed by name, in response order.

    Raises
    ------
    InputInvalidError
        Raised when the root type or a field entry is malformed.
    """
    type_key = _ROOT_TYPE_KEYS.get(kind)
    if type_key is None:
        msg = f"unsupported graphql kind: {kind}"
        raise InputInvalidError(msg)
    fields = mapping_at(payload, "data", "__schema", type_key, "fields")
    if not isinstance(fields, Sequence) or isinstance(fields, str):
        msg = f"introspection missing {kind} fields"
        raise InputInvalidError(msg)
    result: dict[str, GraphqlFieldSpec] = {}
    for index, field in enumerate(fields):
        context = f"{kind} fields[{index}]"
        if not isinstance(field, Mapping):
            msg = f"{context} must be an object"
            raise InputInvalidError(msg)
        name = _trimmed_name(field, context)
        raw_args = field.get("args") or ()
        args = tuple(
            _parse_argument(arg, f"{context}.args[{arg_index}]")
            for arg_index, arg in enumerate(raw_args)
        )
        result[name] = GraphqlFieldSpec(name=name, args=args)
    return result


def collect_name_list(value: object, *, context: str) -> tuple[str, ...]:
    """Collect unique, trimmed ``name`` entries from an introspection list.

    Returns
    -------
    tuple[str, ...]
        Names in first-seen order, with blanks dropped.

    Raises
    ------
    InputInvalidError
        Raised when the value is not a list of named objects.
    """
    if not isinstance(value, Sequence) or isinstance(value, str):
        msg = f"{context} must be an array"
        raise InputInvalidError(msg)
    seen: set[str] = set()
    names: list[str] = []
    for item in value:
        name = item.get("name") if isinstance(item, Mapping) else None
        if not isinstance(name, str):
            msg = f"{context} should contain objects with string `name`"
            raise InputInvalidError(msg)
        normalized = name.strip()
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        names.append(normalized)
    return tuple(names)


def _parse_argument(arg: object, context: str) -> GraphqlArgument:
    if not isinstance(arg, Mapping):
        msg = f"{context} must be an object"
        raise InputInvalidError(msg)
    name = _trimmed_name(arg, context)
    if "type" not in arg:
        msg = f"{context} missing type"
        raise InputInvalidError(msg)
    type_ref = parse_type_ref(arg["type"], context=f"{context}.type")
    return GraphqlArgument(name=name, required=arg_is_required(arg), type_ref=type_ref)


def _trimmed_name(value: Mapping[str, object], context: str) -> str:
    name = value.get("name")
    if not isinstance(name, str):
        msg = f"{context} missing string `name`"
        raise InputInvalidError(msg)
    return name.strip()


class EndpointIntrospector:
    """Issue the fixed introspection documents over a GraphQL transport."""

    def __init__(self, transport: GraphqlTransport) -> None:
        self._transport = transport

    def fetch_endpoint_schema(self) -> JsonDict:
        """Return the raw root-field introspection response.

        Returns
        -------
        JsonDict
            Decoded response payload.
        """
        logger.info("Fetching endpoint introspection from %s", self._transport.endpoint)
        return self._transport.execute(INTROSPECTION_QUERY, {})

    def fetch_create_note_schema(self) -> JsonDict:
        """Return the raw create-note type introspection response.

        Returns
        -------
        JsonDict
            Decoded response payload.
        """
        logger.debug("Fetching create-note schema from %s", self._transport.endpoint)
        return self._transport.execute(CREATE_NOTE_SCHEMA_QUERY, {})


__all__ = [
    "CREATE_NOTE_SCHEMA_QUERY",
    "INTROSPECTION_QUERY",
    "TYPE_REF_MAX_DEPTH",
    "EndpointIntrospector",
    "arg_is_required",
    "collect_name_list",
    "parse_root_fields",
    "parse_type_ref",
    "render_type_ref",
]
