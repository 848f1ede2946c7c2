"""Static table of GraphQL operations tracked by the resource contract."""

from __future__ import annotations

from dataclasses import dataclass

from core_types import ResourceKind


@dataclass(frozen=True)
class ResourceDefinition:
    """Compiled-in description of one client operation.

    Parameters
    ----------
    name
        Globally unique resource name.
    kind
        GraphQL root operation kind.
    field
        Root field on the query or mutation type.
    client_method
        Client method that issues the operation.
    """

    name: str
    kind: ResourceKind
    field: str
    client_method: str

    @property
    def operation(self) -> str:
        """Return the GraphQL operation name for this resource.

        Returns
        -------
        str
            PascalCase form of the resource name.
        """
        return to_pascal_case(self.name)


RESOURCE_DEFINITIONS: tuple[ResourceDefinition, ...] = (
    ResourceDefinition("searchNote", "query", "search", "search_note"),
    ResourceDefinition("searchFolder", "query", "searchFolder", "search_folder"),
    ResourceDefinition("getGroups", "query", "groups", "get_groups"),
    ResourceDefinition("getFolders", "query", "folders", "get_folders"),
    ResourceDefinition("getNotes", "query", "notes", "get_notes"),
    ResourceDefinition("getNote", "query", "note", "get_note"),
    ResourceDefinition("getNoteFromPath", "query", "noteFromPath", "get_note_from_path"),
    ResourceDefinition("getFolder", "query", "folder", "get_folder"),
    ResourceDefinition("getFolderFromPath", "query", "folderFromPath", "get_folder_from_path"),
    ResourceDefinition("getFeedSections", "query", "feedSections", "get_feed_sections"),
    ResourceDefinition("createNote", "mutation", "createNote", "create_note"),
    ResourceDefinition("createComment", "mutation", "createComment", "create_comment"),
    ResourceDefinition(
        "createCommentReply", "mutation", "createCommentReply", "create_comment_reply"
    ),
    ResourceDefinition("createFolder", "mutation", "createFolder", "create_folder"),
    ResourceDefinition(
        "moveNoteToAnotherFolder",
        "mutation",
        "moveNoteToAnotherFolder",
        "move_note_to_another_folder",
    ),
    ResourceDefinition(
        "attachNoteToFolder", "mutation", "attachNoteToFolder", "attach_note_to_folder"
    ),
    ResourceDefinition("updateNoteContent", "mutation", "updateNoteContent", "update_note"),
)


def to_pascal_case(value: str) -> str:
    """Upper-case the first character of a camelCase identifier.

    Returns
    -------
    str
        PascalCase identifier.
    """
    if not value:
        return value
    return value[0].upper() + value[1:]


def definition_names(
    definitions: tuple[ResourceDefinition, ...] = RESOURCE_DEFINITIONS,
) -> frozenset[str]:
    """Return the set of resource names in a definition table.

    Returns
    -------
    frozenset[str]
        Declared resource names.
    """
    return frozenset(definition.name for definition in definitions)


__all__ = [
    "RESOURCE_DEFINITIONS",
    "ResourceDefinition",
    "definition_names",
    "to_pascal_case",
]
