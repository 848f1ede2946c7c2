"""Request and response structs for the runtime client."""

from __future__ import annotations

from serde_msgspec import StructBaseCompat, StructBaseStrict


class FolderRef(StructBaseStrict, frozen=True):
    """Folder placement for a new note."""

    group_id: str
    folder_name: str


class CreateNoteRequest(StructBaseStrict, frozen=True):
    """Caller input for ``KibelClient.create_note``."""

    title: str
    content: str
    group_ids: tuple[str, ...]
    folders: tuple[FolderRef, ...] = ()
    coediting: bool = False
    draft: bool | None = None
    author_id: str | None = None
    published_at: str | None = None
    client_mutation_id: str | None = None


class UpdateNoteRequest(StructBaseStrict, frozen=True):
    """Caller input for ``KibelClient.update_note``."""

    id: str
    base_content: str
    new_content: str


class Note(StructBaseCompat, frozen=True):
    """Note as returned by the service."""

    id: str
    title: str = ""
    content: str = ""
    url: str | None = None


class CreateNoteResult(StructBaseStrict, frozen=True):
    """Created note plus the echoed client mutation id."""

    note: Note
    client_mutation_id: str | None = None


__all__ = ["CreateNoteRequest", "CreateNoteResult", "FolderRef", "Note", "UpdateNoteRequest"]
