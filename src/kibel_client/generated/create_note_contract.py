# This file is generated by `kibel-tools create-note-contract write`.
# Do not edit by hand.

from __future__ import annotations

CREATE_NOTE_INPUT_FIELDS: tuple[str, ...] = (
    "title",
    "content",
    "groupIds",
    "folders",
    "coediting",
    "draft",
    "authorId",
    "publishedAt",
    "clientMutationId",
)

CREATE_NOTE_PAYLOAD_FIELDS: tuple[str, ...] = ("clientMutationId", "note")

CREATE_NOTE_NOTE_PROJECTION_FIELDS: tuple[str, ...] = (
    "id",
    "title",
    "content",
    "url",
    "createdAt",
    "updatedAt",
)
