# This file is generated by `kibel-tools resource-contract write`.
# Do not edit by hand.

from __future__ import annotations

from kibel_client.contract_types import ResourceContract

RESOURCE_CONTRACT_VERSION = 1
RESOURCE_CONTRACT_UPSTREAM_COMMIT = ""

RESOURCE_CONTRACTS: tuple[ResourceContract, ...] = (
    ResourceContract(
        name="attachNoteToFolder",
        kind="mutation",
        operation="AttachNoteToFolder",
        all_variables=("input",),
        required_variables=("input",),
        graphql_file="endpoint:mutation.attachNoteToFolder",
        client_method="attach_note_to_folder",
    ),
    ResourceContract(
        name="createComment",
        kind="mutation",
        operation="CreateComment",
        all_variables=("input",),
        required_variables=("input",),
        graphql_file="endpoint:mutation.createComment",
        client_method="create_comment",
    ),
    ResourceContract(
        name="createCommentReply",
        kind="mutation",
        operation="CreateCommentReply",
        all_variables=("input",),
        required_variables=("input",),
        graphql_file="endpoint:mutation.createCommentReply",
        client_method="create_comment_reply",
    ),
    ResourceContract(
        name="createFolder",
        kind="mutation",
        operation="CreateFolder",
        all_variables=("input",),
        required_variables=("input",),
        graphql_file="endpoint:mutation.createFolder",
        client_method="create_folder",
    ),
    ResourceContract(
        name="createNote",
        kind="mutation",
        operation="CreateNote",
        all_variables=("input",),
        required_variables=("input",),
        graphql_file="endpoint:mutation.createNote",
        client_method="create_note",
    ),
    ResourceContract(
        name="getFeedSections",
        kind="query",
        operation="GetFeedSections",
        all_variables=("kind", "groupId", "first", "after", "last", "before"),
        required_variables=("kind", "groupId"),
        graphql_file="endpoint:query.feedSections",
        client_method="get_feed_sections",
    ),
    ResourceContract(
        name="getFolder",
        kind="query",
        operation="GetFolder",
        all_variables=("id",),
        required_variables=("id",),
        graphql_file="endpoint:query.folder",
        client_method="get_folder",
    ),
    ResourceContract(
        name="getFolderFromPath",
        kind="query",
        operation="GetFolderFromPath",
        all_variables=("path",),
        required_variables=("path",),
        graphql_file="endpoint:query.folderFromPath",
        client_method="get_folder_from_path",
    ),
    ResourceContract(
        name="getFolders",
        kind="query",
        operation="GetFolders",
        all_variables=("first", "after", "last", "before"),
        required_variables=(),
        graphql_file="endpoint:query.folders",
        client_method="get_folders",
    ),
    ResourceContract(
        name="getGroups",
        kind="query",
        operation="GetGroups",
        all_variables=("first", "after", "last", "before"),
        required_variables=(),
        graphql_file="endpoint:query.groups",
        client_method="get_groups",
    ),
    ResourceContract(
        name="getNote",
        kind="query",
        operation="GetNote",
        all_variables=("id",),
        required_variables=("id",),
        graphql_file="endpoint:query.note",
        client_method="get_note",
    ),
    ResourceContract(
        name="getNoteFromPath",
        kind="query",
        operation="GetNoteFromPath",
        all_variables=("path",),
        required_variables=("path",),
        graphql_file="endpoint:query.noteFromPath",
        client_method="get_note_from_path",
    ),
    ResourceContract(
        name="getNotes",
        kind="query",
        operation="GetNotes",
        all_variables=("folderId", "first", "after", "last", "before"),
        required_variables=("folderId",),
        graphql_file="endpoint:query.notes",
        client_method="get_notes",
    ),
    ResourceContract(
        name="moveNoteToAnotherFolder",
        kind="mutation",
        operation="MoveNoteToAnotherFolder",
        all_variables=("input",),
        required_variables=("input",),
        graphql_file="endpoint:mutation.moveNoteToAnotherFolder",
        client_method="move_note_to_another_folder",
    ),
    ResourceContract(
        name="searchFolder",
        kind="query",
        operation="SearchFolder",
        all_variables=("query", "first", "after", "last", "before"),
        required_variables=("query",),
        graphql_file="endpoint:query.searchFolder",
        client_method="search_folder",
    ),
    ResourceContract(
        name="searchNote",
        kind="query",
        operation="SearchNote",
        all_variables=(
            "query",
            "resources",
            "coediting",
            "updated",
            "groupIds",
            "userIds",
            "folderIds",
            "likerIds",
            "isArchived",
            "sortBy",
            "first",
            "after",
            "last",
            "before",
        ),
        required_variables=("query",),
        graphql_file="endpoint:query.search",
        client_method="search_note",
    ),
    ResourceContract(
        name="updateNoteContent",
        kind="mutation",
        operation="UpdateNoteContent",
        all_variables=("input",),
        required_variables=("input",),
        graphql_file="endpoint:mutation.updateNoteContent",
        client_method="update_note",
    ),
)
