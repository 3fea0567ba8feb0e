"""git_add tool: stage files in a repository."""

from __future__ import annotations

import logging
from typing import Any

from git import GitCommandError

from git_mcp_tools.exceptions import GitOperationError
from git_mcp_tools.repository import (
    RepositorySession,
    describe_git_error,
    open_repository,
    read_status,
)
from git_mcp_tools.responses import CamelModel, ToolResponse, json_response, tool_handler

logger = logging.getLogger(__name__)


class AddInput(CamelModel):
    """Parameters accepted by git_add."""

    repo_path: str
    files: list[str] | None = None


class AddResult(CamelModel):
    """Files that ended up in the index after staging."""

    added_files: list[str]
    file_count: int


def git_add(
    repo_path: str,
    files: list[str] | None = None,
    session: RepositorySession | None = None,
) -> AddResult:
    """Stage the given files, or everything (`.`) when none are given.

    Args:
        repo_path: Path to the git repository
        files: Paths to stage
        session: Repository session to open the repository through

    Returns:
        Index entries whose staging column is neither blank nor untracked.
    """
    logger.debug("Starting git add operation: repo=%s files=%s", repo_path, files)
    repo = open_repository(repo_path, session)

    try:
        if files:
            logger.debug("Adding specific files: %s", files)
            repo.git.add(*files)
        else:
            logger.debug("Adding all files")
            repo.git.add(".")

        status = read_status(repo)
    except GitCommandError as e:
        raise GitOperationError(f"Failed to add files: {describe_git_error(e)}") from e


    added_files = [
        entry.path for entry in status.files if entry.index not in (" ", "?")
    ]
    logger.debug("Git add completed: %d files staged", len(added_files))
    return AddResult(added_files=added_files, file_count=len(added_files))


@tool_handler()
def handle_git_add(
    params: dict[str, Any], session: RepositorySession | None = None
) -> ToolResponse:
    request = AddInput.model_validate(params)
    return json_response(git_add(request.repo_path, request.files, session=session))
