"""git_commit tool: stage all changes and record a commit."""

from __future__ import annotations

import logging
import re
from typing import Any

from git import GitCommandError

from git_mcp_tools.exceptions import GitOperationError
from git_mcp_tools.repository import (
    RepositorySession,
    describe_git_error,
    open_repository,
    read_status,
    validate_non_empty_string,
    validate_repository_path,
)
from git_mcp_tools.responses import ToolResponse, text_response, tool_handler

logger = logging.getLogger(__name__)

NOTHING_TO_COMMIT = "No changes to commit. Working tree is clean."

_CHANGED = re.compile(r"(\d+) files? changed")
_INSERTIONS = re.compile(r"(\d+) insertions?\(\+\)")
_DELETIONS = re.compile(r"(\d+) deletions?\(-\)")


def _count(pattern: re.Pattern[str], output: str) -> int:
    match = pattern.search(output)
    return int(match.group(1)) if match else 0


def git_commit(
    repo_path: Any, message: Any, session: RepositorySession | None = None
) -> str:
    """Stage every change and commit it.

    Both arguments are checked here rather than by a schema, so a
    missing or non-string value is reported as
    '<field> is required and must be a string'.

    Args:
        repo_path: Path to the git repository
        message: Commit message
        session: Repository session to open the repository through

    Returns:
        Summary text with the new commit hash and diff statistics, or a
        notice that the working tree is clean.
    """
    logger.debug("Starting git commit operation: repo=%s", repo_path)

    validate_repository_path(repo_path)
    validate_non_empty_string(message, "Commit message")
    repo = open_repository(repo_path, session)

    try:
        status = read_status(repo)
        logger.debug("Repository status: %d files", len(status.files))

        if not status.files:
            logger.debug("No changes to commit")
            return NOTHING_TO_COMMIT

        repo.git.add(".")
        output = repo.git.commit("-m", message)
        commit_hash = repo.head.commit.hexsha
    except GitCommandError as e:
        raise GitOperationError(describe_git_error(e)) from e

    changes = _count(_CHANGED, output)
    insertions = _count(_INSERTIONS, output)
    deletions = _count(_DELETIONS, output)

    logger.debug("Git commit completed: %s", commit_hash)
    return (
        f"Successfully created commit: {commit_hash}\n"
        f"Message: {message}\n"
        f"Files changed: {changes} ({insertions} insertions, {deletions} deletions)"
    )


@tool_handler()
def handle_git_commit(
    repo_path: Any = None,
    message: Any = None,
    session: RepositorySession | None = None,
) -> ToolResponse:
    return text_response(git_commit(repo_path, message, session=session))
