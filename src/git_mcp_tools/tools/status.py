"""git_status tool: human-readable working tree status."""

from __future__ import annotations

import logging
from typing import Any

from git import GitCommandError

from git_mcp_tools.exceptions import GitOperationError
from git_mcp_tools.repository import (
    DETACHED_HEAD,
    RepositorySession,
    describe_git_error,
    open_repository,
    read_status,
    validate_repository_path,
)
from git_mcp_tools.responses import ToolResponse, text_response, tool_handler

logger = logging.getLogger(__name__)


def _section(title: str, empty: str, paths: list[str]) -> str:
    if not paths:
        return empty
    return f"{title}:\n" + "\n".join(f"  - {path}" for path in paths)


def git_status(repo_path: Any, session: RepositorySession | None = None) -> str:
    """Describe the branch, changed files and upstream divergence.

    Args:
        repo_path: Path to the git repository
        session: Repository session to open the repository through

    Returns:
        Multi-section status report.
    """
    logger.debug("Starting git status operation: repo=%s", repo_path)
    path = validate_repository_path(repo_path)
    repo = open_repository(path, session)

    try:
        status = read_status(repo)
    except GitCommandError as e:
        raise GitOperationError(describe_git_error(e)) from e

    branch = DETACHED_HEAD if status.detached else status.current

    if status.ahead > 0 or status.behind > 0:
        divergence = (
            f"Branch is {status.ahead} commits ahead, {status.behind} commits behind"
        )
    else:
        divergence = "Branch is up to date with remote"

    sections = [
        f"Repository Status for: {path}",
        f"Current branch: {branch}",
        _section("Staged files", "No staged files", status.staged),
        _section("Modified files", "No modified files", status.modified),
        _section("Untracked files", "No untracked files", status.not_added),
        divergence,
    ]
    return "\n\n".join(sections)


@tool_handler()
def handle_git_status(
    repo_path: Any = None, session: RepositorySession | None = None
) -> ToolResponse:
    return text_response(git_status(repo_path, session=session))
