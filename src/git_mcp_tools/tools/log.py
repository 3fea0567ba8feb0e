"""git_log tool: commit history of a branch."""

from __future__ import annotations

import logging
from typing import Any

from git import GitCommandError
from pydantic import Field, field_validator

from git_mcp_tools.exceptions import (
    BranchNotFoundError,
    GitOperationError,
    ValidationError,
)
from git_mcp_tools.repository import (
    RepositorySession,
    describe_git_error,
    open_repository,
    read_branches,
)
from git_mcp_tools.responses import CamelModel, ToolResponse, json_response, tool_handler

logger = logging.getLogger(__name__)

DEFAULT_MAX_COUNT = 10
INVALID_MAX_COUNT = "maxCount must be a positive number"


class LogInput(CamelModel):
    """Parameters accepted by git_log."""

    repo_path: str
    max_count: int = DEFAULT_MAX_COUNT
    branch: str | None = Field(default=None, min_length=1)

    @field_validator("max_count")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(INVALID_MAX_COUNT)
        return value


class LogEntry(CamelModel):
    """A single commit.

    Attributes:
        hash: Full commit SHA
        date: ISO-8601 author date
        message: Commit summary line
        author: Author name
        email: Author email
    """

    hash: str
    date: str
    message: str
    author: str
    email: str


class LogResult(CamelModel):
    logs: list[LogEntry]


def git_log(
    repo_path: str,
    max_count: int = DEFAULT_MAX_COUNT,
    branch: str | None = None,
    session: RepositorySession | None = None,
) -> LogResult:
    """Return the most recent commits.

    Args:
        repo_path: Path to the git repository
        max_count: Maximum number of commits to return (default: 10)
        branch: Branch to read, local or as remotes/origin/<branch>
            (default: HEAD)
        session: Repository session to open the repository through

    Returns:
        The commits, newest first. An empty repository yields no commits.

    Raises:
        ValidationError: If max_count is not positive
        BranchNotFoundError: If the branch does not exist
        GitOperationError: If git fails to read the history
    """
    logger.debug(
        "git_log called: repo=%s max_count=%s branch=%s", repo_path, max_count, branch
    )

    if max_count <= 0:
        raise ValidationError(INVALID_MAX_COUNT)

    repo = open_repository(repo_path, session)

    if not repo.head.is_valid():
        logger.debug("No commits found in repository")
        return LogResult(logs=[])

    rev = "HEAD"
    try:
        if branch:
            names = read_branches(repo, include_remote=True).all
            if branch in names:
                rev = branch
            elif f"remotes/origin/{branch}" in names:
                rev = f"origin/{branch}"
            else:
                logger.debug("Branch not found: %s", branch)
                raise BranchNotFoundError(f"Git log failed: branch not found: {branch}")

        logs = [
            LogEntry(
                hash=commit.hexsha,
                date=commit.authored_datetime.isoformat(),
                message=commit.summary,
                author=commit.author.name or "",
                email=commit.author.email or "",
            )
            for commit in repo.iter_commits(rev, max_count=max_count)
        ]
    except (GitCommandError, ValueError) as e:
        raise GitOperationError(f"Git log failed: {describe_git_error(e)}") from e


    logger.debug("Retrieved %d log entries", len(logs))
    return LogResult(logs=logs)


@tool_handler()
def handle_git_log(
    params: dict[str, Any], session: RepositorySession | None = None
) -> ToolResponse:
    request = LogInput.model_validate(params)
    return json_response(
        git_log(request.repo_path, request.max_count, request.branch, session=session)
    )
