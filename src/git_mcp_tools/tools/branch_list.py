"""git_branch_list tool: list local and remote-tracking branches."""

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
    read_branches,
)
from git_mcp_tools.responses import CamelModel, ToolResponse, json_response, tool_handler

logger = logging.getLogger(__name__)


class BranchListInput(CamelModel):
    """Parameters accepted by git_branch_list."""

    repo_path: str
    include_remote: bool = False


class BranchListResult(CamelModel):
    """Branches known to the repository.

    Attributes:
        current: Checked-out branch, or 'HEAD (detached)'
        local: Local branch names
        remote: 'remotes/<remote>/<branch>' names, only when requested
    """

    current: str
    local: list[str]
    remote: list[str] | None = None


def list_branches(
    repo_path: str,
    include_remote: bool = False,
    session: RepositorySession | None = None,
) -> BranchListResult:
    """List the branches of a repository.

    Args:
        repo_path: Path to the git repository
        include_remote: Also list remote-tracking branches
        session: Repository session to open the repository through
    """
    logger.debug("Getting branch list: repo=%s remote=%s", repo_path, include_remote)
    repo = open_repository(repo_path, session)

    try:
        local = read_branches(repo)
        result = BranchListResult(
            current=DETACHED_HEAD if local.detached else local.current or "",
            local=local.all,
        )

        if include_remote:
            result.remote = read_branches(repo, include_remote=True).remote
    except GitCommandError as e:
        raise GitOperationError(
            f"Failed to get branch list: {describe_git_error(e)}"
        ) from e


    logger.debug("Branch list retrieved: %d local branches", len(result.local))
    return result


@tool_handler()
def handle_git_branch_list(
    params: dict[str, Any], session: RepositorySession | None = None
) -> ToolResponse:
    request = BranchListInput.model_validate(params)
    return json_response(
        list_branches(request.repo_path, request.include_remote, session=session)
    )
