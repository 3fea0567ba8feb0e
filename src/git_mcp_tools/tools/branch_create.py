"""git_branch_create tool: create a branch, optionally switching to it."""

from __future__ import annotations

import logging
from typing import Any

from git import GitCommandError

from git_mcp_tools.exceptions import (
    BranchExistsError,
    BranchNotFoundError,
    GitOperationError,
    InvalidBranchNameError,
)
from git_mcp_tools.repository import (
    RepositorySession,
    current_branch,
    describe_git_error,
    open_repository,
    read_branches,
    validate_non_empty_string,
)
from git_mcp_tools.responses import CamelModel, ToolResponse, json_response, tool_handler

logger = logging.getLogger(__name__)

# Characters git refuses in ref names
INVALID_BRANCH_CHARACTERS = (" ", "~", "^", ":", "?", "*", "[")


class BranchCreateInput(CamelModel):
    """Parameters accepted by git_branch_create."""

    repo_path: str
    branch_name: str
    base_branch: str | None = None
    checkout: bool = False


class BranchCreateResult(CamelModel):
    """Outcome of creating a branch."""

    success: bool
    branch_name: str
    base_branch: str
    message: str
    checked_out: bool


def is_valid_branch_name(name: str) -> bool:
    """Check a branch name against git's ref-name restrictions.

    A name is rejected if it starts with '.', contains '..', ends with
    '/' or '.lock', or contains a space or any of '~^:?*['.
    """
    if name.startswith("."):
        return False
    if ".." in name:
        return False
    if name.endswith("/") or name.endswith(".lock"):
        return False
    return not any(char in name for char in INVALID_BRANCH_CHARACTERS)


def create_branch(
    repo_path: str,
    branch_name: str,
    base_branch: str | None = None,
    checkout: bool = False,
    session: RepositorySession | None = None,
) -> BranchCreateResult:
    """Create a branch from a base branch.

    Args:
        repo_path: Path to the git repository
        branch_name: Name of the branch to create
        base_branch: Branch to start from (default: the current branch)
        checkout: Switch to the new branch after creating it
        session: Repository session to open the repository through

    Raises:
        InvalidBranchNameError: If the name breaks git's naming rules
        BranchExistsError: If the branch already exists
        BranchNotFoundError: If the requested base branch does not exist
        GitOperationError: If git fails to create or check out the branch
    """
    logger.debug(
        "Creating branch: repo=%s name=%s base=%s checkout=%s",
        repo_path,
        branch_name,
        base_branch,
        checkout,
    )

    validate_non_empty_string(branch_name, "Branch name")
    if not is_valid_branch_name(branch_name):
        raise InvalidBranchNameError(branch_name)

    repo = open_repository(repo_path, session)

    try:
        branches = read_branches(repo)

        if branch_name in branches.all:
            raise BranchExistsError(branch_name)

        if base_branch and base_branch not in branches.all:
            raise BranchNotFoundError(f"Base branch '{base_branch}' does not exist")

        actual_base = base_branch or branches.current or current_branch(repo)

        repo.git.branch(branch_name, actual_base)
        if checkout:
            logger.debug("Checking out new branch %s", branch_name)
            repo.git.checkout(branch_name)
    except GitCommandError as e:
        raise GitOperationError(
            f"Failed to create branch: {describe_git_error(e)}"
        ) from e


    message = f"Created branch '{branch_name}' from '{actual_base}'"
    if checkout:
        message += " and checked out"

    logger.debug("Branch created: %s", message)
    return BranchCreateResult(
        success=True,
        branch_name=branch_name,
        base_branch=actual_base,
        message=message,
        checked_out=checkout,
    )


@tool_handler()
def handle_git_branch_create(
    params: dict[str, Any], session: RepositorySession | None = None
) -> ToolResponse:
    request = BranchCreateInput.model_validate(params)
    result = create_branch(
        request.repo_path,
        request.branch_name,
        request.base_branch,
        request.checkout,
        session=session,
    )
    return json_response(result)
