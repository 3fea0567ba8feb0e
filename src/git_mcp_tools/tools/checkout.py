"""git_checkout tool: switch branches or restore files."""

from __future__ import annotations

import logging
from typing import Any

from git import GitCommandError, Repo

from git_mcp_tools.exceptions import (
    GitOperationError,
    UncommittedChangesError,
)
from git_mcp_tools.repository import (
    RepositorySession,
    current_branch,
    describe_git_error,
    open_repository,
    read_status,
    validate_non_empty_string,
)
from git_mcp_tools.responses import CamelModel, ToolResponse, json_response, tool_handler

logger = logging.getLogger(__name__)


class CheckoutInput(CamelModel):
    """Parameters accepted by git_checkout."""

    repo_path: str
    target: str
    force: bool = False
    files: list[str] | None = None


class CheckoutResult(CamelModel):
    """Outcome of a checkout.

    Attributes:
        success: Always True for a completed checkout
        previous_branch: Branch before the checkout
        current_branch: Branch after the checkout, 'HEAD' when detached
        message: git-style summary of what happened
        modified_files: Restored paths, only for file checkouts
    """

    success: bool
    previous_branch: str
    current_branch: str
    message: str
    modified_files: list[str] | None = None


def git_checkout(
    repo_path: str,
    target: str,
    force: bool = False,
    files: list[str] | None = None,
    session: RepositorySession | None = None,
) -> CheckoutResult:
    """Check out a branch, commit or tag, or restore files from it.

    Args:
        repo_path: Path to the git repository
        target: Branch name, commit hash or tag
        force: Discard local changes instead of refusing to switch
        files: Restore only these paths from target; the branch is unchanged
        session: Repository session to open the repository through

    Raises:
        UncommittedChangesError: If local changes block the switch
        GitOperationError: If git rejects the checkout
    """
    logger.debug(
        "git_checkout called: repo=%s target=%s force=%s files=%s",
        repo_path,
        target,
        force,
        files,
    )

    validate_non_empty_string(target, "Target")
    repo = open_repository(repo_path, session)

    try:
        previous = current_branch(repo)
        logger.debug("Current branch: %s", previous)

        if files:
            return _checkout_files(repo, target, files, previous)

        if not force and not read_status(repo).is_clean():
            logger.debug("Uncommitted changes detected")
            raise UncommittedChangesError()

        if previous == target:
            return CheckoutResult(
                success=True,
                previous_branch=previous,
                current_branch=target,
                message=f"Already on '{target}'",
            )

        try:
            if force:
                repo.git.checkout("--force", target)
            else:
                repo.git.checkout(target)
        except GitCommandError as e:
            logger.debug("Checkout failed: %s", e)
            raise GitOperationError(f"Checkout failed: {describe_git_error(e)}") from e


        landed = current_branch(repo)
        if landed == "HEAD":
            short_hash = repo.git.rev_parse("--short", "HEAD").strip()
            return CheckoutResult(
                success=True,
                previous_branch=previous,
                current_branch="HEAD",
                message=f"HEAD is now at {short_hash}",
            )

        return CheckoutResult(
            success=True,
            previous_branch=previous,
            current_branch=landed,
            message=f"Switched to branch '{landed}'",
        )
    except GitCommandError as e:
        raise GitOperationError(f"Git checkout failed: {describe_git_error(e)}") from e



def _checkout_files(
    repo: Repo, target: str, files: list[str], previous: str
) -> CheckoutResult:
    logger.debug("Checking out specific files: %s", files)
    try:
        repo.git.checkout(target, "--", *files)
    except GitCommandError as e:
        raise GitOperationError(f"Checkout failed: {describe_git_error(e)}") from e


    noun = "path" if len(files) == 1 else "paths"
    return CheckoutResult(
        success=True,
        previous_branch=previous,
        current_branch=previous,
        message=f"Updated {len(files)} {noun} from {target}",
        modified_files=files,
    )


@tool_handler()
def handle_git_checkout(
    params: dict[str, Any], session: RepositorySession | None = None
) -> ToolResponse:
    request = CheckoutInput.model_validate(params)
    result = git_checkout(
        request.repo_path,
        request.target,
        request.force,
        request.files,
        session=session,
    )
    return json_response(result)
