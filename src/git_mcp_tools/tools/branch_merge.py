"""git_branch_merge tool: merge one branch into another.

Errors from this tool are reported without the "Error: " prefix.
"""

from __future__ import annotations

import logging
from typing import Any, Literal

from git import GitCommandError

from git_mcp_tools.exceptions import (
    BranchNotFoundError,
    GitOperationError,
    MergeConflictError,
)
from git_mcp_tools.repository import (
    RepositorySession,
    command_output,
    current_branch,
    describe_git_error,
    open_repository,
    read_branches,
    read_status,
)
from git_mcp_tools.responses import CamelModel, ToolResponse, text_response, tool_handler

logger = logging.getLogger(__name__)

MergeStrategy = Literal["merge", "fast-forward", "squash"]
MergeType = Literal["merge", "fast-forward", "squash"]


class BranchMergeInput(CamelModel):
    """Parameters accepted by git_branch_merge."""

    repo_path: str
    source_branch: str
    target_branch: str | None = None
    strategy: MergeStrategy = "merge"
    message: str | None = None
    no_commit: bool = False


class MergeResult(CamelModel):
    """Outcome of a successful merge."""

    success: bool
    merge_type: MergeType
    target_branch: str
    source_branch: str
    commit_hash: str | None = None


def build_merge_args(
    source_branch: str,
    strategy: MergeStrategy = "merge",
    message: str | None = None,
    no_commit: bool = False,
) -> list[str]:
    """Build the argument list for `git merge`.

    Squash merges never take -m; their message goes to the follow-up commit.
    """
    args = [source_branch]

    if strategy == "fast-forward":
        args.append("--ff-only")
    elif strategy == "squash":
        args.append("--squash")

    if message and strategy != "squash":
        args.extend(["-m", message])

    if no_commit:
        args.append("--no-commit")

    return args


def merge_branch(
    repo_path: str,
    source_branch: str,
    target_branch: str | None = None,
    strategy: MergeStrategy = "merge",
    message: str | None = None,
    no_commit: bool = False,
    session: RepositorySession | None = None,
) -> MergeResult:
    """Merge source_branch into target_branch.

    Args:
        repo_path: Path to the git repository
        source_branch: Branch to merge from
        target_branch: Branch to merge into (default: the current branch).
            It is checked out first when it is not the current branch.
        strategy: 'merge', 'fast-forward' (--ff-only) or 'squash'
        message: Merge commit message
        no_commit: Stop before creating the merge commit
        session: Repository session to open the repository through

    Raises:
        BranchNotFoundError: If either branch does not exist
        MergeConflictError: If the merge stopped on conflicts
        GitOperationError: If git fails for any other reason
    """
    logger.debug(
        "Starting merge: repo=%s source=%s target=%s strategy=%s no_commit=%s",
        repo_path,
        source_branch,
        target_branch,
        strategy,
        no_commit,
    )
    repo = open_repository(repo_path, session)

    try:
        active = current_branch(repo)
        target = target_branch or active

        branches = read_branches(repo, include_remote=True)
        if source_branch not in branches.all:
            raise BranchNotFoundError(f"Source branch does not exist: {source_branch}")
        if not target or target not in branches.all:
            raise BranchNotFoundError(f"Target branch does not exist: {target}")

        if target_branch and target_branch != active:
            logger.debug("Checking out target branch %s", target_branch)
            repo.git.checkout(target_branch)
    except GitCommandError as e:
        raise GitOperationError(
            f"Merge operation failed: {describe_git_error(e)}"
        ) from e


    merge_args = build_merge_args(source_branch, strategy, message, no_commit)

    try:
        logger.debug("Executing merge: %s", merge_args)
        output = repo.git.merge(*merge_args)

        merge_type: MergeType = "merge"
        if strategy == "squash":
            merge_type = "squash"
            if not no_commit:
                repo.git.commit("-m", message or f"Squashed commit from {source_branch}")
        elif "Fast-forward" in output:
            merge_type = "fast-forward"

        commit_hash = None if no_commit else repo.head.commit.hexsha
    except GitCommandError as e:
        reason = describe_git_error(e)
        output = f"{command_output(e.stdout)}\n{command_output(e.stderr)}"
        if "CONFLICTS" in output or "conflict" in output:
            logger.debug("Merge conflict detected")
            raise MergeConflictError(read_status(repo).conflicted) from e
        raise GitOperationError(f"Failed to merge branch: {reason}") from e

    logger.debug("Merge completed: type=%s commit=%s", merge_type, commit_hash)
    return MergeResult(
        success=True,
        merge_type=merge_type,
        target_branch=target,
        source_branch=source_branch,
        commit_hash=commit_hash,
    )


def format_merge(result: MergeResult) -> str:
    text = (
        f"Successfully merged {result.source_branch} into {result.target_branch}\n"
        f"Merge type: {result.merge_type}"
    )
    if result.commit_hash:
        text += f"\nCommit: {result.commit_hash}"
    return text


@tool_handler(prefix_errors=False)
def handle_git_branch_merge(
    params: dict[str, Any], session: RepositorySession | None = None
) -> ToolResponse:
    request = BranchMergeInput.model_validate(params)
    result = merge_branch(
        request.repo_path,
        request.source_branch,
        request.target_branch,
        request.strategy,
        request.message,
        request.no_commit,
        session=session,
    )
    return text_response(format_merge(result))
