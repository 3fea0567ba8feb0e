"""git_push tool: push a branch (or tags) to a remote.

Errors from this tool are reported without the "Error: " prefix.
"""

from __future__ import annotations

import logging
from typing import Any

from git import GitCommandError
from pydantic import Field

from git_mcp_tools.exceptions import (
    DetachedHeadError,
    GitOperationError,
    RemoteNotConfiguredError,
    RemoteNotFoundError,
)
from git_mcp_tools.repository import (
    RepositorySession,
    describe_git_error,
    open_repository,
    read_status,
)
from git_mcp_tools.responses import CamelModel, ToolResponse, text_response, tool_handler

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"
FALLBACK_BRANCH = "main"

# Substrings of git's error output mapped to friendlier messages
PUSH_ERROR_HINTS: tuple[tuple[str, str], ...] = (
    (
        "Authentication failed",
        "Authentication failed. Please check your credentials or SSH keys.",
    ),
    (
        "Could not resolve host",
        "Network error: Could not resolve host. Please check your internet connection.",
    ),
    (
        "non-fast-forward",
        "Push rejected: non-fast-forward update. Pull the latest changes or use force push.",
    ),
)


class PushInput(CamelModel):
    """Parameters accepted by git_push."""

    repo_path: str
    remote: str | None = None
    branch: str | None = None
    tags: bool = False
    force: bool = False
    set_upstream: bool = False
    delete_remote: bool = False


class PushedCommits(CamelModel):
    pushed: int = 0
    hash: str = ""
    message: str = ""


class PushResult(CamelModel):
    """Outcome of a push.

    Attributes:
        success: Always True for a completed push
        remote: Remote pushed to
        branch: Branch pushed (or deleted)
        commits: Number of commits pushed and the tip commit
        tags: Local tags, only when tags were pushed
        message: Summary of the push
        warnings: Notes about risky options that were used
    """

    success: bool
    remote: str
    branch: str
    commits: PushedCommits = Field(default_factory=PushedCommits)
    tags: list[str] | None = None
    message: str
    warnings: list[str] = Field(default_factory=list)


def build_push_args(
    remote: str,
    branch: str,
    tags: bool = False,
    force: bool = False,
    set_upstream: bool = False,
    delete_remote: bool = False,
) -> list[str]:
    """Build the argument list for `git push`."""
    if delete_remote:
        return [remote, "--delete", branch]

    args = [remote, branch]
    if force:
        args.append("--force")
    if set_upstream:
        args.append("--set-upstream")
    if tags:
        args.append("--tags")
    return args


def explain_push_error(reason: str) -> str:
    """Translate a git push failure into a user-facing message."""
    for needle, explanation in PUSH_ERROR_HINTS:
        if needle in reason:
            return explanation
    return f"Push failed: {reason}"


def git_push(
    repo_path: str,
    remote: str | None = None,
    branch: str | None = None,
    tags: bool = False,
    force: bool = False,
    set_upstream: bool = False,
    delete_remote: bool = False,
    session: RepositorySession | None = None,
) -> PushResult:
    """Push the current (or given) branch to a remote.

    Nothing is pushed when the branch has no commits ahead of its
    upstream, unless tags are pushed or the remote branch is deleted.

    Args:
        repo_path: Path to the git repository
        remote: Remote name (default: origin)
        branch: Branch to push (default: the current branch)
        tags: Push tags as well
        force: Force the push
        set_upstream: Record the remote branch as upstream
        delete_remote: Delete the branch on the remote instead of pushing
        session: Repository session to open the repository through

    Raises:
        DetachedHeadError: If HEAD is detached
        RemoteNotConfiguredError: If the repository has no remotes
        RemoteNotFoundError: If the named remote does not exist
        GitOperationError: If the push fails
    """
    remote = remote or DEFAULT_REMOTE
    logger.debug(
        "Starting push: repo=%s remote=%s branch=%s tags=%s force=%s "
        "set_upstream=%s delete_remote=%s",
        repo_path,
        remote,
        branch,
        tags,
        force,
        set_upstream,
        delete_remote,
    )
    repo = open_repository(repo_path, session)

    try:
        status = read_status(repo)
        logger.debug(
            "Repository status: branch=%s ahead=%s behind=%s",
            status.current,
            status.ahead,
            status.behind,
        )

        if not status.current and status.detached:
            raise DetachedHeadError()

        target_branch = branch or status.current or FALLBACK_BRANCH

        remote_names = [configured.name for configured in repo.remotes]
        if not remote_names:
            raise RemoteNotConfiguredError()
        if remote not in remote_names:
            raise RemoteNotFoundError(remote)

        if not delete_remote and status.ahead == 0 and not tags:
            logger.debug("No commits to push, repository is up to date")
            return PushResult(
                success=True,
                remote=remote,
                branch=target_branch,
                message="Already up to date",
            )

        push_args = build_push_args(
            remote, target_branch, tags, force, set_upstream, delete_remote
        )
        logger.debug("Pushing to remote: %s", push_args)
        repo.git.push(*push_args)

        if delete_remote:
            return PushResult(
                success=True,
                remote=remote,
                branch=target_branch,
                message=f'Successfully deleted remote branch "{target_branch}" from "{remote}"',
            )

        head = repo.head.commit
        commits = PushedCommits(
            pushed=status.ahead or 1,
            hash=head.hexsha,
            message=str(head.summary),
        )

        pushed_tags = None
        if tags:
            pushed_tags = [tag for tag in repo.git.tag().splitlines() if tag.strip()]

        warnings = ["Force push was used"] if force else []
    except GitCommandError as e:
        reason = describe_git_error(e)
        logger.warning("Push operation failed: %s", reason)
        raise GitOperationError(explain_push_error(reason)) from e

    logger.debug("Push completed: %s/%s commits=%d", remote, target_branch, commits.pushed)
    return PushResult(
        success=True,
        remote=remote,
        branch=target_branch,
        commits=commits,
        tags=pushed_tags,
        message=f"Successfully pushed {commits.pushed} commit(s) to {remote}/{target_branch}",
        warnings=warnings,
    )


def format_push(result: PushResult) -> str:
    text = result.message
    if result.warnings:
        text += "\n\n" + "\n".join(f"Warning: {warning}" for warning in result.warnings)
    if result.tags:
        text += "\n\nTags pushed: " + ", ".join(result.tags)
    return text


@tool_handler(prefix_errors=False)
def handle_git_push(
    params: dict[str, Any], session: RepositorySession | None = None
) -> ToolResponse:
    request = PushInput.model_validate(params)
    result = git_push(
        request.repo_path,
        remote=request.remote,
        branch=request.branch,
        tags=request.tags,
        force=request.force,
        set_upstream=request.set_upstream,
        delete_remote=request.delete_remote,
        session=session,
    )
    return text_response(format_push(result))
