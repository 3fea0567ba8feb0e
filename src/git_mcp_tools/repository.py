"""Repository access shared by all git tools.

This module provides:
1. Parameter helpers - validate_repository_path(), validate_non_empty_string()
2. RepositorySession - caller-owned accessor that opens (and optionally
   caches) GitPython Repo objects
3. open_repository() - the empty / exists / is-a-repository checks every
   tool runs before touching git
4. Porcelain readers - read_status() and read_branches(), snapshots of
   `git status` and the branch list in the shape the tools report on
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any

from git import (
    GitCommandError,
    GitError,
    InvalidGitRepositoryError,
    NoSuchPathError,
    RemoteReference,
    Repo,
)

from git_mcp_tools.exceptions import (
    GitToolError,
    NotARepositoryError,
    RepositoryNotFoundError,
    RepositoryPathError,
    ValidationError,
    describe_error,
)

logger = logging.getLogger(__name__)

DETACHED_HEAD = "HEAD (detached)"

_CONFLICT_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}

_BRANCH_HEADER = re.compile(
    r"^(?P<branch>.+?)(?:\.\.\.\S+)?(?: \[(?P<counts>[^\]]*)\])?$"
)

# GitPython wraps captured streams as "\n  stderr: '<text>'"
_STREAM_WRAPPER = re.compile(r"^\s*std(?:out|err): '(?P<text>.*)'\s*$", re.DOTALL)


# -----------------------------------------------------------------------------
# Parameter validation
# -----------------------------------------------------------------------------


def validate_repository_path(repo_path: Any) -> str:
    """Check that a repository path is a non-empty string.

    Args:
        repo_path: Raw value received from the caller

    Returns:
        The trimmed path

    Raises:
        RepositoryPathError: If the value is not a string or is blank
    """
    if not isinstance(repo_path, str):
        raise RepositoryPathError("Repository path is required and must be a string")

    trimmed = repo_path.strip()
    if not trimmed:
        raise RepositoryPathError("Repository path cannot be empty")

    return trimmed


def validate_non_empty_string(value: Any, field_name: str) -> str:
    """Check that a named parameter is a non-empty string.

    Args:
        value: Raw value received from the caller
        field_name: Human-readable name used in the error message

    Returns:
        The trimmed value

    Raises:
        ValidationError: If the value is not a string or is blank
    """
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} is required and must be a string")

    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field_name} cannot be empty")

    return trimmed


# -----------------------------------------------------------------------------
# Repository session
# -----------------------------------------------------------------------------


class RepositorySession:
    """Opens GitPython repositories on behalf of the tools.

    A session is owned by whoever dispatches tool calls (normally one per
    server). With caching enabled, each path is opened once and the Repo is
    reused until clear() or close() is called; the cache is not
    synchronized, so a session must not be shared between concurrently
    running tool calls.

    Example:
        with RepositorySession(cache=True) as session:
            repo = open_repository("/path/to/repo", session)
    """

    def __init__(self, cache: bool = False) -> None:
        self.cache = cache
        self._repositories: dict[str, Repo] = {}

    def __enter__(self) -> RepositorySession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._repositories)

    def get(self, path: str) -> Repo:
        """Return a Repo for the given path.

        Raises:
            InvalidGitRepositoryError: If the path is not inside a repository
            NoSuchPathError: If the path vanished
        """
        if self.cache and path in self._repositories:
            logger.debug("Using cached repository for %s", path)
            return self._repositories[path]

        logger.debug("Opening repository at %s", path)
        repo = Repo(path, search_parent_directories=True)
        if self.cache:
            self._repositories[path] = repo
        return repo

    def clear(self) -> None:
        """Drop all cached repositories."""
        logger.debug("Clearing %d cached repositories", len(self._repositories))
        for repo in self._repositories.values():
            repo.close()
        self._repositories.clear()

    close = clear


def open_repository(repo_path: Any, session: RepositorySession | None = None) -> Repo:
    """Validate a repository path and open it.

    Checks run in a fixed order: the path must be a non-empty string, it
    must exist, and it must be inside a git working tree.

    Args:
        repo_path: Raw repository path from the caller
        session: Session to open the repository through. A throwaway
            non-caching session is used when omitted.

    Returns:
        The opened repository

    Raises:
        RepositoryPathError: If the path is missing or blank
        RepositoryNotFoundError: If the path does not exist
        NotARepositoryError: If the path is not a git repository
        GitToolError: If git fails to open the repository for another reason
    """
    path = validate_repository_path(repo_path)

    if not os.path.exists(path):
        logger.debug("Repository path does not exist: %s", path)
        raise RepositoryNotFoundError(path)

    if session is None:
        session = RepositorySession()

    try:
        return session.get(path)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        logger.debug("Path is not a git repository: %s", path)
        raise NotARepositoryError(path) from e
    except (GitError, OSError) as e:
        raise GitToolError(
            f"Failed to initialize git repository: {describe_git_error(e)}"
        ) from e


def current_branch(repo: Repo) -> str:
    """Return `git rev-parse --abbrev-ref HEAD` ('HEAD' when detached)."""
    return repo.git.rev_parse("--abbrev-ref", "HEAD").strip()


def command_output(stream: str | None) -> str:
    """Return the text GitPython captured for one stream of a failed command."""
    match = _STREAM_WRAPPER.match(stream or "")
    return (match.group("text") if match else stream or "").strip()


def describe_git_error(error: BaseException) -> str:
    """Return what git printed on stderr for a failed command.

    GitCommandError's own string also carries the command line. Other
    exceptions, and commands that printed nothing, fall back to
    describe_error().
    """
    if isinstance(error, GitCommandError):
        reason = command_output(error.stderr)
        if reason:
            return reason
    return describe_error(error)


# -----------------------------------------------------------------------------
# Status snapshot
# -----------------------------------------------------------------------------


@dataclass
class FileStatus:
    """One entry of `git status --porcelain`.

    Attributes:
        path: Path relative to the repository root
        index: Staging area column (X)
        working_dir: Working tree column (Y)
    """

    path: str
    index: str
    working_dir: str


@dataclass
class StatusSummary:
    """Parsed `git status --porcelain --branch` output."""

    current: str | None = None
    detached: bool = False
    ahead: int = 0
    behind: int = 0
    files: list[FileStatus] = field(default_factory=list)
    staged: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)
    conflicted: list[str] = field(default_factory=list)
    not_added: list[str] = field(default_factory=list)

    def is_clean(self) -> bool:
        """Return True if there is nothing staged, changed or untracked."""
        return not (
            self.modified
            or self.staged
            or self.not_added
            or self.deleted
            or self.renamed
            or self.conflicted
        )

    def _add_file(self, entry: FileStatus) -> None:
        self.files.append(entry)
        code = entry.index + entry.working_dir

        if code == "??":
            self.not_added.append(entry.path)
            return
        if code in _CONFLICT_CODES:
            self.conflicted.append(entry.path)
            return

        if entry.index in "MADRC":
            self.staged.append(entry.path)
        if "M" in code:
            self.modified.append(entry.path)
        if "D" in code:
            self.deleted.append(entry.path)
        if entry.index == "R":
            self.renamed.append(entry.path)

    def _set_branch(self, header: str) -> None:
        for prefix in ("No commits yet on ", "Initial commit on "):
            if header.startswith(prefix):
                self.current = header[len(prefix) :]
                return

        if header.startswith("HEAD (no branch)"):
            self.detached = True
            return

        match = _BRANCH_HEADER.match(header)
        if not match:
            return

        self.current = match.group("branch")
        for part in (match.group("counts") or "").split(","):
            name, _, count = part.strip().partition(" ")
            if name == "ahead":
                self.ahead = int(count)
            elif name == "behind":
                self.behind = int(count)


def parse_status(output: str) -> StatusSummary:
    """Parse NUL-separated `git status --porcelain --branch -z` output."""
    summary = StatusSummary()
    tokens = output.split("\0")
    position = 0

    while position < len(tokens):
        token = tokens[position]
        position += 1
        if not token:
            continue

        if token.startswith("## "):
            summary._set_branch(token[3:])
            continue

        entry = FileStatus(path=token[3:], index=token[0], working_dir=token[1])
        # Renames and copies carry the original path as the next token
        if entry.index in "RC" or entry.working_dir in "RC":
            position += 1
        summary._add_file(entry)

    return summary


def read_status(repo: Repo) -> StatusSummary:
    """Run `git status` and return the parsed snapshot."""
    return parse_status(repo.git.status("--porcelain", "--branch", "-z"))


# -----------------------------------------------------------------------------
# Branch snapshot
# -----------------------------------------------------------------------------


@dataclass
class BranchSummary:
    """Branch names known to a repository.

    Attributes:
        current: Checked-out branch, or None when HEAD is detached
        detached: Whether HEAD is detached
        all: Local branch names, followed by `remotes/<remote>/<branch>`
            names when remotes were requested
    """

    current: str | None
    detached: bool
    all: list[str]

    @property
    def remote(self) -> list[str]:
        return [name for name in self.all if name.startswith("remotes/")]


def read_branches(repo: Repo, include_remote: bool = False) -> BranchSummary:
    """List local (and optionally remote-tracking) branches."""
    detached = repo.head.is_detached
    current = None if detached else repo.active_branch.name

    names = [head.name for head in repo.heads]
    if include_remote:
        names.extend(
            f"remotes/{ref.name}"
            for ref in repo.references
            if isinstance(ref, RemoteReference)
        )

    return BranchSummary(current=current, detached=detached, all=names)
