"""
Custom exceptions for git tool operations.

Business functions raise these; tool handlers convert them into error
responses, so none of them ever reach the MCP transport.
"""

from __future__ import annotations

UNKNOWN_ERROR = "Unknown error"


def describe_error(error: BaseException) -> str:
    """Return the message of an exception, or 'Unknown error' if it has none."""
    message = str(error).strip()
    return message or UNKNOWN_ERROR


class GitToolError(Exception):
    """Base exception for all git tool errors."""

    def __init__(self, message: str = UNKNOWN_ERROR) -> None:
        self.message = message
        super().__init__(self.message)


class ValidationError(GitToolError):
    """Raised when a parameter value is missing, mistyped or empty."""


class RepositoryPathError(ValidationError):
    """Raised when the repository path is missing or empty."""


class RepositoryNotFoundError(GitToolError):
    """Raised when the repository path does not exist on disk."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Repository path does not exist: {path}")


class NotARepositoryError(GitToolError):
    """Raised when the path exists but is not inside a git working tree."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"The path '{path}' is not a git repository")


class InvalidBranchNameError(ValidationError):
    """Raised when a branch name breaks git's ref-name rules."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid branch name: '{name}'")


class BranchExistsError(GitToolError):
    """Raised when creating a branch that already exists."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Branch '{name}' already exists")


class BranchNotFoundError(GitToolError):
    """Raised when a referenced branch does not exist."""


class UncommittedChangesError(GitToolError):
    """Raised when uncommitted changes block a branch switch."""

    def __init__(
        self,
        message: str = (
            "Cannot checkout: You have uncommitted changes. "
            "Use force option to override."
        ),
    ) -> None:
        super().__init__(message)


class DetachedHeadError(GitToolError):
    """Raised when an operation needs a branch but HEAD is detached."""

    def __init__(
        self,
        message: str = (
            "Cannot push from detached HEAD state. Please checkout a branch first."
        ),
    ) -> None:
        super().__init__(message)


class RemoteNotConfiguredError(GitToolError):
    """Raised when the repository has no remotes at all."""

    def __init__(self, message: str = "No remote repository configured") -> None:
        super().__init__(message)


class RemoteNotFoundError(GitToolError):
    """Raised when the requested remote is not configured."""

    def __init__(self, remote: str) -> None:
        self.remote = remote
        super().__init__(f'Remote "{remote}" not found')


class GitOperationError(GitToolError):
    """Raised when the underlying git command fails."""


class MergeConflictError(GitOperationError):
    """Raised when a merge stops on conflicts.

    Attributes:
        conflicted_files: Paths git reports as unmerged
    """

    def __init__(self, conflicted_files: list[str]) -> None:
        self.conflicted_files = conflicted_files
        super().__init__(
            f"Merge conflict occurred. Conflicted files: {', '.join(conflicted_files)}"
        )
