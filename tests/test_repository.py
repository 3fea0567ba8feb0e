"""Tests for shared repository access: validation, sessions and porcelain parsing."""

from __future__ import annotations

from pathlib import Path

import git
import pytest
from git import Repo

from git_mcp_tools.exceptions import (
    NotARepositoryError,
    RepositoryNotFoundError,
    RepositoryPathError,
    ValidationError,
)
from git_mcp_tools.repository import (
    RepositorySession,
    command_output,
    describe_git_error,
    open_repository,
    parse_status,
    read_branches,
    read_status,
    validate_non_empty_string,
    validate_repository_path,
)


class TestValidation:
    """Tests for parameter validation helpers."""

    def test_repository_path_is_trimmed(self) -> None:
        assert validate_repository_path("  /tmp/repo \n") == "/tmp/repo"

    @pytest.mark.parametrize("value", ["", "   ", "\t\n  "])
    def test_blank_repository_path(self, value: str) -> None:
        with pytest.raises(RepositoryPathError, match="^Repository path cannot be empty$"):
            validate_repository_path(value)

    @pytest.mark.parametrize("value", [None, 123, ["/tmp"]])
    def test_non_string_repository_path(self, value: object) -> None:
        with pytest.raises(
            RepositoryPathError,
            match="^Repository path is required and must be a string$",
        ):
            validate_repository_path(value)

    def test_non_empty_string_uses_field_name(self) -> None:
        with pytest.raises(ValidationError, match="^Branch name cannot be empty$"):
            validate_non_empty_string("  ", "Branch name")

        with pytest.raises(
            ValidationError, match="^Branch name is required and must be a string$"
        ):
            validate_non_empty_string(None, "Branch name")


class TestOpenRepository:
    """Tests for open_repository ordering and error messages."""

    def test_opens_repository(self, temp_git_repo: Path) -> None:
        repo = open_repository(str(temp_git_repo))
        assert Path(repo.working_tree_dir).resolve() == temp_git_repo.resolve()

    def test_opens_from_subdirectory(self, temp_git_repo: Path) -> None:
        subdir = temp_git_repo / "src"
        subdir.mkdir()
        repo = open_repository(str(subdir))
        assert Path(repo.working_tree_dir).resolve() == temp_git_repo.resolve()

    def test_empty_path_checked_first(self) -> None:
        with pytest.raises(RepositoryPathError):
            open_repository("")

    def test_missing_path(self, tmp_path: Path) -> None:
        missing = tmp_path / "does-not-exist"
        with pytest.raises(RepositoryNotFoundError) as exc_info:
            open_repository(str(missing))
        assert exc_info.value.message == f"Repository path does not exist: {missing}"

    def test_not_a_repository(self, tmp_path: Path) -> None:
        with pytest.raises(NotARepositoryError) as exc_info:
            open_repository(str(tmp_path))
        assert exc_info.value.message == f"The path '{tmp_path}' is not a git repository"


class TestRepositorySession:
    """Tests for the caller-owned repository session."""

    def test_no_cache_by_default(self, temp_git_repo: Path) -> None:
        session = RepositorySession()
        first = session.get(str(temp_git_repo))
        second = session.get(str(temp_git_repo))

        assert first is not second
        assert len(session) == 0

    def test_cache_reuses_repository(self, temp_git_repo: Path) -> None:
        session = RepositorySession(cache=True)
        first = open_repository(str(temp_git_repo), session)
        second = open_repository(str(temp_git_repo), session)

        assert first is second
        assert len(session) == 1

    def test_clear_drops_cached_repositories(self, temp_git_repo: Path) -> None:
        with RepositorySession(cache=True) as session:
            first = session.get(str(temp_git_repo))
            session.clear()
            assert len(session) == 0
            assert session.get(str(temp_git_repo)) is not first


class TestParseStatus:
    """Tests for porcelain status parsing."""

    def test_branch_with_upstream_and_counts(self) -> None:
        summary = parse_status("## main...origin/main [ahead 2, behind 1]\0")

        assert summary.current == "main"
        assert summary.ahead == 2
        assert summary.behind == 1
        assert summary.detached is False
        assert summary.is_clean()

    def test_branch_without_upstream(self) -> None:
        summary = parse_status("## feature/login\0")

        assert summary.current == "feature/login"
        assert summary.ahead == 0

    def test_detached_head(self) -> None:
        summary = parse_status("## HEAD (no branch)\0")

        assert summary.current is None
        assert summary.detached is True

    def test_unborn_branch(self) -> None:
        summary = parse_status("## No commits yet on trunk\0?? notes.txt\0")

        assert summary.current == "trunk"
        assert summary.not_added == ["notes.txt"]

    def test_file_categories(self) -> None:
        output = (
            "## main\0"
            "M  staged.txt\0"
            " M modified.txt\0"
            "A  created.txt\0"
            " D removed.txt\0"
            "?? new.txt\0"
            "R  new_name.txt\0old_name.txt\0"
            "UU conflict.txt\0"
        )
        summary = parse_status(output)

        assert [entry.path for entry in summary.files] == [
            "staged.txt",
            "modified.txt",
            "created.txt",
            "removed.txt",
            "new.txt",
            "new_name.txt",
            "conflict.txt",
        ]
        assert summary.staged == ["staged.txt", "created.txt", "new_name.txt"]
        assert summary.modified == ["staged.txt", "modified.txt"]
        assert summary.deleted == ["removed.txt"]
        assert summary.renamed == ["new_name.txt"]
        assert summary.conflicted == ["conflict.txt"]
        assert summary.not_added == ["new.txt"]
        assert not summary.is_clean()

    def test_index_and_working_columns(self) -> None:
        summary = parse_status("## main\0AM both.txt\0")
        entry = summary.files[0]

        assert entry.index == "A"
        assert entry.working_dir == "M"

    def test_read_status_from_repository(self, temp_git_repo: Path) -> None:
        (temp_git_repo / "untracked.txt").write_text("new\n")
        (temp_git_repo / "README.md").write_text("# Changed\n")

        summary = read_status(Repo(temp_git_repo))

        assert summary.current == Repo(temp_git_repo).active_branch.name
        assert summary.not_added == ["untracked.txt"]
        assert summary.modified == ["README.md"]
        assert summary.staged == []


class TestReadBranches:
    """Tests for branch listing."""

    def test_local_branches(self, temp_git_repo: Path, default_branch: str) -> None:
        repo = Repo(temp_git_repo)
        repo.create_head("feature")

        branches = read_branches(repo)

        assert branches.current == default_branch
        assert branches.detached is False
        assert sorted(branches.all) == sorted([default_branch, "feature"])
        assert branches.remote == []

    def test_remote_branches_use_remotes_prefix(
        self, repo_with_remote: tuple[Path, Path], default_branch: str
    ) -> None:
        repo_path, _ = repo_with_remote

        branches = read_branches(Repo(repo_path), include_remote=True)

        assert f"remotes/origin/{default_branch}" in branches.remote
        assert default_branch in branches.all

    def test_detached_head(self, temp_git_repo: Path) -> None:
        repo = Repo(temp_git_repo)
        repo.git.checkout(repo.head.commit.hexsha)

        branches = read_branches(repo)

        assert branches.detached is True
        assert branches.current is None


class TestDescribeGitError:
    """Tests for extracting git's own message from a failed command."""

    def test_uses_stderr_without_command_line(self) -> None:
        error = git.GitCommandError(
            ["git", "push", "origin", "non-fast-forward"],
            128,
            stderr="fatal: 'origin' does not appear to be a git repository\n",
        )

        reason = describe_git_error(error)

        assert reason == "fatal: 'origin' does not appear to be a git repository"
        assert "cmdline" not in reason

    def test_falls_back_when_stderr_is_empty(self) -> None:
        error = git.GitCommandError(["git", "merge"], 1)

        assert describe_git_error(error) == str(error).strip()

    def test_other_exceptions(self) -> None:
        assert describe_git_error(ValueError("bad revision")) == "bad revision"
        assert describe_git_error(ValueError()) == "Unknown error"

    def test_command_output_unwraps_streams(self) -> None:
        error = git.GitCommandError(
            ["git", "merge"], 1, stderr="err text", stdout="CONFLICT (content)\n"
        )

        assert command_output(error.stdout) == "CONFLICT (content)"
        assert command_output(error.stderr) == "err text"
        assert command_output(None) == ""

