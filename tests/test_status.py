"""Tests for the git_status tool."""

from __future__ import annotations

from pathlib import Path

from git import Repo

from git_mcp_tools.tools.status import git_status, handle_git_status


def _text(response: dict) -> str:
    return response["content"][0]["text"]


class TestGitStatus:
    """Tests for the status report."""

    def test_clean_repository(self, temp_git_repo: Path, default_branch: str) -> None:
        text = git_status(str(temp_git_repo))

        assert text == "\n\n".join(
            [
                f"Repository Status for: {temp_git_repo}",
                f"Current branch: {default_branch}",
                "No staged files",
                "No modified files",
                "No untracked files",
                "Branch is up to date with remote",
            ]
        )

    def test_lists_changed_files(self, temp_git_repo: Path) -> None:
        repo = Repo(temp_git_repo)
        (temp_git_repo / "staged.txt").write_text("s\n")
        repo.git.add("staged.txt")
        (temp_git_repo / "README.md").write_text("# Changed\n")
        (temp_git_repo / "untracked.txt").write_text("u\n")

        text = git_status(str(temp_git_repo))

        assert "Staged files:\n  - staged.txt" in text
        assert "Modified files:\n  - README.md" in text
        assert "Untracked files:\n  - untracked.txt" in text

    def test_detached_head(self, temp_git_repo: Path) -> None:
        repo = Repo(temp_git_repo)
        repo.git.checkout(repo.head.commit.hexsha)

        text = git_status(str(temp_git_repo))

        assert "Current branch: HEAD (detached)" in text

    def test_ahead_of_remote(
        self,
        repo_with_remote: tuple[Path, Path],
        commit_file,
    ) -> None:
        repo_path, _ = repo_with_remote
        commit_file(repo_path, "one.txt", "1\n", "One")
        commit_file(repo_path, "two.txt", "2\n", "Two")

        text = git_status(str(repo_path))

        assert text.endswith("Branch is 2 commits ahead, 0 commits behind")

    def test_path_is_trimmed_in_header(self, temp_git_repo: Path) -> None:
        text = git_status(f"  {temp_git_repo}  ")

        assert text.startswith(f"Repository Status for: {temp_git_repo}\n\n")


class TestHandleGitStatus:
    """Tests for the git_status envelope."""

    def test_success(self, temp_git_repo: Path) -> None:
        response = handle_git_status(str(temp_git_repo))

        assert response["content"][0]["type"] == "text"
        assert _text(response).startswith("Repository Status for: ")

    def test_missing_path(self) -> None:
        response = handle_git_status()

        assert _text(response) == (
            "Error: Repository path is required and must be a string"
        )

    def test_not_a_repository(self, tmp_path: Path) -> None:
        response = handle_git_status(str(tmp_path))

        assert _text(response) == f"Error: The path '{tmp_path}' is not a git repository"
