"""Pytest configuration and fixtures for git tool tests.

Every fixture builds a real repository in a temporary directory, so the
tools run against the actual git executable.
"""

from __future__ import annotations

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from git import Repo


def _init_repo(repo_path: Path) -> Repo:
    repo = Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()
    repo.config_writer().set_value("commit", "gpgsign", "false").release()
    repo.config_writer().set_value("tag", "gpgsign", "false").release()
    return repo


@pytest.fixture
def temp_git_repo() -> Generator[Path, None, None]:
    """Create a temporary Git repository with one commit."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir)
        repo = _init_repo(repo_path)

        # Create initial file and commit
        readme = repo_path / "README.md"
        readme.write_text("# Test Repository\n")
        repo.index.add(["README.md"])
        repo.index.commit("Initial commit")

        yield repo_path


@pytest.fixture
def empty_git_repo() -> Generator[Path, None, None]:
    """Create a temporary Git repository without any commits."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir)
        _init_repo(repo_path)
        yield repo_path


@pytest.fixture
def repo_with_remote(temp_git_repo: Path) -> Generator[tuple[Path, Path], None, None]:
    """Attach a local bare repository as 'origin' and push the default branch.

    Yields:
        (working repository path, bare remote path)
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        remote_path = Path(tmpdir) / "origin.git"
        Repo.init(remote_path, bare=True)

        repo = Repo(temp_git_repo)
        repo.create_remote("origin", str(remote_path))
        repo.git.push("-u", "origin", repo.active_branch.name)

        yield temp_git_repo, remote_path


@pytest.fixture
def default_branch(temp_git_repo: Path) -> str:
    """Name of the branch the temporary repository starts on."""
    return Repo(temp_git_repo).active_branch.name


@pytest.fixture
def commit_file() -> Callable[[Path, str, str, str], str]:
    """Return a helper that writes, stages and commits a file.

    The helper returns the new commit's SHA.
    """

    def _commit(repo_path: Path, name: str, content: str, message: str) -> str:
        repo = Repo(repo_path)
        (repo_path / name).write_text(content)
        repo.index.add([name])
        return repo.index.commit(message).hexsha

    return _commit
