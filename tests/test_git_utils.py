"""Tests for the git adapter (git_utils.py)."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from taskcli.errors import FaultKind, GitError
from taskcli.git_utils import GitRepository

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def _git(repo: Path, *args: str) -> None:
    subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    path = tmp_path / "repo"
    path.mkdir()
    _git(path, "init")
    _git(path, "commit", "--allow-empty", "-m", "init")
    return path


def test_is_repository(repo: Path, tmp_path: Path) -> None:
    assert GitRepository(repo).is_repository()
    plain = tmp_path / "plain"
    plain.mkdir()
    assert not GitRepository(plain).is_repository()


def test_create_and_checkout(repo: Path) -> None:
    git = GitRepository(repo)
    assert not git.branch_exists("feature/task-1-x")
    git.create_and_checkout("feature/task-1-x")
    assert git.branch_exists("feature/task-1-x")
    assert git.current_branch() == "feature/task-1-x"


def test_checkout_existing(repo: Path) -> None:
    git = GitRepository(repo)
    original = git.current_branch()
    git.create_and_checkout("feature/task-2-y")
    git.checkout(original)
    assert git.current_branch() == original
    git.checkout("feature/task-2-y")
    assert git.current_branch() == "feature/task-2-y"


def test_checkout_missing_branch_raises(repo: Path) -> None:
    with pytest.raises(GitError) as excinfo:
        GitRepository(repo).checkout("does-not-exist")
    assert excinfo.value.kind == FaultKind.VERSION_CONTROL
    assert "does-not-exist" in str(excinfo.value)


def test_create_existing_branch_raises(repo: Path) -> None:
    git = GitRepository(repo)
    git.create_and_checkout("dup")
    with pytest.raises(GitError, match="Failed to create branch dup"):
        git.create_and_checkout("dup")


def test_branch_exists_outside_repository_raises(tmp_path: Path) -> None:
    with pytest.raises(GitError):
        GitRepository(tmp_path).branch_exists("main")
