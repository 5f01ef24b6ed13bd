"""Provide the small set of git operations used by ``task start``."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from loguru import logger

from .errors import GitError


def _run_git(project_dir: Path, *args: str) -> subprocess.CompletedProcess[str]:
    logger.debug("git {} (cwd={})", " ".join(args), project_dir)
    try:
        return subprocess.run(
            ["git", *args],
            cwd=project_dir,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise GitError(f"Unable to run git: {exc}") from exc


def _failure_detail(result: subprocess.CompletedProcess[str]) -> str:
    return (result.stderr or result.stdout or "").strip() or f"exit code {result.returncode}"


def _git_is_repo(project_dir: Path) -> bool:
    try:
        result = _run_git(project_dir, "rev-parse", "--is-inside-work-tree")
    except GitError:
        return False
    return result.returncode == 0 and result.stdout.strip().lower() == "true"


def _git_current_branch(project_dir: Path) -> Optional[str]:
    result = _run_git(project_dir, "rev-parse", "--abbrev-ref", "HEAD")
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def _git_branch_exists(project_dir: Path, branch: str) -> bool:
    result = _run_git(project_dir, "show-ref", "--verify", "--quiet", f"refs/heads/{branch}")
    if result.returncode == 0:
        return True
    if result.returncode == 1:
        return False
    raise GitError(f"Failed to check branch {branch}: {_failure_detail(result)}")


class GitRepository:
    """Git working tree rooted at *project_dir*."""

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = Path(project_dir)

    def is_repository(self) -> bool:
        return _git_is_repo(self.project_dir)

    def current_branch(self) -> Optional[str]:
        return _git_current_branch(self.project_dir)

    def branch_exists(self, name: str) -> bool:
        return _git_branch_exists(self.project_dir, name)

    def checkout(self, name: str) -> None:
        result = _run_git(self.project_dir, "checkout", name)
        if result.returncode != 0:
            raise GitError(f"Failed to switch to branch {name}: {_failure_detail(result)}")
        logger.info("Switched to branch {}", name)

    def create_and_checkout(self, name: str) -> None:
        result = _run_git(self.project_dir, "checkout", "-b", name, "HEAD")
        if result.returncode != 0:
            raise GitError(f"Failed to create branch {name}: {_failure_detail(result)}")
        logger.info("Created and switched to branch {}", name)
