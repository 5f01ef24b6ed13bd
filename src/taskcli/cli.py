"""Provide the `task` command-line entrypoint and its subcommands.

Each subcommand runs one engine operation against the project's `.task/`
store; `start` additionally creates or switches to the task's git branch.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from loguru import logger
from rich.prompt import Confirm

from .branch_naming import generate_branch_name
from .config import VALID_LOG_LEVELS, get_log_level, get_skip_confirm, load_config
from .errors import GitError, TaskCLIError
from .git_utils import GitRepository
from .task_engine import TaskEngine, TaskStatus, TaskStore, parse_task_id
from .task_engine.model import Task
from .ui import UIFormatter


def _configure_logging(level: str = "WARNING") -> None:
    """Configure loguru logger with the specified level."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{module}</cyan>:<cyan>{line}</cyan>\n"
            "{message}"
        ),
    )


@dataclass
class CLIContext:
    project_dir: Path
    engine: TaskEngine
    git: GitRepository
    ui: UIFormatter
    config: dict[str, Any]


def _resolve_project_dir(project_dir: Optional[str]) -> Path:
    return Path(project_dir).expanduser().resolve() if project_dir else Path.cwd().resolve()


def start_task(engine: TaskEngine, git: GitRepository, task_id: int) -> Task:
    """Switch to (creating if needed) the task's branch and mark it in progress."""
    task = engine.get_task(task_id)
    if not git.is_repository():
        raise GitError("Git repository not found. Run `git init` first.")

    branch = generate_branch_name(task.id, task.title)
    if git.branch_exists(branch):
        git.checkout(branch)
    else:
        git.create_and_checkout(branch)

    return engine.update_task(task_id, {"status": TaskStatus.IN_PROGRESS, "branch": branch})


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def _task_add(args: argparse.Namespace, ctx: CLIContext) -> int:
    task = ctx.engine.create_task(args.title, description=args.description)
    ctx.ui.success(f"Created task (ID: {task.id})")
    return 0


def _task_list(args: argparse.Namespace, ctx: CLIContext) -> int:
    tasks = ctx.engine.list_tasks(status=args.status, include_archived=args.all)
    ctx.ui.task_list(tasks)
    return 0


def _task_show(args: argparse.Namespace, ctx: CLIContext) -> int:
    task = ctx.engine.get_task(parse_task_id(args.id))
    ctx.ui.task_detail(task)
    return 0


def _task_start(args: argparse.Namespace, ctx: CLIContext) -> int:
    task = start_task(ctx.engine, ctx.git, parse_task_id(args.id))
    ctx.ui.success(f"Started task (ID: {task.id})")
    ctx.ui.info(f"Branch: {task.branch}")
    return 0


def _task_done(args: argparse.Namespace, ctx: CLIContext) -> int:
    task_id = parse_task_id(args.id)
    ctx.engine.change_status(task_id, TaskStatus.COMPLETED)
    ctx.ui.success(f"Completed task (ID: {task_id})")
    return 0


def _task_delete(args: argparse.Namespace, ctx: CLIContext) -> int:
    task_id = parse_task_id(args.id)
    task = ctx.engine.get_task(task_id)
    if not (args.yes or get_skip_confirm(ctx.config)):
        try:
            confirmed = Confirm.ask(f'Delete task "{task.title}"?', default=False, console=ctx.ui.console)
        except (EOFError, KeyboardInterrupt):
            # No answer (closed stdin or Ctrl-C) counts as "no".
            ctx.ui.info("")
            confirmed = False
        if not confirmed:
            ctx.ui.info("Deletion cancelled.")
            return 0
    ctx.engine.delete_task(task_id)
    ctx.ui.success(f"Deleted task (ID: {task_id})")
    return 0


def _task_archive(args: argparse.Namespace, ctx: CLIContext) -> int:
    task_id = parse_task_id(args.id)
    ctx.engine.archive_task(task_id)
    ctx.ui.success(f"Archived task (ID: {task_id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="task", description="Task tracker with git branch integration")
    parser.add_argument("--project-dir", default=None, help="Project directory (default: current working directory)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=sorted(VALID_LOG_LEVELS),
        default=None,
        help="Log level (default: WARNING, or log_level from .task/config.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Create a new task")
    add.add_argument("title")
    add.add_argument("--description", default=None)
    add.set_defaults(func=_task_add)

    lst = subparsers.add_parser("list", help="List tasks")
    lst.add_argument("--all", action="store_true", help="Include archived tasks")
    lst.add_argument("--status", default=None, choices=TaskStatus.values(), help="Filter by status")
    lst.set_defaults(func=_task_list)

    show = subparsers.add_parser("show", help="Show task details")
    show.add_argument("id")
    show.set_defaults(func=_task_show)

    start = subparsers.add_parser("start", help="Start a task (create or switch to its git branch)")
    start.add_argument("id")
    start.set_defaults(func=_task_start)

    done = subparsers.add_parser("done", help="Mark a task as completed")
    done.add_argument("id")
    done.set_defaults(func=_task_done)

    delete = subparsers.add_parser("delete", help="Delete a task")
    delete.add_argument("id")
    delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    delete.set_defaults(func=_task_delete)

    archive = subparsers.add_parser("archive", help="Archive a task")
    archive.add_argument("id")
    archive.set_defaults(func=_task_archive)

    return parser


def main(argv: list[str] | None = None, ui: Optional[UIFormatter] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "func", None)
    if handler is None:
        parser.print_help()
        return 1

    project_dir = _resolve_project_dir(args.project_dir)
    config, config_error = load_config(project_dir)
    _configure_logging(args.log_level or get_log_level(config))
    if config_error:
        logger.warning("Ignoring invalid config: {}", config_error)

    ctx = CLIContext(
        project_dir=project_dir,
        engine=TaskEngine(TaskStore(project_dir)),
        git=GitRepository(project_dir),
        ui=ui or UIFormatter(),
        config=config,
    )
    try:
        return int(handler(args, ctx) or 0)
    except TaskCLIError as exc:
        logger.debug("Command {} failed with {} error", args.command, exc.kind.value)
        ctx.ui.error(exc.message)
        return 1
