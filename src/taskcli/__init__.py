"""Provide the public `taskcli` package exports."""

from __future__ import annotations

from .branch_naming import generate_branch_name, sanitize_for_branch_name
from .errors import FaultKind, TaskCLIError
from .task_engine import Task, TaskDatabase, TaskEngine, TaskStatus, TaskStore

__all__ = [
    "FaultKind",
    "Task",
    "TaskCLIError",
    "TaskDatabase",
    "TaskEngine",
    "TaskStatus",
    "TaskStore",
    "generate_branch_name",
    "sanitize_for_branch_name",
]
