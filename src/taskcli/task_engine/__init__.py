"""Task model, file-backed store, and engine.

The store owns ``.task/tasks.json`` and its backup; the engine layers CRUD
and status changes on top of it.
"""

from .engine import TaskEngine, parse_task_id
from .model import Task, TaskDatabase, TaskStatus
from .store import TaskStore

__all__ = ["Task", "TaskDatabase", "TaskEngine", "TaskStatus", "TaskStore", "parse_task_id"]
