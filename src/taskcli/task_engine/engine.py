"""Task engine: CRUD and status changes on top of :class:`TaskStore`.

Every operation loads the database, applies its change in memory, and saves
the whole document once.  Input is validated before anything is mutated, so
a rejected call never leaves a partial change on disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from loguru import logger

from ..constants import TITLE_MAX_LENGTH
from ..errors import TaskNotFoundError, ValidationError
from .model import Task, TaskDatabase, TaskStatus
from .store import TaskStore

_UPDATABLE_FIELDS = ("title", "description", "status", "branch")


# ---------------------------------------------------------------------------
# Input helpers
# ---------------------------------------------------------------------------

def _validate_title(title: Any) -> str:
    """Return the trimmed title or raise :class:`ValidationError`."""
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Task title is required")
    trimmed = title.strip()
    if len(trimmed) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Task title must be at most {TITLE_MAX_LENGTH} characters")
    return trimmed


def _normalize_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    if not isinstance(description, str):
        raise ValidationError("Task description must be a string")
    return description.strip() or None


def _coerce_status(status: Union[TaskStatus, str]) -> TaskStatus:
    if isinstance(status, TaskStatus):
        return status
    try:
        return TaskStatus(str(status))
    except ValueError:
        raise ValidationError(
            f"Invalid status: {status}. Valid values: {', '.join(TaskStatus.values())}"
        ) from None


def parse_task_id(value: Any) -> int:
    """Convert user input such as ``"12"`` into a positive task id."""
    if isinstance(value, bool):
        raise ValidationError("Task ID must be a positive integer")
    if isinstance(value, int):
        task_id = value
    else:
        text = str(value).strip()
        if not (text.isascii() and text.isdigit()):
            raise ValidationError("Task ID must be a positive integer")
        task_id = int(text)
    if task_id <= 0:
        raise ValidationError("Task ID must be a positive integer")
    return task_id


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TaskEngine:
    """Create, read, update, and delete tasks.

    Parameters
    ----------
    store:
        A :class:`TaskStore`, or a project directory to build one for.
    """

    def __init__(self, store: Union[TaskStore, Path]) -> None:
        self.store = store if isinstance(store, TaskStore) else TaskStore(Path(store))

    @staticmethod
    def _require(db: TaskDatabase, task_id: int) -> Task:
        task = db.find(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create_task(self, title: str, description: Optional[str] = None) -> Task:
        """Create and persist a new ``open`` task, returning it."""
        clean_title = _validate_title(title)
        db = self.store.load()
        task = Task(
            id=db.next_id,
            title=clean_title,
            description=_normalize_description(description),
            status=TaskStatus.OPEN,
        )
        task.updated_at = task.created_at
        db.tasks.append(task)
        db.next_id += 1
        self.store.save(db)
        logger.info("Created task {}: {}", task.id, task.title)
        return task

    def list_tasks(
        self,
        *,
        status: Optional[Union[TaskStatus, str]] = None,
        include_archived: bool = False,
    ) -> list[Task]:
        """Return tasks sorted by id; archived ones only if asked for."""
        wanted = _coerce_status(status) if status is not None else None
        tasks = self.store.load().tasks
        if wanted is not None:
            tasks = [t for t in tasks if t.status == wanted]
        if not include_archived:
            tasks = [t for t in tasks if not t.is_archived]
        return sorted(tasks, key=lambda t: t.id)

    def get_task(self, task_id: int) -> Task:
        return self._require(self.store.load(), task_id)

    def update_task(self, task_id: int, changes: Mapping[str, Any]) -> Task:
        """Apply a partial update; only the keys present in *changes* are touched.

        ``description=None`` (or blank) clears the description and
        ``branch=None`` clears the branch.  ``updated_at`` always moves.
        """
        unknown = sorted(set(changes) - set(_UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown task field(s): {', '.join(unknown)}")

        db = self.store.load()
        task = self._require(db, task_id)

        # Validate everything before mutating the loaded task.
        title = _validate_title(changes["title"]) if "title" in changes else None
        description = _normalize_description(changes.get("description"))
        status = _coerce_status(changes["status"]) if "status" in changes else None
        branch = changes.get("branch")
        if branch is not None and (not isinstance(branch, str) or not branch.strip()):
            raise ValidationError("Branch name must be a non-empty string")

        if title is not None:
            task.title = title
        if "description" in changes:
            task.description = description
        if status is not None:
            task.status = status
        if "branch" in changes:
            task.branch = branch
        task.touch()

        self.store.save(db)
        logger.info("Updated task {} ({})", task.id, ", ".join(sorted(changes)) or "touch")
        return task

    def change_status(self, task_id: int, status: Union[TaskStatus, str]) -> Task:
        return self.update_task(task_id, {"status": status})

    def delete_task(self, task_id: int) -> None:
        """Remove a task for good.  Its id is never handed out again."""
        db = self.store.load()
        task = self._require(db, task_id)
        db.tasks.remove(task)
        self.store.save(db)
        logger.info("Deleted task {}", task_id)

    def archive_task(self, task_id: int) -> Task:
        return self.change_status(task_id, TaskStatus.ARCHIVED)
