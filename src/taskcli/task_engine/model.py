"""Task and database models for the task engine.

Both types serialize to the on-disk JSON layout, which uses camelCase keys
(``createdAt``, ``nextId``) and omits optional fields that are unset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..utils import _now_iso


def _positive_int(value: Any, name: str) -> int:
    """Return *value* as an int if it is a whole number of at least 1."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TaskStatus(str, Enum):
    """Lifecycle status of a task."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]


# ---------------------------------------------------------------------------
# Task dataclass
# ---------------------------------------------------------------------------

@dataclass
class Task:
    """A unit of trackable work.

    ``id`` is assigned by :class:`~taskcli.task_engine.engine.TaskEngine`
    and never reused. ``branch`` is set once the task has been started.
    """

    id: int
    title: str
    status: TaskStatus = TaskStatus.OPEN
    description: Optional[str] = None
    branch: Optional[str] = None
    created_at: str = field(default_factory=_now_iso)
    updated_at: str = field(default_factory=_now_iso)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON layout of ``tasks.json``."""
        data: dict[str, Any] = {"id": self.id, "title": self.title}
        if self.description is not None:
            data["description"] = self.description
        data["status"] = self.status.value
        if self.branch is not None:
            data["branch"] = self.branch
        data["createdAt"] = self.created_at
        data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Deserialize one entry of the ``tasks`` array.

        Raises:
            KeyError: A required key is missing.
            ValueError: ``id`` is not a positive integer, ``status`` is not a
                known value, or a text field holds something other than a string.
        """
        title = data["title"]
        if not isinstance(title, str):
            raise ValueError(f"title must be a string, got {type(title).__name__}")
        for key in ("description", "branch"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {type(value).__name__}")
        return cls(
            id=_positive_int(data["id"], "id"),
            title=title,
            status=TaskStatus(str(data["status"])),
            description=data.get("description"),
            branch=data.get("branch"),
            created_at=str(data["createdAt"]),
            updated_at=str(data["updatedAt"]),
        )

    # ------------------------------------------------------------------
    # Status helpers
    # ------------------------------------------------------------------

    def touch(self) -> None:
        """Bump ``updated_at`` to now."""
        self.updated_at = _now_iso()

    @property
    def is_archived(self) -> bool:
        return self.status == TaskStatus.ARCHIVED


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@dataclass
class TaskDatabase:
    """The whole persisted state: every task plus the id counter."""

    tasks: list[Task] = field(default_factory=list)
    next_id: int = 1

    @classmethod
    def empty(cls) -> "TaskDatabase":
        return cls(tasks=[], next_id=1)

    def find(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"tasks": [t.to_dict() for t in self.tasks], "nextId": self.next_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TaskDatabase":
        """Deserialize the whole document.

        Raises:
            ValueError: ``nextId`` is not a positive integer above every task id.
        """
        tasks = [Task.from_dict(d) for d in data["tasks"]]
        next_id = _positive_int(data["nextId"], "nextId")
        highest = max((t.id for t in tasks), default=0)
        if next_id <= highest:
            raise ValueError(f"nextId {next_id} must be greater than the highest task id {highest}")
        return cls(tasks=tasks, next_id=next_id)
