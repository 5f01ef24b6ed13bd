"""Error kinds raised by the task store, engine, and git adapter.

The set is closed: every error raised on purpose by ``taskcli`` is one of the
classes below, and each carries a :class:`FaultKind` so callers can branch on
``err.kind`` instead of walking an ``isinstance`` chain.
"""

from __future__ import annotations

from enum import Enum


class FaultKind(str, Enum):
    """Kinds of failure a command can end with."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    CORRUPTION = "corruption"
    MALFORMED_DATA = "malformed_data"
    VERSION_CONTROL = "version_control"


class TaskCLIError(Exception):
    """Base class for all taskcli errors."""

    kind: FaultKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskCLIError):
    """Bad user input: title bounds, unknown fields, malformed ids."""

    kind = FaultKind.VALIDATION


class TaskNotFoundError(TaskCLIError):
    """No task with the requested id."""

    kind = FaultKind.NOT_FOUND

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found (ID: {task_id})")
        self.task_id = task_id


class StorageError(TaskCLIError):
    """Filesystem failure while reading, writing, or backing up."""

    kind = FaultKind.STORAGE


class CorruptionError(TaskCLIError):
    """The data file exists but is not valid JSON."""

    kind = FaultKind.CORRUPTION


class MalformedDataError(TaskCLIError):
    """The data file parsed but does not have the expected shape."""

    kind = FaultKind.MALFORMED_DATA


class GitError(TaskCLIError):
    """A git operation failed or no repository is present."""

    kind = FaultKind.VERSION_CONTROL

