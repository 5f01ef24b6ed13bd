"""Tests for the error taxonomy (errors.py)."""

from __future__ import annotations

import pytest

from taskcli.errors import (
    CorruptionError,
    FaultKind,
    GitError,
    MalformedDataError,
    StorageError,
    TaskCLIError,
    TaskNotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    "cls,kind",
    [
        (ValidationError, FaultKind.VALIDATION),
        (TaskNotFoundError, FaultKind.NOT_FOUND),
        (StorageError, FaultKind.STORAGE),
        (CorruptionError, FaultKind.CORRUPTION),
        (MalformedDataError, FaultKind.MALFORMED_DATA),
        (GitError, FaultKind.VERSION_CONTROL),
    ],
)
def test_each_class_carries_its_kind(cls: type[TaskCLIError], kind: FaultKind) -> None:
    assert issubclass(cls, TaskCLIError)
    assert cls.kind is kind


def test_every_kind_has_a_class() -> None:
    kinds = {cls.kind for cls in TaskCLIError.__subclasses__()}
    assert kinds == set(FaultKind)


def test_not_found_message_names_the_id() -> None:
    err = TaskNotFoundError(12)
    assert err.task_id == 12
    assert err.message == "Task not found (ID: 12)"
    assert err.kind == FaultKind.NOT_FOUND


def test_errors_are_catchable_by_base_class() -> None:
    with pytest.raises(TaskCLIError) as excinfo:
        raise GitError("no repo")
    assert excinfo.value.kind == FaultKind.VERSION_CONTROL
    assert str(excinfo.value) == "no repo"
