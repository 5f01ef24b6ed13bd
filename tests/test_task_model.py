"""Tests for the task and database models (task_engine/model.py)."""

from __future__ import annotations

import re

import pytest

from taskcli.task_engine.model import Task, TaskDatabase, TaskStatus
from taskcli.utils import _now_iso, _parse_iso


class TestTimestamps:
    def test_now_iso_is_utc_with_milliseconds(self) -> None:
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", _now_iso())

    def test_parse_iso_accepts_z_suffix(self) -> None:
        dt = _parse_iso("2026-01-02T03:04:05.678Z")
        assert dt is not None
        assert dt.utcoffset().total_seconds() == 0
        assert dt.microsecond == 678000

    def test_parse_iso_rejects_garbage(self) -> None:
        assert _parse_iso("not a date") is None
        assert _parse_iso(None) is None


class TestTaskSerialization:
    def test_defaults(self) -> None:
        t = Task(id=1, title="Write docs")
        assert t.status == TaskStatus.OPEN
        assert t.description is None
        assert t.branch is None

    def test_optional_fields_omitted(self) -> None:
        t = Task(id=3, title="Write docs", created_at="2026-01-01T00:00:00.000Z",
                 updated_at="2026-01-01T00:00:00.000Z")
        assert t.to_dict() == {
            "id": 3,
            "title": "Write docs",
            "status": "open",
            "createdAt": "2026-01-01T00:00:00.000Z",
            "updatedAt": "2026-01-01T00:00:00.000Z",
        }

    def test_round_trip(self) -> None:
        t = Task(
            id=7,
            title="Implement Auth",
            description="OAuth first",
            status=TaskStatus.IN_PROGRESS,
            branch="feature/task-7-implement-auth",
        )
        data = t.to_dict()
        assert data["status"] == "in_progress"
        assert data["branch"] == "feature/task-7-implement-auth"
        assert "created_at" not in data
        assert Task.from_dict(data) == t

    def test_from_dict_rejects_unknown_status(self) -> None:
        with pytest.raises(ValueError):
            Task.from_dict({"id": 1, "title": "x", "status": "done",
                            "createdAt": "a", "updatedAt": "b"})

    def test_from_dict_requires_timestamps(self) -> None:
        with pytest.raises(KeyError):
            Task.from_dict({"id": 1, "title": "x", "status": "open"})

    @pytest.mark.parametrize(
        "overrides",
        [{"title": None}, {"description": 5}, {"branch": False}, {"id": 0}, {"id": "3"}],
    )
    def test_from_dict_rejects_wrong_types(self, overrides: dict) -> None:
        data = {"id": 1, "title": "x", "status": "open", "createdAt": "a", "updatedAt": "b"}
        data.update(overrides)
        with pytest.raises(ValueError):
            Task.from_dict(data)

    def test_status_values(self) -> None:
        assert TaskStatus.values() == ["open", "in_progress", "completed", "archived"]


class TestTaskDatabase:
    def test_empty(self) -> None:
        db = TaskDatabase.empty()
        assert db.tasks == []
        assert db.next_id == 1
        assert db.to_dict() == {"tasks": [], "nextId": 1}

    def test_find(self) -> None:
        db = TaskDatabase(tasks=[Task(id=1, title="a"), Task(id=4, title="b")], next_id=5)
        assert db.find(4).title == "b"
        assert db.find(2) is None

    def test_round_trip(self) -> None:
        db = TaskDatabase(tasks=[Task(id=2, title="b"), Task(id=1, title="a")], next_id=9)
        assert TaskDatabase.from_dict(db.to_dict()) == db

    def test_next_id_must_exceed_every_task_id(self) -> None:
        data = TaskDatabase(tasks=[Task(id=1, title="a")], next_id=2).to_dict()
        data["nextId"] = 1
        with pytest.raises(ValueError, match="nextId"):
            TaskDatabase.from_dict(data)
