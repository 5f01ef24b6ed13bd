"""File-based task store with a one-generation backup.

Stores the whole :class:`TaskDatabase` in a single JSON file (``tasks.json``)
inside the project's ``.task/`` directory.  Every save first copies the
current file to ``tasks.json.bak`` and only then replaces the primary, so the
backup always holds the last state that was successfully written.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from loguru import logger

from ..constants import (
    BACKUP_SUFFIX,
    STATE_DIR_MODE,
    STATE_DIR_NAME,
    STORE_FILE_MODE,
    STORE_FILENAME,
)
from ..errors import CorruptionError, MalformedDataError, StorageError
from .model import TaskDatabase


# ---------------------------------------------------------------------------
# Low-level I/O
# ---------------------------------------------------------------------------

def _write_json_atomic(path: Path, payload: dict[str, Any]) -> None:
    """Write *payload* to *path* (write-tmp-then-rename), owner-only."""
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), prefix=path.name, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, ensure_ascii=False)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp, STORE_FILE_MODE)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def _check_shape(data: Any) -> None:
    if not isinstance(data, dict):
        raise MalformedDataError(
            f"Data file has an invalid format: expected object, got {type(data).__name__}"
        )
    if not isinstance(data.get("tasks"), list):
        raise MalformedDataError("Data file has an invalid format: 'tasks' must be an array")
    next_id = data.get("nextId")
    if isinstance(next_id, bool) or not isinstance(next_id, (int, float)):
        raise MalformedDataError("Data file has an invalid format: 'nextId' must be a number")


# ---------------------------------------------------------------------------
# TaskStore
# ---------------------------------------------------------------------------

class TaskStore:
    """Durable storage for one :class:`TaskDatabase`.

    Parameters
    ----------
    base_dir:
        Project directory; data lives in ``<base_dir>/.task/``.
    """

    def __init__(self, base_dir: Path) -> None:
        self._data_dir = Path(base_dir) / STATE_DIR_NAME
        self._file_path = self._data_dir / STORE_FILENAME
        self._backup_path = self._data_dir / (STORE_FILENAME + BACKUP_SUFFIX)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def backup_path(self) -> Path:
        return self._backup_path

    # -- public API ---------------------------------------------------------

    def initialize(self) -> None:
        """Create the data directory (owner-only) if it is missing."""
        if self._data_dir.is_dir():
            return
        try:
            self._data_dir.mkdir(mode=STATE_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to create data directory {self._data_dir}: {exc}") from exc
        logger.debug("Created data directory {}", self._data_dir)

    def exists(self) -> bool:
        return self._file_path.exists()

    def load(self) -> TaskDatabase:
        """Read the database, or return an empty one if nothing is stored yet.

        Raises:
            CorruptionError: The file is not valid JSON.
            MalformedDataError: The JSON does not have the expected shape.
            StorageError: The file could not be read.
        """
        if not self.exists():
            logger.debug("No data file at {}; starting with an empty database", self._file_path)
            return TaskDatabase.empty()

        try:
            raw = self._file_path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read data file {self._file_path}: {exc}") from exc

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            logger.warning("Data file {} is corrupted: {}", self._file_path, exc)
            raise CorruptionError(
                f"Data file is corrupted. Restore it from the backup ({self._backup_path})"
            ) from exc

        _check_shape(data)
        try:
            db = TaskDatabase.from_dict(data)
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            logger.warning("Data file {} holds an invalid task entry: {}", self._file_path, exc)
            raise MalformedDataError(f"Data file has an invalid format: bad task entry ({exc})") from exc

        logger.debug("Loaded {} task(s) from {}", len(db.tasks), self._file_path)
        return db

    def save(self, db: TaskDatabase) -> None:
        """Back up the current file, then replace it with *db*.

        Raises:
            StorageError: Directory creation, backup, or write failed.
        """
        payload = db.to_dict()
        self.initialize()
        self.backup()
        try:
            _write_json_atomic(self._file_path, payload)
        except OSError as exc:
            raise StorageError(f"Failed to save data file {self._file_path}: {exc}") from exc
        logger.debug("Saved {} task(s) to {} (nextId={})", len(db.tasks), self._file_path, db.next_id)

    def backup(self) -> None:
        """Copy the primary file verbatim to the backup path, if it exists."""
        if not self.exists():
            return
        try:
            shutil.copyfile(self._file_path, self._backup_path)
            os.chmod(self._backup_path, STORE_FILE_MODE)
        except OSError as exc:
            raise StorageError(f"Failed to create backup {self._backup_path}: {exc}") from exc
        logger.debug("Backed up {} to {}", self._file_path, self._backup_path)
