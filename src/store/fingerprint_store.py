"""Fingerprint snapshot persistence.

This module stores per-source content digests between runs so delta
deploys can tell which sources changed. Writes go through a temp file
and an atomic rename, and the read-then-write cycle is serialized with
a lock file.
"""

from __future__ import annotations

from contextlib import contextmanager
import hashlib
import json
import os
from pathlib import Path
import tempfile
from typing import Iterator

import filelock

from core.constants import HASH_ALGORITHM, SNAPSHOT_LOCK_SUFFIX, SNAPSHOT_LOCK_TIMEOUT_SECONDS
from core.errors import SnapshotLoadError, SuiteBuildStoreError
from core.logging_config import get_logger
from core.types import FingerprintSnapshot

_LOGGER = get_logger(__name__)


def compute_fingerprint(file_path: Path) -> str:
    """Hash the raw bytes of a file.

    Args:
        file_path: File to fingerprint.

    Returns:
        Hex digest string.
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(file_path.read_bytes())
    return hasher.hexdigest()


class FingerprintStore:
    """JSON-file backed fingerprint snapshot store."""

    def __init__(
        self,
        snapshot_path: Path,
        lock_timeout: float = SNAPSHOT_LOCK_TIMEOUT_SECONDS,
    ) -> None:
        self._snapshot_path = snapshot_path
        self._lock_path = snapshot_path.with_name(snapshot_path.name + SNAPSHOT_LOCK_SUFFIX)
        self._lock_timeout = lock_timeout

    @property
    def snapshot_path(self) -> Path:
        return self._snapshot_path

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the snapshot lock for a read-then-write cycle.

        Raises:
            SuiteBuildStoreError: If the lock is not acquired in time.
        """
        self._snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        lock = filelock.FileLock(str(self._lock_path), timeout=self._lock_timeout)
        try:
            with lock:
                yield
        except filelock.Timeout as error:
            raise SuiteBuildStoreError(
                f"Timed out waiting for snapshot lock {self._lock_path}. "
                "Another SuiteBuild run may be in progress; retry when it finishes."
            ) from error

    def load(self) -> FingerprintSnapshot:
        """Load the previous snapshot, treating missing or corrupt files as empty."""
        try:
            return self.read()
        except SnapshotLoadError as error:
            _LOGGER.warning(
                "snapshot_load_failed",
                path=str(self._snapshot_path),
                error=str(error),
                fallback="treating all files as changed",
            )
            return {}

    def read(self) -> FingerprintSnapshot:
        """Read the snapshot file strictly.

        Returns:
            Stored snapshot, empty when the file does not exist.

        Raises:
            SnapshotLoadError: If the file is unreadable or malformed.
        """
        if not self._snapshot_path.exists():
            return {}
        try:
            payload = json.loads(self._snapshot_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            raise SnapshotLoadError(
                f"Failed to read snapshot at {self._snapshot_path}: {error}."
            ) from error
        if not isinstance(payload, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in payload.items()
        ):
            raise SnapshotLoadError(
                f"Invalid snapshot payload at {self._snapshot_path}: "
                "expected an object mapping paths to fingerprints."
            )
        return dict(payload)

    def save(self, snapshot: FingerprintSnapshot) -> None:
        """Replace the stored snapshot atomically.

        Raises:
            SuiteBuildStoreError: If the snapshot cannot be written.
        """
        self._snapshot_path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(snapshot, indent=2) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            dir=self._snapshot_path.parent,
            prefix=f".{self._snapshot_path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self._snapshot_path)
        except OSError as error:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise SuiteBuildStoreError(
                f"Failed to write snapshot at {self._snapshot_path}: {error}. "
                "Check that the snapshot directory is writable."
            ) from error
