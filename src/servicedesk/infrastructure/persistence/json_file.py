"""A JSON document on disk with a lock for read-modify-write cycles.

Each CLI call runs in its own process, so a conditional update (check
then write) must be serialized across processes, not just threads. The
lock pairs a per-path ``threading.RLock`` with an exclusive ``fcntl.flock``
on a sidecar ``<name>.lock`` file. Writes go to a temporary file that is
then renamed over the document, so a reader never sees a partial file.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, TextIO


class FileLock:
    """Reentrant lock held across threads and processes for one path."""

    def __init__(self, path: Path) -> None:
        self.path = path.with_name(path.name + ".lock")
        self._thread_lock = threading.RLock()
        self._depth = 0
        self._handle: TextIO | None = None

    def __enter__(self) -> FileLock:
        self._thread_lock.acquire()
        if self._depth == 0:
            try:
                handle = open(self.path, "a")
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
            except BaseException:
                self._thread_lock.release()
                raise
            self._handle = handle
        self._depth += 1
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._depth -= 1
        if self._depth == 0 and self._handle is not None:
            fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
            self._handle.close()
            self._handle = None
        self._thread_lock.release()


_locks: dict[Path, FileLock] = {}
_registry_lock = threading.Lock()


def _lock_for(path: Path) -> FileLock:
    key = path.resolve()
    with _registry_lock:
        if key not in _locks:
            _locks[key] = FileLock(key)
        return _locks[key]


class JsonFile:

    def __init__(self, file_path: Path, empty: Any) -> None:
        self.path = file_path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.lock = _lock_for(file_path)
        self._ensure_file(empty)

    def read(self) -> Any:
        with self.lock:
            return json.loads(self.path.read_text(encoding="utf-8"))

    def write(self, data: Any) -> None:
        with self.lock:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    tmp.write(json.dumps(data, indent=2) + "\n")
                    tmp.flush()
                    os.fsync(tmp.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise

    def _ensure_file(self, empty: Any) -> None:
        with self.lock:
            if not self.path.exists():
                self.write(empty)
