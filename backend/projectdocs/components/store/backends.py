"""Collection backends.

A backend persists whole collections: each read returns the complete list of
JSON-ready records of one collection and each write replaces it. There is no
row-level persistence.

Implementations:
- MemoryBackend: process-local dict (tests, local-dev)
- JsonFileBackend: one <collection>.json file per collection
- RedisBackend: one Redis key per collection (see redis_backend.py)

Every backend raises StorageUnavailable when it cannot read or write; none of
them reports an outage as an empty collection.
"""

import copy
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Protocol

from projectdocs.errors import StorageUnavailable
from projectdocs.utils import get_logger

logger = get_logger(__name__)

Record = dict[str, Any]


class CollectionBackend(Protocol):
    """Protocol defining the whole-collection persistence interface."""

    def read(self, name: str) -> list[Record]: ...
    def write(self, name: str, records: list[Record]) -> None: ...
    def drop(self, name: str) -> None: ...
    def ping(self) -> bool: ...


class MemoryBackend:
    """Thread-safe in-memory backend.

    Records are deep-copied on the way in and out so callers never share
    mutable state with the stored snapshot. After close() every call raises
    StorageUnavailable, like a closed connection.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._collections: dict[str, list[Record]] = {}
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise StorageUnavailable("Memory backend is closed")

    def read(self, name: str) -> list[Record]:
        with self._lock:
            self._check_open()
            return copy.deepcopy(self._collections.get(name, []))

    def write(self, name: str, records: list[Record]) -> None:
        with self._lock:
            self._check_open()
            self._collections[name] = copy.deepcopy(records)

    def drop(self, name: str) -> None:
        with self._lock:
            self._check_open()
            self._collections.pop(name, None)

    def ping(self) -> bool:
        return not self._closed

    def close(self) -> None:
        """Make the backend unavailable."""
        with self._lock:
            self._closed = True


class JsonFileBackend:
    """Backend writing one JSON document per collection.

    Directory layout:
    {data_dir}/
    ├── companies.json
    ├── folders.json
    └── ...

    Writes use temp file + rename so a crash never leaves a half-written
    collection behind. A missing file is an empty collection; an unreadable
    file or directory is an error.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)

    def _path(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def read(self, name: str) -> list[Record]:
        path = self._path(name)
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read collection {name} from {path}: {e}")
            raise StorageUnavailable(f"Cannot read collection {name}: {e}") from e
        if not isinstance(data, list):
            raise StorageUnavailable(f"Collection file {path} does not hold a JSON array")
        return data

    def write(self, name: str, records: list[Record]) -> None:
        path = self._path(name)
        content = json.dumps(records, ensure_ascii=False, indent=2)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self._write_atomic(path, content)
        except OSError as e:
            logger.error(f"Failed to write collection {name} to {path}: {e}")
            raise StorageUnavailable(f"Cannot write collection {name}: {e}") from e
        logger.debug(f"Wrote collection {name}: {len(records)} records")

    def _write_atomic(self, path: Path, content: str) -> None:
        """Write content atomically using temp file + rename."""
        fd, tmp_path_str = tempfile.mkstemp(
            dir=path.parent,
            suffix=".tmp",
            prefix=f".{path.name}.",
        )
        tmp_path = Path(tmp_path_str)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    def drop(self, name: str) -> None:
        try:
            self._path(name).unlink(missing_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"Cannot drop collection {name}: {e}") from e

    def ping(self) -> bool:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.data_dir, os.W_OK)
