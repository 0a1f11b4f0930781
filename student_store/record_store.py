import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many readers or one writer at a time. Waiting writers go before new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class RecordStore:
    """In-memory mapping of student name -> branch, shared by all requests."""

    def __init__(self):
        self._records: Dict[str, str] = {}
        self._lock = ReadWriteLock()

    def put(self, name: str, branch: str) -> None:
        """Insert a record, replacing the branch if the name already exists."""
        with self._lock.write_locked():
            replaced = name in self._records
            self._records[name] = branch
        logger.info("%s record %r", "Replaced" if replaced else "Added", name)

    def delete(self, name: str) -> bool:
        """Remove a record. Returns False (not an error) when it was absent."""
        with self._lock.write_locked():
            removed = self._records.pop(name, None) is not None
        if removed:
            logger.info("Removed record %r", name)
        else:
            logger.debug("Delete of absent record %r ignored", name)
        return removed

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of all records; later writes never show up in it."""
        with self._lock.read_locked():
            records = dict(self._records)
        logger.debug("Snapshot of %d records", len(records))
        return records

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)
