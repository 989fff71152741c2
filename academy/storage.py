"""
Storage adapter

Every collection (courses, students, enrollments, payments) is stored under its
own key as one JSON array. A save always rewrites the whole collection.

- Storage: the port the repositories depend on
- SqlStorage: one row per key in the `collections` table
- MemoryStorage: dictionary-backed store used by the tests

Both implementations serialise access through a re-entrant lock. Saves made
inside `transaction()` are committed together or not at all.
"""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, ContextManager, Dict, Iterator, List, Optional, Protocol

from sqlalchemy.orm import Session

from academy.exceptions import StorageCorruptedError
from academy.models.collection_model import Collection

logger = logging.getLogger(__name__)

COURSES = "courses"
STUDENTS = "students"
ENROLLMENTS = "enrollments"
PAYMENTS = "payments"

Record = Dict[str, Any]


class Storage(Protocol):
    def load(self, key: str) -> List[Record]:
        """Returns the stored collection, or an empty list when the key is absent."""
        ...

    def save(self, key: str, records: List[Record]) -> None:
        """Replaces the stored collection."""
        ...

    def has(self, key: str) -> bool:
        ...

    def transaction(self) -> ContextManager[None]:
        ...


def _decode(key: str, raw: str) -> List[Record]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Collection '{key}' holds invalid JSON: {e}")
        raise StorageCorruptedError(key, str(e)) from e
    if not isinstance(data, list):
        logger.error(f"Collection '{key}' holds a {type(data).__name__}, expected a list")
        raise StorageCorruptedError(key, f"expected a JSON array, got {type(data).__name__}")
    return data


def _encode(records: List[Record]) -> str:
    return json.dumps(records, ensure_ascii=False)


class MemoryStorage:
    """
    In-memory store. Values are kept as JSON text so callers never share
    references with the stored state and corrupted values can be simulated.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.RLock()
        self._depth = 0

    def load(self, key: str) -> List[Record]:
        with self._lock:
            raw = self._data.get(key)
            if raw is None:
                return []
            return _decode(key, raw)

    def save(self, key: str, records: List[Record]) -> None:
        with self._lock:
            self._data[key] = _encode(records)

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            snapshot = dict(self._data)
            self._depth = 1
            try:
                yield
            except Exception:
                self._data = snapshot
                raise
            finally:
                self._depth = 0


class SqlStorage:
    """
    Store backed by the `collections` table.
    Outside a transaction every call opens and commits its own session.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory
        self._session: Optional[Session] = None
        self._lock = threading.RLock()

    def load(self, key: str) -> List[Record]:
        with self.transaction():
            row = self._session.get(Collection, key)
            if row is None:
                return []
            return _decode(key, row.value)

    def save(self, key: str, records: List[Record]) -> None:
        with self.transaction():
            row = self._session.get(Collection, key)
            if row is None:
                self._session.add(Collection(key=key, value=_encode(records)))
            else:
                row.value = _encode(records)
            self._session.flush()

    def has(self, key: str) -> bool:
        with self.transaction():
            return self._session.get(Collection, key) is not None

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            if self._session is not None:
                yield
                return

            session = self._session_factory()
            self._session = session
            try:
                yield
                session.commit()
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()
                self._session = None
