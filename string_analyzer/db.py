import threading
from typing import List, Optional

from fastapi import Request

from .schemas import StringRecord


class StringStore:
    """In-memory, insertion-ordered collection of analyzed strings.

    The store does not enforce uniqueness itself; callers hold ``lock`` across
    check-then-insert and find-then-remove sequences so that concurrent
    requests served from the thread pool never interleave.
    """

    def __init__(self) -> None:
        self._records: List[StringRecord] = []
        self.lock = threading.RLock()

    def __len__(self) -> int:
        with self.lock:
            return len(self._records)

    def insert(self, record: StringRecord) -> None:
        with self.lock:
            self._records.append(record)

    def find_exact(self, value: str) -> Optional[StringRecord]:
        """Case-sensitive lookup by value."""
        with self.lock:
            for record in self._records:
                if record.value == value:
                    return record
        return None

    def find_by_value_ci(self, value: str) -> Optional[int]:
        """Index of the first record whose value matches ignoring case."""
        wanted = value.lower()
        with self.lock:
            for idx, record in enumerate(self._records):
                if record.value.lower() == wanted:
                    return idx
        return None

    def remove_at(self, index: int) -> StringRecord:
        with self.lock:
            return self._records.pop(index)

    def all(self) -> List[StringRecord]:
        with self.lock:
            return list(self._records)


def get_store(request: Request) -> StringStore:
    """Dependency resolving the store owned by the running application."""
    return request.app.state.store
