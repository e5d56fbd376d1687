from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeRecord


class RecordStore(Protocol):
    """Append-only punch log keyed by worker."""

    def fetch_most_recent(self, worker_id: str) -> Optional[TimeRecord]:
        """Most recent record of the worker by timestamp, or None."""

        raise NotImplementedError

    def fetch_in_range(self, worker_id: str, start_date: date, end_date: date) -> Sequence[TimeRecord]:
        """Records whose timestamp falls on a day within the inclusive bounds."""

        raise NotImplementedError

    def append(self, record: TimeRecord) -> TimeRecord:
        """Persist a record and return it with its store-assigned id."""

        raise NotImplementedError
