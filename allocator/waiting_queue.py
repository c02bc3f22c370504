"""
FIFO waiting queue for requests that found no slot within the horizon.
No capacity bound and no expiry; entries wait until scheduled or cancelled.
"""

import threading
from typing import List, Optional

from .models import QueueEntry, QueueStatus


class WaitingQueue:
    def __init__(self):
        self._entries: List[QueueEntry] = []
        self._mutex = threading.Lock()

    def __len__(self) -> int:
        with self._mutex:
            return len(self._entries)

    def enqueue(self, entry: QueueEntry) -> int:
        """Append and return the 1-based position (queue length after insert)."""
        with self._mutex:
            self._entries.append(entry)
            return len(self._entries)

    def snapshot(self) -> List[QueueEntry]:
        with self._mutex:
            return list(self._entries)

    def position(self, entry_id: str) -> Optional[int]:
        with self._mutex:
            for i, e in enumerate(self._entries, 1):
                if e.id == entry_id:
                    return i
        return None

    def claim(self, entry: QueueEntry) -> bool:
        """WAITING -> PROCESSING. False if another drain pass already holds it."""
        with self._mutex:
            if entry.status != QueueStatus.WAITING or entry not in self._entries:
                return False
            entry.status = QueueStatus.PROCESSING
            return True

    def release(self, entry: QueueEntry) -> None:
        """Back to WAITING, keeping its place."""
        with self._mutex:
            if entry.status == QueueStatus.PROCESSING:
                entry.status = QueueStatus.WAITING

    def complete(self, entry: QueueEntry) -> None:
        with self._mutex:
            entry.status = QueueStatus.SCHEDULED
            self._entries.remove(entry)

    def cancel(self, entry_id: str) -> Optional[QueueEntry]:
        """Remove a waiting entry. Entries mid-replay cannot be cancelled."""
        with self._mutex:
            for e in self._entries:
                if e.id == entry_id and e.status == QueueStatus.WAITING:
                    e.status = QueueStatus.CANCELLED
                    self._entries.remove(e)
                    return e
        return None
