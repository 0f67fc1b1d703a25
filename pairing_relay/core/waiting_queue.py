from collections import deque
from typing import Callable, Optional


class WaitingQueue:
    """
    FIFO of connection ids waiting for a partner. Each id appears at most once.

    Backed by a deque for O(1) front pops; removal by value is linear, which is
    fine for the queue sizes a single relay sees.
    """

    def __init__(self):
        self._ids = deque()

    def enqueue(self, conn_id: str) -> bool:
        if conn_id in self._ids:
            return False
        self._ids.append(conn_id)
        return True

    def dequeue_front(self) -> Optional[str]:
        if not self._ids:
            return None
        return self._ids.popleft()

    def remove(self, conn_id: str) -> bool:
        try:
            self._ids.remove(conn_id)
        except ValueError:
            return False
        return True

    def sweep_stale(self, is_live: Callable[[str], bool]) -> int:
        kept = deque(conn_id for conn_id in self._ids if is_live(conn_id))
        removed = len(self._ids) - len(kept)
        self._ids = kept
        return removed

    def snapshot(self):
        return list(self._ids)

    def __contains__(self, conn_id) -> bool:
        return conn_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
