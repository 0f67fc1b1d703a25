import time
from collections import deque


class RateLimiter:
    """At most `max_calls` accepted calls in any `period` second window."""

    def __init__(self, max_calls: int, period: float, clock=time.monotonic):
        self.max_calls = max_calls
        self.period = period
        self.clock = clock
        self._accepted = deque()

    def _expire(self, now: float):
        while self._accepted and now - self._accepted[0] >= self.period:
            self._accepted.popleft()

    def check(self) -> bool:
        now = self.clock()
        self._expire(now)
        if len(self._accepted) >= self.max_calls:
            return False
        self._accepted.append(now)
        return True

    def retry_after(self) -> float:
        """Seconds until the next call would be accepted; 0 if it would be now."""
        now = self.clock()
        self._expire(now)
        if len(self._accepted) < self.max_calls:
            return 0.0
        return self.period - (now - self._accepted[0])
