"""Frame-driven deferred callbacks."""
import heapq
import itertools
from typing import Callable, List, Tuple


class FrameScheduler:
    """
    Runs callbacks after a delay measured in game time.
    Time only moves when the frame loop calls advance(); nothing blocks and
    scheduled callbacks cannot be cancelled.
    """

    def __init__(self):
        self._now_ms = 0.0
        self._seq = itertools.count()
        self._pending: List[Tuple[float, int, Callable[[], None]]] = []

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def pending(self) -> int:
        return len(self._pending)

    def delayed_call(self, delay_ms: float, callback: Callable[[], None]) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        heapq.heappush(self._pending, (self._now_ms + delay_ms, next(self._seq), callback))

    def advance(self, elapsed_ms: float) -> int:
        """Move the clock forward and fire everything now due, oldest first."""
        if elapsed_ms < 0:
            raise ValueError("elapsed_ms cannot be negative")
        self._now_ms += elapsed_ms
        fired = 0
        while self._pending and self._pending[0][0] <= self._now_ms:
            _, _, callback = heapq.heappop(self._pending)
            callback()
            fired += 1
        return fired
