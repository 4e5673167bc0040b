"""
Shared bookkeeping for the simulated clock.

A process is eligible at time t when it has arrived (arrival_time <= t) and
has not yet completed. When nothing is eligible the clock jumps straight to
the earliest pending arrival, so every loop iteration makes progress.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from .models import Process

logger = logging.getLogger(__name__)


class ProcessPool:
    """
    Index-based arena over an immutable tuple of processes.

    Indices are positions in the caller's list, which double as the final
    tie-breaker for every policy.
    """

    def __init__(self, processes: Sequence[Process]):
        self._processes = tuple(processes)
        self._pending = set(range(len(self._processes)))

    def __len__(self) -> int:
        return len(self._processes)

    def __bool__(self) -> bool:
        return bool(self._pending)

    def __getitem__(self, index: int) -> Process:
        return self._processes[index]

    def complete(self, index: int) -> None:
        self._pending.remove(index)

    def eligible(self, time: int) -> List[int]:
        return [i for i in sorted(self._pending) if self._processes[i].arrival_time <= time]

    def next_arrival(self) -> int:
        return min(self._processes[i].arrival_time for i in self._pending)

    def clock(self, time: int) -> int:
        """
        Return ``time`` if some pending process has arrived, otherwise the
        earliest pending arrival (the CPU idles until then).
        """
        if self.eligible(time):
            return time
        nxt = self.next_arrival()
        logger.debug("CPU idle from t=%d to t=%d", time, nxt)
        return nxt

    def arrival_order(self) -> List[int]:
        return sorted(range(len(self._processes)), key=lambda i: (self._processes[i].arrival_time, i))
