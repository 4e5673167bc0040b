from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, List, Optional, Sequence

from .admission import ProcessPool
from .errors import InvalidParameter
from .metrics import build_result
from .models import Algorithm, ExecutedSegment, Process, ScheduleResult
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def _segment(p: Process, start_time: int, end_time: int) -> ExecutedSegment:
    return ExecutedSegment(pid=p.pid, name=p.name, start_time=start_time, end_time=end_time, color=p.color)


def schedule_fcfs(processes: Sequence[Process]) -> List[ExecutedSegment]:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Equal arrival times keep their input order.
    """
    pool = ProcessPool(processes)

    time = 0
    timeline: List[ExecutedSegment] = []

    for idx in pool.arrival_order():
        p = pool[idx]
        start_time = max(time, p.arrival_time)
        end_time = start_time + p.burst_time

        logger.debug("FCFS: t=%d dispatch %s", start_time, p.pid)
        timeline.append(_segment(p, start_time, end_time))
        pool.complete(idx)

        time = end_time

    return timeline


def _schedule_non_preemptive(
    processes: Sequence[Process],
    key: Callable[[Process], int],
    label: str,
) -> List[ExecutedSegment]:
    """
    Run the eligible process with the smallest ``key`` to completion, again
    and again, until the pool is empty.

    Ties fall back to earlier arrival, then input order.
    """
    pool = ProcessPool(processes)

    time = 0
    timeline: List[ExecutedSegment] = []

    while pool:
        time = pool.clock(time)

        idx = min(
            pool.eligible(time),
            key=lambda i: (key(pool[i]), pool[i].arrival_time, i),
        )
        p = pool[idx]

        start_time = time
        end_time = start_time + p.burst_time

        logger.debug("%s: t=%d dispatch %s", label, start_time, p.pid)
        timeline.append(_segment(p, start_time, end_time))
        pool.complete(idx)

        time = end_time

    return timeline


def schedule_sjf(processes: Sequence[Process]) -> List[ExecutedSegment]:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. A running process
    is never interrupted by a shorter arrival.
    """
    return _schedule_non_preemptive(processes, key=lambda p: p.burst_time, label="SJF")


def schedule_priority(processes: Sequence[Process]) -> List[ExecutedSegment]:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Processes with a large
    priority number can starve while more urgent work keeps arriving; there is
    no aging.
    """
    return _schedule_non_preemptive(processes, key=lambda p: p.priority, label="Priority")


class RoundRobin:
    """
    Round Robin scheduling with a fixed time quantum, one dispatch per step.

    Admission happens in one place, ``_admit``, which is called on
    construction, after an idle jump and after every dispatch. Because the
    post-dispatch admission runs before the preempted process is put back,
    a process arriving exactly when a quantum expires is queued ahead of it.
    """

    def __init__(self, processes: Sequence[Process], quantum: int = DEFAULT_QUANTUM):
        self.pool = ProcessPool(processes)
        self.quantum = quantum
        self.time = 0
        self.timeline: List[ExecutedSegment] = []

        # Remaining burst per pool index; Process records stay untouched.
        self._remaining = [self.pool[i].burst_time for i in range(len(self.pool))]
        self._arrivals = self.pool.arrival_order()
        self._next_arrival = 0
        self._ready: Deque[int] = deque()

        self._admit()

    @property
    def done(self) -> bool:
        return not self.pool

    @property
    def ready(self) -> List[str]:
        return [self.pool[i].pid for i in self._ready]

    def _admit(self) -> None:
        while (
            self._next_arrival < len(self._arrivals)
            and self.pool[self._arrivals[self._next_arrival]].arrival_time <= self.time
        ):
            self._ready.append(self._arrivals[self._next_arrival])
            self._next_arrival += 1

    def step(self) -> Optional[ExecutedSegment]:
        """
        Dispatch the head of the ready queue for at most one quantum and return
        the segment it produced, or None once every process has completed.
        """
        if self.done:
            return None

        if not self._ready:
            self.time = self.pool.clock(self.time)
            self._admit()

        idx = self._ready.popleft()
        p = self.pool[idx]

        run_time = min(self.quantum, self._remaining[idx])
        segment = _segment(p, self.time, self.time + run_time)
        self.timeline.append(segment)

        self.time = segment.end_time
        self._remaining[idx] -= run_time

        # New arrivals go ahead of the process that was just preempted.
        self._admit()

        if self._remaining[idx] > 0:
            self._ready.append(idx)
        else:
            logger.debug("RR: %s completed at t=%d", p.pid, self.time)
            self.pool.complete(idx)

        return segment

    def run(self) -> List[ExecutedSegment]:
        while self.step() is not None:
            pass
        return self.timeline


def schedule_rr(processes: Sequence[Process], quantum: int = DEFAULT_QUANTUM) -> List[ExecutedSegment]:
    """
    Round Robin scheduling with a fixed time quantum.
    """
    return RoundRobin(processes, quantum).run()


def simulate(
    algorithm: Algorithm | str,
    processes: Sequence[Process],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Validate the inputs, run one scheduling policy to completion and reduce
    its timeline into a ScheduleResult.

    ``quantum`` only matters for Round Robin, where None means
    DEFAULT_QUANTUM; the other policies ignore it.

    Raises InvalidInput / InvalidParameter before any scheduling work starts.
    """
    algorithm = Algorithm.parse(algorithm)
    processes = validate_processes(processes)

    if algorithm is Algorithm.FCFS:
        quantum = None
        timeline = schedule_fcfs(processes)
    elif algorithm is Algorithm.SJF:
        quantum = None
        timeline = schedule_sjf(processes)
    elif algorithm is Algorithm.RR:
        quantum = validate_quantum(quantum, DEFAULT_QUANTUM)
        timeline = schedule_rr(processes, quantum)
    elif algorithm is Algorithm.PRIORITY:
        quantum = None
        timeline = schedule_priority(processes)
    else:
        raise InvalidParameter(f"No scheduler registered for {algorithm!r}", field="algorithm")

    result = build_result(algorithm, processes, timeline, quantum=quantum)
    logger.info(
        "%s: %d processes, makespan %d, avg waiting %.2f",
        algorithm.label,
        len(processes),
        result.total_time,
        result.avg_waiting_time,
    )
    return result
