from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .errors import InvalidInput, SchedulingError
from .models import Algorithm, ExecutedSegment, Process, ProcessMetric, ScheduleResult, SystemMetrics


def build_result(
    algorithm: Algorithm,
    processes: Sequence[Process],
    timeline: List[ExecutedSegment],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Reduce a finished timeline into per-process metrics and averages.

    Completion is the end of a process's last segment, so preemptive runs
    are measured the same way as non-preemptive ones.
    """
    if not processes:
        raise InvalidInput("At least one process is required")

    segments: Dict[str, List[ExecutedSegment]] = {}
    for seg in timeline:
        segments.setdefault(seg.pid, []).append(seg)

    metrics: List[ProcessMetric] = []
    for p in processes:
        own = segments.get(p.pid)
        if not own:
            raise SchedulingError(f"{p.pid} never ran", pid=p.pid)

        executed = sum(s.duration for s in own)
        if executed != p.burst_time:
            raise SchedulingError(f"{p.pid} ran for {executed}, expected {p.burst_time}", pid=p.pid)

        start_time = own[0].start_time
        completion_time = own[-1].end_time
        turnaround_time = completion_time - p.arrival_time

        metrics.append(
            ProcessMetric(
                pid=p.pid,
                name=p.name,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                priority=p.priority,
                start_time=start_time,
                completion_time=completion_time,
                waiting_time=turnaround_time - p.burst_time,
                turnaround_time=turnaround_time,
                response_time=start_time - p.arrival_time,
            )
        )

    # Report in completion order; completion times are distinct on one CPU.
    metrics.sort(key=lambda m: m.completion_time)

    n = len(metrics)
    total_time = timeline[-1].end_time
    avg_waiting_time = sum(m.waiting_time for m in metrics) / n

    return ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        timeline=tuple(timeline),
        process_metrics=tuple(metrics),
        avg_waiting_time=avg_waiting_time,
        avg_turnaround_time=sum(m.turnaround_time for m in metrics) / n,
        avg_response_time=sum(m.response_time for m in metrics) / n,
        total_time=total_time,
        system=compute_system_metrics(timeline, metrics, total_time, avg_waiting_time),
    )


def compute_system_metrics(
    timeline: Sequence[ExecutedSegment],
    metrics: Sequence[ProcessMetric],
    total_time: int,
    avg_waiting_time: float,
) -> SystemMetrics:
    """
    Throughput and CPU utilization over the makespan ``total_time``; idle
    gaps in the timeline count against utilization.
    """
    cpu_busy_time = sum(seg.duration for seg in timeline)

    # Processes waiting more than twice the average are counted as starved.
    starvation_count = sum(1 for m in metrics if m.waiting_time > 2 * avg_waiting_time)

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=total_time,
        throughput=len(metrics) / total_time,
        cpu_utilization=cpu_busy_time / total_time,
        starvation_count=starvation_count,
    )
