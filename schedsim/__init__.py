"""
schedsim package.

Simulates CPU scheduling (FCFS, SJF, Round Robin, Priority) and reports the
resulting timeline and per-process performance metrics.
"""

from .algorithms import DEFAULT_QUANTUM, simulate
from .errors import InvalidInput, InvalidParameter, SchedulingError
from .models import Algorithm, ExecutedSegment, Process, ProcessMetric, ScheduleResult, SystemMetrics

__all__ = [
    "DEFAULT_QUANTUM",
    "Algorithm",
    "ExecutedSegment",
    "InvalidInput",
    "InvalidParameter",
    "Process",
    "ProcessMetric",
    "ScheduleResult",
    "SchedulingError",
    "SystemMetrics",
    "simulate",
]
