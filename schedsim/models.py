from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import InvalidParameter


class Algorithm(str, Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    RR = "rr"
    PRIORITY = "priority"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, name: str | Algorithm) -> Algorithm:
        """
        Accept an Algorithm or a case-insensitive name such as "RR" or
        "round-robin".
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "_")
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise InvalidParameter(
                f"Unknown algorithm '{name}' (choose from {choices})", field="algorithm"
            ) from None


_LABELS = {
    Algorithm.FCFS: "FCFS",
    Algorithm.SJF: "SJF (non-preemptive)",
    Algorithm.RR: "Round Robin",
    Algorithm.PRIORITY: "Priority (non-preemptive)",
}

_ALIASES = {
    "round_robin": "rr",
    "roundrobin": "rr",
}


@dataclass(frozen=True)
class Process:
    pid: str
    name: str
    arrival_time: int
    burst_time: int
    priority: int = 1
    color: Optional[str] = None


@dataclass(frozen=True)
class ExecutedSegment:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    name: str
    start_time: int
    end_time: int
    color: Optional[str] = None

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetric:
    pid: str
    name: str
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int


@dataclass(frozen=True)
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    starvation_count: int = 0


@dataclass(frozen=True)
class ScheduleResult:
    algorithm: Algorithm
    quantum: Optional[int]
    timeline: Tuple[ExecutedSegment, ...]
    process_metrics: Tuple[ProcessMetric, ...]
    avg_waiting_time: float
    avg_turnaround_time: float
    avg_response_time: float
    total_time: int
    system: SystemMetrics

    def to_dict(self) -> dict:
        data = asdict(self)
        data["algorithm"] = self.algorithm.value
        data["timeline"] = list(data["timeline"])
        data["process_metrics"] = list(data["process_metrics"])
        return data
