from __future__ import annotations

from typing import List, Optional, Sequence

from .errors import InvalidInput, InvalidParameter
from .models import Process

MAX_PROCESSES = 20
MAX_NAME_LENGTH = 50
MAX_TIME = 1000
MAX_PRIORITY = 100


def _is_int(value) -> bool:
    # bool is an int subclass; True/False are never valid times.
    return isinstance(value, int) and not isinstance(value, bool)


def _check_range(p: Process, field: str, low: int, high: int) -> None:
    value = getattr(p, field)
    if not _is_int(value):
        raise InvalidInput(f"{p.pid}: {field} must be an integer, got {value!r}", field=field, pid=p.pid)
    if not low <= value <= high:
        raise InvalidInput(
            f"{p.pid}: {field} must be between {low} and {high}, got {value}",
            field=field,
            pid=p.pid,
        )


def validate_process(p: Process) -> None:
    """
    Check one process against its field constraints.
    """
    if not isinstance(p.pid, str) or not p.pid.strip():
        raise InvalidInput(f"Process id must be a non-empty string, got {p.pid!r}", field="pid")

    if not isinstance(p.name, str) or not p.name.strip():
        raise InvalidInput(f"{p.pid}: name is required", field="name", pid=p.pid)
    if len(p.name.strip()) > MAX_NAME_LENGTH:
        raise InvalidInput(
            f"{p.pid}: name must be at most {MAX_NAME_LENGTH} characters",
            field="name",
            pid=p.pid,
        )

    _check_range(p, "arrival_time", 0, MAX_TIME)
    _check_range(p, "burst_time", 1, MAX_TIME)
    _check_range(p, "priority", 1, MAX_PRIORITY)


def validate_processes(processes: Sequence[Process], max_processes: int = MAX_PROCESSES) -> List[Process]:
    """
    Validate a whole workload and return it as a fresh list owned by the caller
    of the simulation.

    Raises InvalidInput on the first violation found, before any scheduling
    work is done.
    """
    processes = list(processes)
    if not processes:
        raise InvalidInput("At least one process is required")
    if len(processes) > max_processes:
        raise InvalidInput(f"Too many processes: {len(processes)} (maximum {max_processes})")

    seen: set[str] = set()
    for p in processes:
        if not isinstance(p, Process):
            raise InvalidInput(f"Expected Process, got {type(p).__name__}")
        validate_process(p)
        if p.pid in seen:
            raise InvalidInput(f"Duplicate process id '{p.pid}'", field="pid", pid=p.pid)
        seen.add(p.pid)

    return processes


def validate_quantum(quantum: Optional[int], default: int) -> int:
    if quantum is None:
        return default
    if not _is_int(quantum) or quantum < 1:
        raise InvalidParameter(f"Round Robin requires a positive integer quantum, got {quantum!r}", field="quantum")
    return quantum
