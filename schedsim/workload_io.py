from __future__ import annotations

import csv
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .models import Process, ScheduleResult

DEFAULT_PALETTE = ["cyan", "bright_blue", "magenta", "bright_magenta", "green", "yellow"]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry, idx) for idx, entry in enumerate(raw)]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for idx, row in enumerate(reader):
            processes.append(_process_from_mapping(row, idx))
    return processes


def _optional(mapping, key: str):
    value = mapping.get(key)
    if isinstance(value, str):
        value = value.strip()
    return None if value in (None, "") else value


def _as_int(value) -> int:
    # int() would truncate 2.9 and accept true; only whole numbers pass.
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    raise ValueError(f"not an integer: {value!r}")


def _process_from_mapping(mapping, index: int = 0) -> Process:
    try:
        pid = str(mapping["pid"]).strip()
        arrival_time = _as_int(mapping["arrival_time"])
        burst_time = _as_int(mapping["burst_time"])
        priority_val = _optional(mapping, "priority")
        priority = _as_int(priority_val) if priority_val is not None else 1
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    name = _optional(mapping, "name")
    color = _optional(mapping, "color")

    return Process(
        pid=pid,
        name=str(name) if name is not None else pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
        color=str(color) if color is not None else DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)],
    )


def export_result(
    result: ScheduleResult,
    processes: Sequence[Process],
    path: str | Path,
    timestamp: Optional[datetime] = None,
) -> Path:
    """
    Write ``{algorithm, processes, result, timestamp}`` as indented JSON.
    """
    path = Path(path)
    timestamp = timestamp or datetime.now(timezone.utc)

    data = {
        "algorithm": result.algorithm.value,
        "processes": [
            {
                "pid": p.pid,
                "name": p.name,
                "arrival_time": p.arrival_time,
                "burst_time": p.burst_time,
                "priority": p.priority,
                "color": p.color,
            }
            for p in processes
        ],
        "result": result.to_dict(),
        "timestamp": timestamp.isoformat(),
    }

    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return path
