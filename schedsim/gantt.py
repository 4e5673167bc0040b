from __future__ import annotations

from typing import Dict, List, Optional

from rich.color import Color, ColorParseError
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ExecutedSegment
from .workload_io import DEFAULT_PALETTE


def _usable_color(color: Optional[str]) -> Optional[str]:
    if not color:
        return None
    try:
        Color.parse(color)
    except ColorParseError:
        return None
    return color


def render_gantt(segments: List[ExecutedSegment]) -> str:
    """
    Plain-text Gantt chart; idle time shows as dots.
    """
    if not segments:
        return "(no execution)"

    segments = sorted(segments, key=lambda s: (s.start_time, s.end_time))

    line = "|"
    labels = ""
    time_marks = "0"
    last_time = 0

    for seg in segments:
        idle_gap = seg.start_time - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = seg.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, seg.duration)
        line += "=" * width
        labels += seg.name[:width].ljust(width)
        last_time = seg.end_time
        time_marks += f"{last_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(segments: List[ExecutedSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.

    Segments carry their process colour; processes without one get the next
    palette entry.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    segments = sorted(segments, key=lambda s: (s.start_time, s.end_time))

    pid_to_color: Dict[str, str] = {}

    def pid_color(seg: ExecutedSegment) -> str:
        if seg.pid not in pid_to_color:
            idx = len(pid_to_color) % len(DEFAULT_PALETTE)
            pid_to_color[seg.pid] = _usable_color(seg.color) or DEFAULT_PALETTE[idx]
        return pid_to_color[seg.pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for seg in segments:
        idle_gap = seg.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = seg.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, seg.duration)

        timeline.append(" " * width, style=f"on {pid_color(seg)}")
        labels.append(seg.name[:width].ljust(width), style="bold")

        last_time = seg.end_time
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
