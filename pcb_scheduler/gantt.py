from __future__ import annotations

from typing import Iterator, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ("red", "green", "yellow", "blue", "magenta", "cyan")


def _segments(slices: List[ScheduledSlice]) -> Iterator[Tuple[int, int, int]]:
    """
    Yield ``(pid, width, end_time)`` per slice in time order.

    The CPU is never idle (every process is ready at 0), so slices are
    contiguous and the widths alone lay out the chart.
    """
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        yield sl.pid, max(1, sl.end_time - sl.start_time), sl.end_time


def _label(pid: int, width: int) -> str:
    return f"P{pid}"[:width].ljust(width)


def _time_marks(slices: List[ScheduledSlice]) -> str:
    return "0" + "".join(f"{end:>3}" for _, _, end in _segments(slices))


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart, one character per time unit.
    """
    if not slices:
        return "(no execution)"

    bar = "".join("=" * width for _, width, _ in _segments(slices))
    labels = "".join(_label(pid, width) for pid, width, _ in _segments(slices))

    return "\n".join(["Gantt Chart:", f"|{bar}|", f" {labels}", _time_marks(slices)])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Rich Panel with one colored bar per slice (color fixed per PID) and the
    matching time-marks string.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    bar = Text()
    labels = Text()
    for pid, width, _ in _segments(slices):
        bar.append(" " * width, style=f"on {COLORS[pid % len(COLORS)]}")
        labels.append(_label(pid, width), style="bold")

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bar)
    grid.add_row(labels)

    return Panel.fit(grid, title="Gantt Chart"), _time_marks(slices)
