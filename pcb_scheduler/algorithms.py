from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, TextIO, Union

from rich.console import Console

from .errors import AllocationError, InvalidArgument
from .metrics import compute_system_metrics
from .models import Process, Quantum, ScheduledSlice, ScheduleResult

log = logging.getLogger(__name__)


def init_procs(bursts: Iterable[int]) -> List[Process]:
    """
    Build a fresh process table from CPU burst lengths.

    Process ``i`` gets pid ``i``, ``burst_left = bursts[i]`` and no waiting
    time. An empty sequence yields an empty table.
    """
    try:
        bursts = list(bursts)
        for i, burst in enumerate(bursts):
            if isinstance(burst, bool) or not isinstance(burst, int):
                raise InvalidArgument(f"burst {i} must be an integer, got {burst!r}")
            if burst < 0:
                raise InvalidArgument(f"burst {i} must be non-negative, got {burst}")
        procs = [Process(pid=i, burst_left=burst) for i, burst in enumerate(bursts)]
    except MemoryError as exc:
        raise AllocationError("could not allocate process table") from exc

    log.debug("initialized %d processes", len(procs))
    return procs


def printall(procs: List[Process], file: Optional[TextIO] = None) -> None:
    """
    Debug dump of every PCB, one line per process in table order.
    """
    console = Console(file=file, highlight=False, emoji=False, markup=False, soft_wrap=True)
    for p in procs:
        console.print(f"PID {p.pid}: burst_left={p.burst_left}, wait={p.wait}")


def run_proc(
    procs: List[Process],
    current: int,
    amount: int,
    timeline: Optional[List[ScheduledSlice]] = None,
    now: int = 0,
) -> None:
    """
    Run process ``current`` for ``amount`` time units.

    Every other process that still has burst left waits for the same amount.
    Processes that were already complete do not accrue wait. If ``timeline``
    is given, the executed slice is appended to it starting at ``now``.
    """
    if not 0 <= current < len(procs):
        raise InvalidArgument(f"process index {current} out of range for {len(procs)} processes")

    running = procs[current]
    if amount < 0:
        raise InvalidArgument(f"cannot run process {running.pid} for negative time {amount}")
    if amount > running.burst_left:
        raise InvalidArgument(
            f"cannot run process {running.pid} for {amount}, only {running.burst_left} left"
        )

    running.burst_left -= amount
    for i, p in enumerate(procs):
        if i != current and p.burst_left > 0:
            p.wait += amount

    if amount > 0:
        log.debug("t=%d: ran PID %d for %d (left=%d)", now, running.pid, amount, running.burst_left)
        if timeline is not None:
            timeline.append(ScheduledSlice(pid=running.pid, start_time=now, end_time=now + amount))


def fcfs_run(procs: List[Process], timeline: Optional[List[ScheduledSlice]] = None) -> int:
    """
    First-Come First-Serve: run each process to completion in table order.

    Returns the total elapsed time.
    """
    current_time = 0

    for i, p in enumerate(procs):
        burst = p.burst_left
        run_proc(procs, i, burst, timeline=timeline, now=current_time)
        current_time += burst

    log.debug("FCFS finished %d processes at t=%d", len(procs), current_time)
    return current_time


def rr_next(procs: List[Process], current: int) -> Optional[int]:
    """
    Index of the next incomplete process after ``current`` in circular order,
    or None once every process is complete.
    """
    plen = len(procs)
    if plen == 0:
        raise InvalidArgument("rr_next needs at least one process")

    start = (current + 1) % plen
    nxt = start
    while procs[nxt].burst_left == 0:
        nxt = (nxt + 1) % plen
        if nxt == start:
            return None
    return nxt


def rr_run(
    procs: List[Process],
    quantum: Union[int, Quantum],
    timeline: Optional[List[ScheduledSlice]] = None,
) -> int:
    """
    Round Robin with a fixed time quantum.

    Starting at process 0, each incomplete process runs for at most
    ``quantum`` time units before the CPU moves on to the next incomplete
    process in index order. Returns the total elapsed time.
    """
    q = Quantum.coerce(quantum).value

    current_time = 0
    if not procs:
        return current_time

    current: Optional[int] = 0
    while current is not None:
        p = procs[current]
        if p.burst_left > 0:
            amount = min(q, p.burst_left)
            run_proc(procs, current, amount, timeline=timeline, now=current_time)
            current_time += amount

        current = rr_next(procs, current)

    log.debug("RR (q=%d) finished %d processes at t=%d", q, len(procs), current_time)
    return current_time


def _schedule_fcfs(procs: List[Process], quantum: Optional[int], timeline: List[ScheduledSlice]) -> int:
    return fcfs_run(procs, timeline=timeline)


def _schedule_rr(procs: List[Process], quantum: Optional[int], timeline: List[ScheduledSlice]) -> int:
    if quantum is None:
        raise InvalidArgument("Round Robin requires a positive quantum (use --quantum)")
    return rr_run(procs, quantum, timeline=timeline)


ALGORITHMS: Dict[str, Callable[[List[Process], Optional[int], List[ScheduledSlice]], int]] = {
    "fcfs": _schedule_fcfs,
    "rr": _schedule_rr,
}

ALGORITHM_NAMES = {
    "fcfs": "FCFS",
    "rr": "Round Robin",
}


def run_algorithm(name: str, bursts: Iterable[int], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm on a fresh process table.

    The quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    bursts = list(bursts)
    procs = init_procs(bursts)
    timeline: List[ScheduledSlice] = []
    elapsed = ALGORITHMS[name](procs, quantum, timeline)

    result = ScheduleResult(
        algorithm=ALGORITHM_NAMES[name],
        quantum=quantum if name == "rr" else None,
        elapsed=elapsed,
        bursts=bursts,
        processes=procs,
        timeline=timeline,
    )
    compute_system_metrics(result)
    return result
