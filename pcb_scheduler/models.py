from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import InvalidArgument


@dataclass
class Process:
    """
    Process control block: identity plus the mutable scheduling state.

    ``pid`` is fixed once set; only ``burst_left`` and ``wait`` change.
    """

    pid: int
    burst_left: int
    wait: int = 0

    def __setattr__(self, name: str, value) -> None:
        if name == "pid" and "pid" in self.__dict__:
            raise AttributeError(f"pid of process {self.pid} cannot be changed")
        super().__setattr__(name, value)


@dataclass(frozen=True)
class Quantum:
    """
    Round Robin time slice. Always strictly positive.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidArgument(f"quantum must be an integer, got {self.value!r}")
        if self.value <= 0:
            raise InvalidArgument(f"quantum must be positive, got {self.value}")

    @classmethod
    def coerce(cls, value: "int | Quantum") -> "Quantum":
        if isinstance(value, Quantum):
            return value
        return cls(value)


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    elapsed: int
    bursts: List[int] = field(default_factory=list)
    processes: List[Process] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
