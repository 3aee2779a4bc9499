"""
PCB scheduler package.

Simulates First-Come First-Serve and Round Robin scheduling over a fixed
table of process control blocks, tracking per-process waiting time and the
total elapsed time.
"""

from .algorithms import fcfs_run, init_procs, printall, rr_next, rr_run, run_proc
from .errors import AllocationError, InvalidArgument, SchedulerError
from .models import Process, Quantum

__all__ = [
    "AllocationError",
    "InvalidArgument",
    "Process",
    "Quantum",
    "SchedulerError",
    "cli",
    "fcfs_run",
    "init_procs",
    "printall",
    "rr_next",
    "rr_run",
    "run_proc",
]
