from __future__ import annotations


class SchedulerError(Exception):
    """Base class for errors raised by the scheduling core."""


class AllocationError(SchedulerError, MemoryError):
    """The process table could not be built."""


class InvalidArgument(SchedulerError, ValueError):
    """
    A precondition of a scheduling operation was violated (negative burst,
    execution amount larger than the remaining burst, non-positive quantum...).
    """
