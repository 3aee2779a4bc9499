from __future__ import annotations

from typing import List

from .models import Process, ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization for a finished run.
    """
    makespan = result.elapsed
    cpu_busy_time = sum(slice_.end_time - slice_.start_time for slice_ in result.timeline)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[Process], bursts: List[int]) -> dict:
    """
    Return average waiting and turnaround times for quick comparison.

    Every process arrives at time 0, so turnaround is wait plus burst.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0}

    n = len(processes)
    total_wait = sum(p.wait for p in processes)
    return {
        "avg_waiting": total_wait / n,
        "avg_turnaround": (total_wait + sum(bursts)) / n,
    }
