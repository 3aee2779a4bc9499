import pytest

from pcb_scheduler.algorithms import run_algorithm
from pcb_scheduler.gantt import build_rich_gantt, render_gantt
from pcb_scheduler.metrics import summarize_process_metrics


def test_rr_system_metrics():
    res = run_algorithm("rr", [5, 3, 8], quantum=4)
    assert res.elapsed == 16
    assert res.system.makespan == 16
    assert res.system.cpu_busy_time == 16
    assert res.system.cpu_utilization == pytest.approx(1.0)
    assert res.system.throughput == pytest.approx(3 / 16)


def test_summary_averages():
    res = run_algorithm("rr", [5, 3, 8], quantum=4)
    summary = summarize_process_metrics(res.processes, res.bursts)
    assert summary["avg_waiting"] == pytest.approx(19 / 3)
    assert summary["avg_turnaround"] == pytest.approx(35 / 3)


def test_empty_run_metrics():
    res = run_algorithm("fcfs", [])
    assert res.elapsed == 0
    assert res.system.throughput == 0.0
    assert res.system.cpu_utilization == 0.0
    assert summarize_process_metrics(res.processes, res.bursts) == {"avg_waiting": 0.0, "avg_turnaround": 0.0}


def test_render_gantt_fcfs():
    res = run_algorithm("fcfs", [5, 3, 8])
    lines = render_gantt(res.timeline).splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "|" + "=" * 16 + "|"
    assert lines[2].split() == ["P0", "P1", "P2"]
    assert lines[3] == "0  5  8 16"


def test_zero_bursts_leave_no_slices():
    res = run_algorithm("rr", [0, 0, 0], quantum=2)
    assert res.timeline == []
    assert render_gantt(res.timeline) == "(no execution)"
    _, marks = build_rich_gantt(res.timeline)
    assert marks == ""


def test_rich_gantt_time_marks():
    res = run_algorithm("rr", [5, 3, 8], quantum=4)
    _, marks = build_rich_gantt(res.timeline)
    assert marks == "0  4  7 11 12 16"
