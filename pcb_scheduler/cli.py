from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, printall, run_algorithm
from .gantt import build_rich_gantt
from .metrics import summarize_process_metrics
from .models import ScheduleResult
from .workload_io import load_bursts, parse_bursts

DEFAULT_QUANTUM = 2

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pcb-scheduler",
        description="CPU scheduling simulator over process control blocks (FCFS, RR).",
    )
    _add_verbose_argument(parser, default=False)

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a set of bursts.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(ALGORITHMS),
        help="Algorithm to use (fcfs, rr).",
    )
    _add_workload_arguments(run_parser)
    _add_verbose_argument(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}; ignored by FCFS).",
    )
    run_parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the final state of every PCB after the run.",
    )
    run_parser.add_argument(
        "--no-gantt",
        action="store_true",
        help="Do not draw the Gantt chart.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run FCFS and RR on the same bursts and compare average metrics.",
    )
    _add_workload_arguments(compare_parser)
    _add_verbose_argument(compare_parser)
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _add_workload_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--bursts",
        "-b",
        nargs="+",
        help="Burst lengths, e.g. '-b 5 3 8' or '-b 5,3,8'.",
    )
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )


def _add_verbose_argument(parser: argparse.ArgumentParser, default=argparse.SUPPRESS) -> None:
    # Sub-commands suppress the default so they don't reset a top-level -v.
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=default,
        help="Log every executed time slice.",
    )


def _configure_logging(verbose: bool) -> None:
    """
    Attach a single RichHandler to the package logger and set its level.

    Safe to call once per ``main()`` invocation; earlier handlers are
    replaced, so the level always follows the latest ``-v``.
    """
    pkg_log = logging.getLogger("pcb_scheduler")
    for handler in list(pkg_log.handlers):
        if isinstance(handler, RichHandler):
            pkg_log.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False, log_time_format="[%X]")
    handler.setFormatter(logging.Formatter("%(message)s"))
    pkg_log.addHandler(handler)
    pkg_log.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _read_bursts(args: argparse.Namespace) -> List[int]:
    if args.workload is not None:
        return load_bursts(Path(args.workload))
    return parse_bursts(" ".join(args.bursts))


def _print_result(result: ScheduleResult, console: Console, show_gantt: bool = True) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if show_gantt:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)
        console.print()

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    proc_table.add_column("PID", justify="center")
    for h in ("Burst", "Wait", "Turnaround"):
        proc_table.add_column(h, justify="right")

    for p, burst in zip(result.processes, result.bursts):
        proc_table.add_row(
            str(p.pid),
            str(burst),
            str(p.wait),
            str(p.wait + burst),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes, result.bursts)
    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
        sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

        console.print(sys_table)

    console.print(f"[bold]Total elapsed time:[/bold] {result.elapsed}")


def _run_compare(bursts: List[int], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Elapsed", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    for alg in ALGORITHMS:
        q = quantum if alg == "rr" else None
        # run_algorithm builds its own table, so runs never share state
        result = run_algorithm(alg, bursts, quantum=q)
        summary = summarize_process_metrics(result.processes, result.bursts)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            str(result.elapsed),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    console = Console()

    try:
        bursts = _read_bursts(args)
        log.debug("loaded %d bursts: %s", len(bursts), bursts)

        if args.command == "run":
            quantum = args.quantum
            if args.algorithm == "rr" and quantum is None:
                quantum = DEFAULT_QUANTUM
            result = run_algorithm(args.algorithm, bursts, quantum=quantum)
            _print_result(result, console, show_gantt=not args.no_gantt)
            if args.dump:
                console.print()
                printall(result.processes)
            return 0

        if args.command == "compare":
            _run_compare(bursts, args.quantum, console)
            return 0
    except (OSError, ValueError) as exc:
        Console(stderr=True).print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
