from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .algorithms import DEFAULT_QUANTUM, POLICIES, run_all
from .report import build_comparison_table, render_report
from .workload_io import WorkloadError, load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batch-scheduler",
        description="Simulate FCFS, SJF, Priority and Round-robin scheduling over a batch of processes.",
    )
    parser.add_argument(
        "workload",
        help="Path to the workload file (CSV rows of id,burst,arrival[,priority], or JSON).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--algorithm",
        "-a",
        dest="algorithms",
        action="append",
        choices=list(POLICIES),
        default=None,
        help="Policy to run; repeat to pick several. Always run in the order fcfs sjf priority rr (default: all).",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Also print a one-line-per-policy comparison table.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log scheduling decisions to stderr (-v for info, -vv for debug).",
    )
    return parser


def configure_logging(verbosity: int, console: Console) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.quantum <= 0:
        parser.error(f"--quantum must be a positive integer, got {args.quantum}")

    console = Console()
    err_console = Console(stderr=True)
    configure_logging(args.verbose, err_console)

    workload_path = Path(args.workload)
    try:
        processes = load_workload(workload_path)
    except OSError as exc:
        err_console.print(f"[red]Cannot read workload {escape(str(workload_path))}: {escape(str(exc.strerror or exc))}[/red]")
        return 1
    except WorkloadError as exc:
        err_console.print(f"[red]Invalid workload {escape(str(workload_path))}: {escape(str(exc))}[/red]")
        return 1

    if not processes:
        logger.warning("Workload %s has no processes", workload_path)

    results = run_all(processes, quantum=args.quantum, names=args.algorithms)
    for result in results:
        render_report(result, console)

    if args.compare:
        console.print(build_comparison_table(results))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
