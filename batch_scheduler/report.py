from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .metrics import compute_statistics, cpu_busy_time
from .models import ScheduleResult, TimeSlice

CELL_WIDTH = 8
COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]
SCHEDULE_HEADERS = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]


def render_title(title: str) -> str:
    rule = "-" * (len(title) * 2)
    return "\n".join([rule, " " * (len(title) // 2) + " " + title, rule])


def _cell(pid: int) -> str:
    label = str(pid)
    padding = " " * ((CELL_WIDTH - len(label)) // 2)
    return f"{padding}{label}{padding}"


def render_gantt(slices: Sequence[TimeSlice]) -> str:
    """
    Plain-text Gantt chart: one ``|  pid  |`` cell per slice, then a row of
    slice start times ending with the final stop time.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    bar = "|" + "".join(f"{_cell(sl.pid)}|" for sl in slices)
    marks = "\t".join(str(sl.start_time) for sl in slices) + f"\t{slices[-1].end_time}"
    return "\n".join(["Gantt schedule", bar, marks])


def build_rich_gantt(slices: Sequence[TimeSlice]) -> Panel:
    """
    Coloured version of :func:`render_gantt` wrapped in a Rich Panel.
    """
    if not slices:
        return Panel("No execution", title="Gantt schedule")

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    bar = Text("|")
    for sl in slices:
        bar.append(_cell(sl.pid), style=f"bold on {pid_color(sl.pid)}")
        bar.append("|")

    marks = Text("\t".join(str(sl.start_time) for sl in slices) + f"\t{slices[-1].end_time}", style="dim")

    grid = Table.grid(padding=(0, 0))
    grid.add_row(bar)
    grid.add_row(marks)
    return Panel.fit(grid, title="Gantt schedule")


def build_schedule_table(result: ScheduleResult) -> Table:
    """
    Per-process schedule rows with the policy's statistics in the footer.
    """
    stats = result.statistics or compute_statistics(result)
    footers = [
        "",
        "",
        "",
        "",
        f"Average\n{stats.avg_waiting:.2f}",
        f"Average\n{stats.avg_turnaround:.2f}",
        f"Throughput\n{stats.throughput:.2f}/t",
    ]

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for header, footer in zip(SCHEDULE_HEADERS, footers):
        table.add_column(header, footer=footer, justify="right")

    for p in result.processes:
        table.add_row(
            str(p.pid),
            str(p.priority),
            str(p.burst_time),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        )

    return table


def build_comparison_table(results: List[ScheduleResult]) -> Table:
    """
    One row per policy, every policy measured by the mean of its reported
    wait and turnaround columns.
    """
    table = Table(title="Policy comparison", box=box.SIMPLE_HEAVY)
    table.add_column("Policy")
    table.add_column("Quantum", justify="right")
    table.add_column("Avg waiting", justify="right")
    table.add_column("Avg turnaround", justify="right")
    table.add_column("Throughput", justify="right")
    table.add_column("Makespan", justify="right")
    table.add_column("CPU busy", justify="right")

    for result in results:
        stats = compute_statistics(result)
        makespan = max((sl.end_time for sl in result.timeline), default=0)
        table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{stats.avg_waiting:.2f}",
            f"{stats.avg_turnaround:.2f}",
            f"{stats.throughput:.3f}",
            str(makespan),
            str(cpu_busy_time(result.timeline)),
        )

    return table


def render_report(result: ScheduleResult, console: Optional[Console] = None) -> None:
    console = console or Console()

    console.print(render_title(result.algorithm), highlight=False)
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")
    console.print(build_rich_gantt(result.timeline))
    console.print(build_schedule_table(result))
    console.print()
