from rich.console import Console

from batch_scheduler.algorithms import schedule_fcfs, schedule_rr, schedule_sjf
from batch_scheduler.models import Process, TimeSlice
from batch_scheduler.report import (
    build_comparison_table,
    build_schedule_table,
    render_gantt,
    render_report,
    render_title,
)


def _procs():
    return [
        Process(pid=1, arrival_time=0, burst_time=24),
        Process(pid=2, arrival_time=0, burst_time=3),
        Process(pid=3, arrival_time=0, burst_time=3),
    ]


def test_render_gantt():
    text = render_gantt([TimeSlice(1, 0, 24), TimeSlice(2, 24, 27), TimeSlice(3, 27, 30)])
    lines = text.splitlines()
    assert lines[0] == "Gantt schedule"
    assert lines[1] == "|   1   |   2   |   3   |"
    assert lines[2] == "0\t24\t27\t30"


def test_render_gantt_empty():
    assert "no execution" in render_gantt([])


def test_render_title():
    lines = render_title("Priority").splitlines()
    assert lines[0] == "-" * 16
    assert lines[1].strip() == "Priority"


def test_schedule_table_footer():
    table = build_schedule_table(schedule_fcfs(_procs()))
    assert table.row_count == 3
    assert [c.header for c in table.columns] == ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]
    assert table.columns[4].footer == "Average\n17.00"
    assert table.columns[6].footer == "Throughput\n0.10/t"


def test_render_report_prints_everything():
    console = Console(record=True, width=120, color_system=None)
    render_report(schedule_rr(_procs(), quantum=2), console)
    out = console.export_text()
    assert "Round-robin" in out
    assert "Quantum: 2" in out
    assert "Gantt schedule" in out
    assert "Throughput" in out


def test_comparison_table_uses_per_row_statistics():
    res = schedule_sjf([
        Process(pid=1, arrival_time=2, burst_time=6),
        Process(pid=2, arrival_time=0, burst_time=8),
        Process(pid=3, arrival_time=4, burst_time=7),
        Process(pid=4, arrival_time=6, burst_time=3),
    ])
    assert res.statistics.avg_turnaround == -0.25

    console = Console(record=True, width=120, color_system=None)
    console.print(build_comparison_table([res]))
    out = console.export_text()
    assert "Shortest-job-first" in out
    assert "16.00" in out
    assert "10.00" in out
    assert "-0.25" not in out
