import pytest

from batch_scheduler.metrics import aggregate_statistics, compute_statistics, cpu_busy_time
from batch_scheduler.models import ProcessMetrics, ScheduleResult, Statistics, TimeSlice


def test_aggregate_statistics():
    stats = aggregate_statistics(51, 81, 3, 30)
    assert stats == Statistics(avg_waiting=17.0, avg_turnaround=27.0, throughput=0.1)


def test_aggregate_statistics_empty():
    assert aggregate_statistics(0, 0, 0, 0) == Statistics(0.0, 0.0, 0.0)


def test_aggregate_statistics_zero_clock():
    assert aggregate_statistics(0, 0, 2, 0).throughput == 0.0


def test_compute_statistics_uses_rows():
    result = ScheduleResult(
        algorithm="x",
        quantum=None,
        processes=[
            ProcessMetrics(pid=1, priority=0, burst_time=2, arrival_time=0, waiting_time=0, turnaround_time=2, completion_time=2),
            ProcessMetrics(pid=2, priority=0, burst_time=3, arrival_time=0, waiting_time=2, turnaround_time=5, completion_time=5),
        ],
    )
    stats = compute_statistics(result)
    assert stats.avg_waiting == 1.0
    assert stats.avg_turnaround == 3.5
    assert stats.throughput == pytest.approx(2 / 5)


def test_cpu_busy_time():
    assert cpu_busy_time([TimeSlice(1, 0, 2), TimeSlice(2, 4, 7)]) == 5
