from __future__ import annotations

from typing import Iterable

from .models import ScheduleResult, Statistics, TimeSlice


def aggregate_statistics(
    total_waiting: float,
    total_turnaround: float,
    count: int,
    last_completion: float,
) -> Statistics:
    """
    Derive average wait, average turnaround and throughput from the totals a
    policy accumulated.

    ``last_completion`` is the terminal clock value of the policy that produced
    the totals; throughput is ``count / last_completion``.
    """
    if count == 0:
        return Statistics(avg_waiting=0.0, avg_turnaround=0.0, throughput=0.0)

    throughput = count / last_completion if last_completion > 0 else 0.0
    return Statistics(
        avg_waiting=total_waiting / count,
        avg_turnaround=total_turnaround / count,
        throughput=throughput,
    )


def compute_statistics(result: ScheduleResult) -> Statistics:
    """
    Plain per-row statistics for a result: the mean of the reported wait and
    turnaround columns, and throughput over the latest completion.

    Used for side-by-side comparison, where every policy is measured the same way.
    """
    rows = result.processes
    last_completion = max((p.completion_time for p in rows), default=0)
    return aggregate_statistics(
        sum(p.waiting_time for p in rows),
        sum(p.turnaround_time for p in rows),
        len(rows),
        last_completion,
    )


def cpu_busy_time(timeline: Iterable[TimeSlice]) -> int:
    return sum(slice_.duration for slice_ in timeline)
