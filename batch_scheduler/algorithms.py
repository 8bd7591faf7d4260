from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Dict, List, Optional, Sequence

from .metrics import aggregate_statistics
from .models import Process, ProcessMetrics, ScheduleResult, TimeSlice, VirtualClock

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def schedule_fcfs(processes: Sequence[Process], clock: Optional[VirtualClock] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes run in the order given; no sorting is done. The processor never
    idles between processes: each one's wait is how far the running service
    time has moved past its arrival.
    """
    clock = clock or VirtualClock()

    service_time = clock.now
    total_waiting = 0
    total_turnaround = 0
    last_completion = 0
    timeline: List[TimeSlice] = []
    metrics: List[ProcessMetrics] = []

    for p in processes:
        waiting_time = max(0, service_time - p.arrival_time)
        start_time = p.arrival_time + waiting_time
        turnaround_time = p.burst_time + waiting_time
        completion_time = p.arrival_time + waiting_time + p.burst_time

        total_waiting += waiting_time
        total_turnaround += turnaround_time
        last_completion = completion_time

        service_time += p.burst_time
        timeline.append(TimeSlice(pid=p.pid, start_time=start_time, end_time=start_time + p.burst_time))
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                completion_time=completion_time,
            )
        )
        logger.debug("fcfs: pid=%s start=%s wait=%s", p.pid, start_time, waiting_time)

    clock.advance_to(service_time)

    result = ScheduleResult(algorithm=FCFSPolicy.title, quantum=None, processes=metrics, timeline=timeline)
    result.statistics = aggregate_statistics(total_waiting, total_turnaround, len(metrics), last_completion)
    _log_summary(result)
    return result


def schedule_sjf(processes: Sequence[Process], clock: Optional[VirtualClock] = None) -> ScheduleResult:
    """
    Shortest-Job-First (non-preemptive).

    The shortest burst among *all* remaining processes is picked, whether or
    not it has arrived yet; if it has not, the clock jumps to its arrival.
    Ties go to the earliest in arrival order.
    """
    clock = clock or VirtualClock()
    remaining: List[Process] = sorted(processes, key=lambda p: p.arrival_time)

    state = _NonPreemptiveRun(clock)
    while remaining:
        shortest = min(remaining, key=lambda p: p.burst_time)
        if shortest.arrival_time > clock.now:
            logger.debug("sjf: clock %s -> %s for pid=%s", clock.now, shortest.arrival_time, shortest.pid)
            clock.advance_to(shortest.arrival_time)

        state.dispatch(shortest)
        remaining.remove(shortest)

    result = state.result(SJFPolicy.title, len(processes))
    _log_summary(result)
    return result


def schedule_sjf_priority(processes: Sequence[Process], clock: Optional[VirtualClock] = None) -> ScheduleResult:
    """
    Shortest-Job-First with priority tie-break.

    Only processes that have arrived are eligible. Among them the shortest
    burst runs to completion; equal bursts go to the lower priority value.
    When nothing is eligible the clock skips to the next arrival.
    """
    clock = clock or VirtualClock()
    remaining: List[Process] = sorted(
        processes,
        key=lambda p: (p.arrival_time, p.priority, p.burst_time),
    )

    state = _NonPreemptiveRun(clock)
    while remaining:
        ready = [p for p in remaining if p.arrival_time <= clock.now]

        if not ready:
            next_arrival = min(p.arrival_time for p in remaining)
            logger.debug("priority: idle at %s, skipping to %s", clock.now, next_arrival)
            clock.advance_to(next_arrival)
            continue

        shortest = min(ready, key=lambda p: (p.burst_time, p.priority))
        state.dispatch(shortest)
        remaining.remove(shortest)

    result = state.result(SJFPriorityPolicy.title, len(processes))
    _log_summary(result)
    return result


def priority_penalty(process: Process) -> int:
    """
    Round-robin wait adjustment: every priority level above 1 takes 5 units off
    the reported wait (and a priority of 0 adds 5).
    """
    return (process.priority - 1) * 5


def schedule_rr(
    processes: Sequence[Process],
    quantum: int = DEFAULT_QUANTUM,
    clock: Optional[VirtualClock] = None,
) -> ScheduleResult:
    """
    Round Robin with a fixed time quantum.

    Every process is queued up front in arrival order; there is no mid-run
    admission. A process that still has work after its turn goes to the tail.
    Reported wait is turnaround minus :func:`priority_penalty`.
    """
    if quantum is None or quantum <= 0:
        raise ValueError(f"Round Robin requires a positive quantum, got {quantum!r}")

    clock = clock or VirtualClock()

    # Queue entries are (process, remaining burst).
    ready = deque((p, p.burst_time) for p in sorted(processes, key=lambda p: p.arrival_time))

    total_waiting = 0
    total_turnaround = 0
    timeline: List[TimeSlice] = []
    metrics: List[ProcessMetrics] = []

    while ready:
        p, left = ready.popleft()

        run_time = min(left, quantum)
        timeline.append(TimeSlice(pid=p.pid, start_time=clock.now, end_time=clock.now + run_time))
        clock.advance(run_time)
        left -= run_time

        if left > 0:
            logger.debug("rr: pid=%s re-queued at %s with %s left", p.pid, clock.now, left)
            ready.append((p, left))
            continue

        turnaround_time = clock.now - p.arrival_time
        waiting_time = turnaround_time - priority_penalty(p)
        total_waiting += waiting_time
        total_turnaround += turnaround_time

        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                completion_time=clock.now,
            )
        )
        logger.debug("rr: pid=%s finished at %s", p.pid, clock.now)

    result = ScheduleResult(algorithm=RoundRobinPolicy.title, quantum=quantum, processes=metrics, timeline=timeline)
    result.statistics = aggregate_statistics(total_waiting, total_turnaround, len(metrics), clock.now)
    _log_summary(result)
    return result


class _NonPreemptiveRun:
    """
    Shared bookkeeping for the two shortest-job policies.

    The turnaround accumulator subtracts the running wait total (not just the
    dispatched process's wait) on every dispatch.
    """

    def __init__(self, clock: VirtualClock) -> None:
        self.clock = clock
        self.total_waiting = 0
        self.total_turnaround = 0
        self.timeline: List[TimeSlice] = []
        self.metrics: List[ProcessMetrics] = []

    def dispatch(self, p: Process) -> None:
        start_time = self.clock.now
        completion_time = start_time + p.burst_time
        waiting_time = start_time - p.arrival_time
        turnaround_time = completion_time - p.arrival_time

        self.total_waiting += waiting_time
        self.total_turnaround += turnaround_time - self.total_waiting

        self.timeline.append(TimeSlice(pid=p.pid, start_time=start_time, end_time=completion_time))
        self.metrics.append(
            ProcessMetrics(
                pid=p.pid,
                priority=p.priority,
                burst_time=p.burst_time,
                arrival_time=p.arrival_time,
                waiting_time=waiting_time,
                turnaround_time=turnaround_time,
                completion_time=completion_time,
            )
        )
        logger.debug("dispatch pid=%s at %s (burst %s)", p.pid, start_time, p.burst_time)
        self.clock.advance(p.burst_time)

    def result(self, algorithm: str, count: int) -> ScheduleResult:
        result = ScheduleResult(algorithm=algorithm, quantum=None, processes=self.metrics, timeline=self.timeline)
        result.statistics = aggregate_statistics(self.total_waiting, self.total_turnaround, count, self.clock.now)
        return result


def _log_summary(result: ScheduleResult) -> None:
    stats = result.statistics
    logger.info(
        "%s: %d processes, %d slices, avg wait %.2f, avg turnaround %.2f, throughput %.3f",
        result.algorithm,
        len(result.processes),
        len(result.timeline),
        stats.avg_waiting,
        stats.avg_turnaround,
        stats.throughput,
    )


class SchedulingPolicy(ABC):
    """
    A dispatch policy over a batch of processes.

    ``run`` never mutates or reorders the caller's sequence, so the same input
    can be handed to every policy in turn.
    """

    key: str = ""
    title: str = ""

    @abstractmethod
    def run(self, processes: Sequence[Process], clock: Optional[VirtualClock] = None) -> ScheduleResult:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FCFSPolicy(SchedulingPolicy):
    key = "fcfs"
    title = "First-come, first-serve"

    def run(self, processes: Sequence[Process], clock: Optional[VirtualClock] = None) -> ScheduleResult:
        return schedule_fcfs(list(processes), clock)


class SJFPolicy(SchedulingPolicy):
    key = "sjf"
    title = "Shortest-job-first"

    def run(self, processes: Sequence[Process], clock: Optional[VirtualClock] = None) -> ScheduleResult:
        return schedule_sjf(list(processes), clock)


class SJFPriorityPolicy(SchedulingPolicy):
    key = "priority"
    title = "Priority"

    def run(self, processes: Sequence[Process], clock: Optional[VirtualClock] = None) -> ScheduleResult:
        return schedule_sjf_priority(list(processes), clock)


class RoundRobinPolicy(SchedulingPolicy):
    key = "rr"
    title = "Round-robin"

    def __init__(self, quantum: int = DEFAULT_QUANTUM) -> None:
        if quantum is None or quantum <= 0:
            raise ValueError(f"Round Robin requires a positive quantum, got {quantum!r}")
        self.quantum = quantum

    def run(self, processes: Sequence[Process], clock: Optional[VirtualClock] = None) -> ScheduleResult:
        return schedule_rr(list(processes), self.quantum, clock)

    def __repr__(self) -> str:
        return f"RoundRobinPolicy(quantum={self.quantum})"


POLICIES: Dict[str, type] = {
    "fcfs": FCFSPolicy,
    "sjf": SJFPolicy,
    "priority": SJFPriorityPolicy,
    "rr": RoundRobinPolicy,
}


def make_policy(name: str, quantum: int = DEFAULT_QUANTUM) -> SchedulingPolicy:
    name = name.lower()
    if name not in POLICIES:
        raise ValueError(f"Unknown scheduling policy '{name}' (choose from {', '.join(POLICIES)})")

    cls = POLICIES[name]
    if cls is RoundRobinPolicy:
        return cls(quantum=quantum)
    return cls()


def run_policy(name: str, processes: Sequence[Process], quantum: int = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Dispatch to the named policy. Quantum only matters for round-robin.
    """
    return make_policy(name, quantum).run(processes)


def run_all(
    processes: Sequence[Process],
    quantum: int = DEFAULT_QUANTUM,
    names: Optional[Sequence[str]] = None,
) -> List[ScheduleResult]:
    """
    Run each policy once, in the canonical order, over the same input.
    """
    wanted = {n.lower() for n in names} if names is not None else set(POLICIES)
    unknown = wanted - set(POLICIES)
    if unknown:
        raise ValueError(f"Unknown scheduling policy '{sorted(unknown)[0]}' (choose from {', '.join(POLICIES)})")

    return [run_policy(name, processes, quantum) for name in POLICIES if name in wanted]
