from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass(frozen=True)
class TimeSlice:
    """
    One contiguous interval during which a process occupies the processor.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    pid: int
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass(frozen=True)
class Statistics:
    avg_waiting: float
    avg_turnaround: float
    throughput: float


@dataclass
class VirtualClock:
    """
    Simulated processor clock. Only moves forward.
    """

    now: int = 0

    def advance(self, units: int) -> int:
        self.now += units
        return self.now

    def advance_to(self, instant: int) -> int:
        if instant > self.now:
            self.now = instant
        return self.now


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[TimeSlice] = field(default_factory=list)
    statistics: Optional[Statistics] = None
