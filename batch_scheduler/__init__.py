"""
Batch CPU scheduling simulator.

Runs FCFS, SJF, SJF with priority tie-break and Round-robin over a fixed set
of processes and reports a Gantt timeline plus wait/turnaround/throughput
statistics for each.
"""

__all__ = ["algorithms", "cli", "metrics", "models", "report", "workload_io"]
