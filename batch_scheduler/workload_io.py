from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from .models import Process

logger = logging.getLogger(__name__)


class WorkloadError(ValueError):
    """Raised when a workload file cannot be turned into processes."""


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload file into a list of Process objects, in file order.

    ``.json`` files hold a list of process objects. Anything else is read as
    headerless CSV rows of ``id,burst,arrival[,priority]``.
    """
    path = Path(path)

    if path.suffix.lower() == ".json":
        processes = _load_json(path)
    else:
        processes = _load_csv(path)

    _validate(processes)
    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"{path}: invalid JSON ({exc})") from exc
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"{path}: not UTF-8 text ({exc})") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    processes: List[Process] = []
    for number, entry in enumerate(raw, start=1):
        if not isinstance(entry, dict):
            raise WorkloadError(f"entry {number}: expected an object, got {entry!r}")
        processes.append(_process_from_mapping(entry, number))

    return processes


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            return parse_rows(csv.reader(f))
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"{path}: not UTF-8 text ({exc})") from exc


def parse_rows(rows: Iterable[Sequence[str]]) -> List[Process]:
    """
    Turn delimited rows of ``id,burst,arrival[,priority]`` into processes.

    Blank rows are skipped. Priority defaults to 0 when the row has three fields.
    """
    processes: List[Process] = []
    for number, row in enumerate(rows, start=1):
        fields = [field.strip() for field in row]
        if not any(fields):
            continue

        if len(fields) not in (3, 4):
            raise WorkloadError(f"row {number}: expected 3 or 4 fields, got {len(fields)}: {row!r}")

        pid, burst_time, arrival_time = (_to_int(v, number) for v in fields[:3])
        priority = _to_int(fields[3], number) if len(fields) == 4 else 0

        processes.append(
            Process(
                pid=pid,
                arrival_time=arrival_time,
                burst_time=burst_time,
                priority=priority,
            )
        )

    return processes


def _process_from_mapping(mapping, number: int) -> Process:
    try:
        pid = mapping["pid"]
        burst_time = mapping["burst_time"]
        arrival_time = mapping["arrival_time"]
    except KeyError as exc:
        raise WorkloadError(f"entry {number}: missing field {exc.args[0]!r} in {mapping!r}") from exc

    priority_val = mapping.get("priority")
    priority = _to_int(priority_val, number) if priority_val not in (None, "") else 0

    return Process(
        pid=_to_int(pid, number),
        arrival_time=_to_int(arrival_time, number),
        burst_time=_to_int(burst_time, number),
        priority=priority,
    )


def _to_int(value, number: int) -> int:
    if isinstance(value, (bool, float)):
        raise WorkloadError(f"row {number}: {value!r} is not an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise WorkloadError(f"row {number}: {value!r} is not an integer") from exc


def _validate(processes: List[Process]) -> None:
    seen = set()
    for p in processes:
        if p.pid in seen:
            raise WorkloadError(f"duplicate process id {p.pid}")
        seen.add(p.pid)
        if p.arrival_time < 0:
            raise WorkloadError(f"process {p.pid}: arrival time must be >= 0, got {p.arrival_time}")
        if p.burst_time <= 0:
            raise WorkloadError(f"process {p.pid}: burst must be > 0, got {p.burst_time}")
