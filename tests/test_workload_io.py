from pathlib import Path

import pytest

from batch_scheduler.models import Process
from batch_scheduler.workload_io import WorkloadError, load_workload, parse_rows


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0,2\n2,9,1\n\n3, 6, 3, 1\n")
    procs = load_workload(p)
    assert procs == [
        Process(pid=1, arrival_time=0, burst_time=5, priority=2),
        Process(pid=2, arrival_time=1, burst_time=9, priority=0),
        Process(pid=3, arrival_time=3, burst_time=6, priority=1),
    ]


def test_load_without_suffix_reads_csv(tmp_path: Path):
    p = tmp_path / "processes"
    p.write_text("7,3,0\n")
    assert load_workload(p)[0].pid == 7


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":2,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_malformed_integer_is_fatal(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0\n2,x,1\n")
    with pytest.raises(WorkloadError, match="row 2"):
        load_workload(p)


@pytest.mark.parametrize(
    "rows",
    [
        [["1", "5"]],
        [["1", "5", "0", "1", "9"]],
        [["1", "5", "0"], ["1", "2", "3"]],
        [["1", "0", "0"]],
        [["1", "5", "-1"]],
    ],
)
def test_invalid_rows(tmp_path: Path, rows):
    p = tmp_path / "w.csv"
    p.write_text("\n".join(",".join(r) for r in rows) + "\n")
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_json_rejects_non_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid": 1}')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_json_missing_field(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": 1, "burst_time": 3}]')
    with pytest.raises(WorkloadError, match="arrival_time"):
        load_workload(p)


def test_missing_file(tmp_path: Path):
    with pytest.raises(OSError):
        load_workload(tmp_path / "nope.csv")


def test_parse_rows_defaults_priority():
    assert parse_rows([["4", "8", "2"]]) == [Process(pid=4, arrival_time=2, burst_time=8, priority=0)]


@pytest.mark.parametrize("name", ["w.csv", "w.json"])
def test_non_utf8_file_is_workload_error(tmp_path: Path, name):
    p = tmp_path / name
    p.write_bytes(b"1,5,0\n2,\xff\xfe,1\n")
    with pytest.raises(WorkloadError, match="not UTF-8"):
        load_workload(p)
