"""
Tests for the command line entry point.
"""

import json
import sys

import main

RECORDS = {
    "matches": [
        {"id": "m1", "date": "2026-03-15", "start_time": "2026-03-15T11:00:00Z"},
        {"id": "m2", "date": "2026-03-15", "start_time": "2026-03-15T11:30:00Z"},
        {"id": "m3", "date": "2026-03-16", "start_time": None},
    ],
    "slots": [
        {"id": "s1", "poll_id": "p1", "start_time": "2026-03-15T10:30:00Z", "end_time": "2026-03-15T12:30:00Z"},
    ],
    "assignments": [
        {"umpire_id": "u1", "match_id": "m1"},
        {"umpire_id": "u1", "match_id": "m2"},
    ],
}


def write_records(tmp_path, records=RECORDS):
    path = tmp_path / "records.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return str(path)


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["main.py", *args])
    return main.main()


def test_load_records(tmp_path):
    matches, slots, assignments = main.load_records(write_records(tmp_path))
    assert [m.id for m in matches] == ["m1", "m2", "m3"]
    assert [s.id for s in slots] == ["s1"]
    assert [(a.umpire_id, a.match_id) for a in assignments] == [("u1", "m1"), ("u1", "m2")]


def test_slots_command(tmp_path, monkeypatch, capsys):
    assert run(monkeypatch, "slots", write_records(tmp_path)) == 0
    out = capsys.readouterr().out
    assert "2 slot(s) for 3 match(es)" in out
    assert "2026-03-15T10:30:00+00:00 - 2026-03-15T12:30:00+00:00" in out
    assert "2026-03-15T11:00:00+00:00 - 2026-03-15T13:00:00+00:00" in out


def test_mapping_command(tmp_path, monkeypatch, capsys):
    assert run(monkeypatch, "mapping", write_records(tmp_path)) == 0
    out = capsys.readouterr().out
    assert "Mapped 2 of 3 match(es)" in out
    assert "m1: s1" in out
    assert "m3: -" in out


def test_conflicts_command(tmp_path, monkeypatch, capsys):
    assert run(monkeypatch, "conflicts", write_records(tmp_path)) == 0
    out = capsys.readouterr().out
    assert "2 conflict(s)" in out
    assert "[HARD] umpire u1: m2 <-> m1" in out


def test_no_conflicts(tmp_path, monkeypatch, capsys):
    records = dict(RECORDS, assignments=[{"umpire_id": "u1", "match_id": "m1"}])
    assert run(monkeypatch, "conflicts", write_records(tmp_path, records)) == 0
    assert "[PASS] No conflicts found" in capsys.readouterr().out


def test_missing_file_returns_error(tmp_path, monkeypatch):
    assert run(monkeypatch, "slots", str(tmp_path / "missing.json")) == 1
