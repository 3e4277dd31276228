from datetime import datetime

import pytest

from texttetris.records import (
    Record,
    RecordStore,
    format_record,
    insert_record,
    parse_records,
)

WHEN = datetime(2025, 6, 1, 9, 5)


def make(rank, name, point):
    return Record(rank, name, point, 2025, 6, 1, 9, 5)


def test_format_record_pads_fields():
    assert format_record(make(1, "alice", 100)) == "1\talice\t100\t2025\t06\t01\t09\t05\n"


def test_display_shows_date_and_time():
    assert make(1, "alice", 100).display() == "1\talice\t100\t2025-06-01 09:05"


def test_parse_round_trip():
    records = [make(1, "alice", 300), make(2, "bob", 100)]
    text = "".join(format_record(r) for r in records)
    assert parse_records(text) == records


def test_parse_stops_at_malformed_record():
    good = format_record(make(1, "alice", 300))
    text = good + "2\tbob\tlots\t2025\t06\t01\t09\t05\n" + format_record(make(3, "carol", 1))
    assert parse_records(text) == [make(1, "alice", 300)]


def test_parse_ignores_incomplete_tail():
    text = format_record(make(1, "alice", 300)) + "2\tbob\t100\n"
    assert parse_records(text) == [make(1, "alice", 300)]


def test_parse_empty_text():
    assert parse_records("") == []


def test_insert_into_empty_list():
    result = insert_record([], "alice", 100, WHEN)
    assert result == [make(1, "alice", 100)]


def test_insert_in_the_middle_shifts_ranks_below():
    records = [make(1, "alice", 300), make(2, "bob", 100)]
    result = insert_record(records, "carol", 200, WHEN)
    assert [r.name for r in result] == ["alice", "carol", "bob"]
    assert [r.rank for r in result] == [1, 2, 3]


def test_insert_tie_goes_before_existing():
    records = [make(1, "alice", 300), make(2, "bob", 100)]
    result = insert_record(records, "carol", 100, WHEN)
    assert [r.name for r in result] == ["alice", "carol", "bob"]


def test_insert_lowest_goes_last():
    records = [make(1, "alice", 300)]
    result = insert_record(records, "bob", 5, WHEN)
    assert result[-1] == make(2, "bob", 5)
    assert result[0] == records[0]


def test_insert_keeps_existing_ranks_above():
    records = [make(4, "alice", 300), make(9, "bob", 100)]
    result = insert_record(records, "carol", 150, WHEN)
    assert [r.rank for r in result] == [4, 2, 10]


@pytest.mark.parametrize("name", ["", "two words", "tab\tname"])
def test_insert_rejects_bad_names(name):
    with pytest.raises(ValueError):
        insert_record([], name, 10, WHEN)


def test_store_missing_file(tmp_path):
    store = RecordStore(tmp_path / "results.txt")
    assert store.load() == []
    assert store.best_point() == 0
    assert store.search("alice") == []


def test_store_save_and_load(tmp_path):
    store = RecordStore(tmp_path / "results.txt")
    first = store.save_result("alice", 100, WHEN)
    second = store.save_result("bob", 300, WHEN)
    assert first == make(1, "alice", 100)
    assert second == make(1, "bob", 300)
    assert store.load() == [make(1, "bob", 300), make(2, "alice", 100)]
    assert store.best_point() == 300


def test_store_file_contents(tmp_path):
    path = tmp_path / "results.txt"
    RecordStore(path).save_result("alice", 100, WHEN)
    assert path.read_text(encoding="utf-8") == "1\talice\t100\t2025\t06\t01\t09\t05\n"


def test_store_search_exact_name(tmp_path):
    store = RecordStore(tmp_path / "results.txt")
    store.save_result("alice", 100, WHEN)
    store.save_result("alicia", 200, WHEN)
    store.save_result("alice", 50, WHEN)
    found = store.search("alice")
    assert [r.point for r in found] == [100, 50]
    assert all(r.name == "alice" for r in found)


def test_store_save_defaults_to_now(tmp_path):
    store = RecordStore(tmp_path / "results.txt")
    before = datetime.now().replace(second=0, microsecond=0)
    record = store.save_result("alice", 10)
    stamp = datetime(record.year, record.month, record.day, record.hour, record.minute)
    assert before <= stamp <= datetime.now()