"""Score records kept in a tab-separated results file."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

RESULTS_FILE = "results.txt"
FIELDS_PER_RECORD = 8

_INTEGER = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class Record:
    """One finished game: rank, player name, score and the minute it ended."""

    rank: int
    name: str
    point: int
    year: int
    month: int
    day: int
    hour: int
    minute: int

    def display(self) -> str:
        """Line as shown in record listings."""
        return (
            f"{self.rank}\t{self.name}\t{self.point}\t"
            f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}"
        )


def _to_int(token: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise ValueError(token)
    return int(token)


def parse_records(text: str) -> list[Record]:
    """Read records until the first malformed or incomplete one."""
    tokens = iter(text.split())
    records = []
    for group in zip(*[tokens] * FIELDS_PER_RECORD):
        rank, name, *numbers = group
        try:
            point, year, month, day, hour, minute = map(_to_int, numbers)
            rank_value = _to_int(rank)
        except ValueError:
            break
        records.append(Record(rank_value, name, point, year, month, day, hour, minute))
    return records


def format_record(record: Record) -> str:
    """One line of the results file, newline included."""
    return (
        f"{record.rank}\t{record.name}\t{record.point}\t{record.year:04d}\t"
        f"{record.month:02d}\t{record.day:02d}\t{record.hour:02d}\t{record.minute:02d}\n"
    )


def _check_name(name: str) -> None:
    if not name or any(ch.isspace() for ch in name):
        raise ValueError(f"name must be a single non-empty word: {name!r}")


def _insert(
    records: Sequence[Record], name: str, point: int, when: datetime
) -> tuple[list[Record], Record]:
    _check_name(name)
    index = next(
        (i for i, record in enumerate(records) if record.point <= point), len(records)
    )
    new = Record(index + 1, name, point, when.year, when.month, when.day, when.hour, when.minute)
    ordered = [
        *records[:index],
        new,
        *(replace(record, rank=record.rank + 1) for record in records[index:]),
    ]
    return ordered, new


def insert_record(
    records: Sequence[Record], name: str, point: int, when: datetime
) -> list[Record]:
    """Place a new result before the first record with a score not above it.

    Records above keep their rank, records below move down one rank.
    """
    ordered, _ = _insert(records, name, point, when)
    return ordered


class RecordStore:
    """The results file on disk."""

    def __init__(self, path: Union[str, Path] = RESULTS_FILE) -> None:
        self.path = Path(path)

    def load(self) -> list[Record]:
        """All records in the file; none when it does not exist."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        return parse_records(text)

    def best_point(self) -> int:
        return max([0, *(record.point for record in self.load())])

    def search(self, name: str) -> list[Record]:
        return [record for record in self.load() if record.name == name]

    def save_result(
        self, name: str, point: int, when: Optional[datetime] = None
    ) -> Record:
        """Insert a result into the file, rewriting it, and return the new record."""
        moment = when if when is not None else datetime.now()
        ordered, new = _insert(self.load(), name, point, moment)
        self._write(ordered)
        return new

    def _write(self, records: Iterable[Record]) -> None:
        self.path.write_text("".join(map(format_record, records)), encoding="utf-8")