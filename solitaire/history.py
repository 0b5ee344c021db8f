"""
Move records and the history file.

A record is written as ``"(<n>) <cellID><H|V>"``, e.g. ``"(1) D3V"``, and the
history file is a JSON array of such strings.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .board import Axis, Pos, cell_id, parse_cell_id

logger = logging.getLogger(__name__)

_RECORD_RE = re.compile(r"\((\d+)\) ([A-G][1-7])([HV])")


class HistoryError(ValueError):
    """History file could not be read or does not describe a legal game."""


@dataclass(frozen=True)
class MoveRecord:
    index: int
    pos: Pos
    axis: Axis

    @property
    def cell(self) -> str:
        return cell_id(self.pos)

    def __str__(self) -> str:
        return f"({self.index}) {self.cell}{self.axis.value}"

    @classmethod
    def parse(cls, text: str) -> Optional["MoveRecord"]:
        """Parse a record string; ``None`` when it is not one."""
        m = _RECORD_RE.fullmatch(text)
        if not m:
            return None
        pos = parse_cell_id(m.group(2))
        if pos is None:
            return None
        return cls(int(m.group(1)), pos, Axis(m.group(3)))


def parse_records(items: Sequence[object]) -> List[MoveRecord]:
    """
    Validate a decoded history list.

    Every item must be a record string and indices must run 1, 2, 3, ...
    """
    records: List[MoveRecord] = []
    for expected, item in enumerate(items, 1):
        if not isinstance(item, str):
            raise HistoryError(f"history entry {expected} is not a string: {item!r}")
        rec = MoveRecord.parse(item)
        if rec is None:
            raise HistoryError(f"malformed history entry: {item!r}")
        if rec.index != expected:
            raise HistoryError(f"history entry {item!r} out of sequence, expected index {expected}")
        records.append(rec)
    return records


def save_history(path: Path, records: Sequence[MoveRecord]) -> None:
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(json.dumps([str(r) for r in records]), encoding="utf-8")
    tmp.replace(path)
    logger.info("Saved %d moves to %s", len(records), path)


def load_history(path: Path) -> List[MoveRecord]:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise HistoryError(f"unable to read {path}: {e}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise HistoryError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise HistoryError(f"{path} must hold a JSON array of moves")
    return parse_records(data)
