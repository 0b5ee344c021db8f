from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

Pos = Tuple[int, int]              # (row, col)

ROWS = "1234567"
COLS = "ABCDEFG"

NOTHING, HOLE, PEG = -1, 0, 1


class Axis(str, Enum):
    """Jump axis. The value is the suffix used in move records."""

    HORIZONTAL = "H"
    VERTICAL = "V"

    @property
    def label(self) -> str:
        return "Horizontal" if self is Axis.HORIZONTAL else "Vertical"

    @classmethod
    def from_label(cls, label: str) -> Optional["Axis"]:
        for axis in cls:
            if axis.label == label:
                return axis
        return None


def cell_id(pos: Pos) -> str:
    """(3, 3) -> "D4"."""
    r, c = pos
    return COLS[c] + ROWS[r]


def parse_cell_id(text: str) -> Optional[Pos]:
    """"D4" -> (3, 3); anything that is not a playable cell -> None."""
    if len(text) != 2 or text[0] not in COLS or text[1] not in ROWS:
        return None
    pos = (ROWS.index(text[1]), COLS.index(text[0]))
    return pos if Board.is_playable(pos) else None


class Board:
    """
    7×7 Peg-Solitaire cross board.

    The grid is a numpy int8 array: 1 = peg, 0 = hole, -1 = outside the cross.
    Neighbours are computed from coordinates, nothing links cells together.
    """

    __slots__ = ("grid",)

    SIZE: int = 7
    CENTER: Pos = (3, 3)

    # --- geometry -------------------------------------------------------
    LEGAL_POSITIONS: List[Pos] = [
        (r, c) for r in range(7) for c in range(7)
        if (2 <= r <= 4) or (2 <= c <= 4)
    ]
    LEGAL_MASK: np.ndarray = np.zeros((7, 7), dtype=bool)
    for _r, _c in LEGAL_POSITIONS:
        LEGAL_MASK[_r, _c] = True

    TOTAL_PEGS: int = 32          # centre starts empty

    # -------------------------------------------------------------------
    def __init__(self) -> None:
        self.grid: np.ndarray = np.full((7, 7), NOTHING, dtype=np.int8)
        self.reset()

    # ---------------- basics --------------------------------------------
    def reset(self) -> None:
        self.grid[self.LEGAL_MASK] = PEG
        self.grid[self.CENTER] = HOLE

    @classmethod
    def is_playable(cls, pos: Pos) -> bool:
        r, c = pos
        return 0 <= r < cls.SIZE and 0 <= c < cls.SIZE and bool(cls.LEGAL_MASK[r, c])

    def get(self, pos: Pos) -> int | None:
        if not self.is_playable(pos):
            return None
        return int(self.grid[pos])

    def set(self, pos: Pos, val: int) -> None:
        if not self.is_playable(pos) or val not in (HOLE, PEG):
            raise ValueError(f"illegal {pos=}/{val=}")
        self.grid[pos] = val

    def toggle(self, pos: Pos) -> None:
        self.set(pos, HOLE if self.grid[pos] == PEG else PEG)

    def is_peg(self, pos: Pos) -> bool:  return self.get(pos) == PEG
    def is_hole(self, pos: Pos) -> bool: return self.get(pos) == HOLE

    def all_holes(self) -> List[Pos]: return [p for p in self.LEGAL_POSITIONS if self.grid[p] == HOLE]
    def count_pegs(self) -> int:      return int(np.count_nonzero(self.grid == PEG))

    # ---------------- topology ------------------------------------------
    def neighbors_of(self, pos: Pos, axis: Axis) -> List[Pos]:
        """
        Playable neighbours of ``pos`` along ``axis``, left/up first.

        Returns 0, 1 or 2 positions; edges and corners contribute nothing.
        """
        r, c = pos
        if axis is Axis.HORIZONTAL:
            candidates = [(r, c - 1), (r, c + 1)]
        else:
            candidates = [(r - 1, c), (r + 1, c)]
        return [p for p in candidates if self.is_playable(p)]

    # ---------------- array ---------------------------------------------
    def as_array(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "Board":
        b = Board()
        b.grid = self.grid.copy()
        return b

    def __eq__(self, o: object) -> bool:
        return isinstance(o, Board) and np.array_equal(o.grid, self.grid)

    def __str__(self) -> str:
        rows = [" ".join("●" if v == PEG else "◯" if v == HOLE else " "
                         for v in self.grid[r]) for r in range(7)]
        return "\n".join(rows)
