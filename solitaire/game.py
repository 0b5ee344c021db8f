from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from . import config
from .board import Axis, Board, Pos, cell_id, parse_cell_id
from .history import HistoryError, MoveRecord, load_history, save_history

logger = logging.getLogger(__name__)

# Glyph shown for a legal jump through a cell: the direction the jumping peg travels.
# Keyed by (axis, peg sits on the left/upper neighbour).
ARROWS: Dict[Tuple[Axis, bool], str] = {
    (Axis.HORIZONTAL, True):  "\u2192",   # →
    (Axis.HORIZONTAL, False): "\u2190",   # ←
    (Axis.VERTICAL, True):    "\u2193",   # ↓
    (Axis.VERTICAL, False):   "\u2191",   # ↑
}

RESET, UNDO = "Reset", "Undo"
SAVE_HISTORY, LOAD_HISTORY = "Save History", "Load History"


class IllegalJumpError(RuntimeError):
    """A jump was requested through a cell that has no such legal jump."""


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class AwaitingChoice:
    """A cell with legal jumps on both axes was clicked; waiting for the axis."""
    pos: Pos
    options: Tuple[Axis, Axis] = (Axis.HORIZONTAL, Axis.VERTICAL)


Selection = Union[Idle, AwaitingChoice]


class Game:
    """
    Peg-Solitaire game engine (7×7 cross).

    • legal jumps recomputed after every change (``refresh_legal_moves``)
    • a jump is addressed by the cell it passes over plus its axis
    • undo / history navigation by replaying the move records from scratch
    """

    def __init__(self, history_path: Optional[Path] = None) -> None:
        self.board = Board()
        self.history: List[MoveRecord] = []
        self.move_count = 0
        self.selection: Selection = Idle()
        self.history_path = Path(history_path) if history_path else config.HISTORY_PATH
        self._legal: Dict[Pos, Dict[Axis, str]] = {}
        self.reset()

    # ------------------------------------------------------------------ #
    #                             state                                  #
    # ------------------------------------------------------------------ #
    def reset(self) -> None:
        self.board.reset()
        self.history = []
        self.move_count = 0
        self.selection = Idle()
        self.refresh_legal_moves()

    def refresh_legal_moves(self) -> None:
        """Recompute, for every cell, the axes it can currently be jumped over on."""
        legal: Dict[Pos, Dict[Axis, str]] = {}
        for pos in Board.LEGAL_POSITIONS:
            for axis in Axis:
                glyph = self._jump_glyph(pos, axis)
                if glyph:
                    legal.setdefault(pos, {})[axis] = glyph
        self._legal = legal

    def _jump_glyph(self, pos: Pos, axis: Axis) -> Optional[str]:
        if not self.board.is_peg(pos):
            return None
        neighbors = self.board.neighbors_of(pos, axis)
        if len(neighbors) != 2:
            return None
        n1, n2 = neighbors
        if self.board.is_peg(n1) and self.board.is_hole(n2):
            return ARROWS[axis, True]
        if self.board.is_hole(n1) and self.board.is_peg(n2):
            return ARROWS[axis, False]
        return None

    def legal_axes(self, pos: Pos) -> List[Axis]:
        return list(self._legal.get(pos, {}))

    def get_legal_moves(self) -> List[Tuple[Pos, Axis]]:
        return [(pos, axis) for pos, axes in self._legal.items() for axis in axes]

    @property
    def awaiting_choice(self) -> bool:
        return isinstance(self.selection, AwaitingChoice)

    def is_clickable(self, pos: Pos) -> bool:
        return not self.awaiting_choice and pos in self._legal

    def arrow(self, pos: Pos) -> str:
        if self.awaiting_choice:
            return ""
        return "".join(self._legal.get(pos, {}).values())

    def is_game_over(self) -> bool:
        return not self._legal

    def is_win(self) -> bool:
        return self.board.count_pegs() == 1 and self.board.is_peg(Board.CENTER)

    # ------------------------------------------------------------------ #
    #                             moves                                  #
    # ------------------------------------------------------------------ #
    def apply_jump(self, pos: Pos, axis: Axis) -> MoveRecord:
        """
        Jump over ``pos`` along ``axis``: the peg on one neighbour lands on the
        other, ``pos`` itself is emptied.

        If the board currently sits at an earlier point of the history, the
        records after that point are dropped before the new one is appended.
        """
        if axis not in self._legal.get(pos, {}):
            raise IllegalJumpError(f"no legal {axis.label.lower()} jump over {cell_id(pos)}")

        del self.history[self.move_count:]
        for p in self.board.neighbors_of(pos, axis):
            self.board.toggle(p)
        self.board.toggle(pos)

        self.move_count += 1
        record = MoveRecord(self.move_count, pos, axis)
        self.history.append(record)
        self.selection = Idle()
        self.refresh_legal_moves()
        logger.debug("Applied %s", record)
        return record

    def select(self, pos: Pos) -> bool:
        """
        A click on ``pos``. One legal axis jumps at once, two legal axes wait
        for ``choose``. Returns False when the click is ignored.
        """
        if not self.is_clickable(pos):
            logger.debug("Ignoring click on %s", cell_id(pos))
            return False
        axes = self.legal_axes(pos)
        if len(axes) == 2:
            self.selection = AwaitingChoice(pos)
            logger.debug("%s selected, waiting for direction", cell_id(pos))
        else:
            self.apply_jump(pos, axes[0])
        return True

    def choose(self, axis: Axis) -> bool:
        if not isinstance(self.selection, AwaitingChoice):
            logger.debug("Ignoring %s: no cell selected", axis.label)
            return False
        pos = self.selection.pos
        self.selection = Idle()
        self.apply_jump(pos, axis)
        return True

    def cancel_selection(self) -> None:
        self.selection = Idle()

    # ------------------------------------------------------------------ #
    #                         history / replay                           #
    # ------------------------------------------------------------------ #
    def replay_to(self, index: int) -> None:
        """
        Rebuild the board from the initial position by re-applying the
        recorded moves up to and including move ``index``.

        The recorded history is kept, so later moves stay available.
        """
        records = list(self.history)
        if not any(r.index == index for r in records):
            raise ValueError(f"no move ({index}) in history")

        self.reset()
        for rec in records:
            self.apply_jump(rec.pos, rec.axis)
            if rec.index == index:
                break
        self.history = records
        logger.info("Replayed to move %d of %d", self.move_count, len(records))

    def undo(self) -> bool:
        if self.move_count == 0:
            return False
        if self.move_count == 1:
            self.reset()
        else:
            target = self.move_count - 1
            self.history = self.history[:target]
            self.replay_to(target)
        return True

    def applied_records(self) -> List[MoveRecord]:
        return self.history[:self.move_count]

    def save_history(self, path: Optional[Path] = None) -> Path:
        path = Path(path) if path else self.history_path
        save_history(path, self.applied_records())
        return path

    def load_history(self, path: Optional[Path] = None) -> None:
        """
        Load records from disk and rebuild the game by replaying them.

        Replay runs on a scratch game; this one is only touched once every
        recorded move proved legal.
        """
        path = Path(path) if path else self.history_path
        records = load_history(path)

        scratch = Game(self.history_path)
        for rec in records:
            if rec.axis not in scratch.legal_axes(rec.pos):
                raise HistoryError(f"illegal move {rec} in {path}")
            scratch.apply_jump(rec.pos, rec.axis)

        self.board = scratch.board
        self.history = scratch.history
        self.move_count = scratch.move_count
        self.selection = Idle()
        self.refresh_legal_moves()
        logger.info("Loaded %d moves from %s", len(records), path)

    # ------------------------------------------------------------------ #
    #                         request actions                            #
    # ------------------------------------------------------------------ #
    def dispatch(self, action: str) -> None:
        """
        Apply one action string as posted by the playing-field form.

        Control words, a direction choice, a history entry or a cell ID;
        anything unknown is ignored.
        """
        if not action:
            return
        if action == RESET:
            self.reset()
            logger.info("Game reset")
            return
        if action == UNDO:
            self.cancel_selection()
            self.undo()
            return
        if action == SAVE_HISTORY:
            self.cancel_selection()
            self.save_history()
            return
        if action == LOAD_HISTORY:
            self.load_history()
            return

        axis = Axis.from_label(action)
        if axis is not None:
            self.choose(axis)
            return

        if self.awaiting_choice:
            logger.debug("Ignoring %r while waiting for a direction", action)
            return

        record = MoveRecord.parse(action)
        if record is not None:
            if record in self.history:
                self.replay_to(record.index)
            else:
                logger.debug("Ignoring unknown history entry %r", action)
            return

        pos = parse_cell_id(action)
        if pos is None:
            logger.debug("Ignoring unknown action %r", action)
            return
        self.select(pos)

    # ------------------------------------------------------------------ #
    #                              view                                  #
    # ------------------------------------------------------------------ #
    def css_class(self, pos: Pos) -> str:
        if isinstance(self.selection, AwaitingChoice) and self.selection.pos == pos:
            return "selector"
        v = self.board.get(pos)
        if v is None:
            return "nothing"
        return "stone" if v else "noStone"

    def status(self) -> str:
        if self.is_win():
            return "Victory! Single peg in center."
        if self.awaiting_choice:
            return "Choose a direction."
        if self.is_game_over():
            return f"Game over with {self.board.count_pegs()} pegs left."
        return f"Pegs: {self.board.count_pegs()} | Moves: {self.move_count}"

    def view(self) -> dict:
        """Everything the playing field renders, as plain data."""
        cells = [
            [
                {
                    "id": cell_id((r, c)),
                    "css": self.css_class((r, c)),
                    "clickable": self.is_clickable((r, c)),
                    "arrow": self.arrow((r, c)),
                }
                for c in range(Board.SIZE)
            ]
            for r in range(Board.SIZE)
        ]
        choices = []
        if isinstance(self.selection, AwaitingChoice):
            pos = self.selection.pos
            choices = [
                {"value": axis.label, "glyph": self._legal[pos][axis]}
                for axis in self.selection.options
            ]
        return {
            "cells": cells,
            "choice": bool(choices),
            "choices": choices,
            "history": [
                {"token": str(rec), "applied": i < self.move_count}
                for i, rec in enumerate(self.history)
            ],
            "move_count": self.move_count,
            "pegs": self.board.count_pegs(),
            "status": self.status(),
        }

    def __str__(self) -> str:
        parts = [str(self.board)]
        if self.move_count:
            parts.append(f"Last move: {self.history[self.move_count - 1]}")
        return "\n".join(parts)
