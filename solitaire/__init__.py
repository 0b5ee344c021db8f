from .board import Axis, Board, cell_id, parse_cell_id
from .game import AwaitingChoice, Game, Idle, IllegalJumpError
from .history import HistoryError, MoveRecord, load_history, save_history

__all__ = [
    "Axis",
    "AwaitingChoice",
    "Board",
    "Game",
    "HistoryError",
    "Idle",
    "IllegalJumpError",
    "MoveRecord",
    "cell_id",
    "load_history",
    "parse_cell_id",
    "save_history",
]
