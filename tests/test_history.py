"""Tests for move records and saving/loading the history file."""

import json
import tempfile
import unittest
from pathlib import Path

from solitaire.board import Axis, Board
from solitaire.game import AwaitingChoice, Game
from solitaire.history import (
    HistoryError,
    MoveRecord,
    load_history,
    parse_records,
    save_history,
)


class MoveRecordTests(unittest.TestCase):

    def test_format(self):
        self.assertEqual(str(MoveRecord(1, (2, 3), Axis.VERTICAL)), "(1) D3V")
        self.assertEqual(str(MoveRecord(12, (3, 4), Axis.HORIZONTAL)), "(12) E4H")

    def test_parse(self):
        self.assertEqual(MoveRecord.parse("(12) E4H"), MoveRecord(12, (3, 4), Axis.HORIZONTAL))
        for text in ("", "D3V", "(1)D3V", "(1) D3X", "(1) A1H", "(x) D3V", "(1) D3V ", "(1) D3V\n"):
            self.assertIsNone(MoveRecord.parse(text), text)

    def test_parse_records_requires_sequence(self):
        self.assertEqual(len(parse_records(["(1) D3V", "(2) C3H"])), 2)
        with self.assertRaises(HistoryError):
            parse_records(["(2) D3V"])
        with self.assertRaises(HistoryError):
            parse_records(["(1) D3V", "(1) C3H"])
        with self.assertRaises(HistoryError):
            parse_records([1])
        with self.assertRaises(HistoryError):
            parse_records(["garbage"])


class HistoryFileTests(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "history.solitaire"

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, payload):
        self.path.write_text(payload, encoding="utf-8")

    def test_file_is_json_array_of_strings(self):
        save_history(self.path, [MoveRecord(1, (2, 3), Axis.VERTICAL)])
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), ["(1) D3V"])
        self.assertEqual(load_history(self.path), [MoveRecord(1, (2, 3), Axis.VERTICAL)])

    def test_missing_file(self):
        with self.assertRaises(HistoryError):
            load_history(self.path)

    def test_not_utf8(self):
        self.path.write_bytes(b"\xff\xfe")
        with self.assertRaises(HistoryError):
            load_history(self.path)

    def test_not_json(self):
        self._write("{nope")
        with self.assertRaises(HistoryError):
            load_history(self.path)

    def test_not_a_list(self):
        self._write('{"moves": []}')
        with self.assertRaises(HistoryError):
            load_history(self.path)

    def test_save_then_load_restores_game(self):
        game = Game(self.path)
        for action in ("D3", "E3", "D3", "Vertical", "C4"):
            game.dispatch(action)
        board, history = game.board.copy(), list(game.history)
        game.dispatch("Save History")

        other = Game(self.path)
        other.dispatch("Load History")
        other.replay_to(other.history[-1].index)
        self.assertEqual(other.board, board)
        self.assertEqual(other.history, history)
        self.assertEqual(other.move_count, len(history))

    def test_save_writes_only_applied_moves(self):
        game = Game(self.path)
        game.dispatch("D3")
        game.dispatch("E3")
        game.replay_to(1)
        game.save_history()
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), ["(1) D3V"])

    def test_illegal_move_in_file_leaves_game_untouched(self):
        game = Game(self.path)
        game.dispatch("D3")
        board, history = game.board.copy(), list(game.history)

        self._write(json.dumps(["(1) D3V", "(2) D5V"]))
        with self.assertRaises(HistoryError):
            game.load_history()
        self.assertEqual(game.board, board)
        self.assertEqual(game.history, history)

    def test_malformed_file_leaves_game_untouched(self):
        game = Game(self.path)
        self._write(json.dumps(["(1) D3V", "bogus"]))
        with self.assertRaises(HistoryError):
            game.dispatch("Load History")
        self.assertEqual(game.board, Board())
        self.assertEqual(game.history, [])

    def test_failed_load_keeps_pending_choice(self):
        game = Game(self.path)
        for action in ("D3", "E3", "D3"):
            game.dispatch(action)
        selection = game.selection
        self.assertIsInstance(selection, AwaitingChoice)

        with self.assertRaises(HistoryError):
            game.dispatch("Load History")
        self.assertEqual(game.selection, selection)
        self.assertEqual(game.move_count, 2)

        game.dispatch("Vertical")
        self.assertEqual(str(game.history[-1]), "(3) D3V")

    def test_save_replaces_existing_file(self):
        self._write("stale contents")
        save_history(self.path, [MoveRecord(1, (2, 3), Axis.VERTICAL)])
        self.assertEqual(json.loads(self.path.read_text(encoding="utf-8")), ["(1) D3V"])
        self.assertEqual([p.name for p in self.path.parent.iterdir()], [self.path.name])

    def test_load_empty_history_resets(self):
        game = Game(self.path)
        game.dispatch("D3")
        self._write("[]")
        game.load_history()
        self.assertEqual(game.board, Board())
        self.assertEqual(game.move_count, 0)


if __name__ == "__main__":
    unittest.main()
