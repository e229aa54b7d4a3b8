"""Tests for tic-tac-toe display."""

from game_search.game.tictactoe.display import board_to_str
from game_search.game.tictactoe.state import TicTacToeState


def test_empty_board() -> None:
    assert board_to_str(TicTacToeState()) == "  a b c\n1 . . .\n2 . . .\n3 . . ."


def test_marks_rendered() -> None:
    state = TicTacToeState.from_rows("X..", ".O.", "..X")
    lines = board_to_str(state).splitlines()
    assert lines[1] == "1 X . ."
    assert lines[2] == "2 . O ."
    assert lines[3] == "3 . . X"
