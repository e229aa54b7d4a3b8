"""Terminal display for tic-tac-toe boards."""

from __future__ import annotations

from game_search.game.tictactoe.state import TicTacToeState
from game_search.game.tictactoe.types import SIZE


def board_to_str(state: TicTacToeState) -> str:
    """Convert a board to a human-readable string.

    盤面を人間が読みやすい文字列に変換する。

    Example output:
          a b c
        1 X . .
        2 . O .
        3 . . .
    """
    lines = ["  " + " ".join(chr(ord("a") + c) for c in range(SIZE))]
    for r in range(SIZE):
        row = state.squares[r * SIZE:(r + 1) * SIZE]
        cells = " ".join("." if mark is None else str(mark) for mark in row)
        lines.append(f"{r + 1} {cells}")
    return "\n".join(lines)
