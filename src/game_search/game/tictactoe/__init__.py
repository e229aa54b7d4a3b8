"""三目並べ (tic-tac-toe) — 3x3 reference game for the search engines."""

from game_search.game.tictactoe.display import board_to_str
from game_search.game.tictactoe.state import TicTacToeState
from game_search.game.tictactoe.types import LINES, SIZE, Cell, Mark

__all__ = [
    "Cell",
    "LINES",
    "Mark",
    "SIZE",
    "TicTacToeState",
    "board_to_str",
]
