"""Exceptions raised by the search engines.

探索エンジンが送出する例外。
時間切れはエラーではない（その時点の最善手を返す）ので、ここには含まれない。
"""

from __future__ import annotations

from typing import Any


class SearchError(Exception):
    """Base class for all search failures."""


class TerminalStateError(SearchError, ValueError):
    """A move was requested for a position where the game is already over."""


class NoLegalMovesError(SearchError, ValueError):
    """The root position has no legal moves to choose from."""


class NotTwoPlayerError(SearchError, ValueError):
    """The algorithm only supports roles with exactly one opponent."""


class NoMoveComputedError(SearchError, RuntimeError):
    """The time budget ran out before a single move could be evaluated."""


class EvaluationError(SearchError, RuntimeError):
    """An evaluator failed while rating a move.

    評価関数の失敗は握りつぶさない（誤った評価値は枝刈りを壊すため）。
    どの手番・手・局面で失敗したかを属性として保持する。
    """

    def __init__(self, role: Any, move: Any, state: Any) -> None:
        super().__init__(f"An error occurred while rating move {move} for role {role}")
        self.role = role
        self.move = move
        self.state = state
