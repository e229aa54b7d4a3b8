"""Shared move-selection lifecycle for all search strategies.

すべての探索戦略（AlphaBeta, MCTS, ランダム, 評価関数ベース）の共通骨格。

select_move() が前提条件をチェックし、締め切り時計を作ってから
各戦略の _search() を呼び出す。戦略側は「時計を見ながら最善手を探す」ことだけに集中できる。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from game_search.engine.clock import DeadlineClock
from game_search.engine.errors import (
    NoLegalMovesError,
    NoMoveComputedError,
    SearchError,
    TerminalStateError,
)
from game_search.engine.evaluator import Evaluator, WinEvaluator, rate_move
from game_search.game.protocol import GameMove, GameRole, GameState

logger = logging.getLogger(__name__)


class GameAI(ABC):
    """Template for a move-selecting strategy.

    Subclasses implement :meth:`_search`; they may override the game
    lifecycle hooks to reset or learn between games.
    """

    # 1回の select_move() ごとに新しい時計を作る（テストでは差し替え可能）
    clock_factory: Callable[[float], DeadlineClock] = DeadlineClock

    def on_game_start(self, initial_state: GameState, role: GameRole) -> None:
        """対局開始時に呼ばれる（デフォルトは何もしない）。"""

    def on_game_end(self, final_state: GameState, role: GameRole) -> None:
        """対局終了時に呼ばれる（デフォルトは何もしない）。"""

    def select_move(self, state: GameState, soft_max_time_ms: float) -> GameMove:
        """Choose a legal move for ``state.current_role``.

        ``soft_max_time_ms`` is advisory: the strategy stops starting new work
        once it has elapsed, but a unit of work already in progress finishes.

        Raises:
            TerminalStateError: the game is already over.
            NoLegalMovesError: a non-terminal state offers no moves.
            NoMoveComputedError: the budget was too small to rate any move.
        """
        if state.is_terminal:
            raise TerminalStateError(f"Cannot select a move: the game is over ({state!r})")
        legal = state.legal_moves()
        if not legal:
            raise NoLegalMovesError(f"No legal moves for {state.current_role} in {state!r}")

        clock = self.clock_factory(soft_max_time_ms)
        move = self._search(state, clock)
        if move is None:
            raise NoMoveComputedError(
                f"{type(self).__name__} could not compute a move for "
                f"{state.current_role} within {soft_max_time_ms} ms"
            )
        if move not in legal:
            raise SearchError(f"{type(self).__name__} returned illegal move {move}")

        logger.debug(
            "%s selected %s for %s in %.1f ms",
            type(self).__name__,
            move,
            state.current_role,
            clock.elapsed_ms,
        )
        return move

    @abstractmethod
    def _search(self, state: GameState, clock: DeadlineClock) -> GameMove | None:
        """Strategy-specific search; ``None`` means no move could be computed."""


class GreedyAI(GameAI):
    """One-ply search: rate every legal move with an evaluator, keep the best.

    1手先だけを評価関数で読む戦略。
    同点の場合は先に列挙された手を優先する。
    時間切れになっても、少なくとも1手は評価してから返す。
    """

    def __init__(self, evaluator: Evaluator | None = None, debug: bool = False) -> None:
        self.evaluator = evaluator if evaluator is not None else WinEvaluator()
        self.debug = debug

    def _search(self, state: GameState, clock: DeadlineClock) -> GameMove | None:
        best_move: GameMove | None = None
        best_rating = float("-inf")

        for move in state.legal_moves():
            if best_move is not None and not clock.is_running:
                break
            rating = self._rate(state, move)
            if self.debug:
                logger.info("First layer: %s -> %s", move, rating)
            if best_move is None or rating > best_rating:
                best_rating = rating
                best_move = move

        return best_move

    def _rate(self, state: GameState, move: GameMove) -> float:
        after = state.spawn_child(move)
        return rate_move(self.evaluator, state.current_role, state, after, move, 0)
