"""Minimax search with alpha-beta pruning for two-player games."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from game_search.engine.base import GameAI
from game_search.engine.clock import DeadlineClock
from game_search.engine.errors import NotTwoPlayerError
from game_search.engine.evaluator import Evaluator, WinEvaluator, rate_move
from game_search.game.protocol import GameMove, GameRole, GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlphaBetaConfig:
    """Configuration for alpha-beta search.

    depth: 候補手のさらに先を何手読むか。0 なら候補手の直後の局面を評価する。
           None は無制限（終局か時間切れまで読む）。
    debug: True なら1手目ごとの評価値をログに出す（探索結果には影響しない）。
    """

    depth: int | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        if self.depth is not None and self.depth < 0:
            raise ValueError(f"depth must be >= 0 or None, got {self.depth}")


class AlphaBeta(GameAI):
    """Depth- and time-bounded alpha-beta search.

    αβ探索（ミニマックス法の最適化版）。

    ミニマックス法とは:
    自分の手番では評価値を最大化し、相手の手番では最小化すると仮定して
    ゲーム木を読む手法。評価は常に「探索しているプレイヤー」の視点で行う。

    αβ枝刈りとは:
    探索不要な枝を切り捨て、ミニマックスと同じ結果をより速く得る手法。
    alpha: 最大化側が保証できる最低スコア
    beta:  最小化側が保証できる最高スコア
    fail-soft なので、返り値はウィンドウの外側になることもある。

    The default evaluator only looks at game outcomes, which is suitable for
    small games (e.g. tic-tac-toe) searched to the end.
    """

    def __init__(
        self,
        evaluator: Evaluator | None = None,
        config: AlphaBetaConfig | None = None,
    ) -> None:
        self.evaluator = evaluator if evaluator is not None else WinEvaluator()
        self.config = config or AlphaBetaConfig()
        # 直前の探索で展開したノード数（診断用）
        self.nodes_visited = 0

    def _search(self, state: GameState, clock: DeadlineClock) -> GameMove | None:
        role = state.current_role
        if not role.has_opponent:
            raise NotTwoPlayerError("Alpha beta can only operate on two-player games!")

        self.nodes_visited = 0
        best_rating = float("-inf")
        best_move: GameMove | None = None

        # ルートの合法手はすべて評価する（時間切れでも葉の評価だけは行われる）
        for move in state.legal_moves():
            rating = self.rate_root_move(state, move, clock)
            if self.config.debug:
                logger.info("First layer: %s -> %s", move, rating)

            # 同点なら先に列挙された手を残す
            if best_move is None or rating > best_rating:
                best_rating = rating
                best_move = move

        logger.debug(
            "alpha-beta visited %d nodes, best %s -> %s",
            self.nodes_visited,
            best_move,
            best_rating,
        )
        return best_move

    def rate_root_move(
        self,
        state: GameState,
        move: GameMove,
        clock: DeadlineClock | None = None,
    ) -> float:
        """Rating of ``move`` for the role to move, searched with a full window."""
        if clock is None:
            clock = DeadlineClock(float("inf"))
        return self._alpha_beta(
            state.current_role,
            state,
            move,
            self.config.depth,
            0,
            float("-inf"),
            float("inf"),
            clock,
        )

    def _alpha_beta(
        self,
        role: GameRole,
        before: GameState,
        move: GameMove,
        depth: int | None,
        plies: int,
        alpha: float,
        beta: float,
        clock: DeadlineClock,
    ) -> float:
        """Rate ``move`` played in ``before`` from ``role``'s point of view."""
        after = before.spawn_child(move)
        self.nodes_visited += 1

        # 葉ノード: 時間切れ・深さ0・終局なら評価関数の値を返す
        if not clock.is_running or depth == 0 or after.is_terminal:
            return rate_move(self.evaluator, role, before, after, move, plies)

        maximizing = after.current_role == role
        best_rating = alpha if maximizing else beta
        child_depth = None if depth is None else depth - 1

        rated = False
        for child_move in after.legal_moves():
            if not clock.is_running:
                break  # 時間切れ: ここまでの最善値を返す
            rated = True

            if maximizing:
                rating = self._alpha_beta(
                    role, after, child_move, child_depth, plies + 1, best_rating, beta, clock
                )
                if rating > best_rating:
                    best_rating = rating
                    if best_rating >= beta:
                        break  # βカットオフ
            else:
                rating = self._alpha_beta(
                    role, after, child_move, child_depth, plies + 1, alpha, best_rating, clock
                )
                if rating < best_rating:
                    best_rating = rating
                    if best_rating <= alpha:
                        break  # αカットオフ

        if not rated and not clock.is_running:
            # 子を1つも読めずに時間切れ: この局面を葉として評価する
            return rate_move(self.evaluator, role, before, after, move, plies)

        return best_rating


def minimax_value(
    evaluator: Evaluator,
    role: GameRole,
    before: GameState,
    move: GameMove,
    depth: int | None = None,
    plies: int = 0,
) -> float:
    """Plain minimax rating of ``move`` without pruning or a deadline.

    枝刈りなしのミニマックス法。AlphaBeta と同じ評価規約で全ノードを読む。
    αβ探索の結果が変わらないことを確かめるための基準実装。
    """
    after = before.spawn_child(move)
    if depth == 0 or after.is_terminal:
        return rate_move(evaluator, role, before, after, move, plies)

    child_depth = None if depth is None else depth - 1
    ratings = [
        minimax_value(evaluator, role, after, child_move, child_depth, plies + 1)
        for child_move in after.legal_moves()
    ]
    if after.current_role == role:
        return max(ratings, default=float("-inf"))
    return min(ratings, default=float("inf"))
