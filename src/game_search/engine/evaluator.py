"""Move evaluators — score a transition from one role's point of view.

評価関数（ヒューリスティック）のインタフェースと標準実装。

rate(role, before, after, move, plies) は「role から見た」評価値を返す。
値が大きいほど role にとって良い。
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from game_search.engine.errors import EvaluationError, SearchError
from game_search.game.protocol import GameMove, GameRole, GameState

# 勝敗確定時の評価値。どんなヒューリスティック値よりも大きいこと。
WIN_SCORE = 1_000_000.0


class Evaluator(Protocol):
    """Rates a single transition ``before --move--> after`` for ``role``."""

    def rate(
        self,
        role: GameRole,
        before: GameState,
        after: GameState,
        move: GameMove,
        plies: int,
    ) -> float: ...


class WinEvaluator:
    """Scores only the game outcome; usable when no heuristic exists.

    終局結果だけを見る評価関数。ヒューリスティックがないゲーム向け。

    - role が勝者に含まれる → +(WIN_SCORE - plies)
    - 他の参加者が勝った → -(WIN_SCORE - plies)
    - 引き分け・終局前 → 0

    plies を差し引くことで「より速い勝ち」「より遅い負け」を優先する。
    """

    def rate(
        self,
        role: GameRole,
        before: GameState,
        after: GameState,
        move: GameMove,
        plies: int,
    ) -> float:
        if not after.is_terminal:
            return 0.0
        winners = after.winners
        if not winners:
            return 0.0  # 引き分け
        score = WIN_SCORE - plies
        return score if role in winners else -score


class FunctionEvaluator:
    """Adapts a plain ``evaluate(state) -> score`` function.

    ``evaluate`` scores a non-terminal state from the point of view of the role
    to move in that state. Terminal transitions are delegated to
    :class:`WinEvaluator` so proven results always outrank estimates.
    """

    def __init__(self, evaluate: Callable[[GameState], float]) -> None:
        self.evaluate = evaluate
        self._terminal = WinEvaluator()

    def rate(
        self,
        role: GameRole,
        before: GameState,
        after: GameState,
        move: GameMove,
        plies: int,
    ) -> float:
        if after.is_terminal:
            return self._terminal.rate(role, before, after, move, plies)
        score = float(self.evaluate(after))
        if after.current_role == role:
            return score
        # 2人零和ゲームなら相手視点の評価値は符号反転で変換できる
        if not role.has_opponent:
            raise ValueError(f"No defined perspective for role {role} in a multi-role game")
        return -score


def rate_move(
    evaluator: Evaluator,
    role: GameRole,
    before: GameState,
    after: GameState,
    move: GameMove,
    plies: int,
) -> float:
    """Call ``evaluator.rate`` and wrap any failure in :class:`EvaluationError`."""
    try:
        return evaluator.rate(role, before, after, move, plies)
    except SearchError:
        raise
    except Exception as exc:
        raise EvaluationError(role, move, before) from exc
