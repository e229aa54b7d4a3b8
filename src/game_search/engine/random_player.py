"""Random player — selects a legal move uniformly at random.

ランダムプレイヤー: 合法手の中からランダムに手を選ぶ。

用途:
- ゲーム実装の動作確認（ランダム対局が必ず終局するか）
- ベースラインとの対戦（ランダムに勝てないAIは弱すぎる）
"""

from __future__ import annotations

import random

from game_search.engine.base import GameAI
from game_search.engine.clock import DeadlineClock
from game_search.game.protocol import GameMove, GameState


def random_move(state: GameState, rng: random.Random | None = None) -> GameMove:
    """Return a random legal move.

    合法手の中から一様ランダムで1手を返す。
    合法手がない場合は ValueError を送出する（終局局面では呼ばれないはず）。
    """
    moves = state.legal_moves()
    if not moves:
        raise ValueError("No legal moves available")
    return (rng or random).choice(moves)


class RandomAI(GameAI):
    """Baseline strategy; ignores the time budget."""

    def __init__(self, seed: int | None = None) -> None:
        self.rng = random.Random(seed)

    def _search(self, state: GameState, clock: DeadlineClock) -> GameMove | None:
        return random_move(state, self.rng)
