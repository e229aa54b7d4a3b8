"""Neural-network move evaluation and a greedy player built on it.

ニューラルネットワークによる評価関数と、それを使う1手読みプレイヤー。

ネットワークの重みの集団管理（遺伝的アルゴリズムなど）は外部の責務で、
ここでは weight_source() と fitness_sink() という関数の形でだけ扱う。
"""

from __future__ import annotations

from collections.abc import Callable

import torch
from torch import Tensor, nn

from game_search.engine.base import GreedyAI
from game_search.engine.evaluator import WinEvaluator
from game_search.game.protocol import GameMove, GameRole, GameState

# 局面と視点の参加者をネットワーク入力テンソルに変換する関数
Encoder = Callable[[GameState, GameRole], Tensor]
Weights = dict[str, Tensor]


def default_encode(state: GameState, role: GameRole) -> Tensor:
    """Use the state's own ``to_tensor_planes(perspective)``."""
    return state.to_tensor_planes(role)  # type: ignore[attr-defined]


class NetworkEvaluator:
    """Evaluator that rates positions with a value network.

    The network sees ``encode(state_after, role)`` and returns a value in
    [-1, 1] from ``role``'s point of view. Terminal transitions are delegated
    to :class:`WinEvaluator`.
    """

    def __init__(self, network: nn.Module, encode: Encoder = default_encode) -> None:
        self.network = network
        self.encode = encode
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

        device = next(self.network.parameters()).device
        tensor = self.encode(after, role).unsqueeze(0).to(device)
        self.network.eval()
        with torch.no_grad():  # 推論のみ（勾配計算不要）
            value = self.network(tensor)
        return float(value.item())


class NeuralGameAI(GreedyAI):
    """Greedy player whose weights come from (and are scored for) an outside population.

    対局開始時に weight_source() から重みを読み込み、
    対局終了時に適応度を fitness_sink() へ報告する。

    適応度: 勝ち → 100 - 手数（速い勝ちほど高い）、それ以外 → -100 + 手数
    """

    def __init__(
        self,
        network: nn.Module,
        encode: Encoder = default_encode,
        weight_source: Callable[[], Weights] | None = None,
        fitness_sink: Callable[[Weights, float], None] | None = None,
        debug: bool = False,
    ) -> None:
        super().__init__(NetworkEvaluator(network, encode), debug=debug)
        self.network = network
        self.weight_source = weight_source
        self.fitness_sink = fitness_sink
        self.last_fitness: float | None = None

    def on_game_start(self, initial_state: GameState, role: GameRole) -> None:
        if self.weight_source is not None:
            self.network.load_state_dict(self.weight_source())

    def on_game_end(self, final_state: GameState, role: GameRole) -> None:
        moves = final_state.move_count
        fitness = float(100 - moves if role in final_state.winners else -100 + moves)
        self.last_fitness = fitness
        if self.fitness_sink is not None:
            weights = {k: v.detach().clone() for k, v in self.network.state_dict().items()}
            self.fitness_sink(weights, fitness)
