"""Monte Carlo Tree Search (MCTS) with UCT selection and random rollouts."""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from game_search.engine.base import GameAI
from game_search.engine.clock import DeadlineClock
from game_search.game.protocol import GameMove, GameRole, GameState

logger = logging.getLogger(__name__)

# ロールアウト方策: 局面と乱数生成器から次の手を選ぶ関数
RolloutPolicy = Callable[[GameState, random.Random], GameMove]


@dataclass(eq=False)  # ノードは同一性で区別する
class MCTSNode:
    """A node in the MCTS tree.

    MCTSの探索木の1ノード。各ノードは1つの局面に対応する。

    state:         このノードの局面（他と共有してよい、イミュータブル）
    move (a):      親からこのノードに至った手（ルートは None）
    mover:         move を指した参加者（ルートは None）
    role:          このノードで手番の参加者
    visit_count (N):  このノードが訪問された回数
    total_reward (W): このノードを通じたロールアウト結果の合計（mover 視点）
    children:      試した手 → 子ノード（挿入順を保持する）
    """

    state: GameState
    move: GameMove | None = None
    mover: GameRole | None = None
    visit_count: int = 0
    total_reward: float = 0.0
    children: dict[GameMove, MCTSNode] = field(default_factory=dict)
    untried_moves: list[GameMove] | None = None

    @property
    def role(self) -> GameRole:
        return self.state.current_role

    @property
    def perspective(self) -> GameRole:
        """報酬を数える視点。ルートは自分の手番、それ以外は手を指した側。"""
        return self.role if self.mover is None else self.mover

    @property
    def mean_reward(self) -> float:
        """Average reward (W/N), 0.0 before the first visit."""
        if self.visit_count == 0:
            return 0.0
        return self.total_reward / self.visit_count

    def pending_moves(self) -> list[GameMove]:
        """Legal moves that have no child yet (computed on first use)."""
        if self.untried_moves is None:
            self.untried_moves = [] if self.state.is_terminal else list(self.state.legal_moves())
        return self.untried_moves

    @property
    def is_leaf(self) -> bool:
        """終局、または子ノードが1つもない（合法手がない）ノード。"""
        return self.state.is_terminal or (not self.children and not self.pending_moves())

    def uct_score(self, parent_visits: int, exploration: float) -> float:
        """UCT = mean + c * sqrt(ln(N_parent) / N_child)."""
        return self.mean_reward + exploration * math.sqrt(
            math.log(parent_visits) / self.visit_count
        )

    def select_child(self, exploration: float) -> MCTSNode:
        """Child with the highest UCT score (first inserted wins ties)."""
        best_child: MCTSNode | None = None
        best_score = float("-inf")
        for child in self.children.values():
            score = child.uct_score(self.visit_count, exploration)
            if best_child is None or score > best_score:
                best_score = score
                best_child = child
        assert best_child is not None
        return best_child

    def most_visited_child(self) -> MCTSNode | None:
        """Child with the highest visit count (first inserted wins ties)."""
        if not self.children:
            return None
        return max(self.children.values(), key=lambda child: child.visit_count)


@dataclass(frozen=True)
class MCTSConfig:
    """Configuration for MCTS search."""

    exploration: float = math.sqrt(2)  # 探索と活用のバランス係数（大きいほど探索重視）
    seed: int | None = None  # 乱数シード（テストで結果を再現するため）
    max_rollout_plies: int = 1000  # ロールアウトの最大手数（超えたら引き分け扱い）
    max_iterations: int | None = None  # 反復回数の上限（None なら時間切れまで）
    debug: bool = False


class TreeObserver(Protocol):
    """Read-only consumer of the finished search tree (e.g. a tree plotter)."""

    def set_tree(self, root: MCTSNode) -> None: ...


def uniform_rollout_policy(state: GameState, rng: random.Random) -> GameMove:
    """合法手から一様ランダムに1手を選ぶ（標準のロールアウト方策）。"""
    return rng.choice(state.legal_moves())


def outcome_reward(winners: frozenset[GameRole] | None, role: GameRole) -> float:
    """Reward of a finished rollout for ``role``.

    勝ち = 1（同着なら勝者数で等分）、負け = 0、引き分け = 0.5。
    winners が None のときは手数上限で打ち切った対局（引き分け扱い）。
    """
    if not winners:
        return 0.5
    if role in winners:
        return 1.0 / len(winners)
    return 0.0


class MCTS(GameAI):
    """Monte Carlo Tree Search without a domain-specific heuristic.

    モンテカルロ木探索。評価関数を必要としないので、どんなゲームにも使える。

    アルゴリズムの4ステップ（時間切れまで繰り返す）:
    1. 選択 (Selection):    UCT スコアで子ノードをたどる
    2. 展開 (Expansion):    未試行の手を1つ選んで子ノードを追加
    3. シミュレーション (Rollout): ランダムに終局まで指す（木には追加しない）
    4. 逆伝播 (Backpropagation): 結果を根ノードまで伝える

    最終的な手は「訪問回数が最大の子」を選ぶ（平均報酬より安定するため）。
    """

    def __init__(
        self,
        config: MCTSConfig | None = None,
        rollout_policy: RolloutPolicy = uniform_rollout_policy,
        observer: TreeObserver | None = None,
    ) -> None:
        self.config = config or MCTSConfig()
        self.rollout_policy = rollout_policy
        self.observer = observer
        self.rng = random.Random(self.config.seed)
        # 直前の探索の根ノード（診断用）
        self.last_root: MCTSNode | None = None

    def _search(self, state: GameState, clock: DeadlineClock) -> GameMove | None:
        root = MCTSNode(state=state)
        iterations = 0
        limit = self.config.max_iterations

        while clock.is_running and (limit is None or iterations < limit):
            self.iterate(root)
            iterations += 1

        self.last_root = root
        if self.observer is not None:
            self.observer.set_tree(root)

        if self.config.debug:
            for child in root.children.values():
                logger.info(
                    "First layer: %s -> visits=%d mean=%.3f",
                    child.move,
                    child.visit_count,
                    child.mean_reward,
                )
        logger.debug("MCTS ran %d iterations in %.1f ms", iterations, clock.elapsed_ms)

        best = root.most_visited_child()
        return None if best is None else best.move

    def iterate(self, root: MCTSNode) -> None:
        """Run one selection → expansion → rollout → backpropagation cycle."""
        path = [root]
        node = root

        # 1. 選択: 全ての手を試し終えたノードは UCT で子をたどる
        while not node.is_leaf and not node.pending_moves():
            node = node.select_child(self.config.exploration)
            path.append(node)

        # 2. 展開: 未試行の手を1つ選んで子ノードを作る
        pending = node.pending_moves()
        if pending:
            move = pending.pop(self.rng.randrange(len(pending)))
            child = MCTSNode(
                state=node.state.spawn_child(move),
                move=move,
                mover=node.role,
            )
            node.children[move] = child
            node = child
            path.append(node)

        # 3. シミュレーション
        winners = self.rollout(node.state)

        # 4. 逆伝播: 各ノードの視点に変換して報酬を加算
        for visited in path:
            visited.visit_count += 1
            visited.total_reward += outcome_reward(winners, visited.perspective)

    def rollout(self, state: GameState) -> frozenset[GameRole] | None:
        """Play random moves until the game ends; ``None`` means the ply cap was hit.

        木にはノードを追加しない使い捨てのプレイアウト。
        合法手がなくなった場合もそこで打ち切る。
        """
        for _ in range(self.config.max_rollout_plies):
            if state.is_terminal:
                return state.winners
            if not state.legal_moves():
                break
            state = state.spawn_child(self.rollout_policy(state, self.rng))
        if state.is_terminal:
            return state.winners
        return None


def tree_to_dict(node: MCTSNode, max_depth: int | None = None) -> dict[str, Any]:
    """Snapshot a (sub)tree as plain dicts for observers and debugging.

    探索木を辞書に変換する（表示・デバッグ用、木は変更しない）。
    """
    children: list[dict[str, Any]] = []
    if max_depth is None or max_depth > 0:
        next_depth = None if max_depth is None else max_depth - 1
        children = [tree_to_dict(child, next_depth) for child in node.children.values()]
    return {
        "move": None if node.move is None else str(node.move),
        "role": str(node.role),
        "visits": node.visit_count,
        "mean_reward": node.mean_reward,
        "children": children,
    }
