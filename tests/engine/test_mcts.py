"""Tests for MCTS search."""

from __future__ import annotations

import math

import pytest

from game_search.engine.errors import TerminalStateError
from game_search.engine.mcts import (
    MCTS,
    MCTSConfig,
    MCTSNode,
    outcome_reward,
    tree_to_dict,
)
from game_search.game.tictactoe.state import TicTacToeState
from game_search.game.tictactoe.types import Cell, Mark

# 反復回数で止めるので、時間予算は十分に大きくしておく
BUDGET_MS = 60_000


def _mcts(iterations: int, seed: int = 42, **kwargs: object) -> MCTS:
    return MCTS(MCTSConfig(seed=seed, max_iterations=iterations, **kwargs))  # type: ignore[arg-type]


class TestMCTSNode:
    def test_initial_mean_reward(self) -> None:
        node = MCTSNode(state=TicTacToeState())
        assert node.mean_reward == 0.0
        assert node.move is None
        assert node.role == Mark.X
        assert node.perspective == Mark.X

    def test_mean_reward_after_visits(self) -> None:
        node = MCTSNode(state=TicTacToeState(), visit_count=4, total_reward=2.0)
        assert node.mean_reward == 0.5

    def test_child_perspective_is_mover(self) -> None:
        state = TicTacToeState()
        child = MCTSNode(state=state.spawn_child(Cell(0, 0)), move=Cell(0, 0), mover=Mark.X)
        assert child.role == Mark.O
        assert child.perspective == Mark.X

    def test_uct_score(self) -> None:
        node = MCTSNode(state=TicTacToeState(), visit_count=2, total_reward=1.0)
        expected = 0.5 + 1.5 * math.sqrt(math.log(10) / 2)
        assert node.uct_score(10, 1.5) == pytest.approx(expected)

    def test_most_visited_ties_keep_first(self) -> None:
        root = MCTSNode(state=TicTacToeState())
        for i, visits in enumerate([3, 5, 5, 1]):
            move = Cell.from_index(i)
            root.children[move] = MCTSNode(
                state=root.state.spawn_child(move), move=move, mover=Mark.X, visit_count=visits
            )
        best = root.most_visited_child()
        assert best is not None
        assert best.move == Cell(0, 1)

    def test_pending_moves_lazy(self) -> None:
        node = MCTSNode(state=TicTacToeState())
        assert node.untried_moves is None
        assert len(node.pending_moves()) == 9


class TestOutcomeReward:
    def test_win_loss_draw(self) -> None:
        assert outcome_reward(frozenset({Mark.X}), Mark.X) == 1.0
        assert outcome_reward(frozenset({Mark.X}), Mark.O) == 0.0
        assert outcome_reward(frozenset(), Mark.X) == 0.5
        assert outcome_reward(None, Mark.O) == 0.5

    def test_shared_win(self) -> None:
        assert outcome_reward(frozenset({Mark.X, Mark.O}), Mark.O) == 0.5


class TestMCTSSearch:
    def test_returns_legal_move(self) -> None:
        state = TicTacToeState()
        assert _mcts(200).select_move(state, BUDGET_MS) in state.legal_moves()

    def test_finds_win_in_one(self) -> None:
        state = TicTacToeState.from_rows("XX.", "OO.", "...")
        assert _mcts(1000).select_move(state, BUDGET_MS) == Cell(0, 2)

    def test_blocks_opponent_win(self) -> None:
        state = TicTacToeState.from_rows("X..", "XO.", "...")
        assert _mcts(2000).select_move(state, BUDGET_MS) == Cell(2, 0)

    def test_root_statistics(self) -> None:
        ai = _mcts(300)
        ai.select_move(TicTacToeState(), BUDGET_MS)
        root = ai.last_root
        assert root is not None
        assert root.visit_count == 300
        # 各反復はルートの子をちょうど1つ通る
        assert sum(child.visit_count for child in root.children.values()) == 300
        assert len(root.children) == 9

    def test_terminal_state_rejected(self) -> None:
        state = TicTacToeState.from_rows("XXX", "OO.", "...")
        with pytest.raises(TerminalStateError):
            _mcts(10).select_move(state, BUDGET_MS)


class TestMCTSDeterminism:
    def test_same_seed_same_result(self) -> None:
        state = TicTacToeState.from_rows("X..", "...", "...")
        first, second = _mcts(400, seed=7), _mcts(400, seed=7)
        assert first.select_move(state, BUDGET_MS) == second.select_move(state, BUDGET_MS)
        assert first.last_root is not None and second.last_root is not None
        visits_a = {m: c.visit_count for m, c in first.last_root.children.items()}
        visits_b = {m: c.visit_count for m, c in second.last_root.children.items()}
        assert visits_a == visits_b

    def test_longer_search_is_a_continuation(self) -> None:
        state = TicTacToeState()
        short, long = _mcts(250, seed=3), _mcts(600, seed=3)
        short.select_move(state, BUDGET_MS)
        long.select_move(state, BUDGET_MS)
        assert short.last_root is not None and long.last_root is not None

        best = short.last_root.most_visited_child()
        assert best is not None
        assert long.last_root.children[best.move].visit_count >= best.visit_count
        for move, child in short.last_root.children.items():
            assert long.last_root.children[move].visit_count >= child.visit_count


class TestTreeObserver:
    def test_observer_receives_tree(self) -> None:
        class Recorder:
            def __init__(self) -> None:
                self.root: MCTSNode | None = None

            def set_tree(self, root: MCTSNode) -> None:
                self.root = root

        recorder = Recorder()
        ai = MCTS(MCTSConfig(seed=1, max_iterations=50), observer=recorder)
        ai.select_move(TicTacToeState(), BUDGET_MS)
        assert recorder.root is ai.last_root

    def test_tree_to_dict(self) -> None:
        ai = _mcts(60)
        ai.select_move(TicTacToeState(), BUDGET_MS)
        assert ai.last_root is not None
        snapshot = tree_to_dict(ai.last_root, max_depth=1)
        assert snapshot["move"] is None
        assert snapshot["visits"] == 60
        assert len(snapshot["children"]) == 9
        assert all(child["children"] == [] for child in snapshot["children"])
