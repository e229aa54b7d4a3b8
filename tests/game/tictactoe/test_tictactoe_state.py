"""Tests for TicTacToeState."""

import pytest

from game_search.game.protocol import GameMove, GameRole, GameState
from game_search.game.tictactoe.state import TicTacToeState
from game_search.game.tictactoe.types import Cell, Mark


class TestProtocolCompliance:
    def test_implements_game_state(self) -> None:
        assert isinstance(TicTacToeState(), GameState)

    def test_mark_is_role(self) -> None:
        assert isinstance(Mark.X, GameRole)
        assert Mark.X.has_opponent
        assert Mark.X.next_role == Mark.O
        assert Mark.O.next_role == Mark.X

    def test_cell_is_move(self) -> None:
        assert isinstance(Cell(0, 0), GameMove)
        assert Cell(1, 2) == Cell(1, 2)
        assert hash(Cell(1, 2)) == hash(Cell(1, 2))
        assert str(Cell(1, 2)) == "c2"


class TestInitialState:
    def test_x_starts(self) -> None:
        assert TicTacToeState().current_role == Mark.X

    def test_not_terminal(self) -> None:
        state = TicTacToeState()
        assert not state.is_terminal
        assert state.winners == frozenset()

    def test_nine_legal_moves_in_order(self) -> None:
        moves = TicTacToeState().legal_moves()
        assert moves == [Cell.from_index(i) for i in range(9)]


class TestSpawnChild:
    def test_role_alternates(self) -> None:
        state = TicTacToeState().spawn_child(Cell(1, 1))
        assert state.current_role == Mark.O
        assert state.move_count == 1

    def test_does_not_mutate(self) -> None:
        state = TicTacToeState()
        state.spawn_child(Cell(0, 0))
        assert state == TicTacToeState()
        assert state.move_count == 0

    def test_is_pure(self) -> None:
        state = TicTacToeState()
        assert state.spawn_child(Cell(2, 0)) == state.spawn_child(Cell(2, 0))

    def test_occupied_cell_rejected(self) -> None:
        state = TicTacToeState().spawn_child(Cell(0, 0))
        with pytest.raises(ValueError):
            state.spawn_child(Cell(0, 0))


class TestTerminalConditions:
    def test_row_win(self) -> None:
        state = TicTacToeState.from_rows("XXX", "OO.", "...")
        assert state.is_terminal
        assert state.winners == frozenset({Mark.X})
        assert state.legal_moves() == []

    def test_diagonal_win(self) -> None:
        state = TicTacToeState.from_rows("OXX", "XO.", "X.O")
        assert state.winners == frozenset({Mark.O})

    def test_full_board_draw(self) -> None:
        state = TicTacToeState.from_rows("XOX", "XOO", "OXX")
        assert state.is_terminal
        assert state.winners == frozenset()

    def test_from_rows_sets_turn(self) -> None:
        assert TicTacToeState.from_rows("X..", "...", "...").current_role == Mark.O
        assert TicTacToeState.from_rows("X..", ".O.", "...").current_role == Mark.X

    def test_from_rows_rejects_unreachable(self) -> None:
        with pytest.raises(ValueError):
            TicTacToeState.from_rows("XXX", "...", "...")


class TestTensorPlanes:
    def test_shape(self) -> None:
        planes = TicTacToeState().to_tensor_planes()
        assert planes.shape == (3, 3, 3)

    def test_perspective(self) -> None:
        state = TicTacToeState.from_rows("X..", "...", "...")
        # O to move; from X's point of view X is "own"
        planes = state.to_tensor_planes(Mark.X)
        assert planes[0, 0, 0] == 1.0
        assert planes[2].sum() == 0.0
        planes = state.to_tensor_planes()
        assert planes[1, 0, 0] == 1.0
        assert planes[2].sum() == 9.0
