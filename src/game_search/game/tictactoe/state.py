"""GameState implementation for tic-tac-toe.

三目並べの対局状態（ゲームツリーのノード）。
盤面はタプルで保持し、spawn_child() は常に新しい状態を返す。
"""

from __future__ import annotations

from dataclasses import dataclass

import torch

from game_search.game.tictactoe.types import LINES, SIZE, Cell, Mark

_EMPTY_BOARD: tuple[Mark | None, ...] = (None,) * (SIZE * SIZE)


@dataclass(frozen=True)  # イミュータブル: spawn_child() は新しいオブジェクトを返す
class TicTacToeState:
    """Immutable game state for tic-tac-toe.

    三目並べの対局状態。GameState プロトコルを実装する。

    Terminal conditions（終局条件）:
    1. 縦・横・斜めのいずれかに同じ記号が3つ並んだ → その記号の勝ち
    2. 盤面が埋まった → 引き分け（winners は空集合）
    """

    squares: tuple[Mark | None, ...] = _EMPTY_BOARD
    _current_role: Mark = Mark.X  # X から開始
    _move_count: int = 0

    @classmethod
    def from_rows(cls, *rows: str) -> TicTacToeState:
        """Build a state from rows such as ``"X.O"`` (``.`` = empty).

        手番は盤上の記号の数から決める（X と O が同数なら X の番）。
        テストで任意の局面を作るためのヘルパー。
        """
        if len(rows) != SIZE or any(len(row) != SIZE for row in rows):
            raise ValueError(f"Expected {SIZE} rows of {SIZE} cells: {rows!r}")
        squares = tuple(
            None if ch == "." else Mark(ch) for row in rows for ch in row
        )
        xs = squares.count(Mark.X)
        os_ = squares.count(Mark.O)
        if xs - os_ not in (0, 1):
            raise ValueError(f"Unreachable position: {xs} X vs {os_} O")
        return cls(
            squares=squares,
            _current_role=Mark.X if xs == os_ else Mark.O,
            _move_count=xs + os_,
        )

    @property
    def current_role(self) -> Mark:
        return self._current_role

    @property
    def move_count(self) -> int:
        return self._move_count

    @property
    def line_winner(self) -> Mark | None:
        """3つ並んだ記号を返す。並びがなければ None。"""
        for a, b, c in LINES:
            mark = self.squares[a]
            if mark is not None and mark == self.squares[b] == self.squares[c]:
                return mark
        return None

    @property
    def is_terminal(self) -> bool:
        return self.line_winner is not None or None not in self.squares

    @property
    def winners(self) -> frozenset[Mark]:
        winner = self.line_winner
        if winner is None:
            return frozenset()  # 対局中または引き分け
        return frozenset({winner})

    def legal_moves(self) -> list[Cell]:
        """空きマスを左上から順に返す。終局後は空リスト。"""
        if self.line_winner is not None:
            return []
        return [Cell.from_index(i) for i, mark in enumerate(self.squares) if mark is None]

    def spawn_child(self, move: Cell) -> TicTacToeState:
        """手を適用して新しい対局状態を返す。

        元の状態は変更しない。手番は自動的に切り替わる。
        """
        if self.line_winner is not None:
            raise ValueError(f"Game is over, cannot play {move}")
        if not (0 <= move.row < SIZE and 0 <= move.col < SIZE):
            raise ValueError(f"Cell out of range: {move!r}")
        if self.squares[move.index] is not None:
            raise ValueError(f"Cell {move} is already occupied")
        squares = list(self.squares)
        squares[move.index] = self._current_role
        return TicTacToeState(
            squares=tuple(squares),
            _current_role=self._current_role.opponent,  # 手番交代
            _move_count=self._move_count + 1,
        )

    def to_tensor_planes(self, perspective: Mark | None = None) -> torch.Tensor:
        """Convert to tensor planes for neural network input.

        局面をニューラルネットワーク入力用テンソルに変換する。

        Planes（チャンネル）の構成（合計3チャンネル）:
        ch.0: perspective の記号
        ch.1: 相手の記号
        ch.2: 手番インジケータ（perspective の番なら全1）

        perspective を省略すると現在の手番の視点になる。
        """
        me = self._current_role if perspective is None else perspective
        planes = torch.zeros(3, SIZE, SIZE)
        for idx, mark in enumerate(self.squares):
            if mark is None:
                continue
            r, c = divmod(idx, SIZE)
            planes[0 if mark == me else 1, r, c] = 1.0
        if self._current_role == me:
            planes[2, :, :] = 1.0
        return planes
