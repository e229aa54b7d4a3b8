"""Types and constants for tic-tac-toe (三目並べ).

三目並べの基本型・定数定義。
盤面は 3列 × 3行（9マス）で、X が先手、O が後手。
"""

from __future__ import annotations

from enum import Enum, unique
from typing import NamedTuple

# 盤面のサイズ: 3列 × 3行
SIZE = 3

# 勝ちになる3マスの並び（横3・縦3・斜め2 の計8通り）
LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # 横
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # 縦
    (0, 4, 8), (2, 4, 6),             # 斜め
)


@unique
class Mark(Enum):
    """Player marks. X always moves first.

    GameRole プロトコルを実装する。2人対戦なので相手は常にちょうど1人。
    """

    X = "X"
    O = "O"  # noqa: E741

    @property
    def opponent(self) -> Mark:
        """相手の記号を返す。X↔O の切り替え。"""
        return Mark.O if self is Mark.X else Mark.X

    @property
    def has_opponent(self) -> bool:
        return True

    @property
    def next_role(self) -> Mark:
        return self.opponent

    def __str__(self) -> str:
        return self.value


class Cell(NamedTuple):
    """A move: place the current mark at (row, col).

    GameMove プロトコルを実装する（NamedTuple なので値比較・ハッシュ可能）。
    """

    row: int
    col: int

    @property
    def index(self) -> int:
        """盤面配列上のインデックス（row * SIZE + col）。"""
        return self.row * SIZE + self.col

    @classmethod
    def from_index(cls, index: int) -> Cell:
        return cls(index // SIZE, index % SIZE)

    def __str__(self) -> str:
        # 列: a/b/c（アルファベット）、行: 1/2/3（数字）
        return f"{chr(ord('a') + self.col)}{self.row + 1}"
