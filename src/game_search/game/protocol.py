"""GameState / GameMove / GameRole protocols — all games implement these.

ゲームの共通インタフェース（プロトコル）。

三目並べ・その他のゲームがこのプロトコルを実装することで、
αβ探索や MCTS などのエンジンがゲームに依存せず動作できる。
継承は不要で、必要な属性・メソッドを持っていれば良い（ダックタイピング）。
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class GameMove(Protocol):
    """An opaque, hashable identity for a single transition.

    1手を表す不透明な値。値による等価比較・ハッシュ化ができ、
    str() でデバッグ用の読みやすい表現を返すこと。
    """

    def __hash__(self) -> int: ...


@runtime_checkable
class GameRole(Protocol):
    """A participant in the game (compared by equality, never ordered).

    対局の参加者（手番）。等価比較のみで、順序は持たない。
    """

    @property
    def has_opponent(self) -> bool:
        """相手がちょうど1人（2人対戦）ならば True。"""
        ...

    @property
    def next_role(self) -> GameRole:
        """手番順で次の参加者を返す（多人数ゲーム用）。"""
        ...


@runtime_checkable
class GameState(Protocol):
    """Common interface for all game positions.

    すべてのゲーム局面が実装すべき共通インタフェース。
    このプロトコルを実装したクラスなら何でも AlphaBeta や MCTS で使える。

    重要: spawn_child() は新しい状態を返す（イミュータブル設計）。
    同じ局面・同じ手からは常に等しい局面が生まれる純粋関数であること。
    イミュータブルにすることで、探索木と呼び出し側で局面を安全に共有できる。
    """

    @property
    def current_role(self) -> GameRole:
        """現在手番の参加者を返す。"""
        ...

    @property
    def move_count(self) -> int:
        """これまでに指された手数を返す。"""
        ...

    @property
    def is_terminal(self) -> bool:
        """ゲームが終了していれば True を返す。"""
        ...

    @property
    def winners(self) -> frozenset[GameRole]:
        """勝者の集合を返す。対局中・引き分けは空集合（同着なら複数）。"""
        ...

    def legal_moves(self) -> list[GameMove]:
        """合法手のリストを返す（順序は決定的であること）。"""
        ...

    def spawn_child(self, move: GameMove) -> GameState:
        """手を適用した新しい状態を返す（元の状態は変化しない）。"""
        ...
