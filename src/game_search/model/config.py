"""Network configuration for value networks used as move evaluators.

ニューラルネットワーク評価関数の設定定義。
ゲームによって盤面サイズ・チャンネル数が異なるため、設定クラスで管理する。
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NetworkConfig:
    """Configuration for ValueNetwork.

    ValueNetwork の設定パラメータ。

    Attributes:
        board_h:        盤面の高さ（行数）
        board_w:        盤面の幅（列数）
        in_channels:    入力特徴プレーン数（局面のテンソル表現のチャンネル数）
        num_res_blocks: 残差ブロックの数（多いほど表現力が高いが重い）
        num_channels:   畳み込み層のチャンネル数
        hidden_size:    価値ヘッドの全結合層のユニット数
    """

    board_h: int
    board_w: int
    in_channels: int
    num_res_blocks: int = 2
    num_channels: int = 32
    hidden_size: int = 32


# 三目並べ用のプリセット設定
# 盤面: 3×3、入力: 3チャンネル（自分の記号・相手の記号・手番）
TICTACTOE_CONFIG = NetworkConfig(
    board_h=3,
    board_w=3,
    in_channels=3,
    num_res_blocks=1,  # 小さいゲームなので浅いネットワーク
    num_channels=16,
    hidden_size=16,
)
