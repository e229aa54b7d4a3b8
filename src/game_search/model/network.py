"""Convolutional value network that rates positions in [-1, 1]."""

from __future__ import annotations

import torch
from torch import Tensor, nn

from game_search.model.config import NetworkConfig


class ResBlock(nn.Module):
    """Residual block: Conv → BN → ReLU → Conv → BN + skip connection.

    残差ブロック。スキップ接続により「恒等写像 + 補正」を学べる。
    """

    def __init__(self, channels: int) -> None:
        super().__init__()
        self.conv1 = nn.Conv2d(channels, channels, 3, padding=1, bias=False)
        self.bn1 = nn.BatchNorm2d(channels)
        self.conv2 = nn.Conv2d(channels, channels, 3, padding=1, bias=False)
        self.bn2 = nn.BatchNorm2d(channels)

    def forward(self, x: Tensor) -> Tensor:
        out = torch.relu(self.bn1(self.conv1(x)))
        out = self.bn2(self.conv2(out))
        return torch.relu(out + x)


class ValueNetwork(nn.Module):
    """Network with a single value head.

    局面の価値だけを出力するネットワーク（方策ヘッドなし）。
    探索エンジンからは evaluate(state) -> score の形でしか使われない。

    構造:
    [入力テンソル（局面）] → [入力畳み込み層] → [残差ブロック × N]
        → [1×1 畳み込み] → [全結合] → [tanh]

    Input:  (batch, in_channels, board_h, board_w)
    Output: (batch, 1) — tanh-bounded value in [-1, 1]
    """

    def __init__(self, config: NetworkConfig) -> None:
        super().__init__()
        self.config = config

        self.input_conv = nn.Conv2d(
            config.in_channels,
            config.num_channels,
            3,
            padding=1,
            bias=False,
        )
        self.input_bn = nn.BatchNorm2d(config.num_channels)
        self.res_blocks = nn.Sequential(
            *[ResBlock(config.num_channels) for _ in range(config.num_res_blocks)]
        )

        # 価値ヘッド: 1×1 畳み込みでチャンネル数を1に削減してから全結合層へ
        self.value_conv = nn.Conv2d(config.num_channels, 1, 1, bias=False)
        self.value_bn = nn.BatchNorm2d(1)
        self.value_fc1 = nn.Linear(config.board_h * config.board_w, config.hidden_size)
        self.value_fc2 = nn.Linear(config.hidden_size, 1)

    def forward(self, x: Tensor) -> Tensor:
        x = torch.relu(self.input_bn(self.input_conv(x)))
        x = self.res_blocks(x)

        v = torch.relu(self.value_bn(self.value_conv(x)))
        v = v.view(v.size(0), -1)  # フラット化: (batch, h*w)
        v = torch.relu(self.value_fc1(v))
        return torch.tanh(self.value_fc2(v))  # tanh で [-1, +1] に収める
