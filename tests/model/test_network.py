"""Tests for ValueNetwork."""

from __future__ import annotations

import torch

from game_search.model.config import TICTACTOE_CONFIG, NetworkConfig
from game_search.model.network import ResBlock, ValueNetwork


class TestResBlock:
    def test_output_shape_unchanged(self) -> None:
        block = ResBlock(channels=8)
        x = torch.randn(2, 8, 3, 3)
        assert block(x).shape == (2, 8, 3, 3)

    def test_skip_connection_gradient_flow(self) -> None:
        block = ResBlock(channels=4)
        x = torch.randn(1, 4, 3, 3, requires_grad=True)
        block(x).sum().backward()
        assert x.grad is not None
        assert x.grad.abs().sum() > 0


class TestValueNetwork:
    def test_output_shape(self) -> None:
        net = ValueNetwork(TICTACTOE_CONFIG)
        value = net(torch.randn(4, 3, 3, 3))
        assert value.shape == (4, 1)

    def test_value_in_range(self) -> None:
        net = ValueNetwork(TICTACTOE_CONFIG)
        value = net(torch.randn(8, 3, 3, 3) * 10)
        assert value.min() >= -1.0
        assert value.max() <= 1.0

    def test_custom_config(self) -> None:
        config = NetworkConfig(board_h=4, board_w=5, in_channels=2, num_res_blocks=0)
        net = ValueNetwork(config)
        assert net(torch.randn(2, 2, 4, 5)).shape == (2, 1)
