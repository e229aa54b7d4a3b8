"""Game loop and arena for head-to-head matches between strategies.

アリーナ: 2つの AI を対戦させて強さを評価するモジュール。
play_game() が「対局ループ」として on_game_start / select_move / on_game_end を呼び出す。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from game_search.engine.base import GameAI
from game_search.game.protocol import GameRole, GameState

logger = logging.getLogger(__name__)


def play_game(
    players: Mapping[GameRole, GameAI],
    initial_state: GameState,
    soft_max_time_ms: float = 100,
    max_moves: int = 200,
) -> GameState:
    """Play one game and return the final state.

    1局を最後まで指して、最終局面を返す。
    max_moves を超えたら打ち切る（終局していない局面が返る）。
    """
    for role, ai in players.items():
        ai.on_game_start(initial_state, role)

    state = initial_state
    while not state.is_terminal and state.move_count - initial_state.move_count < max_moves:
        move = players[state.current_role].select_move(state, soft_max_time_ms)
        logger.debug("%s plays %s", state.current_role, move)
        state = state.spawn_child(move)

    for role, ai in players.items():
        ai.on_game_end(state, role)
    return state


def pit(
    ai1: GameAI,
    ai2: GameAI,
    initial_state: GameState,
    num_games: int = 10,
    soft_max_time_ms: float = 100,
    max_moves: int = 200,
) -> tuple[int, int, int]:
    """Play num_games between two AIs, alternating who goes first.

    先手・後手を交互に入れ替えることで先手有利バイアスを打ち消す。

    Returns:
        (ai1_wins, ai2_wins, draws)
    """
    first = initial_state.current_role
    second = first.next_role
    ai1_wins = 0
    ai2_wins = 0
    draws = 0

    for game_idx in range(num_games):
        # 偶数局は ai1 が先手、奇数局は ai2 が先手
        if game_idx % 2 == 0:
            ai1_role, players = first, {first: ai1, second: ai2}
        else:
            ai1_role, players = second, {first: ai2, second: ai1}

        final = play_game(players, initial_state, soft_max_time_ms, max_moves)
        winners = final.winners
        if not final.is_terminal or not winners or len(winners) > 1:
            draws += 1  # 引き分け・同着・最大手数到達
        elif ai1_role in winners:
            ai1_wins += 1
        else:
            ai2_wins += 1

    logger.info("pit result: %d-%d (%d draws)", ai1_wins, ai2_wins, draws)
    return ai1_wins, ai2_wins, draws
