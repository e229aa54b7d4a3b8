"""CLI entry point for game-search — Human vs search engine on tic-tac-toe.

コマンドラインで動く三目並べ対局プログラム。
プレイヤー（X、先手）対 探索エンジン（O、後手）で対局できる。

起動方法: `uv run game-search-cli --engine mcts --time-ms 500`
"""

from __future__ import annotations

import argparse
import logging

from game_search.engine.alphabeta import AlphaBeta, AlphaBetaConfig
from game_search.engine.base import GameAI
from game_search.engine.mcts import MCTS, MCTSConfig
from game_search.engine.random_player import RandomAI
from game_search.game.tictactoe import Mark, TicTacToeState, board_to_str


def build_ai(args: argparse.Namespace) -> GameAI:
    """コマンドライン引数から AI を組み立てる。"""
    if args.engine == "alphabeta":
        return AlphaBeta(config=AlphaBetaConfig(depth=args.depth, debug=args.debug))
    if args.engine == "mcts":
        return MCTS(
            MCTSConfig(exploration=args.exploration, seed=args.seed, debug=args.debug)
        )
    return RandomAI(seed=args.seed)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play tic-tac-toe against a search engine.")
    parser.add_argument("--engine", choices=["alphabeta", "mcts", "random"], default="alphabeta")
    parser.add_argument("--time-ms", type=float, default=1000, help="soft time budget per move")
    parser.add_argument("--depth", type=int, default=None, help="alpha-beta depth (default: unbounded)")
    parser.add_argument("--exploration", type=float, default=MCTSConfig.exploration)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--debug", action="store_true", help="trace first-layer ratings")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Run a Human (X) vs engine (O) game.

    ゲームの流れ:
    1. 盤面を表示
    2. 合法手一覧を表示して番号入力を求める
    3. AI が応答する
    4. 終局まで繰り返す
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.debug else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    ai = build_ai(args)
    state = TicTacToeState()
    ai.on_game_start(state, Mark.O)

    print("=== 三目並べ ===")
    print(f"You are X. AI ({args.engine}) is O.")
    print()

    while not state.is_terminal:
        print(board_to_str(state))
        print()

        if state.current_role == Mark.X:
            moves = state.legal_moves()
            print("Legal moves:")
            for i, m in enumerate(moves):
                print(f"  {i}: {m}")
            print()

            # 入力検証ループ（正しい番号が入力されるまで繰り返す）
            while True:
                try:
                    idx = int(input("Your move (number): "))
                    if 0 <= idx < len(moves):
                        state = state.spawn_child(moves[idx])
                        break
                    print(f"Invalid: choose 0-{len(moves) - 1}")
                except ValueError:
                    print("Enter a number.")
                except (EOFError, KeyboardInterrupt):
                    print("\nGame aborted.")
                    return
        else:
            move = ai.select_move(state, args.time_ms)
            print(f"AI plays: {move}")
            state = state.spawn_child(move)

        print()

    ai.on_game_end(state, Mark.O)

    # 終局: 結果を表示
    print(board_to_str(state))
    print()
    if Mark.X in state.winners:
        print("You win!")
    elif Mark.O in state.winners:
        print("AI wins!")
    else:
        print("Draw!")


if __name__ == "__main__":
    main()
