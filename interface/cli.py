import argparse
import logging
import time

from gridchess.config import CONFIG
from gridchess.core.legality import Outcome
from gridchess.main import Game

logging.basicConfig(level=CONFIG.log_level)


def main(argv=None):
    parser = argparse.ArgumentParser(description=f"Play chess against {CONFIG.ui.engine_name}")
    parser.add_argument("--difficulty", choices=["easy", "medium", "hard"],
                        default=CONFIG.game.default_difficulty)
    parser.add_argument("--engine-color", choices=["white", "black", "none"],
                        default=CONFIG.game.engine_color)
    args = parser.parse_args(argv)

    # the engine reply is driven from here so it can be delayed
    game = Game(difficulty=args.difficulty, engine_color=args.engine_color, auto_reply=False)

    while not game.state.is_over:
        game.print_board()
        print("----------------------------")

        if game.engine_to_move():
            time.sleep(CONFIG.game.ai_move_delay_ms / 1000)
            move = game.engine_move()
            print(f"Engine plays: {move}")
            continue

        turn = game.side_to_move.value.capitalize()
        check = " (CHECK)" if game.in_check else ""
        user_move = input(f"{turn} to move{check}, enter your move (uci format, e2e4): ")
        if not game.make_move(user_move):
            print("Illegal move, try again.")

    game.print_board()
    status = game.status()
    print("Game Over")
    if status.outcome is Outcome.CHECKMATE:
        print(f"Checkmate! {status.winner.value.capitalize()} wins!")
    else:
        print("Stalemate! It's a draw.")


if __name__ == "__main__":
    main()
