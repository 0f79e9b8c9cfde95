import argparse

from connectn.core.config import settings, configure_logging
from connectn.engine.ai import ConnectNAI
from connectn.engine.board import Board
from connectn.engine.constants import NO_MOVE
from connectn.models.enums import Piece


def build_opponent(difficulty: str) -> ConnectNAI:
    preset = settings.get_difficulty(difficulty)
    return ConnectNAI(
        ai_piece=Piece.O,
        depth=preset.depth,
        mistake_rate=preset.mistake_rate,
        name=preset.name or preset.label,
        heuristic=preset.heuristic or settings.engine.heuristic,
    )


def main():
    parser = argparse.ArgumentParser(description="Play Connect-N against the engine.")
    parser.add_argument("--difficulty", default="big-johninator",
                        choices=sorted(settings.difficulties))
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    configure_logging(args.log_level)

    cfg = settings.board
    board = Board(cfg.width, cfg.height, cfg.win_condition)
    ai_agent = build_opponent(args.difficulty)

    print("=======================================")
    print(f"   CONNECT {cfg.win_condition}: Human vs {ai_agent.name}")
    print("=======================================")
    print(board.get_visual_board())

    winner = None
    while winner is None and not board.is_full():

        # --- Human Turn (X) ---
        valid_moves = board.get_valid_moves()
        try:
            user_input = input(f"\nYour Move (Columns {[c + 1 for c in valid_moves]}): ")
            col = int(user_input) - 1
        except ValueError:
            print("Please enter a valid number.")
            continue
        if col not in valid_moves:
            print("Invalid column. Try again.")
            continue

        board.drop(col, Piece.X)
        print("\n" + board.get_visual_board())
        winner = board.check_win()
        if winner is not None or board.is_full():
            break

        # --- AI Turn (O) ---
        print(f"\n{ai_agent.name} is thinking...")
        ai_move = ai_agent.choose_move(board)
        if ai_move == NO_MOVE:
            break
        print(ai_agent.last_reasoning)
        board.drop(ai_move, Piece.O)
        print("\n" + board.get_visual_board())
        winner = board.check_win()

    # --- End Game ---
    if winner == Piece.X:
        print("\nGame Over! You win!")
    elif winner == Piece.O:
        print("\nGame Over! You lose!")
    else:
        print("\nGame Over! It's a Draw.")


if __name__ == "__main__":
    main()
