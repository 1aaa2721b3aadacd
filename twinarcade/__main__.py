# python -m twinarcade [--game flappy|pong] [--data-dir DIR]

import argparse
import logging
from typing import List, Optional

from .app import GAMES, Arcade
from .config import data_dir


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="twinarcade", description="Flappy and Pong in one window")
    parser.add_argument("--game", choices=["flappy", "pong"], help="skip the menu and start this game")
    parser.add_argument("--data-dir", help="where scores.json and settings.json live (default: $TWINARCADE_DATA_DIR or .)")
    parser.add_argument("--flappy-difficulty", help="easy, normal or hard")
    parser.add_argument("--pong-difficulty", help="Easy, Medium or Hard")
    parser.add_argument("--win-condition", type=int, help="5, 10 or 20")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="default: WARNING")
    args = parser.parse_args(argv)
    args.parser = parser
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    arcade = Arcade(data_dir(args.data_dir))
    try:
        arcade.override(args.flappy_difficulty, args.pong_difficulty, args.win_condition)
    except ValueError as exc:
        args.parser.error(str(exc))
    arcade.open_window()
    start = None
    if args.game:
        start = [label.lower() for label, _ in GAMES].index(args.game)
    arcade.main_loop(start)


if __name__ == "__main__":
    main()
