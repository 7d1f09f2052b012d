'''
Terminal Mastermind

Usage:
mastermind [-c COLORS] [-g GUESSES] [-n HOLES] [--no-duplicate]

Options:
-c, --colors N     -> number of colors (default 6, at most 7)
-g, --guesses N    -> maximum number of guesses (default 8)
-n, --holes N      -> number of holes per row (default 4)
--no-duplicate     -> forbid colors to repeat in the solution

Extras:
--random-org       -> draw the solution from random.org (secure local fallback)
--log-file PATH    -> write logs to a file; the screen belongs to curses
--log-level LEVEL  -> DEBUG, INFO, WARNING, ...

Defaults can also come from MASTERMIND_* env vars or a local .env.
'''

import argparse
import curses
import logging
import os
import sys
from typing import List, Optional

from . import config
from .config import ConfigError, load_config
from .random_client import fetch_code
from .store import Game
from .ui import run

logger = logging.getLogger(__name__)


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mastermind",
        description="Break the hidden color code. Bulls are right color in the right "
                    "hole, cows are right color in the wrong hole.",
    )
    parser.add_argument("-c", "--colors", type=positive_int, default=None,
                        help="number of colors (default: 6)")
    parser.add_argument("-g", "--guesses", type=positive_int, default=None,
                        help="maximum number of guesses (default: 8)")
    parser.add_argument("-n", "--holes", type=positive_int, default=None,
                        help="number of holes per row (default: 4)")
    parser.add_argument("--no-duplicate", action="store_true", default=None,
                        help="forbid colors to duplicate")
    parser.add_argument("--random-org", action="store_true", default=None,
                        help="draw the solution from random.org")
    parser.add_argument("--log-file", default=None,
                        help="write logs to this file")
    parser.add_argument("--log-level", default=None,
                        help="logging level (default: WARNING)")
    return parser


def setup_logging(log_file: Optional[str], level: str) -> None:
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            force=True,
        )
    else:
        # The screen belongs to curses, so stderr only ever gets warnings
        # and errors; more detail needs a log file
        handler = logging.StreamHandler()
        handler.setLevel(max(logging.getLevelName(level), logging.WARNING))
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logging.basicConfig(level=level, handlers=[handler], force=True)


def print_rows(snapshot) -> None:
    """Print the finished board, since curses clears the screen on exit."""
    for number, row in enumerate(snapshot.rows, start=1):
        colors = " ".join(str(color + 1) for color in row.guess)
        print(f"{number:>2}. {colors}  {row.message}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = (args.log_level or config.log_level()).upper()
    if not isinstance(logging.getLevelName(level), int):
        parser.error(f"unknown log level: {level}")
    setup_logging(args.log_file, level)

    # --- Validate the whole session once, before touching the terminal ---
    try:
        game_config = load_config(
            num_colors=args.colors,
            max_guesses=args.guesses,
            holes=args.holes,
            allow_duplicates=False if args.no_duplicate else None,
        )
        use_random_org = args.random_org or config.env_flag("MASTERMIND_RANDOM_ORG")
    except ConfigError as exc:
        parser.error(str(exc))

    if use_random_org:
        solution = fetch_code(game_config.num_colors, game_config.holes,
                              game_config.allow_duplicates)
    else:
        solution = None
    game = Game.create(game_config, solution=solution)

    # Short Esc delay so quitting feels immediate
    os.environ.setdefault("ESCDELAY", "25")
    final = curses.wrapper(run, game)

    print_rows(final)
    if final.status == "won":
        print(f"You won in {len(final.rows)} guess(es)!")
    elif final.status == "lost":
        print("You lost")
    else:
        print("Quit")
    if final.solution is not None:
        print("The solution was: " + " ".join(str(color + 1) for color in final.solution))
    return 0


if __name__ == "__main__":
    sys.exit(main())
