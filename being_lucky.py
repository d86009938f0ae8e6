#!/usr/bin/env python3
"""
Unified entry point for Being Lucky.

Usage:
    python being_lucky.py                                  # Console, asks for player count
    python being_lucky.py --players human greedy           # Console vs a computer player
    python being_lucky.py --ui tui                         # Terminal UI (Textual)
    python being_lucky.py --ui tui --players greedy random # Watch two computer players
    python being_lucky.py --score 24454                    # Just score a roll

Individual entry points (console.py, tui.py) still work independently.
"""
import argparse
import logging
import sys

from game_engine import evaluate_roll, parse_faces


def main(argv=None):
    # Pre-parse our own flags, pass everything else through
    parser = argparse.ArgumentParser(
        description="Being Lucky — a dice game for 2-9 players",
        add_help=False,
    )
    parser.add_argument("--ui", choices=["console", "tui"], default="console",
                        help="Interface: console (default) or tui (full-screen terminal)")
    parser.add_argument("--score", metavar="DICE",
                        help="Print the score of a roll such as 24454 and exit")
    parser.add_argument("--verbose", action="store_true",
                        help="Log game events to stderr")
    args, remaining = parser.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.score is not None:
        try:
            dice_roll = evaluate_roll(parse_faces(args.score))
        except ValueError as exc:
            parser.error(str(exc))
        print(f"{dice_roll.roll}: {dice_roll.throw_score}"
              f"{' (hot dice)' if dice_roll.all_scoring else ''}")
        return

    if args.ui == "console":
        from console import main as run_console
        run_console(remaining)

    elif args.ui == "tui":
        from tui import main as run_tui
        run_tui(remaining)


if __name__ == "__main__":
    main(sys.argv[1:])
