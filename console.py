#!/usr/bin/env python3
"""
Being Lucky console — line-oriented frontend.

Prompts on stdin, prints "-->" styled lines, clears the screen between
updates and paces important messages with short sleeps. Output, sleeping and
screen clearing are injectable so prompts and rendering can be tested
without a terminal.
"""
import os
import sys
import time

from frontend_adapter import DisplayInterface
from game_coordinator import GameCoordinator, build_player_configs, parse_args
from game_engine import MAX_PLAYERS, MIN_PLAYERS, MINIMUM_STARTING_SCORE, Choice
from settings import apply_cli_overrides, load_settings

HORIZONTAL_LINE = "-" * 34

# Seconds to wait before and after a paced message
PACE_BEFORE = 0.5
PACE_AFTER = 1.5


def clear_terminal():
    """Clear the terminal window."""
    os.system("cls" if os.name == "nt" else "clear")


def parse_choice(text):
    """Recognise a throw/hold answer.

    Accepts t/throw and h/hold in any case, surrounding whitespace ignored.

    Returns:
        Choice, or None if the text is not one of the two answers
    """
    token = text.strip().lower()
    if token in ("t", "throw"):
        return Choice.THROW
    if token in ("h", "hold"):
        return Choice.HOLD
    return None


class ConsoleDisplay(DisplayInterface):
    """Renders the game as plain "-->" lines on the terminal."""

    def __init__(self, output=print, sleep=time.sleep, clear=clear_terminal,
                 pacing=True, clear_screen=True):
        self.output = output
        self.sleep = sleep
        self._clear = clear
        self.pacing = pacing
        self.clear_screen = clear_screen

    # ── Primitives ───────────────────────────────────────────────────────

    def clear(self):
        if self.clear_screen:
            self._clear()

    def puts_styled(self, msg):
        self.output(f"--> {msg}")

    def line_break(self):
        self.output("")

    def horizontal_line(self):
        self.output(HORIZONTAL_LINE)

    def sleep_message(self, msg):
        """Show a message with a pause either side so it can be read."""
        if not msg:
            return
        if self.pacing:
            self.sleep(PACE_BEFORE)
        self.puts_styled(msg)
        if self.pacing:
            self.sleep(PACE_AFTER)

    # ── Screens ──────────────────────────────────────────────────────────

    def welcome_message(self):
        self.horizontal_line()
        self.puts_styled("Welcome to Being Lucky!")
        self.horizontal_line()

    def render_turn_state(self, player):
        self.clear()
        self.puts_styled(f"{player.name} Turn:")
        if player.current_roll:
            self.puts_styled(f"{player.name} just rolled: {player.current_roll.roll}")
            self.puts_styled(f"Last roll points: {player.current_roll.throw_score}")
        self.puts_styled(f"Available dice: {player.valid_dice}")
        self.puts_styled(f"Cumulative Score: {player.total_score}")
        self.puts_styled(f"Round Score: {player.round_score}")
        if not player.scoring_unlocked:
            self.puts_styled(f"Not on the board yet: need {MINIMUM_STARTING_SCORE} in a single throw")
        self.horizontal_line()

    def render_decision(self, player, reason):
        self.sleep_message(f"{player.name}: {reason}")

    def render_bust_message(self):
        self.sleep_message("You rolled a 0. Turn over. Round points lost")

    def render_final_scores(self, players):
        self.clear()
        self.puts_styled("Game over. Final scores:")
        self.horizontal_line()
        for player in players:
            self.puts_styled(f"{player.name}: {player.total_score}")


# ── Prompts ──────────────────────────────────────────────────────────────────

def prompt_number_of_players(read=input, display=None):
    """Ask how many people are playing until a number in range is given."""
    display = display or ConsoleDisplay()
    display.horizontal_line()
    display.puts_styled("How many people are playing?")
    while True:
        try:
            count = int(read().strip())
        except ValueError:
            count = 0
        if MIN_PLAYERS <= count <= MAX_PLAYERS:
            return count
        display.puts_styled(f"Sorry, must choose between {MIN_PLAYERS} - {MAX_PLAYERS}.")


def prompt_throw_or_hold(read=input, display=None):
    """Ask the current player to throw or hold until they answer T or H."""
    display = display or ConsoleDisplay()
    display.puts_styled("(T)hrow dice or (H)old score")
    while True:
        choice = parse_choice(read())
        if choice is not None:
            return choice
        display.puts_styled("Sorry, must choose T or H.")


# ── Entry point ──────────────────────────────────────────────────────────────

def run_console(args, read=input, display=None, dice_source=None, speed="normal"):
    """Set up players and play one full game on the console.

    Names given with --names apply to the prompted player count too; a count
    mismatch raises ValueError like it does for --players.

    Returns:
        The finished GameCoordinator
    """
    display = display or ConsoleDisplay()
    display.clear()
    display.welcome_message()

    if args.players:
        players = build_player_configs(args.players, args.names)
    else:
        count = prompt_number_of_players(read=read, display=display)
        players = build_player_configs(["human"] * count, args.names)

    kwargs = {"display": display, "speed": speed}
    if dice_source is not None:
        kwargs["dice_source"] = dice_source
    coordinator = GameCoordinator(players, **kwargs)
    coordinator.play(lambda player: prompt_throw_or_hold(read=read, display=display))
    return coordinator


def main(argv=None):
    """Entry point for the console game."""
    args = parse_args(argv)
    settings = apply_cli_overrides(load_settings(), args)
    display = ConsoleDisplay(pacing=settings["pacing"], clear_screen=settings["clear_screen"])
    try:
        run_console(args, display=display, speed=settings["speed"])
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)
    except (KeyboardInterrupt, EOFError):
        print()
        sys.exit(130)


if __name__ == "__main__":
    main()
