"""
GameCoordinator — Round-robin game loop for Being Lucky.

Owns the players, the current turn, the final-round trigger and the AI pacing
state machine. Frontends either drive it with blocking calls (console:
play()/play_turn()) or frame by frame (TUI: tick() plus throw()/hold() on
key presses), and render through a DisplayInterface.
"""
from __future__ import annotations

import argparse
import logging

from ai import (
    CautiousStrategy,
    GreedyStrategy,
    LuckyStrategy,
    RandomStrategy,
)
from frontend_adapter import NullDisplay
from game_engine import (
    FINAL_ROUND_POINTS,
    MAX_PLAYERS,
    MIN_PLAYERS,
    Choice,
    DiceRoll,
    Player,
    Turn,
    random_dice,
)
from game_log import GameLog
from settings import SPEED_NAMES

logger = logging.getLogger(__name__)

# Speed presets for AI playback: (ai_delay, turn_transition_duration) in frames
SPEED_PRESETS = {
    "slow":   (30, 40),
    "normal": (15, 25),
    "fast":   (4, 8),
}

PLAYER_TYPES = ["human", "random", "cautious", "greedy"]


class GameCoordinator:
    """Coordinates players, turns and the end-of-game trigger.

    Players act in fixed seat order. The first player to finish a turn with
    at least FINAL_ROUND_POINTS banked is recorded in `first_finisher`; the
    remaining seats get one more turn each and the game stops when play comes
    back around to that seat.
    """

    def __init__(self, players: list, speed: str = "normal", dice_source=random_dice,
                 display=None) -> None:
        """Initialize the coordinator.

        Args:
            players: List of (name, strategy_or_None) tuples; None means human.
            speed: Speed preset name ("slow", "normal", "fast").
            dice_source: Callable taking a dice count and returning that many faces.
            display: DisplayInterface to render through (NullDisplay if omitted).

        Raises:
            ValueError: if the number of players is outside MIN_PLAYERS..MAX_PLAYERS.
        """
        if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
            raise ValueError(
                f"Being Lucky needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(players)}")
        self.player_configs = list(players)
        self.dice_source = dice_source
        self.display = display or NullDisplay()
        self.game_log = GameLog()

        self.speed_name = "normal"
        self.ai_delay, self.turn_transition_duration = SPEED_PRESETS[self.speed_name]
        self.set_speed(speed)

        self._start_new_game()

    def _start_new_game(self) -> None:
        self.players = [Player(i + 1, name) for i, (name, _) in enumerate(self.player_configs)]
        self.current_player_index = 0
        self.first_finisher: int | None = None
        self.round_number = 1
        self.game_over = False
        self.turn = Turn(self.players[0], self.dice_source)

        # Last throw made by anyone, kept after the turn resets for display
        self.last_roll: DiceRoll | None = None
        self.last_roll_player_index = 0
        self.last_turn_busted = False

        # AI pacing
        self.ai_timer = 0
        self.ai_reason = ""

        # Pause between turns (frame-driven frontends only)
        self.turn_transition = True
        self.turn_transition_timer = 0

        self.game_log.clear()

    # ── Properties ────────────────────────────────────────────────────────

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def current_ai_strategy(self) -> LuckyStrategy | None:
        """Current player's AI strategy (or None if human)."""
        _, strategy = self.player_configs[self.current_player_index]
        return strategy

    @property
    def is_current_player_human(self) -> bool:
        return self.current_ai_strategy is None

    @property
    def has_any_ai(self) -> bool:
        """Whether any player is AI (for speed control display)."""
        return any(s is not None for _, s in self.player_configs)

    @property
    def final_round(self) -> bool:
        """Whether someone has reached FINAL_ROUND_POINTS and the game is winding down."""
        return self.first_finisher is not None

    @property
    def can_throw_now(self) -> bool:
        return not self.game_over and self.turn.awaiting_decision

    # ── Action methods ───────────────────────────────────────────────────

    def throw(self) -> bool:
        """Throw the current player's dice.

        A zero-point throw busts: the turn state and bust are rendered, the
        round score is lost and play moves on.

        Returns:
            True if the action was taken, False if throwing is not allowed now.
        """
        if not self.can_throw_now:
            return False

        player = self.current_player
        dice_roll = self.turn.throw()
        if dice_roll is None:
            # No dice left to throw; the turn is over and the round is banked
            self.game_log.log_hold(self.round_number, self.current_player_index,
                                   player.round_score)
            self._finish_turn()
            return True

        self.last_roll = dice_roll
        self.last_roll_player_index = self.current_player_index
        self.game_log.log_roll(
            round_number=self.round_number,
            player_index=self.current_player_index,
            dice_values=dice_roll.faces,
            score=dice_roll.throw_score,
            round_score=player.round_score,
            valid_dice=player.valid_dice,
        )
        logger.debug("%s threw %s for %d (round %d, %d dice left)",
                     player.name, dice_roll.roll, dice_roll.throw_score,
                     player.round_score, player.valid_dice)

        if self.turn.busted:
            self.display.render_turn_state(player)
            self.display.render_bust_message()
            self.game_log.log_bust(self.round_number, self.current_player_index, dice_roll.faces)
            self.turn.end()
            self._finish_turn(busted=True)
        return True

    def hold(self) -> bool:
        """End the current player's turn, banking the round score.

        Returns:
            True if the turn ended, False if holding is not allowed now.
        """
        if self.game_over or not self.turn.hold():
            return False
        self.game_log.log_hold(self.round_number, self.current_player_index,
                               self.current_player.round_score)
        self._finish_turn()
        return True

    def apply(self, choice: Choice) -> bool:
        """Apply a Choice for the current player."""
        if choice is Choice.THROW:
            return self.throw()
        return self.hold()

    def reset_game(self) -> None:
        """Start a new game with the same players, preserving speed settings."""
        self._start_new_game()

    def set_speed(self, name: str) -> None:
        if name not in SPEED_PRESETS:
            raise ValueError(f"unknown speed {name!r}")
        self.speed_name = name
        self.ai_delay, self.turn_transition_duration = SPEED_PRESETS[name]

    def change_speed(self, direction: int) -> bool:
        """Change AI speed. direction=+1 for faster, -1 for slower.

        Returns True if speed actually changed, False if already at limit.
        """
        idx = SPEED_NAMES.index(self.speed_name)
        new_idx = idx + direction
        if 0 <= new_idx < len(SPEED_NAMES):
            self.set_speed(SPEED_NAMES[new_idx])
            return True
        return False

    # ── Blocking play (console) ──────────────────────────────────────────

    def _decide(self, decide) -> Choice:
        player = self.current_player
        strategy = self.current_ai_strategy
        if strategy is None:
            if decide is None:
                raise ValueError(f"{player.name} is human but no decide callable was given")
            return decide(player)
        choice = strategy.choose_action(player)
        self.ai_reason = strategy.describe(player, choice)
        self.display.render_decision(player, self.ai_reason)
        return choice

    def play_turn(self, decide=None) -> None:
        """Play the current player's whole turn, blocking on each decision.

        Args:
            decide: Callable(player) -> Choice used for human players.
        """
        if self.game_over:
            return
        player = self.current_player
        turn = self.turn
        while not turn.is_complete:
            self.display.render_turn_state(player)
            self.apply(self._decide(decide))

    def play(self, decide=None) -> list[tuple[str, int]]:
        """Play turns until the game is over and return the final scores."""
        while not self.game_over:
            self.play_turn(decide)
        return self.final_scores()

    # ── Frame update (TUI) ───────────────────────────────────────────────

    def tick(self) -> None:
        """Advance one frame: the turn-transition pause, then AI decisions."""
        if self.game_over:
            return

        if self.turn_transition:
            self.turn_transition_timer += 1
            if self.turn_transition_timer >= self.turn_transition_duration:
                self.turn_transition = False
            return

        if self.current_ai_strategy is None:
            return

        self.ai_timer += 1
        if self.ai_timer < self.ai_delay:
            return
        self.ai_timer = 0
        self.apply(self._decide(None))

    # ── Results ──────────────────────────────────────────────────────────

    def final_scores(self) -> list[tuple[str, int]]:
        """(name, total_score) for every player, in seat order."""
        return [(p.name, p.total_score) for p in self.players]

    def leaders(self) -> list[str]:
        """Names of the player(s) with the highest banked total."""
        best = max(p.total_score for p in self.players)
        return [p.name for p in self.players if p.total_score == best]

    def last_turn_summary(self) -> tuple[str, str, int] | None:
        """Return (player_name, "hold"/"bust", points banked) for the most recent turn, or None."""
        results = self.game_log.get_turn_results()
        if not results:
            return None
        last = results[-1]
        return (self.players[last.player_index].name, last.event_type, last.score or 0)

    # ── Internal ─────────────────────────────────────────────────────────

    def _finish_turn(self, busted: bool = False) -> None:
        """Bank the turn, check the final-round trigger and seat the next player."""
        player = self.current_player
        banked = player.round_score
        player.reset_after_round()
        self.last_turn_busted = busted
        logger.debug("%s %s; total %d", player.name,
                     "busted" if busted else f"banked {banked}", player.total_score)

        if self.first_finisher is None and player.total_score >= FINAL_ROUND_POINTS:
            self.first_finisher = self.current_player_index
            logger.info("%s reached %d points; final round", player.name, player.total_score)

        next_index = (self.current_player_index + 1) % self.num_players
        if next_index == self.first_finisher:
            self.game_over = True
            logger.info("Game over: %s", self.final_scores())
            self.display.render_final_scores(self.players)
            return

        if next_index == 0:
            self.round_number += 1
        self.current_player_index = next_index
        self.turn = Turn(self.players[next_index], self.dice_source)
        self.ai_timer = 0
        self.ai_reason = ""
        self.turn_transition = True
        self.turn_transition_timer = 0


def _make_strategy(token: str) -> LuckyStrategy | None:
    """Create a strategy instance from a CLI token, or None for 'human'.

    Returns None for unrecognized tokens (treated as human player).
    """
    if token == "human":
        return None
    elif token == "random":
        return RandomStrategy()
    elif token == "cautious":
        return CautiousStrategy()
    elif token == "greedy":
        return GreedyStrategy()
    return None


def build_player_configs(tokens: list[str], names: list[str] | None = None) -> list:
    """Turn --players/--names values into (name, strategy) tuples.

    Raises:
        ValueError: on a bad player count or a --names/--players mismatch.
    """
    if not MIN_PLAYERS <= len(tokens) <= MAX_PLAYERS:
        raise ValueError(f"--players needs between {MIN_PLAYERS} and {MAX_PLAYERS} players")
    if names and len(names) != len(tokens):
        raise ValueError(
            f"--names count ({len(names)}) must match --players count ({len(tokens)})")

    players = []
    for i, token in enumerate(tokens):
        strategy = _make_strategy(token)
        if names:
            name = names[i]
        elif strategy is None:
            name = f"Player {i + 1}"
        else:
            ai_name = strategy.__class__.__name__.replace("Strategy", "")
            name = f"P{i + 1} {ai_name}"
        players.append((name, strategy))
    return players


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Optional list of args (for testing). None uses sys.argv.

    Returns:
        Parsed argparse.Namespace.
    """
    parser = argparse.ArgumentParser(description="Being Lucky dice game")
    parser.add_argument("--players", nargs="+", choices=PLAYER_TYPES, metavar="TYPE",
                        help="List player types in seat order (human, random, cautious, greedy); "
                             "prompted for if omitted")
    parser.add_argument("--names", nargs="+", metavar="NAME",
                        help="Custom player names (must match --players count)")
    parser.add_argument("--speed", choices=SPEED_NAMES, default=None,
                        help="Computer player pace in the TUI; the console is not timed "
                             "(default: from settings, else normal)")
    parser.add_argument("--no-pacing", action="store_true",
                        help="Don't pause after console messages")
    parser.add_argument("--no-clear", action="store_true",
                        help="Don't clear the screen between turns")
    return parser.parse_args(argv)
