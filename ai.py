"""
Being Lucky AI — Strategy interface, single-turn loop, and computer players.

Contains:
- LuckyStrategy abstract base class
- play_turn() headless turn loop
- RandomStrategy, CautiousStrategy, GreedyStrategy
"""
from abc import ABC, abstractmethod
import random

from game_engine import MINIMUM_STARTING_SCORE, Choice, Player, Turn, random_dice


# ── Strategy Interface ──────────────────────────────────────────────────────

class LuckyStrategy(ABC):
    """Abstract base class for Being Lucky computer players."""

    @abstractmethod
    def choose_action(self, player: Player) -> Choice:
        """Given the player's state mid-turn, decide: throw again or hold.

        Args:
            player: The player whose turn it is. current_roll is None before
                    the first throw of the turn.

        Returns:
            Choice.THROW or Choice.HOLD
        """
        ...

    def describe(self, player: Player, choice: Choice) -> str:
        """One-line explanation of a decision, shown by the frontends."""
        if choice is Choice.THROW:
            return f"Throwing {player.valid_dice} dice"
        return f"Holding {player.round_score} points"


# ── Turn Loop ───────────────────────────────────────────────────────────────

def play_turn(player: Player, strategy: LuckyStrategy, dice_source=random_dice) -> Turn:
    """Play one complete turn for a computer player and bank the result.

    Args:
        player: The player taking the turn
        strategy: Decides between throwing and holding
        dice_source: Callable returning `count` die faces

    Returns:
        The finished Turn (check .throws, or the player's totals)
    """
    turn = Turn(player, dice_source)
    while not turn.is_complete:
        if turn.busted:
            turn.end()
            continue
        turn.apply(strategy.choose_action(player))
    player.reset_after_round()
    return turn


# ── RandomStrategy ──────────────────────────────────────────────────────────

class RandomStrategy(LuckyStrategy):
    """Baseline: always opens with a throw, then flips a coin."""

    def choose_action(self, player: Player) -> Choice:
        if player.current_roll is None:
            return Choice.THROW
        return Choice.THROW if random.random() < 0.5 else Choice.HOLD

    def describe(self, player: Player, choice: Choice) -> str:
        if choice is Choice.THROW:
            return "Feeling lucky — throwing again"
        return "Coin says stop — holding"


# ── CautiousStrategy ────────────────────────────────────────────────────────

class CautiousStrategy(LuckyStrategy):
    """Banks the moment there is anything to bank."""

    def choose_action(self, player: Player) -> Choice:
        if player.round_score > 0:
            return Choice.HOLD
        return Choice.THROW

    def describe(self, player: Player, choice: Choice) -> str:
        if choice is Choice.HOLD:
            return f"Taking the {player.round_score} points while they last"
        if not player.scoring_unlocked:
            return f"Need a {MINIMUM_STARTING_SCORE}-point throw to get on the board"
        return "Nothing banked yet — throwing"


# ── GreedyStrategy ─────────────────────────────────────────────────────────

class GreedyStrategy(LuckyStrategy):
    """Keeps throwing until the round is worth `target` or the dice run low.

    Decision logic:
    - Always throws while there is nothing on the table
    - Holds once round_score >= target
    - Holds when fewer than min_dice dice remain and points are at risk
    - Hot dice (a fresh set of 5) are always thrown unless the target is met
    """

    def __init__(self, target: int = 1000, min_dice: int = 2):
        self.target = target
        self.min_dice = min_dice

    def choose_action(self, player: Player) -> Choice:
        if player.round_score <= 0:
            return Choice.THROW
        if player.round_score >= self.target:
            return Choice.HOLD
        if player.valid_dice < self.min_dice:
            return Choice.HOLD
        return Choice.THROW

    def describe(self, player: Player, choice: Choice) -> str:
        if choice is Choice.THROW:
            if player.round_score <= 0:
                return "Nothing to lose — throwing"
            return f"{player.round_score} is short of {self.target} — pushing on with {player.valid_dice} dice"
        if player.round_score >= self.target:
            return f"Reached {player.round_score} — banking it"
        return f"Only {player.valid_dice} dice left — banking {player.round_score}"
