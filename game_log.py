"""Game log for Being Lucky — records all actions for post-game replay.

Pure Python, no UI dependency. Captures throws, holds and busts for each
player's turns.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LogEntry:
    """A single logged game event."""
    round_number: int                           # 1-based pass over all players
    player_index: int
    event_type: str                             # "roll", "hold", "bust"
    dice_values: tuple[int, ...] = ()
    score: int | None = None                    # throw score for rolls, banked points for holds
    round_score: int = 0
    valid_dice: int = 0


class GameLog:
    """Accumulates LogEntry records during a game."""

    def __init__(self) -> None:
        self.entries: list[LogEntry] = []

    def log_roll(self, round_number: int, player_index: int, dice_values,
                 score: int, round_score: int, valid_dice: int) -> None:
        """Record a throw of the dice."""
        self.entries.append(LogEntry(
            round_number=round_number,
            player_index=player_index,
            event_type="roll",
            dice_values=tuple(dice_values),
            score=score,
            round_score=round_score,
            valid_dice=valid_dice,
        ))

    def log_hold(self, round_number: int, player_index: int, banked: int) -> None:
        """Record a player holding and banking their round score."""
        self.entries.append(LogEntry(
            round_number=round_number,
            player_index=player_index,
            event_type="hold",
            score=banked,
            round_score=banked,
        ))

    def log_bust(self, round_number: int, player_index: int, dice_values) -> None:
        """Record a zero-point throw that cost the player their round."""
        self.entries.append(LogEntry(
            round_number=round_number,
            player_index=player_index,
            event_type="bust",
            dice_values=tuple(dice_values),
            score=0,
        ))

    def get_turn_entries(self, round_number: int, player_index: int) -> list[LogEntry]:
        """Return all entries for one player's turn in a given round."""
        return [e for e in self.entries
                if e.round_number == round_number and e.player_index == player_index]

    def get_turn_results(self, player_index: int | None = None) -> list[LogEntry]:
        """Return only the hold/bust entries that closed a turn."""
        return [e for e in self.entries
                if e.event_type in ("hold", "bust")
                and (player_index is None or e.player_index == player_index)]

    def clear(self) -> None:
        """Remove all entries."""
        self.entries = []
