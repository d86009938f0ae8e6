"""
Being Lucky Game Engine - Pure game logic without UI dependencies

This module contains the dice scoring rules, the per-player turn state and the
throw/hold state machine. Console and TUI frontends drive it through the
GameCoordinator; nothing in here prints, sleeps or reads input, so all of it
can be unit tested headlessly.
"""
from dataclasses import dataclass
from typing import Tuple
from enum import Enum
import random


MINIMUM_STARTING_SCORE = 300
FINAL_ROUND_POINTS = 3000
DICE_PER_TURN = 5
MIN_PLAYERS = 2
MAX_PLAYERS = 9

FACE_VALUES = (1, 2, 3, 4, 5, 6)

# Highest value / most specific first. Triples always outrank loose singles.
SCORING_PATTERNS = (
    ("111", 1000),
    ("666", 600),
    ("555", 500),
    ("444", 400),
    ("333", 300),
    ("222", 200),
    ("1", 100),
    ("5", 50),
)


class Choice(Enum):
    """A player's decision after looking at the current turn state"""
    THROW = "throw"
    HOLD = "hold"


class TurnPhase(Enum):
    """States of a single player's turn"""
    AWAITING_ROLL = "Awaiting Roll"
    HOLD_OR_CONTINUE = "Hold or Continue"
    BUSTED = "Busted"
    TURN_COMPLETE = "Turn Complete"


# ── Scoring ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DiceRoll:
    """Immutable result of scoring one throw of the dice"""
    faces: Tuple[int, ...]  # sorted ascending
    throw_score: int
    dice_consumed: int
    all_scoring: bool = False

    @property
    def used_dice(self) -> int:
        """Dice to set aside after this throw (0 on hot dice, the set is renewed)"""
        return 0 if self.all_scoring else self.dice_consumed

    @property
    def roll(self) -> str:
        """Canonical symbol string of the faces, e.g. '11235'"""
        return "".join(str(face) for face in self.faces)


def evaluate_roll(faces) -> DiceRoll:
    """
    Score a set of die faces.

    The sorted faces are written out as a string and the scoring patterns are
    matched against it. Every match removes the first occurrence of the
    pattern and the scan restarts from the top of the pattern list, so a
    triple is always tried again before falling through to single dice.

    Args:
        faces: Iterable of die values (1-6)

    Returns:
        DiceRoll with the points, number of dice consumed and all-scoring flag
    """
    ordered = tuple(sorted(faces))
    remaining = "".join(str(face) for face in ordered)
    points = 0
    consumed = 0

    matched = True
    while matched:
        matched = False
        for pattern, value in SCORING_PATTERNS:
            if pattern in remaining:
                remaining = remaining.replace(pattern, "", 1)
                points += value
                consumed += len(pattern)
                matched = True
                break

    return DiceRoll(
        faces=ordered,
        throw_score=points,
        dice_consumed=consumed,
        all_scoring=consumed > 0 and not remaining,
    )


def parse_faces(text: str) -> Tuple[int, ...]:
    """
    Convert a digit string such as '24454' into a tuple of faces.

    Raises:
        ValueError: if the string is not 1-5 digits between 1 and 6
    """
    text = text.strip()
    if not 1 <= len(text) <= DICE_PER_TURN:
        raise ValueError(f"expected 1 to {DICE_PER_TURN} dice, got {len(text)}: {text!r}")
    if any(ch not in "123456" for ch in text):
        raise ValueError(f"dice must be digits 1-6: {text!r}")
    return tuple(int(ch) for ch in text)


def score(dice) -> int:
    """Points for a roll given as a digit string ('24454') or an iterable of ints"""
    if isinstance(dice, str):
        dice = parse_faces(dice)
    return evaluate_roll(dice).throw_score


def random_dice(count: int, rng=random) -> Tuple[int, ...]:
    """Roll `count` independent fair dice"""
    return tuple(rng.randint(1, 6) for _ in range(count))


# ── Player ──────────────────────────────────────────────────────────────────

class Player:
    """Per-player mutable state: banked total, round accumulator and dice in hand"""

    def __init__(self, number: int, name: str | None = None):
        self.number = number
        self.name = name or f"Player {number}"
        self.scoring_unlocked = False
        self.total_score = 0
        self.round_score = 0
        self.current_roll: DiceRoll | None = None
        self.valid_dice = DICE_PER_TURN

    def rolls(self, faces) -> DiceRoll:
        """
        Apply a fresh throw of `valid_dice` faces to this player.

        Once a player has opened (a single throw worth at least
        MINIMUM_STARTING_SCORE), every throw counts toward the round score.
        Before that, a throw below the threshold adds nothing even if it
        scored.

        Args:
            faces: The rolled die values

        Returns:
            The scored DiceRoll, also stored as current_roll
        """
        self.current_roll = evaluate_roll(faces)
        if self.scoring_unlocked:
            self.round_score += self.current_roll.throw_score
        elif self.current_roll.throw_score >= MINIMUM_STARTING_SCORE:
            self.scoring_unlocked = True
            self.round_score += self.current_roll.throw_score

        self.valid_dice -= self.current_roll.used_dice
        if self.current_roll.all_scoring:
            self.valid_dice = DICE_PER_TURN
        return self.current_roll

    def reset_after_round(self) -> None:
        """Bank the round score and get ready for the next turn.

        scoring_unlocked is kept: a player opens once per game.
        """
        self.total_score += self.round_score
        self.round_score = 0
        self.current_roll = None
        self.valid_dice = DICE_PER_TURN

    def __repr__(self):
        return (f"Player(number={self.number}, name={self.name!r}, "
                f"total_score={self.total_score}, round_score={self.round_score}, "
                f"valid_dice={self.valid_dice}, scoring_unlocked={self.scoring_unlocked})")


# ── Turn state machine ──────────────────────────────────────────────────────

class Turn:
    """
    One player's turn: throw until holding or busting.

    The first state check happens before any dice are rolled, so a turn opens
    directly in HOLD_OR_CONTINUE. A throw passes through AWAITING_ROLL and
    lands in BUSTED when it scores nothing, otherwise back in
    HOLD_OR_CONTINUE. HOLD and end() finish the turn in TURN_COMPLETE.

    Actions that are not legal in the current phase leave the turn unchanged
    and return None/False.
    """

    def __init__(self, player: Player, dice_source=random_dice):
        self.player = player
        self.dice_source = dice_source
        self.phase = TurnPhase.HOLD_OR_CONTINUE
        self.throws = 0

    @property
    def busted(self) -> bool:
        return self.phase is TurnPhase.BUSTED

    @property
    def is_complete(self) -> bool:
        return self.phase is TurnPhase.TURN_COMPLETE

    @property
    def awaiting_decision(self) -> bool:
        return self.phase is TurnPhase.HOLD_OR_CONTINUE

    def throw(self) -> DiceRoll | None:
        """
        Roll the player's remaining dice.

        Returns:
            The scored DiceRoll, or None if throwing is not possible right now
        """
        if not self.awaiting_decision:
            return None
        if self.player.valid_dice <= 0:
            self.phase = TurnPhase.TURN_COMPLETE
            return None

        self.phase = TurnPhase.AWAITING_ROLL
        dice_roll = self.player.rolls(self.dice_source(self.player.valid_dice))
        self.throws += 1

        if dice_roll.throw_score == 0:
            self.player.round_score = 0
            self.phase = TurnPhase.BUSTED
        else:
            self.phase = TurnPhase.HOLD_OR_CONTINUE
        return dice_roll

    def hold(self) -> bool:
        """Stop throwing and keep the round score for banking"""
        if not self.awaiting_decision:
            return False
        self.phase = TurnPhase.TURN_COMPLETE
        return True

    def end(self) -> None:
        """Finish the turn (used after a bust has been shown)"""
        self.phase = TurnPhase.TURN_COMPLETE

    def apply(self, choice: Choice):
        """Dispatch a Choice to throw() or hold()"""
        if choice is Choice.THROW:
            return self.throw()
        return self.hold()
