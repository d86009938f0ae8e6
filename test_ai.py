"""
AI Strategy Test Suite

Tests:
    1. Decisions — each strategy's throw/hold rule on hand-built player states
    2. Turn loop — play_turn() with scripted dice: holding, opening, busting
    3. Legality — parametrized across all strategies: many turns complete
       without errors and leave the player ready for the next turn
"""
import random

import pytest

from ai import (
    CautiousStrategy, GreedyStrategy, LuckyStrategy, RandomStrategy, play_turn,
)
from game_engine import (
    DICE_PER_TURN, Choice, Player, TurnPhase, evaluate_roll, parse_faces,
)


# ── Helpers ─────────────────────────────────────────────────────────────────

class ScriptedDice:
    """Dice source returning predefined rolls in order."""

    def __init__(self, *rolls):
        self.rolls = [parse_faces(r) for r in rolls]

    def __call__(self, count):
        faces = self.rolls.pop(0)
        assert len(faces) == count
        return faces


def mid_turn(round_score=0, valid_dice=DICE_PER_TURN, opened=True, roll="15"):
    """A player part-way through a turn."""
    player = Player(1)
    player.scoring_unlocked = opened
    player.round_score = round_score
    player.valid_dice = valid_dice
    player.current_roll = evaluate_roll(parse_faces(roll))
    return player


def all_strategies():
    """Return instances of all available strategies for parametrized tests."""
    return [RandomStrategy(), CautiousStrategy(), GreedyStrategy(),
            GreedyStrategy(target=300, min_dice=3)]


def strategy_ids():
    """Return readable names for parametrize IDs."""
    return ["Random", "Cautious", "Greedy", "Greedy300"]


# ═══════════════════════════════════════════════════════════════════════════════
# 1. DECISIONS
# ═══════════════════════════════════════════════════════════════════════════════

class TestRandomStrategy:

    def test_always_throws_first(self):
        strategy = RandomStrategy()
        for seed in range(20):
            random.seed(seed)
            assert strategy.choose_action(Player(1)) is Choice.THROW

    def test_mixes_choices_mid_turn(self):
        random.seed(1)
        strategy = RandomStrategy()
        player = mid_turn(round_score=150)
        choices = {strategy.choose_action(player) for _ in range(50)}
        assert choices == {Choice.THROW, Choice.HOLD}

    def test_deterministic_with_seed(self):
        strategy = RandomStrategy()
        player = mid_turn(round_score=150)
        random.seed(5)
        first = [strategy.choose_action(player) for _ in range(20)]
        random.seed(5)
        second = [strategy.choose_action(player) for _ in range(20)]
        assert first == second


class TestCautiousStrategy:

    def test_throws_with_nothing_to_bank(self):
        assert CautiousStrategy().choose_action(Player(1)) is Choice.THROW

    def test_throws_when_unopened_roll_did_not_count(self):
        player = mid_turn(round_score=0, valid_dice=3, opened=False)
        assert CautiousStrategy().choose_action(player) is Choice.THROW

    def test_holds_any_points(self):
        player = mid_turn(round_score=50, valid_dice=4)
        assert CautiousStrategy().choose_action(player) is Choice.HOLD

    def test_describe_unopened(self):
        reason = CautiousStrategy().describe(Player(1), Choice.THROW)
        assert "300" in reason

    def test_describe_hold(self):
        player = mid_turn(round_score=450)
        assert "450" in CautiousStrategy().describe(player, Choice.HOLD)


class TestGreedyStrategy:

    def test_throws_with_nothing_on_table(self):
        player = mid_turn(round_score=0, valid_dice=1)
        assert GreedyStrategy().choose_action(player) is Choice.THROW

    def test_pushes_below_target(self):
        player = mid_turn(round_score=600, valid_dice=3)
        assert GreedyStrategy().choose_action(player) is Choice.THROW

    def test_holds_at_target(self):
        player = mid_turn(round_score=1000, valid_dice=5)
        assert GreedyStrategy().choose_action(player) is Choice.HOLD

    def test_holds_when_dice_run_low(self):
        player = mid_turn(round_score=400, valid_dice=1)
        assert GreedyStrategy().choose_action(player) is Choice.HOLD

    def test_hot_dice_thrown_again(self):
        player = mid_turn(round_score=600, valid_dice=DICE_PER_TURN, roll="11155")
        assert GreedyStrategy().choose_action(player) is Choice.THROW

    def test_custom_target(self):
        player = mid_turn(round_score=350, valid_dice=4)
        assert GreedyStrategy(target=300).choose_action(player) is Choice.HOLD
        assert GreedyStrategy(target=500).choose_action(player) is Choice.THROW

    def test_custom_min_dice(self):
        player = mid_turn(round_score=350, valid_dice=2)
        assert GreedyStrategy(min_dice=3).choose_action(player) is Choice.HOLD
        assert GreedyStrategy(min_dice=2).choose_action(player) is Choice.THROW

    def test_describe_mentions_reason(self):
        strategy = GreedyStrategy()
        assert "1000" in strategy.describe(mid_turn(round_score=600), Choice.THROW)
        assert "banking" in strategy.describe(mid_turn(round_score=1200), Choice.HOLD)
        assert "1 dice" in strategy.describe(mid_turn(round_score=400, valid_dice=1),
                                             Choice.HOLD)


class TestStrategyInterface:

    def test_cannot_instantiate_base(self):
        with pytest.raises(TypeError):
            LuckyStrategy()

    def test_default_describe(self):
        class AlwaysHold(LuckyStrategy):
            def choose_action(self, player):
                return Choice.HOLD

        player = mid_turn(round_score=250, valid_dice=3)
        strategy = AlwaysHold()
        assert strategy.describe(player, Choice.HOLD) == "Holding 250 points"
        assert strategy.describe(player, Choice.THROW) == "Throwing 3 dice"


# ═══════════════════════════════════════════════════════════════════════════════
# 2. TURN LOOP
# ═══════════════════════════════════════════════════════════════════════════════

class TestPlayTurn:

    def test_greedy_banks_big_opening(self):
        player = Player(1)
        turn = play_turn(player, GreedyStrategy(), ScriptedDice("11123"))
        assert turn.phase is TurnPhase.TURN_COMPLETE
        assert turn.throws == 1
        assert player.total_score == 1000
        assert player.scoring_unlocked is True

    def test_unopened_throw_is_thrown_past(self):
        """150 does not open, so greedy throws the 3 remaining dice."""
        player = Player(1)
        turn = play_turn(player, GreedyStrategy(), ScriptedDice("15234", "111"))
        assert turn.throws == 2
        assert player.total_score == 1000

    def test_bust_banks_nothing(self):
        player = Player(1)
        player.total_score = 700
        player.scoring_unlocked = True
        turn = play_turn(player, GreedyStrategy(), ScriptedDice("15234", "246"))
        assert turn.throws == 2
        assert player.total_score == 700

    def test_cautious_banks_small_once_opened(self):
        player = Player(1)
        player.scoring_unlocked = True
        play_turn(player, CautiousStrategy(), ScriptedDice("15234"))
        assert player.total_score == 150

    def test_player_reset_after_turn(self):
        player = Player(1)
        play_turn(player, GreedyStrategy(), ScriptedDice("15234", "246"))
        assert player.round_score == 0
        assert player.current_roll is None
        assert player.valid_dice == DICE_PER_TURN


# ═══════════════════════════════════════════════════════════════════════════════
# 3. LEGALITY
# ═══════════════════════════════════════════════════════════════════════════════

class TestLegality:

    @pytest.mark.parametrize("strategy", all_strategies(), ids=strategy_ids())
    def test_many_turns_complete(self, strategy):
        random.seed(42)
        player = Player(1)
        for _ in range(200):
            before = player.total_score
            turn = play_turn(player, strategy)
            assert turn.is_complete
            assert turn.throws >= 1
            assert player.total_score >= before
            assert player.round_score == 0
            assert player.valid_dice == DICE_PER_TURN

    @pytest.mark.parametrize("strategy", all_strategies(), ids=strategy_ids())
    def test_scores_stay_multiples_of_fifty(self, strategy):
        random.seed(3)
        player = Player(1)
        for _ in range(100):
            play_turn(player, strategy)
            assert player.total_score % 50 == 0

    def test_greedy_outscores_random(self):
        def average(strategy, turns=400):
            random.seed(0)
            player = Player(1)
            for _ in range(turns):
                play_turn(player, strategy)
            return player.total_score / turns

        assert average(GreedyStrategy()) > average(RandomStrategy())
