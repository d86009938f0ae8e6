"""
Game Log Test Suite

Tests for the game log recording system.

Sections:
    1. Individual logging — roll, hold, bust field verification
    2. Filtering — get_turn_entries, get_turn_results
    3. Clear — empties all entries
    4. Ordering — multiple turns stay in order
"""

from game_log import GameLog

# ── 1. Individual logging ────────────────────────────────────────────────────


def test_log_roll():
    """log_roll creates an entry with correct fields."""
    log = GameLog()
    log.log_roll(round_number=1, player_index=0, dice_values=[1, 1, 1, 2, 3],
                 score=1000, round_score=1000, valid_dice=2)
    assert len(log.entries) == 1
    e = log.entries[0]
    assert e.round_number == 1
    assert e.player_index == 0
    assert e.event_type == "roll"
    assert e.dice_values == (1, 1, 1, 2, 3)
    assert e.score == 1000
    assert e.round_score == 1000
    assert e.valid_dice == 2


def test_log_hold():
    """log_hold records the banked points."""
    log = GameLog()
    log.log_hold(round_number=2, player_index=1, banked=450)
    e = log.entries[0]
    assert e.event_type == "hold"
    assert e.score == 450
    assert e.round_score == 450
    assert e.dice_values == ()


def test_log_bust():
    """log_bust records the losing dice and a zero score."""
    log = GameLog()
    log.log_bust(round_number=3, player_index=0, dice_values=(2, 3, 4))
    e = log.entries[0]
    assert e.event_type == "bust"
    assert e.dice_values == (2, 3, 4)
    assert e.score == 0
    assert e.round_score == 0


# ── 2. Filtering ─────────────────────────────────────────────────────────────


def _sample_log():
    log = GameLog()
    log.log_roll(1, 0, (1, 5, 2, 3, 4), 150, 0, 3)
    log.log_roll(1, 0, (1, 1, 1), 1000, 1000, 5)
    log.log_hold(1, 0, 1000)
    log.log_roll(1, 1, (2, 3, 4, 6, 6), 0, 0, 5)
    log.log_bust(1, 1, (2, 3, 4, 6, 6))
    log.log_roll(2, 0, (5, 5, 5, 2, 3), 500, 500, 2)
    log.log_hold(2, 0, 500)
    return log


def test_get_turn_entries():
    """Only entries for the requested round and player come back."""
    log = _sample_log()
    entries = log.get_turn_entries(1, 0)
    assert [e.event_type for e in entries] == ["roll", "roll", "hold"]
    assert log.get_turn_entries(2, 1) == []


def test_get_turn_results_all_players():
    """Turn results are the hold and bust entries, in order."""
    results = _sample_log().get_turn_results()
    assert [(e.player_index, e.event_type, e.score) for e in results] == [
        (0, "hold", 1000), (1, "bust", 0), (0, "hold", 500)]


def test_get_turn_results_one_player():
    results = _sample_log().get_turn_results(player_index=0)
    assert [e.score for e in results] == [1000, 500]


# ── 3. Clear ─────────────────────────────────────────────────────────────────


def test_clear():
    """clear() empties the log."""
    log = _sample_log()
    log.clear()
    assert log.entries == []
    assert log.get_turn_results() == []


# ── 4. Ordering ──────────────────────────────────────────────────────────────


def test_entries_keep_insertion_order():
    """Entries across rounds stay in the order they were logged."""
    log = _sample_log()
    assert [e.round_number for e in log.entries] == [1, 1, 1, 1, 1, 2, 2]
    assert [e.player_index for e in log.entries] == [0, 0, 0, 1, 1, 0, 0]
