"""Tests for tui.py — box-art rendering and a headless Textual session."""

import asyncio

import pytest

from game_coordinator import GameCoordinator
from game_engine import parse_faces
from tui import BOX_ART, BOX_ART_CUP, BeingLuckyApp, render_dice_box


class ScriptedDice:
    """Dice source returning predefined rolls in order."""

    def __init__(self, *rolls):
        self.rolls = [parse_faces(r) for r in rolls]

    def __call__(self, count):
        faces = self.rolls.pop(0)
        assert len(faces) == count
        return faces


# ── Box art ──────────────────────────────────────────────────────────────────


def test_box_art_covers_every_face():
    assert sorted(BOX_ART) == [1, 2, 3, 4, 5, 6]
    assert all(len(rows) == 5 for rows in BOX_ART.values())


def test_render_faces_side_by_side():
    lines = render_dice_box((1, 6)).split("\n")
    assert len(lines) == 5
    assert lines[2] == BOX_ART[1][2] + "  " + BOX_ART[6][2]


def test_render_with_cup():
    lines = render_dice_box((5,), cup_count=2).split("\n")
    assert lines[2] == "  ".join([BOX_ART[5][2], BOX_ART_CUP[2], BOX_ART_CUP[2]])


def test_render_empty_shows_full_cup():
    assert render_dice_box(()) == render_dice_box((), cup_count=5)


# ── Headless app ─────────────────────────────────────────────────────────────


@pytest.fixture
def home(monkeypatch, tmp_path):
    """Keep settings reads and writes inside a temp directory."""
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


def test_throw_and_hold_keys(home):
    coordinator = GameCoordinator([("Ada", None), ("Bob", None)],
                                  dice_source=ScriptedDice("11123"))

    async def scenario():
        app = BeingLuckyApp(coordinator)
        async with app.run_test() as pilot:
            coordinator.turn_transition = False
            await pilot.press("t")
            assert coordinator.current_player.round_score == 1000
            await pilot.press("h")
            assert coordinator.players[0].total_score == 1000
            assert coordinator.current_player_index == 1

    asyncio.run(scenario())


def test_help_overlay_blocks_input(home):
    coordinator = GameCoordinator([("Ada", None), ("Bob", None)])

    async def scenario():
        app = BeingLuckyApp(coordinator)
        async with app.run_test() as pilot:
            coordinator.turn_transition = False
            await pilot.press("question_mark")
            assert app.adapter.showing_help
            await pilot.press("h")
            assert coordinator.current_player_index == 0
            await pilot.press("escape")
            await pilot.pause()
            assert not app.adapter.showing_help

    asyncio.run(scenario())
