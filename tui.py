#!/usr/bin/env python3
"""
Being Lucky TUI — Terminal-based frontend using Textual.

Keyboard-driven interface with box-art dice, a scoreboard bar,
help/replay overlays, and computer players animated frame by frame.
"""
import logging
import sys

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, Center
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Static

from frontend_adapter import FrontendAdapter
from game_coordinator import (
    GameCoordinator, build_player_configs, parse_args,
)
from game_engine import DICE_PER_TURN, FINAL_ROUND_POINTS, MINIMUM_STARTING_SCORE
from settings import apply_cli_overrides, load_settings

logger = logging.getLogger(__name__)


# ── Box-art die faces ─────────────────────────────────────────────────────────

BOX_ART = {
    1: [
        "┌───────┐",
        "│       │",
        "│   ●   │",
        "│       │",
        "└───────┘",
    ],
    2: [
        "┌───────┐",
        "│ ●     │",
        "│       │",
        "│     ● │",
        "└───────┘",
    ],
    3: [
        "┌───────┐",
        "│ ●     │",
        "│   ●   │",
        "│     ● │",
        "└───────┘",
    ],
    4: [
        "┌───────┐",
        "│ ●   ● │",
        "│       │",
        "│ ●   ● │",
        "└───────┘",
    ],
    5: [
        "┌───────┐",
        "│ ●   ● │",
        "│   ●   │",
        "│ ●   ● │",
        "└───────┘",
    ],
    6: [
        "┌───────┐",
        "│ ●   ● │",
        "│ ●   ● │",
        "│ ●   ● │",
        "└───────┘",
    ],
}

BOX_ART_CUP = [
    "┌───────┐",
    "│       │",
    "│   ?   │",
    "│       │",
    "└───────┘",
]


def render_dice_box(faces, cup_count=0):
    """Render rolled faces as box art side by side, followed by `cup_count` unrolled dice."""
    faces = tuple(faces)
    if not faces and cup_count == 0:
        cup_count = DICE_PER_TURN
    lines = []
    for row in range(5):
        parts = [BOX_ART[face][row] for face in faces]
        parts.extend(BOX_ART_CUP[row] for _ in range(cup_count))
        lines.append("  ".join(parts))
    return "\n".join(lines)


# ── Widgets ──────────────────────────────────────────────────────────────────

class DiceDisplay(Static):
    """The last throw of the current turn, or the dice waiting in the cup."""

    def render(self):
        coord = self.app.coordinator
        player = coord.current_player
        if player.current_roll is not None:
            return render_dice_box(player.current_roll.faces)
        if coord.turn_transition and coord.last_roll is not None:
            # Still showing the throw that ended the previous turn
            return render_dice_box(coord.last_roll.faces)
        return render_dice_box((), cup_count=player.valid_dice)


class StatusDisplay(Static):
    """Current player's turn numbers and what to do next."""

    def render(self):
        app = self.app
        coord = app.coordinator
        player = coord.current_player
        lines = []

        if coord.game_over:
            lines.append("[bold]GAME OVER![/bold]")
        else:
            lines.append(f"[bold]{player.name}[/bold]")
            if player.current_roll is not None:
                lines.append(f"Last roll points: {player.current_roll.throw_score}")
            lines.append(f"Available dice: {player.valid_dice}")
            lines.append(f"Round score: {player.round_score}")
            lines.append(f"Cumulative score: {player.total_score}")
            if not player.scoring_unlocked:
                lines.append(f"[dim]Needs {MINIMUM_STARTING_SCORE} in one throw to open[/dim]")
            lines.append("")
            lines.append(app.adapter.status_caption)

        return "\n".join(lines)


class ScoreboardDisplay(Static):
    """One line per player with the current seat marked."""

    def render(self):
        coord = self.app.coordinator
        lines = [f"[bold]Round {coord.round_number}[/bold]"]
        if coord.final_round and not coord.game_over:
            trigger = coord.players[coord.first_finisher].name
            lines.append(f"[bold yellow]Final round! {trigger} reached {FINAL_ROUND_POINTS}[/bold yellow]")
        for i, player in enumerate(coord.players):
            marker = "▸" if i == coord.current_player_index and not coord.game_over else " "
            opened = "" if player.scoring_unlocked else " [dim](not open)[/dim]"
            lines.append(f"{marker} {player.name:<14} {player.total_score:>6}{opened}")
        if coord.has_any_ai:
            lines.append("")
            lines.append(f"Speed: {coord.speed_name.capitalize()} (+/-)")
        return "\n".join(lines)


class GameOverDisplay(Static):
    """Shows game over summary."""

    def render(self):
        coord = self.app.coordinator

        if not coord.game_over:
            return ""

        lines = ["", "[bold]═══ GAME OVER ═══[/bold]", ""]
        leaders = coord.leaders()
        if len(leaders) == 1:
            lines.append(f"[bold]{leaders[0]} wins![/bold]")
        else:
            lines.append(f"[bold]Tie: {', '.join(leaders)}[/bold]")
        lines.append("")
        for name, total in coord.final_scores():
            marker = " *" if name in leaders else ""
            lines.append(f"  {name}: {total}{marker}")

        lines.append("")
        lines.append("[dim]Press N for new game, R for replay[/dim]")
        return "\n".join(lines)


# ── Modal Screens ────────────────────────────────────────────────────────────

class HelpScreen(ModalScreen):
    """Help overlay showing key bindings and scoring."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("question_mark", "dismiss", "Close"),
        Binding("f1", "dismiss", "Close"),
    ]

    def compose(self) -> ComposeResult:
        controls = [
            ("T / Space", "Throw dice"),
            ("H / Enter", "Hold and bank round score"),
            ("+/-", "AI speed"),
            ("D", "Dark mode"),
            ("R", "Game replay (after game)"),
            ("N", "New game (after game)"),
            ("Esc", "Close overlay / Quit"),
            ("? / F1", "This help screen"),
        ]
        text = "[bold]CONTROLS[/bold]\n\n"
        for key, desc in controls:
            text += f"  {key:<20} {desc}\n"
        text += "\n[bold]SCORING[/bold]\n\n"
        text += "  Three 1s 1000   Three 6s 600   Three 5s 500\n"
        text += "  Three 4s 400    Three 3s 300   Three 2s 200\n"
        text += "  Single 1 100    Single 5 50\n\n"
        text += f"  Open with {MINIMUM_STARTING_SCORE}+ in one throw. A throw worth 0 loses the round.\n"
        text += f"  First to {FINAL_ROUND_POINTS} starts the final round.\n"
        text += "\n[dim]Press Esc or ? to close[/dim]"
        yield Center(Static(text, id="help-panel"))

    def on_unmount(self):
        self.app.adapter.showing_help = False


class ReplayScreen(ModalScreen):
    """Post-game replay overlay."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("r", "dismiss", "Close"),
    ]

    def compose(self) -> ComposeResult:
        yield Center(Static(self._build_text(), id="replay-panel"))

    def on_unmount(self):
        self.app.adapter.showing_replay = False

    def _build_text(self):
        coord = self.app.coordinator
        game_log = coord.game_log

        text = "[bold]GAME REPLAY[/bold]\n\n"
        results = game_log.get_turn_results()
        if not results:
            text += "  No replay data available.\n"
        else:
            for entry in results:
                turn_entries = game_log.get_turn_entries(entry.round_number, entry.player_index)
                rolls = [e for e in turn_entries if e.event_type == "roll"]
                dice_str = " → ".join(
                    "".join(str(v) for v in r.dice_values) for r in rolls) or "no throw"
                name = coord.players[entry.player_index].name
                outcome = "BUST" if entry.event_type == "bust" else f"+{entry.score}"
                line = f"R{entry.round_number} {name}: {dice_str} → {outcome}"
                if len(line) > 70:
                    line = line[:67] + "..."
                text += f"  {line}\n"

        text += "\n[dim]R or Esc to close[/dim]"
        return text


# ── Main App ─────────────────────────────────────────────────────────────────

class BeingLuckyApp(App):
    """Being Lucky terminal UI application."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #game-area {
        layout: horizontal;
        height: 1fr;
    }

    #dice-panel {
        width: 60;
        padding: 1 2;
    }

    #scoreboard-panel {
        width: 1fr;
        padding: 1 2;
    }

    #dice-display {
        height: auto;
    }

    #status-display {
        height: auto;
        margin-top: 1;
    }

    #game-over-display {
        height: auto;
    }

    #help-panel, #replay-panel {
        padding: 2 4;
        border: thick $accent;
        background: $surface;
        width: 70;
        height: auto;
        max-height: 80vh;
    }
    """

    BINDINGS = [
        Binding("t", "throw", "Throw", show=True),
        Binding("space", "throw", "Throw"),
        Binding("h", "hold", "Hold", show=True),
        Binding("enter", "hold", "Hold"),
        Binding("question_mark", "help", "Help"),
        Binding("f1", "help", "Help"),
        Binding("r", "replay", "Replay"),
        Binding("d", "dark", "Dark mode"),
        Binding("plus", "speed_up", "+Speed"),
        Binding("equals", "speed_up", "+Speed"),
        Binding("minus", "speed_down", "-Speed"),
        Binding("n", "new_game", "New game"),
        Binding("escape", "quit_or_close", "Quit"),
    ]

    def __init__(self, coordinator):
        super().__init__()
        self.coordinator = coordinator
        self.adapter = FrontendAdapter(self.coordinator)
        self._tick_timer = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="game-area"):
            with Vertical(id="dice-panel"):
                yield DiceDisplay(id="dice-display")
                yield StatusDisplay(id="status-display")
                yield GameOverDisplay(id="game-over-display")
            with Vertical(id="scoreboard-panel"):
                yield ScoreboardDisplay(id="scoreboard-display")
        yield Footer()

    def on_mount(self):
        self.title = "Being Lucky"
        self.adapter.load_settings()
        self._apply_theme()
        self._tick_timer = self.set_interval(1 / 20, self._game_tick)

    def _apply_theme(self):
        self.theme = "textual-dark" if self.adapter.dark_mode else "textual-light"

    def _game_tick(self):
        """Per-frame game update at ~20 FPS."""
        self.adapter.update()
        self._refresh_display()

    def _refresh_display(self):
        """Refresh all display widgets."""
        try:
            self.query_one("#dice-display", DiceDisplay).refresh()
            self.query_one("#status-display", StatusDisplay).refresh()
            self.query_one("#scoreboard-display", ScoreboardDisplay).refresh()
            self.query_one("#game-over-display", GameOverDisplay).refresh()
        except Exception:
            logger.debug("Refresh error", exc_info=True)

    # ── Actions ──────────────────────────────────────────────────────────

    def action_throw(self):
        if self.adapter.do_throw():
            self._refresh_display()

    def action_hold(self):
        if self.adapter.do_hold():
            self._refresh_display()

    def action_help(self):
        self.adapter.toggle_help()
        self.push_screen(HelpScreen())

    def action_replay(self):
        if self.coordinator.game_over:
            self.adapter.toggle_replay()
            self.push_screen(ReplayScreen())

    def action_dark(self):
        self.adapter.toggle_dark_mode()
        self._apply_theme()
        self._refresh_display()

    def action_speed_up(self):
        self.adapter.change_speed(+1)
        self._refresh_display()

    def action_speed_down(self):
        self.adapter.change_speed(-1)
        self._refresh_display()

    def action_new_game(self):
        if self.coordinator.game_over:
            self.adapter.do_reset()
            self._refresh_display()

    def action_quit_or_close(self):
        # If any screen is stacked, pop it
        if len(self.screen_stack) > 1:
            self.pop_screen()
        else:
            self.exit()


def main(argv=None):
    """Entry point for the TUI."""
    args = parse_args(argv)
    settings = apply_cli_overrides(load_settings(), args)
    speed = settings["speed"]

    tokens = args.players or ["human", "human"]
    try:
        players = build_player_configs(tokens, args.names)
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    coordinator = GameCoordinator(players, speed=speed)
    app = BeingLuckyApp(coordinator)
    app.run()


if __name__ == "__main__":
    main()
