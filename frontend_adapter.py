"""FrontendAdapter — Shared UI state management for Being Lucky frontends.

Owns the display interface the coordinator renders through, overlay state,
the AI-decision caption, and settings persistence. Pure Python — no Textual
or other frontend dependency.

Each frontend (console, TUI) supplies a DisplayInterface for the coordinator
to call; the TUI additionally wraps its GameCoordinator in a FrontendAdapter
and delegates UI-state logic here, keeping only rendering and input
translation frontend-specific.
"""

from abc import ABC, abstractmethod

from settings import load_settings, save_settings


# ── Display interface ─────────────────────────────────────────────────────────

class DisplayInterface(ABC):
    """Abstract render collaborator — each frontend provides its own implementation."""

    @abstractmethod
    def render_turn_state(self, player): ...

    @abstractmethod
    def render_bust_message(self): ...

    @abstractmethod
    def render_final_scores(self, players): ...

    def render_decision(self, player, reason):
        """Show why a computer player threw or held. Optional."""


class NullDisplay(DisplayInterface):
    """No-op display for headless play, simulations and tests."""

    def render_turn_state(self, player): pass
    def render_bust_message(self): pass
    def render_final_scores(self, players): pass


# ── Frontend Adapter ──────────────────────────────────────────────────────────

class FrontendAdapter:
    """Shared UI state management for interactive frontends.

    Wraps a GameCoordinator and manages overlays, settings, and the
    human throw/hold entry points.
    """

    def __init__(self, coordinator, settings_path=None):
        self.coordinator = coordinator
        self.settings_path = settings_path

        # Overlay state
        self.showing_help = False
        self.showing_replay = False

        # Settings
        self.dark_mode = False

    # ── Overlay management ────────────────────────────────────────────────

    def toggle_help(self):
        """Toggle the help overlay; closes replay."""
        self.showing_help = not self.showing_help
        if self.showing_help:
            self.showing_replay = False

    def toggle_replay(self):
        """Toggle the replay overlay. Only available once the game is over."""
        if self.showing_replay:
            self.showing_replay = False
            return
        if self.coordinator.game_over:
            self.showing_replay = True
            self.showing_help = False

    def close_top_overlay(self):
        """Close whichever overlay is showing. Returns True if one was closed."""
        if self.showing_help:
            self.showing_help = False
            return True
        if self.showing_replay:
            self.showing_replay = False
            return True
        return False

    @property
    def has_active_overlay(self):
        return self.showing_help or self.showing_replay

    # ── Human input ──────────────────────────────────────────────────────

    def can_act(self):
        """Whether a human may throw or hold right now."""
        coord = self.coordinator
        return (coord.is_current_player_human and not coord.game_over
                and not coord.turn_transition and not self.has_active_overlay)

    def do_throw(self):
        """Throw for the current human player. Returns True if the dice were rolled."""
        if not self.can_act():
            return False
        return self.coordinator.throw()

    def do_hold(self):
        """Hold for the current human player. Returns True if the turn ended."""
        if not self.can_act():
            return False
        return self.coordinator.hold()

    def do_reset(self):
        """Start a new game with the same players."""
        self.coordinator.reset_game()
        self.showing_replay = False

    # ── Per-frame ────────────────────────────────────────────────────────

    def update(self):
        """Advance the coordinator one frame unless an overlay pauses play."""
        if self.has_active_overlay:
            return
        self.coordinator.tick()

    @property
    def status_caption(self):
        """Short text describing what happens next."""
        coord = self.coordinator
        if coord.game_over:
            return "Game over"
        if coord.turn_transition:
            if coord.last_turn_busted:
                return "Bust! Round points lost"
            return f"{coord.current_player.name}'s turn"
        if coord.current_ai_strategy is not None:
            return coord.ai_reason or "Thinking..."
        return "(T)hrow dice or (H)old score"

    # ── Settings ─────────────────────────────────────────────────────────

    def load_settings(self):
        """Apply persisted display settings. Speed is chosen at startup."""
        settings = load_settings(self.settings_path)
        self.dark_mode = bool(settings["dark_mode"])
        return settings

    def save_settings(self):
        settings = load_settings(self.settings_path)
        settings["dark_mode"] = self.dark_mode
        settings["speed"] = self.coordinator.speed_name
        save_settings(settings, self.settings_path)

    def toggle_dark_mode(self):
        self.dark_mode = not self.dark_mode
        self.save_settings()

    def change_speed(self, direction):
        """Change AI speed and persist it. Returns True if it changed."""
        changed = self.coordinator.change_speed(direction)
        if changed:
            self.save_settings()
        return changed
