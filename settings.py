"""Persistent settings for Being Lucky.

Stores user preferences in ~/.being_lucky_settings.json.
Command-line flags override these for a single session.
"""

import json
from pathlib import Path

SPEED_NAMES = ["slow", "normal", "fast"]

DEFAULTS = {
    "speed": "normal",
    "dark_mode": False,
    "pacing": True,
    "clear_screen": True,
}


def _default_path():
    return Path.home() / ".being_lucky_settings.json"


def _valid(key, value):
    """Whether a stored value can be used for `key`."""
    if key == "speed":
        return value in SPEED_NAMES
    return isinstance(value, bool)


def load_settings(path=None):
    """Load settings from JSON file. Returns DEFAULTS on missing/corrupt.

    Each known key is taken from the file only when its value is usable: a
    speed name for "speed", a boolean for the switches. Anything else keeps
    the default, and unknown keys are ignored.
    """
    path = Path(path) if path is not None else _default_path()
    try:
        data = json.loads(path.read_text())
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return dict(DEFAULTS)
    if not isinstance(data, dict):
        return dict(DEFAULTS)
    return {key: data[key] if key in data and _valid(key, data[key]) else default
            for key, default in DEFAULTS.items()}


def save_settings(settings, path=None):
    """Write the known settings keys to JSON. Write errors are ignored."""
    path = Path(path) if path is not None else _default_path()
    known = {key: settings[key] for key in DEFAULTS if key in settings}
    try:
        path.write_text(json.dumps(known, indent=2))
    except OSError:
        pass


def apply_cli_overrides(settings, args):
    """Return a copy of settings with command-line flags applied on top.

    Flags that were not given leave the stored value alone.
    """
    result = dict(settings)
    if getattr(args, "speed", None):
        result["speed"] = args.speed
    if getattr(args, "no_pacing", False):
        result["pacing"] = False
    if getattr(args, "no_clear", False):
        result["clear_screen"] = False
    return result
