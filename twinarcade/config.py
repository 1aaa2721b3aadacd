# config.py
# Window constants, colors, difficulty presets and the settings file.

import logging
import os
from pathlib import Path

import pygame

from .storage import load_json, save_json

logger = logging.getLogger(__name__)

WIDTH, HEIGHT = 800, 600
FPS = 60
PAUSE_FPS = 15

DATA_ENV = "TWINARCADE_DATA_DIR"
SCORES_NAME = "scores.json"
SETTINGS_NAME = "settings.json"

COLS = {
    "bg":(12,14,24),"panel":(24,28,44),"accent":(245,188,66),
    "white":(235,235,235),"muted":(150,150,160),"danger":(220,80,80),
    "good":(80,200,120),"cyan":(0,255,255),"magenta":(255,0,255),
    "ink":(17,24,39),
}

FLAPPY_DIFFICULTIES = ["easy", "normal", "hard"]
PONG_DIFFICULTIES = ["Easy", "Medium", "Hard"]
WIN_CONDITIONS = [5, 10, 20]

DEFAULT_KEYS = {
    "up": pygame.K_UP,
    "down": pygame.K_DOWN,
    "alt_up": pygame.K_w,
    "alt_down": pygame.K_s,
    "flap": pygame.K_SPACE,
    "pause": pygame.K_p,
    "restart": pygame.K_r,
    "enter": pygame.K_RETURN,
    "escape": pygame.K_ESCAPE,
}
DEFAULT_SETTINGS = {
    "flappy_difficulty": "normal",
    "pong_difficulty": "Medium",
    "win_condition": 10,
    "keys": DEFAULT_KEYS,
}


def data_dir(override=None):
    """CLI flag first, then $TWINARCADE_DATA_DIR, then the working directory."""
    raw = override or os.environ.get(DATA_ENV) or "."
    return Path(raw).expanduser()


def check_choice(value, choices, what):
    if value not in choices:
        raise ValueError(f"unknown {what} {value!r}, expected one of {', '.join(map(str, choices))}")
    return value


def load_settings(path):
    raw = load_json(path, {})
    settings = {k: (dict(v) if isinstance(v, dict) else v) for k, v in DEFAULT_SETTINGS.items()}
    if not isinstance(raw, dict):
        logger.warning("ignoring settings file %s: not an object", path)
        return settings
    for key, choices in (("flappy_difficulty", FLAPPY_DIFFICULTIES),
                         ("pong_difficulty", PONG_DIFFICULTIES),
                         ("win_condition", WIN_CONDITIONS)):
        if key not in raw:
            continue
        if raw[key] in choices:
            settings[key] = raw[key]
        else:
            logger.warning("ignoring %s=%r from %s", key, raw[key], path)
    keys = raw.get("keys")
    if isinstance(keys, dict):
        for name, code in keys.items():
            if name in DEFAULT_KEYS and isinstance(code, int):
                settings["keys"][name] = code
    return settings


def save_settings(path, settings):
    return save_json(path, settings)


def apply_overrides(settings, flappy_difficulty=None, pong_difficulty=None, win_condition=None):
    if flappy_difficulty is not None:
        settings["flappy_difficulty"] = check_choice(flappy_difficulty.lower(), FLAPPY_DIFFICULTIES, "flappy difficulty")
    if pong_difficulty is not None:
        settings["pong_difficulty"] = check_choice(pong_difficulty.capitalize(), PONG_DIFFICULTIES, "pong difficulty")
    if win_condition is not None:
        settings["win_condition"] = check_choice(win_condition, WIN_CONDITIONS, "win condition")
    return settings
