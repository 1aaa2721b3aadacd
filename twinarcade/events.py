# events.py
# What a step hands back to the host. The cores never write storage themselves;
# the host persists these.

from dataclasses import dataclass


@dataclass(frozen=True)
class RunEnded:
    score: int


@dataclass(frozen=True)
class NewHighScore:
    best: int


@dataclass(frozen=True)
class PointScored:
    side: str  # "player" or "bot"


@dataclass(frozen=True)
class GameCompleted:
    player_won: bool
    player_score: int
    bot_score: int
