# pong.py
# Pong - player paddle vs a reactive bot. Pure simulation, no pygame.
#
# All spatial numbers are tuned on an 800x400 court and scaled by the real size.

import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List

from . import particles as fx
from .events import GameCompleted, PointScored
from .geometry import circle_touches_rect, clamp

logger = logging.getLogger(__name__)

REF_W, REF_H = 800, 400
PADDLE_W, PADDLE_H = 15, 80
PLAYER_X, BOT_INSET = 50, 65
PLAYER_SPEED = 8
SERVE_VX, SERVE_VY = 5, 4
BALL_SIZE = 8
DEADBAND = 10
SPIN = 2


class Phase(str, Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class Difficulty:
    bot_speed: float
    bot_reaction: float


DIFFICULTIES = {
    "Easy": Difficulty(bot_speed=4, bot_reaction=0.7),
    "Medium": Difficulty(bot_speed=6, bot_reaction=0.85),
    "Hard": Difficulty(bot_speed=8, bot_reaction=0.95),
}


@dataclass(frozen=True)
class Settings:
    difficulty: str = "Medium"
    win_condition: int = 10


@dataclass(frozen=True)
class Statistics:
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    total_score: int = 0
    best_win_streak: int = 0
    current_win_streak: int = 0

    FIELDS = (("games_played", "gamesPlayed"), ("wins", "wins"), ("losses", "losses"),
              ("total_score", "totalScore"), ("best_win_streak", "bestWinStreak"),
              ("current_win_streak", "currentWinStreak"))

    @property
    def win_rate(self):
        return round(self.wins / self.games_played * 100) if self.games_played else 0

    def record(self, player_won, player_score):
        """Fold one finished game into the totals."""
        streak = self.current_win_streak + 1 if player_won else 0
        return Statistics(
            games_played=self.games_played + 1,
            wins=self.wins + (1 if player_won else 0),
            losses=self.losses + (0 if player_won else 1),
            total_score=self.total_score + player_score,
            best_win_streak=max(self.best_win_streak, streak),
            current_win_streak=streak,
        )

    def to_record(self):
        return {key: getattr(self, attr) for attr, key in self.FIELDS}

    @classmethod
    def from_record(cls, raw):
        return cls(**{attr: int(raw.get(key, 0)) for attr, key in cls.FIELDS})


@dataclass
class Ball:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    size: float = BALL_SIZE


@dataclass
class Paddle:
    x: float
    y: float
    width: float = PADDLE_W
    height: float = PADDLE_H
    speed: float = PLAYER_SPEED

    @property
    def rect(self):
        return (self.x, self.y, self.width, self.height)

    @property
    def center(self):
        return self.y + self.height/2


@dataclass
class Score:
    player: int = 0
    bot: int = 0


@dataclass
class PongState:
    width: float
    height: float
    settings: Settings
    ball: Ball
    player: Paddle
    bot: Paddle
    score: Score = field(default_factory=Score)
    phase: Phase = Phase.MENU
    particles: List[fx.Particle] = field(default_factory=list)

    @property
    def wr(self):
        return self.width / REF_W

    @property
    def hr(self):
        return self.height / REF_H

    @property
    def difficulty(self) -> Difficulty:
        return DIFFICULTIES[self.settings.difficulty]


def new_game(width=REF_W, height=REF_H, settings=None, rng=None) -> PongState:
    settings = settings or Settings()
    wr, hr = width / REF_W, height / REF_H
    state = PongState(
        width=width, height=height, settings=settings,
        ball=Ball(x=width/2, y=height/2, size=BALL_SIZE*min(wr, hr)),
        player=Paddle(x=PLAYER_X*wr, y=0, width=PADDLE_W*wr),
        bot=Paddle(x=width - BOT_INSET*wr, y=0, width=PADDLE_W*wr,
                   speed=DIFFICULTIES[settings.difficulty].bot_speed),
    )
    reset_paddles(state)
    return state


def reset_paddles(state):
    h = PADDLE_H*state.hr
    for p in (state.player, state.bot):
        p.height = h
        p.y = state.height/2 - h/2


def serve(state, rng, direction=None):
    """Ball back to center; direction is +1/-1, random when None."""
    wr, hr = state.wr, state.hr
    b = state.ball
    if direction is None:
        direction = 1 if rng.random() > 0.5 else -1
    b.x, b.y = state.width/2, state.height/2
    b.vx = direction*SERVE_VX*wr
    b.vy = (rng.random() - 0.5)*SERVE_VY*hr
    b.size = BALL_SIZE*min(wr, hr)


def start_game(state, rng=None):
    rng = rng or random.Random()
    state.score = Score()
    state.particles = []
    state.bot.speed = state.difficulty.bot_speed
    reset_paddles(state)
    serve(state, rng)
    state.phase = Phase.PLAYING
    return state


def toggle_pause(state):
    if state.phase == Phase.PLAYING:
        state.phase = Phase.PAUSED
    elif state.phase == Phase.PAUSED:
        state.phase = Phase.PLAYING
    return state.phase


def return_to_menu(state):
    state.phase = Phase.MENU
    return state


def change_settings(state, difficulty=None, win_condition=None):
    """Settings only change between games."""
    if state.phase in (Phase.PLAYING, Phase.PAUSED):
        return False
    settings = state.settings
    if difficulty is not None:
        if difficulty not in DIFFICULTIES:
            raise KeyError(difficulty)
        settings = replace(settings, difficulty=difficulty)
    if win_condition is not None:
        settings = replace(settings, win_condition=int(win_condition))
    state.settings = settings
    state.bot.speed = state.difficulty.bot_speed
    return True


def move_player(state, direction):
    if state.phase != Phase.PLAYING:
        return
    p = state.player
    d = -1 if direction == "up" else 1
    p.y = clamp(p.y + d*p.speed*state.hr, 0, state.height - p.height)


def update_opponent(state, rng):
    """Chase the ball, but only on the frames the bot 'reacts'."""
    bot = state.bot
    if rng.random() >= state.difficulty.bot_reaction:
        return
    diff = state.ball.y - bot.center
    if abs(diff) <= DEADBAND:
        return
    d = 1 if diff > 0 else -1
    bot.y = clamp(bot.y + d*bot.speed*state.hr, 0, state.height - bot.height)


def update_ball(state, rng):
    b = state.ball
    hr = state.hr
    b.x += b.vx
    b.y += b.vy

    if (b.y <= b.size and b.vy < 0) or (b.y >= state.height - b.size and b.vy > 0):
        b.vy = -b.vy

    if b.vx < 0 and circle_touches_rect(b.x, b.y, b.size, state.player.rect):
        b.vx = -b.vx
        b.vy += (rng.random() - 0.5)*SPIN*hr
        state.particles.extend(fx.burst(b.x, b.y, rng, n=8, life=18))
    elif b.vx > 0 and circle_touches_rect(b.x, b.y, b.size, state.bot.rect):
        b.vx = -b.vx
        b.vy += (rng.random() - 0.5)*SPIN*hr
        state.particles.extend(fx.burst(b.x, b.y, rng, n=8, life=18))

    if b.x <= 0:
        state.score.bot += 1
        state.particles.extend(fx.burst(0, b.y, rng))
        serve(state, rng, direction=1)
        return [PointScored("bot")]
    if b.x >= state.width:
        state.score.player += 1
        state.particles.extend(fx.burst(state.width, b.y, rng))
        serve(state, rng, direction=-1)
        return [PointScored("player")]
    return []


def winner(state):
    target = state.settings.win_condition
    if state.score.player >= target:
        return "player"
    if state.score.bot >= target:
        return "bot"
    return None


def step(state, rng=None):
    """One frame of play. Returns events; only GameCompleted needs persisting."""
    if state.phase != Phase.PLAYING:
        return []
    rng = rng or random.Random()
    update_opponent(state, rng)
    events = update_ball(state, rng)
    state.particles = fx.advance(state.particles)
    w = winner(state)
    if w:
        state.phase = Phase.GAME_OVER
        s = state.score
        logger.debug("game over: %d-%d, %s wins", s.player, s.bot, w)
        events.append(GameCompleted(player_won=(w == "player"), player_score=s.player, bot_score=s.bot))
    return events


def resize(state, width, height):
    sx = width / state.width; sy = height / state.height
    b = state.ball
    b.x *= sx; b.y *= sy; b.vx *= sx; b.vy *= sy
    state.width, state.height = width, height
    b.size = BALL_SIZE*min(state.wr, state.hr)
    for p in (state.player, state.bot):
        p.y *= sy; p.height *= sy; p.width *= sx
    state.player.x = PLAYER_X*state.wr
    state.bot.x = width - BOT_INSET*state.wr
    for pt in state.particles:
        pt.x *= sx; pt.y *= sy
    return state
