# flappy.py
# Flappy - side-scrolling obstacle avoidance. Pure simulation, no pygame.
#
# Units: positions in px, velocities in px/frame, t and spawn_every in ms.

import logging
import random
from dataclasses import dataclass, field
from typing import List

from . import particles as fx
from .events import NewHighScore, RunEnded
from .geometry import circle_hits_rect

logger = logging.getLogger(__name__)

PIPE_W = 60
GROUND_H = 60
GAP_MARGIN = 90
CULL_MARGIN = 10
SPAWN_AHEAD = 20
MIN_SPACING = 2*PIPE_W
SEED_PIPES = 3
SEED_SPACING = 220
ACTOR_R = 14


@dataclass(frozen=True)
class Preset:
    gravity: float
    flap: float
    gap: float
    pipe_speed: float
    spawn_every: float


PRESETS = {
    "easy": Preset(gravity=0.45, flap=-7.5, gap=140, pipe_speed=2.4, spawn_every=1150),
    "normal": Preset(gravity=0.5, flap=-8, gap=125, pipe_speed=2.8, spawn_every=1050),
    "hard": Preset(gravity=0.55, flap=-8.2, gap=110, pipe_speed=3.2, spawn_every=950),
}


def preset_for(difficulty) -> Preset:
    return PRESETS[difficulty]


@dataclass
class Actor:
    x: float
    y: float
    vy: float = 0.0
    r: float = ACTOR_R


@dataclass
class Obstacle:
    x: float
    top: float
    passed: bool = False

    def rects(self, gap, ground_y):
        lower = self.top + gap
        return (self.x, 0, PIPE_W, self.top), (self.x, lower, PIPE_W, ground_y - lower)


@dataclass
class RunState:
    width: float
    height: float
    difficulty: str
    preset: Preset
    actor: Actor
    obstacles: List[Obstacle] = field(default_factory=list)
    particles: List[fx.Particle] = field(default_factory=list)
    t: float = 0.0
    last_spawn: float = 0.0
    alive: bool = True
    paused: bool = False
    score: int = 0
    best: int = 0

    @property
    def ground_y(self):
        return self.height - GROUND_H


def gap_range(state):
    return GAP_MARGIN, state.ground_y - GAP_MARGIN - state.preset.gap


def random_gap(state, rng):
    lo, hi = gap_range(state)
    # tiny surfaces collapse the range; pin to the top margin
    return lo + rng.random()*(hi - lo) if hi > lo else lo


def new_run(width, height, difficulty="normal", best=0, rng=None) -> RunState:
    rng = rng or random.Random()
    state = RunState(width=width, height=height, difficulty=difficulty,
                     preset=preset_for(difficulty),
                     actor=Actor(x=int(width*0.28), y=height/2), best=best)
    for i in range(1, SEED_PIPES + 1):
        state.obstacles.append(Obstacle(x=width + i*SEED_SPACING, top=random_gap(state, rng)))
    return state


def change_difficulty(state, difficulty, rng=None) -> RunState:
    """Switching presets mid-run throws the run away; the record survives."""
    return new_run(state.width, state.height, difficulty, best=state.best, rng=rng)


def flap(state, rng=None):
    if not state.alive or state.paused:
        return
    rng = rng or random.Random()
    a = state.actor
    a.vy = state.preset.flap
    state.particles.extend(fx.trail(a.x - 8, a.y + 4, rng))


def toggle_pause(state):
    if state.alive:
        state.paused = not state.paused
    return state.paused


def spawn(state, rng):
    """Append at the right edge. Skipped while the newest pipe is still too close,
    which keeps the list sorted by x and pipes from overlapping."""
    x = state.width + SPAWN_AHEAD
    if state.obstacles and x < state.obstacles[-1].x + MIN_SPACING:
        return None
    o = Obstacle(x=x, top=random_gap(state, rng))
    state.obstacles.append(o)
    return o


def end_run(state):
    state.alive = False
    events = [RunEnded(state.score)]
    if state.score > state.best:
        state.best = state.score
        events.append(NewHighScore(state.best))
    logger.debug("run over: score=%d best=%d difficulty=%s", state.score, state.best, state.difficulty)
    return events


def step(state, dt_ms, rng=None):
    """Advance one frame. Returns the events the host should act on."""
    if not state.alive or state.paused:
        return []
    rng = rng or random.Random()
    p = state.preset
    a = state.actor
    state.t += dt_ms

    a.vy += p.gravity
    a.y += a.vy

    state.particles = fx.advance(state.particles)

    for o in state.obstacles:
        o.x -= p.pipe_speed

    if state.t - state.last_spawn > p.spawn_every:
        spawn(state, rng)
        state.last_spawn = state.t

    while state.obstacles and state.obstacles[0].x + PIPE_W < -CULL_MARGIN:
        state.obstacles.pop(0)

    for o in state.obstacles:
        top, bottom = o.rects(p.gap, state.ground_y)
        if circle_hits_rect(a.x, a.y, a.r, top) or circle_hits_rect(a.x, a.y, a.r, bottom):
            return end_run(state)
        if not o.passed and o.x + PIPE_W < a.x:
            o.passed = True
            state.score += 1

    if a.y + a.r >= state.ground_y or a.y - a.r < 0:
        return end_run(state)
    return []


def resize(state, width, height):
    """Keep everything where it was relative to the surface.

    Pipe widths, the gap and the actor radius stay in px, so pipe tops are
    pulled back into the spawn range of the new surface.
    """
    sx = width / state.width; sy = height / state.height
    a = state.actor
    a.x *= sx; a.y *= sy
    for o in state.obstacles:
        o.x *= sx; o.top *= sy
    for pt in state.particles:
        pt.x *= sx; pt.y *= sy
    state.width, state.height = width, height
    lo, hi = gap_range(state)
    for o in state.obstacles:
        o.top = max(lo, min(o.top, hi))
    return state
