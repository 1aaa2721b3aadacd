from __future__ import annotations

import copy
import random

import pytest

from twinarcade import flappy, pong
from twinarcade.pong import Phase, Statistics
from twinarcade.render import draw_flappy, draw_pong


@pytest.fixture()
def surface(pg):
    return pg.Surface((480, 640), 0, 32)


def test_flappy_painter_leaves_state_alone(surface, rng: random.Random) -> None:
    state = flappy.new_run(480, 640, "normal", best=3, rng=rng)
    flappy.flap(state, rng)
    for _ in range(5):
        flappy.step(state, 16, rng)
    before = copy.deepcopy(state)

    draw_flappy(surface, state)
    # sky colour at the very top
    assert surface.get_at((240, 0))[:3] == (125, 211, 252)

    state.paused = True
    before.paused = True
    draw_flappy(surface, state)

    assert state == before


def test_flappy_game_over_frame(surface, rng: random.Random) -> None:
    state = flappy.new_run(480, 640, "easy", rng=rng)
    state.alive = False
    draw_flappy(surface, state)


def test_missing_surface_is_a_no_op(rng: random.Random) -> None:
    draw_flappy(None, flappy.new_run(480, 640, rng=rng))
    draw_pong(None, pong.new_game(rng=rng))
    draw_pong(None, None)


@pytest.mark.parametrize("phase", list(Phase))
def test_pong_painter_every_phase(pg, rng: random.Random, phase: Phase) -> None:
    surf = pg.Surface((800, 400), 0, 32)
    state = pong.new_game(800, 400, rng=rng)
    pong.start_game(state, rng)
    pong.step(state, rng)
    state.phase = phase
    before = copy.deepcopy(state)

    draw_pong(surf, state, Statistics(games_played=2, wins=1, losses=1))

    assert state == before
    if phase == Phase.PLAYING:
        assert surf.get_at((2, 2))[:3] == (10, 10, 15)
