from __future__ import annotations

import random
from collections import defaultdict

import pytest

from twinarcade import config, flappy
from twinarcade.games import FlappyGame, PongGame
from twinarcade.pong import Phase, Statistics
from twinarcade.storage import BEST_KEY, STATS_KEY, HighScoreStore, StatisticsStore


@pytest.fixture()
def screen(pg):
    return pg.display.set_mode((480, 640))


@pytest.fixture()
def settings(tmp_path):
    return config.load_settings(tmp_path / "settings.json")


def _key(pg, key):
    return pg.event.Event(pg.KEYDOWN, key=key, mod=0, unicode="", scancode=0)


def test_flappy_new_high_score_is_persisted(pg, screen, settings, memory_kv) -> None:
    kv = memory_kv({BEST_KEY: 2})
    game = FlappyGame(settings, HighScoreStore(kv), (480, 640), rng=random.Random(5))
    game.surface = screen
    assert game.state.best == 2

    game.state.score = 6
    game.state.actor.y = game.state.ground_y
    game.driver.schedule()
    game.driver.pump(16)

    assert not game.state.alive
    assert kv.data[BEST_KEY] == 6


def test_flappy_keys_drive_the_run(pg, screen, settings, memory_kv) -> None:
    game = FlappyGame(settings, HighScoreStore(memory_kv()), (480, 640), rng=random.Random(5))
    game.surface = screen

    game.handle_event(_key(pg, pg.K_SPACE))
    assert game.state.actor.vy == flappy.PRESETS["normal"].flap

    game.handle_event(_key(pg, pg.K_p))
    assert game.state.paused and game.frozen

    old = game.state
    game.handle_event(_key(pg, pg.K_r))
    assert game.state is not old
    assert game.driver.scheduled

    game.handle_event(_key(pg, pg.K_3))
    assert game.state.difficulty == "hard"
    assert settings["flappy_difficulty"] == "hard"

    game.handle_event(_key(pg, pg.K_ESCAPE))
    assert game.done and not game.driver.scheduled


def test_flappy_restart_keeps_best(pg, screen, settings, memory_kv) -> None:
    game = FlappyGame(settings, HighScoreStore(memory_kv({BEST_KEY: 8})), (480, 640))
    game.restart()
    assert game.state.best == 8
    assert game.state.score == 0


def test_pong_completed_game_updates_statistics_once(pg, screen, settings, memory_kv) -> None:
    settings["win_condition"] = 5
    kv = memory_kv({STATS_KEY: Statistics(games_played=4, wins=1, losses=3, current_win_streak=1).to_record()})
    game = PongGame(settings, StatisticsStore(kv), (800, 400), rng=random.Random(11))
    game.surface = screen

    game.handle_event(_key(pg, pg.K_RETURN))
    assert game.state.phase == Phase.PLAYING
    assert game.state.settings.win_condition == 5

    game.state.score.player = 4
    game.state.bot.y = 0
    b = game.state.ball
    b.x, b.y, b.vx, b.vy = 798, 300, 10, 0
    game.driver.pump(16)
    game.driver.pump(16)

    assert game.state.phase == Phase.GAME_OVER
    saved = Statistics.from_record(kv.data[STATS_KEY])
    assert saved == Statistics(games_played=5, wins=2, losses=3, total_score=5,
                               best_win_streak=2, current_win_streak=2)
    assert game.stats == saved


def test_pong_pause_and_escape(pg, screen, settings, memory_kv) -> None:
    game = PongGame(settings, StatisticsStore(memory_kv()), (800, 400))
    game.surface = screen
    game.handle_event(_key(pg, pg.K_RETURN))

    game.handle_event(_key(pg, pg.K_p))
    assert game.state.phase == Phase.PAUSED and game.frozen

    game.handle_event(_key(pg, pg.K_ESCAPE))
    assert game.state.phase == Phase.MENU and not game.done

    game.handle_event(_key(pg, pg.K_ESCAPE))
    assert game.done


def test_pong_mouse_held_in_a_half_moves_the_paddle(pg, screen, settings, memory_kv, monkeypatch) -> None:
    game = PongGame(settings, StatisticsStore(memory_kv()), (800, 400))
    game.handle_event(_key(pg, pg.K_RETURN))
    monkeypatch.setattr(pg.key, "get_pressed", lambda: defaultdict(bool))
    buttons = [(True, False, False)]
    pos = [(400, 50)]
    monkeypatch.setattr(pg.mouse, "get_pressed", lambda *a, **kw: buttons[0])
    monkeypatch.setattr(pg.mouse, "get_pos", lambda: pos[0])
    player = game.state.player
    y = player.y

    game.poll_paddle()
    assert player.y == pytest.approx(y - player.speed)

    pos[0] = (400, 350)
    game.poll_paddle()
    game.poll_paddle()
    assert player.y == pytest.approx(y + player.speed)

    buttons[0] = (False, False, False)
    game.poll_paddle()
    assert player.y == pytest.approx(y + player.speed)
