# games.py
# pygame hosts for the two cores: input adapters, frame driving, persistence.

import logging
import random
import sys

import pygame

from . import flappy, pong
from .config import FPS, PAUSE_FPS
from .events import GameCompleted, NewHighScore
from .loop import FrameDriver
from .render import draw_flappy, draw_pong

logger = logging.getLogger(__name__)


class QuitRequested(Exception):
    """Window closed while a game was running."""


class BaseGame:
    name = "Base"
    def __init__(self, settings, rng=None):
        self.settings = settings
        self.keys = settings["keys"]
        self.rng = rng or random.Random()
        self.driver = FrameDriver(self.frame)
        self.done = False

    # subclasses fill these in
    def handle_event(self, ev): pass
    def update(self, dt): return []
    def draw(self, surf): pass
    def on_resize(self, w, h): pass
    def persist(self, event): pass

    @property
    def frozen(self):
        return False

    def frame(self, dt_ms):
        for ev in self.update(dt_ms):
            self.persist(ev)
        self.draw(self.surface)

    def restart(self):
        # drop the pending frame before the old state goes away
        self.driver.cancel()
        self.reset()
        self.driver.schedule()

    def reset(self): pass

    def stop(self):
        self.driver.cancel()
        self.done = True

    def run(self, screen, clock):
        """Blocking loop until the player leaves to the menu."""
        self.surface = screen
        self.driver.schedule()
        while not self.done:
            dt_ms = clock.tick(PAUSE_FPS if self.frozen else FPS)
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    self.stop()
                    raise QuitRequested()
                if ev.type == pygame.VIDEORESIZE:
                    self.surface = pygame.display.get_surface()
                    self.on_resize(*self.surface.get_size())
                    continue
                self.handle_event(ev)
                if self.done: break
            if self.done: break
            self.driver.pump(dt_ms)
            pygame.display.flip()


# ---------- Flappy ----------
DIFF_KEYS = {pygame.K_1: "easy", pygame.K_2: "normal", pygame.K_3: "hard"}


class FlappyGame(BaseGame):
    """
    Flappy - Space/click to flap, P pause, R restart, Esc menu, 1/2/3 difficulty
    """
    name = "Flappy"
    def __init__(self, settings, best_store, size, rng=None):
        super().__init__(settings, rng)
        self.best_store = best_store
        self.size = size
        self.state = flappy.new_run(*size, settings["flappy_difficulty"], best_store.load(), self.rng)

    def reset(self):
        self.state = flappy.new_run(*self.size, self.settings["flappy_difficulty"], self.state.best, self.rng)

    def set_difficulty(self, difficulty):
        self.settings["flappy_difficulty"] = difficulty
        self.driver.cancel()
        self.state = flappy.change_difficulty(self.state, difficulty, self.rng)
        self.driver.schedule()

    @property
    def frozen(self):
        return self.state.paused

    def handle_event(self, ev):
        k = self.keys
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            flappy.flap(self.state, self.rng)
        if ev.type != pygame.KEYDOWN:
            return
        if ev.key == k["escape"]:
            self.stop()
        elif ev.key == k["flap"]:
            flappy.flap(self.state, self.rng)
        elif ev.key == k["pause"]:
            flappy.toggle_pause(self.state)
        elif ev.key == k["restart"]:
            self.restart()
        elif ev.key in DIFF_KEYS and DIFF_KEYS[ev.key] != self.state.difficulty:
            self.set_difficulty(DIFF_KEYS[ev.key])

    def update(self, dt):
        return flappy.step(self.state, dt, self.rng)

    def persist(self, event):
        if isinstance(event, NewHighScore):
            self.best_store.save(event.best)
            logger.info("new best score %d", event.best)

    def draw(self, surf):
        draw_flappy(surf, self.state)

    def on_resize(self, w, h):
        self.size = (w, h)
        flappy.resize(self.state, w, h)


# ---------- Pong ----------
class PongGame(BaseGame):
    """
    Pong - Up/Down (or W/S, or hold the mouse above/below the middle) move,
    Enter start, P pause, Esc menu
    """
    name = "Pong"
    def __init__(self, settings, stats_store, size, rng=None):
        super().__init__(settings, rng)
        self.stats_store = stats_store
        self.stats = stats_store.load()
        self.state = pong.new_game(*size, self.pong_settings(), self.rng)

    def pong_settings(self):
        return pong.Settings(difficulty=self.settings["pong_difficulty"],
                             win_condition=self.settings["win_condition"])

    def reset(self):
        pong.change_settings(self.state, self.settings["pong_difficulty"], self.settings["win_condition"])
        pong.start_game(self.state, self.rng)

    @property
    def frozen(self):
        return self.state.phase != pong.Phase.PLAYING

    def handle_event(self, ev):
        k = self.keys
        if ev.type != pygame.KEYDOWN:
            return
        phase = self.state.phase
        if ev.key == k["escape"]:
            if phase in (pong.Phase.MENU, pong.Phase.GAME_OVER):
                self.stop()
            else:
                pong.return_to_menu(self.state)
        elif ev.key == k["enter"] and phase in (pong.Phase.MENU, pong.Phase.GAME_OVER):
            self.restart()
        elif ev.key == k["pause"]:
            pong.toggle_pause(self.state)

    def poll_paddle(self):
        # held keys or a held left button give one move pulse per frame
        k = self.keys
        held = pygame.key.get_pressed()
        up = held[k["up"]] or held[k["alt_up"]]
        down = held[k["down"]] or held[k["alt_down"]]
        if pygame.mouse.get_pressed()[0]:
            # upper half of the court pushes up, lower half pushes down
            if pygame.mouse.get_pos()[1] < self.state.height / 2:
                up = True
            else:
                down = True
        if up:
            pong.move_player(self.state, "up")
        if down:
            pong.move_player(self.state, "down")

    def update(self, dt):
        self.poll_paddle()
        return pong.step(self.state, self.rng)

    def persist(self, event):
        if isinstance(event, GameCompleted):
            self.stats = self.stats_store.save(self.stats.record(event.player_won, event.player_score))
            logger.info("game recorded: %d-%d, %d played", event.player_score, event.bot_score, self.stats.games_played)

    def draw(self, surf):
        draw_pong(surf, self.state, self.stats)

    def on_resize(self, w, h):
        pong.resize(self.state, w, h)


def leave(code=0):
    pygame.quit()
    sys.exit(code)
