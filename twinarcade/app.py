# app.py
# Window, menu, settings and statistics screens.

import copy
import logging

import pygame

from .config import (COLS, FLAPPY_DIFFICULTIES, FPS, HEIGHT, PONG_DIFFICULTIES, SCORES_NAME,
                     SETTINGS_NAME, WIDTH, WIN_CONDITIONS, apply_overrides, load_settings, save_settings)
from .games import FlappyGame, PongGame, QuitRequested, leave
from .pong import Statistics
from .render import draw_text
from .storage import HighScoreStore, KeyValueStore, StatisticsStore

logger = logging.getLogger(__name__)

GAMES = [("Flappy", FlappyGame), ("Pong", PongGame)]
ROW_Y, ROW_H, ROW_STEP, ROW_W = 170, 60, 78, 560


class Arcade:
    def __init__(self, data_dir, size=(WIDTH, HEIGHT)):
        self.settings_path = data_dir / SETTINGS_NAME
        # what goes back to disk; CLI overrides only touch the session copy
        self.saved_settings = load_settings(self.settings_path)
        self.settings = copy.deepcopy(self.saved_settings)
        kv = KeyValueStore(data_dir / SCORES_NAME)
        self.best = HighScoreStore(kv)
        self.stats = StatisticsStore(kv)
        self.refresh()
        self.size = size
        self.menu_idx = 0
        self.confirm_reset = False

    def refresh(self):
        """Re-read the persisted record after something may have changed it."""
        self.best_score = self.best.load()
        self.statistics = self.stats.load()

    def override(self, flappy_difficulty=None, pong_difficulty=None, win_condition=None):
        apply_overrides(self.settings, flappy_difficulty, pong_difficulty, win_condition)

    def open_window(self):
        pygame.init()
        self.screen = pygame.display.set_mode(self.size, pygame.RESIZABLE)
        pygame.display.set_caption("twinarcade")
        self.clock = pygame.time.Clock()

    def quit(self):
        save_settings(self.settings_path, self.saved_settings)
        leave()

    def make(self, cls):
        size = self.screen.get_size()
        if cls is FlappyGame:
            return FlappyGame(self.settings, self.best, size)
        return PongGame(self.settings, self.stats, size)

    def play(self, idx):
        label, cls = GAMES[idx]
        logger.info("starting %s", label)
        try:
            self.make(cls).run(self.screen, self.clock)
        except QuitRequested:
            self.quit()
        self.refresh()
        # window may have been resized in-game
        self.screen = pygame.display.get_surface()

    def row(self, i):
        w = self.screen.get_width()
        return pygame.Rect((w - ROW_W)//2, ROW_Y + i*ROW_STEP, ROW_W, ROW_H)

    def draw_menu(self):
        s = self.screen; w = s.get_width()
        s.fill(COLS["bg"])
        draw_text(s, "TWIN ARCADE", w//2, 54, 44, COLS["accent"], center=True)
        draw_text(s, "Up/Down + Enter to play. S:Settings  H:Statistics  Esc:Quit", w//2, 100, 16, COLS["muted"], center=True)
        stats = self.statistics
        blurbs = [f"Best: {self.best_score}", f"W {stats.wins} / L {stats.losses}"]
        for i,(label,cls) in enumerate(GAMES):
            rect = self.row(i)
            color = (36,46,66) if i == self.menu_idx else COLS["panel"]
            pygame.draw.rect(s, color, rect, border_radius=8)
            draw_text(s, label, rect.x + 20, rect.y + 12, 34, COLS["white"])
            draw_text(s, blurbs[i], rect.right - 20, rect.y + 20, 18, COLS["good"], align="right")

    def settings_rows(self):
        st = self.settings
        return [
            ("Flappy difficulty", "flappy_difficulty", FLAPPY_DIFFICULTIES, st["flappy_difficulty"]),
            ("Pong difficulty", "pong_difficulty", PONG_DIFFICULTIES, st["pong_difficulty"]),
            ("Pong win condition", "win_condition", WIN_CONDITIONS, st["win_condition"]),
        ]

    def cycle_setting(self, idx, step):
        _, key, choices, current = self.settings_rows()[idx]
        value = choices[(choices.index(current) + step) % len(choices)]
        self.settings[key] = self.saved_settings[key] = value

    def settings_screen(self):
        idx = 0
        while True:
            s = self.screen; w, h = s.get_size()
            s.fill(COLS["bg"])
            draw_text(s, "Settings", w//2, 44, 44, COLS["accent"], center=True)
            for i,(label,key,choices,value) in enumerate(self.settings_rows()):
                color = COLS["white"] if i == idx else COLS["muted"]
                draw_text(s, f"{label}: < {value} >", w//2, 130 + i*48, 22, color, center=True)
            draw_text(s, "Up/Down select, Left/Right change, Esc to return", w//2, h-40, 16, COLS["muted"], center=True)
            pygame.display.flip()
            ev = pygame.event.wait()
            if ev.type == pygame.QUIT:
                self.quit()
            if ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    save_settings(self.settings_path, self.saved_settings); return
                if ev.key == pygame.K_UP: idx = (idx - 1) % 3
                if ev.key == pygame.K_DOWN: idx = (idx + 1) % 3
                if ev.key == pygame.K_LEFT: self.cycle_setting(idx, -1)
                if ev.key == pygame.K_RIGHT: self.cycle_setting(idx, 1)

    def stats_screen(self):
        self.confirm_reset = False
        while True:
            s = self.screen; w, h = s.get_size()
            st = self.statistics
            s.fill(COLS["bg"])
            draw_text(s, "Statistics", w//2, 44, 44, COLS["accent"], center=True)
            lines = [("Flappy best score", self.best_score),
                     ("Pong games played", st.games_played), ("Wins", st.wins), ("Losses", st.losses),
                     ("Total points", st.total_score), ("Best streak", st.best_win_streak),
                     ("Current streak", st.current_win_streak), ("Win rate", f"{st.win_rate}%")]
            y = 120
            for label, value in lines:
                draw_text(s, label, w//2 - 220, y, 22, COLS["white"])
                draw_text(s, str(value), w//2 + 220, y, 22, COLS["good"], align="right")
                y += 40
            hint = "Press R again to wipe statistics" if self.confirm_reset else "R: reset statistics   Esc: return"
            draw_text(s, hint, w//2, h-40, 16, COLS["danger"] if self.confirm_reset else COLS["muted"], center=True)
            pygame.display.flip()
            ev = pygame.event.wait()
            if ev.type == pygame.QUIT:
                self.quit()
            if ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    return
                if ev.key == pygame.K_r:
                    if self.confirm_reset:
                        self.reset_stats()
                    self.confirm_reset = not self.confirm_reset
                else:
                    self.confirm_reset = False

    def reset_stats(self):
        self.statistics = self.stats.save(Statistics())
        logger.info("statistics reset")

    def main_loop(self, start=None):
        if start is not None:
            self.play(start)
        while True:
            self.draw_menu()
            pygame.display.flip()
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    self.quit()
                if ev.type == pygame.VIDEORESIZE:
                    self.screen = pygame.display.get_surface()
                if ev.type == pygame.KEYDOWN:
                    if ev.key == pygame.K_DOWN:
                        self.menu_idx = (self.menu_idx + 1) % len(GAMES)
                    elif ev.key == pygame.K_UP:
                        self.menu_idx = (self.menu_idx - 1) % len(GAMES)
                    elif ev.key == pygame.K_RETURN:
                        self.play(self.menu_idx)
                    elif ev.key == pygame.K_h:
                        self.stats_screen()
                    elif ev.key == pygame.K_s:
                        self.settings_screen()
                    elif ev.key == pygame.K_ESCAPE:
                        self.quit()
                if ev.type == pygame.MOUSEBUTTONDOWN:
                    for i in range(len(GAMES)):
                        if self.row(i).collidepoint(ev.pos):
                            self.menu_idx = i
                            self.play(i)
            self.clock.tick(FPS)
