# render.py
# Painters for both games. Read state, draw, never write state back.

import math

import pygame

from .config import COLS
from .flappy import PIPE_W
from .pong import Phase

_FONTS = {}


def font(size, bold=True):
    key = (size, bold)
    if key not in _FONTS:
        if not pygame.font.get_init():
            pygame.font.init()
        _FONTS[key] = pygame.font.SysFont("consolas", size, bold=bold)
    return _FONTS[key]


def draw_text(surf, txt, x, y, size=18, color=None, center=False, align="left"):
    color = color or COLS["white"]
    r = font(size).render(txt, True, color)
    rect = r.get_rect()
    if center:
        rect.center = (x,y)
    elif align == "right":
        rect.topright = (x,y)
    else:
        rect.topleft = (x,y)
    surf.blit(r, rect)
    return rect


def shade(surf, alpha=64):
    veil = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
    veil.fill((0,0,0,alpha))
    surf.blit(veil, (0,0))


def lerp_color(a, b, t):
    return tuple(int(a[i] + (b[i]-a[i])*t) for i in range(3))


# ---------- Flappy ----------
SKY_TOP, SKY_BOTTOM = (125,211,252), (186,230,253)
HILL = (134,239,172)
PIPE, PIPE_EDGE = (16,185,129), (4,120,87)
GROUND, GROUND_STRIPE = (251,191,36), (245,158,11)
BIRD, BELLY, BEAK = (239,68,68), (254,202,202), (245,158,11)


def _sky(surf, w, h):
    for y in range(0, int(h), 4):
        pygame.draw.rect(surf, lerp_color(SKY_TOP, SKY_BOTTOM, y/max(1,h)), (0, y, w, 4))


def _hills(surf, g):
    w, h = int(g.width), int(g.height)
    layer = pygame.Surface((w, h), pygame.SRCALPHA)
    for i in range(3):
        base = g.ground_y - 30 - i*14
        alpha = int(255*(0.25 + i*0.12))
        pts = [(0, base + 40)]
        for x in range(0, w + 40, 40):
            pts.append((x, base + math.sin(x + g.t*(0.002 + i*0.0008))*8))
        pts += [(w, h), (0, h)]
        pygame.draw.polygon(layer, HILL + (alpha,), pts)
    surf.blit(layer, (0,0))


def _pipes(surf, g):
    gap = g.preset.gap
    for o in g.obstacles:
        top, bottom = o.rects(gap, g.ground_y)
        for rect in (top, bottom):
            pygame.draw.rect(surf, PIPE, rect)
            pygame.draw.rect(surf, PIPE_EDGE, rect, 2)
        # caps
        pygame.draw.rect(surf, PIPE, (o.x - 4, o.top - 18, PIPE_W + 8, 18))
        pygame.draw.rect(surf, PIPE, (o.x - 4, o.top + gap, PIPE_W + 8, 18))


def _ground(surf, g):
    gy = g.ground_y
    pygame.draw.rect(surf, GROUND, (0, gy, g.width, g.height - gy))
    x = -((g.t*0.15) % 30)
    while x < g.width:
        pygame.draw.rect(surf, GROUND_STRIPE, (x, gy + 10, 18, 10))
        x += 30


def _bird(surf, a):
    rot = max(-0.4, min(0.6, a.vy/12))
    c, s = math.cos(rot), math.sin(rot)
    def at(dx, dy):
        return (a.x + dx*c - dy*s, a.y + dx*s + dy*c)
    pygame.draw.circle(surf, BIRD, at(0,0), a.r)
    pygame.draw.circle(surf, BELLY, at(2,2), a.r*0.6)
    pygame.draw.circle(surf, (255,255,255), at(6,-4), 4.5)
    pygame.draw.circle(surf, COLS["ink"], at(7,-4), 2.2)
    pygame.draw.polygon(surf, BEAK, [at(10,0), at(18,3), at(10,6)])


def draw_flappy(surf, g):
    """Sky, hills, pipes, ground, particles, bird, then score and banners."""
    if surf is None or g is None:
        return
    w, h = g.width, g.height
    _sky(surf, w, h)
    _hills(surf, g)
    _pipes(surf, g)
    _ground(surf, g)
    for p in g.particles:
        pygame.draw.circle(surf, lerp_color(SKY_BOTTOM, (255,255,255), p.fade), (p.x, p.y), 2.2)
    _bird(surf, g.actor)

    draw_text(surf, f"Score: {g.score}", 16, 16, 28, COLS["ink"])
    draw_text(surf, f"Best: {g.best}", w - 16, 16, 28, COLS["ink"], align="right")
    draw_text(surf, g.difficulty.upper(), 16, 50, 14, COLS["ink"])
    if not g.alive:
        draw_text(surf, "GAME OVER", w/2, h/2 - 12, 36, COLS["ink"], center=True)
        draw_text(surf, "R restart - Esc menu", w/2, h/2 + 18, 18, COLS["ink"], center=True)
    elif g.paused:
        shade(surf)
        draw_text(surf, "PAUSED - press P", w/2, 80, 32, COLS["ink"], center=True)


# ---------- Pong ----------
COURT = (10,10,15)


def _glow_rect(surf, color, rect, spread=6):
    x, y, rw, rh = rect
    layer = pygame.Surface((int(rw + spread*2), int(rh + spread*2)), pygame.SRCALPHA)
    for i in range(spread, 0, -2):
        pygame.draw.rect(layer, color + (int(60/i),), (spread - i, spread - i, rw + i*2, rh + i*2), border_radius=4)
    surf.blit(layer, (x - spread, y - spread))
    pygame.draw.rect(surf, color, rect)


def _center_line(surf, w, h):
    y = 0
    while y < h:
        pygame.draw.line(surf, COLS["cyan"], (w/2, y), (w/2, min(h, y + 10)), 2)
        y += 20


def _ball(surf, b):
    r = max(1, b.size)
    layer = pygame.Surface((int(r*4), int(r*4)), pygame.SRCALPHA)
    pygame.draw.circle(layer, (255,255,0,70), (r*2, r*2), r*2)
    pygame.draw.circle(layer, (255,255,0,140), (r*2, r*2), r*1.4)
    surf.blit(layer, (b.x - r*2, b.y - r*2))
    pygame.draw.circle(surf, (255,255,255), (b.x, b.y), r)


BANNERS = {
    Phase.MENU: ("Ready to Play?", "Enter to start - S settings - H stats", COLS["cyan"]),
    Phase.PAUSED: ("PAUSED", "P to resume", (250,204,21)),
}


def draw_pong(surf, g, stats=None):
    if surf is None or g is None:
        return
    w, h = g.width, g.height
    surf.fill(COURT)
    _center_line(surf, w, h)
    _glow_rect(surf, COLS["cyan"], g.player.rect)
    _glow_rect(surf, COLS["magenta"], g.bot.rect)
    for p in g.particles:
        pygame.draw.circle(surf, lerp_color(COURT, COLS["accent"], p.fade), (p.x, p.y), 2)
    _ball(surf, g.ball)

    draw_text(surf, f"PLAYER {g.score.player}", w/2 - 24, 12, 24, COLS["cyan"], align="right")
    draw_text(surf, f"{g.score.bot} BOT", w/2 + 24, 12, 24, COLS["magenta"])
    draw_text(surf, f"{g.settings.difficulty} - first to {g.settings.win_condition}", w/2, h - 18, 14, COLS["muted"], center=True)

    if g.phase in BANNERS:
        title, hint, color = BANNERS[g.phase]
        shade(surf, 170)
        draw_text(surf, title, w/2, h/2 - 20, 40, color, center=True)
        draw_text(surf, hint, w/2, h/2 + 24, 18, COLS["white"], center=True)
    elif g.phase == Phase.GAME_OVER:
        shade(surf, 170)
        won = g.score.player > g.score.bot
        draw_text(surf, "GAME OVER", w/2, h/2 - 48, 40, (244,114,182), center=True)
        draw_text(surf, "YOU WIN!" if won else "BOT WINS!", w/2, h/2 - 6, 28, COLS["white"], center=True)
        draw_text(surf, f"Final Score: {g.score.player} - {g.score.bot}", w/2, h/2 + 28, 18, COLS["muted"], center=True)
        if stats is not None:
            draw_text(surf, f"Streak {stats.current_win_streak} (best {stats.best_win_streak})  Win rate {stats.win_rate}%",
                      w/2, h/2 + 56, 16, COLS["good"], center=True)
        draw_text(surf, "Enter play again - Esc menu", w/2, h/2 + 86, 16, COLS["white"], center=True)
