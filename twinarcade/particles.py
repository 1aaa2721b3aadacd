# particles.py
# Frame-counted particles (life is in frames, velocity in px/frame).

import math
from dataclasses import dataclass


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: int
    max_life: int = 0

    def __post_init__(self):
        if not self.max_life:
            self.max_life = self.life

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.life -= 1

    @property
    def fade(self):
        return max(0.0, self.life / self.max_life) if self.max_life else 0.0


def trail(x, y, rng, n=6, life=22):
    """Puff left behind the actor on every flap."""
    return [Particle(x, y, -2 - rng.random()*1.5, (rng.random()-0.5)*1.5, life) for _ in range(n)]


def burst(x, y, rng, n=12, life=30, speed=(1.0, 4.0)):
    ps = []
    for _ in range(n):
        ang = rng.random()*2*math.pi
        sp = rng.uniform(*speed)
        ps.append(Particle(x, y, math.cos(ang)*sp, math.sin(ang)*sp, life))
    return ps


def advance(ps):
    for p in ps: p.update()
    return [p for p in ps if p.life > 0]
