# twinarcade - Flappy + Pong on a pygame surface.
# Simulation cores (flappy, pong) are pygame-free; render/games/app are the pygame host.

__version__ = "0.3.0"
