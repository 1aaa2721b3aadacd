from __future__ import annotations

import os
import random

import pytest

from twinarcade.storage import KeyValueStore

# headless pygame for the renderer and host tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class MemoryStore(KeyValueStore):
    """Keeps the blob in a dict instead of a file."""

    def __init__(self, initial=None):
        super().__init__("<memory>")
        self.data = dict(initial or {})

    def _read(self):
        return dict(self.data)

    def set(self, key, value):
        self.data[key] = value
        return True


@pytest.fixture()
def memory_kv():
    return MemoryStore


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture(scope="session")
def pg():
    import pygame

    # stays initialised for the session; render.py caches fonts
    pygame.init()
    return pygame
