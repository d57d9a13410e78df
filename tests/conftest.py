"""Pytest configuration and shared fixtures."""

import os

# Ensure headless pygame for all tests
os.environ['SDL_VIDEODRIVER'] = 'dummy'
os.environ['SDL_AUDIODRIVER'] = 'dummy'

import numpy as np
import pygame
import pytest

from crossing_arcade.config import GameConfig
from crossing_arcade.sprites import GAME_SPRITES, SpriteCache


pygame.init()


class ScriptedRng:
    """Stand-in random source returning a fixed sequence from integers()."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def integers(self, high):
        self.calls.append(high)
        return self.values.pop(0)


class RecordingRenderer:
    """Renderer fake that records draw calls instead of drawing."""

    width = 505
    height = 606

    def __init__(self):
        self.calls = []

    def draw_background(self):
        self.calls.append(("background",))

    def draw_image(self, sprite, x, y, flip_x=False):
        self.calls.append(("image", sprite, x, y, flip_x))

    def draw_image_region(self, sprite, src, x, y):
        self.calls.append(("region", sprite, tuple(src), x, y))

    def stroke_rect(self, box, color):
        self.calls.append(("rect", box, color))

    def fill_text(self, text, x, y, size, color=(0, 0, 0)):
        self.calls.append(("text", text, x, y, size, color))

    def measure_text(self, text, size):
        return 10 * len(text)

    def of_kind(self, kind):
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def sprites():
    """Sprite cache with every game sprite loaded (placeholders)."""
    cache = SpriteCache()
    cache.load(GAME_SPRITES)
    return cache


@pytest.fixture
def game_config():
    """Default game configuration."""
    return GameConfig()


@pytest.fixture
def rng():
    """Seeded random source."""
    return np.random.default_rng(42)


@pytest.fixture
def renderer():
    return RecordingRenderer()
