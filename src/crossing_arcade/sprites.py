"""Sprite loading and caching.

Images are loaded once with pygame and shared by every entity that uses
them. When an image file is missing (no asset pack installed, headless
training) a flat placeholder of the original sprite size is generated so
entity sizes, and therefore collision boxes, stay the same.
"""

import os
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import pygame


# All sprites of the original tile set share one canvas size
SPRITE_SIZE: Tuple[int, int] = (101, 171)

GAME_SPRITES: Tuple[str, ...] = (
    "images/stone-block.png",
    "images/water-block.png",
    "images/grass-block.png",
    "images/enemy-bug.png",
    "images/char-boy.png",
    "images/Star.png",
)

# Placeholder fill color and the visible (non-padding) band of each sprite
_PLACEHOLDERS: Dict[str, Tuple[Tuple[int, int, int], Tuple[int, int, int, int]]] = {
    "images/stone-block.png": ((150, 150, 150), (0, 50, 101, 121)),
    "images/water-block.png": ((80, 140, 230), (0, 50, 101, 121)),
    "images/grass-block.png": ((110, 190, 90), (0, 50, 101, 121)),
    "images/enemy-bug.png": ((224, 108, 117), (0, 76, 101, 145)),
    "images/char-boy.png": ((97, 175, 239), (18, 64, 83, 140)),
    "images/Star.png": ((255, 215, 0), (15, 66, 86, 136)),
}
_DEFAULT_PLACEHOLDER = ((255, 0, 255), (0, 0, 101, 171))


class SpriteCache:
    """Name-keyed cache of pygame surfaces.

    Usage:
        sprites = SpriteCache(asset_dir="assets")
        sprites.on_ready(start_game)
        sprites.load(GAME_SPRITES)
        bug = sprites.get("images/enemy-bug.png")
    """

    def __init__(self, asset_dir: Optional[str] = None):
        self.asset_dir = asset_dir
        self._cache: Dict[str, pygame.Surface] = {}
        self._pending: List[str] = []
        self._callbacks: List[Callable[[], None]] = []

    def load(self, names: Iterable[str]) -> None:
        """Load every named sprite, then fire the ready callbacks once."""
        self._pending.extend(
            n for n in dict.fromkeys(names) if n not in self._cache and n not in self._pending
        )
        while self._pending:
            name = self._pending.pop(0)
            self._cache[name] = self._load_one(name)
        if self.is_ready():
            self._fire_ready()

    def get(self, name: str) -> pygame.Surface:
        """Return a loaded sprite.

        Raises:
            KeyError: If the sprite was never loaded.
        """
        if name not in self._cache:
            raise KeyError(f"Sprite not loaded: {name}")
        return self._cache[name]

    def on_ready(self, callback: Callable[[], None]) -> None:
        """Register a callback for when all requested sprites are available.

        Runs immediately if nothing is pending and something has been loaded.
        """
        if self._cache and self.is_ready():
            callback()
        else:
            self._callbacks.append(callback)

    def is_ready(self) -> bool:
        return not self._pending

    def _fire_ready(self) -> None:
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def _load_one(self, name: str) -> pygame.Surface:
        if self.asset_dir:
            path = os.path.join(self.asset_dir, name)
            if os.path.exists(path):
                return pygame.image.load(path)
        return make_placeholder(name)


def make_placeholder(name: str) -> pygame.Surface:
    """Build a transparent sprite-sized surface with a flat colored band."""
    color, (left, top, right, bottom) = _PLACEHOLDERS.get(name, _DEFAULT_PLACEHOLDER)
    surface = pygame.Surface(SPRITE_SIZE, pygame.SRCALPHA)
    surface.fill((0, 0, 0, 0))
    pygame.draw.rect(surface, color, (left, top, right - left, bottom - top))
    return surface
