"""Drawing surface used by every render() call.

Entities and actors never touch pygame directly; they draw through a
PygameRenderer so the same code renders to the window, to an offscreen
surface for observations, or to a recording fake in tests.
"""

from typing import Dict, Optional, Sequence, Tuple

import pygame

from .config import ArenaConfig
from .geometry import BoundingBox
from .sprites import SpriteCache


Color = Tuple[int, int, int]

COLOR_BG = (255, 255, 255)
COLOR_TEXT = (0, 0, 0)
COLOR_ALERT = (255, 0, 0)
COLOR_BOX_HIT = (255, 0, 0)
COLOR_BOX_CLEAR = (0, 128, 0)

# Top row is water, then three rows of stone and two of grass
ROW_IMAGES: Tuple[str, ...] = (
    "images/water-block.png",
    "images/stone-block.png",
    "images/stone-block.png",
    "images/stone-block.png",
    "images/grass-block.png",
    "images/grass-block.png",
)


class PygameRenderer:
    """Canvas-style drawing primitives on a pygame surface."""

    def __init__(
        self,
        surface: pygame.Surface,
        sprites: SpriteCache,
        arena: Optional[ArenaConfig] = None,
        row_images: Sequence[str] = ROW_IMAGES,
    ):
        self.surface = surface
        self.sprites = sprites
        self.arena = arena or ArenaConfig()
        self.row_images = tuple(row_images)
        self._fonts: Dict[int, pygame.font.Font] = {}
        if not pygame.font.get_init():
            pygame.font.init()

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def clear(self, color: Color = COLOR_BG) -> None:
        self.surface.fill(color)

    def draw_background(self) -> None:
        """Clear the canvas and tile the level rows."""
        self.clear()
        for row in range(self.arena.num_rows):
            tile = self.sprites.get(self.row_images[row % len(self.row_images)])
            for col in range(self.arena.num_cols):
                self.surface.blit(
                    tile, (col * self.arena.tile_width, row * self.arena.tile_height)
                )

    def draw_image(
        self,
        sprite: pygame.Surface,
        x: float,
        y: float,
        flip_x: bool = False,
    ) -> None:
        """Blit a sprite with its top-left corner at (x, y), optionally mirrored."""
        if flip_x:
            sprite = pygame.transform.flip(sprite, True, False)
        self.surface.blit(sprite, (round(x), round(y)))

    def draw_image_region(
        self,
        sprite: pygame.Surface,
        src: Tuple[float, float, float, float],
        x: float,
        y: float,
    ) -> None:
        """Blit the (sx, sy, w, h) part of a sprite at (x, y)."""
        sx, sy, w, h = (int(v) for v in src)
        self.surface.blit(sprite, (round(x), round(y)), pygame.Rect(sx, sy, w, h))

    def stroke_rect(self, box: BoundingBox, color: Color) -> None:
        rect = pygame.Rect(
            round(box.left), round(box.top), round(box.width), round(box.height)
        )
        pygame.draw.rect(self.surface, color, rect, width=1)

    def fill_text(
        self,
        text: str,
        x: float,
        y: float,
        size: float,
        color: Color = COLOR_TEXT,
    ) -> None:
        """Draw text with its left edge at x and its baseline at y."""
        font = self._font(size)
        rendered = font.render(text, True, color)
        self.surface.blit(rendered, (round(x), round(y) - font.get_ascent()))

    def measure_text(self, text: str, size: float) -> int:
        """Rendered width of text in pixels."""
        return self._font(size).size(text)[0]

    def _font(self, size: float) -> pygame.font.Font:
        px = max(1, int(round(size)))
        font = self._fonts.get(px)
        if font is None:
            font = pygame.font.Font(None, px)
            self._fonts[px] = font
        return font
