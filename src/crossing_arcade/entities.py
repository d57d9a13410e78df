"""Game entities: the shared record plus spawn helpers.

Every mobile object (enemies, the player, the bonus star) is an Entity.
What differs between them is the motion policy they carry, see motion.py.
"""

from typing import List, Optional, Tuple, TYPE_CHECKING

import numpy as np
import pygame

from .config import ArenaConfig, GameConfig
from .geometry import BoundingBox, ScreenBounds, first_overlap
from .motion import Motion, PlayerControl, StraightMotion, create_motion
from .renderer import COLOR_BOX_CLEAR, COLOR_BOX_HIT
from .sprites import SpriteCache

if TYPE_CHECKING:
    from .renderer import PygameRenderer


def arena_bounds(arena: Optional[ArenaConfig] = None) -> ScreenBounds:
    """Screen bounds shared by all entities.

    The top strip is the water row and a strip at the bottom is kept as a
    margin nothing may cross.
    """
    arena = arena or ArenaConfig()
    return ScreenBounds(
        x=0,
        y=arena.top_margin,
        width=arena.width,
        height=arena.height - arena.bottom_margin,
    )


class Entity:
    """Anything that moves, collides and draws itself.

    Size is read once from the sprite. Collision uses rect_bounds, a box
    tighter than the sprite because sprites carry transparent padding.
    """

    def __init__(
        self,
        x: float,
        y: float,
        sprite: pygame.Surface,
        motion: Optional[Motion] = None,
        rect_bounds: Optional[BoundingBox] = None,
        screen_bounds: Optional[ScreenBounds] = None,
        speed: float = 222.0,
    ):
        """Create entity.

        Args:
            x, y: Top-left corner of the sprite
            sprite: Image to draw; also defines width and height
            motion: Motion policy. Stands still if None.
            rect_bounds: Tight box relative to (x, y). Enemy default if None.
            screen_bounds: Movement arena. Default arena if None.
            speed: Speed in px/s
        """
        self.x = x
        self.y = y
        self.sprite = sprite
        self.w = sprite.get_width()
        self.h = sprite.get_height()

        self.rect_bounds = rect_bounds or BoundingBox(
            left=0, top=76, right=self.w, bottom=self.h - 26
        )
        self.screen_bounds = screen_bounds or arena_bounds()
        self.speed = speed
        self.motion = motion or StraightMotion()

        self._hit = False

    @property
    def position(self) -> Tuple[float, float]:
        """Current position (x, y)."""
        return self.x, self.y

    @property
    def kind(self) -> str:
        return self.motion.name

    def update(self, dt: float) -> None:
        self.motion.update(self, dt)

    def bounding_boxes(self) -> List[BoundingBox]:
        return self.motion.bounding_boxes(self)

    def hit(self) -> None:
        self._hit = True

    def unhit(self) -> None:
        self._hit = False

    def is_hit(self) -> bool:
        return self._hit

    def collide(self, other: "Entity") -> None:
        """Mark both entities hit if any pair of their boxes intersects."""
        if first_overlap(self.bounding_boxes(), other.bounding_boxes()):
            self.hit()
            other.hit()

    def render(self, renderer: "PygameRenderer") -> None:
        self.motion.render(self, renderer)

    def render_debug(self, renderer: "PygameRenderer") -> None:
        """Outline the collision boxes: red when hit, green otherwise."""
        color = COLOR_BOX_HIT if self.is_hit() else COLOR_BOX_CLEAR
        for box in self.bounding_boxes():
            renderer.stroke_rect(box, color)

    def __repr__(self) -> str:
        return f"Entity({self.kind}, x={self.x}, y={self.y}, speed={self.speed})"


def spawn_enemy(
    kind: str,
    x: float,
    y: float,
    sprites: SpriteCache,
    config: Optional[GameConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> Entity:
    """Create an enemy with the named motion policy.

    Raises:
        ValueError: If kind is not a known enemy motion.
    """
    config = config or GameConfig()
    enemy_cfg = config.enemies
    sprite = sprites.get(enemy_cfg.sprite)
    return Entity(
        x,
        y,
        sprite,
        motion=create_motion(kind, rng=rng, config=enemy_cfg),
        rect_bounds=BoundingBox(
            left=0,
            top=enemy_cfg.rect_top,
            right=sprite.get_width(),
            bottom=sprite.get_height() - enemy_cfg.rect_bottom_inset,
        ),
        screen_bounds=arena_bounds(config.arena),
        speed=enemy_cfg.speed,
    )


def random_enemy(
    row: int,
    sprites: SpriteCache,
    config: Optional[GameConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> Entity:
    """Spawn an enemy of random kind at a random x in the given lane."""
    config = config or GameConfig()
    rng = rng if rng is not None else np.random.default_rng()
    kinds = config.enemies.KINDS
    kind = kinds[int(rng.integers(len(kinds)))]
    x = int(rng.integers(config.arena.width))
    return spawn_enemy(kind, x, config.arena.rows[row], sprites, config, rng)


def spawn_player(
    sprites: SpriteCache,
    config: Optional[GameConfig] = None,
) -> Entity:
    """Create the player at its start position."""
    config = config or GameConfig()
    player_cfg = config.player
    left, top, right, bottom = player_cfg.rect_bounds
    x, y = player_cfg.start
    return Entity(
        x,
        y,
        sprites.get(player_cfg.sprite),
        motion=PlayerControl(player_cfg),
        rect_bounds=BoundingBox(left=left, top=top, right=right, bottom=bottom),
        screen_bounds=arena_bounds(config.arena),
        speed=player_cfg.speed,
    )
