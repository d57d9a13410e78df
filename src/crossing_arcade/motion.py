"""Motion policies that drive entities.

An Entity is a plain record (position, size, boxes, speed); how it moves,
which boxes it occupies and how it is drawn is decided by the motion policy
it carries. Swapping the policy swaps the behavior without a new entity type.

Enemy variants:
- StraightMotion: stands still (shared default)
- WrappingMotion: runs right and re-enters from the left edge
- BouncingMotion: runs until off an edge, then turns around
- WildMotion: bouncing plus a random decision every couple of seconds

Non-enemy variants:
- PlayerControl: four directional input flags
- FallingMotion: constant fall, used by the bonus star
"""

import math
from typing import Dict, List, Optional, TYPE_CHECKING

import numpy as np

from .config import EnemyConfig, PlayerConfig
from .geometry import BoundingBox

if TYPE_CHECKING:
    from .entities import Entity
    from .renderer import PygameRenderer


class Motion:
    """Base motion policy.

    Subclasses override update() and, when their geometry or look differs
    from a single sprite at (x, y), bounding_boxes() and render().
    """

    name: str = "base"

    def update(self, entity: "Entity", dt: float) -> None:
        """Advance the entity by dt seconds of simulated time."""
        pass

    def bounding_boxes(self, entity: "Entity") -> List[BoundingBox]:
        """World-space collision boxes, recomputed on every call."""
        return [entity.rect_bounds.offset(entity.x, entity.y)]

    def render(self, entity: "Entity", renderer: "PygameRenderer") -> None:
        renderer.draw_image(entity.sprite, entity.x, entity.y)


class StraightMotion(Motion):
    """Does not move."""

    name = "straight"


class WrappingMotion(Motion):
    """Moves right and re-enters from the left after passing the right edge.

    While part of the sprite hangs past the right edge, that part is drawn
    and collides at the left edge as well.
    """

    name = "wrapping"

    def update(self, entity, dt):
        # Enemies move in whole pixels
        entity.x += math.floor(entity.speed * dt)

        if entity.x > entity.screen_bounds.width:
            entity.x = 0

    def _wrapped_width(self, entity) -> float:
        return (entity.x + entity.rect_bounds.right) - entity.screen_bounds.width

    def bounding_boxes(self, entity):
        boxes = super().bounding_boxes(entity)
        wrapped = self._wrapped_width(entity)
        if wrapped > 0:
            boxes.append(BoundingBox(
                left=0,
                top=entity.y + entity.rect_bounds.top,
                right=wrapped,
                bottom=entity.y + entity.rect_bounds.bottom,
            ))
        return boxes

    def render(self, entity, renderer):
        wrapped = self._wrapped_width(entity)
        if wrapped > 0:
            renderer.draw_image_region(
                entity.sprite,
                (entity.screen_bounds.width - entity.x, 0, wrapped, entity.h),
                0,
                entity.y,
            )
        super().render(entity, renderer)


class BouncingMotion(Motion):
    """Turns around once the sprite has left the screen on either side."""

    name = "bouncing"

    def __init__(self, going_right: bool = True):
        self.going_right = going_right

    def update(self, entity, dt):
        displacement = math.floor(entity.speed * dt)

        if self.going_right:
            entity.x += displacement
            if entity.x + entity.rect_bounds.left > entity.screen_bounds.width:
                entity.x = entity.screen_bounds.width
                self.going_right = False
        else:
            entity.x -= displacement
            if entity.x + entity.rect_bounds.right < 0:
                entity.x = -entity.rect_bounds.right
                self.going_right = True

    def render(self, entity, renderer):
        renderer.draw_image(entity.sprite, entity.x, entity.y, flip_x=not self.going_right)


class WildMotion(Motion):
    """Bouncing motion that changes its mind every decision interval.

    Each decision is one of three, with equal odds:
    0 - turn around, 1 - speed up, 2 - slow down.
    Speed is clamped to [min_speed, max_speed].
    """

    name = "wild"

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        config: Optional[EnemyConfig] = None,
        going_right: bool = True,
    ):
        self.rng = rng or np.random.default_rng()
        self.config = config or EnemyConfig()
        self.bounce = BouncingMotion(going_right=going_right)
        self._time = 0.0

    @property
    def going_right(self) -> bool:
        return self.bounce.going_right

    @going_right.setter
    def going_right(self, value: bool) -> None:
        self.bounce.going_right = value

    @property
    def clock(self) -> float:
        """Time accumulated toward the next decision."""
        return self._time

    def update(self, entity, dt):
        self._time += dt

        if self._time > self.config.decision_time:
            self._time -= self.config.decision_time
            self.decide(entity)

        self.bounce.update(entity, dt)

    def decide(self, entity: "Entity") -> int:
        """Roll and apply one decision. Returns the roll (0, 1 or 2)."""
        chance = int(self.rng.integers(3))
        if chance == 0:
            self.going_right = not self.going_right
        elif chance == 1:
            entity.speed = min(entity.speed + self.config.speed_change, self.config.max_speed)
        else:
            entity.speed = max(entity.speed - self.config.speed_change, self.config.min_speed)
        return chance

    def render(self, entity, renderer):
        self.bounce.render(entity, renderer)


class PlayerControl(Motion):
    """Moves by directional input flags instead of an autonomous rule.

    Several flags may be held at once; diagonal movement is the plain sum
    of the two axes. After moving, the entity is pushed back inside its
    screen bounds edge by edge.
    """

    name = "player"

    DIRECTIONS = ("left", "right", "up", "down")

    def __init__(self, config: Optional[PlayerConfig] = None):
        self.config = config or PlayerConfig()
        self.moves: Dict[str, bool] = {d: False for d in self.DIRECTIONS}

    def handle_input(self, direction: str, pressed: bool) -> None:
        """Record a key press or release.

        Raises:
            ValueError: If direction is not one of DIRECTIONS.
        """
        if direction not in self.moves:
            raise ValueError(f"Unknown direction: {direction}")
        self.moves[direction] = bool(pressed)

    def update(self, entity, dt):
        # Player moves smoothly, no pixel snapping
        displacement = dt * entity.speed

        if self.moves["left"]:
            entity.x -= displacement
        if self.moves["right"]:
            entity.x += displacement
        if self.moves["up"]:
            entity.y -= displacement
        if self.moves["down"]:
            entity.y += displacement

        self.force_screen_bounds(entity)

    def force_screen_bounds(self, entity: "Entity") -> None:
        rect = entity.rect_bounds
        screen = entity.screen_bounds

        if entity.x + rect.left < screen.x:
            entity.x = screen.x - rect.left
        if entity.x + rect.right > screen.width:
            entity.x = screen.width - rect.right
        if entity.y + rect.top < screen.y:
            entity.y = screen.y - rect.top
        if entity.y + rect.bottom > screen.height:
            entity.y = screen.height - rect.bottom

    def reached_water(self, entity: "Entity") -> bool:
        """Whether the player has made it to the goal row."""
        return entity.y < self.config.goal_y


class FallingMotion(Motion):
    """Falls straight down at the entity's speed."""

    name = "falling"

    def update(self, entity, dt):
        entity.y += entity.speed * dt


ENEMY_MOTIONS = {
    "wrapping": WrappingMotion,
    "bouncing": BouncingMotion,
    "wild": WildMotion,
}


def create_motion(
    kind: str,
    rng: Optional[np.random.Generator] = None,
    config: Optional[EnemyConfig] = None,
) -> Motion:
    """Build an enemy motion policy by name.

    Raises:
        ValueError: If kind is not in ENEMY_MOTIONS.
    """
    if kind not in ENEMY_MOTIONS:
        raise ValueError(f"Unknown enemy kind: {kind} (choose from {sorted(ENEMY_MOTIONS)})")
    if kind == "wild":
        return WildMotion(rng=rng, config=config)
    return ENEMY_MOTIONS[kind]()
