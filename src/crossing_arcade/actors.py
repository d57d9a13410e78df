"""Ephemeral actors: round timer, bonus star and announcement text.

Actors are not part of the collision pass. Each has its own alive/dead
lifecycle and reports what happened during a tick through the ActorEvent
returned by update(); the session decides what to do about it.
"""

from enum import Enum, auto
from typing import List, Optional, Sequence, TYPE_CHECKING

from .config import BonusConfig, GameConfig, TextConfig, TimerConfig
from .entities import Entity, arena_bounds
from .geometry import BoundingBox, first_overlap
from .motion import FallingMotion
from .renderer import COLOR_ALERT, COLOR_TEXT
from .sprites import SpriteCache

if TYPE_CHECKING:
    from .renderer import PygameRenderer


class ActorEvent(Enum):
    """Outcome of one actor update."""
    CONTINUE = auto()
    EXPIRED = auto()    # timer ran out this tick
    COLLECTED = auto()  # bonus picked up this tick


class Actor:
    """Base class for ephemeral actors."""

    def update(self, dt: float, player: Optional[Entity] = None) -> ActorEvent:
        return ActorEvent.CONTINUE

    def is_alive(self) -> bool:
        return True

    def render(self, renderer: "PygameRenderer") -> None:
        pass


class Chronos(Actor):
    """Round countdown.

    Reports EXPIRED exactly once, on the tick where elapsed time first
    reaches the target; afterwards it is dead and stays quiet.
    """

    def __init__(self, target_time: float, config: Optional[TimerConfig] = None):
        self.config = config or TimerConfig()
        self._time = 0.0
        self._target_time = target_time
        self._expired = False

    @property
    def elapsed(self) -> float:
        return self._time

    def time_left(self) -> float:
        return self._target_time - self._time

    def red_zone(self) -> bool:
        """Whether less than the red-zone fraction of time is left."""
        return self.time_left() < self._target_time * self.config.red_zone

    def is_alive(self) -> bool:
        return self._time < self._target_time

    def update(self, dt, player=None):
        self._time += dt
        if not self.is_alive() and not self._expired:
            self._expired = True
            return ActorEvent.EXPIRED
        return ActorEvent.CONTINUE

    def render(self, renderer):
        color = COLOR_ALERT if self.red_zone() else COLOR_TEXT
        x, y = self.config.position
        renderer.fill_text(f"{self.time_left():.2f}", x, y, self.config.font_size, color)


class Bonus(Actor):
    """Falling star that multiplies the speed of the player who catches it.

    Dies when it falls below the arena or right after being caught.
    """

    def __init__(self, entity: Entity, config: Optional[BonusConfig] = None):
        self.entity = entity
        self.config = config or BonusConfig()
        self._alive = True

    @classmethod
    def spawn(
        cls,
        sprites: SpriteCache,
        config: Optional[GameConfig] = None,
    ) -> "Bonus":
        """Create the bonus star at its configured spawn point."""
        config = config or GameConfig()
        bonus_cfg = config.bonus
        sprite = sprites.get(bonus_cfg.sprite)
        left, top, right_inset, bottom_inset = bonus_cfg.rect_insets
        x, y = bonus_cfg.position
        entity = Entity(
            x,
            y,
            sprite,
            motion=FallingMotion(),
            rect_bounds=BoundingBox(
                left=left,
                top=top,
                right=sprite.get_width() - right_inset,
                bottom=sprite.get_height() - bottom_inset,
            ),
            screen_bounds=arena_bounds(config.arena),
            speed=bonus_cfg.speed,
        )
        return cls(entity, bonus_cfg)

    def bounding_boxes(self) -> List[BoundingBox]:
        return self.entity.bounding_boxes()

    def is_alive(self) -> bool:
        return self._alive

    def update(self, dt, player=None):
        self.entity.update(dt)

        if self.entity.y > self.entity.screen_bounds.height:
            self._alive = False

        if player is not None and first_overlap(self.bounding_boxes(), player.bounding_boxes()):
            self.apply_bonus(player)
            return ActorEvent.COLLECTED
        return ActorEvent.CONTINUE

    def apply_bonus(self, receiver: Entity) -> None:
        """Speed up the receiver and die."""
        receiver.speed *= self.config.multiplier
        self._alive = False

    def render(self, renderer):
        self.entity.render(renderer)


class TextState(Enum):
    GROWING = auto()
    SLIDING = auto()
    DEAD = auto()


class Text(Actor):
    """Message that grows to full size, then slides off to the right."""

    def __init__(
        self,
        text: str,
        max_width: float = 505,
        config: Optional[TextConfig] = None,
    ):
        self.config = config or TextConfig()
        self.text = text
        self.x = 0.0
        self.y = self.config.y
        self.size = self.config.start_size
        self.max_width = max_width
        self.state = TextState.GROWING

    def update(self, dt, player=None):
        if self.state is TextState.GROWING:
            self.size += self.config.speed * dt
            if self.size >= self.config.max_size:
                self.state = TextState.SLIDING
        elif self.state is TextState.SLIDING:
            self.x += self.config.slide_factor * self.config.speed * dt
            if self.x > self.max_width:
                self.state = TextState.DEAD
        return ActorEvent.CONTINUE

    def is_alive(self) -> bool:
        return self.state is not TextState.DEAD

    def render(self, renderer):
        width = renderer.measure_text(self.text, self.size)
        renderer.fill_text(
            self.text, (self.max_width - width) / 2 + self.x, self.y, self.size
        )


class MultiText(Actor):
    """Shows several messages one after another."""

    def __init__(
        self,
        strings: Sequence[str],
        max_width: float = 505,
        config: Optional[TextConfig] = None,
    ):
        self.texts = [Text(s, max_width, config) for s in strings]
        self.idx = 0 if self.texts else -1

    @property
    def current(self) -> Optional[Text]:
        return self.texts[self.idx] if self.is_alive() else None

    def is_alive(self) -> bool:
        return 0 <= self.idx < len(self.texts)

    def update(self, dt, player=None):
        if self.is_alive():
            text = self.texts[self.idx]
            if text.is_alive():
                text.update(dt)
            else:
                self.idx += 1
        return ActorEvent.CONTINUE

    def render(self, renderer):
        if self.is_alive():
            self.texts[self.idx].render(renderer)
