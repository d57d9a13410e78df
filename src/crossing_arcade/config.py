"""Configuration system for the crossing arcade game.

Every tunable number of the game lives in one of these dataclasses so the
session, the interactive engine and the training environment all read the
same values:
- ArenaConfig: playfield size, tile grid and the reserved margins
- EnemyConfig: how many enemies spawn, where, and how fast they move
- PlayerConfig: start position, speed and goal line of the player
- BonusConfig / TimerConfig / TextConfig: the ephemeral actors
- GameConfig: everything above plus display/loop settings
"""

import copy
from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, ClassVar, Optional


@dataclass
class ArenaConfig:
    """Playfield geometry in screen pixels."""

    width: int = 505
    height: int = 606

    # Background tile grid (water, stone x3, grass x2)
    tile_width: int = 101
    tile_height: int = 83
    num_rows: int = 6
    num_cols: int = 5

    # Entities may not go above top_margin or below height - bottom_margin
    top_margin: int = 52
    bottom_margin: int = 20

    # y-values of the lanes; row 0 is the water, the last row is the start
    rows: Tuple[int, ...] = (-20, 60, 146, 226, 300, 405)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "top_margin": self.top_margin,
            "bottom_margin": self.bottom_margin,
            "rows": list(self.rows),
        }


@dataclass
class EnemyConfig:
    """Enemy roster and motion parameters."""

    count: int = 3  # Enemies spawned per round, one per lane starting at row 1
    speed: float = 222.0  # px/s
    sprite: str = "images/enemy-bug.png"

    # Tight box: full sprite width, trimmed top and bottom padding
    rect_top: int = 76
    rect_bottom_inset: int = 26

    # Wild enemies: one random decision per interval
    decision_time: float = 2.0  # s
    speed_change: float = 100.0  # px/s per speed-up / slow-down
    min_speed: float = 100.0
    max_speed: float = 1000.0

    KINDS: ClassVar[Tuple[str, ...]] = ("wrapping", "bouncing", "wild")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "speed": self.speed,
            "decision_time": self.decision_time,
            "speed_change": self.speed_change,
            "min_speed": self.min_speed,
            "max_speed": self.max_speed,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "EnemyConfig":
        return cls(
            count=d.get("count", 3),
            speed=d.get("speed", 222.0),
            decision_time=d.get("decision_time", 2.0),
            speed_change=d.get("speed_change", 100.0),
            min_speed=d.get("min_speed", 100.0),
            max_speed=d.get("max_speed", 1000.0),
        )


@dataclass
class PlayerConfig:
    """Player start, movement and goal line."""

    start: Tuple[float, float] = (202.0, 405.0)
    speed: float = 333.0  # px/s, a bit faster than enemies
    sprite: str = "images/char-boy.png"

    # Tight box for the boy character (left, top, right, bottom)
    rect_bounds: Tuple[int, int, int, int] = (18, 64, 83, 140)

    # Player reached the water once y drops below this
    goal_y: float = -10.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": list(self.start),
            "speed": self.speed,
            "goal_y": self.goal_y,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PlayerConfig":
        return cls(
            start=tuple(d.get("start", (202.0, 405.0))),
            speed=d.get("speed", 333.0),
            goal_y=d.get("goal_y", -10.0),
        )


@dataclass
class BonusConfig:
    """Falling collectible that speeds up whoever catches it."""

    position: Tuple[float, float] = (100.0, 100.0)
    speed: float = 100.0  # vertical px/s
    multiplier: float = 2.0  # applied to the receiver's speed
    sprite: str = "images/Star.png"

    # Grabbable part of the star: (left inset, top, right inset, bottom inset)
    rect_insets: Tuple[int, int, int, int] = (15, 66, 15, 35)


@dataclass
class TimerConfig:
    """Round countdown."""

    duration: float = 10.0  # s until a forced reset
    red_zone: float = 0.3  # fraction of time left that switches to alert color
    font_size: int = 20
    position: Tuple[int, int] = (10, 27)


@dataclass
class TextConfig:
    """Announcement text animation."""

    y: int = 45
    start_size: float = 28.0
    max_size: float = 50.0
    speed: float = 70.0  # font px/s while growing
    slide_factor: float = 4.0  # slide speed = slide_factor * speed

    messages: Tuple[str, ...] = ("REACH", "THAT", "WATER")
    success_prefix: Tuple[str, ...] = ("CONGRATULATIONS!", "NOW")


@dataclass
class GameConfig:
    """Complete game configuration combining all parameter groups."""
    arena: ArenaConfig = field(default_factory=ArenaConfig)
    enemies: EnemyConfig = field(default_factory=EnemyConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    bonus: BonusConfig = field(default_factory=BonusConfig)
    timer: TimerConfig = field(default_factory=TimerConfig)
    text: TextConfig = field(default_factory=TextConfig)

    # Loop settings
    fps: int = 60
    fixed_timestep: bool = True  # dt = 1/fps instead of measured frame time
    max_frame_dt: float = 0.1  # cap on measured dt (window drags, breakpoints)

    # Display / diagnostics
    debug_boxes: bool = False  # outline bounding boxes, red when hit
    asset_dir: Optional[str] = None  # directory holding images/; None = placeholders
    verbose: bool = True  # print a line per round reset

    @property
    def screen_width(self) -> int:
        return self.arena.width

    @property
    def screen_height(self) -> int:
        return self.arena.height

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "arena": self.arena.to_dict(),
            "enemies": self.enemies.to_dict(),
            "player": self.player.to_dict(),
            "timer": self.timer.duration,
            "fps": self.fps,
            "fixed_timestep": self.fixed_timestep,
        }


def get_config(name: str) -> GameConfig:
    """Look up a preset by name.

    Raises:
        ValueError: If no preset has that name.
    """
    if name not in CONFIGS:
        raise ValueError(f"Unknown config preset: {name} (choose from {sorted(CONFIGS)})")
    return copy.deepcopy(CONFIGS[name])


# Predefined configurations for play/testing
CONFIGS = {
    # The classic round: 3 enemies, 10 seconds
    "default": GameConfig(),

    # More time to think
    "relaxed": GameConfig(timer=TimerConfig(duration=20.0)),

    # Four lanes of faster enemies
    "frantic": GameConfig(
        enemies=EnemyConfig(count=4, speed=300.0),
    ),

    # Default rules with collision boxes drawn
    "debug": GameConfig(debug_boxes=True),
}
