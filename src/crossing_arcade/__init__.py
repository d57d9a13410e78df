"""crossing-arcade: cross the road, reach the water, dodge the bugs.

A small real-time arcade game built on pygame. The player must cross a
bounded playfield to the water row while avoiding enemies that wrap,
bounce, or wander wildly; a countdown forces a new round when time runs
out and a falling star doubles the player's speed.

The core is a deterministic per-tick engine (update, collide, render) with
injectable randomness, so the same seed always replays the same round.
A Gymnasium wrapper exposes the game for scripted or learned play.
"""

from .config import (
    ArenaConfig,
    EnemyConfig,
    PlayerConfig,
    BonusConfig,
    TimerConfig,
    TextConfig,
    GameConfig,
    CONFIGS,
    get_config,
)
from .geometry import BoundingBox, ScreenBounds, intersects, first_overlap
from .motion import (
    Motion,
    StraightMotion,
    WrappingMotion,
    BouncingMotion,
    WildMotion,
    PlayerControl,
    FallingMotion,
    ENEMY_MOTIONS,
    create_motion,
)
from .entities import Entity, spawn_enemy, random_enemy, spawn_player
from .actors import ActorEvent, Chronos, Bonus, Text, MultiText
from .session import SessionController
from .sprites import SpriteCache, GAME_SPRITES

__all__ = [
    "ArenaConfig",
    "EnemyConfig",
    "PlayerConfig",
    "BonusConfig",
    "TimerConfig",
    "TextConfig",
    "GameConfig",
    "CONFIGS",
    "get_config",
    "BoundingBox",
    "ScreenBounds",
    "intersects",
    "first_overlap",
    "Motion",
    "StraightMotion",
    "WrappingMotion",
    "BouncingMotion",
    "WildMotion",
    "PlayerControl",
    "FallingMotion",
    "ENEMY_MOTIONS",
    "create_motion",
    "Entity",
    "spawn_enemy",
    "random_enemy",
    "spawn_player",
    "ActorEvent",
    "Chronos",
    "Bonus",
    "Text",
    "MultiText",
    "SessionController",
    "SpriteCache",
    "GAME_SPRITES",
]
