"""Scripted policies for automated play-throughs.

Each policy takes an observation from CrossingEnv and returns a
MultiBinary(4) action: held (left, right, up, down).
"""

import numpy as np
from typing import Dict, Optional

from .config import GameConfig
from .gym_env import _BONUS_FIELDS, _ENEMY_FIELDS, _PLAYER_FIELDS


LEFT, RIGHT, UP, DOWN = range(4)


class BasePolicy:
    """Base class for scripted policies."""

    name: str = "base"

    def __call__(self, obs: Dict[str, np.ndarray]) -> np.ndarray:
        return self.act(obs)

    def act(self, obs: Dict[str, np.ndarray]) -> np.ndarray:
        raise NotImplementedError

    def reset(self):
        """Called at the start of each episode."""
        pass

    def _make_action(self, left=False, right=False, up=False, down=False) -> np.ndarray:
        return np.array([left, right, up, down], dtype=np.int8)


class RandomPolicy(BasePolicy):
    """Each direction held with independent probability each step.

    Broad state coverage, lots of collisions, good baseline.
    """

    name = "random"

    def __init__(self, rng: Optional[np.random.Generator] = None, hold_prob: float = 0.3):
        self.rng = rng or np.random.default_rng()
        self.hold_prob = hold_prob

    def act(self, obs):
        held = self.rng.random(4) < self.hold_prob
        return self._make_action(*held)


class RushPolicy(BasePolicy):
    """Always run straight up.

    Fastest possible crossing; dies whenever an enemy is in the way.
    """

    name = "rush"

    def act(self, obs):
        return self._make_action(up=True)


class DodgePolicy(BasePolicy):
    """Move up unless an enemy in the lane ahead is about to pass.

    Waits (or backs off) while any enemy sits within `margin` pixels
    horizontally of the player in the next lane up.
    """

    name = "dodge"

    def __init__(self, config: Optional[GameConfig] = None, margin: float = 120.0):
        self.config = config or GameConfig()
        self.margin = margin

    def act(self, obs):
        state = obs["state"]
        px, py = state[0], state[1]
        lane_height = self.config.arena.tile_height

        offset = _PLAYER_FIELDS + _BONUS_FIELDS
        for base in range(offset, len(state), _ENEMY_FIELDS):
            ex, ey = state[base], state[base + 1]
            # Enemy lane is just above the player (one lane, with slack)
            if 0 < py - ey <= lane_height * 1.5 and abs(ex - px) < self.margin:
                return self._make_action(down=True)

        return self._make_action(up=True)


POLICIES = {
    "random": RandomPolicy,
    "rush": RushPolicy,
    "dodge": DodgePolicy,
}
