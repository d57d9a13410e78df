"""Gymnasium environment wrapper for the crossing game.

Provides standard Gym API for RL training and scripted play-throughs.
Observations include an optional RGB frame and a structured state vector.
"""

import numpy as np
import gymnasium
from gymnasium import spaces
from typing import Optional, Dict, Any, Tuple

import pygame

from .config import GameConfig
from .motion import PlayerControl
from .renderer import PygameRenderer
from .session import SessionController
from .sprites import GAME_SPRITES, SpriteCache


# Player block + bonus block, then one block per enemy slot
_PLAYER_FIELDS = 4   # x, y, speed, time left
_BONUS_FIELDS = 3    # alive, x, y
_ENEMY_FIELDS = 4    # x, y, speed, direction (+1 right, -1 left, 0 wrapping/still)


class CrossingEnv(gymnasium.Env):
    """Gymnasium wrapper for the crossing game.

    Observation space (Dict):
        'rgb': uint8 array of shape (H, W, 3) - rendered frame
        'state': float32 array containing:
            [0-1] player position (x, y)
            [2]   player speed
            [3]   time left on the round timer
            [4-6] bonus alive (0/1), bonus x, bonus y
            [7..] per enemy slot: x, y, speed, direction

    Action space:
        MultiBinary(4) - held directions (left, right, up, down)

    An episode is one round: it terminates on the tick where the session
    asks for a reset (goal reached, hit, or timer expired).

    Reward = weighted sum of raw signals (stored in info['reward_signals']):
        goal:     1.0 when the water is reached
        death:    1.0 when hit or out of time
        progress: upward movement in pixels
        step:     1.0 every step
    """

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        obs_resolution: Tuple[int, int] = (128, 128),
        max_episode_steps: int = 1000,
        reward_weights: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.obs_height, self.obs_width = obs_resolution
        self.max_episode_steps = max_episode_steps

        self.reward_weights = reward_weights or {
            "goal": 1.0,
            "death": -1.0,
            "progress": 0.001,
            "step": -0.001,
        }

        self.action_space = spaces.MultiBinary(len(PlayerControl.DIRECTIONS))

        self.state_size = (
            _PLAYER_FIELDS + _BONUS_FIELDS + _ENEMY_FIELDS * self.config.enemies.count
        )
        self.observation_space = spaces.Dict({
            "rgb": spaces.Box(
                low=0, high=255,
                shape=(self.obs_height, self.obs_width, 3),
                dtype=np.uint8,
            ),
            "state": spaces.Box(
                low=-np.inf, high=np.inf,
                shape=(self.state_size,),
                dtype=np.float32,
            ),
        })

        # Initialize pygame (caller sets SDL_VIDEODRIVER for headless)
        if not pygame.get_init():
            pygame.init()

        self._sprites = SpriteCache(self.config.asset_dir)
        self._sprites.load(GAME_SPRITES)

        # Offscreen render surface (native resolution)
        self._surface = pygame.Surface(
            (self.config.screen_width, self.config.screen_height)
        )
        self._renderer = PygameRenderer(self._surface, self._sprites, self.config.arena)

        # Display for human render mode
        self._display = None
        if render_mode == "human":
            self._display = pygame.display.set_mode(
                (self.config.screen_width, self.config.screen_height)
            )
            pygame.display.set_caption("CrossingEnv")

        self._session: Optional[SessionController] = None
        self._episode_steps = 0
        self._prev_player_y = 0.0
        self._dt = 1.0 / self.config.fps

    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)

        # The session draws from the env's seeded generator
        self._session = SessionController(self._sprites, self.config, rng=self.np_random)
        self._session.reset()

        self._episode_steps = 0
        self._prev_player_y = self._session.player.y

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self._session is not None, "Must call reset() before step()"

        self._apply_action(action)
        self._session.step(self._dt)
        self._episode_steps += 1

        reward_signals = self._compute_rewards()
        reward = sum(
            self.reward_weights.get(k, 0.0) * v
            for k, v in reward_signals.items()
        )

        terminated = self._session.reset_pending
        truncated = self._episode_steps >= self.max_episode_steps

        obs = self._get_obs()
        info = self._get_info()
        info["reward_signals"] = reward_signals

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # ------------------------------------------------------------------
    # Action handling
    # ------------------------------------------------------------------

    def _apply_action(self, action):
        action = np.asarray(action).reshape(-1)
        for direction, pressed in zip(PlayerControl.DIRECTIONS, action):
            self._session.handle_input(direction, bool(pressed))

    # ------------------------------------------------------------------
    # Reward computation
    # ------------------------------------------------------------------

    def _compute_rewards(self):
        session = self._session
        signals = {}

        y = session.player.y
        signals["progress"] = self._prev_player_y - y
        self._prev_player_y = y

        ended = session.reset_pending
        signals["goal"] = 1.0 if ended and session.reset_success else 0.0
        signals["death"] = 1.0 if ended and not session.reset_success else 0.0
        signals["step"] = 1.0

        return signals

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------

    def _get_obs(self):
        # Only render RGB when someone will actually use it
        if self.render_mode in ("rgb_array", "human"):
            rgb = self._render_frame()
        else:
            rgb = np.zeros(
                (self.obs_height, self.obs_width, 3), dtype=np.uint8
            )
        return {"rgb": rgb, "state": self._get_state_vector()}

    def _get_state_vector(self):
        session = self._session
        state = np.zeros(self.state_size, dtype=np.float32)

        player = session.player
        state[0] = player.x
        state[1] = player.y
        state[2] = player.speed
        state[3] = session.time_left()

        bonus = session.bonus
        if bonus is not None:
            state[4] = float(bonus.is_alive())
            state[5] = bonus.entity.x
            state[6] = bonus.entity.y

        offset = _PLAYER_FIELDS + _BONUS_FIELDS
        for i, enemy in enumerate(session.enemies):
            base = offset + i * _ENEMY_FIELDS
            going_right = getattr(enemy.motion, "going_right", None)
            state[base] = enemy.x
            state[base + 1] = enemy.y
            state[base + 2] = enemy.speed
            state[base + 3] = 0.0 if going_right is None else (1.0 if going_right else -1.0)

        return state

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_frame(self):
        """Render current state to numpy array (H, W, 3) uint8."""
        self._session.render(self._renderer)

        # Scale to observation resolution
        scaled = pygame.transform.scale(
            self._surface, (self.obs_width, self.obs_height)
        )
        # surfarray gives (W, H, 3); transpose to (H, W, 3)
        array = pygame.surfarray.array3d(scaled)
        return np.transpose(array, (1, 0, 2)).astype(np.uint8)

    def render(self):
        if self.render_mode == "rgb_array":
            return self._render_frame()
        elif self.render_mode == "human" and self._display:
            self._session.render(self._renderer)
            self._display.blit(self._surface, (0, 0))
            pygame.display.flip()

    def _get_info(self):
        session = self._session
        info = {
            "episode_steps": self._episode_steps,
            "round_over": session.reset_pending,
            "success": session.reset_pending and session.reset_success,
            "bonus_collected": session.bonus_collected,
            "player_position": session.player.position,
            "enemy_kinds": [e.kind for e in session.enemies],
        }
        return info

    def close(self):
        if self._display:
            pygame.display.quit()
            self._display = None
