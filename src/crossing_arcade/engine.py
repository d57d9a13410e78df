"""Interactive game engine: window, keyboard and main loop.

Wires pygame to a SessionController. The engine owns everything that is
specific to playing on a screen (display, clock, key mapping); game rules
live in the session.
"""

import pygame
from typing import Dict, Optional

import numpy as np

from .config import GameConfig
from .renderer import PygameRenderer
from .session import SessionController
from .sprites import GAME_SPRITES, SpriteCache


# Keys to movements; arrows plus WASD
KEY_DIRECTIONS: Dict[int, str] = {
    pygame.K_LEFT: "left",
    pygame.K_UP: "up",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
    pygame.K_a: "left",
    pygame.K_w: "up",
    pygame.K_d: "right",
    pygame.K_s: "down",
}


class ArcadeEngine:
    """Main game engine.

    Handles:
    - Game loop (fixed or measured timestep)
    - Pygame window and rendering
    - Keyboard input
    - Round announcements on the console
    """

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None):
        """Initialize game engine.

        Args:
            config: Game configuration. Uses defaults if None.
            seed: Seed for the random source. Fresh entropy if None.
        """
        self.config = config or GameConfig()

        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.screen_width, self.config.screen_height)
        )
        pygame.display.set_caption("Crossing Arcade")
        self.clock = pygame.time.Clock()

        self.sprites = SpriteCache(self.config.asset_dir)
        self.renderer = PygameRenderer(self.screen, self.sprites, self.config.arena)
        self.session = SessionController(
            self.sprites, self.config, rng=np.random.default_rng(seed)
        )

        self.running = False
        self._announced_round = 0

        # First round starts once every sprite is available
        self.sprites.on_ready(self.session.request_reset)
        self.sprites.load(GAME_SPRITES)

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self.session.request_reset(False)
                elif event.key in KEY_DIRECTIONS:
                    self.session.handle_input(KEY_DIRECTIONS[event.key], True)
            elif event.type == pygame.KEYUP:
                if event.key in KEY_DIRECTIONS:
                    self.session.handle_input(KEY_DIRECTIONS[event.key], False)

    def frame_dt(self, elapsed_ms: float) -> float:
        """Time step for the next tick in seconds."""
        if self.config.fixed_timestep:
            return 1.0 / self.config.fps
        return min(elapsed_ms / 1000.0, self.config.max_frame_dt)

    def update(self, dt: float) -> None:
        """Run one tick of the session and draw it."""
        self.session.tick(dt, self.renderer)
        self._announce_round()

    def _announce_round(self) -> None:
        session = self.session
        if not self.config.verbose or session.round == self._announced_round:
            return
        self._announced_round = session.round

        outcome = {True: "WON", False: "LOST", None: "START"}[session.last_outcome]
        kinds = ", ".join(e.kind for e in session.enemies)
        print(f"ROUND {session.round}: {outcome} | enemies: {kinds} | "
              f"timer: {self.config.timer.duration:.0f}s")

    def run(self) -> None:
        """Main game loop."""
        self.running = True
        elapsed_ms = 0.0

        while self.running:
            self.handle_events()
            self.update(self.frame_dt(elapsed_ms))
            pygame.display.flip()
            elapsed_ms = self.clock.tick(self.config.fps)

        pygame.quit()

    def get_state(self) -> Dict:
        """Get current game state for observation/logging."""
        return self.session.snapshot()
