"""Session controller: owns one game and runs its tick.

Per tick, in order:
1. Apply a reset requested during the previous tick
2. Update enemies, player, then the actors that were alive at tick start
3. Clear hit flags, collide the player with every enemy, check win/lose
4. Render (optional, read-only)

A win or loss never resets the game mid-tick; it requests a reset that is
applied at the start of the next one.
"""

from typing import Any, Dict, List, Optional, TYPE_CHECKING

import numpy as np

from .actors import Actor, ActorEvent, Bonus, Chronos, MultiText
from .config import GameConfig
from .entities import Entity, random_enemy, spawn_player
from .motion import PlayerControl
from .sprites import SpriteCache

if TYPE_CHECKING:
    from .renderer import PygameRenderer


class SessionController:
    """Owns the enemy roster, the player and the ephemeral actors."""

    def __init__(
        self,
        sprites: SpriteCache,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """Create a session. Call reset() (or request_reset()) before playing.

        Args:
            sprites: Loaded sprite cache
            config: Game configuration. Uses defaults if None.
            rng: Random source for spawning and wild enemies. Unseeded if None.

        Raises:
            ValueError: If the enemy count does not fit the arena's lanes.
        """
        self.sprites = sprites
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

        # Enemies take rows 1..count; row 0 is the water
        lanes = len(self.config.arena.rows) - 1
        if not 0 <= self.config.enemies.count <= lanes:
            raise ValueError(
                f"Enemy count must be between 0 and {lanes}, got {self.config.enemies.count}"
            )

        self.enemies: List[Entity] = []
        self.player: Optional[Entity] = None
        self.actors: List[Actor] = []
        self.chronos: Optional[Chronos] = None
        self.bonus: Optional[Bonus] = None

        self.reset_pending = False
        self.reset_success = False

        # Round bookkeeping
        self.round = 0
        self.last_outcome: Optional[bool] = None  # True win, False loss, None first round
        self.bonus_collected = False
        self.elapsed = 0.0

    # ------------------------------------------------------------------
    # Reset protocol
    # ------------------------------------------------------------------

    def request_reset(self, success: bool = False) -> None:
        """Ask for a reset at the start of the next tick."""
        self.reset_pending = True
        self.reset_success = success

    def reset(self, success: bool = False) -> None:
        """Start a new round: fresh enemies, player and actors."""
        config = self.config

        self.enemies = [
            random_enemy(row, self.sprites, config, self.rng)
            for row in range(1, config.enemies.count + 1)
        ]
        self.player = spawn_player(self.sprites, config)

        messages = list(config.text.messages)
        if success:
            messages = list(config.text.success_prefix) + messages

        self.chronos = Chronos(config.timer.duration, config.timer)
        self.bonus = Bonus.spawn(self.sprites, config)
        self.actors = [
            self.chronos,
            MultiText(messages, config.arena.width, config.text),
            self.bonus,
        ]

        self.reset_pending = False
        self.reset_success = False
        self.round += 1
        self.last_outcome = success if self.round > 1 else None
        self.bonus_collected = False
        self.elapsed = 0.0

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def step(self, dt: float) -> None:
        """Advance the game by dt seconds (reset, update, collisions)."""
        if self.reset_pending:
            self.reset(self.reset_success)

        if self.player is None:
            return

        self.elapsed += dt
        self._update_entities(dt)
        self._check_collisions()

    def render(self, renderer: "PygameRenderer") -> None:
        """Draw background, enemies, player, then actors on top."""
        renderer.draw_background()

        for enemy in self.enemies:
            enemy.render(renderer)

        if self.player:
            self.player.render(renderer)

        for actor in self.actors:
            actor.render(renderer)

        if self.config.debug_boxes:
            for enemy in self.enemies:
                enemy.render_debug(renderer)
            if self.player:
                self.player.render_debug(renderer)

    def tick(self, dt: float, renderer: Optional["PygameRenderer"] = None) -> None:
        """One full frame: step, then render if a renderer is given."""
        self.step(dt)
        if renderer is not None:
            self.render(renderer)

    def _update_entities(self, dt: float) -> None:
        for enemy in self.enemies:
            enemy.update(dt)
        self.player.update(dt)

        # Actors that died last tick are dropped now; ones dying this tick
        # still get drawn once
        survivors = []
        for actor in self.actors:
            if actor.is_alive():
                survivors.append(actor)
                event = actor.update(dt, self.player)
                if event is ActorEvent.EXPIRED:
                    self.request_reset(False)
                elif event is ActorEvent.COLLECTED:
                    self.bonus_collected = True
        self.actors = survivors

    def _check_collisions(self) -> None:
        self.player.unhit()
        for enemy in self.enemies:
            enemy.unhit()
            self.player.collide(enemy)

        if self.player.is_hit():
            self.request_reset(False)

        if self.controls.reached_water(self.player):
            self.request_reset(True)

    # ------------------------------------------------------------------
    # Input and state
    # ------------------------------------------------------------------

    @property
    def controls(self) -> Optional[PlayerControl]:
        """Input handler of the current player, None before the first reset."""
        if self.player is None:
            return None
        return self.player.motion

    def handle_input(self, direction: str, pressed: bool) -> None:
        """Forward a direction press/release; ignored when there is no player."""
        if self.player is None:
            return
        self.controls.handle_input(direction, pressed)

    def time_left(self) -> float:
        return self.chronos.time_left() if self.chronos else 0.0

    def snapshot(self) -> Dict[str, Any]:
        """Read-only summary of the current state."""
        state: Dict[str, Any] = {
            "round": self.round,
            "reset_pending": self.reset_pending,
            "reset_success": self.reset_success,
            "last_outcome": self.last_outcome,
            "time_left": self.time_left(),
            "bonus_collected": self.bonus_collected,
            "enemies": [
                {"kind": e.kind, "position": e.position, "speed": e.speed}
                for e in self.enemies
            ],
        }
        if self.player:
            state["player_position"] = self.player.position
            state["player_speed"] = self.player.speed
            state["player_hit"] = self.player.is_hit()
        return state
