"""Tests for the session tick, reset protocol and determinism."""

import numpy as np
import pytest

from conftest import RecordingRenderer, ScriptedRng

from crossing_arcade.actors import Bonus, Chronos, MultiText
from crossing_arcade.config import EnemyConfig, GameConfig, TimerConfig
from crossing_arcade.entities import spawn_enemy
from crossing_arcade.motion import StraightMotion
from crossing_arcade.session import SessionController


def make_session(sprites, config=None, rng=None):
    session = SessionController(sprites, config, rng=rng or np.random.default_rng(0))
    session.reset()
    return session


def blocker(sprites, x, y):
    """Enemy that stands still at (x, y)."""
    enemy = spawn_enemy("wrapping", x, y, sprites)
    enemy.motion = StraightMotion()
    return enemy


class TestReset:
    def test_roster(self, sprites):
        session = make_session(sprites)
        assert len(session.enemies) == 3
        assert [e.y for e in session.enemies] == [60, 146, 226]
        assert session.player.position == (202, 405)
        assert session.player.speed == 333
        assert session.round == 1
        assert session.last_outcome is None

    def test_actors(self, sprites):
        session = make_session(sprites)
        chronos, text, bonus = session.actors
        assert isinstance(chronos, Chronos)
        assert isinstance(text, MultiText)
        assert isinstance(bonus, Bonus)
        assert [t.text for t in text.texts] == ["REACH", "THAT", "WATER"]
        assert session.time_left() == pytest.approx(10.0)

    def test_scripted_spawns(self, sprites):
        rng = ScriptedRng([0, 100, 1, 200, 2, 300])
        session = make_session(sprites, rng=rng)
        kinds = [(e.kind, e.x) for e in session.enemies]
        assert kinds == [("wrapping", 100), ("bouncing", 200), ("wild", 300)]
        assert rng.calls == [3, 505, 3, 505, 3, 505]

    def test_zero_enemies(self, sprites):
        config = GameConfig(enemies=EnemyConfig(count=0))
        session = make_session(sprites, config)
        assert session.enemies == []
        session.step(1 / 60)
        assert not session.reset_pending

    def test_too_many_enemies(self, sprites):
        config = GameConfig(enemies=EnemyConfig(count=6))
        with pytest.raises(ValueError):
            SessionController(sprites, config)

    def test_speed_bonus_does_not_carry_over(self, sprites):
        session = make_session(sprites)
        session.player.speed = 666
        session.request_reset()
        session.step(1 / 60)
        assert session.player.speed == 333


class TestBeforeFirstReset:
    def test_input_ignored(self, sprites):
        session = SessionController(sprites)
        assert session.controls is None
        session.handle_input("up", True)
        session.step(1 / 60)
        assert session.player is None
        assert session.round == 0

    def test_requested_reset_starts_round(self, sprites):
        session = SessionController(sprites)
        session.request_reset()
        session.step(1 / 60)
        assert session.round == 1
        assert session.player is not None


class TestDeterminism:
    def run(self, sprites, seed, ticks=300):
        session = SessionController(sprites, rng=np.random.default_rng(seed))
        session.reset()
        session.handle_input("up", True)
        snapshots = []
        for _ in range(ticks):
            session.step(1 / 60)
            snapshots.append(session.snapshot())
        return snapshots

    def test_same_seed_same_game(self, sprites):
        assert self.run(sprites, 42) == self.run(sprites, 42)

    def test_different_seeds_differ(self, sprites):
        first = self.run(sprites, 1, ticks=1)
        second = self.run(sprites, 2, ticks=1)
        assert first[0]["enemies"] != second[0]["enemies"]


class TestCollisions:
    def test_hit_defers_reset(self, sprites):
        session = make_session(sprites)
        session.enemies = [blocker(sprites, 202, 405)]
        session.step(1 / 60)
        assert session.player.is_hit()
        assert session.enemies[0].is_hit()
        assert session.reset_pending
        assert session.reset_success is False
        assert session.round == 1

        session.step(1 / 60)
        assert session.round == 2
        assert session.last_outcome is False
        assert not session.reset_pending

    def test_hit_flags_cleared_each_tick(self, sprites):
        session = make_session(sprites)
        session.enemies = [blocker(sprites, 0, 60)]
        session.player.hit()
        session.enemies[0].hit()
        session.step(1 / 60)
        assert not session.player.is_hit()
        assert not session.enemies[0].is_hit()
        assert not session.reset_pending

    def test_goal(self, sprites):
        session = make_session(sprites)
        session.enemies = []
        session.player.y = -11
        session.step(1 / 60)
        assert session.reset_pending
        assert session.reset_success is True

        session.step(1 / 60)
        assert session.last_outcome is True
        texts = [t.text for t in session.actors[1].texts]
        assert texts == ["CONGRATULATIONS!", "NOW", "REACH", "THAT", "WATER"]

    def test_goal_wins_over_hit(self, sprites):
        session = make_session(sprites)
        session.enemies = [blocker(sprites, 202, -20)]
        session.player.y = -11
        session.step(1 / 60)
        assert session.player.is_hit()
        assert session.reset_pending
        assert session.reset_success is True

    def test_walking_up_reaches_water(self, sprites):
        session = make_session(sprites)
        session.enemies = []
        session.handle_input("up", True)
        for _ in range(120):
            session.step(1 / 60)
            if session.reset_pending:
                break
        assert session.reset_pending
        assert session.reset_success is True


class TestActorsInSession:
    def test_timer_expiry(self, sprites):
        config = GameConfig(timer=TimerConfig(duration=1.0))
        session = make_session(sprites, config)
        for _ in range(3):
            session.step(0.25)
            assert not session.reset_pending
        session.step(0.25)
        assert session.reset_pending
        assert session.reset_success is False
        # Expired timer is drawn once more, then dropped
        assert session.chronos in session.actors
        session.reset_pending = False
        session.step(0.25)
        assert session.chronos not in session.actors

    def test_bonus_pickup(self, sprites):
        session = make_session(sprites)
        session.enemies = []
        session.bonus.entity.x, session.bonus.entity.y = 202, 400
        session.step(1 / 60)
        assert session.bonus_collected
        assert session.player.speed == 666
        assert session.bonus in session.actors

        session.step(1 / 60)
        assert session.bonus not in session.actors
        assert session.player.speed == 666


class TestRender:
    def test_order(self, sprites):
        session = make_session(sprites)
        renderer = RecordingRenderer()
        session.render(renderer)
        assert renderer.calls[0] == ("background",)

        drawn = [c[1] for c in renderer.calls if c[0] in ("image", "region")]
        enemy = sprites.get("images/enemy-bug.png")
        player = sprites.get("images/char-boy.png")
        star = sprites.get("images/Star.png")
        player_idx = drawn.index(player)
        assert all(s is enemy for s in drawn[:player_idx])
        assert drawn[player_idx + 1:] == [star]
        assert len(renderer.of_kind("text")) == 2
        assert renderer.of_kind("rect") == []

    def test_debug_boxes_drawn_last(self, sprites):
        session = make_session(sprites, GameConfig(debug_boxes=True))
        session.enemies = [blocker(sprites, 0, 60)]
        renderer = RecordingRenderer()
        session.render(renderer)
        kinds = [c[0] for c in renderer.calls]
        first_rect = kinds.index("rect")
        assert all(k == "rect" for k in kinds[first_rect:])
        assert len(renderer.of_kind("rect")) == 2

    def test_tick_renders(self, sprites):
        session = make_session(sprites)
        renderer = RecordingRenderer()
        session.tick(1 / 60, renderer)
        assert renderer.calls[0] == ("background",)


class TestSnapshot:
    def test_fields(self, sprites):
        session = make_session(sprites)
        snap = session.snapshot()
        assert snap["round"] == 1
        assert snap["reset_pending"] is False
        assert len(snap["enemies"]) == 3
        assert snap["player_position"] == (202, 405)
        assert snap["player_hit"] is False
