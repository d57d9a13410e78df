"""Tests for the interactive engine (headless)."""

import pygame
import pytest

from crossing_arcade.config import GameConfig
from crossing_arcade.engine import ArcadeEngine


@pytest.fixture
def engine():
    return ArcadeEngine(GameConfig(), seed=0)


class TestArcadeEngine:
    def test_first_round_waits_for_tick(self, engine):
        assert engine.session.reset_pending
        assert engine.session.round == 0
        engine.update(1 / 60)
        assert engine.session.round == 1

    def test_announces_round(self, engine, capsys):
        engine.update(1 / 60)
        out = capsys.readouterr().out
        assert "ROUND 1: START" in out
        engine.update(1 / 60)
        assert capsys.readouterr().out == ""

    def test_quiet(self, capsys):
        engine = ArcadeEngine(GameConfig(verbose=False), seed=0)
        engine.update(1 / 60)
        assert capsys.readouterr().out == ""

    def test_frame_dt(self, engine):
        assert engine.frame_dt(500) == pytest.approx(1 / 60)
        engine.config.fixed_timestep = False
        assert engine.frame_dt(20) == pytest.approx(0.02)
        assert engine.frame_dt(5000) == pytest.approx(0.1)

    def test_key_events(self, engine):
        engine.update(1 / 60)
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_UP))
        engine.handle_events()
        assert engine.session.controls.moves["up"]
        pygame.event.post(pygame.event.Event(pygame.KEYUP, key=pygame.K_UP))
        engine.handle_events()
        assert not engine.session.controls.moves["up"]

    def test_restart_key(self, engine):
        engine.update(1 / 60)
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_r))
        engine.handle_events()
        assert engine.session.reset_pending

    def test_escape_stops(self, engine):
        engine.running = True
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE))
        engine.handle_events()
        assert not engine.running

    def test_state(self, engine):
        engine.update(1 / 60)
        assert engine.get_state()["round"] == 1
