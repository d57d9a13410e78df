"""Tests for sprite loading and placeholders."""

import pygame
import pytest

from crossing_arcade.sprites import GAME_SPRITES, SPRITE_SIZE, SpriteCache, make_placeholder


class TestSpriteCache:
    def test_loads_all_placeholders(self, sprites):
        assert sprites.is_ready()
        for name in GAME_SPRITES:
            assert sprites.get(name).get_size() == SPRITE_SIZE

    def test_unknown_sprite_raises(self, sprites):
        with pytest.raises(KeyError):
            sprites.get("images/char-princess-girl.png")

    def test_duplicates_load_once(self):
        cache = SpriteCache()
        cache.load(["images/Star.png", "images/Star.png"])
        assert cache.is_ready()
        assert cache.get("images/Star.png") is not None

    def test_ready_callback_fires_after_load(self):
        cache = SpriteCache()
        fired = []
        cache.on_ready(lambda: fired.append(True))
        assert fired == []
        cache.load(GAME_SPRITES)
        assert fired == [True]

    def test_ready_callback_fires_once(self):
        cache = SpriteCache()
        fired = []
        cache.on_ready(lambda: fired.append(True))
        cache.load(GAME_SPRITES)
        cache.load(GAME_SPRITES)
        assert fired == [True]

    def test_late_callback_runs_immediately(self, sprites):
        fired = []
        sprites.on_ready(lambda: fired.append(True))
        assert fired == [True]

    def test_loads_from_asset_dir(self, tmp_path):
        (tmp_path / "images").mkdir()
        image = pygame.Surface((40, 30))
        image.fill((1, 2, 3))
        pygame.image.save(image, str(tmp_path / "images" / "Star.png"))

        cache = SpriteCache(asset_dir=str(tmp_path))
        cache.load(["images/Star.png", "images/char-boy.png"])
        assert cache.get("images/Star.png").get_size() == (40, 30)
        assert cache.get("images/char-boy.png").get_size() == SPRITE_SIZE


class TestPlaceholder:
    def test_padding_is_transparent(self):
        surface = make_placeholder("images/enemy-bug.png")
        assert surface.get_at((50, 10)).a == 0
        assert surface.get_at((50, 100)).a == 255

    def test_unknown_name_gets_default(self):
        surface = make_placeholder("images/rock.png")
        assert surface.get_size() == SPRITE_SIZE
