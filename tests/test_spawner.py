"""Tests for entity spawning."""

from __future__ import annotations

import random

import pytest

from game.rescue.config import GameConfig
from game.rescue.difficulty import DifficultyController
from game.rescue.spawner import Spawner


class TestHelicopters:
    def test_enters_from_an_edge(self, spawner, world, config):
        for _ in range(50):
            spawner.spawn_helicopter(world)
        for h in world.helicopters:
            if h.moving_right:
                assert h.x == -config.helicopter_width
                assert h.speed == pytest.approx(config.base_helicopter_speed)
            else:
                assert h.x == config.width
                assert h.speed == pytest.approx(-config.base_helicopter_speed)
        sides = {h.moving_right for h in world.helicopters}
        assert sides == {True, False}

    def test_altitude_and_drop_point_ranges(self, spawner, world, config):
        for _ in range(200):
            spawner.spawn_helicopter(world)
        for h in world.helicopters:
            assert 50 <= h.y <= 150
            assert config.safe_zone_start <= h.drop_point <= config.safe_zone_end
            assert not h.has_dropped

    def test_returns_delay_within_level_bounds(self, spawner, world, difficulty):
        for _ in range(30):
            difficulty.tick_second()
        lo, hi = difficulty.spawn_delay_bounds()
        for _ in range(100):
            delay = spawner.spawn_helicopter(world)
            assert lo <= delay <= hi

    def test_speed_follows_difficulty(self, spawner, world, difficulty):
        for _ in range(30):
            difficulty.tick_second()
        spawner.spawn_helicopter(world)
        assert abs(world.helicopters[0].speed) == pytest.approx(3.0 * 1.2)


class TestParachutists:
    def test_spawn_at_point_with_scaled_speed(self, spawner, world, difficulty):
        p = spawner.spawn_parachutist(world, 321.0, 140.0)
        assert (p.x, p.y) == (321.0, 140.0)
        assert p.speed == pytest.approx(1.5)
        assert not p.is_rescued
        assert world.parachutists == [p]


class TestSharks:
    def test_never_exceeds_cap(self, world):
        cfg = GameConfig(shark_spawn_rate=1.0, max_sharks=3)
        sp = Spawner(cfg, DifficultyController(cfg), rng=random.Random(7))
        spawned = sum(sp.maybe_spawn_shark(world) for _ in range(50))
        assert spawned == 3
        assert len(world.sharks) == 3

    def test_zero_rate_never_spawns(self, spawner, world):
        assert not any(spawner.maybe_spawn_shark(world) for _ in range(1000))
        assert world.sharks == []

    def test_shark_placement(self, spawner, world, config):
        for _ in range(50):
            spawner.spawn_shark(world)
        for s in world.sharks:
            assert 0 <= s.x < config.width - config.shark_width
            assert s.y == config.water_level + config.shark_depth
            assert s.direction in (-1, 1)


class TestScenery:
    def test_islands_frame_the_safe_zone(self, spawner, config):
        left, right = spawner.make_islands()
        assert left.x == 0
        assert right.x + right.width == config.width
        assert left.x + left.width < config.safe_zone_start
        assert right.x > config.safe_zone_end

    def test_cloud_count(self, spawner, config):
        assert len(spawner.make_clouds()) == config.cloud_count
