"""Tests for the per-frame simulation step."""

from __future__ import annotations

import random

import pytest

from game.rescue.config import GameConfig
from game.rescue.difficulty import DifficultyController
from game.rescue.entities import Cloud, FloatingScore, Helicopter, Parachutist, SessionState, Shark
from game.rescue.simulation import MovementIntent, Simulation, StepEvents
from game.rescue.spawner import Spawner

STILL = MovementIntent()


@pytest.fixture
def session() -> SessionState:
    return SessionState(lives=3)


def para(x, y, speed=1.5) -> Parachutist:
    return Parachutist(x=x, y=y, speed=speed, width=20, height=30)


def shark(x, config, direction=1) -> Shark:
    return Shark(x=x, y=config.water_level + config.shark_depth, direction=direction,
                 speed=1.0, width=40, height=20)


# --------------------------------------------------------------------------
# Boat
# --------------------------------------------------------------------------

class TestBoat:
    def test_moves_with_intent(self, sim, world, session):
        sim.step(world, session, MovementIntent(left=True))
        assert world.boat.x == 395
        sim.step(world, session, MovementIntent(right=True))
        sim.step(world, session, MovementIntent(right=True))
        assert world.boat.x == 405

    def test_both_keys_cancel_out(self, sim, world, session):
        sim.step(world, session, MovementIntent(left=True, right=True))
        assert world.boat.x == 400

    def test_clamped_to_playfield(self, sim, world, session, config):
        for _ in range(200):
            sim.step(world, session, MovementIntent(left=True))
        assert world.boat.x == 0
        for _ in range(300):
            sim.step(world, session, MovementIntent(right=True))
        assert world.boat.x == config.width - config.boat_width


# --------------------------------------------------------------------------
# Helicopters
# --------------------------------------------------------------------------

class TestHelicopters:
    def test_drops_exactly_once_at_drop_point(self, sim, world, session):
        heli = Helicopter(x=-80, y=100, speed=3.0, drop_point=400)
        world.helicopters.append(heli)

        for _ in range(159):
            sim.step(world, session, STILL)
        assert world.parachutists == []
        assert not heli.has_dropped

        events = sim.step(world, session, STILL)  # x reaches 400
        assert events.drops == 1
        assert heli.x == 400
        assert heli.has_dropped
        assert len(world.parachutists) == 1
        p = world.parachutists[0]
        assert p.x == 400
        # released under the helicopter, then falls with everyone else this frame
        assert p.y == heli.y + heli.height + p.speed

        drops = 0
        for _ in range(150):
            drops += sim.step(world, session, STILL).drops
        assert drops == 0
        assert heli.has_dropped
        assert len(world.parachutists) == 1

    def test_leftward_helicopter_drops_when_passing(self, sim, world, session):
        heli = Helicopter(x=800, y=60, speed=-4.0, drop_point=301)
        world.helicopters.append(heli)
        # 800 - 4n <= 301  ->  n = 125, x = 300
        for _ in range(124):
            sim.step(world, session, STILL)
        assert not heli.has_dropped
        sim.step(world, session, STILL)
        assert heli.has_dropped
        assert world.parachutists[0].x == 300

    def test_removed_past_exit_margin(self, sim, world, session):
        world.helicopters.append(Helicopter(x=-80, y=100, speed=3.0, drop_point=400))
        # -80 + 3n >= 880  ->  n = 320
        for _ in range(319):
            sim.step(world, session, STILL)
        assert len(world.helicopters) == 1
        sim.step(world, session, STILL)
        assert world.helicopters == []

    def test_removed_past_left_margin(self, sim, world, session):
        world.helicopters.append(Helicopter(x=-70, y=100, speed=-3.0, drop_point=150, has_dropped=True))
        sim.step(world, session, STILL)  # -73
        assert len(world.helicopters) == 1
        for _ in range(3):
            sim.step(world, session, STILL)  # -82
        assert world.helicopters == []


# --------------------------------------------------------------------------
# Parachutists
# --------------------------------------------------------------------------

class TestParachutists:
    def test_rescue_by_boat(self, sim, world, session, config):
        world.parachutists.append(para(410, 515))
        events = sim.step(world, session, STILL)

        assert events.rescued == 1
        assert world.parachutists == []
        assert session.rescued == 1
        assert session.score == 100
        assert session.lives == 3
        assert len(world.floating_scores) == 1
        fs = world.floating_scores[0]
        assert fs.x == 410 + config.sprite_size / 2
        assert fs.y == 516.5
        assert fs.alpha == 1.0

    def test_falls_at_its_own_speed(self, sim, world, session):
        world.parachutists.append(para(100, 200, speed=2.0))
        sim.step(world, session, STILL)
        assert world.parachutists[0].y == 202.0

    def test_rescue_wins_over_landing(self, sim, world, session, config):
        # Below the water line after moving, but still overlapping the boat
        world.parachutists.append(para(420, config.water_level))
        events = sim.step(world, session, STILL)
        assert events.rescued == 1
        assert events.landed == 0
        assert session.lives == 3

    def test_landing_costs_a_life(self, sim, world, session, config):
        world.parachutists.append(para(100, config.water_level - 1))
        events = sim.step(world, session, STILL)
        assert events.landed == 1
        assert session.lives == 2
        assert world.parachutists == []
        assert session.rescued == 0

    def test_at_water_level_is_not_landed(self, sim, world, session, config):
        world.parachutists.append(para(100, config.water_level - 1.5))
        events = sim.step(world, session, STILL)
        assert events.landed == 0
        assert world.parachutists[0].y == config.water_level

    def test_last_life_ends_the_tick(self, sim, world, session, config):
        session.lives = 1
        world.parachutists += [para(100, config.water_level), para(200, config.water_level)]
        world.sharks.append(shark(300, config))

        events = sim.step(world, session, STILL)

        assert events.game_over
        assert session.lives == 0
        assert events.landed == 1
        # Second parachutist and the shark were not advanced
        assert len(world.parachutists) == 1
        assert world.parachutists[0].y == config.water_level
        assert world.sharks[0].x == 300


# --------------------------------------------------------------------------
# Sharks
# --------------------------------------------------------------------------

class TestSharks:
    def test_patrols_and_reverses_at_edges(self, sim, world, session, config):
        left = shark(1, config, direction=-1)
        right = shark(config.width - config.shark_width - 0.5, config, direction=1)
        world.sharks += [left, right]
        sim.step(world, session, STILL)
        assert left.x == 0
        assert left.direction == 1
        assert right.direction == -1
        sim.step(world, session, STILL)
        assert left.x == 1

    def test_each_overlapping_shark_costs_a_life(self, sim, world, session, config):
        p = para(200, config.water_level + 1)
        world.parachutists.append(p)
        world.sharks += [shark(190, config), shark(195, config)]

        events = StepEvents()
        sim._update_sharks(world, session, events)

        assert events.bitten == 2
        assert session.lives == 1
        assert len(world.sharks) == 2
        assert not events.game_over

    def test_bites_stop_at_zero_lives(self, sim, world, session, config):
        session.lives = 1
        world.parachutists.append(para(200, config.water_level + 1))
        world.sharks += [shark(190, config), shark(195, config)]

        events = StepEvents()
        sim._update_sharks(world, session, events)

        assert events.game_over
        assert session.lives == 0
        assert events.bitten == 1

    def test_parachutist_above_water_is_safe(self, sim, world, session, config):
        world.parachutists.append(para(200, config.water_level - 10))
        world.sharks.append(shark(190, config))
        events = StepEvents()
        sim._update_sharks(world, session, events)
        assert events.bitten == 0
        assert session.lives == 3

    def test_population_never_exceeds_cap(self, world, session):
        cfg = GameConfig(shark_spawn_rate=1.0, max_sharks=3)
        sp = Spawner(cfg, DifficultyController(cfg), rng=random.Random(5))
        sim = Simulation(cfg, sp)
        for _ in range(200):
            sim.step(world, session, STILL)
            assert len(world.sharks) <= 3
        assert len(world.sharks) == 3


# --------------------------------------------------------------------------
# Ambient state
# --------------------------------------------------------------------------

class TestAmbient:
    def test_floating_scores_rise_and_expire(self, sim, world, session):
        world.floating_scores.append(FloatingScore(x=10, y=100, lifetime=2, initial_lifetime=60))
        sim.step(world, session, STILL)
        fs = world.floating_scores[0]
        assert fs.lifetime == 1
        assert fs.y == 98
        assert fs.alpha == pytest.approx(1 / 60)
        sim.step(world, session, STILL)
        assert world.floating_scores == []

    def test_clouds_wrap_around(self, sim, world, session, config):
        cloud = Cloud(x=-99.5, y=50, width=100, height=40, speed=0.7)
        world.clouds.append(cloud)
        sim.step(world, session, STILL)
        assert cloud.x == config.width
        assert 20 <= cloud.y <= 170
