"""Shared fixtures for the rescue game tests."""

from __future__ import annotations

import random

import pytest

from game.rescue.config import GameConfig
from game.rescue.difficulty import DifficultyController
from game.rescue.entities import Boat, World
from game.rescue.game import GameListener, RescueGame
from game.rescue.simulation import Simulation
from game.rescue.spawner import Spawner


class RecordingListener(GameListener):
    """Collects every UI callback in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def on_score(self, score: int) -> None:
        self.calls.append(("score", score))

    def on_lives(self, lives: int) -> None:
        self.calls.append(("lives", lives))

    def on_rescued(self, rescued: int) -> None:
        self.calls.append(("rescued", rescued))

    def on_phase(self, phase) -> None:
        self.calls.append(("phase", phase))

    def on_game_over(self, final_score: int) -> None:
        self.calls.append(("game_over", final_score))

    def last(self, kind: str):
        values = [v for k, v in self.calls if k == kind]
        return values[-1] if values else None


@pytest.fixture
def config() -> GameConfig:
    # No random sharks unless a test asks for them
    return GameConfig(shark_spawn_rate=0.0)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def difficulty(config) -> DifficultyController:
    return DifficultyController(config)


@pytest.fixture
def spawner(config, difficulty, rng) -> Spawner:
    return Spawner(config, difficulty, rng=rng)


@pytest.fixture
def sim(config, spawner) -> Simulation:
    return Simulation(config, spawner)


@pytest.fixture
def world(config) -> World:
    return World(boat=Boat(
        x=config.width / 2,
        y=float(config.height - config.boat_bottom_offset),
        width=config.boat_width,
        height=config.boat_height,
        speed=config.boat_speed,
    ))


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def game(config, rng, listener) -> RescueGame:
    return RescueGame(config, rng=rng, listeners=[listener])
