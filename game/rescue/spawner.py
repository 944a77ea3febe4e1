"""
Spawner: where and when helicopters, parachutists and sharks appear
"""

from __future__ import annotations

import logging
import random

from .config import GameConfig
from .difficulty import DifficultyController
from .entities import Cloud, Helicopter, Island, Parachutist, Shark, World

logger = logging.getLogger(__name__)


class Spawner:
    """Creates entities with difficulty-scaled speeds.

    Helicopters arrive on their own self-rescheduling chain (the caller
    re-arms a timer with the delay returned by spawn_helicopter), while
    sharks are a per-frame Bernoulli trial via maybe_spawn_shark.
    """

    def __init__(self, config: GameConfig, difficulty: DifficultyController, rng=None):
        self.config = config
        self.difficulty = difficulty
        # Anything with random()/uniform(); the random module itself by default
        self.rng = rng if rng is not None else random

    def spawn_helicopter(self, world: World) -> float:
        """Add a helicopter entering from a random side; return the next arrival delay."""
        c = self.config
        from_left = self.rng.random() < 0.5
        speed = self.difficulty.helicopter_speed
        heli = Helicopter(
            x=-c.helicopter_width if from_left else float(c.width),
            y=self.rng.uniform(*c.helicopter_y_range),
            speed=speed if from_left else -speed,
            drop_point=self.rng.uniform(c.safe_zone_start, c.safe_zone_end),
            width=c.helicopter_width,
            height=c.helicopter_height,
        )
        world.helicopters.append(heli)

        delay = self.next_helicopter_delay()
        logger.debug(
            "Helicopter from %s, drop at %.1f, next in %.2fs",
            "left" if from_left else "right", heli.drop_point, delay,
        )
        return delay

    def next_helicopter_delay(self) -> float:
        lo, hi = self.difficulty.spawn_delay_bounds()
        return self.rng.uniform(lo, hi)

    def spawn_parachutist(self, world: World, x: float, y: float) -> Parachutist:
        c = self.config
        p = Parachutist(
            x=x,
            y=y,
            speed=self.difficulty.parachute_speed,
            width=c.parachutist_width,
            height=c.parachutist_height,
        )
        world.parachutists.append(p)
        return p

    def maybe_spawn_shark(self, world: World) -> bool:
        """Roll the per-frame shark chance; spawn only while under the cap."""
        if self.rng.random() >= self.config.shark_spawn_rate:
            return False
        if len(world.sharks) >= self.config.max_sharks:
            return False
        self.spawn_shark(world)
        return True

    def spawn_shark(self, world: World) -> Shark:
        c = self.config
        shark = Shark(
            x=self.rng.random() * (c.width - c.shark_width),
            y=c.water_level + c.shark_depth,
            direction=-1 if self.rng.random() < 0.5 else 1,
            speed=c.shark_speed,
            width=c.shark_width,
            height=c.shark_height,
        )
        world.sharks.append(shark)
        return shark

    # ----------------------------
    # Scenery
    # ----------------------------

    def make_cloud(self, x: float) -> Cloud:
        return Cloud(
            x=x,
            y=self.rng.uniform(20, 170),
            width=self.rng.uniform(80, 180),
            height=self.rng.uniform(30, 70),
            speed=self.rng.uniform(0.2, 0.7),
        )

    def make_clouds(self):
        return [self.make_cloud(self.rng.random() * self.config.width)
                for _ in range(self.config.cloud_count)]

    def make_islands(self):
        c = self.config
        y = c.water_level - c.island_height
        return [
            Island(x=0.0, y=y, width=c.island_width, height=c.island_height),
            Island(x=float(c.width - c.island_width), y=y, width=c.island_width, height=c.island_height),
        ]
