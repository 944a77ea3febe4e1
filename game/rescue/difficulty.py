"""
Difficulty controller: level escalation on a game-time cadence
"""

from __future__ import annotations

import logging

from .config import GameConfig
from .entities import DifficultyState

logger = logging.getLogger(__name__)


class DifficultyController:
    """Levels 1..max_level, one step every ``difficulty_interval`` seconds.

    The owner calls tick_second() once per second of game-time (from a 1 Hz
    timer). Speeds scale linearly with the level: base * (1 + (level-1) * step).
    """

    def __init__(self, config: GameConfig):
        self.config = config
        self.state = DifficultyState()

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def elapsed(self) -> int:
        return self.state.elapsed

    @property
    def at_max(self) -> bool:
        return self.state.level >= self.config.max_level

    def reset(self):
        self.state = DifficultyState()

    def tick_second(self) -> bool:
        """Account one second of game-time. Returns True if the level went up."""
        self.state.elapsed += 1
        if self.state.elapsed % self.config.difficulty_interval != 0:
            return False
        if self.at_max:
            return False
        self.state.level += 1
        logger.info(
            "Difficulty raised to level %d at %ds (helicopter %.2f, parachute %.2f)",
            self.state.level, self.state.elapsed, self.helicopter_speed, self.parachute_speed,
        )
        return True

    def scale(self, base: float) -> float:
        return base * (1 + (self.state.level - 1) * self.config.speed_step)

    @property
    def helicopter_speed(self) -> float:
        return self.scale(self.config.base_helicopter_speed)

    @property
    def parachute_speed(self) -> float:
        return self.scale(self.config.base_parachute_speed)

    def spawn_delay_bounds(self):
        """(min, max) seconds until the next helicopter, shrinking with level"""
        c = self.config
        steps = self.state.level - 1
        lo = max(c.min_delay_floor, c.base_spawn_delay - steps * c.min_delay_step)
        hi = max(c.max_delay_floor, c.base_spawn_delay - steps * c.max_delay_step)
        return lo, hi
