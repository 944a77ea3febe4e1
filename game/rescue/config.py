"""
Tunable constants for the rescue game
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class GameConfig:
    """Playfield geometry, entity sizes, speeds and timing.

    Entity speeds are in pixels per frame, timer delays in seconds of game-time.
    Coordinates are screen-style: y grows downward.
    """

    # Playfield
    width: int = 800
    height: int = 600
    water_offset: int = 40
    fps: int = 60

    # Boat
    boat_width: int = 80
    boat_height: int = 40
    boat_speed: float = 5.0
    boat_bottom_offset: int = 60

    # Helicopters
    helicopter_width: int = 80
    helicopter_height: int = 40
    base_helicopter_speed: float = 3.0
    helicopter_y_range: Tuple[float, float] = (50.0, 150.0)
    safe_zone_margin: float = 140.0
    exit_margin: float = 80.0

    # Helicopter arrival delay (seconds)
    base_spawn_delay: float = 3.0
    min_delay_floor: float = 0.5
    max_delay_floor: float = 1.0
    min_delay_step: float = 0.5
    max_delay_step: float = 0.4

    # Parachutists
    parachutist_width: int = 20
    parachutist_height: int = 30
    base_parachute_speed: float = 1.5

    # Sharks
    shark_width: int = 40
    shark_height: int = 20
    shark_speed: float = 1.0
    shark_depth: float = 20.0
    max_sharks: int = 3
    shark_spawn_rate: float = 0.002  # per frame

    # Difficulty
    difficulty_interval: int = 30  # seconds
    max_level: int = 5
    speed_step: float = 0.2

    # Session
    initial_lives: int = 3
    rescue_points: int = 100

    # Floating "+100" indicator
    floating_score_lifetime: int = 60  # frames
    floating_score_velocity: float = -2.0
    sprite_size: int = 32

    # Scenery
    cloud_count: int = 6
    island_width: int = 120
    island_height: int = 60

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Playfield must have a positive size, got {self.width}x{self.height}")
        if self.water_offset < 0 or self.water_offset >= self.height:
            raise ValueError(f"water_offset must lie inside the playfield, got {self.water_offset}")
        if self.boat_width <= 0 or self.boat_width > self.width:
            raise ValueError(f"boat_width must be in (0, width], got {self.boat_width}")
        if self.max_level < 1:
            raise ValueError(f"max_level must be >= 1, got {self.max_level}")
        if self.difficulty_interval < 1:
            raise ValueError(f"difficulty_interval must be >= 1, got {self.difficulty_interval}")
        if not 0.0 <= self.shark_spawn_rate <= 1.0:
            raise ValueError(f"shark_spawn_rate must be a probability, got {self.shark_spawn_rate}")
        if self.max_sharks < 0:
            raise ValueError(f"max_sharks must be >= 0, got {self.max_sharks}")
        if self.initial_lives < 1:
            raise ValueError(f"initial_lives must be >= 1, got {self.initial_lives}")
        if self.safe_zone_end <= self.safe_zone_start:
            raise ValueError("safe_zone_margin leaves no room to drop parachutists")
        if self.base_spawn_delay <= 0:
            raise ValueError(f"base_spawn_delay must be positive, got {self.base_spawn_delay}")
        if self.min_delay_floor <= 0 or self.max_delay_floor <= 0:
            raise ValueError(
                f"delay floors must be positive, got {self.min_delay_floor} and {self.max_delay_floor}"
            )
        if self.min_delay_step < 0 or self.max_delay_step < 0:
            raise ValueError("delay steps must be non-negative")
        lo, hi = self.helicopter_y_range
        if hi < lo:
            raise ValueError(f"helicopter_y_range is reversed: {self.helicopter_y_range}")

    @property
    def water_level(self) -> float:
        return float(self.height - self.water_offset)

    @property
    def safe_zone_start(self) -> float:
        return self.safe_zone_margin

    @property
    def safe_zone_end(self) -> float:
        return self.width - self.safe_zone_margin

    @property
    def boat_max_x(self) -> float:
        return float(self.width - self.boat_width)

    @property
    def frame_dt(self) -> float:
        return 1.0 / self.fps
