"""
Game entity dataclasses
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Boat:
    """Player-controlled rescue boat"""
    x: float
    y: float
    width: float = 80.0
    height: float = 40.0
    speed: float = 5.0  # px/frame


@dataclass
class Helicopter:
    """Helicopter crossing the sky; releases one parachutist at drop_point"""
    x: float
    y: float
    speed: float  # signed px/frame, > 0 means moving right
    drop_point: float
    width: float = 80.0
    height: float = 40.0
    has_dropped: bool = False

    @property
    def moving_right(self) -> bool:
        return self.speed > 0


@dataclass
class Parachutist:
    """Falling survivor the boat must catch"""
    x: float
    y: float
    speed: float  # px/frame, downward
    width: float = 20.0
    height: float = 30.0
    is_rescued: bool = False


@dataclass
class Shark:
    """Shark patrolling just below the water line"""
    x: float
    y: float
    direction: int  # -1 left, +1 right
    speed: float = 1.0
    width: float = 40.0
    height: float = 20.0


@dataclass
class FloatingScore:
    """Rising "+100" indicator shown after a rescue"""
    x: float
    y: float
    lifetime: int = 60  # frames left
    initial_lifetime: int = 60
    velocity: float = -2.0

    @property
    def alpha(self) -> float:
        return max(0.0, self.lifetime / self.initial_lifetime)


@dataclass
class Cloud:
    """Decorative cloud drifting left"""
    x: float
    y: float
    width: float
    height: float
    speed: float


@dataclass
class Island:
    """Static island on the water line"""
    x: float
    y: float
    width: float
    height: float


@dataclass
class DifficultyState:
    level: int = 1
    elapsed: int = 0  # whole seconds of game-time


@dataclass
class SessionState:
    score: int = 0
    lives: int = 3
    rescued: int = 0


@dataclass
class World:
    """All entity collections for one session"""
    boat: Boat
    helicopters: List[Helicopter] = field(default_factory=list)
    parachutists: List[Parachutist] = field(default_factory=list)
    sharks: List[Shark] = field(default_factory=list)
    floating_scores: List[FloatingScore] = field(default_factory=list)
    clouds: List[Cloud] = field(default_factory=list)
    islands: List[Island] = field(default_factory=list)

    def clear(self):
        """Drop every spawned entity (scenery is kept)"""
        self.helicopters.clear()
        self.parachutists.clear()
        self.sharks.clear()
        self.floating_scores.clear()
