"""
RescueGame - session state machine around the simulation loop
--------------------------------------------------------------
Phases:

  NOT_STARTED -> RUNNING <-> PAUSED
                 RUNNING  -> GAME_OVER -> (start) RUNNING

Only RUNNING advances anything: the frame tick and both background timers
(the 1 Hz difficulty clock and the helicopter arrival chain). Each session
gets a fresh Scheduler; the previous one is cancelled on game over and on
restart so stale callbacks never reach the new session.

Input surface: on_start(), on_toggle_pause(), on_key_change(direction, pressed).
Drive it with update(dt) once per rendered frame.
"""

from __future__ import annotations

import copy
import enum
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .config import GameConfig
from .difficulty import DifficultyController
from .entities import (
    Boat, Cloud, FloatingScore, Helicopter, Island, Parachutist, SessionState, Shark, World,
)
from .simulation import MovementIntent, Simulation, StepEvents
from .spawner import Spawner
from .timers import Scheduler

logger = logging.getLogger(__name__)


class GamePhase(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameListener:
    """UI collaborator; override what you need. All hooks default to no-ops."""

    def on_score(self, score: int) -> None:
        pass

    def on_lives(self, lives: int) -> None:
        pass

    def on_rescued(self, rescued: int) -> None:
        pass

    def on_phase(self, phase: GamePhase) -> None:
        pass

    def on_game_over(self, final_score: int) -> None:
        pass


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of everything a renderer needs for one frame"""
    phase: GamePhase
    boat: Boat
    helicopters: Tuple[Helicopter, ...]
    parachutists: Tuple[Parachutist, ...]
    sharks: Tuple[Shark, ...]
    floating_scores: Tuple[FloatingScore, ...]
    clouds: Tuple[Cloud, ...]
    islands: Tuple[Island, ...]
    session: SessionState
    level: int
    elapsed: int


class RescueGame:
    """Owns the world, the session counters, the difficulty and the timers."""

    DIRECTIONS = ("left", "right")

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng=None,
        listeners: Iterable[GameListener] = (),
    ):
        self.config = config or GameConfig()
        self.difficulty = DifficultyController(self.config)
        self.spawner = Spawner(self.config, self.difficulty, rng=rng)
        self.simulation = Simulation(self.config, self.spawner)
        self.listeners: List[GameListener] = list(listeners)

        self.phase = GamePhase.NOT_STARTED
        self.session = SessionState(lives=self.config.initial_lives)
        self.world = World(
            boat=self._new_boat(),
            clouds=self.spawner.make_clouds(),
            islands=self.spawner.make_islands(),
        )
        self.intent = MovementIntent()
        self.scheduler = Scheduler()
        self.frame = 0
        self.last_events = StepEvents()

    # ----------------------------
    # Input surface
    # ----------------------------

    def on_start(self) -> bool:
        """Begin a session from NOT_STARTED or GAME_OVER. Returns True if started."""
        if self.phase not in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            return False

        # Kill every timer of the previous session before touching state
        self.scheduler.cancel_all()
        self.scheduler = Scheduler()

        self.session = SessionState(lives=self.config.initial_lives)
        self.world.clear()
        self.world.boat = self._new_boat()
        self.world.clouds = self.spawner.make_clouds()
        self.difficulty.reset()
        self.frame = 0
        self.last_events = StepEvents()

        self._set_phase(GamePhase.RUNNING)
        self._notify_counters()
        logger.info("Session started")

        self.scheduler.call_every(1.0, self._on_difficulty_second)
        self._on_helicopter_due()
        return True

    def on_toggle_pause(self) -> bool:
        """Flip RUNNING <-> PAUSED; a no-op in any other phase."""
        if self.phase is GamePhase.RUNNING:
            self._set_phase(GamePhase.PAUSED)
        elif self.phase is GamePhase.PAUSED:
            self._set_phase(GamePhase.RUNNING)
        else:
            return False
        logger.debug("Phase now %s", self.phase.value)
        return True

    def on_key_change(self, direction: str, pressed: bool):
        if direction not in self.DIRECTIONS:
            raise ValueError(f"Unknown direction: {direction!r}")
        setattr(self.intent, direction, bool(pressed))

    # ----------------------------
    # Frame driver
    # ----------------------------

    @property
    def running(self) -> bool:
        return self.phase is GamePhase.RUNNING

    def update(self, dt: float) -> StepEvents:
        """Advance game-time by dt, fire due timers, then run one frame."""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if not self.running:
            return StepEvents()
        self.scheduler.advance(dt)
        return self.tick()

    def tick(self) -> StepEvents:
        """One simulation frame. The single gate for every mutation."""
        if not self.running:
            return StepEvents()

        before = (self.session.score, self.session.lives, self.session.rescued)
        events = self.simulation.step(self.world, self.session, self.intent)
        self.frame += 1
        self.last_events = events

        score, lives, rescued = self.session.score, self.session.lives, self.session.rescued
        if score != before[0]:
            self._emit("on_score", score)
        if rescued != before[2]:
            self._emit("on_rescued", rescued)
        if lives != before[1]:
            self._emit("on_lives", lives)
        if events.game_over:
            self._end_session()
        return events

    def snapshot(self) -> Snapshot:
        w = self.world
        return Snapshot(
            phase=self.phase,
            boat=copy.copy(w.boat),
            helicopters=tuple(copy.copy(h) for h in w.helicopters),
            parachutists=tuple(copy.copy(p) for p in w.parachutists),
            sharks=tuple(copy.copy(s) for s in w.sharks),
            floating_scores=tuple(copy.copy(f) for f in w.floating_scores),
            clouds=tuple(copy.copy(c) for c in w.clouds),
            islands=tuple(copy.copy(i) for i in w.islands),
            session=copy.copy(self.session),
            level=self.difficulty.level,
            elapsed=self.difficulty.elapsed,
        )

    # ----------------------------
    # Timer callbacks
    # ----------------------------

    def _on_difficulty_second(self):
        if not self.running:
            return
        self.difficulty.tick_second()

    def _on_helicopter_due(self):
        if not self.running:
            return
        delay = self.spawner.spawn_helicopter(self.world)
        self.scheduler.call_later(delay, self._on_helicopter_due)

    # ----------------------------
    # Internals
    # ----------------------------

    def _new_boat(self) -> Boat:
        c = self.config
        return Boat(
            x=c.width / 2,
            y=float(c.height - c.boat_bottom_offset),
            width=c.boat_width,
            height=c.boat_height,
            speed=c.boat_speed,
        )

    def _end_session(self):
        self.scheduler.cancel_all()
        self._set_phase(GamePhase.GAME_OVER)
        logger.info(
            "Game over: score %d, rescued %d, level %d after %ds",
            self.session.score, self.session.rescued, self.difficulty.level, self.difficulty.elapsed,
        )
        self._emit("on_game_over", self.session.score)

    def _set_phase(self, phase: GamePhase):
        self.phase = phase
        self._emit("on_phase", phase)

    def _notify_counters(self):
        self._emit("on_score", self.session.score)
        self._emit("on_lives", self.session.lives)
        self._emit("on_rescued", self.session.rescued)

    def _emit(self, hook: str, value):
        for listener in self.listeners:
            getattr(listener, hook)(value)
