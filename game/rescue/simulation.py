"""
Simulation loop: advances every entity by one frame
----------------------------------------------------
The per-frame order is fixed and matters:

  1. ambient clouds
  2. floating score indicators (age + prune)
  3. boat movement from the current intents
  4. helicopters (drop at drop_point, leave past the exit margin)
  5. parachutists (boat rescue first, then water landing)
  6. sharks (patrol, bite parachutists in the water)
  7. maybe spawn a shark

Collections are pruned in place with a write index so no new lists are
allocated per frame. The tick stops as soon as the last life is lost.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import GameConfig
from .entities import FloatingScore, SessionState, World
from .spawner import Spawner
from .utils import clamp, overlaps


@dataclass
class MovementIntent:
    """Continuous input: which movement keys are held"""
    left: bool = False
    right: bool = False


@dataclass
class StepEvents:
    """What happened during one tick"""
    rescued: int = 0
    landed: int = 0
    bitten: int = 0
    drops: int = 0
    sharks_spawned: int = 0
    game_over: bool = False

    @property
    def lives_lost(self) -> int:
        return self.landed + self.bitten


class Simulation:
    """Stateless per-frame update over a World and SessionState"""

    def __init__(self, config: GameConfig, spawner: Spawner):
        self.config = config
        self.spawner = spawner

    def step(self, world: World, session: SessionState, intent: MovementIntent) -> StepEvents:
        events = StepEvents()

        self._update_clouds(world)
        self._update_floating_scores(world)
        self._update_boat(world, intent)
        self._update_helicopters(world, events)

        self._update_parachutists(world, session, events)
        if events.game_over:
            return events

        self._update_sharks(world, session, events)
        if events.game_over:
            return events

        if self.spawner.maybe_spawn_shark(world):
            events.sharks_spawned += 1
        return events

    # ----------------------------
    # Per-frame steps
    # ----------------------------

    def _update_clouds(self, world: World):
        for cloud in world.clouds:
            cloud.x -= cloud.speed
            if cloud.x + cloud.width < 0:
                cloud.x = float(self.config.width)
                cloud.y = self.spawner.rng.uniform(20, 170)

    def _update_floating_scores(self, world: World):
        scores = world.floating_scores
        keep = 0
        for s in scores:
            s.y += s.velocity
            s.lifetime -= 1
            if s.lifetime > 0:
                scores[keep] = s
                keep += 1
        del scores[keep:]

    def _update_boat(self, world: World, intent: MovementIntent):
        boat = world.boat
        if intent.left:
            boat.x -= boat.speed
        if intent.right:
            boat.x += boat.speed
        boat.x = clamp(boat.x, 0.0, self.config.boat_max_x)

    def _update_helicopters(self, world: World, events: StepEvents):
        width = self.config.width
        margin = self.config.exit_margin
        helis = world.helicopters
        keep = 0
        for h in helis:
            h.x += h.speed

            if not h.has_dropped:
                reached = h.x >= h.drop_point if h.moving_right else h.x <= h.drop_point
                if reached:
                    self.spawner.spawn_parachutist(world, h.x, h.y + h.height)
                    h.has_dropped = True
                    events.drops += 1

            on_screen = h.x < width + margin if h.moving_right else h.x > -margin
            if on_screen:
                helis[keep] = h
                keep += 1
        del helis[keep:]

    def _update_parachutists(self, world: World, session: SessionState, events: StepEvents):
        c = self.config
        paras = world.parachutists
        keep = 0
        for p in paras:
            if events.game_over:
                # Frozen from here on; keep the rest untouched
                paras[keep] = p
                keep += 1
                continue

            p.y += p.speed

            if overlaps(p, world.boat):
                p.is_rescued = True
                session.rescued += 1
                session.score += c.rescue_points
                world.floating_scores.append(FloatingScore(
                    x=p.x + c.sprite_size / 2,
                    y=p.y,
                    lifetime=c.floating_score_lifetime,
                    initial_lifetime=c.floating_score_lifetime,
                    velocity=c.floating_score_velocity,
                ))
                events.rescued += 1
                continue

            if p.y > c.water_level:
                events.landed += 1
                if self._lose_life(session):
                    events.game_over = True
                continue

            paras[keep] = p
            keep += 1
        del paras[keep:]

    def _update_sharks(self, world: World, session: SessionState, events: StepEvents):
        max_x = self.config.width - self.config.shark_width
        water = self.config.water_level
        for shark in world.sharks:
            shark.x += shark.speed * shark.direction
            if shark.x <= 0 or shark.x >= max_x:
                shark.direction *= -1

            for p in world.parachutists:
                if p.y > water and overlaps(p, shark):
                    events.bitten += 1
                    if self._lose_life(session):
                        events.game_over = True
                        return

    @staticmethod
    def _lose_life(session: SessionState) -> bool:
        """Take one life (floored at zero); True when none are left."""
        session.lives = max(0, session.lives - 1)
        return session.lives == 0
