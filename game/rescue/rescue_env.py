"""
RescueEnv - the rescue game as a Gymnasium environment
------------------------------------------------------
- One RescueGame session per episode, one frame per step (dt = 1/fps)
- Discrete action space: 0 stay, 1 left, 2 right
- Vector observation: boat/session state + K nearest parachutists
  + M helicopters that still carry their parachutist
- Reward: rescues minus lives lost, small time penalty, game-over penalty

Quick test:
    python -m game.rescue.rescue_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .game import GamePhase, RescueGame
from .simulation import StepEvents
from .utils import clamp, seed_everything

DEFAULT_REWARDS = {
    "R_RESCUE": 1.0,     # per parachutist caught
    "R_LIFE": 1.0,       # per life lost
    "R_TIME": 0.001,     # per step
    "R_GAME_OVER": 5.0,  # once, when the last life goes
}


class RescueEnv(gym.Env):
    """Boat-rescue environment rendered with Arcade"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_parachutists: int = 4,
        m_helicopters: int = 2,
        reward_config: Optional[Dict[str, float]] = None,
        **game_kwargs,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        self.render_mode = render_mode

        self.config = GameConfig(**game_kwargs)
        self.max_steps = max_steps
        self.k_parachutists = k_parachutists
        self.m_helicopters = m_helicopters

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k in DEFAULT_REWARDS})

        self._rng = random.Random()
        self.game = RescueGame(self.config, rng=self._rng)

        self.action_space = spaces.Discrete(3)

        # Boat x, lives, level
        # Each parachutist: rel x, rel y, present
        # Each helicopter: drop point rel x, direction, present
        obs_dim = 3 + self.k_parachutists * 3 + self.m_helicopters * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0
        self._events = StepEvents()

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is not None:
            self._rng.seed(seed)

        self._step_count = 0
        self._events = StepEvents()
        self.game.on_start()

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        self.game.on_key_change("left", action == 1)
        self.game.on_key_change("right", action == 2)

        self._events = self.game.update(self.config.frame_dt)

        reward = self._compute_reward()
        terminated = self.game.phase is GamePhase.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        c = self.config
        boat = self.game.world.boat
        boat_cx = boat.x + boat.width / 2

        obs_parts = [
            (boat.x / max(1.0, c.boat_max_x)) * 2 - 1,
            (self.game.session.lives / c.initial_lives) * 2 - 1,
            ((self.game.difficulty.level - 1) / max(1, c.max_level - 1)) * 2 - 1,
        ]

        # Parachutists: K closest to the water first
        paras = sorted(self.game.world.parachutists, key=lambda p: -p.y)
        for i in range(self.k_parachutists):
            if i < len(paras):
                p = paras[i]
                dx = (p.x + p.width / 2 - boat_cx) / c.width
                dy = (boat.y - p.y) / c.height
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1), 1.0]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        # Helicopters still carrying someone, nearest drop point first
        helis = [h for h in self.game.world.helicopters if not h.has_dropped]
        helis.sort(key=lambda h: abs(h.drop_point - boat_cx))
        for i in range(self.m_helicopters):
            if i < len(helis):
                h = helis[i]
                dx = (h.drop_point - boat_cx) / c.width
                obs_parts += [clamp(dx, -1, 1), 1.0 if h.moving_right else -1.0, 1.0]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_RESCUE"] * self._events.rescued
        reward -= r["R_LIFE"] * self._events.lives_lost
        reward -= r["R_TIME"]
        if self._events.game_over:
            reward -= r["R_GAME_OVER"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        world = self.game.world
        return {
            "score": self.game.session.score,
            "lives": self.game.session.lives,
            "rescued": self.game.session.rescued,
            "level": self.game.difficulty.level,
            "num_helicopters": len(world.helicopters),
            "num_parachutists": len(world.parachutists),
            "num_sharks": len(world.sharks),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import RescueWindow

            self._window = RescueWindow(self.game)
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = RescueEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  "
          f"(rescued {info['rescued']}, score {info['score']}, level {info['level']})")
    env.close()


if __name__ == "__main__":
    run_random_episode(render=True)
