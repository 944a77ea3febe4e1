"""
Custom callback for tracking rescue metrics during training.
Records: parachutists rescued, score, lives left, difficulty reached.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Callback to track and log task-specific metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_rescued: List[int] = []
        self.episode_levels: List[int] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "rescued", "score", "lives", "level", "survival_rate"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor adds "episode" on the final step
            if not (done and "episode" in info):
                continue

            ep_reward = info["episode"]["r"]
            ep_length = info["episode"]["l"]
            rescued = info.get("rescued", 0)
            score = info.get("score", 0)
            lives = info.get("lives", 0)
            level = info.get("level", 1)
            # 1.0 if the episode was truncated with lives to spare
            survival = 1.0 if lives > 0 else 0.0

            self.episode_rewards.append(ep_reward)
            self.episode_lengths.append(ep_length)
            self.episode_rescued.append(rescued)
            self.episode_levels.append(level)

            if self.csv_writer:
                self.csv_writer.writerow([
                    self.num_timesteps,
                    len(self.episode_rewards),
                    ep_reward,
                    ep_length,
                    rescued,
                    score,
                    lives,
                    level,
                    survival,
                ])
                self.csv_file.flush()

            if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                avg_reward = sum(self.episode_rewards[-10:]) / 10
                avg_rescued = sum(self.episode_rescued[-10:]) / 10
                print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                      f"Timestep {self.num_timesteps}, "
                      f"Avg Reward (10 ep): {avg_reward:.2f}, "
                      f"Avg Rescued: {avg_rescued:.1f}")

        return True

    def _on_training_end(self) -> None:
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_rescued": np.mean(self.episode_rescued),
            "max_level": int(max(self.episode_levels)),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs rescue metrics to TensorBoard at the end of every episode.
    """

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info:
                ep = info["episode"]
                self.logger.record("custom/episode_reward", ep["r"])
                self.logger.record("custom/episode_length", ep["l"])
                if "rescued" in info:
                    self.logger.record("custom/rescued", info["rescued"])
                if "level" in info:
                    self.logger.record("custom/level", info["level"])

        return True
