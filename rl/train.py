"""
Training script for the rescue environment using Stable-Baselines3
Supports PPO and DQN with per-episode rescue metrics.
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.rescue import RescueEnv
from rl.configs.rescue_config import (
    ENV_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG, REWARD_CONFIGS,
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


def reward_params(reward_config: str) -> dict:
    if reward_config not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {reward_config}")
    return REWARD_CONFIGS[reward_config]


def make_env(seed: Optional[int] = None, reward_config: str = "baseline"):
    """Factory function to create the environment"""
    def _init():
        env = RescueEnv(reward_config=reward_params(reward_config), **ENV_CONFIG)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train_ppo(
    total_timesteps: Optional[int] = None,
    save_dir: str = "./models/ppo",
    log_dir: str = "./logs/ppo",
    tensorboard_log: str = "./tensorboard_logs/ppo",
    n_envs: int = 4,
    reward_config: str = "baseline",
):
    """Train PPO agent on the rescue environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments, reward config '{reward_config}'")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i, reward_config=reward_config) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100, reward_config=reward_config)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix="ppo_rescue",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG.get("eval_freq", 5000) // n_envs),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name="ppo", verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = PPO(env=env, tensorboard_log=tensorboard_log, **PPO_CONFIG)
    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, "ppo_rescue_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    _print_summary("PPO", final_path, metrics_callback)
    return model, metrics_callback


def train_dqn(
    total_timesteps: Optional[int] = None,
    save_dir: str = "./models/dqn",
    log_dir: str = "./logs/dqn",
    tensorboard_log: str = "./tensorboard_logs/dqn",
    reward_config: str = "baseline",
):
    """Train DQN agent on the rescue environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training DQN for {total_timesteps:,} timesteps...")
    print(f"Reward config '{reward_config}'")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=0, reward_config=reward_config)])
    eval_env = DummyVecEnv([make_env(seed=100, reward_config=reward_config)])

    checkpoint_callback = CheckpointCallback(
        save_freq=TRAINING_CONFIG["save_freq"],
        save_path=save_dir,
        name_prefix="dqn_rescue",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=TRAINING_CONFIG.get("eval_freq", 10000),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name="dqn", verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = DQN(env=env, tensorboard_log=tensorboard_log, **DQN_CONFIG)
    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, "dqn_rescue_final")
    model.save(final_path)

    _print_summary("DQN", final_path, metrics_callback)
    return model, metrics_callback


def _print_summary(name: str, final_path: str, metrics_callback: MetricsCallback):
    print(f"\n{'='*60}")
    print(f"{name} Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Rescued: {summary['mean_rescued']:.1f}  (max level {summary['max_level']})")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the rescue environment")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )
    parser.add_argument(
        "--reward-config",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping preset (default: baseline)",
    )

    args = parser.parse_args()

    if args.algo in ("ppo", "all"):
        train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs, reward_config=args.reward_config)
    if args.algo in ("dqn", "all"):
        train_dqn(total_timesteps=args.timesteps, reward_config=args.reward_config)


if __name__ == "__main__":
    main()
