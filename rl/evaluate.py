"""
Evaluation script for trained RL agents
Reports reward plus how each episode ended: rescues, lives left, level reached.
"""

import argparse
from typing import Dict, List, Optional

import numpy as np
from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

from game.rescue import RescueEnv
from rl.configs.rescue_config import ENV_CONFIG

ALGOS = {"ppo": PPO, "dqn": DQN}


def summarize_episodes(episodes: List[Dict[str, float]]) -> Dict[str, float]:
    """Aggregate per-episode records (reward, length, rescued, lives, level, game_over)."""
    rewards = np.array([e["reward"] for e in episodes], dtype=np.float64)
    return {
        "mean_reward": float(rewards.mean()),
        "std_reward": float(rewards.std()),
        "mean_length": float(np.mean([e["length"] for e in episodes])),
        "mean_rescued": float(np.mean([e["rescued"] for e in episodes])),
        "mean_lives_left": float(np.mean([e["lives"] for e in episodes])),
        "max_level": int(max(e["level"] for e in episodes)),
        # Episodes that hit max_steps with lives to spare
        "survival_rate": float(np.mean([not e["game_over"] for e in episodes])),
    }


def print_summary(title: str, summary: Dict[str, float], n_episodes: int):
    print("\n" + "=" * 50)
    print(f"{title} ({n_episodes} episodes):")
    print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
    print(f"Mean Episode Length: {summary['mean_length']:.1f}")
    print(f"Mean Rescued: {summary['mean_rescued']:.1f}")
    print(f"Mean Lives Left: {summary['mean_lives_left']:.2f}")
    print(f"Highest Level: {summary['max_level']}")
    print(f"Survival Rate: {summary['survival_rate']:.0%}")
    print("=" * 50)


def _episode_record(total_reward: float, steps: int, info: dict) -> Dict[str, float]:
    return {
        "reward": total_reward,
        "length": steps,
        "rescued": info.get("rescued", 0),
        "lives": info.get("lives", 0),
        "level": info.get("level", 1),
        "game_over": info.get("lives", 0) == 0,
    }


def evaluate_model(
    model_path: str,
    algo: str = "ppo",
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
):
    """
    Evaluate a trained model

    Args:
        model_path: Path to the saved model
        algo: Algorithm used ('ppo' or 'dqn')
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats (for PPO)
    """
    if algo not in ALGOS:
        raise ValueError(f"Unknown algorithm: {algo}")
    model = ALGOS[algo].load(model_path)

    render_mode = "human" if render else None
    env = DummyVecEnv([lambda: RescueEnv(render_mode=render_mode, **ENV_CONFIG)])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episodes = []
    for episode in range(n_episodes):
        if seed is not None:
            env.seed(seed + episode)
        obs = env.reset()

        total_reward = 0.0
        steps = 0
        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += float(reward[0])
            steps += 1
            if done[0]:
                break

        # The VecEnv auto-resets, but info still describes the finished episode
        record = _episode_record(total_reward, steps, info[0])
        episodes.append(record)
        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, Rescued = {record['rescued']}, "
              f"Lives = {record['lives']}, Level = {record['level']}")

    env.close()

    summary = summarize_episodes(episodes)
    print_summary(f"{algo.upper()} Evaluation", summary, n_episodes)
    summary["episodes"] = episodes
    return summary


def evaluate_random(n_episodes: int = 10, seed: Optional[int] = None):
    """Same report for a uniformly random policy"""
    env = RescueEnv(render_mode=None, **ENV_CONFIG)

    episodes = []
    for episode in range(n_episodes):
        env.reset(seed=seed + episode if seed is not None else None)
        env.action_space.seed(seed + episode if seed is not None else None)

        terminated = truncated = False
        total_reward = 0.0
        steps = 0
        info = {}
        while not (terminated or truncated):
            _, reward, terminated, truncated, info = env.step(env.action_space.sample())
            total_reward += reward
            steps += 1
        episodes.append(_episode_record(total_reward, steps, info))

    env.close()

    summary = summarize_episodes(episodes)
    print_summary("Random Policy", summary, n_episodes)
    return summary


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained RL agent")
    parser.add_argument("model_path", type=str, help="Path to the trained model")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=sorted(ALGOS),
        help="Algorithm used to train the model (default: ppo)",
    )
    parser.add_argument("--n-episodes", type=int, default=10, help="Number of evaluation episodes (default: 10)")
    parser.add_argument("--no-render", action="store_true", help="Disable rendering")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file (for PPO)",
    )
    parser.add_argument(
        "--baseline",
        action="store_true",
        help="Also run a random policy and report the rescue/survival gap",
    )

    args = parser.parse_args()

    results = evaluate_model(
        model_path=args.model_path,
        algo=args.algo,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
    )

    if args.baseline:
        base = evaluate_random(n_episodes=args.n_episodes, seed=args.seed)
        print(f"\nExtra rescues per episode over random: {results['mean_rescued'] - base['mean_rescued']:+.1f}")
        print(f"Survival rate gain over random: {results['survival_rate'] - base['survival_rate']:+.0%}")


if __name__ == "__main__":
    main()
