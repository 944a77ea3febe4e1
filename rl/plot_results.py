"""
Plotting script for rescue training runs.
Generates learning curves from the metrics CSV written by MetricsCallback.
"""

import os
import argparse
from typing import Dict, Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (
        os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
        os.path.join(log_dir, f"{algo}_metrics.csv"),
    ):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def _plot_series(ax, df: pd.DataFrame, column: str, window: int, label: str, **kwargs):
    values = smooth(df[column].values, window)
    ax.plot(df["timestep"].values[:len(values)], values, linewidth=2, label=label, **kwargs)


def plot_learning_curve(df: pd.DataFrame, algo: str, output_dir: str, window: int = 50):
    """Plot reward, length, rescues and level reached for one algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        (axes[0, 0], "reward", "Episode Reward", None),
        (axes[0, 1], "length", "Episode Length", "orange"),
        (axes[1, 0], "rescued", "Parachutists Rescued", "green"),
        (axes[1, 1], "level", "Difficulty Level Reached", "purple"),
    ]
    for ax, column, title, color in panels:
        if column not in df.columns:
            ax.axis("off")
            continue
        _plot_series(ax, df, column, window, f"{algo} (smoothed)", color=color)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(title)
        ax.set_title(f"{title} vs Timesteps")
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(data: Dict[str, pd.DataFrame], output_dir: str, window: int = 50):
    """Overlay reward and rescue curves of every algorithm."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Algorithm Comparison", fontsize=16, fontweight="bold")

    colors = {"dqn": "#2ecc71", "ppo": "#3498db"}
    for algo, df in data.items():
        if df is None or len(df) == 0:
            continue
        _plot_series(axes[0], df, "reward", window, algo.upper(), color=colors.get(algo))
        _plot_series(axes[1], df, "rescued", window, algo.upper(), color=colors.get(algo))

    for ax, title in zip(axes, ("Episode Reward", "Parachutists Rescued")):
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(title)
        ax.set_title(title)
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "algorithm_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def generate_summary_report(data: Dict[str, pd.DataFrame], output_dir: str):
    """Generate a text summary report."""
    report_lines = ["=" * 60, "RESCUE TRAINING SUMMARY", "=" * 60, ""]

    for algo, df in data.items():
        if df is None or len(df) == 0:
            continue
        final = df.tail(100)
        report_lines += [
            f"\n{algo.upper()} Results:",
            "-" * 40,
            f"  Total Episodes: {len(df)}",
            f"  Total Timesteps: {df['timestep'].max():,}",
            f"  Mean Reward: {df['reward'].mean():.2f} ± {df['reward'].std():.2f}",
            f"  Mean Rescued: {df['rescued'].mean():.1f}",
            f"  Highest Level: {df['level'].max()}",
            "\n  Final Performance (last 100 episodes):",
            f"    Mean Reward: {final['reward'].mean():.2f} ± {final['reward'].std():.2f}",
            f"    Mean Rescued: {final['rescued'].mean():.1f}",
            f"    Survival Rate: {final['survival_rate'].mean():.2%}",
        ]

    report_lines.append("\n" + "=" * 60)
    report = "\n".join(report_lines)
    print(report)

    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, "training_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)

    print(f"\nSaved summary report to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Plot rescue training results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory containing log files")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Directory to save plots")
    parser.add_argument("--window", type=int, default=50, help="Smoothing window size (default: 50)")
    parser.add_argument("--algos", nargs="+", default=["dqn", "ppo"], help="Algorithms to plot")

    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        if df is not None:
            print(f"  Loaded {algo}: {len(df)} episodes")
        else:
            print(f"  No data found for {algo}")
        data[algo] = df

    if not any(d is not None for d in data.values()):
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for algo, df in data.items():
        if df is not None:
            plot_learning_curve(df, algo, args.output_dir, args.window)

    if sum(1 for d in data.values() if d is not None) > 1:
        plot_comparison(data, args.output_dir, args.window)

    generate_summary_report(data, args.output_dir)
    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
