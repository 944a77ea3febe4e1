"""
Training configuration for the rescue environment
Reward shaping variants plus SB3 hyperparameters
"""

# Environment parameters (GameConfig fields are passed straight through)
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_parachutists": 4,
    "m_helicopters": 2,
    "width": 800,
    "height": 600,
    "max_sharks": 3,
    "difficulty_interval": 30,
    "max_level": 5,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Balanced: one rescue offsets one lost life
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Rescues and lost lives weigh the same",
    "R_RESCUE": 1.0,
    "R_LIFE": 1.0,
    "R_TIME": 0.001,
    "R_GAME_OVER": 5.0,
}

# Survival: losing lives hurts much more than rescuing helps
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Heavy penalties for lost lives and game over",
    "R_RESCUE": 0.5,
    "R_LIFE": 3.0,
    "R_TIME": 0.0,
    "R_GAME_OVER": 10.0,
}

# Greedy: chase every parachutist
REWARD_CONFIG_GREEDY = {
    "name": "greedy",
    "description": "High rescue reward, mild penalties",
    "R_RESCUE": 2.0,
    "R_LIFE": 0.5,
    "R_TIME": 0.002,
    "R_GAME_OVER": 3.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "greedy": REWARD_CONFIG_GREEDY,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
