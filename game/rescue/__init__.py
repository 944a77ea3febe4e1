"""Shark rescue game module - simulation core plus Gymnasium env"""

from .config import GameConfig
from .game import GameListener, GamePhase, RescueGame, Snapshot
from .rescue_env import RescueEnv, run_random_episode

__all__ = [
    'GameConfig', 'GameListener', 'GamePhase', 'RescueGame', 'Snapshot',
    'RescueEnv', 'run_random_episode',
]
