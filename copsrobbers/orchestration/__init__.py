"""Background game worker and training orchestration."""

from .loop import SelfPlayTrainer, SelfPlayTrainerConfig
from .runner import GameRunner, GameRunnerConfig

__all__ = ["GameRunner", "GameRunnerConfig", "SelfPlayTrainer", "SelfPlayTrainerConfig"]
