from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from copsrobbers.core import Game, GameSettings
from copsrobbers.selfplay import SelfPlayManager
from copsrobbers.validation import validate_strategy_tables

logger = logging.getLogger(__name__)


@dataclass
class SelfPlayTrainerConfig:
    settings: GameSettings = field(default_factory=GameSettings)
    games_per_iteration: int = 1000
    # Check learning tables every N iterations; 0 disables the check.
    validation_interval: int = 0


class SelfPlayTrainer:
    def __init__(self, config: Optional[SelfPlayTrainerConfig] = None) -> None:
        self.config = config or SelfPlayTrainerConfig()
        if self.config.games_per_iteration <= 0:
            raise ValueError("games_per_iteration must be positive")
        self.self_play = SelfPlayManager(self.config.settings)
        self.iteration_index = 0
        self.history: List[Dict[str, object]] = []

    @property
    def game(self) -> Game:
        return self.self_play.game

    def iteration(self) -> Dict[str, object]:
        stats = self.self_play.generate(self.config.games_per_iteration)
        self.iteration_index += 1

        result: Dict[str, object] = {
            "iteration": self.iteration_index,
            "self_play": stats,
            "cop_states": self._state_count(self.game.cop),
            "robber_states": self._state_count(self.game.robber),
            "total_score": list(self.game.score.as_tuple()),
        }
        interval = self.config.validation_interval
        if interval > 0 and self.iteration_index % interval == 0:
            result["validated_tables"] = validate_strategy_tables(self.game.cop) + validate_strategy_tables(
                self.game.robber
            )

        logger.info(
            "iteration %d: cop winrate %.3f over %d games",
            self.iteration_index,
            stats["cop_winrate"],
            stats["games_played"],
        )
        self.history.append(result)
        return result

    def learning_curve(self) -> List[float]:
        return [float(entry["self_play"]["cop_winrate"]) for entry in self.history]

    @staticmethod
    def _state_count(strategy) -> int:
        if not getattr(strategy, "learns", False):
            return 0
        return sum(1 for _ in strategy.visited_states())
