from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from copsrobbers.core import Algorithm, Game, GameSettings, Role
from copsrobbers.selfplay import run_games


@dataclass
class EvaluationResult:
    games_played: int
    cop_wins: int
    robber_wins: int
    average_length: float

    def cop_winrate(self) -> float:
        return self.cop_wins / max(1, self.games_played)

    def robber_winrate(self) -> float:
        return self.robber_wins / max(1, self.games_played)

    def winrate(self, role: Role) -> float:
        return self.cop_winrate() if Role.parse(role) is Role.COP else self.robber_winrate()


@dataclass
class BaselineComparison:
    role: Role
    learner: EvaluationResult
    baseline: EvaluationResult

    @property
    def improvement(self) -> float:
        return self.learner.winrate(self.role) - self.baseline.winrate(self.role)


def evaluate_settings(
    settings: GameSettings,
    *,
    episodes: int,
    warmup_episodes: int = 0,
    game: Optional[Game] = None,
) -> EvaluationResult:
    """Play ``episodes`` games, after ``warmup_episodes`` unscored ones."""
    game = game or Game(settings)
    if warmup_episodes > 0:
        run_games(game, warmup_episodes)
    batch = run_games(game, episodes)
    return EvaluationResult(
        games_played=batch.games_played,
        cop_wins=batch.cop_wins,
        robber_wins=batch.robber_wins,
        average_length=batch.average_moves,
    )


def compare_to_baseline(
    settings: GameSettings,
    *,
    episodes: int,
    role: Role = Role.COP,
    warmup_episodes: int = 0,
) -> BaselineComparison:
    """Compare the configured strategy for ``role`` with a random one.

    Both runs play the same number of games against the same opponent.
    """
    role = Role.parse(role)
    if role is Role.COP:
        baseline_settings = settings.with_algorithms(cop=Algorithm.RANDOM)
    else:
        baseline_settings = settings.with_algorithms(robber=Algorithm.RANDOM)
    learner = evaluate_settings(settings, episodes=episodes, warmup_episodes=warmup_episodes)
    baseline = evaluate_settings(baseline_settings, episodes=episodes, warmup_episodes=warmup_episodes)
    return BaselineComparison(role=role, learner=learner, baseline=baseline)
