from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from copsrobbers.core import Game, GameSettings, Turn


@dataclass
class BatchResult:
    games_played: int
    cop_wins: int
    robber_wins: int
    total_moves: int

    @property
    def average_moves(self) -> float:
        return self.total_moves / self.games_played if self.games_played else 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            "games_played": self.games_played,
            "cop_wins": self.cop_wins,
            "robber_wins": self.robber_wins,
            "total_moves": self.total_moves,
            "average_moves": self.average_moves,
        }


def run_games(game: Game, episodes: int) -> BatchResult:
    """Advance ``game`` until ``episodes`` more games have finished.

    One extra advance follows the last finished game so the game is left
    reset and waiting for the cops to be placed again.
    """
    if episodes <= 0:
        raise ValueError(f"episodes must be positive, got {episodes}")
    before = game.score.copy()
    finished = 0
    moves = 0
    while finished < episodes:
        resetting = game.turn is Turn.OVER
        turn = game.advance()
        if resetting:
            continue
        moves += 1
        if turn is Turn.OVER:
            finished += 1
    game.advance()
    return BatchResult(
        games_played=finished,
        cop_wins=game.score.cop_wins - before.cop_wins,
        robber_wins=game.score.robber_wins - before.robber_wins,
        total_moves=moves,
    )


class SelfPlayManager:
    def __init__(
        self,
        settings: GameSettings,
        *,
        game_factory: Callable[[GameSettings], Game] = Game,
    ) -> None:
        self.settings = settings
        self.game = game_factory(settings)

    def generate(self, episodes: int) -> Dict[str, object]:
        result = run_games(self.game, episodes)
        stats: Dict[str, object] = dict(result.as_dict())
        stats["cop_winrate"] = result.cop_wins / result.games_played
        stats["robber_winrate"] = result.robber_wins / result.games_played
        return stats

    @property
    def cop(self):
        return self.game.cop

    @property
    def robber(self):
        return self.game.robber
