from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from copsrobbers.core.graph import Graph
from copsrobbers.core.state import (
    Algorithm,
    CopPositions,
    GameSettings,
    GameSnapshot,
    RobberPosition,
    Score,
    Turn,
)

if TYPE_CHECKING:
    from copsrobbers.strategies.players import CopStrategy, RobberStrategy


class Game:
    """Plays an endless sequence of cop/robber games on one graph.

    Each call to :meth:`advance` performs one half-turn:

    * ``COP`` without positions: the cops pick their start vertices.
    * ``COP`` with positions: the cops move; landing on the robber ends the game.
    * ``ROBBER`` without a position: the robber picks its start vertex.
    * ``ROBBER`` with a position: the robber moves, using up one step.
    * ``OVER``: positions are cleared and the step budget restored.

    After a robber placement or move the robber is captured if it sits on a
    cop, and wins once the step budget reaches zero.
    """

    def __init__(
        self,
        settings: GameSettings,
        *,
        cop: Optional[CopStrategy] = None,
        robber: Optional[RobberStrategy] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        settings.validate()
        self.settings = settings
        self.graph: Graph = settings.graph
        self.number_of_cops = settings.number_of_cops
        self.number_of_steps = settings.number_of_steps

        # The strategies package imports core, so it is resolved here.
        from copsrobbers.strategies.players import make_cop, make_robber

        rng = rng or np.random.default_rng(settings.seed)
        if cop is None:
            cop = make_cop(
                settings.cop,
                self.graph,
                self.number_of_cops,
                rng=np.random.default_rng(int(rng.integers(2**32))),
            )
        if robber is None:
            robber = make_robber(
                settings.robber,
                self.graph,
                rng=np.random.default_rng(int(rng.integers(2**32))),
            )
        self.cop = cop
        self.robber = robber

        self.score = Score()
        self.cop_positions: Optional[CopPositions] = None
        self.robber_position: Optional[RobberPosition] = None
        self.previous_cop_positions: Optional[CopPositions] = None
        self.previous_robber_position: Optional[RobberPosition] = None
        self.steps_left = self.number_of_steps
        self.turn = Turn.COP

    @classmethod
    def from_parts(
        cls,
        graph: Graph,
        number_of_cops: int,
        number_of_steps: int,
        cop: Algorithm,
        robber: Algorithm,
        *,
        seed: Optional[int] = None,
    ) -> "Game":
        settings = GameSettings(
            graph=graph,
            number_of_cops=number_of_cops,
            number_of_steps=number_of_steps,
            cop=cop,
            robber=robber,
            seed=seed,
        )
        return cls(settings)

    @property
    def games_played(self) -> int:
        return self.score.total

    @property
    def is_over(self) -> bool:
        return self.turn is Turn.OVER

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            cop_positions=self.cop_positions,
            robber_position=self.robber_position,
            score=self.score.as_tuple(),
            turn=self.turn,
            steps_left=self.steps_left,
            previous_cop_positions=self.previous_cop_positions,
            previous_robber_position=self.previous_robber_position,
        )

    # ------------------------------------------------------------------
    def advance(self) -> Turn:
        self.previous_cop_positions = self.cop_positions
        self.previous_robber_position = self.robber_position

        if self.turn is Turn.COP:
            self._cop_turn()
        elif self.turn is Turn.ROBBER:
            self._robber_turn()
        else:
            self.cop_positions = None
            self.robber_position = None
            self.steps_left = self.number_of_steps
            self.turn = Turn.COP
        return self.turn

    def _cop_turn(self) -> None:
        if self.cop_positions is None:
            self.cop_positions = self._checked_cops(self.cop.start())
            self.turn = Turn.ROBBER
            return

        if self.robber_position is None:
            raise RuntimeError("cop step requested before the robber was placed")
        robber_position = self.robber_position
        new_positions = self._checked_cops(self.cop.step(self.cop_positions, robber_position))
        self.cop_positions = new_positions
        if robber_position in new_positions:
            self._finish(cop_won=True)
        else:
            self.turn = Turn.ROBBER

    def _robber_turn(self) -> None:
        if self.cop_positions is None:
            raise RuntimeError("robber turn requested before the cops were placed")
        cop_positions = self.cop_positions

        if self.robber_position is None:
            # Placing the robber does not use up a step.
            new_position = self.robber.start(cop_positions)
        else:
            if self.steps_left <= 0:
                raise RuntimeError("robber step requested with no steps left")
            self.steps_left -= 1
            new_position = self.robber.step(cop_positions, self.robber_position)
        self.robber_position = self._checked_vertex(new_position)

        if self.robber_position in cop_positions:
            self._finish(cop_won=True)
        elif self.steps_left == 0:
            self._finish(cop_won=False)
        else:
            self.turn = Turn.COP

    def _finish(self, *, cop_won: bool) -> None:
        cop_positions = self.cop_positions
        robber_position = self.robber_position
        self.cop.end(cop_positions, robber_position)
        self.robber.end(cop_positions, robber_position)
        if cop_won:
            self.score.cop_wins += 1
        else:
            self.score.robber_wins += 1
        self.turn = Turn.OVER

    def _checked_vertex(self, vertex: int) -> int:
        vertex = int(vertex)
        if not 0 <= vertex < self.graph.number_of_vertices:
            raise RuntimeError(f"strategy produced vertex {vertex} outside the graph")
        return vertex

    def _checked_cops(self, positions: Sequence[int]) -> CopPositions:
        positions = tuple(self._checked_vertex(p) for p in positions)
        if len(positions) != self.number_of_cops:
            raise RuntimeError(
                f"strategy produced {len(positions)} cop positions, expected {self.number_of_cops}"
            )
        return positions
