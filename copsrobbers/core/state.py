from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping, Optional, Tuple

from .graph import PATH2, TEMPLATE_GRAPHS, Graph, resolve_graph

CopPositions = Tuple[int, ...]
RobberPosition = int

MAX_COPS = 255
MAX_STEPS = 255


class Turn(Enum):
    COP = "cop"
    ROBBER = "robber"
    OVER = "over"


class Role(Enum):
    COP = "cop"
    ROBBER = "robber"

    @classmethod
    def parse(cls, value: object) -> "Role":
        if isinstance(value, Role):
            return value
        return cls(str(value).lower())


class Algorithm(Enum):
    RANDOM = "random"
    MENACE = "menace"

    @classmethod
    def parse(cls, value: object) -> "Algorithm":
        if isinstance(value, Algorithm):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown algorithm {value!r}") from None


@dataclass
class Score:
    cop_wins: int = 0
    robber_wins: int = 0

    @property
    def total(self) -> int:
        return self.cop_wins + self.robber_wins

    def as_tuple(self) -> Tuple[int, int]:
        return (self.cop_wins, self.robber_wins)

    def copy(self) -> "Score":
        return Score(self.cop_wins, self.robber_wins)


@dataclass(frozen=True)
class GameSnapshot:
    cop_positions: Optional[CopPositions]
    robber_position: Optional[RobberPosition]
    score: Tuple[int, int]
    turn: Turn
    steps_left: int
    # Positions before the last visible transition, for display interpolation.
    previous_cop_positions: Optional[CopPositions] = None
    previous_robber_position: Optional[RobberPosition] = None

    @property
    def games_played(self) -> int:
        return self.score[0] + self.score[1]


@dataclass
class GameSettings:
    graph: Graph = field(default_factory=lambda: PATH2)
    number_of_cops: int = 1
    number_of_steps: int = 1
    cop: Algorithm = Algorithm.RANDOM
    robber: Algorithm = Algorithm.RANDOM
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.graph = resolve_graph(self.graph)
        self.cop = Algorithm.parse(self.cop)
        self.robber = Algorithm.parse(self.robber)
        self.validate()

    def validate(self) -> None:
        if not 1 <= self.number_of_cops <= MAX_COPS:
            raise ValueError(f"number_of_cops must be in 1..{MAX_COPS}, got {self.number_of_cops}")
        if not 0 <= self.number_of_steps <= MAX_STEPS:
            raise ValueError(f"number_of_steps must be in 0..{MAX_STEPS}, got {self.number_of_steps}")

    def with_algorithms(
        self,
        *,
        cop: Optional[Algorithm] = None,
        robber: Optional[Algorithm] = None,
    ) -> "GameSettings":
        return replace(
            self,
            cop=self.cop if cop is None else cop,
            robber=self.robber if robber is None else robber,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "GameSettings":
        seed = data.get("seed")
        return cls(
            graph=resolve_graph(data.get("graph")),
            number_of_cops=int(data.get("number_of_cops", 1)),
            number_of_steps=int(data.get("number_of_steps", 1)),
            cop=Algorithm.parse(data.get("cop", "random")),
            robber=Algorithm.parse(data.get("robber", "random")),
            seed=None if seed is None else int(seed),
        )

    def as_dict(self) -> dict:
        graph = self.graph.name if self.graph in TEMPLATE_GRAPHS else self.graph.to_dict()
        return {
            "graph": graph,
            "number_of_cops": self.number_of_cops,
            "number_of_steps": self.number_of_steps,
            "cop": self.cop.value,
            "robber": self.robber.value,
            "seed": self.seed,
        }
