from __future__ import annotations

from typing import Dict, Hashable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from copsrobbers.core.graph import Graph
from copsrobbers.core.state import Algorithm, CopPositions, RobberPosition
from copsrobbers.strategies.bag import Bag, Sampler, weighted_sampler

CopStateKey = Optional[Tuple[CopPositions, RobberPosition]]
RobberStateKey = Tuple[CopPositions, Optional[RobberPosition]]


# ----------------------------------------------------------------------
# Choice encoding
#
# A single token at vertex v with neighbours nbrs has len(nbrs) + 1 choices:
# index k < len(nbrs) moves to nbrs[k], index len(nbrs) stays put. Several
# cops are combined as a mixed-radix number, least significant digit first.
# ----------------------------------------------------------------------
def move_token(graph: Graph, vertex: int, index: int) -> int:
    neighbours = graph.neighbours(vertex)
    if index == len(neighbours):
        return vertex
    return neighbours[index]


def cop_start_choices(graph: Graph, number_of_cops: int) -> int:
    return graph.number_of_vertices ** number_of_cops


def cop_step_choices(graph: Graph, cop_positions: Sequence[int]) -> int:
    size = 1
    for position in cop_positions:
        size *= graph.degree(position) + 1
    return size


def robber_start_choices(graph: Graph) -> int:
    return graph.number_of_vertices


def robber_step_choices(graph: Graph, robber_position: int) -> int:
    return graph.degree(robber_position) + 1


def decode_cop_start(graph: Graph, number_of_cops: int, choice: int) -> CopPositions:
    number_of_vertices = graph.number_of_vertices
    positions: List[int] = []
    for _ in range(number_of_cops):
        positions.append(choice % number_of_vertices)
        choice //= number_of_vertices
    return tuple(positions)


def decode_cop_step(graph: Graph, cop_positions: Sequence[int], choice: int) -> CopPositions:
    positions: List[int] = []
    for position in cop_positions:
        base = graph.degree(position) + 1
        positions.append(move_token(graph, position, choice % base))
        choice //= base
    return tuple(positions)


def decode_robber_step(graph: Graph, robber_position: int, choice: int) -> RobberPosition:
    return move_token(graph, robber_position, choice)


# ----------------------------------------------------------------------
# Strategy interfaces
# ----------------------------------------------------------------------
class CopStrategy:
    """Chooses where the cops start and how they move each turn."""

    learns = False

    def __init__(self, graph: Graph, number_of_cops: int) -> None:
        self.graph = graph
        self.number_of_cops = number_of_cops

    def start(self) -> CopPositions:
        raise NotImplementedError

    def step(self, cop_positions: CopPositions, robber_position: RobberPosition) -> CopPositions:
        raise NotImplementedError

    def end(self, cop_positions: CopPositions, robber_position: RobberPosition) -> None:
        """Called once after every finished game with the final positions."""

    def bag_counts(self, key: CopStateKey) -> Optional[np.ndarray]:
        return None


class RobberStrategy:
    """Chooses where the robber starts and how it moves each turn."""

    learns = False

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def start(self, cop_positions: CopPositions) -> RobberPosition:
        raise NotImplementedError

    def step(self, cop_positions: CopPositions, robber_position: RobberPosition) -> RobberPosition:
        raise NotImplementedError

    def end(self, cop_positions: CopPositions, robber_position: RobberPosition) -> None:
        """Called once after every finished game with the final positions."""

    def bag_counts(self, key: RobberStateKey) -> Optional[np.ndarray]:
        return None


# ----------------------------------------------------------------------
# Random strategies
# ----------------------------------------------------------------------
class RandomCop(CopStrategy):
    def __init__(
        self,
        graph: Graph,
        number_of_cops: int,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__(graph, number_of_cops)
        self.rng = rng or np.random.default_rng()

    def start(self) -> CopPositions:
        count = self.graph.number_of_vertices
        return tuple(int(self.rng.integers(count)) for _ in range(self.number_of_cops))

    def step(self, cop_positions: CopPositions, robber_position: RobberPosition) -> CopPositions:
        return tuple(
            move_token(self.graph, position, int(self.rng.integers(self.graph.degree(position) + 1)))
            for position in cop_positions
        )


class RandomRobber(RobberStrategy):
    def __init__(self, graph: Graph, rng: Optional[np.random.Generator] = None) -> None:
        super().__init__(graph)
        self.rng = rng or np.random.default_rng()

    def start(self, cop_positions: CopPositions) -> RobberPosition:
        return int(self.rng.integers(self.graph.number_of_vertices))

    def step(self, cop_positions: CopPositions, robber_position: RobberPosition) -> RobberPosition:
        index = int(self.rng.integers(self.graph.degree(robber_position) + 1))
        return move_token(self.graph, robber_position, index)


# ----------------------------------------------------------------------
# MENACE strategies
# ----------------------------------------------------------------------
class MenaceTables:
    """Per-state bags plus the log of choices made in the running game."""

    learns = True

    def __init__(self, sampler: Sampler) -> None:
        self.bags: Dict[Hashable, Bag] = {}
        self.move_log: List[Tuple[Hashable, int]] = []
        self._sampler = sampler

    def _choose(self, key: Hashable, size: int) -> int:
        bag = self.bags.get(key)
        if bag is None:
            bag = Bag(size, sampler=self._sampler)
            self.bags[key] = bag
        choice = bag.choose()
        self.move_log.append((key, choice))
        return choice

    def _learn(self, won: bool) -> None:
        for key, choice in self.move_log:
            if won:
                self.bags[key].reinforce(choice)
            else:
                self.bags[key].penalize(choice)
        self.move_log.clear()

    def bag_counts(self, key: Hashable) -> Optional[np.ndarray]:
        bag = self.bags.get(key)
        return None if bag is None else bag.snapshot()

    def visited_states(self) -> Iterator[Hashable]:
        return iter(list(self.bags))

    def learning_tables(self) -> Dict[Hashable, np.ndarray]:
        return {key: bag.snapshot() for key, bag in self.bags.items()}


class MenaceCop(MenaceTables, CopStrategy):
    # Keys: None for the starting placement, (cop_positions, robber_position)
    # afterwards. Cop order is part of the key.

    def __init__(
        self,
        graph: Graph,
        number_of_cops: int,
        *,
        rng: Optional[np.random.Generator] = None,
        sampler: Optional[Sampler] = None,
    ) -> None:
        CopStrategy.__init__(self, graph, number_of_cops)
        MenaceTables.__init__(self, sampler or weighted_sampler(rng))

    def start(self) -> CopPositions:
        choice = self._choose(None, cop_start_choices(self.graph, self.number_of_cops))
        return decode_cop_start(self.graph, self.number_of_cops, choice)

    def step(self, cop_positions: CopPositions, robber_position: RobberPosition) -> CopPositions:
        key = (tuple(cop_positions), robber_position)
        choice = self._choose(key, cop_step_choices(self.graph, cop_positions))
        return decode_cop_step(self.graph, cop_positions, choice)

    def end(self, cop_positions: CopPositions, robber_position: RobberPosition) -> None:
        self._learn(won=robber_position in cop_positions)


class MenaceRobber(MenaceTables, RobberStrategy):
    # Keys: (cop_positions, None) for the starting placement,
    # (cop_positions, robber_position) afterwards.

    def __init__(
        self,
        graph: Graph,
        *,
        rng: Optional[np.random.Generator] = None,
        sampler: Optional[Sampler] = None,
    ) -> None:
        RobberStrategy.__init__(self, graph)
        MenaceTables.__init__(self, sampler or weighted_sampler(rng))

    def start(self, cop_positions: CopPositions) -> RobberPosition:
        return self._choose((tuple(cop_positions), None), robber_start_choices(self.graph))

    def step(self, cop_positions: CopPositions, robber_position: RobberPosition) -> RobberPosition:
        key = (tuple(cop_positions), robber_position)
        choice = self._choose(key, robber_step_choices(self.graph, robber_position))
        return decode_robber_step(self.graph, robber_position, choice)

    def end(self, cop_positions: CopPositions, robber_position: RobberPosition) -> None:
        self._learn(won=robber_position not in cop_positions)


def make_cop(
    algorithm: Algorithm,
    graph: Graph,
    number_of_cops: int,
    *,
    rng: Optional[np.random.Generator] = None,
    sampler: Optional[Sampler] = None,
) -> CopStrategy:
    algorithm = Algorithm.parse(algorithm)
    if algorithm is Algorithm.RANDOM:
        return RandomCop(graph, number_of_cops, rng)
    if algorithm is Algorithm.MENACE:
        return MenaceCop(graph, number_of_cops, rng=rng, sampler=sampler)
    raise ValueError(f"unsupported cop algorithm {algorithm!r}")


def make_robber(
    algorithm: Algorithm,
    graph: Graph,
    *,
    rng: Optional[np.random.Generator] = None,
    sampler: Optional[Sampler] = None,
) -> RobberStrategy:
    algorithm = Algorithm.parse(algorithm)
    if algorithm is Algorithm.RANDOM:
        return RandomRobber(graph, rng)
    if algorithm is Algorithm.MENACE:
        return MenaceRobber(graph, rng=rng, sampler=sampler)
    raise ValueError(f"unsupported robber algorithm {algorithm!r}")
