from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

Vertex = int
Adjacency = Tuple[Tuple[int, ...], ...]
Layout = Tuple[Tuple[float, float], ...]


class GraphError(ValueError):
    pass


def circle_layout(number_of_vertices: int) -> Layout:
    """Evenly spaced points on a circle inside the unit square."""
    points: List[Tuple[float, float]] = []
    for index in range(number_of_vertices):
        angle = 2.0 * math.pi * index / max(1, number_of_vertices)
        points.append((0.5 + 0.3 * math.sin(angle), 0.5 - 0.3 * math.cos(angle)))
    return tuple(points)


@dataclass(frozen=True)
class Graph:
    name: str
    adjacency: Adjacency
    # (x, y) in [0, 1]; only display layers look at these.
    vertices: Layout = field(default=())

    def __post_init__(self) -> None:
        adjacency = tuple(tuple(int(n) for n in neighbours) for neighbours in self.adjacency)
        object.__setattr__(self, "adjacency", adjacency)
        if not self.vertices:
            object.__setattr__(self, "vertices", circle_layout(len(adjacency)))
        else:
            vertices = tuple((float(x), float(y)) for x, y in self.vertices)
            object.__setattr__(self, "vertices", vertices)
        self.validate()

    @property
    def number_of_vertices(self) -> int:
        return len(self.adjacency)

    def neighbours(self, vertex: Vertex) -> Tuple[int, ...]:
        return self.adjacency[vertex]

    def degree(self, vertex: Vertex) -> int:
        return len(self.adjacency[vertex])

    def max_degree(self) -> int:
        return max(len(neighbours) for neighbours in self.adjacency)

    def validate(self) -> None:
        count = len(self.adjacency)
        if count == 0:
            raise GraphError("graph must have at least one vertex")
        if len(self.vertices) != count:
            raise GraphError(
                f"layout has {len(self.vertices)} points for {count} vertices"
            )
        for vertex, neighbours in enumerate(self.adjacency):
            if len(set(neighbours)) != len(neighbours):
                raise GraphError(f"vertex {vertex} lists a neighbour twice")
            for neighbour in neighbours:
                if not 0 <= neighbour < count:
                    raise GraphError(
                        f"vertex {vertex} has out-of-range neighbour {neighbour}"
                    )
                if neighbour == vertex:
                    raise GraphError(f"vertex {vertex} lists itself as a neighbour")
                if vertex not in self.adjacency[neighbour]:
                    raise GraphError(
                        f"edge {vertex}-{neighbour} is not symmetric"
                    )

    @classmethod
    def from_edges(
        cls,
        number_of_vertices: int,
        edges: Iterable[Tuple[int, int]],
        *,
        name: str = "Custom",
    ) -> "Graph":
        neighbours: List[List[int]] = [[] for _ in range(number_of_vertices)]
        for a, b in edges:
            a, b = int(a), int(b)
            if not (0 <= a < number_of_vertices and 0 <= b < number_of_vertices):
                raise GraphError(f"edge ({a}, {b}) references a missing vertex")
            if b not in neighbours[a]:
                neighbours[a].append(b)
            if a not in neighbours[b]:
                neighbours[b].append(a)
        return cls(name=name, adjacency=tuple(tuple(n) for n in neighbours))

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Graph":
        name = str(data.get("name", "Custom"))
        vertices = data.get("vertices") or ()
        if "adjacency" in data:
            adjacency = data["adjacency"]
            return cls(name=name, adjacency=tuple(tuple(n) for n in adjacency), vertices=tuple(vertices))
        if "edges" in data:
            graph = cls.from_edges(int(data["number_of_vertices"]), data["edges"], name=name)
            if vertices:
                return cls(name=name, adjacency=graph.adjacency, vertices=tuple(vertices))
            return graph
        raise GraphError("graph mapping needs either 'adjacency' or 'edges'")

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "adjacency": [list(n) for n in self.adjacency],
            "vertices": [list(p) for p in self.vertices],
        }


PATH2 = Graph(
    name="Path2",
    adjacency=((1,), (0,)),
    vertices=((0.5, 0.2), (0.5, 0.8)),
)

PATH5 = Graph(
    name="Path5",
    adjacency=((1,), (0, 2), (1, 3), (2, 4), (3,)),
    vertices=((0.5, 0.1), (0.5, 0.3), (0.5, 0.5), (0.5, 0.7), (0.5, 0.9)),
)

HEXAGON = Graph(
    name="Hexagon",
    adjacency=((5, 1), (0, 2), (1, 3), (2, 4), (3, 5), (4, 0)),
    vertices=(
        (0.5, 0.2),
        (0.76, 0.35),
        (0.76, 0.65),
        (0.5, 0.8),
        (0.24, 0.65),
        (0.24, 0.35),
    ),
)

TEMPLATE_GRAPHS: Tuple[Graph, ...] = (PATH2, PATH5, HEXAGON)


def template_graph(name: str) -> Graph:
    for graph in TEMPLATE_GRAPHS:
        if graph.name.lower() == name.lower():
            return graph
    raise KeyError(f"unknown template graph {name!r}")


def template_names() -> Sequence[str]:
    return [graph.name for graph in TEMPLATE_GRAPHS]


def resolve_graph(source: Optional[object]) -> Graph:
    """Accept a Graph, a template name or a config mapping."""
    if source is None:
        return PATH2
    if isinstance(source, Graph):
        return source
    if isinstance(source, str):
        return template_graph(source)
    if isinstance(source, Mapping):
        return Graph.from_dict(source)
    raise GraphError(f"cannot build a graph from {type(source).__name__}")
