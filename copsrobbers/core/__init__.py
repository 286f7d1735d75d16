"""Core game model: graphs, settings and the turn state machine."""

from .graph import (
    HEXAGON,
    PATH2,
    PATH5,
    TEMPLATE_GRAPHS,
    Graph,
    GraphError,
    circle_layout,
    resolve_graph,
    template_graph,
    template_names,
)
from .state import (
    MAX_COPS,
    MAX_STEPS,
    Algorithm,
    CopPositions,
    GameSettings,
    GameSnapshot,
    RobberPosition,
    Role,
    Score,
    Turn,
)
from .game import Game

__all__ = [
    "HEXAGON",
    "PATH2",
    "PATH5",
    "TEMPLATE_GRAPHS",
    "Graph",
    "GraphError",
    "circle_layout",
    "resolve_graph",
    "template_graph",
    "template_names",
    "MAX_COPS",
    "MAX_STEPS",
    "Algorithm",
    "CopPositions",
    "GameSettings",
    "GameSnapshot",
    "RobberPosition",
    "Role",
    "Score",
    "Turn",
    "Game",
]
