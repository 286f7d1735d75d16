"""Cops and robbers on graphs with MENACE-style self-play learners."""

from . import core, strategies, selfplay, orchestration, evaluation, features, env, validation
from .core import (
    HEXAGON,
    PATH2,
    PATH5,
    TEMPLATE_GRAPHS,
    Algorithm,
    Game,
    GameSettings,
    GameSnapshot,
    Graph,
    GraphError,
    Role,
    Score,
    Turn,
    template_graph,
)
from .strategies import (
    Bag,
    CopStrategy,
    MenaceCop,
    MenaceRobber,
    RandomCop,
    RandomRobber,
    RobberStrategy,
    make_cop,
    make_robber,
    weighted_sampler,
)
from .selfplay import SelfPlayManager, run_games
from .orchestration import GameRunner, GameRunnerConfig, SelfPlayTrainer, SelfPlayTrainerConfig
from .evaluation import EvaluationResult, compare_to_baseline, evaluate_settings
from .env import PursuitEnv

__all__ = [
    "core",
    "strategies",
    "selfplay",
    "orchestration",
    "evaluation",
    "features",
    "env",
    "validation",
    "HEXAGON",
    "PATH2",
    "PATH5",
    "TEMPLATE_GRAPHS",
    "Algorithm",
    "Game",
    "GameSettings",
    "GameSnapshot",
    "Graph",
    "GraphError",
    "Role",
    "Score",
    "Turn",
    "template_graph",
    "Bag",
    "CopStrategy",
    "MenaceCop",
    "MenaceRobber",
    "RandomCop",
    "RandomRobber",
    "RobberStrategy",
    "make_cop",
    "make_robber",
    "weighted_sampler",
    "SelfPlayManager",
    "run_games",
    "GameRunner",
    "GameRunnerConfig",
    "SelfPlayTrainer",
    "SelfPlayTrainerConfig",
    "EvaluationResult",
    "compare_to_baseline",
    "evaluate_settings",
    "PursuitEnv",
]
