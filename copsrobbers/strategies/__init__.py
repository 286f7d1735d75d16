"""Player strategies: uniform random movement and MENACE-style learners."""

from .bag import INITIAL_COUNT, PENALTY_DECREMENT, REINFORCE_INCREMENT, Bag, Sampler, weighted_sampler
from .players import (
    CopStateKey,
    CopStrategy,
    MenaceCop,
    MenaceRobber,
    MenaceTables,
    RandomCop,
    RandomRobber,
    RobberStateKey,
    RobberStrategy,
    cop_start_choices,
    cop_step_choices,
    decode_cop_start,
    decode_cop_step,
    decode_robber_step,
    make_cop,
    make_robber,
    move_token,
    robber_start_choices,
    robber_step_choices,
)

__all__ = [
    "INITIAL_COUNT",
    "PENALTY_DECREMENT",
    "REINFORCE_INCREMENT",
    "Bag",
    "Sampler",
    "weighted_sampler",
    "CopStateKey",
    "CopStrategy",
    "MenaceCop",
    "MenaceRobber",
    "MenaceTables",
    "RandomCop",
    "RandomRobber",
    "RobberStateKey",
    "RobberStrategy",
    "cop_start_choices",
    "cop_step_choices",
    "decode_cop_start",
    "decode_cop_step",
    "decode_robber_step",
    "make_cop",
    "make_robber",
    "move_token",
    "robber_start_choices",
    "robber_step_choices",
]
