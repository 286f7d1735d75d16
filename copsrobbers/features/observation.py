from __future__ import annotations

from typing import Tuple

import numpy as np

from copsrobbers.core import Game

POSITION_CHANNELS = 2  # cop occupancy counts, robber one-hot
AUX_VECTOR_SIZE = 3  # fraction of steps left, cops placed, robber placed


def build_position_tensor(game: Game) -> np.ndarray:
    """Return positions with shape (2, number_of_vertices)."""
    tensor = np.zeros((POSITION_CHANNELS, game.graph.number_of_vertices), dtype=np.float32)
    if game.cop_positions is not None:
        for position in game.cop_positions:
            tensor[0, position] += 1.0
    if game.robber_position is not None:
        tensor[1, game.robber_position] = 1.0
    return tensor


def build_aux_vector(game: Game) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    if game.number_of_steps > 0:
        aux[0] = game.steps_left / game.number_of_steps
    aux[1] = float(game.cop_positions is not None)
    aux[2] = float(game.robber_position is not None)
    return aux


def game_to_numpy(game: Game) -> Tuple[np.ndarray, np.ndarray]:
    return build_position_tensor(game), build_aux_vector(game)
