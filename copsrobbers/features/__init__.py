"""Numeric observations of a running game."""

from .observation import (
    AUX_VECTOR_SIZE,
    POSITION_CHANNELS,
    build_aux_vector,
    build_position_tensor,
    game_to_numpy,
)

__all__ = [
    "AUX_VECTOR_SIZE",
    "POSITION_CHANNELS",
    "build_aux_vector",
    "build_position_tensor",
    "game_to_numpy",
]
