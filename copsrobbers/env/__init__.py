"""Gymnasium environment wrapping the pursuit game."""

from .gym_env import PursuitEnv

__all__ = ["PursuitEnv"]
