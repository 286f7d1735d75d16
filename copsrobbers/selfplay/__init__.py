"""Batched self-play helpers."""

from .self_play import BatchResult, SelfPlayManager, run_games

__all__ = [
    "BatchResult",
    "SelfPlayManager",
    "run_games",
]
