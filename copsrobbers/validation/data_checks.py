from __future__ import annotations

import numpy as np


class LearningTableError(ValueError):
    pass


def validate_bag(counts: np.ndarray) -> None:
    if counts.ndim != 1 or counts.size == 0:
        raise LearningTableError("bag counts must be a non-empty vector")
    if (counts < 0).any():
        raise LearningTableError("bag contains negative counts")
    if int(counts.sum()) == 0:
        raise LearningTableError("bag counts sum to zero")


def validate_strategy_tables(strategy) -> int:
    """Check every learning table of ``strategy``; return how many were checked."""
    if not getattr(strategy, "learns", False):
        return 0
    tables = strategy.learning_tables()
    for key, counts in tables.items():
        try:
            validate_bag(counts)
        except LearningTableError as exc:
            raise LearningTableError(f"state {key!r}: {exc}") from exc
    for key, _ in strategy.move_log:
        if key not in tables:
            raise LearningTableError(f"logged move for unknown state {key!r}")
    return len(tables)
