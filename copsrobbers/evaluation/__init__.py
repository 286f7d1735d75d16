"""Evaluation helpers for trained strategies."""

from .match import BaselineComparison, EvaluationResult, compare_to_baseline, evaluate_settings

__all__ = ["BaselineComparison", "EvaluationResult", "compare_to_baseline", "evaluate_settings"]
