"""Consistency checks for MENACE learning tables."""

from .data_checks import LearningTableError, validate_bag, validate_strategy_tables

__all__ = ["LearningTableError", "validate_bag", "validate_strategy_tables"]
