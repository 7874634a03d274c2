"""Utility modules."""

from .score import (
    StackVitals,
    calculate_stack_score,
    calculate_stack_vitals,
    calculate_synergy_score,
    parse_duration_minutes,
)

__all__ = [
    "StackVitals",
    "calculate_stack_score",
    "calculate_stack_vitals",
    "calculate_synergy_score",
    "parse_duration_minutes",
]
