"""Data processing utilities for edu-stats."""

from .disciplines import DisciplineTable, is_masters_program
from .normalization import build_payload, mark_as_estimate, parse_model_output

__all__ = [
    "DisciplineTable",
    "is_masters_program",
    "build_payload",
    "mark_as_estimate",
    "parse_model_output",
]
