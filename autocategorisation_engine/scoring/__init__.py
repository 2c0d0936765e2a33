"""
Scoring Module for the auto-categorisation engine.

Turns collected match records into a single best match (direct or
ensemble strategy) and per-method diagnostics.
"""

from .scoring_engine import (
    select_best_match,
    select_direct_match,
    select_ensemble_match,
    effective_weight,
)
from .stats import build_matching_stats

__all__ = [
    "select_best_match",
    "select_direct_match",
    "select_ensemble_match",
    "effective_weight",
    "build_matching_stats",
]
