"""
Configuration module for the auto-categorisation engine.

This module contains the scoring presets, method weights and thresholds.
"""

from .matcher_config import (
    AUTO_CATEGORISATION_CONFIG,
    DEFAULT_MODE,
    MatcherConfig,
    MatchMode,
    METHOD_KEYWORD,
    METHOD_JACCARD,
    METHOD_LEVENSHTEIN,
    METHOD_COSINE_TFIDF,
    METHOD_ENSEMBLE,
    SIMILARITY_METHODS,
)

__all__ = [
    "AUTO_CATEGORISATION_CONFIG",
    "DEFAULT_MODE",
    "MatcherConfig",
    "MatchMode",
    "METHOD_KEYWORD",
    "METHOD_JACCARD",
    "METHOD_LEVENSHTEIN",
    "METHOD_COSINE_TFIDF",
    "METHOD_ENSEMBLE",
    "SIMILARITY_METHODS",
]
