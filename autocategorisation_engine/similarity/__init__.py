"""
Similarity matchers for auto-categorisation.

Provides the Jaccard, Levenshtein and TF-IDF cosine matchers and a factory
that builds a fresh matcher set for each request.
"""

from typing import Callable, Dict, Iterable, List

from ..config.matcher_config import (
    METHOD_COSINE_TFIDF,
    METHOD_JACCARD,
    METHOD_LEVENSHTEIN,
    SIMILARITY_METHODS,
)
from .base import SimilarityMatcher
from .cosine_tfidf import CosineTFIDFMatcher
from .jaccard import JaccardMatcher
from .levenshtein import LevenshteinMatcher


MATCHER_FACTORIES: Dict[str, Callable[[], SimilarityMatcher]] = {
    METHOD_JACCARD: JaccardMatcher,
    METHOD_LEVENSHTEIN: LevenshteinMatcher,
    METHOD_COSINE_TFIDF: CosineTFIDFMatcher,
}


def create_matchers(methods: Iterable[str] = SIMILARITY_METHODS) -> List[SimilarityMatcher]:
    """
    Create new matcher instances for the given method tags.

    Args:
        methods: Method tags, in the order the matchers should run

    Returns:
        List of newly constructed matchers

    Raises:
        KeyError: If a method tag has no matcher.
    """
    matchers = []
    for method in methods:
        if method not in MATCHER_FACTORIES:
            raise KeyError(
                f"No similarity matcher for '{method}'. "
                f"Available: {list(MATCHER_FACTORIES.keys())}"
            )
        matchers.append(MATCHER_FACTORIES[method]())
    return matchers


__all__ = [
    "SimilarityMatcher",
    "JaccardMatcher",
    "LevenshteinMatcher",
    "CosineTFIDFMatcher",
    "MATCHER_FACTORIES",
    "create_matchers",
]
