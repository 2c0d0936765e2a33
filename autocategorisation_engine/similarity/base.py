"""
Similarity matcher interface.

Every matcher scores two texts into [0, 1] and reports the method tag its
scores are recorded under.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SimilarityMatcher(Protocol):
    """Scores the similarity of two texts."""

    method_tag: str

    def score(self, text1: str, text2: str) -> float:
        ...
