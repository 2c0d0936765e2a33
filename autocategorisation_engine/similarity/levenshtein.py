"""
Edit-distance similarity.
"""

from rapidfuzz.distance import Levenshtein

from ..config.matcher_config import METHOD_LEVENSHTEIN


class LevenshteinMatcher:
    """Similarity derived from unit-cost Levenshtein distance."""

    method_tag = METHOD_LEVENSHTEIN

    def score(self, text1: str, text2: str) -> float:
        """
        Calculate 1 - distance / max(len(text1), len(text2)) on lower-cased text.

        Two empty strings score 1.0.
        """
        s1 = (text1 or "").lower()
        s2 = (text2 or "").lower()

        max_len = max(len(s1), len(s2))
        if max_len == 0:
            return 1.0

        return 1.0 - Levenshtein.distance(s1, s2) / max_len
