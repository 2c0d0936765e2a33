"""
Jaccard similarity over word and trigram token sets.
"""

from ..categorisation.preprocess import tokenize_with_trigrams
from ..config.matcher_config import METHOD_JACCARD


class JaccardMatcher:
    """Token + trigram set overlap."""

    method_tag = METHOD_JACCARD

    def score(self, text1: str, text2: str) -> float:
        """
        Calculate |intersection| / |union| of the two token sets.

        Two texts with no tokens at all score 0.0, not 1.0.
        """
        set1 = set(tokenize_with_trigrams(text1))
        set2 = set(tokenize_with_trigrams(text2))

        intersection = 0
        union = len(set1)
        for token in set2:
            if token in set1:
                intersection += 1
            else:
                union += 1

        if union == 0:
            return 0.0

        return intersection / union
