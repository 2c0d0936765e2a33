"""
Keyword Matching for Auto-Categorisation.

Scores a merchant/description against the keyword lists of candidate
categories using exact, contains and reverse-contains heuristics.
"""

from typing import List, Optional, Sequence, Tuple

from ..config.matcher_config import METHOD_KEYWORD
from .models import (
    CategoryMatchResult,
    EnhancedCategory,
    MATCH_TYPE_EXACT_KEYWORD,
    MATCH_TYPE_KEYWORD,
    MATCH_TYPE_REVERSE_KEYWORD,
)


EXACT_MATCH_CONFIDENCE = 1.0

# Contains match: boosted when the keyword covers more than half the text,
# but always kept below an exact match
CONTAINS_BOOST_THRESHOLD = 0.5
CONTAINS_BOOST_FACTOR = 1.2
CONTAINS_MAX_CONFIDENCE = 0.95

# Reverse contains: the text must be longer than this to count
REVERSE_MIN_TEXT_LENGTH = 3
REVERSE_FACTOR = 0.8
REVERSE_MAX_CONFIDENCE = 0.9


def match_keyword(text: str, keyword: str) -> Optional[Tuple[str, float]]:
    """
    Match text against a single keyword.

    Args:
        text: Raw merchant name or description
        keyword: Category keyword

    Returns:
        Tuple of (match_type, confidence) or None

    Example:
        >>> match_keyword("STARBUCKS", "starbucks")
        ('exact_keyword', 1.0)
        >>> match_keyword("tesco stores", "tesco")
        ('keyword', 0.4166666666666667)
    """
    if not text or not keyword:
        return None

    text_lower = text.lower()
    keyword_lower = keyword.lower()

    if text_lower == keyword_lower:
        return (MATCH_TYPE_EXACT_KEYWORD, EXACT_MATCH_CONFIDENCE)

    if keyword_lower in text_lower:
        confidence = len(keyword) / len(text)
        if confidence > CONTAINS_BOOST_THRESHOLD:
            confidence = min(confidence * CONTAINS_BOOST_FACTOR, CONTAINS_MAX_CONFIDENCE)
        return (MATCH_TYPE_KEYWORD, confidence)

    if text_lower in keyword_lower and len(text) > REVERSE_MIN_TEXT_LENGTH:
        confidence = len(text) / len(keyword)
        confidence = min(confidence * REVERSE_FACTOR, REVERSE_MAX_CONFIDENCE)
        return (MATCH_TYPE_REVERSE_KEYWORD, confidence)

    return None


def get_keyword_matches(
    text: str,
    categories: Sequence[EnhancedCategory]
) -> List[CategoryMatchResult]:
    """
    Run the keyword pass over every non-empty keyword of every category.

    Args:
        text: Raw merchant name or description
        categories: Enriched candidate categories

    Returns:
        One CategoryMatchResult per matching (category, keyword) pair
    """
    matches = []

    for enhanced in categories:
        category = enhanced.category
        for keyword in category.keywords:
            if not keyword:
                continue

            keyword_match = match_keyword(text, keyword)
            if keyword_match is None:
                continue

            match_type, confidence = keyword_match
            if confidence > 0:
                matches.append(
                    CategoryMatchResult(
                        category_id=category.id,
                        category_name=category.name,
                        match_type=match_type,
                        similarity_type=METHOD_KEYWORD,
                        matched_text=keyword,
                        confidence=confidence,
                    )
                )

    return matches
