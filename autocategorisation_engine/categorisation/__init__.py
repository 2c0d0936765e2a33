"""
Categorisation Module for the auto-categorisation engine.

Orchestrates category matching through:
- Preprocessing (normalisation, tokenisation, category enrichment)
- Keyword matching (exact, contains and reverse-contains)
- Similarity matching (Jaccard, Levenshtein, TF-IDF cosine)
- Scoring (direct or ensemble)
"""

from .models import (
    Category,
    EnhancedCategory,
    CategoryMatchResult,
    MethodStats,
    MatchingStats,
    MATCH_TYPE_EXACT_KEYWORD,
    MATCH_TYPE_KEYWORD,
    MATCH_TYPE_REVERSE_KEYWORD,
    MATCH_TYPE_SIMILARITY,
)
from .preprocess import (
    normalize_text,
    split_words,
    tokenize_with_trigrams,
    tokenize_words,
    build_text_representation,
    prepare_categories,
    filter_candidate_categories,
    get_search_text,
)
from .pattern_matching import (
    match_keyword,
    get_keyword_matches,
)
from .engine import SemanticCategoryMatcher, create_stats_matcher

__all__ = [
    # Main matcher
    "SemanticCategoryMatcher",
    "create_stats_matcher",
    # Data types
    "Category",
    "EnhancedCategory",
    "CategoryMatchResult",
    "MethodStats",
    "MatchingStats",
    "MATCH_TYPE_EXACT_KEYWORD",
    "MATCH_TYPE_KEYWORD",
    "MATCH_TYPE_REVERSE_KEYWORD",
    "MATCH_TYPE_SIMILARITY",
    # Preprocessing utilities
    "normalize_text",
    "split_words",
    "tokenize_with_trigrams",
    "tokenize_words",
    "build_text_representation",
    "prepare_categories",
    "filter_candidate_categories",
    "get_search_text",
    # Keyword matching utilities
    "match_keyword",
    "get_keyword_matches",
]
