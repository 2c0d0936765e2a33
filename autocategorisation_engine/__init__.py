"""
Auto-Categorisation Engine - merchant to spending category matching.

Given a merchant name or transaction description and a user's candidate
categories, predicts the category the transaction belongs to with a
confidence score.

Main Components:
    - config: Scoring presets, method weights and thresholds
    - categorisation: Preprocessing, keyword matching and the category matcher
    - similarity: Jaccard, Levenshtein and TF-IDF cosine matchers
    - scoring: Direct and ensemble best-match selection, per-method stats
    - analysis: Batch previews, success-rate analysis and DataFrame export
"""

from typing import Dict, Iterable, Optional, Union

# Configuration
from .config.matcher_config import (
    AUTO_CATEGORISATION_CONFIG,
    DEFAULT_MODE,
    MatcherConfig,
    MatchMode,
)

# Core categorisation components
from .categorisation.models import (
    Category,
    CategoryMatchResult,
    MatchingStats,
    MethodStats,
)
from .categorisation.preprocess import filter_candidate_categories, get_search_text
from .categorisation.engine import SemanticCategoryMatcher, create_stats_matcher

# Similarity matchers
from .similarity import (
    JaccardMatcher,
    LevenshteinMatcher,
    CosineTFIDFMatcher,
    create_matchers,
)

# Analysis
from .analysis.categorisation_analysis import (
    CategorisationResult,
    CategorisationAnalysis,
    BulkCategorisationPreview,
    analyse_categorisation,
    categorise_single_description,
    preview_batch_categorisation,
    auto_categorise_transactions,
    results_to_dataframe,
)


__version__ = "1.0.0"
__all__ = [
    # Configuration
    "AUTO_CATEGORISATION_CONFIG",
    "DEFAULT_MODE",
    "MatcherConfig",
    "MatchMode",
    # Categorisation
    "Category",
    "CategoryMatchResult",
    "MatchingStats",
    "MethodStats",
    "SemanticCategoryMatcher",
    "create_stats_matcher",
    "filter_candidate_categories",
    "get_search_text",
    # Similarity
    "JaccardMatcher",
    "LevenshteinMatcher",
    "CosineTFIDFMatcher",
    "create_matchers",
    # Analysis
    "CategorisationResult",
    "CategorisationAnalysis",
    "BulkCategorisationPreview",
    "analyse_categorisation",
    "categorise_single_description",
    "preview_batch_categorisation",
    "auto_categorise_transactions",
    "results_to_dataframe",
    # Main functions
    "match",
    "match_batch",
    "get_matching_stats",
]


def match(
    query: str,
    categories: Iterable[Category],
    mode: Union[MatchMode, str] = DEFAULT_MODE,
) -> Optional[CategoryMatchResult]:
    """
    Main entry point for single-transaction categorisation.

    Args:
        query: Merchant name or transaction description
        categories: Active categories visible to the requesting user
        mode: MatchMode.ENSEMBLE (weighted) or MatchMode.DIRECT (unweighted),
            or their string values

    Returns:
        Best CategoryMatchResult, or None when no category clears the
        confidence threshold

    Example:
        >>> groceries = Category(id=1, name="Groceries", keywords=("tesco", "asda"))
        >>> result = match("TESCO STORES 1234", [groceries])
        >>> result.category_name, result.match_type
        ('Groceries', 'keyword')
    """
    return SemanticCategoryMatcher.for_mode(mode).match(query, categories)


def match_batch(
    queries: Iterable[str],
    categories: Iterable[Category],
    mode: Union[MatchMode, str] = DEFAULT_MODE,
) -> Dict[str, Optional[CategoryMatchResult]]:
    """
    Main entry point for bulk categorisation.

    The TF-IDF vocabulary is built once from the categories and reused for
    every query.

    Args:
        queries: Merchant names or transaction descriptions
        categories: Active categories visible to the requesting user
        mode: Scoring mode, ensemble by default

    Returns:
        Mapping of each query string to its best match (or None)
    """
    return SemanticCategoryMatcher.for_mode(mode).match_batch(queries, categories)


def get_matching_stats(
    query: str,
    categories: Iterable[Category],
) -> Optional[MatchingStats]:
    """
    Report the best score per matching method for a query.

    Returns:
        MatchingStats, or None for an empty query
    """
    return create_stats_matcher().get_matching_stats(query, categories)
