"""
Semantic Category Matcher for Auto-Categorisation.
Predicts which of a user's categories a merchant/description belongs to.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..config.matcher_config import (
    DEFAULT_MODE,
    SIMILARITY_METHODS,
    MatcherConfig,
    MatchMode,
)
from ..scoring.scoring_engine import select_best_match
from ..scoring.stats import build_matching_stats
from ..similarity import CosineTFIDFMatcher, SimilarityMatcher, create_matchers
from .models import (
    Category,
    CategoryMatchResult,
    EnhancedCategory,
    MatchingStats,
    MATCH_TYPE_SIMILARITY,
)
from .pattern_matching import get_keyword_matches
from .preprocess import prepare_categories


logger = logging.getLogger(__name__)


class SemanticCategoryMatcher:
    """
    Matches merchant names against candidate categories.

    Each instance owns its own matcher set, including the TF-IDF vocabulary,
    so an instance must not be shared between concurrent requests. Create one
    per request (or per batch).
    """

    def __init__(self, config: Optional[MatcherConfig] = None):
        """Initialize the matcher.

        Args:
            config: Scoring configuration; defaults to the preset for DEFAULT_MODE
        """
        self.config = config if config is not None else MatcherConfig.for_mode(DEFAULT_MODE)
        self.matchers: List[SimilarityMatcher] = create_matchers(self.config.enabled_methods)

    @classmethod
    def for_mode(cls, mode: Union[MatchMode, str]) -> "SemanticCategoryMatcher":
        """Create a matcher using the preset for 'ensemble' or 'direct' scoring."""
        return cls(MatcherConfig.for_mode(mode))

    def build_vocabulary(self, categories: Sequence[EnhancedCategory]) -> None:
        """Build the TF-IDF vocabulary from the categories' text representations."""
        documents = [category.text_representation for category in categories]
        for matcher in self.matchers:
            if isinstance(matcher, CosineTFIDFMatcher):
                matcher.build_vocabulary(documents)

    def get_semantic_matches(
        self,
        matcher: SimilarityMatcher,
        merchant_name: str,
        categories: Sequence[EnhancedCategory]
    ) -> List[CategoryMatchResult]:
        """Score the merchant name against every category with one matcher."""
        matches = []
        for enhanced in categories:
            similarity = matcher.score(merchant_name, enhanced.text_representation)
            if similarity > 0:
                matches.append(
                    CategoryMatchResult(
                        category_id=enhanced.category.id,
                        category_name=enhanced.category.name,
                        match_type=MATCH_TYPE_SIMILARITY,
                        similarity_type=matcher.method_tag,
                        matched_text=enhanced.text_representation,
                        confidence=similarity,
                    )
                )
        return matches

    def get_all_matches(
        self,
        merchant_name: str,
        categories: Sequence[EnhancedCategory]
    ) -> List[CategoryMatchResult]:
        """
        Collect match records from the keyword pass and every similarity matcher.

        The vocabulary must already be built for these categories.

        Returns:
            Keyword records first, then each matcher's records in matcher order
        """
        all_matches = get_keyword_matches(merchant_name, categories)
        for matcher in self.matchers:
            all_matches.extend(self.get_semantic_matches(matcher, merchant_name, categories))

        logger.debug(
            "Collected %d match records for '%s' across %d categories",
            len(all_matches), merchant_name, len(categories)
        )
        return all_matches

    def match_prepared(
        self,
        merchant_name: str,
        categories: Sequence[EnhancedCategory]
    ) -> Optional[CategoryMatchResult]:
        """
        Match against categories whose vocabulary has already been built.

        Returns:
            Best CategoryMatchResult, or None
        """
        if not merchant_name or not categories:
            return None

        all_matches = self.get_all_matches(merchant_name, categories)
        best_match = select_best_match(all_matches, self.config)

        if best_match is None:
            logger.debug("No category match for '%s'", merchant_name)
        else:
            logger.debug(
                "Matched '%s' to '%s' (confidence %.4f, %s/%s)",
                merchant_name, best_match.category_name, best_match.confidence,
                best_match.match_type, best_match.similarity_type
            )
        return best_match

    def match(
        self,
        merchant_name: str,
        categories: Iterable[Category]
    ) -> Optional[CategoryMatchResult]:
        """
        Find the best category for a single merchant name or description.

        Args:
            merchant_name: Raw merchant name or transaction description
            categories: Active categories visible to the requesting user

        Returns:
            Best CategoryMatchResult, or None if no category clears the threshold
        """
        if not merchant_name:
            return None

        enhanced_categories = prepare_categories(categories)
        if not enhanced_categories:
            return None

        self.build_vocabulary(enhanced_categories)
        return self.match_prepared(merchant_name, enhanced_categories)

    def match_batch(
        self,
        merchant_names: Iterable[str],
        categories: Iterable[Category]
    ) -> Dict[str, Optional[CategoryMatchResult]]:
        """
        Match many merchant names against the same categories.

        The vocabulary is built once for the whole batch. Results are keyed
        by the literal merchant name, so repeated names share one entry.

        Args:
            merchant_names: Raw merchant names or descriptions
            categories: Active categories visible to the requesting user

        Returns:
            Mapping of merchant name to its best match (or None)
        """
        merchant_names = list(merchant_names)
        enhanced_categories = prepare_categories(categories)

        results: Dict[str, Optional[CategoryMatchResult]] = {}
        if enhanced_categories:
            self.build_vocabulary(enhanced_categories)

        for merchant_name in merchant_names:
            if merchant_name in results:
                continue
            results[merchant_name] = self.match_prepared(merchant_name, enhanced_categories)

        matched = sum(1 for result in results.values() if result is not None)
        logger.info(
            "Batch categorisation matched %d of %d distinct merchant names",
            matched, len(results)
        )
        return results

    def get_matching_stats(
        self,
        merchant_name: str,
        categories: Iterable[Category]
    ) -> Optional[MatchingStats]:
        """
        Report the best score per matching method, without picking a match.

        Returns:
            MatchingStats, or None for an empty merchant name
        """
        if not merchant_name:
            return None

        enhanced_categories = prepare_categories(categories)
        self.build_vocabulary(enhanced_categories)
        all_matches = self.get_all_matches(merchant_name, enhanced_categories)
        return build_matching_stats(merchant_name, all_matches)


def create_stats_matcher() -> SemanticCategoryMatcher:
    """Matcher with every similarity method enabled, used for diagnostics."""
    return SemanticCategoryMatcher(MatcherConfig.ensemble(enabled_methods=SIMILARITY_METHODS))
