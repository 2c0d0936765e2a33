"""
Best-match selection for auto-categorisation.

Two strategies pick a single category from the collected match records:

- direct: the single highest-confidence record, unweighted
- ensemble: per-method weights, best weighted score per category, then the
  best category

Both return None when the winner is below the confidence threshold.
"""

import logging
from dataclasses import replace
from typing import Dict, Hashable, Optional, Sequence

from ..categorisation.models import CategoryMatchResult
from ..config.matcher_config import METHOD_ENSEMBLE, METHOD_KEYWORD, MatcherConfig


logger = logging.getLogger(__name__)


# Weight multiplier for high-confidence keyword hits in ensemble scoring
KEYWORD_BOOST_MULTIPLIER = 2.0
MAX_WEIGHT = 1.0


def select_best_match(
    matches: Sequence[CategoryMatchResult],
    config: MatcherConfig
) -> Optional[CategoryMatchResult]:
    """
    Pick the best match using the strategy the config asks for.

    Args:
        matches: All collected match records, in collection order
        config: Scoring configuration

    Returns:
        Best CategoryMatchResult, or None if nothing clears the threshold
    """
    if not matches:
        return None

    if config.use_ensemble_scoring:
        return select_ensemble_match(matches, config)
    return select_direct_match(matches, config)


def select_direct_match(
    matches: Sequence[CategoryMatchResult],
    config: MatcherConfig
) -> Optional[CategoryMatchResult]:
    """
    Direct scoring: the record with the greatest confidence, no weighting.

    The first record wins ties.
    """
    best_match = None
    for match in matches:
        if best_match is None or match.confidence > best_match.confidence:
            best_match = match

    if best_match is not None and best_match.confidence >= config.confidence_threshold:
        return replace(best_match)
    return None


def effective_weight(match: CategoryMatchResult, config: MatcherConfig) -> float:
    """
    Weight applied to a record's confidence in ensemble scoring.

    High-confidence keyword hits get double weight, capped at 1.0.
    """
    weight = config.weight_for(match.similarity_type)
    if match.similarity_type == METHOD_KEYWORD and match.confidence >= config.keyword_boost_confidence:
        return min(weight * KEYWORD_BOOST_MULTIPLIER, MAX_WEIGHT)
    return weight


def select_ensemble_match(
    matches: Sequence[CategoryMatchResult],
    config: MatcherConfig
) -> Optional[CategoryMatchResult]:
    """
    Ensemble scoring: best weighted score per category, then best category.

    Each category keeps the match type and matched text of the record that
    produced its highest weighted score, tagged as 'ensemble'. The first
    category wins ties.
    """
    category_scores: Dict[Hashable, CategoryMatchResult] = {}

    for match in matches:
        weighted_score = match.confidence * effective_weight(match, config)

        existing = category_scores.get(match.category_id)
        if existing is None:
            category_scores[match.category_id] = replace(
                match,
                confidence=weighted_score,
                similarity_type=METHOD_ENSEMBLE,
            )
        elif weighted_score > existing.confidence:
            existing.confidence = weighted_score
            existing.match_type = match.match_type
            existing.matched_text = match.matched_text

    best_match = None
    for candidate in category_scores.values():
        if best_match is None or candidate.confidence > best_match.confidence:
            best_match = candidate

    if best_match is not None and best_match.confidence >= config.confidence_threshold:
        return best_match

    if best_match is not None:
        logger.debug(
            "Best ensemble score %.4f for '%s' is below threshold %.2f",
            best_match.confidence, best_match.category_name, config.confidence_threshold
        )
    return None
