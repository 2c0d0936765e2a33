"""
Categorisation analysis and batch preview.

Runs the matcher over lists of descriptions or transactions and reports
what would be categorised, with per-method diagnostics. Results can be
exported as a pandas DataFrame for review.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from ..categorisation.engine import SemanticCategoryMatcher, create_stats_matcher
from ..categorisation.models import Category, CategoryMatchResult, MatchingStats
from ..categorisation.preprocess import get_search_text
from ..config.matcher_config import AUTO_CATEGORISATION_CONFIG


logger = logging.getLogger(__name__)

DEFAULT_APPLY_THRESHOLD = AUTO_CATEGORISATION_CONFIG["apply_threshold"]
AUTO_CATEGORISATION_ENABLED = AUTO_CATEGORISATION_CONFIG["enabled"]

RESULT_COLUMNS = [
    "description",
    "suggested_category_id",
    "suggested_category_name",
    "confidence",
    "match_method",
    "will_be_categorised",
]


@dataclass
class CategorisationResult:
    """Outcome of categorising one description or transaction."""
    description: str
    merchant_name: Optional[str] = None
    index: Optional[int] = None
    original_category_id: Optional[Hashable] = None
    suggested_category_id: Optional[Hashable] = None
    suggested_category_name: Optional[str] = None
    confidence: float = 0.0
    match_method: str = ""
    will_be_categorised: bool = False
    stats: Optional[MatchingStats] = None

    def apply_match(self, match: Optional[CategoryMatchResult], apply_threshold: float) -> None:
        """Copy a match onto this result and decide whether it will be applied."""
        if match is None:
            return
        self.suggested_category_id = match.category_id
        self.suggested_category_name = match.category_name
        self.confidence = match.confidence
        self.match_method = match.similarity_type
        self.will_be_categorised = match.confidence >= apply_threshold


@dataclass
class CategorisationAnalysis:
    """Summary of categorising a list of descriptions."""
    total_transactions: int = 0
    successful_categorisations: int = 0
    results: List[CategorisationResult] = field(default_factory=list)
    method_stats: Dict[str, int] = field(default_factory=dict)

    @property
    def success_rate(self) -> float:
        """Fraction of input descriptions that will be categorised."""
        if self.total_transactions == 0:
            return 0.0
        return self.successful_categorisations / self.total_transactions


@dataclass
class BulkCategorisationPreview:
    """What a bulk import would categorise, one preview per transaction."""
    total_transactions: int = 0
    will_be_categorised: int = 0
    previews: List[CategorisationResult] = field(default_factory=list)


def categorise_single_description(
    merchant_name: str,
    categories: Sequence[Category],
    apply_threshold: float = DEFAULT_APPLY_THRESHOLD,
) -> CategorisationResult:
    """
    Categorise one merchant name and attach per-method stats.

    Args:
        merchant_name: Raw merchant name or description
        categories: Active categories visible to the user
        apply_threshold: Confidence needed for the match to be applied

    Returns:
        CategorisationResult with stats
    """
    match = SemanticCategoryMatcher().match(merchant_name, categories)
    stats = create_stats_matcher().get_matching_stats(merchant_name, categories)

    result = CategorisationResult(description=merchant_name, stats=stats)
    result.apply_match(match, apply_threshold)
    return result


def analyse_categorisation(
    descriptions: Sequence[str],
    categories: Sequence[Category],
    apply_threshold: float = DEFAULT_APPLY_THRESHOLD,
) -> CategorisationAnalysis:
    """
    Categorise a list of descriptions and summarise the outcome.

    Empty descriptions are skipped but still count towards the total.

    Args:
        descriptions: Merchant names or transaction descriptions
        categories: Active categories visible to the user
        apply_threshold: Confidence needed for a match to be applied

    Returns:
        CategorisationAnalysis with one result per non-empty description
    """
    analysis = CategorisationAnalysis(total_transactions=len(descriptions))

    for description in descriptions:
        if not description:
            continue

        result = categorise_single_description(description, categories, apply_threshold)
        if result.suggested_category_id is not None:
            analysis.method_stats[result.match_method] = (
                analysis.method_stats.get(result.match_method, 0) + 1
            )
            if result.will_be_categorised:
                analysis.successful_categorisations += 1

        analysis.results.append(result)

    logger.info(
        "Categorisation analysis: %d of %d descriptions categorised (%.1f%%)",
        analysis.successful_categorisations,
        analysis.total_transactions,
        analysis.success_rate * 100,
    )
    return analysis


def preview_batch_categorisation(
    transactions: Sequence[Mapping[str, Any]],
    categories: Sequence[Category],
    apply_threshold: float = DEFAULT_APPLY_THRESHOLD,
) -> BulkCategorisationPreview:
    """
    Preview which transactions of a bulk import would be categorised.

    Transactions that already carry a 'category_id' are reported but not
    matched. The rest are matched in one batch against the same vocabulary.

    Args:
        transactions: Mappings with 'description', optional 'merchant_name'
            and optional 'category_id'
        categories: Active categories visible to the user
        apply_threshold: Confidence needed for a match to be applied

    Returns:
        BulkCategorisationPreview with one preview per transaction, in order
    """
    preview = BulkCategorisationPreview(total_transactions=len(transactions))
    pending: Dict[int, str] = {}

    for i, txn in enumerate(transactions):
        result = CategorisationResult(
            description=txn.get("description") or "",
            merchant_name=txn.get("merchant_name"),
            index=i,
        )
        preview.previews.append(result)

        if txn.get("category_id") is not None:
            result.original_category_id = txn["category_id"]
            continue

        search_text = get_search_text(txn)
        if search_text:
            pending[i] = search_text
        else:
            logger.warning("Transaction %d has no description or merchant name; skipping", i)

    if pending:
        matches = SemanticCategoryMatcher().match_batch(pending.values(), categories)
        for i, search_text in pending.items():
            result = preview.previews[i]
            result.apply_match(matches.get(search_text), apply_threshold)
            if result.will_be_categorised:
                preview.will_be_categorised += 1

    logger.info(
        "Categorisation preview: %d of %d transactions will be categorised",
        preview.will_be_categorised, preview.total_transactions
    )
    return preview


def auto_categorise_transactions(
    transactions: Iterable[Mapping[str, Any]],
    categories: Sequence[Category],
    apply_threshold: float = DEFAULT_APPLY_THRESHOLD,
    enabled: bool = AUTO_CATEGORISATION_ENABLED,
) -> List[Dict[str, Any]]:
    """
    Assign categories to uncategorised transactions.

    Args:
        transactions: Mappings with 'description', optional 'merchant_name'
            and optional 'category_id'
        categories: Active categories visible to the user
        apply_threshold: Confidence needed for a match to be applied
        enabled: When False, transactions are returned unchanged

    Returns:
        New transaction dicts; uncategorised ones with a confident match
        gain 'category_id'
    """
    categorised = [dict(txn) for txn in transactions]
    if not enabled:
        logger.debug("Auto-categorisation disabled; %d transactions left as-is", len(categorised))
        return categorised

    pending: Dict[int, str] = {}
    for i, txn in enumerate(categorised):
        if txn.get("category_id") is None:
            search_text = get_search_text(txn)
            if search_text:
                pending[i] = search_text

    if not pending:
        return categorised

    matches = SemanticCategoryMatcher().match_batch(pending.values(), categories)

    categorised_count = 0
    for i, search_text in pending.items():
        match = matches.get(search_text)
        if match is not None and match.confidence >= apply_threshold:
            categorised[i]["category_id"] = match.category_id
            categorised_count += 1

    if categorised_count > 0:
        logger.info(
            "Auto-categorisation completed: %d of %d transactions categorised (%.1f%%)",
            categorised_count, len(pending), categorised_count / len(pending) * 100
        )

    return categorised


def results_to_dataframe(results: Iterable[CategorisationResult]) -> pd.DataFrame:
    """
    Convert categorisation results to a DataFrame, one row per result.

    Columns: description, suggested_category_id, suggested_category_name,
    confidence, match_method, will_be_categorised.
    """
    rows = [
        {
            "description": result.description,
            "suggested_category_id": result.suggested_category_id,
            "suggested_category_name": result.suggested_category_name,
            "confidence": result.confidence,
            "match_method": result.match_method,
            "will_be_categorised": result.will_be_categorised,
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)
