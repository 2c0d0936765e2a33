"""
Per-method matching statistics, for diagnostics and weight tuning.
"""

from typing import Dict, List, Sequence

from ..categorisation.models import CategoryMatchResult, MatchingStats, MethodStats


def build_matching_stats(
    merchant_name: str,
    matches: Sequence[CategoryMatchResult]
) -> MatchingStats:
    """
    Group match records by method and report the best record of each.

    Args:
        merchant_name: Text the records were collected for
        matches: Match records, before any scoring

    Returns:
        MatchingStats keyed by method tag, in first-seen order
    """
    method_matches: Dict[str, List[CategoryMatchResult]] = {}
    for match in matches:
        method_matches.setdefault(match.similarity_type, []).append(match)

    stats = MatchingStats(merchant_name=merchant_name)
    for method, records in method_matches.items():
        best = records[0]
        for record in records:
            if record.confidence > best.confidence:
                best = record

        stats.methods[method] = MethodStats(
            best_score=best.confidence,
            match_count=len(records),
            best_category=best.category_name,
        )

    return stats
