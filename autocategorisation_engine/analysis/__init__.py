"""
Analysis Module for the auto-categorisation engine.

Batch previews, success-rate analysis and DataFrame export for reviewing
how transactions would be categorised.
"""

from .categorisation_analysis import (
    CategorisationResult,
    CategorisationAnalysis,
    BulkCategorisationPreview,
    categorise_single_description,
    analyse_categorisation,
    preview_batch_categorisation,
    auto_categorise_transactions,
    results_to_dataframe,
)

__all__ = [
    "CategorisationResult",
    "CategorisationAnalysis",
    "BulkCategorisationPreview",
    "categorise_single_description",
    "analyse_categorisation",
    "preview_batch_categorisation",
    "auto_categorise_transactions",
    "results_to_dataframe",
]
