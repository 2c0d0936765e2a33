"""
Test suite for categorisation analysis, previews and auto-categorisation.

Tests cover:
- Single description categorisation with stats
- Success-rate analysis over a list of descriptions
- Bulk import preview
- Applying confident matches to transactions
- DataFrame export
"""

import unittest

from autocategorisation_engine import (
    Category,
    analyse_categorisation,
    auto_categorise_transactions,
    categorise_single_description,
    preview_batch_categorisation,
    results_to_dataframe,
)
from autocategorisation_engine.analysis.categorisation_analysis import RESULT_COLUMNS


ANALYSIS_LOGGER = "autocategorisation_engine.analysis.categorisation_analysis"


def sample_categories():
    return [
        Category(id="groceries", name="Groceries", keywords=("tesco", "asda")),
        Category(id="dining", name="Dining", keywords=("starbucks",)),
        Category(id="shopping", name="Shopping", keywords=("amazon",)),
    ]


def sample_transactions():
    return [
        {"description": "TESCO STORES 1234", "merchant_name": "Tesco"},
        {"description": "Coffee", "category_id": "dining"},
        {"description": "", "merchant_name": None},
        {"description": "STARBUCKS"},
        {"description": "zzzz qqqq"},
    ]


class TestSingleDescription(unittest.TestCase):
    """Test categorise_single_description()."""

    def test_confident_match(self):
        """An exact keyword hit will be applied and carries stats."""
        result = categorise_single_description("STARBUCKS", sample_categories())

        self.assertEqual(result.suggested_category_id, "dining")
        self.assertEqual(result.suggested_category_name, "Dining")
        self.assertEqual(result.confidence, 1.0)
        self.assertEqual(result.match_method, "ensemble")
        self.assertTrue(result.will_be_categorised)
        self.assertIn("keyword", result.stats.methods)

    def test_weak_match_is_suggested_but_not_applied(self):
        """Matches under the apply threshold are reported only."""
        result = categorise_single_description("TESCO STORES 1234", sample_categories())

        self.assertEqual(result.suggested_category_id, "groceries")
        self.assertAlmostEqual(result.confidence, 5 / 17 * 0.8)
        self.assertFalse(result.will_be_categorised)

    def test_custom_apply_threshold(self):
        """A lower apply threshold lets the weak match through."""
        result = categorise_single_description(
            "TESCO STORES 1234", sample_categories(), apply_threshold=0.2
        )
        self.assertTrue(result.will_be_categorised)

    def test_no_match(self):
        """Unmatched descriptions keep the defaults."""
        result = categorise_single_description("zzzz qqqq", sample_categories())

        self.assertIsNone(result.suggested_category_id)
        self.assertEqual(result.confidence, 0.0)
        self.assertEqual(result.match_method, "")
        self.assertFalse(result.will_be_categorised)


class TestAnalyseCategorisation(unittest.TestCase):
    """Test analyse_categorisation()."""

    def test_summary(self):
        """Empty descriptions count towards the total but produce no result."""
        analysis = analyse_categorisation(
            ["TESCO STORES 1234", "", "STARBUCKS", "zzzz qqqq"],
            sample_categories(),
        )

        self.assertEqual(analysis.total_transactions, 4)
        self.assertEqual(analysis.successful_categorisations, 1)
        self.assertAlmostEqual(analysis.success_rate, 0.25)
        self.assertEqual(analysis.method_stats, {"ensemble": 2})
        self.assertEqual(
            [r.description for r in analysis.results],
            ["TESCO STORES 1234", "STARBUCKS", "zzzz qqqq"],
        )

    def test_empty_input(self):
        """No descriptions gives a zero success rate."""
        analysis = analyse_categorisation([], sample_categories())
        self.assertEqual(analysis.total_transactions, 0)
        self.assertEqual(analysis.success_rate, 0.0)

    def test_logs_summary(self):
        """A summary line is logged at INFO."""
        with self.assertLogs(ANALYSIS_LOGGER, level="INFO") as logs:
            analyse_categorisation(["STARBUCKS"], sample_categories())
        self.assertIn("1 of 1 descriptions categorised", logs.output[0])


class TestPreviewBatchCategorisation(unittest.TestCase):
    """Test preview_batch_categorisation()."""

    def test_preview(self):
        """One preview per transaction, in input order."""
        preview = preview_batch_categorisation(sample_transactions(), sample_categories())

        self.assertEqual(preview.total_transactions, 5)
        self.assertEqual(preview.will_be_categorised, 2)
        self.assertEqual([p.index for p in preview.previews], [0, 1, 2, 3, 4])

        tesco = preview.previews[0]
        self.assertEqual(tesco.description, "TESCO STORES 1234")
        self.assertEqual(tesco.merchant_name, "Tesco")
        self.assertEqual(tesco.suggested_category_id, "groceries")
        self.assertEqual(tesco.confidence, 1.0)
        self.assertTrue(tesco.will_be_categorised)

        starbucks = preview.previews[3]
        self.assertEqual(starbucks.suggested_category_id, "dining")
        self.assertTrue(starbucks.will_be_categorised)

        self.assertIsNone(preview.previews[4].suggested_category_id)

    def test_already_categorised_transactions_are_not_matched(self):
        """Existing categories are reported as-is."""
        preview = preview_batch_categorisation(sample_transactions(), sample_categories())

        existing = preview.previews[1]
        self.assertEqual(existing.original_category_id, "dining")
        self.assertIsNone(existing.suggested_category_id)
        self.assertFalse(existing.will_be_categorised)

    def test_transactions_without_text_are_skipped_with_warning(self):
        """No description and no merchant name logs a warning."""
        with self.assertLogs(ANALYSIS_LOGGER, level="WARNING") as logs:
            preview = preview_batch_categorisation(sample_transactions(), sample_categories())

        self.assertIn("Transaction 2", logs.output[0])
        self.assertIsNone(preview.previews[2].suggested_category_id)


class TestAutoCategoriseTransactions(unittest.TestCase):
    """Test auto_categorise_transactions()."""

    def test_confident_matches_are_applied(self):
        """Only uncategorised transactions with a confident match gain a category."""
        transactions = sample_transactions()
        categorised = auto_categorise_transactions(transactions, sample_categories())

        self.assertEqual(categorised[0]["category_id"], "groceries")
        self.assertEqual(categorised[1]["category_id"], "dining")
        self.assertNotIn("category_id", categorised[2])
        self.assertEqual(categorised[3]["category_id"], "dining")
        self.assertNotIn("category_id", categorised[4])

    def test_input_is_not_modified(self):
        """New dicts are returned."""
        transactions = sample_transactions()
        auto_categorise_transactions(transactions, sample_categories())

        self.assertNotIn("category_id", transactions[0])
        self.assertNotIn("category_id", transactions[3])

    def test_weak_match_is_not_applied(self):
        """A match below the apply threshold leaves the transaction alone."""
        transactions = [{"description": "TESCO STORES 1234"}]

        categorised = auto_categorise_transactions(transactions, sample_categories())
        self.assertNotIn("category_id", categorised[0])

        categorised = auto_categorise_transactions(
            transactions, sample_categories(), apply_threshold=0.2
        )
        self.assertEqual(categorised[0]["category_id"], "groceries")

    def test_disabled(self):
        """When disabled nothing is categorised."""
        categorised = auto_categorise_transactions(
            sample_transactions(), sample_categories(), enabled=False
        )
        self.assertEqual(categorised, sample_transactions())

    def test_no_categories(self):
        """Without categories nothing changes."""
        categorised = auto_categorise_transactions(sample_transactions(), [])
        self.assertEqual(categorised, sample_transactions())


class TestResultsToDataFrame(unittest.TestCase):
    """Test DataFrame export."""

    def test_one_row_per_result(self):
        """Columns are fixed and values come straight from the results."""
        analysis = analyse_categorisation(["STARBUCKS", "zzzz qqqq"], sample_categories())
        df = results_to_dataframe(analysis.results)

        self.assertEqual(list(df.columns), RESULT_COLUMNS)
        self.assertEqual(len(df), 2)
        self.assertEqual(df.loc[0, "suggested_category_name"], "Dining")
        self.assertEqual(df.loc[0, "confidence"], 1.0)
        self.assertTrue(df.loc[0, "will_be_categorised"])
        self.assertFalse(df.loc[1, "will_be_categorised"])

    def test_empty_results(self):
        """No results gives an empty frame with the same columns."""
        df = results_to_dataframe([])
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), RESULT_COLUMNS)


if __name__ == "__main__":
    unittest.main()
