"""
Test suite for preprocessing utilities.

Tests cover:
- Word splitting on the merchant delimiter set
- Jaccard (trigram) and TF-IDF (word) tokenizers
- Category enrichment (text representation and token set)
- Candidate category filtering and transaction search text
"""

import unittest

from autocategorisation_engine.categorisation.models import Category
from autocategorisation_engine.categorisation.preprocess import (
    build_text_representation,
    filter_candidate_categories,
    get_search_text,
    normalize_text,
    prepare_categories,
    split_words,
    tokenize_with_trigrams,
    tokenize_words,
)


class TestSplitWords(unittest.TestCase):
    """Test splitting on space, hyphen, underscore, period and '#'."""

    def test_splits_on_all_delimiters(self):
        """Each delimiter separates words."""
        self.assertEqual(
            split_words("a b-c_d.e#f"),
            ["a", "b", "c", "d", "e", "f"],
        )

    def test_lower_cases_input(self):
        """Words come back lower-cased."""
        self.assertEqual(split_words("Tesco-Express #123"), ["tesco", "express", "123"])

    def test_runs_of_delimiters_produce_no_empty_words(self):
        """Consecutive and leading delimiters are collapsed."""
        self.assertEqual(split_words("#--tesco  .. asda_"), ["tesco", "asda"])

    def test_other_punctuation_is_kept(self):
        """Only the delimiter set splits words."""
        self.assertEqual(split_words("m&s/food"), ["m&s/food"])

    def test_empty_and_none(self):
        """Empty input gives no words."""
        self.assertEqual(split_words(""), [])
        self.assertEqual(split_words(None), [])

    def test_normalize_text_keeps_whitespace(self):
        """normalize_text lower-cases only."""
        self.assertEqual(normalize_text(" TESCO "), " tesco ")
        self.assertEqual(normalize_text(None), "")


class TestTrigramTokenizer(unittest.TestCase):
    """Test the Jaccard tokenizer."""

    def test_word_followed_by_trigrams(self):
        """A long word is emitted with each of its trigrams."""
        self.assertEqual(tokenize_with_trigrams("asda"), ["asda", "asd", "sda"])

    def test_three_letter_word_emits_itself_twice(self):
        """A 3-character word is also its own single trigram."""
        self.assertEqual(tokenize_with_trigrams("abc"), ["abc", "abc"])

    def test_short_words_have_no_trigrams(self):
        """Words under 3 characters are emitted as-is."""
        self.assertEqual(tokenize_with_trigrams("ab c"), ["ab", "c"])

    def test_multiple_words(self):
        """Trigrams follow the word they came from."""
        self.assertEqual(
            tokenize_with_trigrams("Tesco UK"),
            ["tesco", "tes", "esc", "sco", "uk"],
        )


class TestWordTokenizer(unittest.TestCase):
    """Test the TF-IDF tokenizer."""

    def test_keeps_only_words_longer_than_two(self):
        """Words of 1-2 characters are dropped and no trigrams are added."""
        self.assertEqual(tokenize_words("A bb ccc dddd"), ["ccc", "dddd"])

    def test_duplicates_are_kept(self):
        """Term counts matter for TF, so repeats stay."""
        self.assertEqual(tokenize_words("tesco TESCO"), ["tesco", "tesco"])


class TestCategoryEnrichment(unittest.TestCase):
    """Test EnhancedCategory construction."""

    def test_text_representation_skips_empty_keywords(self):
        """Name and non-empty keywords are joined with spaces."""
        category = Category(id=1, name="Groceries", keywords=("tesco", "", "asda"))
        self.assertEqual(build_text_representation(category), "Groceries tesco asda")

    def test_name_only_category(self):
        """A category with no keywords is represented by its name."""
        category = Category(id=1, name="Travel")
        self.assertEqual(build_text_representation(category), "Travel")

    def test_prepare_categories_preserves_order_and_tokens(self):
        """Token set is the lower-cased whitespace split of the representation."""
        categories = [
            Category(id=1, name="Eating Out", keywords=("Pret A Manger",)),
            Category(id=2, name="Groceries", keywords=("tesco",)),
        ]
        enhanced = prepare_categories(categories)

        self.assertEqual([e.category.id for e in enhanced], [1, 2])
        self.assertEqual(enhanced[0].text_representation, "Eating Out Pret A Manger")
        self.assertEqual(enhanced[0].token_set, ["eating", "out", "pret", "a", "manger"])
        self.assertIs(enhanced[1].category, categories[1])


class TestCandidateFiltering(unittest.TestCase):
    """Test active/visibility filtering of categories."""

    def setUp(self):
        self.categories = [
            Category(id="sys-1", name="Groceries"),
            Category(id="usr-1", name="Hobbies", user_id="alice"),
            Category(id="sys-2", name="Legacy", is_active=False),
            Category(id="usr-2", name="Pets", user_id="bob"),
        ]

    def test_user_sees_system_and_own_categories(self):
        """Inactive and other users' categories are removed."""
        visible = filter_candidate_categories(self.categories, user_id="alice")
        self.assertEqual([c.id for c in visible], ["sys-1", "usr-1"])

    def test_no_user_sees_system_categories_only(self):
        """Without a user only active system categories remain."""
        visible = filter_candidate_categories(self.categories)
        self.assertEqual([c.id for c in visible], ["sys-1"])


class TestSearchText(unittest.TestCase):
    """Test choosing the text a transaction is categorised by."""

    def test_prefers_merchant_name(self):
        """Merchant name wins over description."""
        txn = {"description": "CARD PAYMENT 1234", "merchant_name": "Starbucks"}
        self.assertEqual(get_search_text(txn), "Starbucks")

    def test_falls_back_to_description(self):
        """Empty or missing merchant name falls back to description."""
        self.assertEqual(get_search_text({"description": "TESCO", "merchant_name": ""}), "TESCO")
        self.assertEqual(get_search_text({"description": "TESCO"}), "TESCO")

    def test_nothing_usable(self):
        """No text gives an empty string."""
        self.assertEqual(get_search_text({}), "")


class TestCategoryFromDict(unittest.TestCase):
    """Test building categories from collaborator records."""

    def test_from_dict(self):
        """All fields are read; keywords become a tuple."""
        category = Category.from_dict({
            "id": "c1",
            "name": "Groceries",
            "keywords": ["tesco", "asda"],
            "is_active": True,
            "user_id": None,
        })
        self.assertEqual(category.keywords, ("tesco", "asda"))
        self.assertTrue(category.is_system_category)

    def test_missing_keywords_become_empty(self):
        """A null keyword list is treated as empty."""
        category = Category.from_dict({"id": "c1", "name": "Travel", "keywords": None})
        self.assertEqual(category.keywords, ())
        self.assertTrue(category.is_active)

    def test_missing_name_raises(self):
        """id and name are required."""
        with self.assertRaises(KeyError):
            Category.from_dict({"id": "c1"})


if __name__ == "__main__":
    unittest.main()
