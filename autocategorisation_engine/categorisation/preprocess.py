"""
Preprocessing utilities for auto-categorisation.
Handles text normalisation, tokenisation and category enrichment.
"""

import re
from typing import Any, Hashable, Iterable, List, Mapping, Optional

from .models import Category, EnhancedCategory


# Characters that separate words in merchant names and category text
WORD_DELIMITERS = re.compile(r"[ \-_.#]+")

TRIGRAM_SIZE = 3
# Cosine tokens must be longer than this
COSINE_MIN_TOKEN_LENGTH = 2


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize text for matching.

    Args:
        text: Raw text to normalize

    Returns:
        Lower-cased text (surrounding whitespace is kept)
    """
    if not text:
        return ""
    return text.lower()


def split_words(text: Optional[str]) -> List[str]:
    """
    Lower-case text and split it on space, hyphen, underscore, period and '#'.

    Example:
        >>> split_words("Tesco-Express #123")
        ['tesco', 'express', '123']
    """
    return [word for word in WORD_DELIMITERS.split(normalize_text(text)) if word]


def tokenize_with_trigrams(text: Optional[str]) -> List[str]:
    """
    Tokenize text for Jaccard matching.

    Every word is emitted, followed by each of its 3-character substrings
    when the word is at least 3 characters long.

    Example:
        >>> tokenize_with_trigrams("asda")
        ['asda', 'asd', 'sda']
    """
    tokens = []
    for word in split_words(text):
        tokens.append(word)
        if len(word) >= TRIGRAM_SIZE:
            for i in range(len(word) - TRIGRAM_SIZE + 1):
                tokens.append(word[i:i + TRIGRAM_SIZE])
    return tokens


def tokenize_words(text: Optional[str]) -> List[str]:
    """Tokenize text for TF-IDF matching: words longer than 2 characters, no trigrams."""
    return [word for word in split_words(text) if len(word) > COSINE_MIN_TOKEN_LENGTH]


def build_text_representation(category: Category) -> str:
    """Join the category name and its non-empty keywords with single spaces."""
    text_parts = [category.name]
    text_parts.extend(keyword for keyword in category.keywords if keyword)
    return " ".join(text_parts)


def prepare_categories(categories: Iterable[Category]) -> List[EnhancedCategory]:
    """
    Enrich categories with the text used by the similarity matchers.

    Args:
        categories: Candidate categories, in caller order

    Returns:
        One EnhancedCategory per input category, same order
    """
    enhanced = []
    for category in categories:
        text_representation = build_text_representation(category)
        enhanced.append(
            EnhancedCategory(
                category=category,
                text_representation=text_representation,
                token_set=text_representation.lower().split(),
            )
        )
    return enhanced


def filter_candidate_categories(
    categories: Iterable[Category],
    user_id: Optional[Hashable] = None,
) -> List[Category]:
    """
    Keep active categories that are system-wide or owned by the user.

    Args:
        categories: All known categories
        user_id: Requesting user, or None for system categories only

    Returns:
        Visible categories in input order
    """
    return [
        category for category in categories
        if category.is_active and (category.user_id is None or category.user_id == user_id)
    ]


def get_search_text(transaction: Mapping[str, Any]) -> str:
    """
    Pick the text to categorise a transaction by.

    Args:
        transaction: Transaction mapping with 'description' and optional 'merchant_name'

    Returns:
        The merchant name when present, otherwise the description
    """
    merchant_name = transaction.get("merchant_name")
    if merchant_name:
        return merchant_name
    return transaction.get("description") or ""
