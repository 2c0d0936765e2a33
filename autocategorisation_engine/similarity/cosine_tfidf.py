"""
Cosine similarity over TF-IDF vectors.

The vocabulary and IDF table are built from the candidate categories of a
single request and must not be shared between concurrent requests.
"""

import logging
import math
from collections import Counter
from typing import Dict, Iterable

import numpy as np

from ..categorisation.preprocess import tokenize_words
from ..config.matcher_config import METHOD_COSINE_TFIDF


logger = logging.getLogger(__name__)


class CosineTFIDFMatcher:
    """Stateful TF-IDF matcher; call build_vocabulary() before scoring."""

    method_tag = METHOD_COSINE_TFIDF

    def __init__(self):
        self.vocabulary: Dict[str, int] = {}
        self.idf: Dict[str, float] = {}

    def build_vocabulary(self, documents: Iterable[str]) -> None:
        """
        Build the vocabulary and IDF table from a set of documents.
        Any previously built vocabulary is discarded.

        Each document counts once per distinct token. New tokens get the next
        vocabulary index in the order they are first seen. IDF is
        ln(total_docs / doc_freq) where total_docs is the number of documents
        passed to this call.

        Args:
            documents: One text representation per candidate category
        """
        self.vocabulary = {}
        self.idf = {}
        doc_freq: Dict[str, int] = {}
        total_docs = 0

        for doc in documents:
            total_docs += 1
            # dict.fromkeys keeps first-seen order for stable indices
            for token in dict.fromkeys(tokenize_words(doc)):
                doc_freq[token] = doc_freq.get(token, 0) + 1
                if token not in self.vocabulary:
                    self.vocabulary[token] = len(self.vocabulary)

        for token, freq in doc_freq.items():
            self.idf[token] = math.log(total_docs / freq)

        logger.debug(
            "Built TF-IDF vocabulary: %d terms from %d documents",
            len(self.vocabulary), total_docs
        )

    def vectorize(self, text: str) -> np.ndarray:
        """
        Turn text into a dense TF-IDF vector sized to the vocabulary.

        Terms outside the vocabulary contribute nothing.
        """
        vector = np.zeros(len(self.vocabulary), dtype=float)
        tokens = tokenize_words(text)
        if not tokens:
            return vector

        total_tokens = len(tokens)
        for term, count in Counter(tokens).items():
            idx = self.vocabulary.get(term)
            if idx is not None:
                vector[idx] = (count / total_tokens) * self.idf.get(term, 0.0)

        return vector

    def score(self, text1: str, text2: str) -> float:
        """Cosine of the two TF-IDF vectors; 0.0 if either has zero norm."""
        return self._cosine_similarity(self.vectorize(text1), self.vectorize(text2))

    @staticmethod
    def _cosine_similarity(vec1: np.ndarray, vec2: np.ndarray) -> float:
        if vec1.shape != vec2.shape or vec1.size == 0:
            return 0.0

        norm1 = float(np.linalg.norm(vec1))
        norm2 = float(np.linalg.norm(vec2))
        if norm1 == 0.0 or norm2 == 0.0:
            return 0.0

        return float(np.dot(vec1, vec2)) / (norm1 * norm2)
