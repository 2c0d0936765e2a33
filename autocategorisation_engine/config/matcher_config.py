"""
Matcher configuration for the auto-categorisation engine.
Contains method weights, confidence thresholds and the two scoring presets.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple, Union


# Method tags
METHOD_KEYWORD = "keyword"
METHOD_JACCARD = "jaccard"
METHOD_LEVENSHTEIN = "levenshtein"
METHOD_COSINE_TFIDF = "cosine_tfidf"
METHOD_ENSEMBLE = "ensemble"

# Similarity matchers run after the keyword pass, in this order
SIMILARITY_METHODS: Tuple[str, ...] = (
    METHOD_JACCARD,
    METHOD_LEVENSHTEIN,
    METHOD_COSINE_TFIDF,
)


# Auto-categorisation Configuration
AUTO_CATEGORISATION_CONFIG = {
    "enabled": True,
    # A returned match is only applied to a transaction at or above this value
    "apply_threshold": 0.3,
    "default_mode": "ensemble",

    "ensemble": {
        "confidence_threshold": 0.1,
        "weights": {
            METHOD_KEYWORD: 0.8,
            METHOD_JACCARD: 0.2,
            METHOD_LEVENSHTEIN: 0.15,
            METHOD_COSINE_TFIDF: 0.25,
        },
        # Used when a method tag has no weight (or a zero weight)
        "default_weight": 0.1,
        # Keyword hits at or above this confidence get their weight doubled (capped at 1.0)
        "keyword_boost_confidence": 0.9,
    },

    "direct": {
        "confidence_threshold": 0.1,
        "weights": {
            METHOD_KEYWORD: 1.0,
            METHOD_JACCARD: 1.0,
            METHOD_LEVENSHTEIN: 1.0,
            METHOD_COSINE_TFIDF: 1.0,
        },
    },
}


class MatchMode(Enum):
    """Scoring strategy used to pick the best category."""
    ENSEMBLE = "ensemble"
    DIRECT = "direct"


DEFAULT_MODE = MatchMode(AUTO_CATEGORISATION_CONFIG["default_mode"])


@dataclass(frozen=True)
class MatcherConfig:
    """Immutable scoring configuration for a single matching call."""
    confidence_threshold: float
    use_ensemble_scoring: bool
    weights: Mapping[str, float]
    enabled_methods: Tuple[str, ...] = SIMILARITY_METHODS
    default_weight: float = 0.1
    keyword_boost_confidence: float = 0.9

    def __post_init__(self):
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError(
                f"confidence_threshold must be between 0 and 1, got {self.confidence_threshold}"
            )
        for method, weight in self.weights.items():
            if weight < 0:
                raise ValueError(f"Weight for '{method}' must be non-negative, got {weight}")
        unknown = [m for m in self.enabled_methods if m not in SIMILARITY_METHODS]
        if unknown:
            raise ValueError(
                f"Unknown similarity methods {unknown}. Available: {list(SIMILARITY_METHODS)}"
            )
        # Read-only copy of the weights
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))
        object.__setattr__(self, "enabled_methods", tuple(self.enabled_methods))

    @property
    def mode(self) -> MatchMode:
        return MatchMode.ENSEMBLE if self.use_ensemble_scoring else MatchMode.DIRECT

    def weight_for(self, method: str) -> float:
        """
        Get the weight for a method tag.

        Unknown tags, and tags configured with a zero weight, fall back to
        ``default_weight``.
        """
        weight = self.weights.get(method, 0.0)
        if weight == 0:
            return self.default_weight
        return weight

    @classmethod
    def ensemble(cls, enabled_methods: Tuple[str, ...] = SIMILARITY_METHODS) -> "MatcherConfig":
        """Preset for weighted, multi-signal scoring (bulk categorisation)."""
        preset = AUTO_CATEGORISATION_CONFIG["ensemble"]
        return cls(
            confidence_threshold=preset["confidence_threshold"],
            use_ensemble_scoring=True,
            weights=preset["weights"],
            enabled_methods=enabled_methods,
            default_weight=preset["default_weight"],
            keyword_boost_confidence=preset["keyword_boost_confidence"],
        )

    @classmethod
    def direct(cls, enabled_methods: Tuple[str, ...] = SIMILARITY_METHODS) -> "MatcherConfig":
        """Preset for unweighted, highest-single-record scoring."""
        preset = AUTO_CATEGORISATION_CONFIG["direct"]
        return cls(
            confidence_threshold=preset["confidence_threshold"],
            use_ensemble_scoring=False,
            weights=preset["weights"],
            enabled_methods=enabled_methods,
        )

    @classmethod
    def for_mode(
        cls,
        mode: Union[MatchMode, str],
        enabled_methods: Tuple[str, ...] = SIMILARITY_METHODS,
    ) -> "MatcherConfig":
        """
        Build the preset for a scoring mode.

        Args:
            mode: MatchMode member or its string value ("ensemble" / "direct")
            enabled_methods: Similarity methods to run after the keyword pass

        Raises:
            ValueError: If mode is not a known scoring mode.
        """
        if not isinstance(mode, MatchMode):
            try:
                mode = MatchMode(mode)
            except ValueError:
                raise ValueError(
                    f"Unknown match mode '{mode}'. Available: {[m.value for m in MatchMode]}"
                ) from None

        if mode is MatchMode.ENSEMBLE:
            return cls.ensemble(enabled_methods)
        return cls.direct(enabled_methods)
