"""
Data types for the auto-categorisation engine.

Categories come in from the enclosing service; match results and matching
stats go back out. Nothing here is persisted.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Mapping, Optional, Tuple


# Match types
MATCH_TYPE_EXACT_KEYWORD = "exact_keyword"
MATCH_TYPE_KEYWORD = "keyword"
MATCH_TYPE_REVERSE_KEYWORD = "reverse_keyword"
MATCH_TYPE_SIMILARITY = "similarity"


@dataclass(frozen=True)
class Category:
    """A candidate spending category supplied by the caller."""
    id: Hashable
    name: str
    keywords: Tuple[str, ...] = ()
    is_active: bool = True
    user_id: Optional[Hashable] = None  # None for system categories

    def __post_init__(self):
        object.__setattr__(self, "keywords", tuple(self.keywords or ()))

    @property
    def is_system_category(self) -> bool:
        return self.user_id is None

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Category":
        """
        Build a Category from a collaborator record.

        Args:
            record: Mapping with 'id' and 'name', and optionally 'keywords',
                'is_active' and 'user_id'

        Returns:
            Category instance

        Raises:
            KeyError: If 'id' or 'name' is missing.
        """
        return cls(
            id=record["id"],
            name=record["name"],
            keywords=tuple(record.get("keywords") or ()),
            is_active=record.get("is_active", True),
            user_id=record.get("user_id"),
        )


@dataclass
class EnhancedCategory:
    """Category plus the text used by the similarity matchers."""
    category: Category
    text_representation: str
    token_set: List[str] = field(default_factory=list)


@dataclass
class CategoryMatchResult:
    """Result of matching a merchant/description against one category."""
    category_id: Hashable
    category_name: str
    match_type: str  # 'exact_keyword', 'keyword', 'reverse_keyword', 'similarity'
    similarity_type: str  # 'keyword', 'jaccard', 'levenshtein', 'cosine_tfidf', 'ensemble'
    matched_text: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category_id": self.category_id,
            "category_name": self.category_name,
            "match_type": self.match_type,
            "similarity_type": self.similarity_type,
            "matched_text": self.matched_text,
            "confidence": self.confidence,
        }


@dataclass
class MethodStats:
    """Best score seen by a single matching method."""
    best_score: float
    match_count: int
    best_category: str


@dataclass
class MatchingStats:
    """Per-method diagnostics for one merchant/description."""
    merchant_name: str
    methods: Dict[str, MethodStats] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "merchant_name": self.merchant_name,
            "methods": {
                method: {
                    "best_score": stats.best_score,
                    "match_count": stats.match_count,
                    "best_category": stats.best_category,
                }
                for method, stats in self.methods.items()
            },
        }
