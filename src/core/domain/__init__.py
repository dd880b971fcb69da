"""
Domain models and value objects.

Contains the Rank value object, its error taxonomy and RankedDocument.
"""

from src.core.domain.rank import (
    BUCKET_COUNT,
    BUCKET_SEPARATOR,
    DECIMAL_SEPARATOR,
    DEFAULT_BUCKET,
    RANK_PATTERN,
    BucketMismatchError,
    MalformedRankError,
    OrderViolationError,
    Rank,
    RankBoundaryError,
    RankError,
)
from src.core.domain.ranked_document import RankedDocument

__all__ = [
    # Rank format
    "BUCKET_COUNT",
    "BUCKET_SEPARATOR",
    "DECIMAL_SEPARATOR",
    "DEFAULT_BUCKET",
    "RANK_PATTERN",
    # Rank model
    "Rank",
    # Errors
    "RankError",
    "MalformedRankError",
    "OrderViolationError",
    "BucketMismatchError",
    "RankBoundaryError",
    # Documents
    "RankedDocument",
]
