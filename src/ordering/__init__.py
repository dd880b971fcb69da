"""
Ordering helpers

Назначение orderRank документам коллекции через интерфейс RankedCollection.
"""

from src.ordering.collection import (
    DocumentNotFoundError,
    InMemoryCollection,
    RankedCollection,
)
from src.ordering.order_rank import (
    OrderRankReport,
    OrderRankStatus,
    assign_order_rank,
    check_order_ranks,
    find_documents_missing_order_rank,
    fix_missing_order_ranks,
    get_last_order_rank,
    get_next_order_rank,
    get_sequential_order_ranks,
    migrate_to_order_rank,
)

__all__ = [
    # Collections
    "RankedCollection",
    "InMemoryCollection",
    "DocumentNotFoundError",
    # Results
    "OrderRankStatus",
    "OrderRankReport",
    # Functions
    "get_last_order_rank",
    "get_next_order_rank",
    "get_sequential_order_ranks",
    "find_documents_missing_order_rank",
    "assign_order_rank",
    "fix_missing_order_ranks",
    "migrate_to_order_rank",
    "check_order_ranks",
]
