"""
Contract Validation Module

Модуль для валидации JSON контрактов документов с ручной сортировкой.
"""

from .validators import (
    ContractValidator,
    RankedDocumentValidator,
    SchemaLoader,
    is_valid_rank_string,
    validate_ranked_document,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "RankedDocumentValidator",
    # Functions
    "validate_ranked_document",
    "is_valid_rank_string",
]
