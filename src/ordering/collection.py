"""Ranked collections — интерфейс хранилища документов с ручной сортировкой.

Хранилище (CMS) остаётся внешним: ordering-хелперы работают с ним только
через протокол RankedCollection. InMemoryCollection реализует протокол в
памяти для тестов и локальных скриптов.
"""

from typing import Dict, Iterable, List, Optional, Protocol

from src.core.domain.ranked_document import RankedDocument


class RankedCollection(Protocol):
    """Минимальный интерфейс хранилища для назначения рангов."""

    def documents(self, doc_type: Optional[str] = None) -> List[RankedDocument]:
        """Документы типа doc_type (все документы, если None)."""
        ...

    def set_order_rank(self, document_id: str, order_rank: str) -> RankedDocument:
        """Записать order_rank документу; вернуть обновлённый снапшот."""
        ...


class DocumentNotFoundError(KeyError):
    """Документ с указанным _id отсутствует в коллекции."""


class InMemoryCollection:
    """RankedCollection поверх dict, в порядке добавления документов."""

    def __init__(self, documents: Iterable = ()):
        self._documents: Dict[str, RankedDocument] = {}
        for doc in documents:
            self.add(doc)

    def add(self, document) -> RankedDocument:
        """Добавить документ (RankedDocument или сырой dict хранилища)."""
        if not isinstance(document, RankedDocument):
            document = RankedDocument.model_validate(document)
        self._documents[document.id] = document
        return document

    def get(self, document_id: str) -> RankedDocument:
        try:
            return self._documents[document_id]
        except KeyError:
            raise DocumentNotFoundError(document_id) from None

    def documents(self, doc_type: Optional[str] = None) -> List[RankedDocument]:
        return [
            doc
            for doc in self._documents.values()
            if doc_type is None or doc.type == doc_type
        ]

    def set_order_rank(self, document_id: str, order_rank: str) -> RankedDocument:
        updated = self.get(document_id).model_copy(update={"order_rank": order_rank})
        self._documents[document_id] = updated
        return updated

    def __len__(self) -> int:
        return len(self._documents)
