"""OrderRank — назначение рангов документам коллекции.

Документы, созданные в редакторе CMS, получают orderRank автоматически.
Документы, созданные программно (импорт, миграции, скрипты), должны получить
orderRank явно — для этого и предназначены функции модуля.

Порядок работы:
- get_last_order_rank: наибольший сохранённый ранг типа
- get_next_order_rank: ранг для одного нового документа в конце списка
- get_sequential_order_ranks: серия рангов для пакетного создания
- fix_missing_order_ranks / migrate_to_order_rank: ремонт и миграция
- check_order_ranks: отчёт о состоянии рангов по типам

Конкурентность: между чтением последнего ранга и записью нового нет
блокировки. Вызывающий код сериализует назначение рангов в пределах одной
коллекции (один writer, транзакция или внешний lock).
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from src.config import Settings, settings as default_settings
from src.core.domain.ranked_document import RankedDocument
from src.core.rank.sequence import RankSequence
from src.ordering.collection import RankedCollection


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class OrderRankStatus:
    """Состояние рангов одного типа документов."""

    doc_type: str
    total: int
    with_order_rank: int

    missing: Tuple[RankedDocument, ...] = ()
    malformed: Tuple[RankedDocument, ...] = ()

    # rank → _id документов, делящих один и тот же ранг
    duplicates: Dict[str, Tuple[str, ...]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not (self.missing or self.malformed or self.duplicates)


@dataclass(frozen=True)
class OrderRankReport:
    """Сводный отчёт check_order_ranks."""

    statuses: Tuple[OrderRankStatus, ...]

    @property
    def total_documents(self) -> int:
        return sum(status.total for status in self.statuses)

    @property
    def total_missing(self) -> int:
        return sum(len(status.missing) for status in self.statuses)

    @property
    def total_malformed(self) -> int:
        return sum(len(status.malformed) for status in self.statuses)

    @property
    def total_duplicates(self) -> int:
        return sum(len(status.duplicates) for status in self.statuses)

    @property
    def ok(self) -> bool:
        return all(status.ok for status in self.statuses)

    def status(self, doc_type: str) -> OrderRankStatus:
        for status in self.statuses:
            if status.doc_type == doc_type:
                return status
        raise KeyError(doc_type)


# =============================================================================
# HELPERS
# =============================================================================


def _resolve(settings: Optional[Settings], sequence: Optional[RankSequence]):
    settings = settings or default_settings
    return settings, sequence or RankSequence.from_settings(settings)


def _check_type(doc_type: str, settings: Settings) -> str:
    if doc_type not in settings.ORDERABLE_TYPES:
        raise ValueError(
            f"Document type {doc_type!r} is not orderable; expected one of {settings.ORDERABLE_TYPES}"
        )
    return doc_type


# =============================================================================
# LAST / NEXT
# =============================================================================


def get_last_order_rank(
    collection: RankedCollection,
    doc_type: str,
    settings: Optional[Settings] = None,
) -> Optional[str]:
    """
    Наибольший orderRank среди документов типа.

    Ранги сравниваются как строки, так же как их сортирует хранилище.

    Returns:
        orderRank последнего документа или None, если рангов ещё нет
    """
    settings = settings or default_settings
    _check_type(doc_type, settings)

    ranks = [doc.order_rank for doc in collection.documents(doc_type) if doc.has_rank]
    return max(ranks) if ranks else None


def get_next_order_rank(
    collection: RankedCollection,
    doc_type: str,
    settings: Optional[Settings] = None,
    sequence: Optional[RankSequence] = None,
) -> str:
    """
    orderRank для нового документа в конце списка.

    Пустая коллекция начинается с middle().

    Raises:
        MalformedRankError: Последний сохранённый ранг не разбирается
    """
    settings, sequence = _resolve(settings, sequence)
    last = get_last_order_rank(collection, doc_type, settings)

    if last is None:
        return str(sequence.middle())
    return str(sequence.next(last))


def get_sequential_order_ranks(
    collection: RankedCollection,
    doc_type: str,
    count: int,
    settings: Optional[Settings] = None,
    sequence: Optional[RankSequence] = None,
) -> List[str]:
    """
    count последовательных orderRank после последнего документа типа.

    Пустая коллекция начинается с min(). Между соседними рангами остаётся
    место: каждый ранг — sequence.spacing шагов next() от предыдущего.
    """
    if count <= 0:
        return []

    settings, sequence = _resolve(settings, sequence)
    last = get_last_order_rank(collection, doc_type, settings)

    return [str(rank) for rank in sequence.sequential(last, count)]


# =============================================================================
# MISSING RANKS
# =============================================================================


def find_documents_missing_order_rank(
    collection: RankedCollection,
    doc_type: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> List[RankedDocument]:
    """
    Документы без orderRank, отсортированные по title.

    Args:
        doc_type: Тип документов; None — все сортируемые типы
    """
    settings = settings or default_settings
    types = [_check_type(doc_type, settings)] if doc_type else list(settings.ORDERABLE_TYPES)

    missing = [
        doc
        for doc in collection.documents()
        if doc.type in types and not doc.has_rank
    ]
    return sorted(missing, key=lambda doc: doc.title or "")


def assign_order_rank(
    collection: RankedCollection,
    document_id: str,
    doc_type: str,
    settings: Optional[Settings] = None,
    sequence: Optional[RankSequence] = None,
) -> str:
    """
    Назначить документу orderRank в конце списка его типа.

    Returns:
        Назначенный orderRank
    """
    order_rank = get_next_order_rank(collection, doc_type, settings, sequence)
    collection.set_order_rank(document_id, order_rank)

    logger.info(f"Assigned {doc_type} {document_id}: orderRank={order_rank}")
    return order_rank


def fix_missing_order_ranks(
    collection: RankedCollection,
    doc_type: str,
    settings: Optional[Settings] = None,
    sequence: Optional[RankSequence] = None,
) -> int:
    """
    Назначить orderRank всем документам типа, у которых его нет.

    Документы встают в конец списка в порядке title.

    Returns:
        Количество исправленных документов
    """
    settings, sequence = _resolve(settings, sequence)
    docs = find_documents_missing_order_rank(collection, doc_type, settings)

    if not docs:
        return 0

    ranks = get_sequential_order_ranks(collection, doc_type, len(docs), settings, sequence)
    for doc, order_rank in zip(docs, ranks):
        collection.set_order_rank(doc.id, order_rank)
        logger.info(f"Fixed {doc_type} {doc.title or doc.id} ({doc.id}): orderRank={order_rank}")

    return len(docs)


# =============================================================================
# MIGRATION
# =============================================================================


def migrate_to_order_rank(
    collection: RankedCollection,
    doc_type: str,
    settings: Optional[Settings] = None,
    sequence: Optional[RankSequence] = None,
) -> List[Tuple[str, str]]:
    """
    Перевести документы типа с числового поля order на orderRank.

    Текущий порядок сохраняется: документы сортируются по order (без order —
    в конце, в порядке хранилища), ранги выдаются заново от min(). Поле order
    не трогается и остаётся резервной копией.

    Returns:
        Пары (document_id, orderRank) в новом порядке
    """
    settings, sequence = _resolve(settings, sequence)
    _check_type(doc_type, settings)

    docs = collection.documents(doc_type)
    if not docs:
        logger.info(f"No {doc_type} documents found")
        return []

    # sorted() стабилен: равные order сохраняют порядок хранилища
    docs = sorted(docs, key=lambda doc: (doc.order is None, doc.order or 0))
    ranks = sequence.sequential(None, len(docs))

    assigned = []
    for doc, rank in zip(docs, ranks):
        collection.set_order_rank(doc.id, str(rank))
        logger.debug(f"{doc.title or doc.id}: order={doc.order} -> orderRank={rank}")
        assigned.append((doc.id, str(rank)))

    logger.info(f"Migrated {len(assigned)} {doc_type} documents to orderRank")
    return assigned


# =============================================================================
# STATUS REPORT
# =============================================================================


def _status_for_type(collection: RankedCollection, doc_type: str) -> OrderRankStatus:
    docs = collection.documents(doc_type)

    missing = []
    malformed = []
    by_rank = defaultdict(list)

    for doc in docs:
        if not doc.has_rank:
            missing.append(doc)
        elif not doc.has_valid_rank:
            logger.warning(f"Malformed orderRank on {doc_type} {doc.id}: {doc.order_rank!r}")
            malformed.append(doc)
        else:
            # Валидный ранг всегда в канонической форме
            by_rank[doc.order_rank].append(doc.id)

    return OrderRankStatus(
        doc_type=doc_type,
        total=len(docs),
        with_order_rank=len(docs) - len(missing),
        missing=tuple(missing),
        malformed=tuple(malformed),
        duplicates={rank: tuple(ids) for rank, ids in by_rank.items() if len(ids) > 1},
    )


def check_order_ranks(
    collection: RankedCollection,
    doc_types: Optional[Sequence[str]] = None,
    settings: Optional[Settings] = None,
) -> OrderRankReport:
    """
    Отчёт о состоянии orderRank по типам документов.

    Args:
        doc_types: Проверяемые типы; None — все сортируемые типы
    """
    settings = settings or default_settings
    types = [_check_type(t, settings) for t in (doc_types or settings.ORDERABLE_TYPES)]

    report = OrderRankReport(statuses=tuple(_status_for_type(collection, t) for t in types))

    if report.ok:
        logger.info(f"All {report.total_documents} documents have a valid orderRank")
    else:
        logger.warning(
            f"orderRank problems in {report.total_documents} documents: "
            f"{report.total_missing} missing, {report.total_malformed} malformed, "
            f"{report.total_duplicates} duplicated ranks"
        )
    return report
