"""
RankedDocument — запись коллекции с ручной сортировкой

Документ принадлежит вызывающему хранилищу (CMS). Библиотека только читает
и назначает значение поля order_rank; хранение и удаление документов —
ответственность хранилища.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.core.domain.rank import MalformedRankError, Rank


class RankedDocument(BaseModel):
    """
    Снапшот документа.

    Алиасы полей совпадают с ключами хранилища (_id, _type, orderRank),
    поэтому model_validate/model_dump(by_alias=True) работают с сырыми dict.
    """

    id: str = Field(..., alias="_id", min_length=1, description="Идентификатор документа")
    type: str = Field(..., alias="_type", min_length=1, description="Тип документа")
    title: Optional[str] = Field(None, description="Заголовок (для отчётов)")
    order: Optional[float] = Field(None, description="Устаревшая числовая позиция")
    order_rank: Optional[str] = Field(None, alias="orderRank", description="Rank-строка")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def has_rank(self) -> bool:
        return self.order_rank is not None

    @property
    def rank(self) -> Optional[Rank]:
        """
        Разобранный order_rank (None если поле не задано).

        Raises:
            MalformedRankError: Значение поля не является rank-строкой
        """
        if self.order_rank is None:
            return None
        return Rank.parse(self.order_rank)

    @property
    def has_valid_rank(self) -> bool:
        try:
            return self.rank is not None
        except MalformedRankError:
            return False

    def to_record(self) -> Dict[str, Any]:
        """Сырой dict с ключами хранилища, без пустых полей."""
        return self.model_dump(by_alias=True, exclude_none=True)
