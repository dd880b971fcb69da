"""
Configuration — параметры order-rank из окружения

Значения читаются из переменных окружения с префиксом ORDERRANK_
(например, ORDERRANK_SEQUENCE_SPACING=3) и из файла .env.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки генерации рангов и работы с коллекциями."""

    # Коллекции
    ORDERABLE_TYPES: List[str] = Field(
        default_factory=lambda: ["artwork", "category"],
        description="Типы документов с ручной сортировкой",
    )

    # Генерация
    NEXT_STEP: int = Field(default=8, ge=1, description="Запас next()/prev()")
    SEQUENCE_SPACING: int = Field(default=2, ge=1, description="next() на одну запись")
    DEFAULT_BUCKET: int = Field(default=0, ge=0, le=2)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="ORDERRANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
settings = Settings()
