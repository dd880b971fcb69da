"""
JSON Schema Contract Validators

Модуль для валидации документов хранилища согласно формальным JSON Schema
контрактам. Использует библиотеку jsonschema для проверки соответствия
данных схемам.

Схемы:
- ranked_document.json (документ с полем orderRank)
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        # Корень проекта — 4 уровня вверх от этого файла
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'ranked_document')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)


class RankedDocumentValidator(ContractValidator):
    """Валидатор для ranked_document контракта."""

    def __init__(self):
        super().__init__("ranked_document")

    def is_valid_rank(self, value: Any) -> bool:
        """Проверка одной rank-строки по подсхеме $defs/rank."""
        rank_schema = dict(self.schema["$defs"]["rank"])
        return Draft202012Validator(rank_schema).is_valid(value)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_ranked_document(data: Dict[str, Any]) -> None:
    """
    Валидация документа с полем orderRank.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    RankedDocumentValidator().validate(data)


def is_valid_rank_string(value: Any) -> bool:
    """True если value — rank-строка в канонической форме."""
    return RankedDocumentValidator().is_valid_rank(value)


__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "RankedDocumentValidator",
    "ValidationError",
    "validate_ranked_document",
    "is_valid_rank_string",
]
