"""
Валидаторы golden-векторов

Файлы векторов в contracts/vectors/ описаны JSON Schema (Draft 2020-12) в
contracts/schema/. Прежде чем conformance прогоняет кейсы, документ
проверяется здесь: неверная форма вектора должна давать ValidationError,
а не ложное расхождение с библиотекой.

Схемы:
- bit_vector.json
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from jsonschema import Draft202012Validator, SchemaError, ValidationError

# <корень проекта>/contracts/schema; validators.py лежит в src/core/contracts/
DEFAULT_SCHEMA_DIR = Path(__file__).resolve().parents[3] / "contracts" / "schema"

BIT_VECTOR_SCHEMA = "bit_vector"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение схем из каталога с проверкой по meta-schema.

    Каждая схема читается с диска один раз; повторный load_schema
    возвращает тот же dict.

    Args:
        schema_dir: Каталог со схемами (по умолчанию contracts/schema)

    Raises:
        NotADirectoryError: Если каталога нет
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        directory = Path(schema_dir) if schema_dir is not None else DEFAULT_SCHEMA_DIR
        if not directory.is_dir():
            raise NotADirectoryError(f"No schema directory at {directory}")
        self._dir = directory
        self._cache: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без .json.

        Raises:
            FileNotFoundError: Файла <schema_name>.json нет
            ValueError: Документ не является корректной схемой Draft 2020-12
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"No schema named {schema_name!r} in {self._dir}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ValueError(f"{path.name} fails the Draft 2020-12 meta-schema: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


@lru_cache(maxsize=None)
def default_schema_loader() -> SchemaLoader:
    """Общий загрузчик для contracts/schema (создаётся при первом вызове)."""
    return SchemaLoader()


# =============================================================================
# VALIDATORS
# =============================================================================


class ContractValidator:
    """Скомпилированный Draft 2020-12 валидатор для одной схемы."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or default_schema_loader()).load_schema(schema_name)
        self._compiled = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """Raises ValidationError на первой (наиболее релевантной) ошибке."""
        self._compiled.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self._compiled.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        return self._compiled.iter_errors(data)


class BitVectorValidator(ContractValidator):
    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__(BIT_VECTOR_SCHEMA, loader)


@lru_cache(maxsize=1)
def _bit_vector_validator() -> BitVectorValidator:
    return BitVectorValidator()


def validate_bit_vector(data: Any) -> None:
    """
    Проверка документа golden-векторов.

    Raises:
        ValidationError: Документ не соответствует bit_vector.json
    """
    _bit_vector_validator().validate(data)
