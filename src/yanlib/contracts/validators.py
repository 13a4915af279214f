"""
Контракты данных библиотеки.

Таблица числовых типов хранится как JSON и до построения моделей проверяется
по JSON Schema (draft 2020-12). Схемы входят в пакет: каталог schema/.

Схемы:
- numeric_types.json: таблица числовых типов для конверсии
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from jsonschema import Draft202012Validator, SchemaError
from jsonschema.exceptions import best_match

# Каталог схем внутри пакета
SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение и кэширование схем из каталога по имени файла без расширения."""

    def __init__(self, schema_dir: Path | None = None):
        directory = schema_dir or SCHEMA_DIR
        if not directory.is_dir():
            raise RuntimeError(f"Schema directory not found: {directory}")
        self._schema_dir = directory
        self._cache: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени ('numeric_types' -> schema/numeric_types.json).

        Raises:
            FileNotFoundError: Если файла схемы нет
            ValueError: Если файл не является корректной схемой draft 2020-12
        """
        cached = self._cache.get(schema_name)
        if cached is not None:
            return cached

        path = self._schema_dir / f"{schema_name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {e.message}") from e

        self._cache[schema_name] = schema
        return schema


_DEFAULT_LOADER = SchemaLoader()


# =============================================================================
# VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка данных по одной схеме."""

    def __init__(self, schema_name: str, loader: SchemaLoader | None = None):
        self.schema_name = schema_name
        self.schema = (loader or _DEFAULT_LOADER).load_schema(schema_name)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            jsonschema.ValidationError: Наиболее релевантное нарушение схемы
        """
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: Any) -> bool:
        return self._validator.is_valid(data)

    def errors(self, data: Any) -> List[str]:
        """Все нарушения в виде 'путь: сообщение', упорядоченные по пути."""
        found = sorted(self._validator.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
        return [f"{'/'.join(map(str, e.absolute_path)) or '<root>'}: {e.message}" for e in found]


class NumericTypeTableValidator(ContractValidator):
    """Контракт таблицы числовых типов."""

    def __init__(self, loader: SchemaLoader | None = None):
        super().__init__("numeric_types", loader)


def validate_numeric_type_table(data: Any) -> None:
    """
    Проверка таблицы числовых типов перед загрузкой.

    Raises:
        jsonschema.ValidationError: Если таблица нарушает контракт
    """
    NumericTypeTableValidator().validate(data)
