"""
Numeric Types: таблица целевых числовых типов

Все операции конверсии, парсинга и генерации случайных чисел параметризуются
одним дескриптором NumericType вместо отдельной реализации на каждый тип.

Таблица типов хранится как данные (numeric_types.json) и перед загрузкой
проходит валидацию по JSON Schema контракту (contracts/schema/numeric_types.json).

Поддерживаемые типы:
- целые: sbyte, byte, short, ushort, int, uint, long, ulong, nint, nuint
- двоичные с плавающей точкой: float (binary32), double (binary64)
- десятичный: decimal (29 значащих цифр, ±79228162514264337593543950335)
"""

import json
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Dict, Final, Iterable, Iterator, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from src.yanlib.config import LibrarySettings
from src.yanlib.contracts import validate_numeric_type_table
from src.yanlib.numeric.errors import UnknownNumericTypeError
from src.yanlib.utils.logging import get_logger

logger = get_logger(__name__)

# Встроенная таблица типов
NUMERIC_TYPES_PATH: Final[Path] = Path(__file__).parent / "numeric_types.json"

Number = Union[int, float, Decimal]


# =============================================================================
# ENUMS
# =============================================================================


class NumericKind(str, Enum):
    """Семейство представления числа"""

    INTEGER = "integer"
    BINARY_FLOAT = "binary_float"
    DECIMAL = "decimal"


# =============================================================================
# NUMERIC TYPE MODEL
# =============================================================================


class NumericType(BaseModel):
    """
    Дескриптор целевого числового типа.

    Immutable модель (frozen=True): экземпляры разделяются всеми вызовами
    и используются как ключ параметризации фасадов.
    """

    name: str = Field(..., min_length=1, description="Каноническое имя (например, 'int')")
    kind: NumericKind = Field(..., description="Семейство представления")
    bits: int = Field(..., gt=0, description="Разрядность")
    signed: bool = Field(..., description="Допускает ли тип отрицательные значения")
    min_value: Union[int, float] = Field(..., description="Минимальное значение типа")
    max_value: Union[int, float] = Field(..., description="Максимальное значение типа")
    aliases: tuple[str, ...] = Field(default=(), description="Альтернативные имена")

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return v.strip().lower()

    @model_validator(mode="after")
    def validate_bounds(self) -> "NumericType":
        """Проверка согласованности диапазона."""
        if self.min_value > self.max_value:
            raise ValueError(
                f"{self.name}: min_value {self.min_value} exceeds max_value {self.max_value}"
            )
        if self.kind is NumericKind.INTEGER:
            if not isinstance(self.min_value, int) or not isinstance(self.max_value, int):
                raise ValueError(f"{self.name}: integer bounds must be integers")
            if not self.signed and self.min_value != 0:
                raise ValueError(f"{self.name}: unsigned type must start at 0")
        return self

    @property
    def is_integer(self) -> bool:
        return self.kind is NumericKind.INTEGER

    @property
    def lower(self) -> Number:
        """Минимум в собственном представлении типа."""
        return self._native(self.min_value)

    @property
    def upper(self) -> Number:
        """Максимум в собственном представлении типа."""
        return self._native(self.max_value)

    @property
    def default(self) -> Number:
        """Нулевое значение типа (возвращается при неудачной конверсии)."""
        return self._native(0)

    def _native(self, value: Union[int, float]) -> Number:
        if self.kind is NumericKind.INTEGER:
            return int(value)
        if self.kind is NumericKind.DECIMAL:
            return Decimal(value)
        return float(value)

    def __str__(self) -> str:
        return self.name


# =============================================================================
# REGISTRY
# =============================================================================


class NumericTypeRegistry:
    """Поиск числовых типов по имени или псевдониму (без учёта регистра)."""

    def __init__(self, types: Iterable[NumericType]):
        self._types: tuple[NumericType, ...] = tuple(types)
        self._lookup: Dict[str, NumericType] = {}

        for numeric_type in self._types:
            for key in (numeric_type.name, *numeric_type.aliases):
                key = key.lower()
                if key in self._lookup:
                    raise ValueError(f"Duplicate numeric type name or alias: {key!r}")
                self._lookup[key] = numeric_type

    def get(self, name: str) -> NumericType:
        """
        Тип по имени или псевдониму.

        Raises:
            UnknownNumericTypeError: Если имя не зарегистрировано
        """
        try:
            return self._lookup[name.strip().lower()]
        except KeyError:
            raise UnknownNumericTypeError(name) from None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self._types)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._lookup

    def __iter__(self) -> Iterator[NumericType]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


def load_numeric_types(path: Path | None = None) -> NumericTypeRegistry:
    """
    Загрузка таблицы числовых типов.

    Args:
        path: Путь к JSON-файлу таблицы (default: встроенный numeric_types.json)

    Returns:
        Реестр типов

    Raises:
        FileNotFoundError: Если файл не найден
        jsonschema.ValidationError: Если таблица нарушает контракт
        pydantic.ValidationError: Если описание типа противоречиво
    """
    path = path or NUMERIC_TYPES_PATH
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_numeric_type_table(data)

    registry = NumericTypeRegistry(NumericType(**entry) for entry in data["types"])
    logger.debug("numeric_types_loaded", path=str(path), count=len(registry))
    return registry


# =============================================================================
# ВСТРОЕННЫЕ ТИПЫ
# =============================================================================

DEFAULT_REGISTRY: Final[NumericTypeRegistry] = load_numeric_types()

SBYTE: Final[NumericType] = DEFAULT_REGISTRY.get("sbyte")
BYTE: Final[NumericType] = DEFAULT_REGISTRY.get("byte")
SHORT: Final[NumericType] = DEFAULT_REGISTRY.get("short")
USHORT: Final[NumericType] = DEFAULT_REGISTRY.get("ushort")
INT: Final[NumericType] = DEFAULT_REGISTRY.get("int")
UINT: Final[NumericType] = DEFAULT_REGISTRY.get("uint")
LONG: Final[NumericType] = DEFAULT_REGISTRY.get("long")
ULONG: Final[NumericType] = DEFAULT_REGISTRY.get("ulong")
NINT: Final[NumericType] = DEFAULT_REGISTRY.get("nint")
NUINT: Final[NumericType] = DEFAULT_REGISTRY.get("nuint")
FLOAT: Final[NumericType] = DEFAULT_REGISTRY.get("float")
DOUBLE: Final[NumericType] = DEFAULT_REGISTRY.get("double")
DECIMAL: Final[NumericType] = DEFAULT_REGISTRY.get("decimal")


def load_registry(settings: LibrarySettings | None = None) -> NumericTypeRegistry:
    """Реестр по настройкам: встроенный, если numeric_types_path не задан."""
    if settings is None or settings.numeric_types_path is None:
        return DEFAULT_REGISTRY
    return load_numeric_types(settings.numeric_types_path)


def resolve_type(
    target: Union[NumericType, str],
    registry: NumericTypeRegistry | None = None,
) -> NumericType:
    """
    Приведение аргумента target к NumericType.

    Args:
        target: Дескриптор или имя/псевдоним типа ('int', 'float64', ...)
        registry: Реестр для поиска имён (default: встроенный)

    Raises:
        UnknownNumericTypeError: Если тип не найден
    """
    if isinstance(target, NumericType):
        return target
    if isinstance(target, str):
        return (registry or DEFAULT_REGISTRY).get(target)
    raise UnknownNumericTypeError(repr(target))
