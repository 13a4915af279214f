"""
Numeric modules для yanlib

Тотальная конверсия, парсинг и генерация случайных чисел для таблицы
числовых типов.
"""

# Numeric type table
from src.yanlib.numeric.types import (
    BYTE,
    DECIMAL,
    DEFAULT_REGISTRY,
    DOUBLE,
    FLOAT,
    INT,
    LONG,
    NINT,
    NUINT,
    SBYTE,
    SHORT,
    UINT,
    ULONG,
    USHORT,
    NumericKind,
    NumericType,
    NumericTypeRegistry,
    load_numeric_types,
    load_registry,
    resolve_type,
)

# Errors
from src.yanlib.numeric.errors import (
    ConversionError,
    ConversionFormatError,
    ConversionOverflowError,
    ConversionTypeError,
    UnknownNumericTypeError,
)

# Conversion and parsing
from src.yanlib.numeric.conversion import (
    MISSING,
    convert,
    convert_list,
    convert_many,
    convert_strict,
    parse,
    parse_list,
    parse_many,
    parse_strict,
)

# Random values
from src.yanlib.numeric.random_values import random_number, random_numbers

__all__ = [
    # Types
    "NumericKind",
    "NumericType",
    "NumericTypeRegistry",
    "DEFAULT_REGISTRY",
    "load_numeric_types",
    "load_registry",
    "resolve_type",
    "SBYTE",
    "BYTE",
    "SHORT",
    "USHORT",
    "INT",
    "UINT",
    "LONG",
    "ULONG",
    "NINT",
    "NUINT",
    "FLOAT",
    "DOUBLE",
    "DECIMAL",
    # Errors
    "ConversionError",
    "ConversionFormatError",
    "ConversionOverflowError",
    "ConversionTypeError",
    "UnknownNumericTypeError",
    # Conversion
    "MISSING",
    "convert",
    "convert_strict",
    "convert_many",
    "convert_list",
    "parse",
    "parse_strict",
    "parse_many",
    "parse_list",
    # Random
    "random_number",
    "random_numbers",
]
