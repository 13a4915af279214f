"""
Numeric Conversion: тотальная конверсия и парсинг чисел

Модуль обеспечивает приведение произвольных значений и строк к числовому типу
из таблицы NumericType:
- Конверсия значения (bool, int, float, Decimal, Fraction, объекты с
  __index__/__float__, строки) в целевой тип
- Парсинг строки в культурно-независимом формате
- Поэлементная конверсия/парсинг коллекций (ленивая и жадная)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. convert/parse никогда не выбрасывают исключений из-за значения:
   при неудаче возвращается fallback (приведённый через convert),
   иначе нулевое значение типа (или None при nullable=True)
2. Перехватывается только ConversionError: посторонние ошибки не маскируются
3. Переполнение, неверный формат и None обрабатываются одинаково
4. Целые типы: float/Decimal округляются к ближайшему чётному
"""

import math
import numbers
import operator
import re
import struct
from decimal import ROUND_HALF_EVEN, Context, Decimal, InvalidOperation, Overflow
from typing import Any, Callable, Final, Iterable, Iterator, List, Optional, Union

from src.yanlib.numeric.errors import (
    ConversionError,
    ConversionFormatError,
    ConversionOverflowError,
    ConversionTypeError,
)
from src.yanlib.numeric.types import Number, NumericKind, NumericType, resolve_type
from src.yanlib.utils.logging import get_logger

logger = get_logger(__name__)

TargetType = Union[NumericType, str]


class _Missing:
    """Маркер опущенного аргумента (None является допустимым fallback)."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Final = _Missing()


# =============================================================================
# ГРАММАТИКА ПАРСИНГА (культурно-независимая)
# =============================================================================

# Целые: знак и ASCII-цифры, без разделителей и дробной части
_INTEGER_RE: Final = re.compile(r"[+-]?[0-9]+")

# Двоичные float: разделители тысяч ',', дробная часть, экспонента
_BINARY_FLOAT_RE: Final = re.compile(
    r"[+-]?(?:[0-9][0-9,]*(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)

# Decimal: как float, но без экспоненты
_DECIMAL_RE: Final = re.compile(r"[+-]?(?:[0-9][0-9,]*(?:\.[0-9]*)?|\.[0-9]+)")

_FLOAT_SPECIALS: Final = {
    "nan": math.nan,
    "infinity": math.inf,
    "inf": math.inf,
    "∞": math.inf,
}

# Формат struct для округления до точности двоичного типа
_BINARY_FLOAT_FORMATS: Final = {16: "<e", 32: "<f", 64: "<d"}

# 29 значащих цифр (максимум decimal тоже 29-значный), банковское округление
_DECIMAL_CONTEXT: Final = Context(prec=29, rounding=ROUND_HALF_EVEN)


# =============================================================================
# ВНУТРЕННИЕ ПРИВЕДЕНИЯ
# =============================================================================


_DESCRIBE_LIMIT: Final = 80


def _describe(value: Any) -> str:
    """Короткое представление значения для сообщений и логов."""
    try:
        text = repr(value)
    except ValueError:
        # int длиннее sys.get_int_max_str_digits() не переводится в строку
        return f"<{type(value).__name__} too large to display>"
    if len(text) > _DESCRIBE_LIMIT:
        return f"{text[:_DESCRIBE_LIMIT]}... ({len(text)} chars)"
    return text


def _check_range(value: Number, target: NumericType, source: Any) -> Number:
    if value < target.lower or value > target.upper:
        raise ConversionOverflowError(
            f"{_describe(source)} is outside {target.name} range [{target.lower}, {target.upper}]",
            value=source,
            target=target.name,
        )
    return value


def _max_digits(target: NumericType) -> int:
    return len(str(max(-target.lower, target.upper)))


def _as_number(value: Any, target: NumericType) -> Any:
    """Приведение входа к встроенному числу (без учёта целевого типа)."""
    if value is None:
        raise ConversionTypeError("None cannot be converted", value=value, target=target.name)
    if isinstance(value, (bool, int, float, Decimal, numbers.Rational)):
        return value
    if isinstance(value, complex):
        raise ConversionTypeError(
            f"complex value {_describe(value)} cannot be converted", value=value, target=target.name
        )

    try:
        if hasattr(value, "__index__"):
            return operator.index(value)
        if hasattr(value, "__float__"):
            return float(value)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise ConversionTypeError(
            f"{type(value).__name__} failed numeric protocol: {e}",
            value=value,
            target=target.name,
        ) from e

    raise ConversionTypeError(
        f"{type(value).__name__} is not a number", value=value, target=target.name
    )


def _to_integer(value: Any, target: NumericType) -> int:
    if isinstance(value, int):
        # bool входит сюда же: True -> 1, False -> 0
        return _check_range(int(value), target, value)

    if isinstance(value, (float, Decimal)) and not (
        math.isfinite(value) if isinstance(value, float) else value.is_finite()
    ):
        raise ConversionOverflowError(
            f"{_describe(value)} has no integer value", value=value, target=target.name
        )
    # Грубая проверка до округления: Decimal('1e999999999') не разворачивается в int
    if value < target.lower - 1 or value > target.upper + 1:
        raise ConversionOverflowError(
            f"{_describe(value)} is outside {target.name} range [{target.lower}, {target.upper}]",
            value=value,
            target=target.name,
        )

    if isinstance(value, float):
        result = round(value)
    elif isinstance(value, Decimal):
        result = int(value.to_integral_value(rounding=ROUND_HALF_EVEN))
    else:
        # Fraction и прочие Rational: round() тоже округляет к чётному
        result = round(value)

    return _check_range(result, target, value)


def _round_binary_float(value: float, target: NumericType) -> float:
    """Округление до точности типа; за пределами диапазона насыщение до ±inf."""
    fmt = _BINARY_FLOAT_FORMATS.get(target.bits)
    if fmt is None:
        raise ConversionTypeError(
            f"unsupported binary float width: {target.bits}", value=value, target=target.name
        )
    if fmt == "<d":
        return value
    try:
        return struct.unpack(fmt, struct.pack(fmt, value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _to_binary_float(value: Any, target: NumericType) -> float:
    try:
        result = float(value)
    except OverflowError:
        # Целое или дробь, не представимые в double
        result = math.inf if value > 0 else -math.inf
    except ValueError as e:
        # Decimal('sNaN')
        raise ConversionTypeError(str(e), value=value, target=target.name) from e
    return _round_binary_float(result, target)


def _fit_decimal(compute: Callable[[], Decimal], source: Any, target: NumericType) -> Decimal:
    """Вычисление в контексте 29 цифр; выход за экспоненту контекста считается переполнением."""
    try:
        result = compute()
    except (Overflow, InvalidOperation) as e:
        raise ConversionOverflowError(
            f"value is outside {target.name} exponent range", value=source, target=target.name
        ) from e
    return _check_range(result, target, source)


def _to_decimal(value: Any, target: NumericType) -> Decimal:
    if isinstance(value, (int, float, Decimal)):
        if isinstance(value, int):
            exact = Decimal(int(value))
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise ConversionOverflowError(
                    f"{_describe(value)} has no decimal value", value=value, target=target.name
                )
            # Кратчайшее представление: 0.1 -> Decimal('0.1'), а не двоичный хвост
            exact = Decimal(repr(value))
        else:
            if not value.is_finite():
                raise ConversionOverflowError(
                    f"{_describe(value)} has no decimal value", value=value, target=target.name
                )
            exact = value
        return _fit_decimal(lambda: _DECIMAL_CONTEXT.plus(exact), value, target)

    return _fit_decimal(
        lambda: _DECIMAL_CONTEXT.divide(Decimal(value.numerator), Decimal(value.denominator)),
        value,
        target,
    )


# =============================================================================
# СТРОГИЕ ОПЕРАЦИИ
# =============================================================================


def parse_strict(text: Any, target: TargetType) -> Number:
    """
    Парсинг строки в целевой тип с исключением при неудаче.

    Пробельные символы по краям игнорируются. Грамматика:
    - integer: [+-]?[0-9]+
    - binary_float: цифры с ',' между разрядами, '.' дробь, экспонента,
      а также NaN / Infinity / inf / ∞ со знаком (без учёта регистра);
      переполнение даёт ±inf
    - decimal: цифры с ',' между разрядами и '.' дробь, без экспоненты

    Args:
        text: Строка для разбора
        target: Целевой тип (дескриптор или имя)

    Returns:
        Число в представлении целевого типа

    Raises:
        ConversionTypeError: Если text не строка
        ConversionFormatError: Если строка не соответствует грамматике
        ConversionOverflowError: Если число вне диапазона типа
        UnknownNumericTypeError: Если тип не найден

    Examples:
        >>> parse_strict(" -42 ", "int")
        -42
        >>> parse_strict("1,234.5", "double")
        1234.5
    """
    target = resolve_type(target)

    if not isinstance(text, str):
        raise ConversionTypeError(
            f"expected str, got {type(text).__name__}", value=text, target=target.name
        )

    stripped = text.strip()
    if not stripped:
        raise ConversionFormatError("empty string", value=text, target=target.name)

    if target.kind is NumericKind.INTEGER:
        if not _INTEGER_RE.fullmatch(stripped):
            raise ConversionFormatError(
                f"{_describe(text)} is not an integer", value=text, target=target.name
            )
        # Длина без ведущих нулей отсекает строки длиннее любой границы
        # до int(), у которого есть лимит на число цифр
        magnitude = stripped.lstrip("+-").lstrip("0")
        if len(magnitude) > _max_digits(target):
            raise ConversionOverflowError(
                f"{len(magnitude)}-digit value is outside {target.name} range",
                value=text,
                target=target.name,
            )
        number = int(magnitude or "0")
        return _check_range(-number if stripped[0] == "-" else number, target, text)

    if target.kind is NumericKind.BINARY_FLOAT:
        unsigned = stripped[1:] if stripped[0] in "+-" else stripped
        special = _FLOAT_SPECIALS.get(unsigned.lower())
        if special is not None:
            return _round_binary_float(-special if stripped[0] == "-" else special, target)
        if not _BINARY_FLOAT_RE.fullmatch(stripped):
            raise ConversionFormatError(
                f"{_describe(text)} is not a floating-point number", value=text, target=target.name
            )
        return _round_binary_float(float(stripped.replace(",", "")), target)

    if not _DECIMAL_RE.fullmatch(stripped):
        raise ConversionFormatError(f"{_describe(text)} is not a decimal", value=text, target=target.name)
    digits = stripped.replace(",", "")
    return _fit_decimal(lambda: _DECIMAL_CONTEXT.create_decimal(digits), text, target)


def convert_strict(value: Any, target: TargetType) -> Number:
    """
    Конверсия значения в целевой тип с исключением при неудаче.

    Правила:
    - None -> ConversionTypeError
    - bool -> 1 / 0
    - str -> parse_strict
    - целевой integer: float/Decimal округляются к чётному, NaN/Inf и выход
      за диапазон -> ConversionOverflowError
    - целевой binary_float: округление до точности типа, насыщение до ±inf
    - целевой decimal: 29 значащих цифр, NaN/Inf и выход за диапазон ->
      ConversionOverflowError

    Raises:
        ConversionError: Наследник, описывающий причину отказа
        UnknownNumericTypeError: Если тип не найден
    """
    target = resolve_type(target)

    if isinstance(value, str):
        return parse_strict(value, target)

    number = _as_number(value, target)

    if target.kind is NumericKind.INTEGER:
        return _to_integer(number, target)
    if target.kind is NumericKind.BINARY_FLOAT:
        return _to_binary_float(number, target)
    return _to_decimal(number, target)


# =============================================================================
# ТОТАЛЬНЫЕ ФАСАДЫ
# =============================================================================


def _failure_result(
    target: NumericType, fallback: Any, nullable: bool
) -> Optional[Number]:
    if fallback is MISSING:
        return None if nullable else target.default
    return convert(fallback, target, nullable=nullable)


def convert(
    value: Any,
    target: TargetType,
    fallback: Any = MISSING,
    *,
    nullable: bool = False,
) -> Optional[Number]:
    """
    Тотальная конверсия значения в целевой тип.

    Args:
        value: Исходное значение (любое)
        target: Целевой тип (дескриптор или имя)
        fallback: Значение при неудаче; само приводится через convert
        nullable: Вернуть None вместо нулевого значения типа при неудаче

    Returns:
        Приведённое значение, либо приведённый fallback, либо target.default
        (None при nullable=True)

    Examples:
        >>> convert(3.5, "int")
        4
        >>> convert(1e20, "int")
        0
        >>> convert(1e20, "int", 7)
        7
        >>> convert(None, "long", nullable=True) is None
        True
    """
    target = resolve_type(target)
    try:
        return convert_strict(value, target)
    except ConversionError as e:
        logger.debug("conversion_failed", target=target.name, value=_describe(value), error=str(e))
        return _failure_result(target, fallback, nullable)


def parse(
    text: Any,
    target: TargetType,
    fallback: Any = MISSING,
    *,
    nullable: bool = False,
) -> Optional[Number]:
    """
    Тотальный парсинг строки в целевой тип.

    Args:
        text: Строка (None, пустая и не-строка считаются неудачей)
        target: Целевой тип (дескриптор или имя)
        fallback: Значение при неудаче; приводится через convert
        nullable: Вернуть None вместо нулевого значения типа при неудаче

    Examples:
        >>> parse("42", "short")
        42
        >>> parse("abc", "double")
        0.0
        >>> parse("70000", "ushort", "12")
        12
    """
    target = resolve_type(target)
    try:
        return parse_strict(text, target)
    except ConversionError as e:
        logger.debug("parse_failed", target=target.name, value=_describe(text), error=str(e))
        return _failure_result(target, fallback, nullable)


# =============================================================================
# ПОЭЛЕМЕНТНЫЕ ОБЁРТКИ
# =============================================================================


def convert_many(
    values: Optional[Iterable[Any]],
    target: TargetType,
    fallback: Any = MISSING,
    *,
    nullable: bool = False,
) -> Iterator[Optional[Number]]:
    """
    Ленивая поэлементная конверсия.

    Порядок и длина сохраняются; None на входе даёт пустую последовательность.
    Повторный обход зависит от источника (генератор обходится один раз).
    """
    target = resolve_type(target)
    if values is None:
        return iter(())
    return (convert(v, target, fallback, nullable=nullable) for v in values)


def parse_many(
    texts: Optional[Iterable[Any]],
    target: TargetType,
    fallback: Any = MISSING,
    *,
    nullable: bool = False,
) -> Iterator[Optional[Number]]:
    """Ленивый поэлементный парсинг (семантика как у convert_many)."""
    target = resolve_type(target)
    if texts is None:
        return iter(())
    return (parse(t, target, fallback, nullable=nullable) for t in texts)


def convert_list(
    values: Optional[Iterable[Any]],
    target: TargetType,
    fallback: Any = MISSING,
    *,
    nullable: bool = False,
) -> List[Optional[Number]]:
    """Жадная поэлементная конверсия в список."""
    return list(convert_many(values, target, fallback, nullable=nullable))


def parse_list(
    texts: Optional[Iterable[Any]],
    target: TargetType,
    fallback: Any = MISSING,
    *,
    nullable: bool = False,
) -> List[Optional[Number]]:
    """Жадный поэлементный парсинг в список."""
    return list(parse_many(texts, target, fallback, nullable=nullable))
