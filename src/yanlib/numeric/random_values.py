"""
Random Values: случайные числа целевого типа в диапазоне [min, max)

Границы приводятся к целевому типу через convert_strict. Если приведение
невозможно, граница явно None или нечисловая (NaN/Inf), либо min > max,
возвращается нулевое значение типа (None при nullable=True). Исключений нет.

Источник случайности по умолчанию: новый random.Random() на каждый вызов
(без общего состояния между вызовами). Для воспроизводимости передаётся
собственный экземпляр через rng.
"""

import math
import random
from decimal import Decimal, localcontext
from typing import Any, Iterator, Optional

from src.yanlib.numeric.conversion import MISSING, TargetType, _describe, convert, convert_strict
from src.yanlib.numeric.errors import ConversionError
from src.yanlib.numeric.types import ULONG, Number, NumericKind, NumericType, resolve_type
from src.yanlib.utils.logging import get_logger

logger = get_logger(__name__)

# Точность промежуточной арифметики decimal (результат округляется до 29 цифр)
_DECIMAL_WORK_PRECISION = 40


def _resolve_bound(bound: Any, omitted: Number, target: NumericType) -> Optional[Number]:
    """Граница в представлении типа или None, если она непригодна."""
    if bound is MISSING:
        return omitted
    if bound is None:
        return None
    try:
        value = convert_strict(bound, target)
    except ConversionError as e:
        logger.debug("random_bound_rejected", target=target.name, bound=_describe(bound), error=str(e))
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _sample_binary_float(low: float, high: float, target: NumericType, rng: random.Random) -> float:
    # low*(1-r) + high*r не переполняется даже для [-max, max]
    while True:
        r = rng.random()
        value = convert_strict(low * (1.0 - r) + high * r, target)
        if low <= value < high:
            return value


def _sample_decimal(low: Decimal, high: Decimal, target: NumericType, rng: random.Random) -> Decimal:
    while True:
        r = Decimal(rng.random())
        with localcontext() as ctx:
            ctx.prec = _DECIMAL_WORK_PRECISION
            raw = low + (high - low) * r
        value = convert_strict(raw, target)
        if low <= value < high:
            return value


def random_number(
    target: TargetType,
    min_value: Any = MISSING,
    max_value: Any = MISSING,
    *,
    nullable: bool = False,
    rng: Optional[random.Random] = None,
) -> Optional[Number]:
    """
    Случайное значение целевого типа, равномерно распределённое в [min, max).

    Args:
        target: Целевой тип (дескриптор или имя)
        min_value: Нижняя граница (опущена -> минимум типа)
        max_value: Верхняя граница, не включается (опущена -> максимум типа)
        nullable: Вернуть None вместо нулевого значения типа при отказе
        rng: Источник случайности (default: новый random.Random())

    Returns:
        - min при min == max
        - target.default (или None) если граница непригодна или min > max
        - иначе значение v: min <= v < max

    Examples:
        >>> random_number("int", 5, 5)
        5
        >>> random_number("int", 10, 1)
        0
        >>> random_number("int", None, 10, nullable=True) is None
        True
    """
    target = resolve_type(target)
    failure = None if nullable else target.default

    low = _resolve_bound(min_value, target.lower, target)
    high = _resolve_bound(max_value, target.upper, target)

    if low is None or high is None or low > high:
        return failure
    if low == high:
        return low

    rng = rng or random.Random()

    if target.kind is NumericKind.INTEGER:
        return rng.randrange(low, high)
    if target.kind is NumericKind.BINARY_FLOAT:
        return _sample_binary_float(low, high, target, rng)
    return _sample_decimal(low, high, target, rng)


def random_numbers(
    target: TargetType,
    size: Any,
    min_value: Any = MISSING,
    max_value: Any = MISSING,
    *,
    nullable: bool = False,
    rng: Optional[random.Random] = None,
) -> Iterator[Optional[Number]]:
    """
    Ленивая последовательность из size независимых значений random_number.

    size приводится через convert(size, ULONG): неудача даёт 0 значений.
    Без rng каждое значение получает собственный random.Random().
    """
    target = resolve_type(target)
    count = convert(size, ULONG)
    return (
        random_number(target, min_value, max_value, nullable=nullable, rng=rng)
        for _ in range(count)
    )
