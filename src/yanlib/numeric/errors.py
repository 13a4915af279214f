"""
Исключения численной конверсии.

Тотальные фасады (convert/parse) перехватывают только ConversionError и его
наследников. Строгие варианты (convert_strict/parse_strict) пробрасывают их
наружу, что позволяет различить причину отказа.
"""


class ConversionError(ValueError):
    """Базовая ошибка конверсии значения в числовой тип."""

    def __init__(self, message: str, value: object = None, target: str | None = None):
        super().__init__(message)
        self.value = value
        self.target = target


class ConversionFormatError(ConversionError):
    """Строка не соответствует грамматике числа целевого типа."""


class ConversionOverflowError(ConversionError):
    """Значение вне диапазона целевого типа (или NaN/Inf для целых и decimal)."""


class ConversionTypeError(ConversionError):
    """Значение не может быть приведено к числу (None, complex, произвольный объект)."""


class UnknownNumericTypeError(KeyError):
    """
    Неизвестное имя числового типа.

    Ошибка программиста, а не данных: фасады её не перехватывают.
    """
