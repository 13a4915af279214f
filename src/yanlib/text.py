"""
Text helpers: проверки строк на пустоту.

Используются очисткой коллекций и фильтром имён свойств.
"""

from typing import Iterable, Optional


def is_null_or_whitespace(text: Optional[str]) -> bool:
    """
    True если строка None, пустая или состоит только из пробельных символов.

    Examples:
        >>> is_null_or_whitespace(None)
        True
        >>> is_null_or_whitespace("  ")
        True
        >>> is_null_or_whitespace(" a ")
        False
    """
    return text is None or not text.strip()


def is_not_null_and_whitespace(text: Optional[str]) -> bool:
    """Отрицание is_null_or_whitespace."""
    return not is_null_or_whitespace(text)


def all_null_or_whitespace(texts: Optional[Iterable[Optional[str]]]) -> bool:
    """
    True если коллекция None, пустая или все её элементы пустые.

    Examples:
        >>> all_null_or_whitespace([])
        True
        >>> all_null_or_whitespace(["", None, " "])
        True
        >>> all_null_or_whitespace(["", "name"])
        False
    """
    if texts is None:
        return True
    return all(is_null_or_whitespace(t) for t in texts)
