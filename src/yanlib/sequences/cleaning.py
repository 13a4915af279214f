"""
Collection Cleaning: удаление None и пустых строк из коллекций

Правило фильтрации выбирается один раз на вызов по item_type:
- str (и подклассы): удаляются None и пустые/пробельные строки
- числовые типы без None (bool, int, float, complex, Decimal): без фильтрации
- прочие классы и Optional[...] (включая Optional[int]): удаляются None;
  объединение со str также удаляет пустые строки
- item_type не указан (смешанный вход): удаляются None и пустые строки
"""

import types
import typing
from collections.abc import MutableSequence, MutableSet
from decimal import Decimal
from typing import Any, Callable, Iterable, Iterator, List, Optional, Union

from src.yanlib.text import is_not_null_and_whitespace
from src.yanlib.utils.logging import get_logger

logger = get_logger(__name__)

# Типы, значения которых не бывают None
_VALUE_TYPES: tuple[type, ...] = (bool, int, float, complex, Decimal)

KeepPredicate = Callable[[Any], bool]


def _keep_not_none(item: Any) -> bool:
    return item is not None


def _keep_mixed(item: Any) -> bool:
    if isinstance(item, str):
        return is_not_null_and_whitespace(item)
    return item is not None


def _keep_predicate(item_type: Any) -> Optional[KeepPredicate]:
    """Предикат "оставить элемент" или None, если фильтрация не нужна."""
    if item_type is None:
        return _keep_mixed

    origin = typing.get_origin(item_type)
    if origin is Union or origin is types.UnionType:
        # Optional[int], int | None: удаляются None
        members = [m for m in typing.get_args(item_type) if m is not type(None)]
        if any(isinstance(m, type) and issubclass(m, str) for m in members):
            return _keep_mixed
        return _keep_not_none
    if origin is not None or not isinstance(item_type, type):
        # List[int], list[int], Annotated[...] и прочие конструкции typing
        return _keep_not_none

    if issubclass(item_type, str):
        return is_not_null_and_whitespace
    if issubclass(item_type, _VALUE_TYPES):
        return None
    return _keep_not_none


def clean(items: Optional[Iterable[Any]], item_type: Any = None) -> Iterator[Any]:
    """
    Ленивая очистка последовательности.

    Args:
        items: Исходная коллекция (None -> пустой результат)
        item_type: Тип элементов, определяющий правило фильтрации

    Examples:
        >>> list(clean(["a", None, "", "  ", "b"]))
        ['a', 'b']
        >>> list(clean([0, 1, 2], int))
        [0, 1, 2]
    """
    if items is None:
        return iter(())
    keep = _keep_predicate(item_type)
    if keep is None:
        return iter(items)
    return (item for item in items if keep(item))


def clean_list(items: Optional[Iterable[Any]], item_type: Any = None) -> List[Any]:
    """Жадная очистка: новый список, источник не изменяется."""
    return list(clean(items, item_type))


def clean_in_place(items: Any, item_type: Any = None) -> None:
    """
    Очистка коллекции на месте.

    Args:
        items: MutableSequence (list, deque, ...) или MutableSet (set, ...);
            None игнорируется
        item_type: Тип элементов, определяющий правило фильтрации

    Raises:
        TypeError: Если коллекция не изменяемая последовательность или множество
    """
    if items is None:
        return
    if not isinstance(items, (MutableSequence, MutableSet)):
        raise TypeError(f"cannot clean {type(items).__name__} in place")

    keep = _keep_predicate(item_type)
    if keep is None:
        return

    before = len(items)
    if isinstance(items, MutableSequence):
        # Обход с конца: удаление не сдвигает ещё не проверенные индексы
        for index in range(len(items) - 1, -1, -1):
            if not keep(items[index]):
                del items[index]
    else:
        for item in [i for i in items if not keep(i)]:
            items.discard(item)

    logger.debug("collection_cleaned", removed=before - len(items), remaining=len(items))
