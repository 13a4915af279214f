"""
Property Defaults: проверка свойств модели на значения по умолчанию

Набор проверяемых полей фиксирован для каждого класса и вычисляется один раз
(кэш на класс):
1. атрибут класса __field_defaults__ (имя поля -> значение по умолчанию);
2. pydantic-модели: поля, объявленные в самом классе (без унаследованных);
3. dataclasses: поля, объявленные в самом классе (без унаследованных).

Значение по умолчанию поля определяется аннотацией: числовые типы, bool,
complex, Decimal и timedelta сравниваются со своим нулём, остальные
(str, Optional, коллекции, вложенные модели) сравниваются с None.

ВАЖНО: для model=None все четыре предиката возвращают False, в том числе
all_properties_default. Пустой или полностью пустой список имён также даёт False.
"""

import dataclasses
import inspect
import types
import typing
from datetime import timedelta
from decimal import Decimal
from functools import lru_cache
from typing import Any, Annotated, Dict, Iterable, Iterator, Optional, Union

from pydantic import BaseModel

from src.yanlib.text import all_null_or_whitespace

Names = Optional[Union[str, Iterable[str]]]

# Порядок важен: bool является подклассом int
_VALUE_TYPE_DEFAULTS: tuple[tuple[type, Any], ...] = (
    (bool, False),
    (int, 0),
    (float, 0.0),
    (complex, 0j),
    (Decimal, Decimal(0)),
    (timedelta, timedelta(0)),
)


# =============================================================================
# ТАБЛИЦА ПОЛЕЙ
# =============================================================================


def default_for_annotation(annotation: Any) -> Any:
    """
    Значение по умолчанию для аннотации поля.

    Examples:
        >>> default_for_annotation(int)
        0
        >>> default_for_annotation(Optional[int]) is None
        True
        >>> default_for_annotation(str) is None
        True
    """
    origin = typing.get_origin(annotation)
    if origin is Annotated:
        return default_for_annotation(typing.get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        return None

    if isinstance(annotation, type):
        for value_type, default in _VALUE_TYPE_DEFAULTS:
            if issubclass(annotation, value_type):
                return default
    return None


def _dataclass_hints(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Неразрешимые forward-ссылки: используем Field.type как есть
        return {}


@lru_cache(maxsize=None)
def _field_table(cls: type) -> tuple[tuple[str, Any], ...]:
    explicit = getattr(cls, "__field_defaults__", None)
    if explicit is not None:
        return tuple(explicit.items())

    own = inspect.get_annotations(cls)

    if issubclass(cls, BaseModel):
        return tuple(
            (name, default_for_annotation(info.annotation))
            for name, info in cls.model_fields.items()
            if name in own
        )

    if dataclasses.is_dataclass(cls):
        hints = _dataclass_hints(cls)
        return tuple(
            (f.name, default_for_annotation(hints.get(f.name, f.type)))
            for f in dataclasses.fields(cls)
            if f.name in own
        )

    raise TypeError(
        f"{cls.__name__} has no explicit field set: "
        "use a pydantic model, a dataclass or define __field_defaults__"
    )


def field_defaults(model: Any) -> Dict[str, Any]:
    """
    Проверяемые поля и их значения по умолчанию.

    Args:
        model: Экземпляр или класс модели

    Raises:
        TypeError: Если для типа нет явного набора полей
    """
    cls = model if isinstance(model, type) else type(model)
    return dict(_field_table(cls))


# =============================================================================
# ПРЕДИКАТЫ
# =============================================================================


def _is_default(value: Any, default: Any) -> bool:
    if default is None:
        return value is None
    return value == default


def _default_flags(model: Any, names: Names) -> Optional[Iterator[bool]]:
    """Ленивые флаги "поле равно default" или None, если ответ всегда False."""
    if model is None:
        return None

    wanted = None
    if names is not None:
        names = (names,) if isinstance(names, str) else tuple(names)
        if all_null_or_whitespace(names):
            return None
        wanted = frozenset(names)

    table = _field_table(type(model))
    return (
        _is_default(getattr(model, name), default)
        for name, default in table
        if wanted is None or name in wanted
    )


def all_properties_not_default(model: Any, names: Names = None) -> bool:
    """
    True если ни одно из проверяемых полей не равно значению по умолчанию.

    Args:
        model: Экземпляр модели (None -> False)
        names: Ограничение набора полей по имени (None -> все поля)
    """
    flags = _default_flags(model, names)
    if flags is None:
        return False
    return not any(flags)


def all_properties_default(model: Any, names: Names = None) -> bool:
    """
    True если все проверяемые поля равны значениям по умолчанию.

    Для model=None возвращает False (а не True).
    """
    flags = _default_flags(model, names)
    if flags is None:
        return False
    return all(flags)


def any_properties_not_default(model: Any, names: Names = None) -> bool:
    """True если хотя бы одно проверяемое поле отличается от значения по умолчанию."""
    flags = _default_flags(model, names)
    if flags is None:
        return False
    return not all(flags)


def any_properties_default(model: Any, names: Names = None) -> bool:
    """True если хотя бы одно проверяемое поле равно значению по умолчанию."""
    flags = _default_flags(model, names)
    if flags is None:
        return False
    return any(flags)


# =============================================================================
# ПОЭЛЕМЕНТНЫЕ ВАРИАНТЫ
# =============================================================================


def _freeze_names(names: Names) -> Optional[tuple[str, ...]]:
    # Генератор имён должен переживать обход нескольких моделей
    if names is None or isinstance(names, str):
        return names
    return tuple(names)


def all_properties_not_default_many(models: Optional[Iterable[Any]], names: Names = None) -> Iterator[bool]:
    if models is None:
        return iter(())
    names = _freeze_names(names)
    return (all_properties_not_default(m, names) for m in models)


def all_properties_default_many(models: Optional[Iterable[Any]], names: Names = None) -> Iterator[bool]:
    if models is None:
        return iter(())
    names = _freeze_names(names)
    return (all_properties_default(m, names) for m in models)


def any_properties_not_default_many(models: Optional[Iterable[Any]], names: Names = None) -> Iterator[bool]:
    if models is None:
        return iter(())
    names = _freeze_names(names)
    return (any_properties_not_default(m, names) for m in models)


def any_properties_default_many(models: Optional[Iterable[Any]], names: Names = None) -> Iterator[bool]:
    if models is None:
        return iter(())
    names = _freeze_names(names)
    return (any_properties_default(m, names) for m in models)
