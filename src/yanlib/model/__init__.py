"""
Model inspection.

Проверка полей моделей (pydantic, dataclasses) на значения по умолчанию.
"""

from .properties import (
    all_properties_default,
    all_properties_default_many,
    all_properties_not_default,
    all_properties_not_default_many,
    any_properties_default,
    any_properties_default_many,
    any_properties_not_default,
    any_properties_not_default_many,
    default_for_annotation,
    field_defaults,
)

__all__ = [
    "all_properties_not_default",
    "all_properties_default",
    "any_properties_not_default",
    "any_properties_default",
    "all_properties_not_default_many",
    "all_properties_default_many",
    "any_properties_not_default_many",
    "any_properties_default_many",
    "default_for_annotation",
    "field_defaults",
]
