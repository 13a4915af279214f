"""
Sequence helpers.

Очистка коллекций от None и пустых строк, разбиение на части.
"""

from .chunking import chunk_by_size
from .cleaning import clean, clean_in_place, clean_list

__all__ = [
    "chunk_by_size",
    "clean",
    "clean_in_place",
    "clean_list",
]
