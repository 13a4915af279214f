"""Разбиение последовательности на части фиксированного размера."""

from collections.abc import Sequence
from typing import Any, Iterable, Iterator, List, Optional

from src.yanlib.numeric.conversion import convert
from src.yanlib.numeric.types import INT


def chunk_by_size(items: Optional[Iterable[Any]], chunk_size: Any) -> Iterator[List[Any]]:
    """
    Ленивое разбиение на списки длиной не более chunk_size.

    Порядок сохраняется, последняя часть может быть короче. chunk_size
    приводится через convert(chunk_size, INT); None на входе или размер < 1
    дают пустую последовательность.

    Examples:
        >>> list(chunk_by_size([1, 2, 3, 4, 5], 2))
        [[1, 2], [3, 4], [5]]
        >>> list(chunk_by_size([1, 2, 3], "0"))
        []
    """
    size = convert(chunk_size, INT)
    if items is None or size < 1:
        return iter(())
    seq = items if isinstance(items, Sequence) else list(items)
    return (list(seq[start:start + size]) for start in range(0, len(seq), size))
