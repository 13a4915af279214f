"""
Тесты для очистки и разбиения коллекций

Проверяет:
1. Правила фильтрации по типу элементов
2. Очистку на месте для list, deque и set
3. Разбиение на части фиксированного размера
"""

from collections import deque
from decimal import Decimal
from typing import Iterator, List, Optional, Union

import pytest

from src.yanlib.sequences import chunk_by_size, clean, clean_in_place, clean_list


class Item:
    """Произвольный ссылочный тип"""


class Code(str):
    """Подкласс str"""


# =============================================================================
# TESTS: CLEAN
# =============================================================================


class TestClean:
    """Тесты ленивой и жадной очистки"""

    def test_strings(self) -> None:
        """Удаляются None, пустые и пробельные строки"""
        assert clean_list(["a", None, "", "  ", "b"], str) == ["a", "b"]

    def test_mixed_input(self) -> None:
        """Тип не указан: None и пустые строки удаляются, прочее остаётся"""
        item = Item()

        assert clean_list([0, None, "", "x", item, " \t"]) == [0, "x", item]

    def test_value_types_untouched(self) -> None:
        """Значимые типы не фильтруются, нули остаются"""
        assert clean_list([0, 1, 2], int) == [0, 1, 2]
        assert clean_list([0.0, False], float) == [0.0, False]
        assert clean_list([Decimal(0)], Decimal) == [Decimal(0)]

    def test_reference_types(self) -> None:
        """Ссылочные типы: удаляются только None"""
        first, second = Item(), Item()

        assert clean_list([first, None, second], Item) == [first, second]
        assert clean_list([[], None, [1]], list) == [[], [1]]

    @pytest.mark.parametrize("item_type", [Optional[int], int | None, Union[int, float, None]])
    def test_optional_value_type(self, item_type) -> None:
        """Optional[int]: None удаляются, нули остаются"""
        assert list(clean([1, None, 0, 2], item_type)) == [1, 0, 2]

    def test_optional_str(self) -> None:
        """Optional[str]: удаляются None и пустые строки"""
        assert clean_list(["a", None, " ", "b"], Optional[str]) == ["a", "b"]
        assert clean_list(["a", "", 0, None], Union[str, int]) == ["a", 0]

    def test_generic_alias(self) -> None:
        """List[int] и прочие конструкции typing: удаляются None"""
        assert clean_list([[1], None, []], List[int]) == [[1], []]
        assert clean_list([[1], None], list[int]) == [[1]]

    def test_str_subclass(self) -> None:
        assert clean_list([Code("A"), Code(" "), None], Code) == ["A"]

    def test_none_input(self) -> None:
        assert list(clean(None)) == []
        assert clean_list(None, str) == []

    def test_source_not_modified(self) -> None:
        source = ["a", None]
        clean_list(source, str)

        assert source == ["a", None]

    def test_lazy(self) -> None:
        """Элементы фильтруются при обходе"""
        seen = []

        def source() -> Iterator[str]:
            for text in ["a", "", "b"]:
                seen.append(text)
                yield text

        result = clean(source(), str)
        assert seen == []
        assert next(result) == "a"
        assert seen == ["a"]


# =============================================================================
# TESTS: CLEAN IN PLACE
# =============================================================================


class TestCleanInPlace:
    """Тесты очистки на месте"""

    def test_list(self) -> None:
        items = ["a", None, "", "b", "  ", None]
        clean_in_place(items, str)

        assert items == ["a", "b"]

    def test_list_identity_preserved(self) -> None:
        items = [None, None]
        ref = items
        clean_in_place(items)

        assert ref is items
        assert items == []

    def test_deque(self) -> None:
        items = deque([1, None, 2])
        clean_in_place(items, object)

        assert items == deque([1, 2])

    def test_set(self) -> None:
        items = {"a", "", " ", None}
        clean_in_place(items)

        assert items == {"a"}

    def test_optional_value_type(self) -> None:
        items = [0, None, 3, None]
        clean_in_place(items, Optional[int])

        assert items == [0, 3]

    def test_optional_value_type_set(self) -> None:
        items = {1, None}
        clean_in_place(items, int | None)

        assert items == {1}

    def test_value_types_untouched(self) -> None:
        items = [0, 0, 1]
        clean_in_place(items, int)

        assert items == [0, 0, 1]

    def test_none_is_ignored(self) -> None:
        clean_in_place(None)

    @pytest.mark.parametrize("items", [("a", None), frozenset({"a"}), "abc", {"a": None}])
    def test_immutable_rejected(self, items) -> None:
        """Неизменяемые коллекции: TypeError"""
        with pytest.raises(TypeError, match="in place"):
            clean_in_place(items)


# =============================================================================
# TESTS: CHUNKING
# =============================================================================


class TestChunkBySize:
    """Тесты разбиения на части"""

    def test_even_split(self) -> None:
        assert list(chunk_by_size([1, 2, 3, 4], 2)) == [[1, 2], [3, 4]]

    def test_last_chunk_shorter(self) -> None:
        assert list(chunk_by_size([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]

    def test_size_larger_than_input(self) -> None:
        assert list(chunk_by_size([1, 2], 10)) == [[1, 2]]

    def test_chunks_are_lists(self) -> None:
        """Части всегда списки, даже для строк и кортежей"""
        assert list(chunk_by_size("abcde", 2)) == [["a", "b"], ["c", "d"], ["e"]]
        assert list(chunk_by_size((1, 2, 3), 2)) == [[1, 2], [3]]

    def test_iterator_input(self) -> None:
        assert list(chunk_by_size(iter(range(5)), 3)) == [[0, 1, 2], [3, 4]]

    @pytest.mark.parametrize("size", [0, -1, "0", "abc", None, 2**40])
    def test_invalid_size(self, size) -> None:
        """Размер < 1 или неприводимый к int: пусто"""
        assert list(chunk_by_size([1, 2, 3], size)) == []

    def test_size_converted(self) -> None:
        assert list(chunk_by_size([1, 2, 3], "2")) == [[1, 2], [3]]
        assert list(chunk_by_size([1, 2, 3], 1.5)) == [[1, 2], [3]]

    def test_none_and_empty_input(self) -> None:
        assert list(chunk_by_size(None, 2)) == []
        assert list(chunk_by_size([], 2)) == []
