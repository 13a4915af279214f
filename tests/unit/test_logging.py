"""
Тесты для настройки логирования и конфигурации библиотеки
"""

import importlib
import json
from pathlib import Path
from typing import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from src.yanlib.config import LibrarySettings
from src.yanlib.numeric import BYTE, INT, convert, parse, random_number
from src.yanlib.sequences import clean_in_place
from src.yanlib.utils import get_logger, setup_logging
from src.yanlib.utils import logging as yanlib_logging


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Возврат к настройкам по умолчанию после каждого теста"""
    yield
    setup_logging(LibrarySettings())


# =============================================================================
# TESTS: SETTINGS
# =============================================================================


class TestLibrarySettings:
    """Тесты LibrarySettings"""

    def test_defaults(self) -> None:
        settings = LibrarySettings()

        assert settings.log_level == "WARNING"
        assert settings.log_json is False
        assert settings.numeric_types_path is None

    @pytest.mark.parametrize("level", ["", "   "])
    def test_blank_level_rejected(self, level: str) -> None:
        with pytest.raises(ValueError, match="log_level"):
            LibrarySettings(log_level=level)

    def test_frozen(self) -> None:
        settings = LibrarySettings(numeric_types_path=Path("types.json"))

        with pytest.raises(AttributeError):
            settings.log_level = "DEBUG"


# =============================================================================
# TESTS: LOG EVENTS
# =============================================================================


class TestLogEvents:
    """Тесты записей о проглоченных ошибках"""

    @pytest.fixture(autouse=True)
    def debug_level(self) -> None:
        """DEBUG-записи отбрасываются до capture_logs при уровне WARNING"""
        setup_logging(LibrarySettings(log_level="DEBUG"))

    def test_conversion_failure_logged(self) -> None:
        with capture_logs() as logs:
            assert convert(300, BYTE) == 0

        assert logs[0]["event"] == "conversion_failed"
        assert logs[0]["target"] == "byte"
        assert logs[0]["log_level"] == "debug"

    def test_parse_failure_logged(self) -> None:
        with capture_logs() as logs:
            parse("abc", INT)

        assert [entry["event"] for entry in logs] == ["parse_failed"]

    def test_success_not_logged(self) -> None:
        with capture_logs() as logs:
            convert(5, INT)

        assert logs == []

    def test_rejected_bound_logged(self) -> None:
        with capture_logs() as logs:
            random_number(BYTE, 0, 300)

        assert logs[0]["event"] == "random_bound_rejected"

    def test_cleaning_logged(self) -> None:
        items = ["a", None]
        with capture_logs() as logs:
            clean_in_place(items)

        assert logs[0]["event"] == "collection_cleaned"
        assert logs[0]["removed"] == 1


# =============================================================================
# TESTS: RENDERING
# =============================================================================


class TestSetupLogging:
    """Тесты рендеринга и фильтрации"""

    def test_default_level_hides_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(LibrarySettings())
        convert("abc", INT)

        assert capsys.readouterr().err == ""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(LibrarySettings(log_level="DEBUG", log_json=True))
        convert("abc", INT)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "conversion_failed"
        assert record["level"] == "debug"
        assert record["module"] == "src.yanlib.numeric.conversion"
        assert "timestamp" in record

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(LibrarySettings(log_level="debug"))
        get_logger("tests").warning("something_happened", answer=42)

        err = capsys.readouterr().err
        assert "something_happened" in err
        assert "answer=42" in err


class TestHostConfiguration:
    """Тесты невмешательства в конфигурацию приложения"""

    def test_import_does_not_configure_structlog(self) -> None:
        """Повторный импорт модуля логирования не вызывает structlog.configure"""
        structlog.reset_defaults()
        importlib.reload(yanlib_logging)

        assert not structlog.is_configured()

    def test_host_info_events_survive_import(self) -> None:
        """INFO-записи приложения не отфильтровываются после импорта библиотеки"""
        structlog.reset_defaults()
        importlib.reload(yanlib_logging)

        with capture_logs() as logs:
            structlog.get_logger().info("app_info_event")

        assert [entry["event"] for entry in logs] == ["app_info_event"]

    def test_records_carry_module_name(self) -> None:
        setup_logging(LibrarySettings(log_level="DEBUG"))

        with capture_logs() as logs:
            convert("abc", INT)

        assert logs[0]["module"] == "src.yanlib.numeric.conversion"
