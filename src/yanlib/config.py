"""
Настройки библиотеки.

Переменные окружения не читаются: настройки передаются явно
(например, в setup_logging или load_numeric_types).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class LibrarySettings:
    """Конфигурация логирования и источника таблицы числовых типов.

    - log_level: уровень логов ("DEBUG" включает записи о проглоченных
      ошибках конверсии)
    - log_json: JSON-рендерер вместо консольного
    - numeric_types_path: альтернативный numeric_types.json (None = встроенный)
    """
    log_level: str = "WARNING"
    log_json: bool = False
    numeric_types_path: Optional[Path] = None

    def __post_init__(self):
        if not self.log_level or not self.log_level.strip():
            raise ValueError("log_level must be a non-empty level name")
