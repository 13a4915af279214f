"""JSON Schema контракты для данных, которые библиотека читает с диска."""

from .validators import (
    SCHEMA_DIR,
    ContractValidator,
    NumericTypeTableValidator,
    SchemaLoader,
    validate_numeric_type_table,
)

__all__ = [
    "SCHEMA_DIR",
    "SchemaLoader",
    "ContractValidator",
    "NumericTypeTableValidator",
    "validate_numeric_type_table",
]
