from .errors import ConfigError, Json2CsvError, LineParseError, TypeKindError
from .pipeline.types import MISSING, ComputedField, PathField
from .api import convert

__all__ = [
    "convert",
    "PathField",
    "ComputedField",
    "MISSING",
    "Json2CsvError",
    "TypeKindError",
    "ConfigError",
    "LineParseError",
]
