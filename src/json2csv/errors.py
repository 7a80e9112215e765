from __future__ import annotations


class Json2CsvError(Exception):
    """Base class for conversion failures."""


class TypeKindError(Json2CsvError, TypeError):
    """Input data is neither an object nor an array."""


class ConfigError(Json2CsvError, ValueError):
    """Options or field specs cannot be resolved."""


class LineParseError(Json2CsvError, ValueError):
    """A line of line-delimited JSON could not be decoded."""

    def __init__(self, lineno: int, message: str):
        super().__init__(f"line {lineno}: {message}")
        self.lineno = lineno
