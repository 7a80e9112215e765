from __future__ import annotations
from typing import Any, List, Optional
import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

from json2csv.pipeline.types import MISSING

# Line terminator used when the caller does not pass one. Resolved once here
# so the rendering code never looks at the platform itself.
DEFAULT_NEW_LINE = os.linesep


class ConvertOptions(BaseModel):
    # Options for a single conversion; accepts both the camelCase names and
    # the snake_case attribute names.
    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    fields: Optional[List[Any]] = None
    field_names: Optional[List[Any]] = Field(default=None, alias="fieldNames")
    delimiter: str = Field(default=",", alias="del")
    default_value: Any = Field(default=MISSING, alias="defaultValue")
    quotes: str = Field(default='"')
    double_quotes: Optional[str] = Field(default=None, alias="doubleQuotes")
    has_csv_column_title: bool = Field(default=True, alias="hasCSVColumnTitle")
    eol: str = Field(default="")
    new_line: str = Field(default=DEFAULT_NEW_LINE, alias="newLine")
    flatten: bool = Field(default=False)
    unwind_path: Optional[str] = Field(default=None, alias="unwindPath")
    excel_strings: bool = Field(default=False, alias="excelStrings")
    include_empty_rows: bool = Field(default=False, alias="includeEmptyRows")

    @field_validator("delimiter", mode="before")
    @classmethod
    def _delimiter_fallback(cls, v):
        return v or ","

    @field_validator("new_line", mode="before")
    @classmethod
    def _new_line_fallback(cls, v):
        return v or DEFAULT_NEW_LINE

    @field_validator("eol", mode="before")
    @classmethod
    def _eol_fallback(cls, v):
        return v or ""

    @classmethod
    def option_names(cls) -> set:
        """All accepted option keys (attribute names and aliases)."""
        names = set(cls.model_fields)
        names.update(f.alias for f in cls.model_fields.values() if f.alias)
        return names
