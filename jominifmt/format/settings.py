"""Style settings threaded through block building and rendering."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import StrEnum
from pathlib import Path
import tomllib
from typing import Any

CONFIG_TABLE = ("tool", "jominifmt")


class IndentStyle(StrEnum):
    TAB = "tab"
    SPACE = "space"


@dataclass(frozen=True, slots=True)
class FormatSettings:
    """User-facing style options.

    The block engine never inspects these; per-construct configuration and
    the renderer do.
    """

    indent_style: IndentStyle = IndentStyle.TAB
    indent_width: int = 4
    tab_width: int = 4
    keep_blank_lines: int = 1
    insert_final_newline: bool = True
    align_assignments: bool = False
    format_with_errors: bool = False

    def __post_init__(self):
        if self.indent_width < 1:
            raise ValueError("indent_width must be >= 1")
        if self.tab_width < 1:
            raise ValueError("tab_width must be >= 1")
        if self.keep_blank_lines < 0:
            raise ValueError("keep_blank_lines cannot be negative")

    @property
    def indent_unit(self) -> str:
        if self.indent_style == IndentStyle.TAB:
            return "\t"
        return " " * self.indent_width

    @property
    def indent_columns(self) -> int:
        """Display width of one indent level."""
        if self.indent_style == IndentStyle.TAB:
            return self.tab_width
        return self.indent_width

    @staticmethod
    def from_mapping(mapping: Mapping[str, Any]) -> "FormatSettings":
        """Build settings from a config table; keys may use `-` or `_`."""
        known = {field.name: field for field in fields(FormatSettings)}
        values: dict[str, Any] = {}
        for raw_key, value in mapping.items():
            key = raw_key.replace("-", "_")
            if key not in known:
                raise ValueError(f"Unknown format setting: {raw_key!r}")
            values[key] = _coerce_setting(key, value)
        return FormatSettings(**values)


def load_format_settings(path: str | Path) -> FormatSettings:
    """Read the `[tool.jominifmt]` table of a TOML file.

    A file without the table yields default settings.
    """
    with Path(path).open("rb") as handle:
        data = tomllib.load(handle)

    table: Any = data
    for part in CONFIG_TABLE:
        if not isinstance(table, dict) or part not in table:
            return FormatSettings()
        table = table[part]

    if not isinstance(table, dict):
        raise ValueError(f"[{'.'.join(CONFIG_TABLE)}] must be a table")
    return FormatSettings.from_mapping(table)


def _coerce_setting(key: str, value: Any) -> Any:
    if key == "indent_style":
        if isinstance(value, IndentStyle):
            return value
        try:
            return IndentStyle(str(value))
        except ValueError:
            raise ValueError(f"indent_style must be one of {[style.value for style in IndentStyle]}") from None

    if key in ("indent_width", "tab_width", "keep_blank_lines"):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{key} must be an integer")
        return value

    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a boolean")
    return value
