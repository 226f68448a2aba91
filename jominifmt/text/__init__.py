"""Text offsets and ranges."""

from jominifmt.text.text import (
    TextRange,
    TextSize,
    count_line_breaks,
    line_column,
    slice_text_range,
)

__all__ = [
    "TextRange",
    "TextSize",
    "count_line_breaks",
    "line_column",
    "slice_text_range",
]
