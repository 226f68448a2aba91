"""Shared parse carriers and lazy pipeline entrypoint exports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jominifmt.parser.options import ParseMode, ParserOptions
from jominifmt.pipeline.result import JominiParseResult, ParseResultBase
from jominifmt.pipeline.results import FormatRunResult

if TYPE_CHECKING:
    from jominifmt.format.settings import FormatSettings


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: JominiParseResult | None = None,
    settings: FormatSettings | None = None,
) -> FormatRunResult:
    from jominifmt.format.runner import run_format as _run_format

    return _run_format(text, options=options, mode=mode, parse=parse, settings=settings)


__all__ = [
    "FormatRunResult",
    "JominiParseResult",
    "ParseResultBase",
    "run_format",
]
