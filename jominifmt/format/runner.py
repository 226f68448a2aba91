"""Format runner over a shared Jomini parse result."""

from __future__ import annotations

import logging

from jominifmt.diagnostics import FORMAT_SKIPPED_PARSE_ERRORS, diagnostic_from_spec, has_errors, sort_diagnostics
from jominifmt.format.jomini import jomini_language
from jominifmt.format.render import render_block_tree
from jominifmt.format.settings import FormatSettings
from jominifmt.parser import ParseMode, ParserOptions, parse_result
from jominifmt.pipeline.result import JominiParseResult
from jominifmt.pipeline.results import FormatRunResult
from jominifmt.text import TextRange

logger = logging.getLogger(__name__)


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: JominiParseResult | None = None,
    settings: FormatSettings | None = None,
) -> FormatRunResult:
    """Run formatting from a single parse lifecycle.

    Text with error diagnostics is returned unchanged unless
    `settings.format_with_errors` is set.
    """
    resolved_parse = _resolve_parse(text, options=options, mode=mode, parse=parse)
    resolved_settings = settings if settings is not None else FormatSettings()
    source_text = resolved_parse.source_text
    diagnostics = list(resolved_parse.diagnostics)

    if has_errors(diagnostics) and not resolved_settings.format_with_errors:
        logger.info("skipping %s: %d parse diagnostics", resolved_parse.path or "<text>", len(diagnostics))
        diagnostics.append(diagnostic_from_spec(FORMAT_SKIPPED_PARSE_ERRORS, TextRange.from_offsets(0, 0)))
        return FormatRunResult(
            parse=resolved_parse,
            formatted_text=source_text,
            diagnostics=sort_diagnostics(diagnostics),
            changed=False,
        )

    root = resolved_parse.block_root(resolved_settings)
    formatted_text = render_block_tree(root, resolved_settings, jomini_language(resolved_settings))
    changed = formatted_text != source_text
    logger.debug("formatted %s (changed=%s)", resolved_parse.path or "<text>", changed)

    return FormatRunResult(
        parse=resolved_parse,
        formatted_text=formatted_text,
        diagnostics=diagnostics,
        changed=changed,
    )


def _resolve_parse(
    text: str,
    *,
    options: ParserOptions | None,
    mode: ParseMode | None,
    parse: JominiParseResult | None,
) -> JominiParseResult:
    if parse is not None:
        if options is not None or mode is not None:
            raise ValueError("Pass either parse or options/mode, not both")
        return parse
    return parse_result(text, options=options, mode=mode)
