"""`jominifmt` command line entrypoint."""

from __future__ import annotations

import argparse
import codecs
from collections import Counter
from collections.abc import Sequence
import difflib
import logging
from pathlib import Path
import sys

from tqdm import tqdm

from jominifmt.diagnostics import Diagnostic
from jominifmt.format import FormatSettings, load_format_settings, run_format
from jominifmt.parser import ParseMode, parse_result
from jominifmt.text import line_column

logger = logging.getLogger("jominifmt")

EXIT_OK = 0
EXIT_CHANGED = 1
EXIT_ERROR = 2

SOURCE_SUFFIXES = (".txt", ".gui", ".gfx", ".asset")


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jominifmt", description="Format Jomini/Clausewitz script files")
    parser.add_argument("paths", nargs="+", type=Path, help="Files or directories to format")
    parser.add_argument("--check", action="store_true", help="Report files that would change; write nothing")
    parser.add_argument("--diff", action="store_true", help="Print a unified diff instead of writing")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [tool.jominifmt] table")
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ParseMode],
        default=ParseMode.STRICT.value,
        help="Parser mode (default: strict)",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bars")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeatable)")
    return parser


def collect_paths(paths: Sequence[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(
                sorted(child for child in path.rglob("*") if child.is_file() and child.suffix in SOURCE_SUFFIXES)
            )
        else:
            files.append(path)
    return files


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _report(path: Path, text: str, diagnostics: Sequence[Diagnostic]) -> None:
    for diagnostic in diagnostics:
        line, column = line_column(text, diagnostic.range.start)
        log = logger.error if diagnostic.is_error else logger.warning
        log("%s:%d:%d: %s %s", path, line, column, diagnostic.code, diagnostic.message)
        if diagnostic.hint:
            logger.info("hint: %s", diagnostic.hint)


def _load_settings(config: Path | None) -> FormatSettings:
    if config is None:
        default = Path("pyproject.toml")
        if not default.is_file():
            return FormatSettings()
        config = default
    return load_format_settings(config)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_argument_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = _load_settings(args.config)
    except (OSError, ValueError) as error:
        logger.error("invalid configuration: %s", error)
        return EXIT_ERROR

    mode = ParseMode(args.mode)
    files = collect_paths(args.paths)
    exit_code = EXIT_OK
    outcomes: Counter[str] = Counter()

    iterator = files if args.no_progress or len(files) < 2 else tqdm(files, desc="format", unit="file")
    for path in iterator:
        try:
            raw = path.read_bytes()
            encoding = "utf-8-sig" if raw.startswith(codecs.BOM_UTF8) else "utf-8"
            text = raw.decode(encoding)
        except (OSError, UnicodeDecodeError) as error:
            logger.error("cannot read %s: %s", path, error)
            exit_code = EXIT_ERROR
            continue

        parsed = parse_result(text, mode=mode, path=str(path))
        result = run_format(text, parse=parsed, settings=settings)
        _report(path, text, result.diagnostics)

        if result.skipped:
            outcomes["skipped"] += 1
            continue

        if not result.changed:
            outcomes["unchanged"] += 1
            continue

        if args.diff:
            sys.stdout.writelines(
                difflib.unified_diff(
                    text.splitlines(keepends=True),
                    result.formatted_text.splitlines(keepends=True),
                    fromfile=str(path),
                    tofile=str(path),
                )
            )

        if args.check or args.diff:
            logger.info("would reformat %s", path)
            outcomes["would reformat"] += 1
            if args.check and exit_code == EXIT_OK:
                exit_code = EXIT_CHANGED
            continue

        path.write_text(result.formatted_text, encoding=encoding, newline="")
        logger.info("reformatted %s", path)
        outcomes["reformatted"] += 1

    if outcomes:
        logger.info("%s", ", ".join(f"{count} {outcome}" for outcome, count in sorted(outcomes.items())))

    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
