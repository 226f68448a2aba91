#!/usr/bin/env python
"""Print the formatting block tree of a script file with the spacing chosen between siblings."""

import argparse
from pathlib import Path

from jominifmt.format import FormatSettings, dump_block_tree
from jominifmt.parser import ParseMode, parse_result


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", type=Path)
    parser.add_argument("--mode", choices=[mode.value for mode in ParseMode], default=ParseMode.STRICT.value)
    parser.add_argument("--align-assignments", action="store_true")
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8-sig")
    result = parse_result(text, mode=ParseMode(args.mode), path=str(args.path))
    print(dump_block_tree(result.block_root(FormatSettings(align_assignments=args.align_assignments))))
    for diagnostic in result.diagnostics:
        print(diagnostic)


if __name__ == "__main__":
    main()
