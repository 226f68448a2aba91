#!/usr/bin/env python
import argparse
from pathlib import Path

from jominifmt.lexer import Lexer, dump_tokens


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the lexer's token stream for a script file")
    parser.add_argument("path", type=Path)
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8-sig")
    lexer = Lexer(text)
    tokens = lexer.lex()
    dump_tokens(tokens, text)
    for diagnostic in lexer.diagnostics:
        print(diagnostic)


if __name__ == "__main__":
    main()
