import pytest

from jominifmt.lexer import Lexer, Token, TokenFlags, TokenKind, token_text
from jominifmt.syntax import OPERATOR_KINDS, JominiSyntaxKind
from tests._debug import debug_dump_tokens
from tests._shared_cases import ALL_JOMINI_CASES, JominiCase, case_id


def lex(text: str, *, allow_multiline_strings: bool = False) -> list[Token]:
    tokens = Lexer(text, allow_multiline_strings=allow_multiline_strings).lex()
    debug_dump_tokens("lex", text, tokens)
    return tokens


def significant(text: str) -> list[tuple[TokenKind, str]]:
    return [
        (token.kind, token_text(text, token))
        for token in lex(text)
        if not token.kind.is_trivia and token.kind != TokenKind.EOF
    ]


@pytest.mark.parametrize("case", ALL_JOMINI_CASES, ids=case_id)
def test_token_texts_reproduce_source(case: JominiCase) -> None:
    tokens = Lexer(case.source, allow_multiline_strings=True).lex()
    debug_dump_tokens(case.name, case.source, tokens)

    assert tokens[-1].kind == TokenKind.EOF
    assert "".join(token_text(case.source, token) for token in tokens) == case.source


def test_key_value_tokens_and_trivia() -> None:
    src = "a = 1 # note\n"
    tokens = lex(src)

    assert [token.kind for token in tokens] == [
        TokenKind.IDENTIFIER,
        TokenKind.WHITESPACE,
        TokenKind.EQUAL,
        TokenKind.WHITESPACE,
        TokenKind.INT,
        TokenKind.WHITESPACE,
        TokenKind.COMMENT,
        TokenKind.NEWLINE,
        TokenKind.EOF,
    ]
    assert token_text(src, tokens[6]) == "# note"


def test_two_char_operators_win_over_single_char() -> None:
    src = "a==b c!=d e<=f g>=h i?=j k<l m>n"
    operators = [kind for kind, _ in significant(src) if kind != TokenKind.IDENTIFIER]

    assert operators == [
        TokenKind.EQUAL_EQUAL,
        TokenKind.NOT_EQUAL,
        TokenKind.LESS_THAN_OR_EQUAL,
        TokenKind.GREATER_THAN_OR_EQUAL,
        TokenKind.QUESTION_EQUAL,
        TokenKind.LESS_THAN,
        TokenKind.GREATER_THAN,
    ]


def test_numbers_dates_and_negative_values() -> None:
    assert significant("1.000") == [(TokenKind.FLOAT, "1.000")]
    assert significant("-1") == [(TokenKind.MINUS, "-"), (TokenKind.INT, "1")]
    assert significant("1821.1.1") == [
        (TokenKind.FLOAT, "1821.1"),
        (TokenKind.DOT, "."),
        (TokenKind.INT, "1"),
    ]


def test_parameter_markers_are_significant() -> None:
    src = "$PARAM$"
    tokens = lex(src)

    assert [token.kind for token in tokens[:-1]] == [
        TokenKind.SKIPPED,
        TokenKind.IDENTIFIER,
        TokenKind.SKIPPED,
    ]
    assert TokenKind.SKIPPED.is_trivia is False


def test_crlf_is_a_single_newline_token() -> None:
    src = "a\r\nb\rc\n"
    newlines = [token_text(src, token) for token in lex(src) if token.kind == TokenKind.NEWLINE]

    assert newlines == ["\r\n", "\r", "\n"]


def test_preceding_line_break_flag() -> None:
    src = "a b\n  c"
    tokens = [token for token in lex(src) if token.kind == TokenKind.IDENTIFIER]

    assert [token.has_preceding_line_break() for token in tokens] == [False, False, True]


def test_quoted_string_flags() -> None:
    src = r'"plain" "a\"b"'
    strings = [token for token in lex(src) if token.kind == TokenKind.STRING]

    assert len(strings) == 2
    assert strings[0].flags == TokenFlags.WAS_QUOTED
    assert strings[1].flags == TokenFlags.WAS_QUOTED | TokenFlags.HAS_ESCAPE
    assert token_text(src, strings[1]) == r'"a\"b"'


def test_comment_marker_inside_string_is_not_a_comment() -> None:
    src = 'a = "not # a comment"'
    kinds = [kind for kind, _ in significant(src)]

    assert TokenKind.COMMENT not in [token.kind for token in lex(src)]
    assert kinds == [TokenKind.IDENTIFIER, TokenKind.EQUAL, TokenKind.STRING]


def test_unterminated_string_stops_at_line_end() -> None:
    src = 'a = "open\nb = 2\n'
    lexer = Lexer(src)
    tokens = lexer.lex()

    strings = [token for token in tokens if token.kind == TokenKind.STRING]
    assert [token_text(src, token) for token in strings] == ['"open']
    assert [diagnostic.code for diagnostic in lexer.diagnostics] == ["LEXER_UNTERMINATED_STRING"]
    assert lexer.diagnostics[0].range.as_tuple() == (4, 9)


def test_multiline_string_spans_newlines_when_enabled() -> None:
    src = 'ooo="hello\n     world"\n'
    lexer = Lexer(src, allow_multiline_strings=True)
    tokens = lexer.lex()

    strings = [token_text(src, token) for token in tokens if token.kind == TokenKind.STRING]
    assert strings == ['"hello\n     world"']
    assert lexer.diagnostics == []


def test_unterminated_multiline_string_runs_to_end_of_input() -> None:
    src = 'a = "open\nb'
    lexer = Lexer(src, allow_multiline_strings=True)
    lexer.lex()

    assert [diagnostic.code for diagnostic in lexer.diagnostics] == ["LEXER_UNTERMINATED_STRING"]
    assert lexer.diagnostics[0].range.as_tuple() == (4, len(src))


def test_operator_kinds_are_shared_with_syntax_kinds() -> None:
    operators = {kind for kind in TokenKind if kind.is_operator}

    assert TokenKind.QUESTION_EQUAL in operators
    assert TokenKind.QUESTION not in operators
    assert {kind.name for kind in OPERATOR_KINDS} == {kind.name for kind in operators}
    assert all(kind.is_operator for kind in OPERATOR_KINDS)
    assert not JominiSyntaxKind.KEY_VALUE.is_operator
