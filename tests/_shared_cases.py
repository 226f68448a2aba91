"""Centralized Jomini source cases used across parser/format tests."""

from __future__ import annotations

from dataclasses import dataclass
import textwrap


@dataclass(frozen=True, slots=True)
class JominiCase:
    name: str
    source: str
    expected: str | None = None
    strict_should_parse_cleanly: bool = True


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


FORMAT_CASES: tuple[JominiCase, ...] = (
    JominiCase(
        name="normalizes_operator_spacing",
        source="a=1\nb  =   2\n",
        expected="a = 1\nb = 2\n",
    ),
    JominiCase(
        name="indents_multiline_block",
        source=_dedent(
            """
            flags={
            schools_initiated=1444.11.11
                mol_polish_march=1444.12.4
            }
            """
        ),
        expected="flags = {\n\tschools_initiated = 1444.11.11\n\tmol_polish_march = 1444.12.4\n}\n",
    ),
    JominiCase(
        name="single_line_block_stays_inline",
        source="color={118 99 151}",
        expected="color = { 118 99 151 }\n",
    ),
    JominiCase(
        name="nested_single_line_blocks",
        source="a={b={c=1}}\n",
        expected="a = { b = { c = 1 } }\n",
    ),
    JominiCase(
        name="blank_lines_are_capped",
        source="a = 1\n\n\n\nb = 2\n",
        expected="a = 1\n\nb = 2\n",
    ),
    JominiCase(
        name="doc_and_trailing_comments",
        source="# doc\na=1 # trailing\n\n# section\nb=2\n",
        expected="# doc\na = 1 # trailing\n\n# section\nb = 2\n",
    ),
    JominiCase(
        name="comments_anywhere_except_inside_quotes",
        source=_dedent(
            """
            my_obj = # this is going to be great
            { # my_key = prev_value
                my_key = value # better_value
                a = "not # a comment"
            } # the end
            """
        ),
        expected=(
            "my_obj = # this is going to be great\n"
            "{ # my_key = prev_value\n"
            "\tmy_key = value # better_value\n"
            '\ta = "not # a comment"\n'
            "} # the end\n"
        ),
    ),
    JominiCase(
        name="multiple_pairs_per_line",
        source="a=1 b=2 c=3\n",
        expected="a = 1 b = 2 c = 3\n",
    ),
    JominiCase(
        name="pairs_split_in_multiline_list",
        source="a=1 b=2\nc=3\n",
        expected="a = 1\nb = 2\nc = 3\n",
    ),
    JominiCase(
        name="empty_block_stays_empty",
        source="discovered_by={}\nempty = { }\n",
        expected="discovered_by = {}\nempty = {}\n",
    ),
    JominiCase(
        name="empty_multiline_block_keeps_its_break",
        source="a = {\n\n}\n",
        expected="a = {\n}\n",
    ),
    JominiCase(
        name="block_object_and_array_like_content",
        source=_dedent(
            """
            brittany_area = {
                color = { 118 99 151 }
                169 170 171 172 4384
            }
            """
        ),
        expected="brittany_area = {\n\tcolor = { 118 99 151 }\n\t169 170 171 172 4384\n}\n",
    ),
    JominiCase(
        name="tagged_block_value",
        source="color = rgb{ 100 200 150 }\n",
        expected="color = rgb { 100 200 150 }\n",
    ),
    JominiCase(
        name="array_of_objects_style_block",
        source=_dedent(
            """
            campaign_stats={ {
                id=0
            } {
                id=1
            } }
            """
        ),
        expected="campaign_stats = {\n\t{\n\t\tid = 0\n\t}\n\t{\n\t\tid = 1\n\t}\n}\n",
    ),
    JominiCase(
        name="scalars_print_as_written",
        source="ggg=1821.1.1\npos=@[1-leo_x]\nvalue=$AMOUNT$\n",
        expected="ggg = 1821.1.1\npos = @[1-leo_x]\nvalue = $AMOUNT$\n",
    ),
    JominiCase(
        name="crlf_line_endings_are_kept",
        source="a=1\r\nb={\r\nc=2\r\n}\r\n",
        expected="a = 1\r\nb = {\r\n\tc = 2\r\n}\r\n",
    ),
    JominiCase(
        name="empty_source",
        source="",
        expected="",
    ),
)

ALIGNED_FORMAT_CASES: tuple[JominiCase, ...] = (
    JominiCase(
        name="aligned_pairs_on_one_line",
        source="a=1 bb=2\n",
        expected="a = 1 bb = 2\n",
    ),
    JominiCase(
        name="aligned_inline_block",
        source="modifier = { factor = 2 is_x = yes }\n",
        expected="modifier = { factor = 2 is_x = yes }\n",
    ),
    JominiCase(
        name="aligned_run_ending_in_inline_block",
        source="a=1\nlonger=2\nx={b=1 cc=2}\n",
        expected="a      = 1\nlonger = 2\nx      = { b = 1 cc = 2 }\n",
    ),
)

PARSER_CASES: tuple[JominiCase, ...] = (
    JominiCase(name="repeated_key_is_valid", source='a = 1\nb = "hello"\na = 2\n'),
    JominiCase(
        name="common_scalar_examples",
        source=_dedent(
            """
            aaa=foo
            bbb=-1
            ccc=1.000
            ddd=yes
            eee=no
            fff="foo"
            ggg=1821.1.1
            """
        ),
    ),
    JominiCase(
        name="operator_variants",
        source=_dedent(
            """
            intrigue >= high_skill_rating
            age > 16
            count < 2
            scope:attacker.primary_title.tier <= tier_county
            a != b
            start_date == 1066.9.15
            c:RUS ?= this
            """
        ),
    ),
    JominiCase(name="implicit_block_assignment", source="foo{bar=qux}\n"),
    JominiCase(name="dense_boundary_characters", source='a={b="1"c=d}foo=bar#good\n'),
    JominiCase(name="multiline_quoted_scalar", source='ooo="hello\n     world"\n'),
    JominiCase(
        name="keys_are_scalars",
        source=_dedent(
            """
            -1=aaa
            "1821.1.1"=bbb
            @my_var="ccc"
            """
        ),
    ),
    JominiCase(
        name="quoted_scalar_escape_variants",
        source=_dedent(
            r"""
            hhh="a\"b"
            iii="\\"
            mmm="\\\""
            nnn="ab <0x15>D ( ID: 691 )<0x15>!"
            """
        ),
    ),
    JominiCase(name="many_empty_blocks_with_history_entry", source="history={{} {} 1629.11.10={core=AAA}}\n"),
    JominiCase(name="hidden_object_array_transition", source="levels={ 10 0=2 1=2 }\n"),
    JominiCase(name="non_ascii_unquoted_key", source="jean_jaurès = { }\n"),
    JominiCase(
        name="externally_tagged_object_array_types",
        source=_dedent(
            """
            color = rgb { 100 200 150 }
            color = hsv { 0.43 0.86 0.61 }
            color = hsv360{ 25 75 63 }
            mild_winter = LIST { 3700 3701 }
            """
        ),
    ),
    JominiCase(name="deeply_nested_objects", source="a={b={c={a={b={c=1}}}}}\n"),
    JominiCase(name="save_header_then_data", source="EU4txt\ndate=1444.12.4\n"),
    JominiCase(
        name="alternating_value_and_key_value",
        source=_dedent(
            """
            on_actions = {
              faith_holy_order_land_acquisition_pulse
              delay = { days = { 5 10 }}
              faith_heresy_events_pulse
              delay = { days = { 15 20 }}
            }
            """
        ),
    ),
    JominiCase(
        name="comment_runs_between_statements",
        source=_dedent(
            """
            # header

            # group start
            # group end
            x=1 # trailing comment
            # another
            y = 2

            # footer
            """
        ),
    ),
    JominiCase(
        name="semicolon_after_quoted_scalar",
        source='textureFile3 = "gfx//mapitems//trade_terrain.dds";\n',
        strict_should_parse_cleanly=False,
    ),
    JominiCase(
        name="extraneous_closing_brace_fails_in_strict_mode",
        source="a = { 1 }\n}\nb = 2\n",
        strict_should_parse_cleanly=False,
    ),
    JominiCase(
        name="missing_closing_brace_fails_in_strict_mode",
        source="a = { b=c\n",
        strict_should_parse_cleanly=False,
    ),
    JominiCase(
        name="recovery_between_valid_statements",
        source="a=1 ?=oops\nb=2\n",
        strict_should_parse_cleanly=False,
    ),
)

ALL_JOMINI_CASES: tuple[JominiCase, ...] = FORMAT_CASES + PARSER_CASES

CLEAN_JOMINI_CASES: tuple[JominiCase, ...] = tuple(case for case in ALL_JOMINI_CASES if case.strict_should_parse_cleanly)

CASE_BY_NAME: dict[str, JominiCase] = {case.name: case for case in ALL_JOMINI_CASES}


def case_source(name: str) -> str:
    return CASE_BY_NAME[name].source


def case_id(case: JominiCase) -> str:
    return case.name
