import pytest

from jominifmt.cst import JOMINI_LANGUAGE, GreenNode, GreenToken, SourceFile, SyntaxNode, from_green
from jominifmt.format import (
    DELEGATE_TO_NEXT_CHILD,
    Alignment,
    BlockConfig,
    BlockTreeBuilder,
    ChildAttributes,
    FormatBlock,
    FormatSettings,
    Indent,
    LeafBlock,
    VerbatimBlock,
    build_block_tree,
    dump_block_tree,
    embedded_children,
    jomini_language,
)
from jominifmt.parser import parse, parse_result
from jominifmt.syntax import JominiSyntaxKind as K
from tests._blocks import block_tree, child_kinds, find_block, find_blocks, language_with
from tests._debug import debug_dump_blocks


def _jomini_root(source: str, settings: FormatSettings | None = None) -> FormatBlock:
    root = parse_result(source).block_root(settings)
    debug_dump_blocks("jomini_root", root)
    return root


def _syntax_nodes(node: SyntaxNode) -> list[SyntaxNode]:
    nodes = [node]
    for child in node.child_nodes():
        nodes.extend(_syntax_nodes(child))
    return nodes


def test_whitespace_and_empty_elements_produce_no_blocks() -> None:
    root = _jomini_root("a = {\n}\n")

    source_file = find_block(root, K.SOURCE_FILE)
    assert child_kinds(source_file) == [K.STATEMENT_LIST]
    assert child_kinds(find_block(root, K.BLOCK)) == [K.LBRACE, K.RBRACE]
    assert child_kinds(find_block(root, K.KEY_VALUE)) == [K.SCALAR, K.EQUAL, K.BLOCK]


def test_children_follow_source_order() -> None:
    statement_list = find_block(_jomini_root("a=1 # c\nb=2\nc"), K.STATEMENT_LIST)

    assert child_kinds(statement_list) == [K.KEY_VALUE, K.COMMENT, K.KEY_VALUE, K.SCALAR]
    starts = [child.text_range.start.value for child in statement_list.sub_blocks]
    assert starts == sorted(starts)


def test_scalars_and_tokens_become_leaves() -> None:
    key_value = find_block(_jomini_root("d=1444.11.11"), K.KEY_VALUE)
    key, operator, value = key_value.sub_blocks

    assert isinstance(key, VerbatimBlock)
    assert isinstance(operator, LeafBlock) and not isinstance(operator, VerbatimBlock)
    assert isinstance(value, VerbatimBlock)
    assert value.text == "1444.11.11"
    assert value.is_leaf and value.sub_blocks == ()


def test_block_contents_are_indented() -> None:
    block = find_block(_jomini_root("a = { # c\n  b = 1\n}"), K.BLOCK)

    indents = {child.kind: child.indent for child in block.sub_blocks}
    assert indents == {
        K.LBRACE: Indent.NONE,
        K.COMMENT: Indent.NORMAL,
        K.STATEMENT_LIST: Indent.NORMAL,
        K.RBRACE: Indent.NONE,
    }


def test_leading_comments_of_documented_construct_form_a_group() -> None:
    key_value = find_block(_jomini_root("# one\n# two\na=1 # trailing\nb=2"), K.KEY_VALUE)

    assert child_kinds(key_value) == [K.COMMENT, K.COMMENT, K.SCALAR, K.EQUAL, K.SCALAR]
    assert [child.comment_group_part for child in key_value.sub_blocks] == [True, True, False, False, False]

    statement_list = find_block(_jomini_root("# one\n# two\na=1 # trailing\nb=2"), K.STATEMENT_LIST)
    assert child_kinds(statement_list) == [K.KEY_VALUE, K.COMMENT, K.KEY_VALUE]
    trailing = statement_list.sub_blocks[1]
    assert trailing.kind == K.COMMENT
    assert trailing.comment_group_part is False


def test_comment_group_takes_configured_indent_and_alignment() -> None:
    configs = {
        K.STATEMENT_LIST: BlockConfig(alignment_keys=("doc",)),
        K.KEY_VALUE: BlockConfig(
            documented=True,
            comment_group_indent=Indent.NORMAL,
            comment_group_alignment="doc",
        ),
    }
    key_value = find_block(block_tree("# one\na=1", configs), K.KEY_VALUE)
    comment, key = key_value.sub_blocks[:2]

    assert comment.indent == Indent.NORMAL
    assert comment.alignment is key_value.known_alignments["doc"]
    assert key.indent == Indent.NONE
    assert key.alignment is None


def test_alignment_run_continues_while_statements_hold_together() -> None:
    statement_list = find_block(_jomini_root("a=1\nlong=2\n\nc=3\n", FormatSettings(align_assignments=True)), K.STATEMENT_LIST)
    first, second, third = statement_list.sub_blocks

    assert first.known_alignments["assignment"] is second.known_alignments["assignment"]
    assert third.known_alignments["assignment"] is not first.known_alignments["assignment"]
    assert first.known_alignments["assignment"].epoch == 0
    assert third.known_alignments["assignment"].epoch == 1

    operators = [key_value.sub_blocks[1] for key_value in (first, second, third)]
    assert [operator.alignment for operator in operators] == [
        first.known_alignments["assignment"],
        first.known_alignments["assignment"],
        third.known_alignments["assignment"],
    ]


def test_alignment_run_only_breaks_after_line_breaking_kinds() -> None:
    statement_list = find_block(_jomini_root("x\n\na=1\nb=2\n", FormatSettings(align_assignments=True)), K.STATEMENT_LIST)
    _, first, second = statement_list.sub_blocks

    assert first.known_alignments["assignment"].epoch == 0
    assert first.known_alignments["assignment"] is second.known_alignments["assignment"]


def test_without_alignment_keys_nothing_is_aligned() -> None:
    statement_list = find_block(_jomini_root("a=1\nb=2\n"), K.STATEMENT_LIST)

    for key_value in statement_list.sub_blocks:
        assert key_value.known_alignments == {}
        assert all(child.alignment is None for child in key_value.sub_blocks)


def test_child_hooks_replace_default_rules() -> None:
    marker = Alignment("custom", 0)
    calls: list[tuple[K, K | None]] = []

    def indent_everything(parent, child, previous) -> Indent:
        calls.append((child.kind, previous.kind if previous is not None else None))
        return Indent.NORMAL

    def align_values(parent, child, previous, known) -> Alignment | None:
        return marker if child.kind == K.SCALAR and previous is not None else None

    configs = {K.KEY_VALUE: BlockConfig(child_indent=indent_everything, child_alignment=align_values)}
    key_value = find_block(block_tree("a=b", configs), K.KEY_VALUE)

    assert [child.indent for child in key_value.sub_blocks] == [Indent.NORMAL] * 3
    assert [child.alignment for child in key_value.sub_blocks] == [None, None, marker]
    assert calls == [(K.SCALAR, None), (K.EQUAL, K.SCALAR), (K.SCALAR, K.EQUAL)]


def test_customize_hook_can_swap_blocks() -> None:
    seen: list[K] = []

    def keep_pairs_verbatim(parent, block, element):
        seen.append(element.kind)
        if element.kind == K.KEY_VALUE:
            return block.as_verbatim()
        return block

    configs = {K.STATEMENT_LIST: BlockConfig(customize=keep_pairs_verbatim)}
    statement_list = find_block(block_tree("a = 1  b=2\nc", configs), K.STATEMENT_LIST)

    assert seen == [K.KEY_VALUE, K.KEY_VALUE, K.SCALAR]
    first = statement_list.sub_blocks[0]
    assert isinstance(first, VerbatimBlock)
    assert first.text == "a = 1"


def test_error_nodes_are_kept_verbatim() -> None:
    result = parse_result("a=1 ?=oops\nb=2\n")
    statement_list = find_block(result.block_root(), K.STATEMENT_LIST)

    errors = [child for child in statement_list.sub_blocks if child.kind == K.ERROR]
    assert len(errors) == 1
    assert isinstance(errors[0], VerbatimBlock)
    assert errors[0].text == "?=oops"


def test_children_are_built_once() -> None:
    root = _jomini_root("a = { b = 1 }\n")
    statement_list = find_block(root, K.STATEMENT_LIST)

    first = statement_list.sub_blocks
    assert statement_list.sub_blocks is first
    assert find_block(root, K.STATEMENT_LIST) is statement_list
    assert find_blocks(root, K.BLOCK)[0] is find_blocks(root, K.BLOCK)[0]


def test_same_node_built_with_other_alignments_gets_its_own_children() -> None:
    syntax_root = parse_result("a=1\n").syntax_root()
    key_value = next(node for node in _syntax_nodes(syntax_root) if node.kind == K.KEY_VALUE)
    builder = BlockTreeBuilder(jomini_language())
    first = Alignment("assignment", 0)
    second = Alignment("assignment", 1)

    left = builder.generate(key_value, known_alignments={"assignment": first})
    right = builder.generate(key_value, known_alignments={"assignment": second})

    assert left.sub_blocks[1].alignment is first
    assert right.sub_blocks[1].alignment is second
    assert left.sub_blocks is left.sub_blocks


def test_verbatim_root_is_rejected() -> None:
    root = parse_result("a=1").syntax_root()

    with pytest.raises(ValueError):
        build_block_tree(root, language_with({K.ROOT: BlockConfig(verbatim=True)}))


def test_child_attributes() -> None:
    root = _jomini_root("a = {\n\tb = 1\n}\n")
    statement_list = find_blocks(root, K.STATEMENT_LIST)[1]

    assert statement_list.indent == Indent.NORMAL
    assert statement_list.child_attributes(0) == ChildAttributes(indent=Indent.NORMAL, alignment=None)
    assert statement_list.child_attributes(1) is DELEGATE_TO_NEXT_CHILD
    assert statement_list.child_attributes(1).is_delegated
    assert root.child_attributes(0) == ChildAttributes(indent=Indent.NONE, alignment=None)

    leaf = find_blocks(root, K.LBRACE)[0]
    assert leaf.child_attributes(0) == ChildAttributes(indent=Indent.NONE, alignment=None)
    assert leaf.get_spacing(None, leaf) is None


def test_composite_block_can_turn_verbatim() -> None:
    block = find_block(_jomini_root("a = { b = 1 }\n"), K.BLOCK)

    verbatim = block.as_verbatim()
    assert isinstance(verbatim, VerbatimBlock)
    assert verbatim.text == "{ b = 1 }"
    assert verbatim.text_range == block.text_range
    assert verbatim.indent == block.indent
    assert verbatim.is_leaf and not block.is_leaf
    assert not block.is_incomplete


def _host_file(placeholder_text: str, tail: str) -> tuple[SourceFile, GreenNode]:
    owner = SourceFile("<<" + placeholder_text + tail)
    host = GreenNode(
        K.ROOT,
        (
            GreenToken(K.SKIPPED, "<<"),
            GreenNode(K.OUTER_LANGUAGE_ELEMENT, (GreenToken(K.SKIPPED, placeholder_text),)),
            GreenToken(K.SKIPPED, tail),
        ),
    )
    return owner, host


def test_placeholder_takes_children_from_embedded_tree() -> None:
    owner, host = _host_file("a=1", " b=2>>")
    host_root = from_green(host, file=owner, language="host")
    from_green(parse("a=1 b=2").root, file=owner, start=2)
    placeholder = host_root.children[1]

    embedded = embedded_children(placeholder, JOMINI_LANGUAGE)
    assert [element.kind for element in embedded] == [K.KEY_VALUE]
    assert embedded[0].text == "a=1"

    host_block = build_block_tree(host_root, jomini_language())
    assert child_kinds(host_block) == [K.SKIPPED, K.OUTER_LANGUAGE_ELEMENT, K.SKIPPED]
    placeholder_block = host_block.sub_blocks[1]
    assert child_kinds(placeholder_block) == [K.KEY_VALUE]
    assert child_kinds(placeholder_block.sub_blocks[0]) == [K.SCALAR, K.EQUAL, K.SCALAR]


def test_placeholder_covering_whole_tree_takes_its_root() -> None:
    owner, host = _host_file("a=1", ">>")
    host_root = from_green(host, file=owner, language="host")
    jomini_root = from_green(parse("a=1").root, file=owner, start=2)

    assert embedded_children(host_root.children[1], JOMINI_LANGUAGE) == (jomini_root,)


def test_placeholder_without_embedded_tree_is_empty() -> None:
    owner, host = _host_file("a=1", ">>")
    host_root = from_green(host, file=owner, language="host")

    assert embedded_children(host_root.children[1], JOMINI_LANGUAGE) == ()
    host_block = build_block_tree(host_root, jomini_language())
    assert host_block.sub_blocks[1].sub_blocks == ()


def test_dump_block_tree_outlines_blocks_and_spacing() -> None:
    lines = dump_block_tree(_jomini_root("a=1")).splitlines()

    assert lines[0].startswith("FormatBlock(ROOT, 0..3)")
    assert any(line.strip() == "VerbatimBlock(SCALAR, 'a') indent=none" for line in lines)
    assert any(line.strip().startswith("LeafBlock(EQUAL, '=')") for line in lines)
    assert any(line.strip().startswith("~ ") for line in lines)
