"""Tests for the template parser.

Covers the node tree produced for each placeholder form, whitespace
rules, branch escapes, canonical text, and every parse error code with
its reported offset.
"""

import pytest

from streamfmt.errors import (
    InvalidOperatorError,
    MalformedBranchesError,
    MalformedPlaceholderError,
    MissingBranchesError,
    NestingTooDeepError,
    TemplateParseError,
    UnknownNamespaceError,
    UnterminatedBranchError,
    UnterminatedPlaceholderError,
)
from streamfmt.templates import (
    Compare,
    CompareOp,
    Format,
    Literal,
    Namespace,
    Placeholder,
    Regex,
    Template,
    TemplateParser,
    parse,
)


def nested(levels: int) -> str:
    """Template whose branches nest `levels` deep."""
    inner = "x"
    for _ in range(levels):
        inner = '{stream.a::>0["' + inner + '"||""]}'
    return inner


# =============================================================================
# LITERALS AND PLAIN PLACEHOLDERS
# =============================================================================


class TestLiterals:
    """Plain text becomes literal nodes."""

    def test_empty_source(self):
        assert parse("").nodes == ()

    def test_plain_text_is_one_literal(self):
        assert parse("Hello, world").nodes == (Literal("Hello, world"),)

    def test_whitespace_in_text_is_kept(self):
        assert parse("  a \t b  ").nodes == (Literal("  a \t b  "),)

    def test_quotes_and_backslashes_are_literal_at_top_level(self):
        source = 'say "hi" \\n ] || }'
        assert parse(source).nodes == (Literal(source),)

    def test_source_is_kept(self):
        assert parse("{stream.title}!").source == "{stream.title}!"


class TestPlaceholders:
    """Placeholder references without modifiers."""

    def test_bare_placeholder(self):
        assert parse("{stream.title}").nodes == (Placeholder(Namespace.STREAM, "title"),)

    @pytest.mark.parametrize("namespace", ["stream", "provider", "addon"])
    def test_all_namespaces(self, namespace):
        (node,) = parse("{" + namespace + ".name}").nodes
        assert node.namespace == Namespace(namespace)

    def test_camel_case_property(self):
        (node,) = parse("{stream.releaseGroup}").nodes
        assert node.property == "releaseGroup"

    def test_unknown_property_is_accepted(self):
        (node,) = parse("{stream.somethingNew}").nodes
        assert node.property == "somethingNew"

    def test_text_around_placeholders(self):
        assert parse("[{stream.title}] {addon.name}").nodes == (
            Literal("["),
            Placeholder(Namespace.STREAM, "title"),
            Literal("] "),
            Placeholder(Namespace.ADDON, "name"),
        )

    def test_whitespace_inside_braces_is_ignored(self):
        assert parse("{ stream . title }") == parse("{stream.title}")
        assert parse("{stream.size :: size}") == parse("{stream.size::size}")

    def test_position_is_recorded(self):
        nodes = parse("ab{stream.title}").nodes
        assert nodes[1].position == 2


# =============================================================================
# MODIFIERS
# =============================================================================


class TestModifiers:
    """Format, comparison and regex modifiers."""

    def test_format_modifier(self):
        (node,) = parse("{stream.size::size}").nodes
        assert node.modifier == Format("size")
        assert node.true_branch is None
        assert node.false_branch is None

    @pytest.mark.parametrize(
        "token,op",
        [
            (">=", CompareOp.GE),
            ("<=", CompareOp.LE),
            (">", CompareOp.GT),
            ("<", CompareOp.LT),
            ("=", CompareOp.EQ),
        ],
    )
    def test_comparators(self, token, op):
        (node,) = parse("{stream.season::" + token + '9["a"||"b"]}').nodes
        assert node.modifier == Compare(op, "9")
        assert node.true_branch == Template((Literal("a"),))
        assert node.false_branch == Template((Literal("b"),))

    def test_operand_is_stripped(self):
        (node,) = parse('{provider.cached::= true ["y"||"n"]}').nodes
        assert node.modifier == Compare(CompareOp.EQ, "true")

    def test_empty_operand(self):
        (node,) = parse('{stream.title::=["y"||"n"]}').nodes
        assert node.modifier == Compare(CompareOp.EQ, "")

    def test_regex_modifier(self):
        (node,) = parse('{stream.resolution::/^$|Unknown/[""||" {stream.resolution}"]}').nodes
        assert node.modifier == Regex("^$|Unknown")
        assert node.true_branch == Template()
        assert node.false_branch == Template(
            (Literal(" "), Placeholder(Namespace.STREAM, "resolution"))
        )

    def test_regex_with_escaped_slash(self):
        (node,) = parse(r'{stream.filename::/a\/b/["y"||"n"]}').nodes
        assert node.modifier == Regex(r"a\/b")

    def test_regex_may_contain_braces(self):
        (node,) = parse(r'{stream.year::/^\d{4}$/["y"||"n"]}').nodes
        assert node.modifier == Regex(r"^\d{4}$")

    def test_whitespace_around_branches(self):
        (node,) = parse('{stream.season::>0 [ "a" || "b" ] }').nodes
        assert node.true_branch == Template((Literal("a"),))
        assert node.false_branch == Template((Literal("b"),))


# =============================================================================
# BRANCHES
# =============================================================================


class TestBranches:
    """Quoted branch bodies, nesting and escapes."""

    def test_nested_placeholder_in_branch(self):
        (node,) = parse('{stream.season::>0["{stream.season}"||""]}').nodes
        assert node.true_branch == Template((Placeholder(Namespace.STREAM, "season"),))

    def test_nested_branches_with_their_own_quotes(self):
        (outer,) = parse('{stream.a::>0["<{stream.b::=x["yes"||"no"]}>"||""]}').nodes
        lt, inner, gt = outer.true_branch.nodes
        assert lt == Literal("<") and gt == Literal(">")
        assert inner.modifier == Compare(CompareOp.EQ, "x")
        assert inner.true_branch == Template((Literal("yes"),))
        assert inner.false_branch == Template((Literal("no"),))

    def test_whitespace_in_branch_is_kept(self):
        (node,) = parse('{stream.a::>0["  a  "||" "]}').nodes
        assert node.true_branch == Template((Literal("  a  "),))
        assert node.false_branch == Template((Literal(" "),))

    def test_escaped_quote_and_backslash(self):
        (node,) = parse(r'{stream.a::>0["say \"hi\" \\o/"||""]}').nodes
        assert node.true_branch == Template((Literal('say "hi" \\o/'),))

    def test_other_backslashes_are_literal(self):
        (node,) = parse(r'{stream.a::>0["\d"||""]}').nodes
        assert node.true_branch == Template((Literal("\\d"),))

    def test_branch_source(self):
        (node,) = parse('{stream.season::>0["S{stream.season}"||""]}').nodes
        assert node.true_branch.source == "S{stream.season}"

    def test_depth(self):
        assert parse("{stream.title}").depth == 0
        assert parse(nested(3)).depth == 3


# =============================================================================
# CANONICAL TEXT
# =============================================================================


class TestCanonicalText:
    """str() of a parsed tree."""

    @pytest.mark.parametrize(
        "source",
        [
            "plain text",
            "{stream.title}",
            "{stream.size::size}",
            '{stream.season::>0["S{stream.season}"||""]}',
            '{stream.quality::/^$|Unknown/[""||" {stream.quality}"]}',
            '{provider.cached::=true["\u2713 Cached"||""]} {stream.size::size}',
        ],
    )
    def test_str_reproduces_canonical_source(self, source):
        assert str(parse(source)) == source

    def test_str_normalizes_whitespace_inside_braces(self):
        assert str(parse('{ stream.season :: >0 [ "a" || "" ] }')) == '{stream.season::>0["a"||""]}'

    def test_str_escapes_branch_quotes(self):
        source = r'{stream.a::>0["\"q\""||""]}'
        assert str(parse(source)) == source
        assert parse(str(parse(source))) == parse(source)


# =============================================================================
# ERRORS
# =============================================================================


class TestParseErrors:
    """Error class, code and offset for bad templates."""

    def test_unterminated_branch(self):
        source = '{stream.season::>0["missing bracket'
        with pytest.raises(UnterminatedBranchError) as exc_info:
            parse(source)
        assert exc_info.value.code == "unterminated_branch"
        assert exc_info.value.position == source.index('"')

    def test_unterminated_placeholder(self):
        with pytest.raises(UnterminatedPlaceholderError) as exc_info:
            parse("abc {stream.title")
        assert exc_info.value.position == 4
        assert exc_info.value.byte_offset == 4

    def test_regex_running_to_end_of_input(self):
        with pytest.raises(UnterminatedPlaceholderError) as exc_info:
            parse("x {stream.title::/abc")
        assert exc_info.value.code == "unterminated_placeholder"
        assert exc_info.value.position == 2

    def test_lone_brace(self):
        with pytest.raises(UnterminatedPlaceholderError):
            parse("50% {")

    def test_byte_offset_counts_utf8_bytes(self):
        with pytest.raises(UnterminatedPlaceholderError) as exc_info:
            parse("\u2713 {stream.title")
        assert exc_info.value.position == 2
        assert exc_info.value.byte_offset == 4
        assert "offset 4" in str(exc_info.value)

    def test_unknown_namespace(self):
        with pytest.raises(UnknownNamespaceError) as exc_info:
            parse("x{movie.title}")
        assert exc_info.value.position == 2
        assert "movie" in exc_info.value.message

    @pytest.mark.parametrize(
        "source",
        ["{stream.season::>0}", "{stream.season::>=0 }", "{stream.title::/abc/}"],
    )
    def test_missing_branches(self, source):
        with pytest.raises(MissingBranchesError):
            parse(source)

    @pytest.mark.parametrize(
        "source",
        [
            '{stream.size::size["a"||"b"]}',
            '{stream.season::!=3["a"||"b"]}',
            "{stream.title::}",
        ],
    )
    def test_invalid_operator(self, source):
        with pytest.raises(InvalidOperatorError):
            parse(source)

    @pytest.mark.parametrize(
        "source",
        [
            '{stream.a::>0["a" "b"]}',
            "{stream.a::>0[a||b]}",
            '{stream.a::>0["a"||"b"}',
            '{stream.a::>0["a"||',
        ],
    )
    def test_malformed_branches(self, source):
        with pytest.raises(MalformedBranchesError):
            parse(source)

    @pytest.mark.parametrize(
        "source",
        ["{stream}", "{stream.}", "{stream.title extra}", "{.title}", "{stream.title::/abc}"],
    )
    def test_malformed_placeholder(self, source):
        with pytest.raises(MalformedPlaceholderError):
            parse(source)

    def test_error_in_nested_branch_reports_global_offset(self):
        source = '{stream.a::>0["ok {bogus.x}"||""]}'
        with pytest.raises(UnknownNamespaceError) as exc_info:
            parse(source)
        assert exc_info.value.position == source.index("bogus")

    def test_all_errors_share_a_base_class(self):
        for source in ["{", "{x.y}", "{stream.a::>0}", '{stream.a::>0["']:
            with pytest.raises(TemplateParseError):
                parse(source)


class TestNestingLimit:
    """Branch depth limit at parse time."""

    def test_within_limit(self):
        assert TemplateParser(max_depth=3).parse(nested(3)).depth == 3

    def test_beyond_limit(self):
        with pytest.raises(NestingTooDeepError):
            TemplateParser(max_depth=2).parse(nested(3))

    def test_default_limit_allows_32_levels(self):
        assert parse(nested(32)).depth == 32
        with pytest.raises(NestingTooDeepError):
            parse(nested(33))


# =============================================================================
# NODE INVARIANTS
# =============================================================================


class TestNodeInvariants:
    """Placeholder construction checks."""

    def test_branching_modifier_requires_both_branches(self):
        with pytest.raises(ValueError):
            Placeholder(Namespace.STREAM, "a", Compare(CompareOp.GT, "0"), Template(), None)

    def test_format_modifier_rejects_branches(self):
        with pytest.raises(ValueError):
            Placeholder(Namespace.STREAM, "a", Format("size"), Template(), Template())

    def test_bare_placeholder_rejects_branches(self):
        with pytest.raises(ValueError):
            Placeholder(Namespace.STREAM, "a", None, Template(), Template())

    def test_unsupported_modifier_type(self):
        with pytest.raises(TypeError):
            Placeholder(Namespace.STREAM, "a", "size")
