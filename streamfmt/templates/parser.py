"""Template parser.

Turns a formatter template string into a Template tree in a single
left-to-right pass. Branch templates are parsed in place by the same
routine, so a branch may hold placeholders with branches of their own.

Grammar:
    Template    := (Literal | Placeholder)*
    Placeholder := '{' Namespace '.' Property ( '::' Modifier )? '}'
    Modifier    := Comparator | Regex | Identifier
    Comparator  := ('>=' | '<=' | '>' | '<' | '=') Operand Branches
    Regex       := '/' pattern '/' Branches
    Branches    := '[' QuotedTemplate '||' QuotedTemplate ']'

Examples:
    {stream.title}
    {stream.size::size}
    {provider.cached::=true["Cached"||""]}
    {stream.season::>0["S{stream.season}"||""]}
    {stream.quality::/^$|Unknown/[""||" {stream.quality}"]}

Whitespace inside {} is insignificant; whitespace in literal text and in
branch bodies is kept. Inside a branch body \\" is a quote and \\\\ a
backslash. Top-level text has no escapes.
"""

import logging
import re

from streamfmt.config import Config
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
from streamfmt.templates.nodes import (
    Compare,
    CompareOp,
    Format,
    Literal,
    Modifier,
    Namespace,
    Node,
    Placeholder,
    Regex,
    Template,
)

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

NAMESPACES = {ns.value: ns for ns in Namespace}

# Longest operators first so '>=' is not read as '>' followed by '='
COMPARATORS = sorted(CompareOp, key=lambda op: len(op.value), reverse=True)

BRANCH_ESCAPES = {'"', "\\"}


class TemplateParser:
    """Recursive descent parser for formatter templates.

    Usage:
        parser = TemplateParser()
        template = parser.parse('{stream.title} {stream.size::size}')

    A parser instance holds per-call state and is not meant to be shared
    between threads; the module-level parse() creates one per call.
    """

    def __init__(self, max_depth: int | None = None):
        self.max_depth = Config.MAX_NESTING_DEPTH if max_depth is None else max_depth
        self._source = ""
        self._pos = 0

    def parse(self, source: str) -> Template:
        """Parse a template string.

        Raises:
            TemplateParseError: (a subclass) on any syntax error. No partial
                template is ever returned.
        """
        self._source = source
        self._pos = 0
        nodes = self._parse_sequence(depth=0, branch_start=None)
        return Template(nodes, source)

    # =========================================================================
    # Sequences (top level and branch bodies)
    # =========================================================================

    def _parse_sequence(self, depth: int, branch_start: int | None) -> tuple[Node, ...]:
        """Parse literals and placeholders until end of input or closing quote.

        branch_start is the offset of the opening quote when parsing a branch
        body, None at the top level.
        """
        src = self._source
        in_branch = branch_start is not None
        nodes: list[Node] = []
        text: list[str] = []

        while self._pos < len(src):
            ch = src[self._pos]

            if in_branch:
                if ch == "\\" and self._pos + 1 < len(src) and src[self._pos + 1] in BRANCH_ESCAPES:
                    text.append(src[self._pos + 1])
                    self._pos += 2
                    continue
                if ch == '"':
                    break

            if ch == "{":
                if text:
                    nodes.append(Literal("".join(text)))
                    text = []
                nodes.append(self._parse_placeholder(depth))
                continue

            text.append(ch)
            self._pos += 1
        else:
            if in_branch:
                raise UnterminatedBranchError(
                    "Unterminated branch: missing closing '\"'", src, branch_start
                )

        if text:
            nodes.append(Literal("".join(text)))
        return tuple(nodes)

    # =========================================================================
    # Placeholders
    # =========================================================================

    def _parse_placeholder(self, depth: int) -> Placeholder:
        start = self._pos
        self._pos += 1  # '{'

        self._skip_whitespace()
        ns_start = self._pos
        ns_name = self._read_identifier()
        if not ns_name:
            raise self._placeholder_error(start, "Expected namespace")
        namespace = NAMESPACES.get(ns_name)
        if namespace is None:
            raise UnknownNamespaceError(
                f"Unknown namespace '{ns_name}' (expected stream, provider or addon)",
                self._source,
                ns_start,
            )

        self._skip_whitespace()
        if not self._peek("."):
            raise self._placeholder_error(start, "Expected '.' after namespace")
        self._pos += 1

        self._skip_whitespace()
        prop = self._read_identifier()
        if not prop:
            raise self._placeholder_error(start, "Expected property name")

        modifier: Modifier | None = None
        true_branch = false_branch = None

        self._skip_whitespace()
        if self._peek("::"):
            self._pos += 2
            self._skip_whitespace()
            modifier, true_branch, false_branch = self._parse_modifier(start, depth)
            self._skip_whitespace()

        if not self._peek("}"):
            raise self._placeholder_error(start, "Expected '}'")
        self._pos += 1

        return Placeholder(
            namespace=namespace,
            property=prop,
            modifier=modifier,
            true_branch=true_branch,
            false_branch=false_branch,
            position=start,
        )

    def _parse_modifier(
        self, start: int, depth: int
    ) -> tuple[Modifier, Template | None, Template | None]:
        src = self._source
        mod_start = self._pos

        if self._pos >= len(src):
            raise UnterminatedPlaceholderError("Unterminated placeholder", src, start)

        if self._peek("/"):
            modifier: Modifier = Regex(self._scan_regex(start))
        else:
            op = next((op for op in COMPARATORS if self._peek(op.value)), None)
            if op is not None:
                self._pos += len(op.value)
                modifier = Compare(op, self._scan_operand(start, mod_start))
            else:
                name = self._read_identifier()
                if not name:
                    raise InvalidOperatorError(
                        f"Invalid modifier starting with '{src[mod_start]}'", src, mod_start
                    )
                self._skip_whitespace()
                if self._peek("["):
                    raise InvalidOperatorError(
                        f"Formatter '{name}' cannot take branches; "
                        "use a comparison or /regex/ to branch",
                        src,
                        mod_start,
                    )
                return Format(name), None, None

        self._skip_whitespace()
        if not self._peek("["):
            raise MissingBranchesError(
                f"Modifier '{modifier}' requires branches [\"...\"||\"...\"]", src, mod_start
            )
        true_branch, false_branch = self._parse_branches(depth)
        return modifier, true_branch, false_branch

    def _scan_regex(self, start: int) -> str:
        """Read /pattern/ up to the first unescaped '/' followed by '['."""
        src = self._source
        open_pos = self._pos
        i = open_pos + 1
        saw_close = False

        while i < len(src):
            ch = src[i]
            if ch == "\\":
                i += 2
                continue
            if ch == "/":
                saw_close = True
                j = i + 1
                while j < len(src) and src[j].isspace():
                    j += 1
                if j < len(src) and src[j] == "[":
                    pattern = src[open_pos + 1 : i]
                    self._pos = i + 1
                    return pattern
            i += 1

        if saw_close:
            raise MissingBranchesError(
                "Regex modifier requires branches [\"...\"||\"...\"]", src, open_pos
            )
        if "}" not in src[open_pos:]:
            raise UnterminatedPlaceholderError(
                "Unterminated placeholder: regex runs to end of input", src, start
            )
        raise MalformedPlaceholderError("Unterminated regex pattern", src, open_pos)

    def _scan_operand(self, start: int, mod_start: int) -> str:
        """Read the raw comparison operand up to '['."""
        src = self._source
        operand_start = self._pos
        while self._pos < len(src) and src[self._pos] not in "[}":
            self._pos += 1

        if self._pos >= len(src):
            raise UnterminatedPlaceholderError("Unterminated placeholder", src, start)
        if src[self._pos] == "}":
            raise MissingBranchesError(
                "Comparison modifier requires branches [\"...\"||\"...\"]", src, mod_start
            )
        return src[operand_start : self._pos].strip()

    # =========================================================================
    # Branches
    # =========================================================================

    def _parse_branches(self, depth: int) -> tuple[Template, Template]:
        src = self._source
        bracket_start = self._pos
        self._pos += 1  # '['

        self._skip_whitespace()
        true_branch = self._parse_branch(depth + 1, bracket_start)

        self._skip_whitespace()
        if not self._peek("||"):
            raise self._branches_error(bracket_start, "Expected '||' between branches")
        self._pos += 2

        self._skip_whitespace()
        false_branch = self._parse_branch(depth + 1, bracket_start)

        self._skip_whitespace()
        if not self._peek("]"):
            raise self._branches_error(bracket_start, "Expected ']' after branches")
        self._pos += 1

        return true_branch, false_branch

    def _parse_branch(self, depth: int, bracket_start: int) -> Template:
        src = self._source
        if not self._peek('"'):
            raise self._branches_error(bracket_start, "Expected quoted branch template")
        if depth > self.max_depth:
            raise NestingTooDeepError(
                f"Branches nested deeper than {self.max_depth} levels", src, self._pos
            )

        quote_start = self._pos
        self._pos += 1
        nodes = self._parse_sequence(depth, branch_start=quote_start)
        self._pos += 1  # closing '"'
        return Template(nodes, src[quote_start + 1 : self._pos - 1])

    # =========================================================================
    # Helpers
    # =========================================================================

    def _peek(self, token: str) -> bool:
        return self._source.startswith(token, self._pos)

    def _skip_whitespace(self) -> None:
        src = self._source
        while self._pos < len(src) and src[self._pos].isspace():
            self._pos += 1

    def _read_identifier(self) -> str:
        match = IDENTIFIER_PATTERN.match(self._source, self._pos)
        if not match:
            return ""
        self._pos = match.end()
        return match.group(0)

    def _placeholder_error(self, start: int, message: str) -> TemplateParseError:
        """Unterminated if input ran out, malformed otherwise."""
        if self._pos >= len(self._source):
            return UnterminatedPlaceholderError(
                "Unterminated placeholder: missing '}'", self._source, start
            )
        return MalformedPlaceholderError(message, self._source, self._pos)

    def _branches_error(self, bracket_start: int, message: str) -> TemplateParseError:
        if self._pos >= len(self._source):
            return MalformedBranchesError(
                "Unterminated branches: missing ']'", self._source, bracket_start
            )
        return MalformedBranchesError(message, self._source, self._pos)


def parse(source: str, max_depth: int | None = None) -> Template:
    """Parse a template string into a Template.

    For repeated parsing of the same strings use parse_cached() instead.
    """
    try:
        return TemplateParser(max_depth=max_depth).parse(source)
    except TemplateParseError as e:
        logger.debug("[PARSE] %s (%s) in %r", e.message, e.code, source[:80])
        raise
