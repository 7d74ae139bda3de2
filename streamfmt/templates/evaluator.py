"""Template evaluator.

Walks a parsed Template against a Context and produces the output string.
Rendering never raises: missing properties render as "", unknown
formatters render the raw value, invalid regexes take the false branch.
Those fallbacks are reported as diagnostics (see diagnostics.py).

Output is never re-parsed, so a property value containing '{' is plain text.
"""

import logging
import re

from streamfmt.config import Config
from streamfmt.templates import formatters
from streamfmt.templates.conditions import RegexCache, compare, get_regex_cache, regex_matches
from streamfmt.templates.context import Context, ResolvedValue
from streamfmt.templates.diagnostics import DiagnosticCode, RenderDiagnostic, report
from streamfmt.templates.nodes import Compare, Format, Literal, Placeholder, Regex, Template

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Renders parsed templates.

    Usage:
        renderer = TemplateRenderer()
        template = parse("{stream.title} {stream.size::size}")
        renderer.render(template, Context(stream={"title": "Show", "size": 1024}))
        # -> "Show 1.00 KB"

    The renderer holds no per-render state, so one instance can be shared.
    """

    def __init__(
        self,
        registry: formatters.FormatterRegistry | None = None,
        regex_cache: RegexCache | None = None,
        max_depth: int | None = None,
    ) -> None:
        self._registry = registry or formatters.get_registry()
        self._regex_cache = regex_cache or get_regex_cache()
        self._max_depth = Config.MAX_NESTING_DEPTH if max_depth is None else max_depth

    def render(
        self,
        template: Template,
        context: Context,
        diagnostics: list[RenderDiagnostic] | None = None,
    ) -> str:
        """Render a template to a string.

        Args:
            template: Parsed template
            context: Property values for this render
            diagnostics: Optional list that collects render-time anomalies

        Returns:
            Rendered text
        """
        return self._render(template, context, diagnostics, depth=0)

    def _render(
        self,
        template: Template,
        context: Context,
        diagnostics: list[RenderDiagnostic] | None,
        depth: int,
    ) -> str:
        parts: list[str] = []
        for node in template.nodes:
            if isinstance(node, Literal):
                parts.append(node.text)
            else:
                parts.append(self._render_placeholder(node, context, diagnostics, depth))
        return "".join(parts)

    def _render_placeholder(
        self,
        node: Placeholder,
        context: Context,
        diagnostics: list[RenderDiagnostic] | None,
        depth: int,
    ) -> str:
        value = context.resolve(node.namespace, node.property)
        modifier = node.modifier

        if modifier is None:
            return value.as_text()

        if isinstance(modifier, Format):
            return self._apply_formatter(node, modifier, value, diagnostics)

        if isinstance(modifier, Compare):
            matched = compare(value, modifier)
        else:
            matched = self._regex_matches(node, modifier, value, diagnostics)

        if depth >= self._max_depth:
            report(
                diagnostics,
                DiagnosticCode.NESTING_TOO_DEEP,
                f"Branches nested deeper than {self._max_depth} levels",
                node,
            )
            return ""

        branch = node.true_branch if matched else node.false_branch
        return self._render(branch, context, diagnostics, depth + 1)

    def _regex_matches(
        self,
        node: Placeholder,
        modifier: Regex,
        value: ResolvedValue,
        diagnostics: list[RenderDiagnostic] | None,
    ) -> bool:
        try:
            return regex_matches(value, modifier, self._regex_cache)
        except re.error as e:
            report(
                diagnostics,
                DiagnosticCode.INVALID_REGEX,
                f"Invalid regex /{modifier.pattern}/: {e}",
                node,
            )
            return False

    def _apply_formatter(
        self,
        node: Placeholder,
        modifier: Format,
        value: ResolvedValue,
        diagnostics: list[RenderDiagnostic] | None,
    ) -> str:
        formatter = self._registry.get(modifier.name)
        if formatter is None:
            report(
                diagnostics,
                DiagnosticCode.UNKNOWN_FORMATTER,
                f"Unknown formatter '{modifier.name}' (available: "
                f"{', '.join(self._registry.names())}), rendering raw value",
                node,
            )
            return value.as_text()

        try:
            return formatter(value)
        except Exception as e:
            # Formatters are meant to be total; a broken one must not break the render
            report(
                diagnostics,
                DiagnosticCode.FORMATTER_FAILED,
                f"Formatter '{modifier.name}' failed: {e}",
                node,
            )
            return value.as_text()


# Default singleton
_renderer: TemplateRenderer | None = None


def get_renderer() -> TemplateRenderer:
    """Get the default renderer."""
    global _renderer
    if _renderer is None:
        _renderer = TemplateRenderer()
    return _renderer


def render(
    template: Template,
    context: Context,
    diagnostics: list[RenderDiagnostic] | None = None,
) -> str:
    """Render a template with the default renderer."""
    return get_renderer().render(template, context, diagnostics)
