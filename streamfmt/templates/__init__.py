"""Template expression language.

Templates are literal text with embedded placeholders that reference
stream, provider and addon properties:

    {stream.title} {stream.season::>0["S{stream.season}"||""]}
    {stream.size::size}
    {stream.quality::/^$|Unknown/[""||" {stream.quality}"]}

Parse once with parse() (or parse_cached()), render many times with
render() against a Context.
"""

from streamfmt.templates.cache import TemplateCache, get_template_cache, parse_cached
from streamfmt.templates.conditions import RegexCache, compare, regex_matches
from streamfmt.templates.context import Context, ResolvedValue, ValueKind
from streamfmt.templates.diagnostics import DiagnosticCode, RenderDiagnostic
from streamfmt.templates.evaluator import TemplateRenderer, get_renderer, render
from streamfmt.templates.formatters import (
    FormatterRegistry,
    get_registry,
    register_formatter,
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
from streamfmt.templates.parser import TemplateParser, parse

__all__ = [
    # Tree
    "Compare",
    "CompareOp",
    "Format",
    "Literal",
    "Modifier",
    "Namespace",
    "Node",
    "Placeholder",
    "Regex",
    "Template",
    # Parsing
    "TemplateParser",
    "parse",
    "TemplateCache",
    "get_template_cache",
    "parse_cached",
    # Rendering
    "Context",
    "ResolvedValue",
    "ValueKind",
    "TemplateRenderer",
    "get_renderer",
    "render",
    "DiagnosticCode",
    "RenderDiagnostic",
    # Conditions
    "RegexCache",
    "compare",
    "regex_matches",
    # Formatters
    "FormatterRegistry",
    "get_registry",
    "register_formatter",
]
