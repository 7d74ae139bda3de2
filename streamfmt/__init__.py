"""streamfmt - template language for stream names and descriptions.

    from streamfmt import Context, parse, render

    template = parse('{stream.title}{stream.resolution::/^$|Unknown/[""||" {stream.resolution}"]}')
    render(template, Context(stream={"title": "Show", "resolution": "1080p"}))
    # -> "Show 1080p"
"""

from streamfmt.config import VERSION
from streamfmt.errors import (
    FormatterDefinitionError,
    StreamFormatError,
    TemplateParseError,
)
from streamfmt.formatter import FormatterDefinition, StreamFormatter, build_context, preview
from streamfmt.templates import Context, Template, parse, parse_cached, render

__version__ = VERSION

__all__ = [
    "Context",
    "FormatterDefinition",
    "FormatterDefinitionError",
    "StreamFormatError",
    "StreamFormatter",
    "Template",
    "TemplateParseError",
    "build_context",
    "parse",
    "parse_cached",
    "preview",
    "render",
]
