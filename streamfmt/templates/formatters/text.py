"""Text case formatters.

Work on the canonical text of any value; absent renders as "".
"""

from streamfmt.templates.context import ResolvedValue
from streamfmt.templates.formatters.registry import Category, register_formatter


@register_formatter(
    name="upper",
    category=Category.TEXT,
    description="Uppercase text (e.g., 'webdl' -> 'WEBDL')",
)
def format_upper(value: ResolvedValue) -> str:
    return value.as_text().upper()


@register_formatter(
    name="lower",
    category=Category.TEXT,
    description="Lowercase text (e.g., 'BluRay' -> 'bluray')",
)
def format_lower(value: ResolvedValue) -> str:
    return value.as_text().lower()


@register_formatter(
    name="title",
    category=Category.TEXT,
    description="Title case text (e.g., 'the office' -> 'The Office')",
)
def format_title(value: ResolvedValue) -> str:
    return value.as_text().title()
