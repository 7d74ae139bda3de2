"""Named formatters module.

Importing this module registers all built-in formatters via decorators.
Each formatter file defines functions decorated with @register_formatter.
"""

from streamfmt.templates.formatters import size, text  # noqa: F401 - side effect imports
from streamfmt.templates.formatters.registry import (
    Category,
    FormatterFunc,
    FormatterRegistry,
    RegisteredFormatter,
    get_registry,
    register_formatter,
)

__all__ = [
    "Category",
    "FormatterFunc",
    "FormatterRegistry",
    "RegisteredFormatter",
    "get_registry",
    "register_formatter",
]
