"""Formatter registry and registration decorator.

This module provides the central registry for named formatters, the
functions behind {namespace.property::name} placeholders. Formatters are
registered using the @register_formatter decorator, which captures
metadata alongside the function.

Every formatter must be total: absent or malformed input returns "" or a
documented fallback, never raises.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from streamfmt.templates.context import ResolvedValue

# Type alias for formatter functions
FormatterFunc = Callable[[ResolvedValue], str]


class Category(Enum):
    """Formatter categories for organization and documentation."""

    NUMERIC = auto()  # size
    TEXT = auto()  # upper, lower, title


@dataclass(frozen=True)
class RegisteredFormatter:
    """Complete definition of a named formatter."""

    name: str
    category: Category
    func: FormatterFunc
    description: str = ""

    def __call__(self, value: ResolvedValue) -> str:
        return self.func(value)


class FormatterRegistry:
    """Singleton lookup table from formatter name to RegisteredFormatter.

    Filled at import time by @register_formatter; the renderer only reads it.
    """

    _instance: "FormatterRegistry | None" = None
    _formatters: dict[str, RegisteredFormatter]

    def __new__(cls) -> "FormatterRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._formatters = {}
        return cls._instance

    def register(
        self,
        name: str,
        category: Category,
        func: FormatterFunc,
        description: str = "",
    ) -> None:
        """Register a formatter. Re-registering a name replaces it."""
        self._formatters[name] = RegisteredFormatter(name, category, func, description)

    def get(self, name: str) -> RegisteredFormatter | None:
        return self._formatters.get(name)

    def names(self) -> list[str]:
        """Registered names, sorted."""
        return sorted(self._formatters)


def register_formatter(
    name: str,
    category: Category,
    description: str = "",
) -> Callable[[FormatterFunc], FormatterFunc]:
    """Decorator to register a formatter function.

    Usage:
        @register_formatter(
            name="upper",
            category=Category.TEXT,
            description="Uppercase text",
        )
        def format_upper(value: ResolvedValue) -> str:
            return value.as_text().upper()
    """

    def decorator(func: FormatterFunc) -> FormatterFunc:
        FormatterRegistry().register(name, category, func, description)
        return func

    return decorator


def get_registry() -> FormatterRegistry:
    """Get the singleton formatter registry."""
    return FormatterRegistry()
