"""Render context.

Holds the three property namespaces a template can reference. Values are
tagged with a ValueKind when resolved so comparison and formatting rules
never depend on implicit coercion.
"""

import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Any

from streamfmt.templates.nodes import Namespace

# Plain decimal or scientific notation. Excludes nan/inf which float() accepts.
NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


class ValueKind(Enum):
    """Kind tag carried by every resolved value."""

    NUMBER = auto()
    STRING = auto()
    BOOLEAN = auto()
    ABSENT = auto()


@dataclass(frozen=True)
class ResolvedValue:
    """A context value after lookup, tagged with its kind."""

    kind: ValueKind
    value: Any = None

    @property
    def is_absent(self) -> bool:
        return self.kind is ValueKind.ABSENT

    def as_text(self) -> str:
        """Canonical string form (absent -> empty string)."""
        if self.kind is ValueKind.ABSENT:
            return ""
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.value else "false"
        if self.kind is ValueKind.NUMBER:
            return format_number(self.value)
        return self.value

    def as_number(self) -> float | int | None:
        """Numeric view of the value, or None when it has none.

        Numeric strings count as numbers; booleans do not.
        """
        if self.kind is ValueKind.NUMBER:
            return self.value
        if self.kind is ValueKind.STRING:
            return parse_number(self.value)
        return None


ABSENT = ResolvedValue(ValueKind.ABSENT)


def parse_number(text: str) -> float | int | None:
    """Parse a numeric literal, returning None for anything else."""
    text = text.strip()
    if not NUMBER_PATTERN.match(text):
        return None
    try:
        return int(text)
    except ValueError:
        value = float(text)
        return value if math.isfinite(value) else None


def format_number(value: float | int) -> str:
    """Render a number without trailing zeros (5.0 -> '5', 2.50 -> '2.5')."""
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return format(value, ".15g")
    return str(value)


def classify(value: Any) -> ResolvedValue:
    """Tag a raw context value with its kind.

    None is absent. bool is checked before int since bool subclasses int.
    Sequences are flattened to a space-joined string. NaN and infinities
    have no canonical form and are treated as absent.
    """
    if value is None:
        return ABSENT
    if isinstance(value, bool):
        return ResolvedValue(ValueKind.BOOLEAN, value)
    if isinstance(value, int):
        return ResolvedValue(ValueKind.NUMBER, value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return ABSENT
        return ResolvedValue(ValueKind.NUMBER, value)
    if isinstance(value, str):
        return ResolvedValue(ValueKind.STRING, value)
    if isinstance(value, Sequence):
        parts = [classify(item).as_text() for item in value]
        return ResolvedValue(ValueKind.STRING, " ".join(part for part in parts if part))
    return ResolvedValue(ValueKind.STRING, str(value))


def _freeze(values: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True)
class Context:
    """Per-render snapshot of namespaced property values.

    Usage:
        ctx = Context(
            stream={"title": "Show", "season": 1, "resolution": "1080p"},
            provider={"cached": True},
        )
        ctx.resolve(Namespace.STREAM, "season")  # ResolvedValue(NUMBER, 1)
    """

    stream: Mapping[str, Any] = field(default_factory=dict)
    provider: Mapping[str, Any] = field(default_factory=dict)
    addon: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Copy into read-only views so the caller's dicts can't change under a render
        object.__setattr__(self, "stream", _freeze(self.stream))
        object.__setattr__(self, "provider", _freeze(self.provider))
        object.__setattr__(self, "addon", _freeze(self.addon))

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any] | None]) -> "Context":
        """Build from {"stream": {...}, "provider": {...}, "addon": {...}}."""
        return cls(
            stream=data.get("stream") or {},
            provider=data.get("provider") or {},
            addon=data.get("addon") or {},
        )

    def namespace(self, namespace: Namespace) -> Mapping[str, Any]:
        if namespace is Namespace.STREAM:
            return self.stream
        if namespace is Namespace.PROVIDER:
            return self.provider
        return self.addon

    def resolve(self, namespace: Namespace, prop: str) -> ResolvedValue:
        """Look up a property; unknown properties resolve to absent."""
        return classify(self.namespace(namespace).get(prop))
