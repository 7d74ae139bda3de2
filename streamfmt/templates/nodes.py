"""Parsed template tree.

A Template is an immutable sequence of Literal and Placeholder nodes.
Placeholders with a branching modifier (Compare, Regex) own two nested
Templates; placeholders with a Format modifier or no modifier own none.

    {stream.season::>0["S{stream.season}"||""]}

    Placeholder(
        namespace=Namespace.STREAM,
        property="season",
        modifier=Compare(op=CompareOp.GT, operand="0"),
        true_branch=Template((Literal("S"), Placeholder(STREAM, "season"))),
        false_branch=Template(()),
    )
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class Namespace(str, Enum):
    """Property groups a placeholder can reference."""

    STREAM = "stream"
    PROVIDER = "provider"
    ADDON = "addon"


class CompareOp(str, Enum):
    """Comparison operators, longest token first for scanning."""

    GE = ">="
    LE = "<="
    GT = ">"
    LT = "<"
    EQ = "="


@dataclass(frozen=True)
class Format:
    """Named formatter applied to the raw value (e.g. 'size')."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Compare:
    """Comparison against a literal operand; selects a branch."""

    op: CompareOp
    operand: str

    def __str__(self) -> str:
        return f"{self.op.value}{self.operand}"


@dataclass(frozen=True)
class Regex:
    """Case-sensitive search anywhere in the value; selects a branch."""

    pattern: str

    def __str__(self) -> str:
        return f"/{self.pattern}/"


Modifier = Union[Format, Compare, Regex]


@dataclass(frozen=True)
class Literal:
    """Text passed through unchanged."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Template:
    """Ordered, immutable node sequence.

    `source` is the text the template was parsed from (empty for trees
    built by hand); it does not take part in equality.
    """

    nodes: tuple["Node", ...] = ()
    source: str = field(default="", compare=False)

    def __iter__(self):
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def depth(self) -> int:
        """Deepest branch nesting below this template (0 = no branches)."""
        deepest = 0
        for node in self.nodes:
            if isinstance(node, Placeholder) and node.has_branches:
                deepest = max(deepest, 1 + node.true_branch.depth, 1 + node.false_branch.depth)
        return deepest

    def placeholders(self) -> list["Placeholder"]:
        """All placeholders in this template and its branches, in source order."""
        found: list[Placeholder] = []
        for node in self.nodes:
            if isinstance(node, Placeholder):
                found.append(node)
                if node.has_branches:
                    found.extend(node.true_branch.placeholders())
                    found.extend(node.false_branch.placeholders())
        return found

    def __str__(self) -> str:
        return "".join(str(node) for node in self.nodes)

    def branch_text(self) -> str:
        """Canonical text of this template as the body of a quoted branch."""
        parts = []
        for node in self.nodes:
            if isinstance(node, Literal):
                parts.append(node.text.replace("\\", "\\\\").replace('"', '\\"'))
            else:
                parts.append(str(node))
        return "".join(parts)


@dataclass(frozen=True)
class Placeholder:
    """A {namespace.property[::modifier]} reference into the context."""

    namespace: Namespace
    property: str
    modifier: Modifier | None = None
    true_branch: Template | None = None
    false_branch: Template | None = None
    position: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if self.modifier is not None and not isinstance(self.modifier, (Format, Compare, Regex)):
            raise TypeError(f"Unsupported modifier {self.modifier!r}")
        branching = isinstance(self.modifier, (Compare, Regex))
        has_true = self.true_branch is not None
        has_false = self.false_branch is not None
        if branching and not (has_true and has_false):
            raise ValueError(f"{self.modifier!r} requires both a true and a false branch")
        if not branching and (has_true or has_false):
            raise ValueError("Only Compare and Regex modifiers may carry branches")

    @property
    def has_branches(self) -> bool:
        return self.true_branch is not None

    @property
    def reference(self) -> str:
        return f"{self.namespace.value}.{self.property}"

    def __str__(self) -> str:
        if self.modifier is None:
            return "{" + self.reference + "}"
        text = "{" + self.reference + "::" + str(self.modifier)
        if self.has_branches:
            text += f'["{self.true_branch.branch_text()}"||"{self.false_branch.branch_text()}"]'
        return text + "}"


Node = Union[Literal, Placeholder]
