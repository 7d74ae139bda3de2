"""Exception hierarchy for streamfmt.

Only parse-time problems raise. Rendering never raises; render-time
anomalies are reported as diagnostics instead.
"""


class StreamFormatError(Exception):
    """Base class for all streamfmt errors."""


class TemplateParseError(StreamFormatError):
    """A template string could not be parsed.

    Attributes:
        message: Human readable description of the problem
        position: Character index into the source where parsing failed
        byte_offset: The same location as a UTF-8 byte offset
        code: Short machine-readable error code
    """

    code = "parse_error"

    def __init__(self, message: str, source: str, position: int):
        self.message = message
        self.source = source
        self.position = position
        self.byte_offset = len(source[:position].encode("utf-8"))
        super().__init__(f"{message} at offset {self.byte_offset}")


class UnterminatedPlaceholderError(TemplateParseError):
    """A '{' without a matching '}'."""

    code = "unterminated_placeholder"


class UnterminatedBranchError(TemplateParseError):
    """A quoted branch template without its closing quote."""

    code = "unterminated_branch"


class MalformedBranchesError(TemplateParseError):
    """Branch brackets present but not of the form ["..."||"..."]."""

    code = "malformed_branches"


class MissingBranchesError(TemplateParseError):
    """A comparison or regex modifier with no branches."""

    code = "missing_branches"


class UnknownNamespaceError(TemplateParseError):
    """Namespace other than stream, provider or addon."""

    code = "unknown_namespace"


class InvalidOperatorError(TemplateParseError):
    """Modifier token that is neither a comparator, a regex nor a formatter name."""

    code = "invalid_operator"


class MalformedPlaceholderError(TemplateParseError):
    """Placeholder body that does not read as namespace.property."""

    code = "malformed_placeholder"


class NestingTooDeepError(TemplateParseError):
    """Branch templates nested beyond the configured limit."""

    code = "nesting_too_deep"


class FormatterDefinitionError(StreamFormatError):
    """A custom:{...} formatter definition string is malformed."""
