"""Render-time diagnostics.

Rendering never fails. Anything odd it runs into (bad regex, unknown
formatter, a formatter that blew up) is logged and, if the caller passed a
list, recorded there as a RenderDiagnostic.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from streamfmt.templates.nodes import Placeholder

logger = logging.getLogger(__name__)


class DiagnosticCode(str, Enum):
    INVALID_REGEX = "invalid_regex"
    UNKNOWN_FORMATTER = "unknown_formatter"
    FORMATTER_FAILED = "formatter_failed"
    NESTING_TOO_DEEP = "nesting_too_deep"


@dataclass(frozen=True)
class RenderDiagnostic:
    """A non-fatal problem met while rendering one placeholder."""

    code: DiagnosticCode
    message: str
    placeholder: Placeholder | None = None

    def __str__(self) -> str:
        if self.placeholder is None:
            return f"{self.code.value}: {self.message}"
        return f"{self.code.value}: {self.message} in {self.placeholder}"


def report(
    diagnostics: list[RenderDiagnostic] | None,
    code: DiagnosticCode,
    message: str,
    placeholder: Placeholder | None = None,
) -> None:
    """Log a diagnostic and append it to the caller's list, if any."""
    diagnostic = RenderDiagnostic(code, message, placeholder)
    logger.warning("[RENDER] %s", diagnostic)
    if diagnostics is not None:
        diagnostics.append(diagnostic)
