"""Formatter definitions.

A formatter definition is the pair of templates that produce a stream's
display name and description. It is usually exchanged as one string:

    custom:{"name":"{stream.title}","description":"{stream.size::size}"}

Definitions copied out of the formatter helper page are built by pasting
the templates between the quotes without JSON escaping, so branch quotes
appear bare:

    custom:{"name":"{stream.season::>0["S"||""]}","description":""}

from_string() reads strict JSON first and falls back to splitting on that
fixed framing.
"""

import json
import logging
import re

from pydantic import BaseModel, ConfigDict, ValidationError

from streamfmt.errors import FormatterDefinitionError

logger = logging.getLogger(__name__)

CUSTOM_PREFIX = "custom:"

# {"name":"<anything>","description":"<anything>"} with the templates pasted in raw.
# The greedy name group ends at the last '","description":"'.
INTERPOLATED_PATTERN = re.compile(
    r'\{\s*"name"\s*:\s*"(?P<name>.*)"\s*,\s*"description"\s*:\s*"(?P<description>.*)"\s*\}',
    re.DOTALL,
)


class FormatterDefinition(BaseModel):
    """Name and description template strings."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    description: str = ""

    @classmethod
    def from_string(cls, text: str) -> "FormatterDefinition":
        """Parse the custom:{...} form (the prefix is optional).

        Accepts both proper JSON and the unescaped form produced by pasting
        templates into the JSON framing.

        Raises:
            FormatterDefinitionError: if the payload is neither a JSON object
                with string name/description fields nor the unescaped framing
        """
        payload = text.strip()
        if payload.startswith(CUSTOM_PREFIX):
            payload = payload[len(CUSTOM_PREFIX) :]

        if not payload.startswith("{"):
            raise FormatterDefinitionError(
                "Formatter definition must be a JSON object, optionally prefixed with 'custom:'"
            )

        try:
            return cls.model_validate_json(payload)
        except ValidationError as e:
            match = INTERPOLATED_PATTERN.fullmatch(payload)
            if match is None:
                logger.debug("[FORMATTER] Rejected definition %r: %s", text[:80], e)
                raise FormatterDefinitionError(f"Invalid formatter definition: {e}") from e

        logger.debug("[FORMATTER] Read unescaped definition %r", text[:80])
        return cls(name=match.group("name"), description=match.group("description"))

    def to_string(self) -> str:
        """Serialize to the custom:{...} form."""
        body = json.dumps(
            {"name": self.name, "description": self.description},
            ensure_ascii=False,
            separators=(",", ":"),
        )
        return CUSTOM_PREFIX + body
