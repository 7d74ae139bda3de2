"""Stream formatter.

Builds on the template language to render a stream's display name and
description from a formatter definition:

    custom:{"name":"{stream.title} {stream.resolution}","description":"{stream.size::size}"}

Also ships the property catalog, ready-made snippets/templates and a
preview against sample data.
"""

from streamfmt.formatter.context_builder import build_context
from streamfmt.formatter.definition import CUSTOM_PREFIX, FormatterDefinition
from streamfmt.formatter.models import AddonInfo, ProviderInfo, StreamInfo
from streamfmt.formatter.presets import (
    SNIPPETS,
    TEMPLATES,
    Snippet,
    TemplatePreset,
    get_snippet,
    get_template,
)
from streamfmt.formatter.properties import (
    PROPERTIES,
    PropertyDefinition,
    get_property,
    is_known_property,
    properties_for,
    unknown_properties,
)
from streamfmt.formatter.service import (
    FormattedStream,
    StreamFormatter,
    preview,
    sample_context,
)

__all__ = [
    # Definitions
    "CUSTOM_PREFIX",
    "FormatterDefinition",
    # Metadata models
    "AddonInfo",
    "ProviderInfo",
    "StreamInfo",
    "build_context",
    # Service
    "FormattedStream",
    "StreamFormatter",
    "preview",
    "sample_context",
    # Presets
    "SNIPPETS",
    "TEMPLATES",
    "Snippet",
    "TemplatePreset",
    "get_snippet",
    "get_template",
    # Property catalog
    "PROPERTIES",
    "PropertyDefinition",
    "get_property",
    "is_known_property",
    "properties_for",
    "unknown_properties",
]
