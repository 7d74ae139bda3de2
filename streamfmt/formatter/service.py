"""Stream formatter service.

Compiles a FormatterDefinition once and renders the name/description pair
for any number of streams.
"""

import logging
from dataclasses import dataclass

from streamfmt.formatter.context_builder import build_context
from streamfmt.formatter.definition import FormatterDefinition
from streamfmt.formatter.models import AddonInfo, ProviderInfo, StreamInfo
from streamfmt.formatter.properties import unknown_properties
from streamfmt.templates.cache import TemplateCache, get_template_cache
from streamfmt.templates.context import Context
from streamfmt.templates.diagnostics import RenderDiagnostic
from streamfmt.templates.evaluator import TemplateRenderer, get_renderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormattedStream:
    """Rendered display strings for one stream."""

    name: str
    description: str


class StreamFormatter:
    """Renders stream names and descriptions from a formatter definition.

    Usage:
        formatter = StreamFormatter.from_string(
            'custom:{"name":"{stream.title}","description":"{stream.size::size}"}'
        )
        formatter.format(ctx)
        # -> FormattedStream(name="Show", description="2.50 GB")

    Both templates are parsed at construction, so a bad definition fails
    here rather than on the first render.

    Raises:
        TemplateParseError: if either template does not parse
    """

    def __init__(
        self,
        definition: FormatterDefinition,
        cache: TemplateCache | None = None,
        renderer: TemplateRenderer | None = None,
    ):
        self.definition = definition
        cache = cache or get_template_cache()
        self._renderer = renderer or get_renderer()
        self._name = cache.get_or_parse(definition.name)
        self._description = cache.get_or_parse(definition.description)

        unknown = list(
            dict.fromkeys(unknown_properties(self._name) + unknown_properties(self._description))
        )
        if unknown:
            logger.info("[FORMATTER] Template references unknown properties: %s", ", ".join(unknown))

    @classmethod
    def from_string(cls, text: str, **kwargs) -> "StreamFormatter":
        """Build from the custom:{...} form."""
        return cls(FormatterDefinition.from_string(text), **kwargs)

    def format(
        self,
        context: Context,
        diagnostics: list[RenderDiagnostic] | None = None,
    ) -> FormattedStream:
        """Render name and description against one context."""
        return FormattedStream(
            name=self._renderer.render(self._name, context, diagnostics),
            description=self._renderer.render(self._description, context, diagnostics),
        )


# Sample data for previewing a formatter without a real stream
SAMPLE_STREAM = StreamInfo(
    filename="The.Show.S01E02.1080p.WEB-DL.DDP5.1.Atmos.DV.HDR.H.265-GROUP.mkv",
    title="The Show",
    year=2024,
    season=1,
    episode=2,
    quality="WEBDL",
    resolution="1080p",
    size=2684354560,
    visual_tags=["DV", "HDR"],
    audio_tags=["Atmos", "DD+"],
    languages=["English"],
    language_emojis=["🇬🇧"],
    release_group="GROUP",
    encode="HEVC",
    seeders=125,
    personal=False,
    proxied=False,
)
SAMPLE_PROVIDER = ProviderInfo(id="realdebrid", name="Real-Debrid", short_name="RD", cached=True)
SAMPLE_ADDON = AddonInfo(id="torrentio", name="Torrentio")


def sample_context() -> Context:
    """Context built from the sample stream, provider and addon."""
    return build_context(SAMPLE_STREAM, SAMPLE_PROVIDER, SAMPLE_ADDON)


def preview(
    definition: FormatterDefinition | str,
    context: Context | None = None,
    diagnostics: list[RenderDiagnostic] | None = None,
) -> FormattedStream:
    """Render a definition against sample data (or the given context).

    Raises:
        FormatterDefinitionError: if a string definition is malformed
        TemplateParseError: if a template does not parse
    """
    if isinstance(definition, str):
        definition = FormatterDefinition.from_string(definition)
    if context is None:
        context = sample_context()
    return StreamFormatter(definition).format(context, diagnostics)
