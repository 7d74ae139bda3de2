"""Ready-made snippets and complete formatter templates.

Snippets are single building blocks (season number, quality tag, ...)
meant to be pasted into a custom template. Templates are complete
name/description pairs for common cases.
"""

from dataclasses import dataclass

from streamfmt.formatter.definition import FormatterDefinition

_CHECK = "✓"

SEASON = (
    '{stream.season::>=0["S"||""]}'
    '{stream.season::<=9["0"||""]}'
    '{stream.season::>0["{stream.season}"||""]}'
)
EPISODE = (
    '{stream.episode::>=0["E"||""]}'
    '{stream.episode::<=9["0"||""]}'
    '{stream.episode::>0["{stream.episode}"||""]}'
)

# Description block shared by the tv-show and movie templates
_DETAILED_DESCRIPTION = (
    '{provider.cached::=true["' + _CHECK + ' Cached"||""]} '
    "{stream.size::size} | "
    '{stream.visualTags::/^$|null/[""||"{stream.visualTags} "]}'
    '{stream.audioTags::/^$|null/[""||"{stream.audioTags} "]}'
    '{stream.languageEmojis::/^$|null/[""||"{stream.languageEmojis} "]}'
    '{stream.releaseGroup::/^$|Unknown/[""||"- {stream.releaseGroup}"]}'
)


@dataclass(frozen=True)
class Snippet:
    """A reusable template fragment."""

    id: str
    name: str
    code: str
    description: str


@dataclass(frozen=True)
class TemplatePreset:
    """A complete name/description formatter."""

    id: str
    name: str
    name_template: str
    description_template: str
    description: str

    @property
    def definition(self) -> FormatterDefinition:
        return FormatterDefinition(name=self.name_template, description=self.description_template)


SNIPPETS: tuple[Snippet, ...] = (
    Snippet(
        id="season",
        name="Season Number (S01 format)",
        code=SEASON,
        description="Formats season numbers as S01, S02, etc.",
    ),
    Snippet(
        id="episode",
        name="Episode Number (E01 format)",
        code=EPISODE,
        description="Formats episode numbers as E01, E02, etc.",
    ),
    Snippet(
        id="quality",
        name="Quality Tag",
        code='{stream.quality::/^$|Unknown/[""||" {stream.quality}"]}',
        description="Adds quality tag if available (e.g., WEBDL, BluRay)",
    ),
    Snippet(
        id="resolution",
        name="Resolution Tag",
        code='{stream.resolution::/^$|Unknown/[""||" {stream.resolution}"]}',
        description="Adds resolution if available (e.g., 1080p, 4K)",
    ),
    Snippet(
        id="size",
        name="File Size",
        code="{stream.size::size}",
        description="Shows formatted file size (e.g., 2.50 GB)",
    ),
    Snippet(
        id="visualTags",
        name="Visual Tags (HDR, DV)",
        code='{stream.visualTags::/^$|null/[""||" {stream.visualTags}"]}',
        description="Shows visual tags like HDR, Dolby Vision, etc.",
    ),
    Snippet(
        id="audioTags",
        name="Audio Tags (Atmos, DTS)",
        code='{stream.audioTags::/^$|null/[""||" {stream.audioTags}"]}',
        description="Shows audio tags like Atmos, DTS, etc.",
    ),
    Snippet(
        id="languages",
        name="Language Emojis",
        code='{stream.languageEmojis::/^$|null/[""||" {stream.languageEmojis}"]}',
        description="Shows language emojis for available audio tracks",
    ),
    Snippet(
        id="releaseGroup",
        name="Release Group",
        code='{stream.releaseGroup::/^$|Unknown/[""||" - {stream.releaseGroup}"]}',
        description="Shows the release group name",
    ),
    Snippet(
        id="cached",
        name="Cached Status",
        code='{provider.cached::=true["' + _CHECK + ' "||""]}',
        description="Shows a checkmark if the stream is cached",
    ),
)

TEMPLATES: tuple[TemplatePreset, ...] = (
    TemplatePreset(
        id="tv-show",
        name="TV Show Template",
        name_template=(
            "{stream.title} "
            + SEASON
            + EPISODE
            + '{stream.quality::/^$|Unknown/[""||" {stream.quality}"]}'
            + '{stream.resolution::/^$|Unknown/[""||" {stream.resolution}"]}'
        ),
        description_template=_DETAILED_DESCRIPTION,
        description="Complete template for TV shows with all important information",
    ),
    TemplatePreset(
        id="movie",
        name="Movie Template",
        name_template=(
            '{stream.title} {stream.year::/^$|null/[""||"({stream.year})"]} '
            '{stream.quality::/^$|Unknown/[""||"{stream.quality} "]}'
            '{stream.resolution::/^$|Unknown/[""||"{stream.resolution}"]}'
        ),
        description_template=_DETAILED_DESCRIPTION,
        description="Complete template for movies with all important information",
    ),
    TemplatePreset(
        id="minimalist",
        name="Minimalist Template",
        name_template="{stream.title} " + SEASON + EPISODE,
        description_template=(
            '{stream.resolution::/^$|Unknown/[""||"{stream.resolution} "]}'
            '{provider.cached::=true["' + _CHECK + '"||""]} '
            "{stream.size::size}"
        ),
        description="Minimalist template with only essential information",
    ),
)

_SNIPPETS_BY_ID = {s.id: s for s in SNIPPETS}
_TEMPLATES_BY_ID = {t.id: t for t in TEMPLATES}


def get_snippet(snippet_id: str) -> Snippet | None:
    return _SNIPPETS_BY_ID.get(snippet_id)


def get_template(template_id: str) -> TemplatePreset | None:
    return _TEMPLATES_BY_ID.get(template_id)
