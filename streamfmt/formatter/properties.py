"""Known template properties.

The catalog lists the properties a formatter template can usefully
reference. It is documentation and linting only: the parser accepts any
property name and unknown properties simply render as absent.
"""

from dataclasses import dataclass

from streamfmt.templates.nodes import Namespace, Template


@dataclass(frozen=True)
class PropertyDefinition:
    """A documented property."""

    namespace: Namespace
    name: str
    description: str

    @property
    def usage(self) -> str:
        """Placeholder text for this property (e.g., '{stream.title}')."""
        return "{" + f"{self.namespace.value}.{self.name}" + "}"


def _props(namespace: Namespace, *entries: tuple[str, str]) -> list[PropertyDefinition]:
    return [PropertyDefinition(namespace, name, description) for name, description in entries]


PROPERTIES: tuple[PropertyDefinition, ...] = (
    *_props(
        Namespace.STREAM,
        ("filename", "Full filename of the stream"),
        ("title", "Title of the movie or TV show"),
        ("year", "Release year"),
        ("season", "Season number for TV shows"),
        ("episode", "Episode number for TV shows"),
        ("quality", "Quality tag (WEBDL, BluRay, etc.)"),
        ("resolution", "Resolution (1080p, 4K, etc.)"),
        ("size", "File size in bytes"),
        ("visualTags", "Visual tags (HDR, DV, etc.)"),
        ("audioTags", "Audio tags (Atmos, DTS, etc.)"),
        ("languages", "Language codes"),
        ("languageEmojis", "Language emoji flags"),
        ("releaseGroup", "Release group name"),
        ("encode", "Video encoding format"),
        ("seeders", "Number of seeders for torrents"),
        ("personal", "Whether the stream is from personal storage"),
        ("proxied", "Whether the stream is proxied"),
    ),
    *_props(
        Namespace.PROVIDER,
        ("id", "Provider ID (realdebrid, premiumize, etc.)"),
        ("name", "Full provider name"),
        ("shortName", "Short provider name"),
        ("cached", "Whether the stream is cached on the provider"),
    ),
    *_props(
        Namespace.ADDON,
        ("id", "Addon ID"),
        ("name", "Addon name"),
    ),
)

_BY_KEY = {(p.namespace, p.name): p for p in PROPERTIES}


def get_property(namespace: Namespace, name: str) -> PropertyDefinition | None:
    return _BY_KEY.get((namespace, name))


def properties_for(namespace: Namespace) -> list[PropertyDefinition]:
    """All catalog properties of one namespace, in catalog order."""
    return [p for p in PROPERTIES if p.namespace == namespace]


def is_known_property(namespace: Namespace, name: str) -> bool:
    return (namespace, name) in _BY_KEY


def unknown_properties(template: Template) -> list[str]:
    """References in the template (branches included) missing from the catalog.

    Returned as 'namespace.property', de-duplicated, in source order.
    """
    unknown: list[str] = []
    for placeholder in template.placeholders():
        if is_known_property(placeholder.namespace, placeholder.property):
            continue
        if placeholder.reference not in unknown:
            unknown.append(placeholder.reference)
    return unknown
