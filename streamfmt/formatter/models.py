"""Typed stream, provider and addon metadata.

Pydantic models for the data a formatter renders. Field names are
snake_case in Python and camelCase on the wire / in templates
(release_group <-> releaseGroup).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _MetadataModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class StreamInfo(_MetadataModel):
    """Parsed stream metadata."""

    filename: str | None = None
    title: str | None = None
    year: int | None = None
    season: int | None = None
    episode: int | None = None
    quality: str | None = None
    resolution: str | None = None
    size: int | None = Field(default=None, ge=0)  # bytes
    visual_tags: list[str] = Field(default_factory=list)
    audio_tags: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    language_emojis: list[str] = Field(default_factory=list)
    release_group: str | None = None
    encode: str | None = None
    seeders: int | None = None
    personal: bool | None = None
    proxied: bool | None = None


class ProviderInfo(_MetadataModel):
    """Debrid/usenet provider the stream resolves through."""

    id: str | None = None
    name: str | None = None
    short_name: str | None = None
    cached: bool | None = None


class AddonInfo(_MetadataModel):
    """Addon that produced the stream."""

    id: str | None = None
    name: str | None = None
