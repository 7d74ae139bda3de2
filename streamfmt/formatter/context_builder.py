"""Context builder for template rendering.

Assembles a Context from typed stream/provider/addon metadata.
This is the bridge between the data models and the template engine.
"""

from typing import Any

from streamfmt.formatter.models import AddonInfo, ProviderInfo, StreamInfo
from streamfmt.templates.context import Context


def _to_properties(model: Any) -> dict[str, Any]:
    """Dump a metadata model (or pass a plain mapping through) as camelCase properties.

    None fields are dropped so they resolve as absent.
    """
    if model is None:
        return {}
    if isinstance(model, dict):
        return {k: v for k, v in model.items() if v is not None}
    return model.model_dump(by_alias=True, exclude_none=True)


def build_context(
    stream: StreamInfo | dict | None = None,
    provider: ProviderInfo | dict | None = None,
    addon: AddonInfo | dict | None = None,
) -> Context:
    """Build a render Context.

    Args:
        stream: Stream metadata (model or camelCase dict)
        provider: Provider metadata
        addon: Addon metadata

    Returns:
        Context ready for rendering

    Example:
        ctx = build_context(
            StreamInfo(title="Show", season=1, episode=2, resolution="1080p"),
            ProviderInfo(cached=True),
        )
    """
    return Context(
        stream=_to_properties(stream),
        provider=_to_properties(provider),
        addon=_to_properties(addon),
    )
