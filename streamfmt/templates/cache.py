"""Read-through cache of parsed templates.

Keyed by the SHA-256 of the source text. Templates are immutable, so one
cached tree can be rendered concurrently by any number of callers. If two
threads parse the same source at once both store an equal tree and the
last write wins. Failed parses are never cached.
"""

import logging

from streamfmt.config import Config
from streamfmt.templates.nodes import Template
from streamfmt.templates.parser import parse
from streamfmt.utilities.cache import TTLCache, content_key, make_cache_key

logger = logging.getLogger(__name__)


class TemplateCache:
    """Parses template strings once and hands out the cached tree.

    Usage:
        cache = TemplateCache(max_size=512)
        template = cache.get_or_parse("{stream.title}")  # parses
        template = cache.get_or_parse("{stream.title}")  # cache hit
    """

    def __init__(
        self,
        max_size: int | None = None,
        ttl_seconds: int | None = None,
        max_depth: int | None = None,
    ):
        self._cache = TTLCache(
            default_ttl_seconds=Config.TEMPLATE_CACHE_TTL if ttl_seconds is None else ttl_seconds,
            max_size=Config.TEMPLATE_CACHE_SIZE if max_size is None else max_size,
        )
        self._max_depth = max_depth

    @staticmethod
    def key_for(source: str) -> str:
        return make_cache_key("template", content_key(source))

    def get_or_parse(self, source: str) -> Template:
        """Return the parsed template for source, parsing on a miss.

        Raises:
            TemplateParseError: if source does not parse
        """
        key = self.key_for(source)
        template = self._cache.get(key)
        if template is not None:
            return template

        template = parse(source, max_depth=self._max_depth)
        self._cache.set(key, template)
        logger.debug("[CACHE] Parsed and cached template %s", key[-12:])
        return template

    def __contains__(self, source: str) -> bool:
        return self.key_for(source) in self._cache

    def invalidate(self, source: str) -> None:
        self._cache.delete(self.key_for(source))

    def clear(self) -> None:
        self._cache.clear()

    @property
    def size(self) -> int:
        return self._cache.size

    def stats(self) -> dict:
        return self._cache.stats()


# Default singleton
_template_cache: TemplateCache | None = None


def get_template_cache() -> TemplateCache:
    """Get the default template cache."""
    global _template_cache
    if _template_cache is None:
        _template_cache = TemplateCache()
    return _template_cache


def parse_cached(source: str) -> Template:
    """Parse through the default cache."""
    return get_template_cache().get_or_parse(source)
