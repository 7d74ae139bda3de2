"""Library configuration.

Single source of truth for all configuration values.
Loads from environment variables with .env file support.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# =============================================================================
# VERSION - Read from pyproject.toml (single source of truth)
# =============================================================================


def _get_base_version() -> str:
    """Read version - prefer pyproject.toml (source of truth), fall back to installed metadata."""
    try:
        import tomllib

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f)
                return data.get("project", {}).get("version", "0.0.0")
    except (OSError, KeyError, ValueError):
        pass

    # Fall back to installed package metadata (pip install without source)
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("streamfmt")
    except (ImportError, PackageNotFoundError):
        pass

    return "0.0.0"


VERSION = _get_base_version()

# Load .env file from project root
_PROJECT_ROOT = Path(__file__).parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"
load_dotenv(_ENV_FILE)


def _env_int(name: str, default: int) -> int:
    """Read a non-negative integer from the environment, falling back on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


class Config:
    """Library configuration singleton.

    All configuration values should be accessed through this class.
    Values are loaded from environment variables with sensible defaults.
    """

    # Maximum nesting of branch templates inside branch templates
    MAX_NESTING_DEPTH: int = _env_int("STREAMFMT_MAX_NESTING_DEPTH", 32)

    # Parsed template cache (0 = unlimited size / no expiry)
    TEMPLATE_CACHE_SIZE: int = _env_int("STREAMFMT_TEMPLATE_CACHE_SIZE", 1024)
    TEMPLATE_CACHE_TTL: int = _env_int("STREAMFMT_TEMPLATE_CACHE_TTL", 0)

    # Compiled regex patterns kept by the evaluator
    REGEX_CACHE_SIZE: int = _env_int("STREAMFMT_REGEX_CACHE_SIZE", 256)

    @classmethod
    def reload(cls) -> None:
        """Reload configuration from environment.

        Useful for testing or runtime config changes. Caches that were already
        created keep the limits they were built with.
        """
        load_dotenv(_ENV_FILE, override=True)
        cls.MAX_NESTING_DEPTH = _env_int("STREAMFMT_MAX_NESTING_DEPTH", 32)
        cls.TEMPLATE_CACHE_SIZE = _env_int("STREAMFMT_TEMPLATE_CACHE_SIZE", 1024)
        cls.TEMPLATE_CACHE_TTL = _env_int("STREAMFMT_TEMPLATE_CACHE_TTL", 0)
        cls.REGEX_CACHE_SIZE = _env_int("STREAMFMT_REGEX_CACHE_SIZE", 256)
