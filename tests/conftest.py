"""Shared fixtures for streamfmt tests."""

import pytest

from streamfmt.templates import Context, get_registry, parse, render


@pytest.fixture
def show_context():
    """The episode used throughout the examples."""
    return Context(
        stream={
            "title": "Show",
            "season": 1,
            "episode": 2,
            "quality": "WEBDL",
            "resolution": "1080p",
        },
        provider={"cached": True},
    )


@pytest.fixture
def render_source():
    """Parse and render in one step: render_source(template, stream={...}, ...)."""

    def _render(source: str, diagnostics=None, **namespaces) -> str:
        return render(parse(source), Context(**namespaces), diagnostics)

    return _render


@pytest.fixture
def isolated_registry(monkeypatch):
    """The formatter registry with a private copy of its table for one test."""
    registry = get_registry()
    monkeypatch.setattr(registry, "_formatters", dict(registry._formatters))
    return registry
