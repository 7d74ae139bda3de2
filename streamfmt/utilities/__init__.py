"""Shared utilities: logging setup and in-memory caching."""
