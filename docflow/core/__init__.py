"""Core: config, exception handlers, and application bootstrap."""

from docflow.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
