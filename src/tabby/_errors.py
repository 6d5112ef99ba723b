"""Tabby error hierarchy.

All tabby-specific errors inherit from TabbyError for easy catching.
"""


class TabbyError(Exception):
    """Base error for all tabby operations."""


class ConfigError(TabbyError):
    """Invalid or missing configuration."""


class RouteError(TabbyError):
    """Error in route templates (parsing, interpolation, page lookup)."""


class ExportError(TabbyError):
    """Error during static export or output partitioning."""
