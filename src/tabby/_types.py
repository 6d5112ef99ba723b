"""Shared type definitions for tabby."""

from collections.abc import Mapping
from typing import Any

# Language code (e.g., "ru", "ua")
type LanguageCode = str

# Route path template with optional parameters (e.g., "/:lang?/about")
type RouteTemplate = str

# Concrete URL path (e.g., "/ua/about/")
type RoutePath = str

# Render-time data attached to a route
type Payload = Mapping[str, Any]
