"""Declared routes — explicitly listed routes with render payloads.

Content-parametrized pages (article slugs, client case studies) cannot be
enumerated from the router, so their concrete routes are declared in
``routes.yaml``::

    routes:
      - /contacts/
      - route: /promo/
        payload: {campaign: spring}

    collections:
      - prefix: /news/articles/
        source: data/articles.json
        key: slug

Each collection entry yields ``<prefix><entry[key]><suffix>`` with the entry
itself as payload.  ``suffix`` defaults to ``/``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from tabby._errors import ConfigError

if TYPE_CHECKING:
    from tabby._types import Payload, RoutePath


@dataclass(frozen=True, slots=True)
class DeclaredRoute:
    """A route supplied by a content source rather than the router.

    Attributes:
        route: Concrete path without a language segment.
        payload: Extra render-time data for the page.

    """

    route: RoutePath
    payload: Payload = field(default_factory=dict)


def load_declared_routes(path: Path) -> tuple[DeclaredRoute, ...]:
    """Load declared routes from a YAML file.

    Collection ``source`` paths are resolved relative to the file's directory.
    Returns an empty tuple when *path* does not exist.

    Raises:
        ConfigError: On unreadable or malformed route data.

    """
    if not path.is_file():
        return ()

    data = _read_data(path)
    if not isinstance(data, dict):
        msg = f"Routes file {path} must contain a mapping"
        raise ConfigError(msg)

    declared: list[DeclaredRoute] = []
    for item in data.get("routes") or ():
        declared.append(_parse_route(item, path))
    for collection in data.get("collections") or ():
        declared.extend(_expand_collection(collection, path.parent))
    return tuple(declared)


def _parse_route(item: object, source: Path) -> DeclaredRoute:
    if isinstance(item, str):
        return DeclaredRoute(route=_normalize(item))
    if isinstance(item, Mapping) and isinstance(item.get("route"), str):
        payload = item.get("payload") or {}
        if not isinstance(payload, Mapping):
            msg = f"Payload for route {item['route']!r} in {source} must be a mapping"
            raise ConfigError(msg)
        return DeclaredRoute(route=_normalize(item["route"]), payload=dict(payload))
    msg = f"Invalid route entry in {source}: {item!r}"
    raise ConfigError(msg)


def _expand_collection(collection: object, base_dir: Path) -> list[DeclaredRoute]:
    if not isinstance(collection, Mapping):
        msg = f"Collection entry must be a mapping, got {collection!r}"
        raise ConfigError(msg)

    try:
        prefix = str(collection["prefix"])
        source = base_dir / str(collection["source"])
        key = str(collection["key"])
    except KeyError as exc:
        msg = f"Collection {dict(collection)!r} is missing {exc.args[0]!r}"
        raise ConfigError(msg) from exc
    suffix = str(collection.get("suffix", "/"))

    entries = _read_data(source)
    # Content dumps are often wrapped: {"pages": [...]}
    if isinstance(entries, Mapping):
        entries = entries.get("pages")
    if not isinstance(entries, list):
        msg = f"Collection source {source} must contain a list of entries"
        raise ConfigError(msg)

    routes: list[DeclaredRoute] = []
    for entry in entries:
        if not isinstance(entry, Mapping) or key not in entry:
            msg = f"Collection entry in {source} has no {key!r} field: {entry!r}"
            raise ConfigError(msg)
        routes.append(DeclaredRoute(
            route=_normalize(f"{prefix}{entry[key]}{suffix}"),
            payload=dict(entry),
        ))
    return routes


def _read_data(path: Path) -> object:
    """Read a JSON or YAML document."""
    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        msg = f"Failed to read route data {path}: {exc}"
        raise ConfigError(msg) from exc


def _normalize(route: str) -> str:
    if not route.startswith("/"):
        route = "/" + route
    return route
