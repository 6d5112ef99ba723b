"""Route table — nested router nodes and their flattened path templates.

A route table is a tuple of :class:`RouteNode` trees.  Top-level nodes carry
absolute segments (``/news``), children carry relative ones (``articles``).
Flattening joins segments depth-first with ``/``; a child with an empty path
stands for its parent's own page::

    /:lang?            children: "", "about"
        -> /:lang?
        -> /:lang?/about

Tables are usually discovered from a ``pages/`` directory of templates:

    pages/index.html              -> /
    pages/_lang/index.html        -> /:lang?        (the language segment is optional)
    pages/_slug/index.html        -> /:slug?        (an index makes other segments optional)
    pages/_lang/about.html        -> /:lang?/about
    pages/_lang/news/_slug.html   -> /:lang?/news/:slug
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tabby._errors import ConfigError
from tabby.routing.injector import LANG_PARAM

# Page template suffix recognised during discovery
_PAGE_SUFFIX = ".html"

_INDEX_NAME = "index"

# Leading character that marks a dynamic segment (``_slug`` -> ``:slug``)
_PARAM_MARKER = "_"


@dataclass(frozen=True, slots=True)
class RouteNode:
    """A node in the router's nested route table.

    Attributes:
        path: Path segment (absolute for top-level nodes, relative otherwise).
        children: Nested nodes.  Nodes with children are not routes themselves.
        source: Page template a leaf was discovered from, if any.

    """

    path: str
    children: tuple[RouteNode, ...] = ()
    source: Path | None = None


def flatten(
    nodes: Sequence[RouteNode],
    prefix: str = "",
) -> Iterator[tuple[str, RouteNode]]:
    """Yield ``(template, leaf)`` pairs depth-first in declaration order."""
    for node in nodes:
        if node.children:
            yield from flatten(node.children, prefix + node.path + "/")
            continue
        base = prefix
        if node.path == "" and base.endswith("/"):
            base = base[:-1]
        yield base + node.path, node


def flat_routes(nodes: Sequence[RouteNode]) -> list[str]:
    """Flatten a nested route table into an ordered list of path templates."""
    return [path for path, _node in flatten(nodes)]


def build_route_table(data: Sequence[Mapping[str, Any]]) -> tuple[RouteNode, ...]:
    """Build a route table from plain ``{path, children}`` mappings.

    Raises:
        ConfigError: If a node has no string ``path``.

    """
    nodes: list[RouteNode] = []
    for item in data:
        path = item.get("path") if isinstance(item, Mapping) else None
        if not isinstance(path, str):
            msg = f"Route table node must have a string 'path', got {item!r}"
            raise ConfigError(msg)
        children = build_route_table(item.get("children") or ())
        nodes.append(RouteNode(path=path, children=children))
    return tuple(nodes)


def discover_route_table(pages_dir: Path) -> tuple[RouteNode, ...]:
    """Scan *pages_dir* for page templates and return the nested route table.

    Skips dot-files and ``__pycache__``.  Directories without any page
    template are ignored.  Returns an empty tuple when *pages_dir* does not
    exist.

    """
    if not pages_dir.is_dir():
        return ()
    return _discover_dir(pages_dir, top=True)


def _discover_dir(directory: Path, *, top: bool) -> tuple[RouteNode, ...]:
    lead = "/" if top else ""
    nodes: list[RouteNode] = []

    for entry in sorted(directory.iterdir()):
        if entry.name.startswith(".") or entry.name == "__pycache__":
            continue

        if entry.is_dir():
            children = _discover_dir(entry, top=False)
            if not children:
                continue
            # A dynamic directory with its own index page may be omitted;
            # the language segment always may
            has_index = any(child.path == "" for child in children)
            segment = _to_segment(entry.name, optional=has_index)
            nodes.append(RouteNode(path=lead + segment, children=children))
        elif entry.suffix == _PAGE_SUFFIX:
            stem = entry.stem
            segment = "" if stem == _INDEX_NAME else _to_segment(stem, optional=False)
            nodes.append(RouteNode(path=lead + segment, source=entry))

    return tuple(nodes)


def _to_segment(name: str, *, optional: bool) -> str:
    """Convert a file or directory name into a route segment.

    ``about`` -> ``about``, ``_slug`` -> ``:slug``, ``_lang`` -> ``:lang?``

    """
    if not name.startswith(_PARAM_MARKER):
        return name
    param = name[len(_PARAM_MARKER):]
    if param == LANG_PARAM:
        optional = True
    return ":" + param + ("?" if optional else "")
