"""Tabby application — wires configuration, routes, rendering, and export hooks.

The two public functions (build, plan_routes) are the primary entry points.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tabby.config_loader import load_config

if TYPE_CHECKING:
    from tabby.config import TabbyConfig
    from tabby.export.static import ExportResult
    from tabby.observability.log import EventLog
    from tabby.routing.declared import DeclaredRoute
    from tabby.routing.injector import LanguageVariant
    from tabby.routing.table import RouteNode


def _load_routes(config: TabbyConfig) -> tuple[tuple[RouteNode, ...], tuple[DeclaredRoute, ...]]:
    """Discover the route table and load declared routes."""
    from tabby.routing.declared import load_declared_routes
    from tabby.routing.table import discover_route_table

    route_table = discover_route_table(config.pages_path)
    declared = load_declared_routes(config.routes_path)
    return route_table, declared


def build(
    root: str | Path = ".",
    *,
    options: dict[str, Any] | None = None,
    event_log: EventLog | None = None,
    **kwargs: object,
) -> ExportResult:
    """Export the site as static HTML files, one directory per language.

    Args:
        root: Path to the site root directory.
        options: Override ``static_generate`` options.
        event_log: Optional log receiving export events.
        **kwargs: Override TabbyConfig fields.

    Raises:
        ConfigError: On invalid configuration, before anything is rendered.
        ExportError: If the output cannot be partitioned.

    """
    from tabby.export.generate import StaticGenerate
    from tabby.export.render import TemplateRenderer
    from tabby.export.static import StaticExporter, print_export_summary

    config = load_config(Path(root), options=options, **kwargs)
    t0 = time.perf_counter()

    route_table, declared = _load_routes(config)
    load_ms = (time.perf_counter() - t0) * 1000

    print(
        f"  tabby [build] {config.root} — languages: "
        f"{', '.join(config.options.generate_languages)} "
        f"(default {config.options.default_language}), loaded in {load_ms:.0f}ms",
        file=sys.stderr,
    )

    exporter = StaticExporter(
        config=config,
        renderer=TemplateRenderer(
            config.pages_path,
            config.layouts_path,
            route_table,
            languages=config.options.generate_languages,
        ),
        hooks=StaticGenerate.from_config(config, route_table, event_log=event_log),
        route_table=route_table,
        declared=declared,
    )
    result = exporter.export()

    print_export_summary(result)
    return result


def plan_routes(
    root: str | Path = ".",
    *,
    options: dict[str, Any] | None = None,
    **kwargs: object,
) -> tuple[LanguageVariant, ...]:
    """Return the expanded route set a build would render, without rendering.

    Args:
        root: Path to the site root directory.
        options: Override ``static_generate`` options.
        **kwargs: Override TabbyConfig fields.

    """
    from tabby.export.static import default_routes
    from tabby.routing.builder import build_route_set
    from tabby.routing.injector import LanguageInjector
    from tabby.routing.table import flat_routes

    config = load_config(Path(root), options=options, **kwargs)
    route_table, declared = _load_routes(config)

    return build_route_set(
        default_routes(route_table, declared),
        flat_routes(route_table),
        LanguageInjector(config.options),
    )
