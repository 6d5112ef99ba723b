"""Static export — render every route of a site to HTML files.

The exporter is the host pipeline the multi-language module plugs into.  It
owns rendering and announces four lifecycle points through
:class:`ExportHooks`:

    on_before_render     output holds static files + bundle, nothing rendered
    on_routes_requested  default route list is ready and may be replaced
    on_route_failed      one route could not be rendered (export continues)
    on_export_complete   every route has been rendered

Hooks run sequentially in that order, never concurrently.
"""

from __future__ import annotations

import dataclasses
import json
import shutil
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, Protocol

from tabby.export.failures import FailureEntry, RouteFailure
from tabby.routing.declared import DeclaredRoute
from tabby.routing.table import flat_routes
from tabby.routing.template import template_params

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from tabby.config import TabbyConfig
    from tabby.routing.injector import LanguageVariant
    from tabby.routing.table import RouteNode

# Sub-directory of the runtime bundle holding per-route payloads
_PAYLOAD_DIR = "static"
_PAYLOAD_FILE = "payload.json"


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during export.

    Attributes:
        source_path: Logical source (e.g., ``"/ua/about/"``).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to render and write this file.

    """

    source_path: str
    output_path: Path
    source_type: Literal["page", "payload", "asset", "sitemap", "fallback"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of a full static export.

    Attributes:
        files: All files written during the render pass.
        failures: Routes that could not be rendered.
        total_pages: Number of pages rendered.
        total_assets: Number of static and bundle files copied.
        duration_ms: Total wall-clock time for the export.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[ExportedFile, ...]
    failures: tuple[RouteFailure, ...]
    total_pages: int
    total_assets: int
    duration_ms: float
    output_dir: Path


def default_routes(
    route_table: Sequence[RouteNode],
    declared: Sequence[DeclaredRoute],
) -> list[DeclaredRoute]:
    """Build the default route list of an export.

    Router templates without parameters come first, then declared routes
    with their payloads.
    """
    routes = [
        DeclaredRoute(route=template)
        for template in flat_routes(route_table)
        if not template_params(template)
    ]
    routes.extend(declared)
    return routes


class PageRenderer(Protocol):
    """Turns a concrete route into HTML."""

    def render(self, route: str, payload: Mapping[str, Any]) -> str: ...

    def render_fallback(self) -> str: ...


class ExportHooks(Protocol):
    """Lifecycle callbacks invoked by :class:`StaticExporter`."""

    def on_before_render(self, output_dir: Path) -> None: ...

    def on_routes_requested(
        self, routes: Sequence[DeclaredRoute],
    ) -> Sequence[DeclaredRoute | LanguageVariant]: ...

    def on_route_failed(self, failure: RouteFailure) -> None: ...

    def on_export_complete(self, result: ExportResult) -> None: ...


class PassthroughHooks:
    """Hooks for a plain single-locale export: render the default routes as-is."""

    def on_before_render(self, output_dir: Path) -> None:
        pass

    def on_routes_requested(
        self, routes: Sequence[DeclaredRoute],
    ) -> Sequence[DeclaredRoute | LanguageVariant]:
        return routes

    def on_route_failed(self, failure: RouteFailure) -> None:
        pass

    def on_export_complete(self, result: ExportResult) -> None:
        pass


class StaticExporter:
    """Exports a site as static files.

    Args:
        config: Frozen site configuration.
        renderer: Page renderer for routes and the fallback page.
        hooks: Lifecycle hooks (defaults to a plain single-locale export).
        route_table: Router table; its parameter-free routes are rendered
            by default.
        declared: Declared routes, rendered by default after the router ones.

    """

    def __init__(
        self,
        config: TabbyConfig,
        renderer: PageRenderer,
        hooks: ExportHooks | None = None,
        route_table: Sequence[RouteNode] = (),
        declared: Sequence[DeclaredRoute] = (),
    ) -> None:
        self._config = config
        self._renderer = renderer
        self._hooks: ExportHooks = hooks if hooks is not None else PassthroughHooks()
        self._route_table = tuple(route_table)
        self._declared = tuple(declared)

    def export(self) -> ExportResult:
        """Run the full export pipeline and return the result.

        Pipeline order:
            1. Clean output directory
            2. Copy static files and the runtime bundle
            3. ``on_before_render``
            4. Resolve routes through ``on_routes_requested``
            5. Render routes (failures go to ``on_route_failed``)
            6. Render the fallback page
            7. Generate sitemap (if base_url configured)
            8. ``on_export_complete``

        Raises:
            ExportError: If partitioning fails in ``on_export_complete``.
            OSError: If a rendered page cannot be written.

        """
        start = time.perf_counter()
        output_dir = self._config.output_path

        # 1. Clean output directory
        self._clean_output(output_dir)

        all_files: list[ExportedFile] = []

        # 2. Static files and runtime bundle
        all_files.extend(self._copy_assets(output_dir))

        # 3. Output is ready for pre-render processing
        self._hooks.on_before_render(output_dir)

        # 4. Route list
        routes = self._hooks.on_routes_requested(self.default_routes())

        # 5. Render routes
        page_files, failures = self._render_routes(routes, output_dir)
        all_files.extend(page_files)

        # 6. Fallback page
        all_files.extend(self._render_fallback(output_dir))

        # 7. Sitemap
        all_files.extend(self._generate_sitemap(output_dir, all_files))

        result = self._build_result(all_files, failures, output_dir, start)

        # 8. Post-export processing
        self._hooks.on_export_complete(result)

        elapsed = (time.perf_counter() - start) * 1000
        return dataclasses.replace(result, duration_ms=elapsed)

    def default_routes(self) -> list[DeclaredRoute]:
        """Return the routes rendered when no hook replaces the list."""
        return default_routes(self._route_table, self._declared)

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _clean_output(self, output_dir: Path) -> None:
        """Remove and recreate the output directory."""
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    def _copy_assets(self, output_dir: Path) -> list[ExportedFile]:
        from tabby.export.assets import copy_static

        files = list(copy_static(self._config.static_path, output_dir))
        files.extend(copy_static(
            self._config.assets_path,
            output_dir / self._config.bundle_dir,
            url_prefix=f"/{self._config.bundle_dir}",
        ))
        return files

    def _render_routes(
        self,
        routes: Sequence[DeclaredRoute | LanguageVariant],
        output_dir: Path,
    ) -> tuple[list[ExportedFile], list[RouteFailure]]:
        """Render each route; a failing route is reported and skipped."""
        files: list[ExportedFile] = []
        failures: list[RouteFailure] = []

        bundle_dir = output_dir / self._config.bundle_dir
        bundle_dir.mkdir(parents=True, exist_ok=True)

        for route in routes:
            t0 = time.perf_counter()
            try:
                html = self._renderer.render(route.route, route.payload)
            except Exception as exc:
                failure = RouteFailure(
                    route=route.route,
                    errors=(FailureEntry(type="unhandled", error=exc),),
                )
                failures.append(failure)
                self._hooks.on_route_failed(failure)
                continue

            filepath = self._route_to_filepath(route.route, output_dir)
            size = self._write_text(filepath, html)
            elapsed = (time.perf_counter() - t0) * 1000
            files.append(ExportedFile(
                source_path=route.route,
                output_path=filepath,
                source_type="page",
                size_bytes=size,
                duration_ms=elapsed,
            ))

            payload_path = self._route_to_filepath(
                route.route, bundle_dir / _PAYLOAD_DIR, _PAYLOAD_FILE,
            )
            payload_size = self._write_text(
                payload_path,
                json.dumps(dict(route.payload), ensure_ascii=False, default=str),
            )
            files.append(ExportedFile(
                source_path=route.route,
                output_path=payload_path,
                source_type="payload",
                size_bytes=payload_size,
                duration_ms=0.0,
            ))

        return files, failures

    def _render_fallback(self, output_dir: Path) -> list[ExportedFile]:
        """Render the fallback page served for paths without a static file."""
        t0 = time.perf_counter()
        filepath = output_dir / self._config.fallback_file
        size = self._write_text(filepath, self._renderer.render_fallback())
        elapsed = (time.perf_counter() - t0) * 1000
        return [ExportedFile(
            source_path="/" + self._config.fallback_file,
            output_path=filepath,
            source_type="fallback",
            size_bytes=size,
            duration_ms=elapsed,
        )]

    def _generate_sitemap(
        self,
        output_dir: Path,
        exported: list[ExportedFile],
    ) -> list[ExportedFile]:
        from tabby.export.sitemap import write_sitemap

        entry = write_sitemap(
            exported,
            self._config.base_url,
            output_dir,
            exclude=self._config.sitemap_exclude,
        )
        return [entry] if entry is not None else []

    def _build_result(
        self,
        files: list[ExportedFile],
        failures: list[RouteFailure],
        output_dir: Path,
        start: float,
    ) -> ExportResult:
        return ExportResult(
            files=tuple(files),
            failures=tuple(failures),
            total_pages=sum(1 for f in files if f.source_type == "page"),
            total_assets=sum(1 for f in files if f.source_type == "asset"),
            duration_ms=(time.perf_counter() - start) * 1000,
            output_dir=output_dir,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _route_to_filepath(
        route: str,
        output_dir: Path,
        filename: str = "index.html",
    ) -> Path:
        """Convert a concrete route to an output file path.

        Clean URL convention:
            ``/``            -> ``output/index.html``
            ``/ua/about/``   -> ``output/ua/about/index.html``
            ``/ua/search``   -> ``output/ua/search/index.html``

        """
        clean = route.strip("/")
        if not clean:
            return output_dir / filename
        return output_dir / clean / filename

    @staticmethod
    def _write_text(filepath: Path, text: str) -> int:
        """Write text to a file, creating parent dirs as needed.

        Returns the size in bytes of the written file.

        """
        filepath.parent.mkdir(parents=True, exist_ok=True)
        data = text.encode("utf-8")
        filepath.write_bytes(data)
        return len(data)


def print_export_summary(result: ExportResult) -> None:
    """Print export completion summary to stderr."""
    lines = [
        "",
        "─" * 41,
        f"  Exported {result.total_pages} page{'s' if result.total_pages != 1 else ''}",
    ]
    if result.total_assets > 0:
        lines.append(
            f"  Copied {result.total_assets} asset{'s' if result.total_assets != 1 else ''}"
        )
    if result.failures:
        count = len(result.failures)
        lines.append(f"  Failed {count} route{'s' if count != 1 else ''}")
    lines.append(f"  Output: {result.output_dir}")
    lines.append(f"  Done in {result.duration_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)
