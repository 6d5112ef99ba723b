"""Multi-language static generation — export hooks that expand and partition.

``StaticGenerate`` plugs into :class:`~tabby.export.static.StaticExporter`:

    on_before_render     move static files + bundle into staging
    on_routes_requested  replace the route list with its language variants
    on_route_failed      write a ``generate-error__*.json`` record
    on_export_complete   partition output into one root per language

The resulting layout::

    dist/ru/...                  pages, static files, _assets/
    dist/ua/...
    dist/about/index.html        unprefixed default-language pages
    dist/generate-error__*.json  one per failed route
"""

from __future__ import annotations

import sys
import time
from typing import TYPE_CHECKING

from tabby._errors import ExportError
from tabby.export.failures import write_error_record
from tabby.export.partition import move_tree, partition_languages, remove_tree
from tabby.observability.events import ExportEvent, now_ns
from tabby.routing.builder import build_route_set
from tabby.routing.injector import LanguageInjector
from tabby.routing.table import flat_routes

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from tabby.config import ModuleOptions, TabbyConfig
    from tabby.export.failures import RouteFailure
    from tabby.export.static import ExportResult
    from tabby.observability.events import ExportEventKind
    from tabby.observability.log import EventLog
    from tabby.routing.declared import DeclaredRoute
    from tabby.routing.injector import LanguageVariant
    from tabby.routing.table import RouteNode


class StaticGenerate:
    """Export hooks for multi-language route expansion and output partitioning.

    Args:
        options: Validated module options.
        output_dir: Render output directory.
        staging_dir: Temporary directory outside *output_dir*.
        router_paths: Flattened router templates; those whose only parameter
            is ``lang`` are expanded alongside the declared routes.
        baseline_files: Top-level output files always duplicated into every
            language root (the fallback page).
        assets_dir: Name of the shared runtime bundle directory.
        event_log: Optional log receiving an event per export step.

    """

    def __init__(
        self,
        options: ModuleOptions,
        output_dir: Path,
        staging_dir: Path,
        *,
        router_paths: Sequence[str] = (),
        baseline_files: Sequence[str] = ("200.html",),
        assets_dir: str = "_assets",
        event_log: EventLog | None = None,
    ) -> None:
        self._options = options
        self._injector = LanguageInjector(options)
        self._output_dir = output_dir
        self._staging_dir = staging_dir
        self._router_paths = tuple(router_paths)
        self._baseline_files = tuple(baseline_files)
        self._assets_dir = assets_dir
        self._event_log = event_log
        self._language_roots: tuple[Path, ...] = ()

    @classmethod
    def from_config(
        cls,
        config: TabbyConfig,
        route_table: Sequence[RouteNode] = (),
        event_log: EventLog | None = None,
    ) -> StaticGenerate:
        """Create hooks wired to a site configuration and its route table."""
        return cls(
            config.options,
            config.output_path,
            config.staging_path,
            router_paths=flat_routes(route_table),
            baseline_files=(config.fallback_file,),
            assets_dir=config.bundle_dir,
            event_log=event_log,
        )

    @property
    def language_roots(self) -> tuple[Path, ...]:
        """Language root directories created by the last partitioning."""
        return self._language_roots

    # ------------------------------------------------------------------
    # Export hooks
    # ------------------------------------------------------------------

    def on_before_render(self, output_dir: Path) -> None:
        """Move everything already in *output_dir* into staging.

        A staging directory left over from an aborted export is removed first.

        Raises:
            ExportError: If the output cannot be moved.

        """
        t0 = time.perf_counter()
        print("  Staging resources", file=sys.stderr)

        entries = sorted(output_dir.iterdir())
        try:
            if self._staging_dir.exists():
                remove_tree(self._staging_dir)
            self._staging_dir.mkdir(parents=True)
            for entry in entries:
                move_tree(entry, self._staging_dir / entry.name)
        except OSError as exc:
            msg = f"Failed to stage {output_dir} into {self._staging_dir}: {exc}"
            raise ExportError(msg) from exc

        self._record("staged", str(self._staging_dir), len(entries), t0)

    def on_routes_requested(
        self,
        routes: Sequence[DeclaredRoute],
    ) -> tuple[LanguageVariant, ...]:
        """Return the language-expanded route set replacing *routes*."""
        t0 = time.perf_counter()
        variants = build_route_set(routes, self._router_paths, self._injector)
        print(
            f"  Routes: {len(routes)} declared → {len(variants)} language variants "
            f"({', '.join(self._options.generate_languages)})",
            file=sys.stderr,
        )
        self._record("routes_extended", "", len(variants), t0)
        return variants

    def on_route_failed(self, failure: RouteFailure) -> None:
        """Record a render failure; never raises for write errors."""
        t0 = time.perf_counter()
        print(f"  Route failed: {failure.route}", file=sys.stderr)
        record = write_error_record(self._output_dir, failure)
        self._record("route_failed", failure.route, len(failure.errors), t0)
        if record is None:
            self._record("error_record_failed", failure.route, 0, t0)

    def on_export_complete(self, result: ExportResult) -> None:
        """Partition the rendered output into per-language roots.

        Raises:
            ExportError: On any filesystem failure; output may be left
                partially partitioned.

        """
        t0 = time.perf_counter()
        files = (*self._baseline_files, *self._options.required_files_modules)
        languages = self._options.generate_languages

        print("  Copying into language roots", file=sys.stderr)
        roots = partition_languages(
            self._output_dir,
            self._staging_dir,
            languages,
            files,
            self._assets_dir,
        )
        self._language_roots = tuple(roots)

        self._record("files_collected", ", ".join(files), len(files), t0)
        for root in roots:
            self._record("language_copied", root.name, 1, t0)
        self._record("partitioned", str(self._output_dir), len(roots), t0)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _record(self, kind: ExportEventKind, detail: str, count: int, t0: float) -> None:
        if self._event_log is None:
            return
        self._event_log.append(ExportEvent(
            kind=kind,
            detail=detail,
            count=count,
            duration_ms=(time.perf_counter() - t0) * 1000,
            timestamp_ns=now_ns(),
        ))
