"""Asset handling — copy static files and the runtime bundle into the output.

Copies files from a source directory (the site's ``static/`` or ``assets/``)
into the export output, preserving directory structure.
"""

from __future__ import annotations

import shutil
import time
from pathlib import Path

from tabby.export.static import ExportedFile

# Names skipped during copying
_HIDDEN_PREFIX = "."
_SKIPPED_DIRS = frozenset({"__pycache__"})


def copy_static(
    source: Path,
    dest_root: Path,
    *,
    url_prefix: str = "",
) -> tuple[ExportedFile, ...]:
    """Recursively copy the files under *source* into *dest_root*.

    Skips dot-files and anything inside a dot-directory or ``__pycache__``.

    Args:
        source: Source directory (e.g., ``site_root/static/``).
        dest_root: Destination directory, created as needed.
        url_prefix: Prefix for the logical ``source_path`` of each record
            (e.g., ``"/_assets"``).

    Returns:
        Tuple of :class:`ExportedFile` entries, one per copied file.

    """
    if not source.is_dir():
        return ()

    results: list[ExportedFile] = []

    for src_file in sorted(source.rglob("*")):
        if not src_file.is_file():
            continue

        relative = src_file.relative_to(source)
        if any(
            part.startswith(_HIDDEN_PREFIX) or part in _SKIPPED_DIRS
            for part in relative.parts
        ):
            continue

        t0 = time.perf_counter()

        dest_file = dest_root / relative
        dest_file.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_file, dest_file)

        size = dest_file.stat().st_size
        elapsed = (time.perf_counter() - t0) * 1000

        results.append(ExportedFile(
            source_path=f"{url_prefix}/{relative.as_posix()}",
            output_path=dest_file,
            source_type="asset",
            size_bytes=size,
            duration_ms=elapsed,
        ))

    return tuple(results)
