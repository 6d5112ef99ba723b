"""Output partitioning — split one rendered tree into per-language roots.

After rendering, the output directory holds language-prefixed pages
(``ru/about/index.html``) alongside per-pass artifacts (fallback page,
sitemap, runtime bundle).  Partitioning:

1. moves the baseline files and required module files into staging;
2. moves the shared runtime bundle (``_assets``) into staging;
3. copies staging into ``<output>/<lang>`` for every language in order.
   Every copy but the last leaves staging intact; the last one moves it,
   so staging is gone once partitioning returns.

Filesystem errors are fatal.  Nothing is rolled back.
"""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

from tabby._errors import ExportError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def copy_tree(src: Path, dst: Path) -> None:
    """Copy a file or directory tree to *dst*, merging into existing dirs."""
    if src.is_dir():
        shutil.copytree(src, dst, dirs_exist_ok=True)
    else:
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst)


def remove_tree(path: Path) -> None:
    """Remove a file or directory tree."""
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink()


def move_tree(src: Path, dst: Path) -> None:
    """Copy *src* to *dst*, then remove *src*."""
    copy_tree(src, dst)
    remove_tree(src)


def collect_into_staging(
    output_dir: Path,
    staging_dir: Path,
    names: Sequence[str],
) -> None:
    """Move top-level output entries *names* into staging.

    Raises:
        ExportError: If an entry is missing or cannot be moved.

    """
    for name in names:
        try:
            move_tree(output_dir / name, staging_dir / name)
        except OSError as exc:
            msg = f"Failed to move {name!r} from {output_dir} into staging: {exc}"
            raise ExportError(msg) from exc


def copy_to_languages(
    staging_dir: Path,
    output_dir: Path,
    languages: Sequence[str],
) -> list[Path]:
    """Copy staging into one directory per language; the last copy consumes it.

    Returns:
        The language root directories, in order.

    Raises:
        ExportError: If a copy or the final removal fails.

    """
    roots: list[Path] = []
    last = len(languages) - 1
    for i, lang in enumerate(languages):
        dest = output_dir / lang
        try:
            if i == last:
                move_tree(staging_dir, dest)
            else:
                copy_tree(staging_dir, dest)
        except OSError as exc:
            msg = f"Failed to copy staging into language root {dest}: {exc}"
            raise ExportError(msg) from exc
        roots.append(dest)
    return roots


def partition_languages(
    output_dir: Path,
    staging_dir: Path,
    languages: Sequence[str],
    files: Sequence[str],
    assets_dir: str,
) -> list[Path]:
    """Run the full partitioning sequence.

    Args:
        output_dir: Render output directory.
        staging_dir: Staging directory holding the pre-render output.
        languages: Language codes; one output root per code, in order.
        files: Top-level output files to duplicate into every language.
        assets_dir: Name of the shared runtime bundle directory.

    Returns:
        The language root directories, in order.

    Raises:
        ExportError: On any filesystem failure.

    """
    staging_dir.mkdir(parents=True, exist_ok=True)
    collect_into_staging(output_dir, staging_dir, files)
    collect_into_staging(output_dir, staging_dir, [assets_dir])
    return copy_to_languages(staging_dir, output_dir, languages)
