"""Sitemap generation — produce sitemap.xml from rendered pages.

Lists every rendered page, language variants included.  Requires
``base_url`` to be configured; skips generation when it is empty.  List
``sitemap.xml`` in ``required_files_modules`` to have it copied into every
language root.
"""

from __future__ import annotations

import sys
import time
from fnmatch import fnmatchcase
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring

if TYPE_CHECKING:
    from tabby.export.static import ExportedFile

_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

SITEMAP_NAME = "sitemap.xml"


def is_excluded(path: str, patterns: Sequence[str]) -> bool:
    """Return True if *path* matches one of the glob *patterns*.

    ``*`` also matches ``/``, so ``/*/promo/`` covers every language root.
    Patterns are tried against the path with and without its trailing slash.
    """
    stripped = path.rstrip("/") or "/"
    candidates = {stripped, stripped if stripped == "/" else stripped + "/"}
    return any(
        fnmatchcase(candidate, pattern)
        for pattern in patterns
        for candidate in candidates
    )


def generate_sitemap(
    pages: Sequence[ExportedFile],
    base_url: str,
    exclude: Sequence[str] = (),
) -> str:
    """Generate a sitemap.xml string from exported page records.

    Only ``"page"`` records are listed, minus paths matching an *exclude*
    glob.  Paths get a trailing slash for clean URLs.

    """
    base = base_url.rstrip("/")
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d")

    urlset = Element("urlset")
    urlset.set("xmlns", _SITEMAP_NS)

    for page in pages:
        if page.source_type != "page" or is_excluded(page.source_path, exclude):
            continue

        url_el = SubElement(urlset, "url")
        loc = SubElement(url_el, "loc")

        path = page.source_path
        if not path.endswith("/"):
            path = path + "/"
        loc.text = base + path

        lastmod = SubElement(url_el, "lastmod")
        lastmod.text = now

    xml = tostring(urlset, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"


def write_sitemap(
    pages: Sequence[ExportedFile],
    base_url: str,
    output_dir: Path,
    *,
    exclude: Sequence[str] = (),
) -> ExportedFile | None:
    """Write sitemap.xml to the output directory.

    Returns *None* (with a note on stderr) if ``base_url`` is empty.

    """
    from tabby.export.static import ExportedFile

    if not base_url:
        print(
            "  Sitemap skipped — set base_url in config to enable",
            file=sys.stderr,
        )
        return None

    t0 = time.perf_counter()
    xml = generate_sitemap(pages, base_url, exclude)

    sitemap_path = output_dir / SITEMAP_NAME
    data = xml.encode("utf-8")
    sitemap_path.write_bytes(data)
    elapsed = (time.perf_counter() - t0) * 1000

    return ExportedFile(
        source_path="/" + SITEMAP_NAME,
        output_path=sitemap_path,
        source_type="sitemap",
        size_bytes=len(data),
        duration_ms=elapsed,
    )
