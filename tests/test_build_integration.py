"""End-to-end tests: build a site and inspect the partitioned output."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tabby.app import build, plan_routes
from tabby.export.failures import error_record_name
from tabby.observability.log import EventLog
from tests.conftest import write_config

_OPTIONS = {"generate_languages": ["ru", "ua"]}


def _snapshot(root: Path) -> dict[str, bytes]:
    """Map each file under *root* (relative posix path) to its contents."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def built(tmp_site: Path) -> Path:
    build(tmp_site, options=_OPTIONS)
    return tmp_site / "dist"


class TestPlanRoutes:
    """plan_routes — expanded route set without rendering."""

    def test_route_set(self, tmp_site: Path) -> None:
        routes = [(v.route, v.lang) for v in plan_routes(tmp_site, options=_OPTIONS)]
        assert routes == [
            ("/ru/news/foo/", "ru"),
            ("/ua/news/foo/", "ua"),
            ("/news/foo/", "ru"),
            ("/ru/about", "ru"),
            ("/ua/about", "ua"),
            ("/about", "ru"),
            ("/ru", "ru"),
            ("/ua", "ua"),
            ("/", "ru"),
        ]

    def test_payload_carries_declared_data(self, tmp_site: Path) -> None:
        variants = plan_routes(tmp_site, options=_OPTIONS)
        assert variants[1].payload == {"title": "Foo", "lang": "ua"}

    def test_options_from_config_file(self, tmp_site: Path) -> None:
        write_config(
            tmp_site,
            "static_generate:\n"
            "  generate_languages: [ru, ua]\n"
            "  default_language: ua\n"
            "  redirect_default_lang: false\n",
        )
        routes = [v.route for v in plan_routes(tmp_site)]
        assert "/ua/about" not in routes
        assert "/ru/about" in routes


class TestBuildOutput:
    """build — per-language roots with the shared bundle duplicated."""

    def test_language_pages(self, built: Path) -> None:
        assert (built / "ru" / "about" / "index.html").read_text() == (
            '<html lang="ru"><body>about:ru</body></html>'
        )
        assert "about:ua" in (built / "ua" / "about" / "index.html").read_text()
        assert "foo:Foo:ua" in (built / "ua" / "news" / "foo" / "index.html").read_text()

    def test_default_language_pages_unprefixed(self, built: Path) -> None:
        assert "about:ru" in (built / "about" / "index.html").read_text()
        assert "home:ru" in (built / "index.html").read_text()

    def test_bundle_in_every_language(self, built: Path) -> None:
        for lang in ("ru", "ua"):
            root = built / lang
            assert (root / "_assets" / "js" / "app.js").is_file()
            assert (root / "robots.txt").is_file()
            assert (root / "200.html").is_file()
        assert not (built / "_assets").exists()
        assert not (built / "200.html").exists()

    def test_payloads_in_every_language(self, built: Path) -> None:
        payload = built / "ua" / "_assets" / "static" / "ua" / "news" / "foo" / "payload.json"
        assert json.loads(payload.read_text()) == {"title": "Foo", "lang": "ua"}
        assert (built / "ru" / "_assets" / "static" / "ua" / "news" / "foo" / "payload.json").is_file()

    def test_staging_removed(self, tmp_site: Path, built: Path) -> None:
        assert not (tmp_site / "__export_dist").exists()

    def test_result_counts(self, tmp_site: Path) -> None:
        result = build(tmp_site, options=_OPTIONS)
        assert result.total_pages == 9
        assert result.failures == ()

    def test_required_files_duplicated(self, tmp_site: Path) -> None:
        build(
            tmp_site,
            options={**_OPTIONS, "required_files_modules": ["sitemap.xml"]},
            base_url="https://example.com",
        )
        for lang in ("ru", "ua"):
            sitemap = (tmp_site / "dist" / lang / "sitemap.xml").read_text()
            assert "https://example.com/ua/about/" in sitemap

    def test_sitemap_exclude(self, tmp_site: Path) -> None:
        write_config(tmp_site, "sitemap_exclude: [\"/*/news/*\", \"/news/*\"]\n")
        build(
            tmp_site,
            options={**_OPTIONS, "required_files_modules": ["sitemap.xml"]},
            base_url="https://example.com",
        )
        sitemap = (tmp_site / "dist" / "ua" / "sitemap.xml").read_text()
        assert "/news/" not in sitemap
        assert "https://example.com/ua/about/" in sitemap

    def test_rebuild_is_clean(self, tmp_site: Path) -> None:
        build(tmp_site, options=_OPTIONS)
        first = _snapshot(tmp_site / "dist")
        build(tmp_site, options=_OPTIONS)
        assert _snapshot(tmp_site / "dist") == first
        assert "ru/_assets/js/app.js" in first
        assert not any(path.startswith("ru/ru/") for path in first)

    def test_lang_dir_without_index(self, tmp_site: Path) -> None:
        (tmp_site / "pages" / "_lang" / "index.html").unlink()
        result = build(tmp_site, options=_OPTIONS)

        assert result.failures == ()
        dist = tmp_site / "dist"
        assert "about:ua" in (dist / "ua" / "about" / "index.html").read_text()
        assert "about:ru" in (dist / "about" / "index.html").read_text()

    def test_events_recorded(self, tmp_site: Path) -> None:
        log = EventLog()
        build(tmp_site, options=_OPTIONS, event_log=log)
        kinds = [e.kind for e in log.query()]
        assert kinds == [
            "staged",
            "routes_extended",
            "files_collected",
            "language_copied",
            "language_copied",
            "partitioned",
        ]


class TestBuildFailures:
    """build — failing routes are recorded and do not stop the export."""

    def test_error_records_written(self, tmp_site: Path) -> None:
        (tmp_site / "routes.yaml").write_text(
            "routes:\n"
            "  - /news/foo/\n"
            "  - /missing/\n"
        )
        result = build(tmp_site, options=_OPTIONS)

        failed = sorted(f.route for f in result.failures)
        assert failed == ["/missing/", "/ru/missing/", "/ua/missing/"]

        record = tmp_site / "dist" / error_record_name("/ua/missing/")
        data = json.loads(record.read_text())
        assert data["route"] == "/ua/missing/"
        assert data["errors"][0]["type"] == "unhandled"
        assert "No page template matches" in data["errors"][0]["description"]

        assert (tmp_site / "dist" / "ua" / "about" / "index.html").is_file()
