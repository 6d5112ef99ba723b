"""Tests for tabby.export.assets — static file and bundle copying."""

from __future__ import annotations

from pathlib import Path

from tabby.export.assets import copy_static


class TestCopyStatic:
    """copy_static — recursive copy preserving directory structure."""

    def test_copies_files(self, tmp_path: Path) -> None:
        src = tmp_path / "static"
        (src / "css").mkdir(parents=True)
        (src / "css" / "main.css").write_text("h1 {}")
        (src / "robots.txt").write_text("User-agent: *")

        results = copy_static(src, tmp_path / "dist")

        assert (tmp_path / "dist" / "css" / "main.css").read_text() == "h1 {}"
        assert (tmp_path / "dist" / "robots.txt").exists()
        assert sorted(r.source_path for r in results) == ["/css/main.css", "/robots.txt"]
        assert all(r.source_type == "asset" for r in results)

    def test_url_prefix(self, tmp_path: Path) -> None:
        src = tmp_path / "assets"
        (src / "js").mkdir(parents=True)
        (src / "js" / "app.js").write_text("app")

        results = copy_static(src, tmp_path / "dist" / "_assets", url_prefix="/_assets")

        assert results[0].source_path == "/_assets/js/app.js"
        assert results[0].output_path == tmp_path / "dist" / "_assets" / "js" / "app.js"
        assert results[0].size_bytes == 3

    def test_skips_hidden_and_pycache(self, tmp_path: Path) -> None:
        src = tmp_path / "static"
        (src / ".git").mkdir(parents=True)
        (src / ".git" / "HEAD").write_text("ref")
        (src / "__pycache__").mkdir()
        (src / "__pycache__" / "x.pyc").write_text("")
        (src / ".DS_Store").write_text("")
        (src / "_headers").write_text("/*\n")

        results = copy_static(src, tmp_path / "dist")

        assert [r.source_path for r in results] == ["/_headers"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert copy_static(tmp_path / "nonexistent", tmp_path / "dist") == ()
