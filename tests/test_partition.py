"""Tests for tabby.export.partition — per-language output partitioning."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from tabby._errors import ExportError
from tabby.export.partition import (
    copy_to_languages,
    copy_tree,
    move_tree,
    partition_languages,
)


def _files(root: Path) -> list[str]:
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


@pytest.fixture
def rendered(tmp_path: Path) -> tuple[Path, Path]:
    """Output directory after rendering, plus a staging dir with the bundle."""
    output = tmp_path / "dist"
    (output / "ru" / "about").mkdir(parents=True)
    (output / "ru" / "about" / "index.html").write_text("ru about")
    (output / "ua" / "about").mkdir(parents=True)
    (output / "ua" / "about" / "index.html").write_text("ua about")
    (output / "about").mkdir()
    (output / "about" / "index.html").write_text("default about")
    (output / "200.html").write_text("fallback")
    (output / "sitemap.xml").write_text("<urlset/>")
    (output / "_assets" / "static" / "about").mkdir(parents=True)
    (output / "_assets" / "static" / "about" / "payload.json").write_text("{}")

    staging = tmp_path / "__export_dist"
    (staging / "_assets" / "js").mkdir(parents=True)
    (staging / "_assets" / "js" / "app.js").write_text("app")
    (staging / "robots.txt").write_text("User-agent: *")
    return output, staging


class TestTreeOperations:
    """copy_tree / move_tree — file and directory copies."""

    def test_copy_file(self, tmp_path: Path) -> None:
        src = tmp_path / "a.txt"
        src.write_text("a")
        copy_tree(src, tmp_path / "out" / "a.txt")
        assert (tmp_path / "out" / "a.txt").read_text() == "a"
        assert src.exists()

    def test_copy_directory_merges(self, tmp_path: Path) -> None:
        (tmp_path / "src" / "sub").mkdir(parents=True)
        (tmp_path / "src" / "sub" / "new.txt").write_text("new")
        (tmp_path / "dst" / "sub").mkdir(parents=True)
        (tmp_path / "dst" / "sub" / "old.txt").write_text("old")

        copy_tree(tmp_path / "src", tmp_path / "dst")

        assert _files(tmp_path / "dst") == ["sub/new.txt", "sub/old.txt"]

    def test_move_removes_source(self, tmp_path: Path) -> None:
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "f.txt").write_text("f")
        move_tree(tmp_path / "src", tmp_path / "dst")
        assert not (tmp_path / "src").exists()
        assert (tmp_path / "dst" / "f.txt").read_text() == "f"

    def test_move_missing_source_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            move_tree(tmp_path / "nope.txt", tmp_path / "dst.txt")


class TestCopyToLanguages:
    """copy_to_languages — last copy consumes staging."""

    def test_staging_survives_until_last_copy(self, tmp_path: Path) -> None:
        staging = tmp_path / "staging"
        staging.mkdir()
        (staging / "f.txt").write_text("f")
        output = tmp_path / "out"

        calls: list[tuple[str, bool]] = []
        real_copy = copy_tree

        def spy_copy(src: Path, dst: Path) -> None:
            calls.append((dst.name, src.exists()))
            real_copy(src, dst)

        with patch("tabby.export.partition.copy_tree", side_effect=spy_copy):
            roots = copy_to_languages(staging, output, ["ru", "ua", "kz"])

        assert [r.name for r in roots] == ["ru", "ua", "kz"]
        assert calls == [("ru", True), ("ua", True), ("kz", True)]
        assert not staging.exists()

    def test_single_language_moves(self, tmp_path: Path) -> None:
        staging = tmp_path / "staging"
        staging.mkdir()
        (staging / "f.txt").write_text("f")

        copy_to_languages(staging, tmp_path / "out", ["ru"])

        assert (tmp_path / "out" / "ru" / "f.txt").exists()
        assert not staging.exists()

    def test_copy_failure_is_fatal(self, tmp_path: Path) -> None:
        staging = tmp_path / "staging"
        staging.mkdir()
        with (
            patch("tabby.export.partition.copy_tree", side_effect=OSError("disk full")),
            pytest.raises(ExportError, match="disk full"),
        ):
            copy_to_languages(staging, tmp_path / "out", ["ru", "ua"])


class TestPartitionLanguages:
    """partition_languages — full sequence on a rendered tree."""

    def test_layout(self, rendered: tuple[Path, Path]) -> None:
        output, staging = rendered

        roots = partition_languages(
            output, staging, ["ru", "ua"], ["200.html", "sitemap.xml"], "_assets",
        )

        assert roots == [output / "ru", output / "ua"]
        assert not staging.exists()
        assert not (output / "_assets").exists()
        assert not (output / "200.html").exists()
        assert not (output / "sitemap.xml").exists()
        for lang in ("ru", "ua"):
            assert _files(output / lang) == [
                "200.html",
                "_assets/js/app.js",
                "_assets/static/about/payload.json",
                "about/index.html",
                "robots.txt",
                "sitemap.xml",
            ]
        assert (output / "ru" / "about" / "index.html").read_text() == "ru about"
        assert (output / "about" / "index.html").read_text() == "default about"

    def test_identical_assets_per_language(self, rendered: tuple[Path, Path]) -> None:
        output, staging = rendered
        partition_languages(output, staging, ["ru", "ua", "kz"], ["200.html"], "_assets")

        bundles = [_files(output / lang / "_assets") for lang in ("ru", "ua", "kz")]
        assert bundles[0] == bundles[1] == bundles[2]
        top_dirs = sorted(p.name for p in output.iterdir() if p.is_dir())
        assert top_dirs == ["about", "kz", "ru", "ua"]

    def test_missing_required_file_is_fatal(self, rendered: tuple[Path, Path]) -> None:
        output, staging = rendered
        with pytest.raises(ExportError, match="manifest.json"):
            partition_languages(output, staging, ["ru"], ["manifest.json"], "_assets")
