"""Shared test fixtures for tabby."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a minimal multi-language site for testing.

    Returns the path to the site root with pages/, layouts/, static/,
    assets/ and a routes.yaml declaring one article.
    """
    pages = tmp_path / "pages"
    (pages / "_lang" / "news").mkdir(parents=True)
    (pages / "_lang" / "index.html").write_text(
        '{% extends "base.html" %}{% block content %}home:{{ lang }}{% endblock %}'
    )
    (pages / "_lang" / "about.html").write_text(
        '{% extends "base.html" %}{% block content %}about:{{ lang }}{% endblock %}'
    )
    (pages / "_lang" / "news" / "_slug.html").write_text(
        '{% extends "base.html" %}'
        "{% block content %}{{ params.slug }}:{{ title }}:{{ lang }}{% endblock %}"
    )

    layouts = tmp_path / "layouts"
    layouts.mkdir()
    (layouts / "base.html").write_text(
        '<html lang="{{ lang }}"><body>{% block content %}{% endblock %}</body></html>'
    )

    static = tmp_path / "static"
    static.mkdir()
    (static / "robots.txt").write_text("User-agent: *\n")

    assets = tmp_path / "assets" / "js"
    assets.mkdir(parents=True)
    (assets / "app.js").write_text("console.log('app');\n")

    (tmp_path / "routes.yaml").write_text(
        "routes:\n"
        "  - route: /news/foo/\n"
        "    payload:\n"
        "      title: Foo\n"
    )

    return tmp_path


def write_config(root: Path, text: str) -> Path:
    """Write a tabby.yaml into *root* and return its path."""
    path = root / "tabby.yaml"
    path.write_text(text)
    return path
