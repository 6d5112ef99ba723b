"""Page rendering — resolve a concrete route to its page template and render it.

Page templates live in ``pages/`` and may extend shared layouts from
``layouts/``.  A route is matched against the flattened route table, static
templates before parametrized ones, and the first match is rendered with::

    route    the concrete route ("/ua/news/articles/foo/")
    lang     language of the variant
    params   captured route parameters ({"lang": "ua", "slug": "foo"})
    payload  the route payload; its keys are also top-level variables
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from tabby._errors import RouteError
from tabby.routing.injector import LANG_PARAM
from tabby.routing.table import flatten
from tabby.routing.template import match_template, template_params

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from tabby.routing.table import RouteNode

_FALLBACK_TEMPLATE = "fallback.html"

_FALLBACK_HTML = (
    "<!DOCTYPE html>\n<html>\n<head><meta charset=\"utf-8\"></head>\n"
    "<body><div id=\"app\"></div></body>\n</html>\n"
)


class TemplateRenderer:
    """Renders routes through Jinja2 page templates.

    Args:
        pages_dir: Directory the route table was discovered from.
        layouts_dir: Directory of shared layouts (may not exist).
        route_table: Route table whose leaves carry their template source.
        languages: Accepted values of the ``lang`` parameter; any value when empty.

    """

    def __init__(
        self,
        pages_dir: Path,
        layouts_dir: Path,
        route_table: Sequence[RouteNode],
        languages: Sequence[str] = (),
    ) -> None:
        self._pages_dir = pages_dir
        self._languages = frozenset(languages)
        self._env = Environment(
            loader=FileSystemLoader([str(pages_dir), str(layouts_dir)]),
            autoescape=select_autoescape(["html"]),
        )
        leaves = [
            (template, node.source)
            for template, node in flatten(route_table)
            if node.source is not None
        ]
        # Static pages win over parametrized ones; sort is stable
        self._candidates = sorted(leaves, key=lambda item: len(template_params(item[0])))

    def resolve(self, route: str) -> tuple[str, dict[str, str]]:
        """Return the template name and captured parameters for *route*.

        Raises:
            RouteError: If no page template matches.

        """
        for template, source in self._candidates:
            params = match_template(template, route)
            if params is None:
                continue
            lang = params.get(LANG_PARAM)
            if self._languages and lang is not None and lang not in self._languages:
                continue
            return source.relative_to(self._pages_dir).as_posix(), params
        msg = f"No page template matches route {route!r}"
        raise RouteError(msg)

    def render(self, route: str, payload: Mapping[str, Any]) -> str:
        """Render the page for *route*."""
        name, params = self.resolve(route)
        context: dict[str, Any] = {
            **payload,
            "route": route,
            "params": params,
            "payload": payload,
            LANG_PARAM: payload.get(LANG_PARAM, params.get(LANG_PARAM)),
        }
        return self._env.get_template(name).render(context)

    def render_fallback(self) -> str:
        """Render ``fallback.html`` from layouts, or a bare app shell."""
        try:
            template = self._env.get_template(_FALLBACK_TEMPLATE)
        except TemplateNotFound:
            return _FALLBACK_HTML
        return template.render()
