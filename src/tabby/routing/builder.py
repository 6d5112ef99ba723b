"""Route set builder — the final list of concrete routes to render.

Merges two sources:

1. Declared routes (content provider), each prefixed with the optional
   language segment and expanded per language.
2. Router-derived templates whose only parameter is ``lang``.  Templates
   that combine ``lang`` with another parameter (``/:lang?/news/:slug``)
   cannot be enumerated without the content provider and are skipped, as
   are templates without a ``lang`` parameter.

The result replaces the export pipeline's default route list entirely.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tabby.routing.injector import LANG_PARAM
from tabby.routing.template import template_params

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from tabby._types import RouteTemplate
    from tabby.routing.declared import DeclaredRoute
    from tabby.routing.injector import LanguageInjector, LanguageVariant


def is_language_only(template: RouteTemplate) -> bool:
    """Return True if *template*'s only parameter is ``lang``."""
    params = template_params(template)
    return len(params) == 1 and params[0].name == LANG_PARAM


def build_route_set(
    declared: Iterable[DeclaredRoute],
    router_paths: Sequence[RouteTemplate],
    injector: LanguageInjector,
) -> tuple[LanguageVariant, ...]:
    """Compute the expanded route set.

    Declared routes come first, router-derived ones after.  When two
    variants resolve to the same concrete route (ignoring a trailing
    slash), the first one is kept.

    Raises:
        RouteError: If a declared route already carries a ``lang`` parameter.

    """
    expanded: list[LanguageVariant] = []

    for route in declared:
        with_lang = injector.add_lang_param(route.route)
        expanded.extend(injector.interpolate(with_lang, route.payload))

    for template in router_paths:
        if is_language_only(template):
            expanded.extend(injector.interpolate(template))

    seen: set[str] = set()
    result: list[LanguageVariant] = []
    for variant in expanded:
        # /ru/about and /ru/about/ render to the same file
        key = variant.route.rstrip("/") or "/"
        if key in seen:
            continue
        seen.add(key)
        result.append(variant)
    return tuple(result)
