"""Route expansion — enumerate, declare, and language-expand routes.

Public API::

    from tabby.routing import (
        LanguageInjector, build_route_set, discover_route_table, flat_routes,
    )

    table = discover_route_table(Path("my-site/pages"))
    injector = LanguageInjector(options)
    variants = build_route_set(declared, flat_routes(table), injector)
"""

from tabby.routing.builder import build_route_set, is_language_only
from tabby.routing.declared import DeclaredRoute, load_declared_routes
from tabby.routing.injector import LANG_PARAM, LanguageInjector, LanguageVariant
from tabby.routing.table import (
    RouteNode,
    build_route_table,
    discover_route_table,
    flat_routes,
    flatten,
)
from tabby.routing.template import (
    Param,
    compile_template,
    match_template,
    parse_template,
    template_params,
)

__all__ = [
    "LANG_PARAM",
    "DeclaredRoute",
    "LanguageInjector",
    "LanguageVariant",
    "Param",
    "RouteNode",
    "build_route_set",
    "build_route_table",
    "compile_template",
    "discover_route_table",
    "flat_routes",
    "flatten",
    "is_language_only",
    "load_declared_routes",
    "match_template",
    "parse_template",
    "template_params",
]
