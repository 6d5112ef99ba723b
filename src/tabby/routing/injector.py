"""Language parameter injection — expand one route into per-language variants.

Every route template gets an optional ``:lang`` prefix segment.  Expanding
the parametrized template yields one concrete route per explicit language
plus one unprefixed route rendered in the default language::

    generate_languages = ("ru", "ua"), redirect_default_lang = True

    /about/  ->  /:lang(ru|ua)?/about/
             ->  /ru/about/  (lang=ru)
                 /ua/about/  (lang=ua)
                 /about/     (lang=ru, default)

With ``redirect_default_lang = False`` the default language is left out of
the explicit set and is only reachable through the unprefixed route.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tabby._errors import RouteError
from tabby.routing.template import compile_template, template_params

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tabby._types import LanguageCode, Payload, RoutePath, RouteTemplate
    from tabby.config import ModuleOptions

LANG_PARAM = "lang"


@dataclass(frozen=True, slots=True)
class LanguageVariant:
    """A concrete route to render for one language.

    Attributes:
        route: Concrete path with the language segment substituted.
        payload: Render-time data; always carries ``lang``.

    """

    route: RoutePath
    payload: Payload = field(default_factory=dict)

    @property
    def lang(self) -> LanguageCode:
        """Language this variant is rendered in."""
        return str(self.payload[LANG_PARAM])


class LanguageInjector:
    """Adds the language parameter to routes and expands them per language.

    Args:
        options: Validated module options.

    """

    def __init__(self, options: ModuleOptions) -> None:
        self._options = options

    @property
    def options(self) -> ModuleOptions:
        return self._options

    def add_lang_param(self, path: RouteTemplate) -> RouteTemplate:
        """Prefix *path* with an optional language segment.

        The segment is constrained to the explicit languages when there are
        any; otherwise it accepts any value.

        Raises:
            RouteError: If *path* already declares a ``lang`` parameter.

        """
        if any(p.name == LANG_PARAM for p in template_params(path)):
            msg = f"Route {path!r} already declares the {LANG_PARAM!r} parameter"
            raise RouteError(msg)

        explicit = self._options.languages_explicit
        if explicit:
            langs = "|".join(re.escape(lang) for lang in explicit)
            return f"/:{LANG_PARAM}({langs})?{path}"
        return f"/:{LANG_PARAM}?{path}"

    def interpolate(
        self,
        path: RouteTemplate,
        payload: Mapping[str, Any] | None = None,
    ) -> list[LanguageVariant]:
        """Expand a ``lang``-parametrized *path* into concrete variants.

        Returns one variant per explicit language, in configured order,
        followed by the unprefixed default-language variant.  When *path*
        makes ``lang`` required, the default variant keeps its prefix.

        Raises:
            RouteError: If *path* has other required parameters or rejects
                one of the explicit languages.

        """
        to_path = compile_template(path)
        lang_required = any(
            p.name == LANG_PARAM and not p.optional for p in template_params(path)
        )
        base = dict(payload or {})
        variants: list[LanguageVariant] = []

        for lang in (*self._options.languages_explicit, None):
            resolved = self._options.default_language if lang is None else lang
            value = resolved if lang is None and lang_required else lang
            variants.append(LanguageVariant(
                route=to_path({LANG_PARAM: value}),
                payload={**base, LANG_PARAM: resolved},
            ))

        return variants
