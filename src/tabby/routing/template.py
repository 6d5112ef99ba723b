"""Route path templates — parse, compile, and match ``:param`` patterns.

Template syntax::

    /about              static path
    /news/:slug         required parameter (matches one path segment)
    /:lang?/about       optional parameter
    /:lang(ru|ua)?/     optional parameter constrained by a regex

A ``/`` immediately before a parameter belongs to that parameter, so an
omitted optional parameter drops its slash too::

    >>> to_path = compile_template("/:lang?/about")
    >>> to_path({"lang": "ua"}), to_path({})
    ('/ua/about', '/about')

"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from urllib.parse import quote, unquote

from tabby._errors import RouteError

_PARAM_RE = re.compile(r":(\w+)(?:\(((?:\\.|[^\\()])+)\))?(\?)?")

# Default parameter pattern: one path segment
_SEGMENT_PATTERN = "[^/]+?"


@dataclass(frozen=True, slots=True)
class Param:
    """A named parameter token in a route template.

    Attributes:
        name: Parameter name (``lang`` for ``:lang?``).
        prefix: Literal emitted before the value (``"/"`` or ``""``).
        pattern: Regex the value must fully match.
        optional: True for ``:name?`` parameters.

    """

    name: str
    prefix: str
    pattern: str
    optional: bool


type Token = str | Param


def parse_template(template: str) -> tuple[Token, ...]:
    """Split *template* into literal strings and :class:`Param` tokens."""
    tokens: list[Token] = []
    last = 0
    for m in _PARAM_RE.finditer(template):
        literal = template[last:m.start()]
        prefix = ""
        if literal.endswith("/"):
            prefix = "/"
            literal = literal[:-1]
        if literal:
            tokens.append(literal)
        tokens.append(Param(
            name=m.group(1),
            prefix=prefix,
            pattern=m.group(2) or _SEGMENT_PATTERN,
            optional=m.group(3) == "?",
        ))
        last = m.end()

    tail = template[last:]
    if tail:
        tokens.append(tail)
    return tuple(tokens)


def template_params(template: str) -> tuple[Param, ...]:
    """Return the parameters declared in *template*, in order."""
    return tuple(t for t in parse_template(template) if isinstance(t, Param))


def compile_template(template: str) -> Callable[[Mapping[str, object] | None], str]:
    """Compile *template* into a function that fills in parameter values.

    The returned function raises :class:`RouteError` when a required
    parameter is missing or an encoded value does not match its pattern.
    Values are percent-encoded.  An empty result is normalised to ``/``.

    """
    tokens = parse_template(template)
    matchers = {
        t.name: re.compile(f"(?:{t.pattern})")
        for t in tokens
        if isinstance(t, Param)
    }

    def to_path(params: Mapping[str, object] | None = None) -> str:
        values = params or {}
        parts: list[str] = []
        for token in tokens:
            if isinstance(token, str):
                parts.append(token)
                continue

            value = values.get(token.name)
            if value is None:
                if token.optional:
                    continue
                msg = f"Missing value for parameter {token.name!r} in route {template!r}"
                raise RouteError(msg)

            text = quote(str(value), safe="")
            if not matchers[token.name].fullmatch(text):
                msg = (
                    f"Value {text!r} for parameter {token.name!r} does not match "
                    f"{token.pattern!r} in route {template!r}"
                )
                raise RouteError(msg)
            parts.append(token.prefix + text)

        return "".join(parts) or "/"

    return to_path


def to_regex(template: str) -> re.Pattern[str]:
    """Build a regex matching concrete paths for *template*.

    Matching is non-strict: a trailing slash is optional.
    """
    tokens = list(parse_template(template))
    if tokens and isinstance(tokens[-1], str) and tokens[-1].endswith("/"):
        tokens[-1] = tokens[-1][:-1]

    body: list[str] = []
    for token in tokens:
        if isinstance(token, str):
            body.append(re.escape(token))
            continue
        group = f"(?P<{token.name}>{token.pattern})"
        if token.optional:
            body.append(f"(?:{re.escape(token.prefix)}{group})?")
        else:
            body.append(re.escape(token.prefix) + group)

    return re.compile("^" + "".join(body) + "/?$")


def match_template(template: str, path: str) -> dict[str, str] | None:
    """Match a concrete *path* against *template*.

    Returns the decoded parameter values (omitted optionals are left out),
    or *None* if the path does not match.
    """
    m = to_regex(template).match(path)
    if m is None:
        return None
    return {k: unquote(v) for k, v in m.groupdict().items() if v is not None}
