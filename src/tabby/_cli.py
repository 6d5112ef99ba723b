"""Tabby CLI — tabby build / tabby routes.

Entry point for the ``tabby`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the tabby CLI."""
    parser = argparse.ArgumentParser(
        prog="tabby",
        description="Multi-language static export with per-language output roots.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tabby build
    build_parser = subparsers.add_parser(
        "build",
        help="Export site as static HTML files, one directory per language",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument(
        "--base-url", default=None, help="Base URL for sitemap generation",
    )
    _add_language_args(build_parser)

    # tabby routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Print the expanded route set without rendering",
    )
    routes_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    _add_language_args(routes_parser)

    return parser


def _add_language_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--lang",
        dest="languages",
        action="append",
        default=None,
        metavar="CODE",
        help="Language to generate (repeatable; overrides config)",
    )
    parser.add_argument(
        "--default-lang", default=None, metavar="CODE", help="Default language",
    )
    parser.add_argument(
        "--no-redirect-default-lang",
        dest="redirect_default_lang",
        action="store_false",
        default=None,
        help="Serve the default language only from unprefixed routes",
    )


def _get_version() -> str:
    """Get the package version."""
    from tabby import __version__

    return __version__


def _option_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect ``static_generate`` overrides given on the command line."""
    options: dict[str, Any] = {}
    if args.languages:
        options["generate_languages"] = args.languages
    if args.default_lang is not None:
        options["default_language"] = args.default_lang
    if args.redirect_default_lang is not None:
        options["redirect_default_lang"] = args.redirect_default_lang
    return options


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from tabby._errors import TabbyError
    from tabby.app import build, plan_routes

    options = _option_overrides(args)
    try:
        if args.command == "build":
            overrides: dict[str, Any] = {}
            if args.output is not None:
                overrides["output"] = args.output
            if args.base_url is not None:
                overrides["base_url"] = args.base_url
            build(root=args.root, options=options, **overrides)
        elif args.command == "routes":
            for variant in plan_routes(root=args.root, options=options):
                print(f"{variant.route}\t{variant.lang}")
    except TabbyError as exc:
        print(f"tabby: error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
