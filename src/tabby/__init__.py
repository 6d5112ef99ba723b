"""Tabby — multi-language static export.

Renders a site once per language variant and splits the output into one
directory per language, with the shared runtime bundle duplicated into each.

Quick start::

    import tabby

    tabby.build("my-site/", options={"generate_languages": ["ru", "ua"]})

Routes come from two places:

    pages/          page templates; ``_lang/`` marks the language segment
    routes.yaml     declared routes with payloads (article slugs, etc.)

"""

__version__ = "0.1.0"
__all__ = [
    "ModuleOptions",
    "TabbyConfig",
    "__version__",
    "build",
    "plan_routes",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tabby`` fast while providing a clean top-level API.
    """
    if name == "ModuleOptions":
        from tabby.config import ModuleOptions

        return ModuleOptions

    if name == "TabbyConfig":
        from tabby.config import TabbyConfig

        return TabbyConfig

    if name == "build":
        from tabby.app import build

        return build

    if name == "plan_routes":
        from tabby.app import plan_routes

        return plan_routes

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
