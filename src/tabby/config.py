"""Tabby configuration.

ModuleOptions holds the multi-language export options and is validated on
construction.  TabbyConfig is the site-level configuration, frozen after
creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from tabby._errors import ConfigError


@dataclass(frozen=True, slots=True)
class ModuleOptions:
    """Options for multi-language route expansion and output partitioning.

    Attributes:
        generate_languages: Language codes to export, in output order.
            Must contain at least one code.
        redirect_default_lang: When False, the default language is only
            reachable through the unprefixed route and never gets an
            explicit ``/<lang>/`` prefix.
        default_language: Language rendered for unprefixed routes.  Defaults
            to the first entry of ``generate_languages``.
        required_files_modules: Extra top-level output names (e.g.
            ``sitemap.xml``) duplicated into every language root.

    Raises:
        ConfigError: On an empty language list, a language code that is not
            a non-empty string, or a default language that is not one of
            ``generate_languages``.

    """

    generate_languages: tuple[str, ...] = ("ru",)
    redirect_default_lang: bool = True
    default_language: str | None = None
    required_files_modules: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("generate_languages", "required_files_modules"):
            value = getattr(self, name)
            if isinstance(value, str):
                msg = f"{name} must be a list, got the string {value!r}"
                raise ConfigError(msg)
            # Accept lists from config files; store tuples so options stay hashable.
            object.__setattr__(self, name, tuple(value))

        if len(self.generate_languages) < 1:
            msg = "At least one language should be configured."
            raise ConfigError(msg)

        for lang in self.generate_languages:
            # YAML reads a bare ``no`` as False
            if not isinstance(lang, str) or not lang:
                msg = f"Language codes must be non-empty strings, got {lang!r}"
                raise ConfigError(msg)

        if self.default_language is None:
            object.__setattr__(self, "default_language", self.generate_languages[0])
        elif self.default_language not in self.generate_languages:
            msg = (
                f"Default language {self.default_language!r} must be included "
                f"in list of languages {list(self.generate_languages)!r}."
            )
            raise ConfigError(msg)

    @property
    def languages_explicit(self) -> tuple[str, ...]:
        """Languages that get an explicit ``/<lang>/`` route prefix."""
        if self.redirect_default_lang:
            return self.generate_languages
        return tuple(
            lang for lang in self.generate_languages if lang != self.default_language
        )


@dataclass(frozen=True, slots=True)
class TabbyConfig:
    """Configuration for a tabby site export.

    Attributes:
        root: Path to the site root directory (contains pages/, static/, etc.).
              Always resolved to an absolute path on construction.
        output: Output directory for static export.
        pages_dir: Directory of page templates; its layout defines the route table.
        layouts_dir: Directory of shared templates (base layouts, fallback page).
        static_dir: Files copied verbatim into every language root.
        assets_dir: Site runtime bundle copied into ``bundle_dir``.
        bundle_dir: Name of the shared runtime asset directory in the output.
        staging_dir: Temporary holding directory used while partitioning.
        routes_file: YAML file listing declared routes with payloads.
        fallback_file: Name of the fallback page written at the output root.
        base_url: Base URL for the site (used for sitemap generation).
        sitemap_exclude: Glob patterns of page paths left out of the sitemap
            (e.g. ``"/*/promo/"``); matched with and without the trailing slash.
        options: Multi-language export options.

    """

    root: Path = field(default_factory=Path.cwd)
    output: Path = field(default_factory=lambda: Path("dist"))
    pages_dir: str = "pages"
    layouts_dir: str = "layouts"
    static_dir: str = "static"
    assets_dir: str = "assets"
    bundle_dir: str = "_assets"
    staging_dir: str = "__export_dist"
    routes_file: str = "routes.yaml"
    fallback_file: str = "200.html"
    base_url: str = ""
    sitemap_exclude: tuple[str, ...] = ()
    options: ModuleOptions = field(default_factory=ModuleOptions)

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if isinstance(self.sitemap_exclude, str):
            msg = f"sitemap_exclude must be a list, got the string {self.sitemap_exclude!r}"
            raise ConfigError(msg)
        object.__setattr__(self, "sitemap_exclude", tuple(self.sitemap_exclude))

    @property
    def pages_path(self) -> Path:
        """Absolute path to page templates directory."""
        return self.root / self.pages_dir

    @property
    def layouts_path(self) -> Path:
        """Absolute path to layouts directory."""
        return self.root / self.layouts_dir

    @property
    def static_path(self) -> Path:
        """Absolute path to static files directory."""
        return self.root / self.static_dir

    @property
    def assets_path(self) -> Path:
        """Absolute path to the runtime bundle source directory."""
        return self.root / self.assets_dir

    @property
    def routes_path(self) -> Path:
        """Absolute path to the declared routes file."""
        return self.root / self.routes_file

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output

    @property
    def staging_path(self) -> Path:
        """Absolute path to the staging directory.

        Lives next to the output directory, never inside it, so moving the
        output contents into staging cannot recurse.
        """
        return self.output_path.parent / self.staging_dir
