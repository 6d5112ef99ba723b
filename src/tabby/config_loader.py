"""Load TabbyConfig from tabby.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.  Language options
live in a ``static_generate`` section and are merged key by key.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import yaml

from tabby._errors import ConfigError
from tabby.config import ModuleOptions, TabbyConfig

_CONFIG_KEYS = frozenset({
    "output",
    "pages_dir",
    "layouts_dir",
    "static_dir",
    "assets_dir",
    "bundle_dir",
    "staging_dir",
    "routes_file",
    "fallback_file",
    "base_url",
    "sitemap_exclude",
})

_OPTION_KEYS = frozenset({
    "generate_languages",
    "redirect_default_lang",
    "default_language",
    "required_files_modules",
})

_OPTIONS_SECTION = "static_generate"


def load_config(
    root: Path,
    *,
    options: dict[str, Any] | None = None,
    **overrides: object,
) -> TabbyConfig:
    """Load TabbyConfig from root, optionally merging tabby.yaml.

    Looks for tabby.yaml, tabby.yml, or tabby.toml in root. If found, loads
    and merges with overrides. Overrides take precedence, both for top-level
    keys and for the individual ``static_generate`` options.

    Raises:
        ConfigError: On an unreadable config file, unknown keys, or invalid
            language options.

    """
    file_config = _read_tabby_config(root)
    file_options = file_config.pop(_OPTIONS_SECTION, None) or {}
    if not isinstance(file_options, dict):
        msg = f"{_OPTIONS_SECTION!r} must be a mapping, got {type(file_options).__name__}"
        raise ConfigError(msg)

    merged_options = {**file_options, **(options or {})}
    unknown = set(merged_options) - _OPTION_KEYS
    if unknown:
        msg = f"Unknown {_OPTIONS_SECTION} option(s): {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    merged = {**file_config, **overrides}
    # Normalize output to Path
    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    return TabbyConfig(root=root, options=ModuleOptions(**merged_options), **merged)


def _read_tabby_config(root: Path) -> dict[str, Any]:
    """Read tabby config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("tabby.yaml", "tabby.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "tabby.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read config file {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_tabby_section(data, path)


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Failed to read config file {path}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_tabby_section(data, path)


def _flatten_tabby_section(data: object, path: Path) -> dict[str, Any]:
    """Extract tabby.* keys into top-level config.

    Recognised keys may also appear at the top level of the file.
    """
    if not isinstance(data, dict):
        msg = f"Config file {path} must contain a mapping"
        raise ConfigError(msg)

    result: dict[str, Any] = {}
    tabby = data.get("tabby")
    if isinstance(tabby, dict):
        result.update(tabby)
    for k, v in data.items():
        if k in _CONFIG_KEYS or k == _OPTIONS_SECTION:
            result[k] = v

    unknown = set(result) - _CONFIG_KEYS - {_OPTIONS_SECTION}
    if unknown:
        msg = f"Unknown key(s) in {path}: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)
    return result
