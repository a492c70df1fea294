#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/config.py
"""Configuration file discovery and loading for mdpreview hosts.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON, merging configurations with proper priority
handling, and turning the result into the frozen options objects used by the
parser, the renderer and the live session.

A configuration has up to four top-level keys::

    theme = "PureDark"          # Theme name, or true/false for dark/light

    [preview]                   # PreviewOptions fields
    base_font_size = 15

    [session]                   # SessionOptions fields
    debounce_ms = 250

    [markdown]                  # MarkdownParserOptions fields
    parse_math = false

In ``pyproject.toml`` the same keys live under ``[tool.mdpreview]``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional, Union

import yaml

from mdpreview.constants import CONFIG_ENV_VAR, CONFIG_FILENAMES, PYPROJECT_SECTION
from mdpreview.exceptions import ConfigurationError, ValidationError
from mdpreview.options.base import CloneFrozenMixin
from mdpreview.options.markdown import MarkdownParserOptions
from mdpreview.options.preview import PreviewOptions
from mdpreview.options.session import SessionOptions
from mdpreview.theme import Theme

logger = logging.getLogger(__name__)

_SECTION_CLASSES: dict[str, type[CloneFrozenMixin]] = {
    "preview": PreviewOptions,
    "session": SessionOptions,
    "markdown": MarkdownParserOptions,
}
_TOP_LEVEL_KEYS = frozenset({"theme", *_SECTION_CLASSES})


@dataclass(frozen=True)
class PreviewConfig:
    """Options objects built from a configuration mapping.

    Parameters
    ----------
    preview : PreviewOptions
        Renderer options
    session : SessionOptions
        Live session options
    markdown : MarkdownParserOptions
        Parser options
    theme : bool or Theme, default False
        Initial theme; ``False`` is light, ``True`` is dark
    source : Path or None, default None
        File the configuration was loaded from, if any

    """

    preview: PreviewOptions = field(default_factory=PreviewOptions)
    session: SessionOptions = field(default_factory=SessionOptions)
    markdown: MarkdownParserOptions = field(default_factory=MarkdownParserOptions)
    theme: Union[bool, Theme] = False
    source: Optional[Path] = None


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.mdpreview]`` section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from the section, or empty dict if not found

    Raises
    ------
    ConfigurationError
        If pyproject.toml cannot be parsed or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in pyproject.toml {pyproject_path}: {e}", config_path=str(pyproject_path), original_error=e
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Error reading pyproject.toml {pyproject_path}: {e}", config_path=str(pyproject_path), original_error=e
        ) from e

    tool = data.get("tool", {})
    if not isinstance(tool, dict) or PYPROJECT_SECTION not in tool:
        return {}

    config = tool[PYPROJECT_SECTION]
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"[tool.{PYPROJECT_SECTION}] section in {pyproject_path} must be a table, got {type(config).__name__}",
            config_path=str(pyproject_path),
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up the directory tree from ``start_dir`` to the filesystem root,
    checking each directory for configuration files in priority order:

    1. .mdpreview.toml
    2. .mdpreview.yaml
    3. .mdpreview.yml
    4. .mdpreview.json
    5. pyproject.toml (only with a ``[tool.mdpreview]`` section)

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except ConfigurationError as e:
                # An unrelated broken pyproject.toml must not stop discovery
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break

        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    Searches the parent directories of ``start_dir`` first (see
    ``find_config_in_parents``), then the user's home directory for the
    dedicated ``.mdpreview.*`` files.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for the parent search, defaults to the current
        working directory

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Auto-detects format based on file extension and name.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    ConfigurationError
        If the file cannot be read, parsed, or has an unsupported format

    Examples
    --------
    >>> config = load_config_file(".mdpreview.toml")
    >>> config.get("session", {}).get("debounce_ms")
    250

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file does not exist: {config_path}", config_path=str(config_path))

    if not config_path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {config_path}", config_path=str(config_path))

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    elif ext == ".toml":
        return _load_toml_config(config_path)
    elif ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    elif ext == ".json":
        return _load_json_config(config_path)

    raise ConfigurationError(
        f"Unsupported config file format: {ext}. Use .toml, .yaml or .json", config_path=str(config_path)
    )


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a TOML file."""
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Error reading TOML config {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Raises
    ------
    ConfigurationError
        If the file is not valid JSON or its root is not an object

    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Error reading JSON config {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"JSON config file must contain an object, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from a YAML file.

    An empty YAML file is an empty configuration.

    Raises
    ------
    ConfigurationError
        If the file is not valid YAML or its root is not a mapping

    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in config file {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Error reading YAML config {config_path}: {e}", config_path=str(config_path), original_error=e
        ) from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"YAML config file must contain a mapping, got {type(config).__name__}", config_path=str(config_path)
        )
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries with deep merging.

    The override dictionary takes precedence over base for conflicting keys.
    Nested dictionaries are merged recursively, not replaced entirely.

    Parameters
    ----------
    base : dict
        Base configuration dictionary
    override : dict
        Override configuration dictionary (higher priority)

    Returns
    -------
    dict
        Merged configuration dictionary

    Examples
    --------
    >>> base = {"session": {"debounce_ms": 300}, "theme": "GlassLight"}
    >>> override = {"session": {"sync_scroll": False}, "theme": "PureDark"}
    >>> merge_configs(base, override)
    {'session': {'debounce_ms': 300, 'sync_scroll': False}, 'theme': 'PureDark'}

    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def load_config_with_priority(
    explicit_path: Optional[Path | str] = None,
    env_var_path: Optional[str] = None,
    start_dir: Optional[Path] = None,
) -> tuple[Dict[str, Any], Optional[Path]]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path
    2. Environment variable config path (``MDPREVIEW_CONFIG`` when
       ``env_var_path`` is not given)
    3. Auto-discovered config file

    Parameters
    ----------
    explicit_path : Path or str, optional
        Explicit config file path
    env_var_path : str, optional
        Config file path taken from the environment
    start_dir : Path, optional
        Starting directory for auto-discovery

    Returns
    -------
    tuple of (dict, Path or None)
        Loaded configuration dictionary (empty if no config found) and the
        file it came from

    Raises
    ------
    ConfigurationError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        path = Path(explicit_path)
        return load_config_file(path), path

    if env_var_path is None:
        env_var_path = os.environ.get(CONFIG_ENV_VAR)
    if env_var_path:
        path = Path(env_var_path)
        return load_config_file(path), path

    discovered_path = discover_config_file(start_dir)
    if discovered_path:
        logger.debug(f"Discovered configuration file {discovered_path}")
        return load_config_file(discovered_path), discovered_path

    return {}, None


def _build_section(
    name: str, options_class: type[CloneFrozenMixin], values: Any, config_path: Optional[Path]
) -> CloneFrozenMixin:
    """Build one options object from its config section, rejecting unknown keys."""
    path_str = str(config_path) if config_path else None

    if not isinstance(values, dict):
        raise ConfigurationError(
            f"Config section [{name}] must be a table, got {type(values).__name__}", config_path=path_str
        )

    unknown = sorted(set(values) - options_class.field_names())
    if unknown:
        raise ConfigurationError(
            f"Unknown option(s) in [{name}]: {', '.join(unknown)}. "
            f"Valid options: {', '.join(sorted(options_class.field_names()))}",
            config_path=path_str,
        )

    try:
        return options_class(**values)
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"Invalid value in [{name}]: {e}", config_path=path_str, original_error=e) from e


def _parse_theme(value: Any, config_path: Optional[Path]) -> Union[bool, Theme]:
    """Convert the ``theme`` config value to a bool or ``Theme``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return Theme.from_name(value)
        except ValidationError as e:
            raise ConfigurationError(
                str(e), config_path=str(config_path) if config_path else None, original_error=e
            ) from e
    raise ConfigurationError(
        f"theme must be a theme name or a boolean, got {type(value).__name__}",
        config_path=str(config_path) if config_path else None,
    )


def options_from_config(config: Dict[str, Any], config_path: Optional[Path] = None) -> PreviewConfig:
    """Build options objects from a configuration mapping.

    Parameters
    ----------
    config : dict
        Configuration mapping (see module docstring for the layout)
    config_path : Path, optional
        File the mapping was loaded from, used in error messages

    Returns
    -------
    PreviewConfig
        Options objects; missing sections use defaults

    Raises
    ------
    ConfigurationError
        If a section or key is unknown, or a value fails validation

    """
    unknown = sorted(set(config) - _TOP_LEVEL_KEYS)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration key(s): {', '.join(unknown)}. Valid keys: {', '.join(sorted(_TOP_LEVEL_KEYS))}",
            config_path=str(config_path) if config_path else None,
        )

    built = {
        name: _build_section(name, options_class, config.get(name, {}), config_path)
        for name, options_class in _SECTION_CLASSES.items()
    }
    theme = _parse_theme(config["theme"], config_path) if "theme" in config else False

    return PreviewConfig(
        preview=built["preview"],  # type: ignore[arg-type]
        session=built["session"],  # type: ignore[arg-type]
        markdown=built["markdown"],  # type: ignore[arg-type]
        theme=theme,
        source=config_path,
    )


def load_options(
    explicit_path: Optional[Path | str] = None,
    start_dir: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> PreviewConfig:
    """Discover, load and apply configuration in one step.

    Parameters
    ----------
    explicit_path : Path or str, optional
        Explicit config file path; skips discovery
    start_dir : Path, optional
        Starting directory for auto-discovery
    overrides : dict, optional
        Mapping merged over the loaded configuration

    Returns
    -------
    PreviewConfig
        Options objects built from the merged configuration

    Examples
    --------
    >>> config = load_options(overrides={"session": {"debounce_ms": 150}})
    >>> config.session.debounce_ms
    150

    """
    config, path = load_config_with_priority(explicit_path, start_dir=start_dir)
    if overrides:
        config = merge_configs(config, overrides)
    return options_from_config(config, path)


__all__ = [
    "PreviewConfig",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
    "load_options",
    "merge_configs",
    "options_from_config",
]
