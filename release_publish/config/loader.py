"""Configuration file loading utilities.

Supports loading:
- release configuration from YAML or TOML files
- the package manifest (package.json)
"""

import json
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from release_publish.config.models import PackageManifest, ReleaseConfig
from release_publish.exceptions import ConfigurationError

SEARCH_PATHS = [
    "config/release_conf.yml",
    "config/release_conf.yaml",
    "release_conf.yml",
    "release_conf.yaml",
    "config/release.toml",
    "release.toml",
]


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed YAML as dictionary

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if data else {}
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            fix_hint="Create the file or omit --config to use defaults",
        ) from None
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {path}",
            details=str(e),
            fix_hint="Check YAML syntax at the indicated line",
        ) from e


def load_toml(path: Path) -> dict[str, Any]:
    """Load a TOML configuration file.

    Args:
        path: Path to the TOML file

    Returns:
        Parsed TOML as dictionary

    Raises:
        ConfigurationError: If file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            data: dict[str, Any] = tomllib.load(f)
            return data
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {path}",
            fix_hint="Create the file or omit --config to use defaults",
        ) from None
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(
            f"Invalid TOML in {path}",
            details=str(e),
            fix_hint="Check TOML syntax at the indicated line",
        ) from e


def find_config(project_root: Path) -> Path | None:
    """Return the first configuration file found in the standard locations."""
    for search_path in SEARCH_PATHS:
        candidate = project_root / search_path
        if candidate.exists():
            return candidate
    return None


def load_config(
    path: Path | None = None,
    project_root: Path | None = None,
) -> ReleaseConfig:
    """Load release configuration from file.

    An explicit path must exist. Without one, the standard locations in
    SEARCH_PATHS are tried in order and built-in defaults are used when
    none of them exists.

    Args:
        path: Explicit path to config file
        project_root: Project root directory (defaults to cwd)

    Returns:
        Validated ReleaseConfig instance

    Raises:
        ConfigurationError: If an explicit config is missing or any config is invalid
    """
    if project_root is None:
        project_root = Path.cwd()

    config_path: Path | None
    if path is not None:
        config_path = Path(path)
        if not config_path.is_absolute():
            config_path = project_root / config_path
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                fix_hint="Create the file or omit --config to use defaults",
            )
    else:
        config_path = find_config(project_root)

    if config_path is None:
        return ReleaseConfig()

    if config_path.suffix in (".yml", ".yaml"):
        data = load_yaml(config_path)
    elif config_path.suffix == ".toml":
        data = load_toml(config_path)
    else:
        raise ConfigurationError(
            f"Unsupported config format: {config_path.suffix}",
            fix_hint="Use .yml, .yaml, or .toml extension",
        )

    try:
        return ReleaseConfig(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in {config_path}",
            details=str(e),
            fix_hint="Check the configuration values match expected types",
        ) from e


def load_manifest(project_root: Path) -> PackageManifest:
    """Load package.json from the project root.

    Args:
        project_root: Directory containing package.json

    Returns:
        Validated, immutable PackageManifest

    Raises:
        ConfigurationError: If package.json is missing, unreadable or invalid
    """
    manifest_path = project_root / "package.json"
    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"package.json not found: {manifest_path}",
            fix_hint="Run the publisher from the package directory or pass --project-root",
        ) from None
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigurationError(
            f"Could not read {manifest_path}",
            details=str(e),
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid package.json: {manifest_path}",
            details="Top-level value must be an object",
        )

    try:
        return PackageManifest.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid package.json: {manifest_path}",
            details=str(e),
            fix_hint="package.json needs non-empty 'name' and 'version' fields",
        ) from e
