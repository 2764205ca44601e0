"""Unit tests for configuration and manifest loading.

Tests cover:
- YAML file loading (load_yaml)
- TOML file loading (load_toml)
- Configuration file search and defaults (load_config)
- package.json loading (load_manifest)
"""

import json
from pathlib import Path

import pytest
import yaml

from release_publish.config.loader import load_config, load_manifest, load_toml, load_yaml
from release_publish.exceptions import ConfigurationError


class TestLoadYaml:
    """Tests for load_yaml function."""

    def test_load_valid_yaml(self, temp_dir: Path) -> None:
        yaml_file = temp_dir / "test.yml"
        yaml_file.write_text(yaml.safe_dump({"version": {"tag_prefix": "v"}}))

        result = load_yaml(yaml_file)
        assert result["version"]["tag_prefix"] == "v"

    def test_load_empty_yaml(self, temp_dir: Path) -> None:
        yaml_file = temp_dir / "empty.yml"
        yaml_file.write_text("")

        assert load_yaml(yaml_file) == {}

    def test_load_missing_yaml(self, temp_dir: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_yaml(temp_dir / "nonexistent.yml")
        assert "not found" in str(exc_info.value)
        assert exc_info.value.fix_hint is not None

    def test_load_invalid_yaml(self, temp_dir: Path) -> None:
        yaml_file = temp_dir / "invalid.yml"
        yaml_file.write_text("foo: [bar: baz")

        with pytest.raises(ConfigurationError) as exc_info:
            load_yaml(yaml_file)
        assert "Invalid YAML" in exc_info.value.message


class TestLoadToml:
    """Tests for load_toml function."""

    def test_load_valid_toml(self, temp_dir: Path) -> None:
        toml_file = temp_dir / "release.toml"
        toml_file.write_text('[npm]\ncommand = "pnpm"\n')

        assert load_toml(toml_file) == {"npm": {"command": "pnpm"}}

    def test_load_invalid_toml(self, temp_dir: Path) -> None:
        toml_file = temp_dir / "release.toml"
        toml_file.write_text("[npm\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_toml(toml_file)
        assert "Invalid TOML" in exc_info.value.message


class TestLoadConfig:
    """Tests for load_config function."""

    def test_no_config_file_uses_defaults(self, project_dir: Path, clean_env: None) -> None:
        config = load_config(project_root=project_dir)
        assert config.get_branch("main") is not None

    def test_finds_config_in_standard_location(
        self, release_config: Path, nodejs_project: Path, clean_env: None
    ) -> None:
        config = load_config(project_root=nodejs_project)

        main = config.get_branch("main")
        assert main is not None
        assert main.alias_tags == ["stable"]
        assert config.get_branch("master") is None

    def test_explicit_relative_path(self, project_dir: Path, clean_env: None) -> None:
        (project_dir / "custom.yml").write_text(
            yaml.safe_dump({"branches": [{"name": "release", "tag": "beta"}]})
        )

        config = load_config(Path("custom.yml"), project_root=project_dir)

        branch = config.get_branch("release")
        assert branch is not None
        assert branch.tag == "beta"

    def test_explicit_missing_path_raises(self, project_dir: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("missing.yml"), project_root=project_dir)
        assert "not found" in exc_info.value.message

    def test_toml_config(self, project_dir: Path, clean_env: None) -> None:
        (project_dir / "release.toml").write_text(
            '[[branches]]\nname = "main"\ntag = "latest"\naliasTags = ["stable"]\n'
        )

        config = load_config(project_root=project_dir)

        main = config.get_branch("main")
        assert main is not None
        assert main.alias_tags == ["stable"]

    def test_unsupported_extension(self, project_dir: Path) -> None:
        (project_dir / "release.json").write_text("{}")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(Path("release.json"), project_root=project_dir)
        assert "Unsupported config format" in exc_info.value.message

    def test_invalid_values_raise_configuration_error(
        self, project_dir: Path, clean_env: None
    ) -> None:
        (project_dir / "release_conf.yml").write_text(
            yaml.safe_dump({"github": {"timeout": 0}})
        )

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(project_root=project_dir)
        assert "Invalid configuration" in exc_info.value.message


class TestLoadManifest:
    """Tests for load_manifest function."""

    def test_loads_package_json(self, nodejs_project: Path) -> None:
        manifest = load_manifest(nodejs_project)

        assert manifest.name == "@scope/pkg"
        assert manifest.version == "2.0.0"
        assert manifest.registry_url == "https://npm.example.com"

    def test_missing_package_json(self, project_dir: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_manifest(project_dir)
        assert "package.json not found" in exc_info.value.message

    def test_invalid_json(self, project_dir: Path) -> None:
        (project_dir / "package.json").write_text("{not json")

        with pytest.raises(ConfigurationError):
            load_manifest(project_dir)

    def test_non_object_json(self, project_dir: Path) -> None:
        (project_dir / "package.json").write_text(json.dumps(["a", "b"]))

        with pytest.raises(ConfigurationError):
            load_manifest(project_dir)

    def test_missing_version(self, project_dir: Path) -> None:
        (project_dir / "package.json").write_text(json.dumps({"name": "pkg"}))

        with pytest.raises(ConfigurationError) as exc_info:
            load_manifest(project_dir)
        assert exc_info.value.fix_hint is not None
