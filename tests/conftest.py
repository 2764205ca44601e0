"""Pytest fixtures for release publisher tests.

Provides common fixtures for:
- Temporary project directories
- npm projects with package.json and CHANGELOG.md
- Release configuration files
- Fake command runners for the npm CLI
"""

import json
import os
import subprocess
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import yaml

from release_publish.utils.shell import ShellError

CHANGELOG = """# Changelog

All notable changes to this project will be documented in this file.

## Recent Changes

- Unreleased work in progress

## `2.0.0`

- Dropped support for Node 16
- Added streaming API

## `1.9.9`

- Fixed crash on empty input
"""


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary directory for tests.

    Yields:
        Path to temporary directory
    """
    yield tmp_path


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a temporary project directory.

    Returns:
        Path to project directory
    """
    project = temp_dir / "test-project"
    project.mkdir()
    return project


@pytest.fixture
def package_json() -> dict[str, Any]:
    """Return a scoped package.json with a registry configured."""
    return {
        "name": "@scope/pkg",
        "version": "2.0.0",
        "description": "Test package",
        "main": "index.js",
        "publishConfig": {
            "registry": "https://npm.example.com/",
        },
    }


@pytest.fixture
def nodejs_project(project_dir: Path, package_json: dict[str, Any]) -> Path:
    """Create a Node.js project with package.json and CHANGELOG.md.

    Returns:
        Path to project directory
    """
    (project_dir / "package.json").write_text(json.dumps(package_json, indent=2))
    (project_dir / "CHANGELOG.md").write_text(CHANGELOG)
    (project_dir / "index.js").write_text("module.exports = {};")
    return project_dir


@pytest.fixture
def artifacts(nodejs_project: Path) -> list[Path]:
    """Create two build artifacts under dist/.

    Returns:
        Paths of dist/a.zip and dist/b.tar
    """
    dist = nodejs_project / "dist"
    dist.mkdir()
    zip_path = dist / "a.zip"
    tar_path = dist / "b.tar"
    zip_path.write_bytes(b"PK\x03\x04zip-content")
    tar_path.write_bytes(b"tar-content\x00\x01")
    return [zip_path, tar_path]


@pytest.fixture
def release_config(nodejs_project: Path) -> Path:
    """Create a release configuration file.

    Returns:
        Path to config file
    """
    config = {
        "version": {"tag_prefix": "v"},
        "changelog": {"file": "CHANGELOG.md"},
        "branches": [
            {"name": "main", "tag": "latest", "alias_tags": ["stable"]},
            {"name": "next", "tag": "next"},
        ],
    }

    config_dir = nodejs_project / "config"
    config_dir.mkdir()
    config_path = config_dir / "release_conf.yml"
    config_path.write_text(yaml.safe_dump(config))

    return config_path


class FakeNpm:
    """Stand-in for the npm CLI that tracks dist-tags like a registry would."""

    def __init__(self, dist_tags: dict[str, str] | None = None, version: str = "2.0.0") -> None:
        self.dist_tags = dict(dist_tags or {})
        self.version = version
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, Any]] = []
        self.fail_on: str | None = None

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        args = cmd[1:]

        if self.fail_on and args and args[0] == self.fail_on:
            raise ShellError(" ".join(cmd), 1, "", "npm ERR! 403 Forbidden")

        if args[:1] == ["view"]:
            tag = args[1].rsplit("@", 1)[1]
            if tag not in self.dist_tags:
                return subprocess.CompletedProcess(
                    cmd, 1, "", "npm ERR! code E404\nnpm ERR! 404 Not Found"
                )
            return subprocess.CompletedProcess(cmd, 0, f"{self.dist_tags[tag]}\n", "")

        if args[:1] == ["publish"]:
            tag = args[args.index("--tag") + 1]
            self.dist_tags[tag] = self.version
        elif args[:2] == ["dist-tag", "add"]:
            spec, tag = args[2], args[3]
            self.dist_tags[tag] = spec.rsplit("@", 1)[1]

        return subprocess.CompletedProcess(cmd, 0, "", "")

    def commands(self, name: str) -> list[list[str]]:
        """Return the recorded calls of one npm subcommand."""
        return [call for call in self.calls if call[1] == name]


@pytest.fixture
def fake_npm() -> FakeNpm:
    """Return a fake npm CLI with 'latest' at 1.9.9."""
    return FakeNpm(dist_tags={"latest": "1.9.9"})


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Temporarily clean environment variables.

    Removes RELEASE_*, INPUT_* and GITHUB_* variables during the test.
    """
    old_env = {}
    for key in list(os.environ.keys()):
        if key.startswith(("RELEASE_", "INPUT_", "GITHUB_")):
            old_env[key] = os.environ.pop(key)

    yield

    os.environ.update(old_env)
