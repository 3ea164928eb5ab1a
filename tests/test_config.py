"""Tests for sync_ghes.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from sync_ghes.config import (
    DEFAULT_ENABLED_ACTIONS,
    DEFAULT_PARTNERS,
    ConfigError,
    SyncSettings,
    load_settings,
)


def test_load_settings_returns_defaults_when_missing(tmp_path: Path) -> None:
    settings = load_settings(tmp_path)

    assert isinstance(settings, SyncSettings)
    assert settings.root == tmp_path.resolve()
    assert settings.folders == ["ci", "automation", "code-scanning", "pages"]
    assert settings.read_only_folders == ["pages"]
    assert settings.modifiable_folders == ["ci", "automation", "code-scanning"]
    assert settings.enabled_actions == list(DEFAULT_ENABLED_ACTIONS)
    assert len(settings.enabled_actions) == 19
    assert settings.partners == list(DEFAULT_PARTNERS)
    assert settings.source_branch == "main"
    assert settings.target_branch == "ghes"
    assert settings.restricted_folder == "code-scanning"
    assert settings.icons_dir == "icons"
    assert settings.codeowners_output == ".github/CODEOWNERS"
    assert settings.add_placeholder_step is True
    assert settings.command_timeout is None


def test_load_settings_applies_overrides(tmp_path: Path) -> None:
    (tmp_path / ".sync-ghes.yml").write_text(
        """
folders: [ci, deployments, pages]
read_only_folders:
  - pages
enabled_actions:
  - actions/checkout
partners: ["Acme Cloud"]
target_branch: ghes-3.12
add_placeholder_step: false
command_timeout: 120
codeowners_config: config/owners.json
""",
        encoding="utf-8",
    )

    settings = load_settings(tmp_path)

    assert settings.folders == ["ci", "deployments", "pages"]
    assert settings.enabled_actions == ["actions/checkout"]
    assert settings.partners == ["Acme Cloud"]
    assert settings.target_branch == "ghes-3.12"
    assert settings.source_branch == "main"
    assert settings.add_placeholder_step is False
    assert settings.command_timeout == pytest.approx(120.0)
    assert settings.resolve(settings.codeowners_config) == tmp_path.resolve() / "config" / "owners.json"


def test_load_settings_explicit_path(tmp_path: Path) -> None:
    config = tmp_path / "custom.yml"
    config.write_text("source_branch: trunk\n", encoding="utf-8")

    settings = load_settings(tmp_path, config)

    assert settings.source_branch == "trunk"


def test_load_settings_missing_explicit_path(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_settings(tmp_path, tmp_path / "nope.yml")


def test_load_settings_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".sync-ghes.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(tmp_path)


def test_load_settings_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".sync-ghes.yml").write_text("folders: [ci\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(tmp_path)


@pytest.mark.parametrize(
    "content",
    [
        "folders: {ci: true}\n",
        "add_placeholder_step: maybe\n",
        "command_timeout: -5\n",
        "target_branch: ''\n",
    ],
)
def test_load_settings_rejects_bad_values(tmp_path: Path, content: str) -> None:
    (tmp_path / ".sync-ghes.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_settings(tmp_path)


def test_load_settings_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".sync-ghes.yml").write_text("\n", encoding="utf-8")

    assert load_settings(tmp_path) == SyncSettings(root=tmp_path.resolve())
