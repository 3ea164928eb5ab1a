"""Settings for a sync-ghes run (defaults plus optional .sync-ghes.yml overrides)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".sync-ghes.yml"

DEFAULT_FOLDERS = ("ci", "automation", "code-scanning", "pages")
DEFAULT_READ_ONLY_FOLDERS = ("pages",)
DEFAULT_ENABLED_ACTIONS = (
    "actions/cache",
    "actions/checkout",
    "actions/configure-pages",
    "actions/create-release",
    "actions/delete-package-versions",
    "actions/deploy-pages",
    "actions/download-artifact",
    "actions/jekyll-build-pages",
    "actions/setup-dotnet",
    "actions/setup-go",
    "actions/setup-java",
    "actions/setup-node",
    "actions/setup-python",
    "actions/stale",
    "actions/starter-workflows",
    "actions/upload-artifact",
    "actions/upload-pages-artifact",
    "actions/upload-release-asset",
    "github/codeql-action",
)
DEFAULT_PARTNERS = (
    "Alibaba Cloud",
    "Amazon Web Services",
    "Microsoft Azure",
    "Google Cloud",
    "IBM",
    "Red Hat",
    "Tencent Cloud",
    "HashiCorp",
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SyncSettings:
    """Everything a sync run needs; built once by the CLI and passed down."""

    root: Path
    folders: List[str] = field(default_factory=lambda: list(DEFAULT_FOLDERS))
    read_only_folders: List[str] = field(default_factory=lambda: list(DEFAULT_READ_ONLY_FOLDERS))
    enabled_actions: List[str] = field(default_factory=lambda: list(DEFAULT_ENABLED_ACTIONS))
    partners: List[str] = field(default_factory=lambda: list(DEFAULT_PARTNERS))
    restricted_folder: str = "code-scanning"
    icons_dir: str = "icons"
    source_branch: str = "main"
    target_branch: str = "ghes"
    codeowners_config: str = "script/sync-ghes/codeowners.json"
    codeowners_output: str = ".github/CODEOWNERS"
    add_placeholder_step: bool = True
    command_timeout: Optional[float] = None

    @property
    def modifiable_folders(self) -> List[str]:
        return [folder for folder in self.folders if folder not in self.read_only_folders]

    def resolve(self, relative: str) -> Path:
        return self.root / relative


def load_settings(root: Path | str = ".", config_path: Path | str | None = None) -> SyncSettings:
    """Build settings for ``root``, applying overrides from .sync-ghes.yml when present.

    An explicit ``config_path`` must exist; the implicit one at the root is optional.
    """
    root_path = Path(root).expanduser().resolve()
    settings = SyncSettings(root=root_path)

    if config_path is None:
        config_file = root_path / CONFIG_FILENAME
        if not config_file.exists():
            return settings
    else:
        config_file = Path(config_path).expanduser()
        if not config_file.is_absolute():
            config_file = Path.cwd() / config_file
        if not config_file.exists():
            raise ConfigError(f"Config file not found: {config_file}")

    data = _read_config(config_file)
    return _apply_overrides(settings, data, config_file.name)


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _apply_overrides(settings: SyncSettings, data: Dict[str, Any], source: str) -> SyncSettings:
    overrides: Dict[str, Any] = {}

    for key in ("folders", "read_only_folders", "enabled_actions", "partners"):
        if key in data:
            overrides[key] = _require_str_list(data[key], key, source)

    for key in (
        "restricted_folder",
        "icons_dir",
        "source_branch",
        "target_branch",
        "codeowners_config",
        "codeowners_output",
    ):
        if key in data:
            value = _as_str(data[key])
            if not value:
                raise ConfigError(f"{source}: '{key}' must be a non-empty string")
            overrides[key] = value

    if "add_placeholder_step" in data:
        value = _as_bool(data["add_placeholder_step"])
        if value is None:
            raise ConfigError(f"{source}: 'add_placeholder_step' must be a boolean")
        overrides["add_placeholder_step"] = value

    if "command_timeout" in data:
        raw = data["command_timeout"]
        timeout = _as_float(raw)
        if raw is not None and (timeout is None or timeout <= 0):
            raise ConfigError(f"{source}: 'command_timeout' must be a positive number")
        overrides["command_timeout"] = timeout

    return replace(settings, **overrides)


def _require_str_list(value: Any, key: str, source: str) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        items = [str(item) for item in value if isinstance(item, (str, int, float))]
        if len(items) == len(value):
            return items
    raise ConfigError(f"{source}: '{key}' must be a list of strings")


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_ENABLED_ACTIONS",
    "DEFAULT_FOLDERS",
    "DEFAULT_PARTNERS",
    "DEFAULT_READ_ONLY_FOLDERS",
    "SyncSettings",
    "load_settings",
]
