"""CODEOWNERS generation from a JSON ownership config."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

from pydantic import ValidationError

from .logging import get_logger
from .models import CodeOwnersConfig

logger = get_logger("codeowners")

HEADER = "# Auto-generated CODEOWNERS. Do not edit manually."


class CodeOwnersError(RuntimeError):
    """Raised when the ownership config cannot be read or validated."""


def load_codeowners_config(config_path: Path) -> CodeOwnersConfig:
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CodeOwnersError(f"Failed to read {config_path}: {exc}") from exc
    try:
        return CodeOwnersConfig.model_validate(data)
    except ValidationError as exc:
        raise CodeOwnersError(f"Invalid CODEOWNERS config {config_path}: {exc}") from exc


def render_codeowners(config: CodeOwnersConfig) -> str:
    lines: List[str] = [HEADER, ""]
    for rule in config.owners:
        lines.append(f"{rule.pattern} {' '.join(rule.teams)}")
    lines.append("")
    return "\n".join(lines)


def generate_codeowners_from_config(config: CodeOwnersConfig, output_path: Path) -> Path:
    """Write CODEOWNERS for ``config``, replacing any existing file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_codeowners(config), encoding="utf-8")
    logger.info("Wrote %d CODEOWNERS rules to %s", len(config.owners), output_path)
    return output_path


def generate_codeowners(config_path: Path, output_path: Path) -> Path:
    return generate_codeowners_from_config(load_codeowners_config(config_path), output_path)


__all__ = [
    "CodeOwnersError",
    "HEADER",
    "generate_codeowners",
    "generate_codeowners_from_config",
    "load_codeowners_config",
    "render_codeowners",
]
