"""Loading of the JSON property sidecars that accompany each workflow."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..logging import get_logger
from ..models import WorkflowProperties

logger = get_logger("workflows.properties")


def properties_path(folder: Path, workflow_id: str) -> Path:
    return folder / "properties" / f"{workflow_id}.properties.json"


def load_workflow_properties(folder: Path, workflow_id: str) -> Optional[WorkflowProperties]:
    """Return the workflow's properties, or ``None`` when there is no usable sidecar."""
    path = properties_path(folder, workflow_id)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.debug("No properties for %s, skipping", path)
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Unreadable properties %s, skipping: %s", path, exc)
        return None
    if not isinstance(data, dict):
        logger.warning("Properties %s must contain a JSON object, skipping", path)
        return None
    try:
        return WorkflowProperties.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid properties %s, skipping: %s", path, exc)
        return None


__all__ = ["load_workflow_properties", "properties_path"]
