"""Allow-list compatibility check for a single workflow file."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..logging import get_logger
from ..models import WorkflowDocument
from .yaml_io import load_yaml

logger = get_logger("workflows.checker")


def action_name(reference: str) -> str:
    """Strip the ``@version`` pin from a ``uses`` reference."""
    return str(reference).split("@", 1)[0]


def action_nwo(reference: str) -> str:
    """Reduce a ``uses`` reference to its ``owner/repo`` part."""
    return "/".join(action_name(reference).split("/")[:2])


def check_workflow(workflow_path: Path, enabled_actions: Iterable[str]) -> bool:
    """Return True when every step in the workflow uses an allow-listed action.

    Read and parse failures are logged and re-raised; they are not treated as
    an incompatible workflow.
    """
    enabled = {action.lower() for action in enabled_actions}
    try:
        document = WorkflowDocument.from_mapping(
            load_yaml(workflow_path), source=str(workflow_path)
        )
    except Exception:
        logger.error("Error checking workflow %s", workflow_path)
        raise

    for reference in document.iter_uses():
        if action_nwo(reference).lower() not in enabled:
            logger.info(
                "Workflow %s uses '%s' which is not supported for GHES.",
                workflow_path,
                action_name(reference),
            )
            return False
    return True


__all__ = ["action_name", "action_nwo", "check_workflow"]
