"""In-place rewrites applied to workflows restored onto the GHES branch."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict

from ..logging import get_logger
from ..models import WorkflowDocument
from .yaml_io import dump_yaml, load_yaml

logger = get_logger("workflows.rewriter")

PLACEHOLDER_STEP_NAME = "Custom placeholder step"
PLACEHOLDER_STEP_RUN = "# TODO: add commands here"

_ARTIFACT_DOWNGRADES = (
    ("actions/upload-artifact@v4", "actions/upload-artifact@v3"),
    ("actions/download-artifact@v4", "actions/download-artifact@v3"),
)

Transform = Callable[[Dict[str, Any]], Dict[str, Any]]


def rewrite_workflow(path: Path, transform: Transform) -> None:
    """Load ``path``, apply ``transform`` to the parsed document and write it back."""
    document = load_yaml(path)
    WorkflowDocument.from_mapping(document, source=str(path))
    updated = transform(document)
    path.write_text(dump_yaml(updated), encoding="utf-8")


def downgrade_artifact_actions(path: Path) -> bool:
    """Pin artifact actions back to v3, returning True when the file was rewritten."""
    content = path.read_text(encoding="utf-8")
    if "@v4" not in content:
        return False

    updated = content
    for current, replacement in _ARTIFACT_DOWNGRADES:
        updated = updated.replace(current, replacement)
    if updated == content:
        return False

    logger.info("Updating %s", path)
    path.write_text(updated, encoding="utf-8")
    return True


def add_placeholder_step(workflow: Dict[str, Any]) -> Dict[str, Any]:
    """Append the placeholder step to every job's steps."""
    jobs = workflow.get("jobs")
    if not jobs:
        return workflow

    for job_name in list(jobs):
        job = jobs[job_name] or {}
        steps = job.get("steps") or []
        steps.append({"name": PLACEHOLDER_STEP_NAME, "run": PLACEHOLDER_STEP_RUN})
        job["steps"] = steps
        jobs[job_name] = job

    return workflow


__all__ = [
    "PLACEHOLDER_STEP_NAME",
    "PLACEHOLDER_STEP_RUN",
    "add_placeholder_step",
    "downgrade_artifact_actions",
    "rewrite_workflow",
]
