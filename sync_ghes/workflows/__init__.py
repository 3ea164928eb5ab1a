"""Workflow scanning, compatibility checks and rewrites."""

from .checker import action_nwo, check_workflow
from .properties import load_workflow_properties
from .rewriter import add_placeholder_step, downgrade_artifact_actions, rewrite_workflow
from .scanner import check_workflows

__all__ = [
    "action_nwo",
    "add_placeholder_step",
    "check_workflow",
    "check_workflows",
    "downgrade_artifact_actions",
    "load_workflow_properties",
    "rewrite_workflow",
]
