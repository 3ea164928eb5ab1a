"""Inventory scan that partitions starter workflows by GHES compatibility."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Iterable, Sequence

from ..logging import get_logger
from ..models import CheckResult, IconType, WorkflowDescriptor
from .checker import check_workflow
from .properties import load_workflow_properties

logger = get_logger("workflows.scanner")

DEFAULT_RESTRICTED_FOLDER = "code-scanning"


def icon_type_for(icon_name: str | None) -> IconType:
    if icon_name and icon_name.startswith("octicon"):
        return "octicon"
    return "svg"


def check_workflows(
    folders: Sequence[str],
    enabled_actions: Iterable[str],
    partners: Iterable[str],
    read_only_folders: Iterable[str],
    *,
    root: Path | None = None,
    restricted_folder: str = DEFAULT_RESTRICTED_FOLDER,
) -> CheckResult:
    """Scan ``folders`` (relative to ``root``) and partition their workflows.

    A workflow is compatible when it is not a partner workflow, is either
    enterprise-enabled or outside the restricted category folder, and either
    lives in a read-only folder or only uses allow-listed actions.
    """
    base = root or Path(".")
    actions = list(enabled_actions)
    partner_set = {partner.lower() for partner in partners}
    read_only = set(read_only_folders)
    result = CheckResult()

    for folder in folders:
        folder_path = base / folder
        is_read_only = folder in read_only
        is_restricted = PurePosixPath(folder).name == restricted_folder
        logger.debug("Scanning %s", folder_path)

        for entry in sorted(folder_path.iterdir(), key=lambda item: item.name):
            if not entry.is_file() or entry.suffix != ".yml":
                continue
            workflow_id = entry.stem
            props = load_workflow_properties(folder_path, workflow_id)
            if props is None:
                continue

            is_partner = bool(props.creator) and props.creator.lower() in partner_set
            enabled = (
                not is_partner
                and (props.enterprise is True or not is_restricted)
                and (is_read_only or check_workflow(entry, actions))
            )

            descriptor = WorkflowDescriptor(
                folder=folder,
                id=workflow_id,
                icon_name=props.icon_name,
                icon_type=icon_type_for(props.icon_name),
            )
            if enabled:
                result.compatible.append(descriptor)
            else:
                result.incompatible.append(descriptor)

    return result


__all__ = ["DEFAULT_RESTRICTED_FOLDER", "check_workflows", "icon_type_for"]
