"""Pipeline that rebuilds the GHES branch from the source branch."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Callable, List, Sequence

from .codeowners import generate_codeowners
from .config import SyncSettings
from .git.branch import BranchSync
from .logging import get_logger
from .models import CheckResult, WorkflowDescriptor
from .process import CommandResult, run_command
from .workflows import (
    add_placeholder_step,
    check_workflows,
    downgrade_artifact_actions,
    rewrite_workflow,
)


class Orchestrator:
    """Runs the scan, branch switch, restore and rewrite steps in order."""

    def __init__(
        self,
        settings: SyncSettings,
        *,
        runner: Callable[..., CommandResult] | None = None,
        branch_sync: BranchSync | None = None,
    ) -> None:
        self.settings = settings
        self._runner = runner or run_command
        self.branch_sync = branch_sync or BranchSync(
            settings.root, runner=self._runner, timeout=settings.command_timeout
        )
        self.logger = get_logger("orchestrator")

    def check(self) -> CheckResult:
        """Scan the configured folders and report the compatibility partition."""
        settings = self.settings
        result = check_workflows(
            settings.folders,
            settings.enabled_actions,
            settings.partners,
            settings.read_only_folders,
            root=settings.root,
            restricted_folder=settings.restricted_folder,
        )
        self._report("Compatible workflows", result.compatible)
        self._report("Incompatible workflows", result.incompatible)
        return result

    def run(self) -> CheckResult:
        """Execute the full sync; any failure propagates and aborts the run."""
        settings = self.settings
        result = self.check()

        self.logger.info("Switching to %s branch", settings.target_branch)
        self.branch_sync.switch(settings.target_branch)

        self.logger.info("Removing modifiable workflows")
        self._remove(settings.modifiable_folders)
        self._remove([settings.icons_dir])

        self.logger.info("Restoring read-only folders")
        for folder in settings.read_only_folders:
            self.branch_sync.restore(settings.source_branch, [folder])

        self.logger.info("Restoring compatible workflows")
        self.branch_sync.restore(settings.source_branch, self.restore_paths(result))

        rewritable = self._rewritable(result)

        self.logger.info("Downgrading artifact actions v4 -> v3")
        for workflow in rewritable:
            downgrade_artifact_actions(settings.resolve(workflow.workflow_path))

        if settings.add_placeholder_step:
            self.logger.info("Adding placeholder steps")
            for workflow in rewritable:
                rewrite_workflow(settings.resolve(workflow.workflow_path), add_placeholder_step)

        self.logger.info("Generating CODEOWNERS")
        generate_codeowners(
            settings.resolve(settings.codeowners_config),
            settings.resolve(settings.codeowners_output),
        )
        return result

    def restore_paths(self, result: CheckResult) -> List[str]:
        """Paths to check out from the source branch for compatible workflows."""
        read_only = set(self.settings.read_only_folders)
        paths: List[str] = []
        for workflow in result.compatible:
            # Read-only folders were restored wholesale already.
            if workflow.folder not in read_only:
                paths.append(workflow.workflow_path)
                paths.append(workflow.properties_path)
            if workflow.icon_type == "svg" and workflow.icon_name:
                paths.append(
                    str(PurePosixPath(self.settings.icons_dir) / f"{workflow.icon_name}.svg")
                )
        return paths

    # ------------------------------------------------------------------
    # Helpers

    def _rewritable(self, result: CheckResult) -> List[WorkflowDescriptor]:
        read_only = set(self.settings.read_only_folders)
        return [workflow for workflow in result.compatible if workflow.folder not in read_only]

    def _remove(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        self._runner(
            "rm",
            ["-fr", *paths],
            cwd=self.settings.root,
            timeout=self.settings.command_timeout,
        )

    def _report(self, title: str, workflows: Sequence[WorkflowDescriptor]) -> None:
        self.logger.info("%s (%d)", title, len(workflows))
        for workflow in workflows:
            self.logger.info("  %s", workflow.label)


__all__ = ["Orchestrator"]
