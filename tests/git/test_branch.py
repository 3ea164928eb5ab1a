"""Tests for the git branch helper."""

from __future__ import annotations

from pathlib import Path

import pytest

from sync_ghes.git.branch import BranchSync
from sync_ghes.process import CommandError, CommandResult


def _recorder(calls: list):
    def runner(command, args, *, cwd=None, timeout=None, **_kwargs):  # type: ignore[no-untyped-def]
        calls.append((command, list(args), Path(cwd), timeout))
        return CommandResult(stdout="", stderr="", exit_code=0)

    return runner


def test_switch_checks_out_branch(tmp_path: Path) -> None:
    calls: list = []
    sync = BranchSync(tmp_path, runner=_recorder(calls), timeout=30.0)

    sync.switch("ghes")

    assert calls == [("git", ["checkout", "ghes"], tmp_path, 30.0)]


def test_restore_checks_out_paths_from_source(tmp_path: Path) -> None:
    calls: list = []
    sync = BranchSync(tmp_path, runner=_recorder(calls))

    restored = sync.restore("main", ["ci/node.yml", "ci/properties/node.properties.json"])

    assert restored is True
    assert calls[0][:2] == (
        "git",
        ["checkout", "main", "--", "ci/node.yml", "ci/properties/node.properties.json"],
    )


def test_restore_without_paths_runs_nothing(tmp_path: Path) -> None:
    calls: list = []
    sync = BranchSync(tmp_path, runner=_recorder(calls))

    assert sync.restore("main", []) is False
    assert calls == []


def test_git_failures_propagate(tmp_path: Path) -> None:
    def runner(command, args, **_kwargs):  # type: ignore[no-untyped-def]
        raise CommandError("checkout failed", command=[command, *args], exit_code=1)

    sync = BranchSync(tmp_path, runner=runner)

    with pytest.raises(CommandError):
        sync.switch("ghes")
