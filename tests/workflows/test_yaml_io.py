"""Tests for the workflow YAML helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from sync_ghes.models import WorkflowParseError
from sync_ghes.workflows.yaml_io import dump_yaml, load_yaml


def test_load_yaml_keeps_on_as_a_key(tmp_path: Path) -> None:
    path = tmp_path / "wf.yml"
    path.write_text("on: push\nenv:\n  FLAG: yes\n  DEBUG: true\n", encoding="utf-8")

    document = load_yaml(path)

    assert document == {"on": "push", "env": {"FLAG": "yes", "DEBUG": True}}


def test_dump_yaml_writes_plain_on_key_and_long_lines() -> None:
    long_command = "echo " + "x" * 300
    text = dump_yaml({"on": {"push": None}, "jobs": {"a": {"steps": [{"run": long_command}]}}})

    assert text.startswith("on:\n")
    assert f"run: {long_command}\n" in text
    assert "      - run:" in text


def test_load_yaml_wraps_syntax_errors(tmp_path: Path) -> None:
    path = tmp_path / "wf.yml"
    path.write_text("jobs: {a: [\n", encoding="utf-8")

    with pytest.raises(WorkflowParseError):
        load_yaml(path)
