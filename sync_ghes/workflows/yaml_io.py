"""YAML reading and writing tuned for GitHub workflow files."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from ..models import WorkflowParseError

_BOOL_TAG = "tag:yaml.org,2002:bool"
# Workflows rely on YAML 1.2 booleans: `on:` is a key, not True.
_BOOL_RE = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")


def _strict_bool_resolvers(resolvers: dict) -> dict:
    return {
        first: [(tag, regexp) for tag, regexp in entries if tag != _BOOL_TAG]
        for first, entries in resolvers.items()
    }


class WorkflowLoader(yaml.SafeLoader):
    """Safe loader that only treats true/false as booleans."""


WorkflowLoader.yaml_implicit_resolvers = _strict_bool_resolvers(
    yaml.SafeLoader.yaml_implicit_resolvers
)
WorkflowLoader.add_implicit_resolver(_BOOL_TAG, _BOOL_RE, list("tTfF"))


class WorkflowDumper(yaml.SafeDumper):
    """Safe dumper emitting block style, indented sequences and no aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


WorkflowDumper.yaml_implicit_resolvers = _strict_bool_resolvers(
    yaml.SafeDumper.yaml_implicit_resolvers
)
WorkflowDumper.add_implicit_resolver(_BOOL_TAG, _BOOL_RE, list("tTfF"))


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_str(data)


WorkflowDumper.add_representer(str, _represent_str)


def load_yaml(path: Path) -> Any:
    """Parse the YAML file at ``path``; syntax errors raise WorkflowParseError."""
    text = path.read_text(encoding="utf-8")
    try:
        return yaml.load(text, Loader=WorkflowLoader)
    except yaml.YAMLError as exc:
        raise WorkflowParseError(f"Failed to parse {path}: {exc}") from exc


def dump_yaml(document: Any) -> str:
    """Serialise ``document`` with stable formatting and no line wrapping."""
    return yaml.dump(
        document,
        Dumper=WorkflowDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=float("inf"),
    )


__all__ = ["WorkflowDumper", "WorkflowLoader", "dump_yaml", "load_yaml"]
