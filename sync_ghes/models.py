"""Core data models shared across sync-ghes components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Dict, Iterator, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

IconType = Literal["svg", "octicon"]


class WorkflowParseError(ValueError):
    """Raised when a workflow document does not have the expected shape."""


@dataclass(frozen=True)
class WorkflowDescriptor:
    """Identifies one starter workflow file and its icon."""

    folder: str
    id: str
    icon_name: Optional[str] = None
    icon_type: IconType = "svg"

    @property
    def workflow_path(self) -> str:
        return str(PurePosixPath(self.folder) / f"{self.id}.yml")

    @property
    def properties_path(self) -> str:
        return str(PurePosixPath(self.folder) / "properties" / f"{self.id}.properties.json")

    @property
    def label(self) -> str:
        return f"{self.folder}/{self.id}"


@dataclass
class CheckResult:
    """Partition of scanned workflows into compatible and incompatible sets."""

    compatible: List[WorkflowDescriptor] = field(default_factory=list)
    incompatible: List[WorkflowDescriptor] = field(default_factory=list)


class WorkflowProperties(BaseModel):
    """Metadata sidecar stored next to each starter workflow."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    icon_name: Optional[str] = Field(default=None, alias="iconName")
    categories: Optional[List[Any]] = None
    creator: Optional[str] = None
    enterprise: Optional[bool] = None

    @field_validator("categories", mode="before")
    @classmethod
    def list_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, list) else None

    @field_validator("enterprise", mode="before")
    @classmethod
    def literal_true_only(cls, value: Any) -> Any:
        # Only a JSON boolean opts in; "true", 1 and friends do not.
        return value if isinstance(value, bool) else None


class WorkflowStep(BaseModel):
    """One entry of a job's steps list."""

    model_config = ConfigDict(extra="allow")

    uses: Optional[str] = None


class WorkflowJob(BaseModel):
    """A job mapping; only its steps are inspected."""

    model_config = ConfigDict(extra="allow")

    steps: Optional[List[WorkflowStep]] = None


class WorkflowDocument(BaseModel):
    """Typed view over the parts of a workflow file that sync-ghes inspects."""

    model_config = ConfigDict(extra="allow")

    jobs: Optional[Dict[str, Optional[WorkflowJob]]] = None

    @classmethod
    def from_mapping(cls, data: Any, *, source: str) -> "WorkflowDocument":
        """Validate a parsed YAML document, raising WorkflowParseError on bad shapes."""
        if not isinstance(data, dict):
            kind = type(data).__name__
            raise WorkflowParseError(f"{source}: expected a mapping at the root, got {kind}")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise WorkflowParseError(f"{source}: invalid workflow structure: {exc}") from exc

    def iter_uses(self) -> Iterator[str]:
        """Yield every step-level ``uses`` reference in document order."""
        for job in (self.jobs or {}).values():
            if job is None:
                continue
            for step in job.steps or []:
                if step.uses:
                    yield step.uses


class CodeOwnerRule(BaseModel):
    pattern: str
    teams: List[str] = Field(default_factory=list)


class CodeOwnersConfig(BaseModel):
    """Ownership rules used to regenerate CODEOWNERS."""

    owners: List[CodeOwnerRule] = Field(default_factory=list)


__all__ = [
    "CheckResult",
    "CodeOwnerRule",
    "CodeOwnersConfig",
    "IconType",
    "WorkflowDescriptor",
    "WorkflowDocument",
    "WorkflowJob",
    "WorkflowParseError",
    "WorkflowProperties",
    "WorkflowStep",
]
