"""Pydantic models passed between the stages of a manifest check run."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class BaseModelWithConfig(BaseModel):
    """Base model forbidding silent data loss and mutation after creation."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class RevisionPair(BaseModelWithConfig):
    """Base and head revisions of the change under review."""

    base: str = Field(min_length=1)
    head: str = Field(min_length=1)

    @property
    def range_spec(self) -> str:
        """Merge-base relative range understood by ``git diff``."""
        return f"{self.base}...{self.head}"


class ValidationOutcome(BaseModelWithConfig):
    path: str
    passed: bool
    diagnostic: Optional[str] = None

    @model_validator(mode="after")
    def _diagnostic_only_on_failure(self) -> "ValidationOutcome":
        if self.passed and self.diagnostic is not None:
            raise ValueError("passing outcome must not carry a diagnostic")
        if not self.passed and self.diagnostic is None:
            raise ValueError("failing outcome requires a diagnostic")
        return self


class AggregatedResult(BaseModel):
    """Files that failed validation, in the order they were checked."""

    model_config = ConfigDict(extra="forbid")

    failed_paths: List[str] = Field(default_factory=list)
    checked: int = 0

    def record(self, path: str, outcome: ValidationOutcome) -> None:
        """Fold one outcome in; ``path`` is the change-set path, not the absolute one."""
        self.checked += 1
        if not outcome.passed:
            self.failed_paths.append(path)

    @property
    def passed(self) -> bool:
        return not self.failed_paths


class RepositoryCoordinates(BaseModelWithConfig):
    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)

    @field_validator("repo")
    @classmethod
    def _strip_git_suffix(cls, value: str) -> str:
        if value.endswith(".git"):
            value = value[: -len(".git")]
        if not value:
            raise ValueError("repo name is empty after stripping .git")
        return value

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class CommentRequest(BaseModelWithConfig):
    """The single comment a run posts to the review request."""

    coordinates: RepositoryCoordinates
    request_number: int = Field(gt=0)
    body: str = Field(min_length=1)
