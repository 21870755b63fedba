"""Run models mirroring the pipeline's status JSON."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

RETRYABLE_STATUSES = ("failed", "partial_failed")


class Run(BaseModel):
    """One pipeline invocation as recorded by the pipeline."""

    id: str = Field(..., description="Opaque run id")
    command: str = Field("", description="Pipeline subcommand that created the run")
    manifest_path: Optional[str] = Field(None, description="Manifest the run was started from")
    dry_run: bool = Field(False, description="Whether the run published anything")
    status: str = Field("running", description="Run status (running, done, failed, partial_failed)")
    error: Optional[str] = Field(None, description="Run-level error text")
    created_at: datetime = Field(..., description="When the run started")

    @property
    def is_retryable(self) -> bool:
        """Whether the pipeline accepts a retry for this run."""
        return self.status in RETRYABLE_STATUSES


class RunSummary(BaseModel):
    """Aggregate counts for one run."""

    run_id: Optional[str] = Field(None, description="Run id")
    sources: Dict[str, int] = Field(default_factory=dict, description="Source count by status")
    dead_letters: int = Field(0, description="Number of dead letters")
    unresolved_links: int = Field(0, description="Number of unresolved links")

    @field_validator("sources", mode="before")
    @classmethod
    def null_sources(cls, v):
        return {} if v is None else v

    @field_validator("dead_letters", "unresolved_links", mode="before")
    @classmethod
    def null_counts(cls, v):
        return 0 if v is None else v

    @property
    def published(self) -> int:
        return self.sources.get("published", 0)

    @property
    def failed(self) -> int:
        return self.sources.get("failed", 0)


class DeadLetter(BaseModel):
    """A processing step parked after failing."""

    id: int
    stage: str
    error: Optional[str] = None
    retried: int = 0


class RunDetail(BaseModel):
    """Response of `status --run-id`."""

    run: Run
    summary: RunSummary
    dead_letters: List[DeadLetter] = Field(default_factory=list)

    @field_validator("dead_letters", mode="before")
    @classmethod
    def null_dead_letters(cls, v):
        return [] if v is None else v


class StatusResponse(BaseModel):
    """Response of `status`."""

    runs: List[Run] = Field(default_factory=list)

    @field_validator("runs", mode="before")
    @classmethod
    def null_runs(cls, v):
        return [] if v is None else v


class IngestSummary(BaseModel):
    sources: Dict[str, int] = Field(default_factory=dict)

    @field_validator("sources", mode="before")
    @classmethod
    def null_sources(cls, v):
        return {} if v is None else v


class IngestResult(BaseModel):
    """Response of `ingest` and `dry-run`."""

    summary: IngestSummary = Field(default_factory=IngestSummary)

    @field_validator("summary", mode="before")
    @classmethod
    def null_summary(cls, v):
        return {} if v is None else v

    @property
    def published(self) -> int:
        return self.summary.sources.get("published", 0)

    @property
    def failed(self) -> int:
        return self.summary.sources.get("failed", 0)


class ReconcileResult(BaseModel):
    """Response of `reconcile-links`."""

    resolved: int = 0

    @field_validator("resolved", mode="before")
    @classmethod
    def null_resolved(cls, v):
        return 0 if v is None else v
