"""Data models for pipedash."""

from .manifest import FileEntry, ManifestResult, ManifestRow
from .run import (
    DeadLetter,
    IngestResult,
    ReconcileResult,
    Run,
    RunDetail,
    RunSummary,
    StatusResponse,
)

__all__ = [
    "DeadLetter",
    "FileEntry",
    "IngestResult",
    "ManifestResult",
    "ManifestRow",
    "ReconcileResult",
    "Run",
    "RunDetail",
    "RunSummary",
    "StatusResponse",
]
