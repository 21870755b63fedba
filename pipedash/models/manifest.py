"""Manifest models."""

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

from ..config.models import SavedCollection, SourceType

MANIFEST_COLUMNS = [
    "source_path",
    "source_type",
    "book_or_collection",
    "chapter_or_title",
    "edition_or_year",
    "authors",
    "citation_key",
    "region",
    "priority",
    "notes",
]

DEFAULT_REGION = "general"
DEFAULT_PRIORITY = "normal"


class FileEntry(BaseModel):
    """A file queued for the next manifest."""

    path: Path = Field(..., description="Source file on disk")
    title: str = Field(..., description="Chapter or article title")
    source_type: SourceType = Field(SourceType.PAPER, description="Kind of document")
    size: int = Field(..., description="File size in bytes")

    @property
    def name(self) -> str:
        return self.path.name


class ManifestRow(BaseModel):
    """One row of a manifest CSV."""

    source_path: str
    source_type: SourceType
    book_or_collection: str
    chapter_or_title: str
    edition_or_year: str
    authors: str
    citation_key: str
    region: str = DEFAULT_REGION
    priority: str = DEFAULT_PRIORITY
    notes: str = ""

    def values(self) -> List[str]:
        """Field values in manifest column order."""
        data = self.model_dump(mode="json")
        return [data[column] for column in MANIFEST_COLUMNS]


class ManifestResult(BaseModel):
    """Outcome of a successful manifest build."""

    manifest_path: Path
    dest_dir: Path
    rows: List[ManifestRow]
    collection: SavedCollection
