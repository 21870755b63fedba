"""Configuration models."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class SourceType(str, Enum):
    """Kind of document a manifest row describes."""

    TEXTBOOK = "textbook"
    PAPER = "paper"
    PRESENTATION = "presentation"
    DATASET = "dataset"

    @property
    def label(self) -> str:
        """Human-readable label."""
        return SOURCE_TYPE_LABELS[self]


SOURCE_TYPE_LABELS = {
    SourceType.TEXTBOOK: "Textbook chapter",
    SourceType.PAPER: "Research article",
    SourceType.PRESENTATION: "Presentation / slides",
    SourceType.DATASET: "Dataset",
}


class SavedCollection(BaseModel):
    """Collection metadata remembered between manifest submissions."""

    name: str = Field(..., description="Collection or book name")
    year: str = Field(..., description="Year or edition")
    authors: str = Field("", description="Authors, free text")
    default_source_type: SourceType = Field(
        SourceType.TEXTBOOK, description="Source type of the first file last submitted"
    )


class ConfigModel(BaseModel):
    """Main configuration model."""

    pipeline_dir: str = Field("~/ent-pipeline", description="Root of the ingestion pipeline checkout")
    python_path: str = Field("python3", description="Interpreter used to run the pipeline")
    auto_refresh_sec: int = Field(30, description="Dashboard polling interval, 0 disables", ge=0)
    saved_collections: List[SavedCollection] = Field(default_factory=list)

    @field_validator("pipeline_dir", "python_path")
    @classmethod
    def strip_paths(cls, v: str) -> str:
        """Trim whitespace around paths."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    def find_collection(self, name: str) -> Optional[SavedCollection]:
        """Return the saved collection with exactly this name."""
        for collection in self.saved_collections:
            if collection.name == name:
                return collection
        return None

    def upsert_collection(self, collection: SavedCollection) -> None:
        """Replace the saved collection with the same name, or append it."""
        for i, existing in enumerate(self.saved_collections):
            if existing.name == collection.name:
                self.saved_collections[i] = collection
                return
        self.saved_collections.append(collection)

    @property
    def last_collection(self) -> Optional[SavedCollection]:
        """Most recently added collection."""
        if not self.saved_collections:
            return None
        return self.saved_collections[-1]
