"""Assemble manifests from local PDFs."""

import logging
import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pendulum

from ..config import Config, SavedCollection
from ..errors import ManifestValidationError
from ..models.manifest import FileEntry, ManifestResult, ManifestRow
from .naming import citation_key, guess_source_type, slugify, title_from_filename
from .writer import write_manifest

logger = logging.getLogger(__name__)

MANIFEST_SUFFIX = ".manifest.csv"
TIMESTAMP_FORMAT = "YYYY-MM-DD[T]HH-mm-ss"


def manifest_filename(slug: str, timestamp: pendulum.DateTime) -> str:
    """`<slug>-<UTC timestamp to the second>.manifest.csv`."""
    stamp = timestamp.in_timezone("UTC").format(TIMESTAMP_FORMAT)
    return f"{slug}-{stamp}{MANIFEST_SUFFIX}"


def unique_manifest_path(directory: Path, filename: str) -> Path:
    """Return `directory/filename`, numbered if that file already exists."""
    path = directory / filename
    stem = filename[: -len(MANIFEST_SUFFIX)]
    n = 2
    while path.exists():
        path = directory / f"{stem}-{n}{MANIFEST_SUFFIX}"
        n += 1
    return path


class ManifestBuilder:
    """Collects files and collection metadata, then writes a manifest.

    Typical use:
        builder = ManifestBuilder(config)
        builder.add_files(paths)
        result = builder.build("Gray's Anatomy", "2023", "Henry Gray")
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.entries: List[FileEntry] = []

    def add_files(self, paths: Iterable[Path]) -> List[FileEntry]:
        """
        Queue PDF files.

        Non-PDF names are ignored. A file with the same name and size as one
        already queued is treated as the same file and skipped.

        Returns:
            The entries that were actually added
        """
        added = []
        for path in paths:
            path = Path(path)
            if not path.name.lower().endswith(".pdf"):
                logger.debug("Skipping non-PDF file %s", path)
                continue
            size = path.stat().st_size
            if any(e.name == path.name and e.size == size for e in self.entries):
                logger.debug("Skipping duplicate file %s", path)
                continue
            entry = FileEntry(
                path=path,
                title=title_from_filename(path.name),
                source_type=guess_source_type(path.name),
                size=size,
            )
            self.entries.append(entry)
            added.append(entry)
        return added

    def remove(self, index: int) -> FileEntry:
        """Drop a queued entry."""
        return self.entries.pop(index)

    def prefill(
        self,
        collection_name: Optional[str],
        year: Optional[str],
        authors: Optional[str],
    ) -> Tuple[str, str, str]:
        """
        Fill missing collection fields from saved collections.

        With no collection name, the most recently saved collection is used.
        With a name matching a saved collection, its year and authors fill
        whatever the caller left empty.
        """
        name = (collection_name or "").strip()
        saved: Optional[SavedCollection]
        if not name:
            saved = self.config.config.last_collection
            if saved is not None:
                name = saved.name
        else:
            saved = self.config.config.find_collection(name)

        year = (year or "").strip()
        authors = (authors or "").strip()
        if saved is not None:
            year = year or saved.year
            authors = authors or saved.authors
        return name, year, authors

    def validate(self, collection_name: str, year: str) -> None:
        """Raise ManifestValidationError describing the first missing field."""
        if not self.entries:
            raise ManifestValidationError("Add at least one PDF.")
        if not collection_name.strip():
            raise ManifestValidationError("Enter a collection name.")
        if not year.strip():
            raise ManifestValidationError("Enter a year or edition.")
        for entry in self.entries:
            if not entry.title.strip():
                raise ManifestValidationError(f"A file is missing a title ({entry.name}).")

    def build(
        self,
        collection_name: str,
        year: str,
        authors: str = "",
        timestamp: Optional[pendulum.DateTime] = None,
    ) -> ManifestResult:
        """
        Copy queued files into the pipeline and write their manifest.

        Files go to `raw-pdfs/<slug>/`, the manifest to
        `data/manifests/<slug>-<timestamp>.manifest.csv`. The collection is
        then saved for pre-filling later submissions.

        Raises:
            ManifestValidationError: Input incomplete; nothing is written
            OSError: Copy or write failed; files already copied stay in place
        """
        self.validate(collection_name, year)

        collection_name = collection_name.strip()
        year = year.strip()
        authors = authors.strip()

        slug = slugify(collection_name)
        dest_dir = self.config.raw_pdfs_dir / slug
        dest_dir.mkdir(parents=True, exist_ok=True)

        rows = []
        for entry in self.entries:
            dest = dest_dir / entry.name
            if dest.exists() and dest.resolve() == entry.path.resolve():
                logger.debug("%s is already in place", dest)
            else:
                shutil.copyfile(entry.path, dest)
                logger.debug("Copied %s -> %s", entry.path, dest)

            rows.append(
                ManifestRow(
                    source_path=str(dest),
                    source_type=entry.source_type,
                    book_or_collection=collection_name,
                    chapter_or_title=entry.title.strip(),
                    edition_or_year=year,
                    authors=authors,
                    citation_key=citation_key(collection_name, entry.title.strip()),
                )
            )

        if timestamp is None:
            timestamp = pendulum.now("UTC")
        manifest_path = unique_manifest_path(
            self.config.manifests_dir, manifest_filename(slug, timestamp)
        )
        write_manifest(rows, manifest_path)
        logger.info("Wrote manifest %s (%d rows)", manifest_path, len(rows))

        collection = SavedCollection(
            name=collection_name,
            year=year,
            authors=authors,
            default_source_type=self.entries[0].source_type,
        )
        self.config.remember_collection(collection)

        return ManifestResult(
            manifest_path=manifest_path,
            dest_dir=dest_dir,
            rows=rows,
            collection=collection,
        )
