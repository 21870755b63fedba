"""Manifest CSV serialization."""

import csv
import io
from pathlib import Path
from typing import Iterable

from ..models.manifest import MANIFEST_COLUMNS, ManifestRow


def render_manifest(rows: Iterable[ManifestRow]) -> str:
    """Serialize rows, header first; fields are quoted only when needed."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(MANIFEST_COLUMNS)
    for row in rows:
        writer.writerow(row.values())
    return buf.getvalue()


def write_manifest(rows: Iterable[ManifestRow], manifest_path: Path) -> Path:
    """Write rows to `manifest_path`, creating its directory."""
    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    manifest_path.write_text(render_manifest(rows), encoding="utf-8")
    return manifest_path
