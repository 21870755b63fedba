"""Manifest building: naming rules, CSV output and the file-copying builder."""

from .builder import ManifestBuilder, manifest_filename
from .naming import citation_key, guess_source_type, slugify, title_from_filename
from .writer import render_manifest, write_manifest

__all__ = [
    "ManifestBuilder",
    "citation_key",
    "guess_source_type",
    "manifest_filename",
    "render_manifest",
    "slugify",
    "title_from_filename",
    "write_manifest",
]
