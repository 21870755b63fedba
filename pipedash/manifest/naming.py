"""Slugs, titles, citation keys and source-type guesses for manifest rows."""

import re
from pathlib import Path

from ..config.models import SourceType

_NON_SLUG = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")
_EDGE_HYPHEN = re.compile(r"^-|-$")

_CHAPTER_PREFIX = re.compile(r"^ch(apter)?[\s._-]*\d+", re.IGNORECASE)
_CHAPTER_WORD = re.compile(r"\bchapter\b", re.IGNORECASE)
_SECTION_WORD = re.compile(r"\bsection\b", re.IGNORECASE)

CITATION_TITLE_LIMIT = 60


def slugify(text: str) -> str:
    """
    Make a filesystem-safe slug.

    Example:
        >>> slugify("Gray's Anatomy")
        'grays-anatomy'
    """
    slug = _NON_SLUG.sub("", text.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return _EDGE_HYPHEN.sub("", slug)


def title_from_filename(filename: str) -> str:
    """File name without its extension, trimmed."""
    return Path(filename).stem.strip()


def guess_source_type(filename: str) -> SourceType:
    """
    Guess the source type from a file name.

    Names like "Ch. 12", "Chapter 5" or anything mentioning a section are
    textbook chapters; everything else is a paper.
    """
    if _CHAPTER_PREFIX.search(filename):
        return SourceType.TEXTBOOK
    if _CHAPTER_WORD.search(filename):
        return SourceType.TEXTBOOK
    if _SECTION_WORD.search(filename):
        return SourceType.TEXTBOOK
    return SourceType.PAPER


def citation_key(collection_name: str, title: str) -> str:
    """
    Build the citation key for a manifest row.

    Example:
        >>> citation_key("Gray's Anatomy", "Ch. 1")
        'grays-ch-1'
    """
    words = collection_name.split()
    book_word = slugify(words[0] if words else collection_name)
    title_slug = slugify(title)[:CITATION_TITLE_LIMIT]
    return f"{book_word}-{title_slug}"
