"""Tests for ManifestBuilder."""

import csv
import re

import pendulum
import pytest

from pipedash.config import SavedCollection, SourceType, load_config
from pipedash.errors import ManifestValidationError
from pipedash.manifest import ManifestBuilder, manifest_filename

FIXED_TIME = pendulum.datetime(2026, 10, 17, 12, 34, 56, tz="UTC")


def read_rows(path):
    with path.open(encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


class TestAddFiles:
    """Tests for ManifestBuilder.add_files()."""

    def test_titles_and_types_are_guessed(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("Chapter 5 Intro.pdf"), make_pdf("Smith2023.pdf")])

        assert [e.title for e in builder.entries] == ["Chapter 5 Intro", "Smith2023"]
        assert [e.source_type for e in builder.entries] == [SourceType.TEXTBOOK, SourceType.PAPER]

    def test_same_name_and_size_is_one_entry(self, config, make_pdf):
        first = make_pdf("paper.pdf", b"same bytes", folder="a")
        second = make_pdf("paper.pdf", b"same bytes", folder="b")

        builder = ManifestBuilder(config)
        added = builder.add_files([first, second])

        assert len(added) == 1
        assert len(builder.entries) == 1

    def test_duplicates_across_calls_are_skipped(self, config, make_pdf):
        path = make_pdf("paper.pdf")
        builder = ManifestBuilder(config)
        builder.add_files([path])
        assert builder.add_files([path]) == []
        assert len(builder.entries) == 1

    def test_same_name_different_size_is_kept(self, config, make_pdf):
        first = make_pdf("paper.pdf", b"short", folder="a")
        second = make_pdf("paper.pdf", b"much longer content", folder="b")

        builder = ManifestBuilder(config)
        builder.add_files([first, second])

        assert len(builder.entries) == 2

    def test_non_pdf_files_are_ignored(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("notes.txt"), make_pdf("scan.PDF")])
        assert [e.name for e in builder.entries] == ["scan.PDF"]

    def test_remove(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("a.pdf"), make_pdf("b.pdf")])
        removed = builder.remove(0)
        assert removed.name == "a.pdf"
        assert [e.name for e in builder.entries] == ["b.pdf"]


class TestValidation:
    """Validation must fail before anything touches the filesystem."""

    def assert_nothing_written(self, config):
        assert not config.raw_pdfs_dir.exists()
        assert not config.manifests_dir.exists()
        assert not config.config_path.exists()

    def test_no_files(self, config):
        builder = ManifestBuilder(config)
        with pytest.raises(ManifestValidationError, match="at least one PDF"):
            builder.build("Book", "2023")
        self.assert_nothing_written(config)

    def test_empty_collection_name(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("a.pdf")])
        with pytest.raises(ManifestValidationError, match="collection name"):
            builder.build("   ", "2023")
        self.assert_nothing_written(config)

    def test_empty_year(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("a.pdf")])
        with pytest.raises(ManifestValidationError, match="year or edition"):
            builder.build("Book", "")
        self.assert_nothing_written(config)

    def test_entry_without_title(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("a.pdf"), make_pdf("b.pdf")])
        builder.entries[1].title = "  "
        with pytest.raises(ManifestValidationError, match=r"missing a title \(b\.pdf\)"):
            builder.build("Book", "2023")
        self.assert_nothing_written(config)


class TestBuild:
    """Tests for ManifestBuilder.build()."""

    def test_grays_anatomy_scenario(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files(
            [
                make_pdf("Ch. 1.pdf", b"chapter one"),
                make_pdf("Ch. 2.pdf", b"chapter two!"),
                make_pdf("notes.pdf", b"some notes"),
            ]
        )

        result = builder.build("Gray's Anatomy", "2023", "Henry Gray")

        assert result.dest_dir == config.raw_pdfs_dir / "grays-anatomy"
        assert result.manifest_path.parent == config.manifests_dir
        assert re.fullmatch(
            r"grays-anatomy-\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}\.manifest\.csv",
            result.manifest_path.name,
        )

        rows = read_rows(result.manifest_path)
        assert [r["source_type"] for r in rows] == ["textbook", "textbook", "paper"]
        assert [r["citation_key"] for r in rows] == ["grays-ch-1", "grays-ch-2", "grays-notes"]
        assert {r["book_or_collection"] for r in rows} == {"Gray's Anatomy"}
        assert {r["edition_or_year"] for r in rows} == {"2023"}
        assert rows[0]["source_path"] == str(config.raw_pdfs_dir / "grays-anatomy" / "Ch. 1.pdf")

    def test_files_are_copied(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("a.pdf", b"alpha"), make_pdf("b.pdf", b"beta")])

        result = builder.build("Book", "2023")

        assert (result.dest_dir / "a.pdf").read_bytes() == b"alpha"
        assert (result.dest_dir / "b.pdf").read_bytes() == b"beta"

    def test_existing_destination_file_is_overwritten(self, config, make_pdf):
        dest_dir = config.raw_pdfs_dir / "book"
        dest_dir.mkdir(parents=True)
        (dest_dir / "a.pdf").write_bytes(b"old")

        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("a.pdf", b"new")])
        builder.build("Book", "2023")

        assert (dest_dir / "a.pdf").read_bytes() == b"new"

    def test_manifest_name_uses_utc_timestamp(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("a.pdf")])

        result = builder.build("Book", "2023", timestamp=FIXED_TIME)

        assert result.manifest_path.name == "book-2026-10-17T12-34-56.manifest.csv"

    def test_same_second_builds_do_not_overwrite(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("a.pdf")])

        first = builder.build("Book", "2023", timestamp=FIXED_TIME)
        second = builder.build("Book", "2023", timestamp=FIXED_TIME)

        assert first.manifest_path != second.manifest_path
        assert second.manifest_path.name == "book-2026-10-17T12-34-56-2.manifest.csv"
        assert first.manifest_path.exists()

    def test_edited_titles_and_types_are_used(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("scan001.pdf")])
        builder.entries[0].title = "Inner Ear"
        builder.entries[0].source_type = SourceType.PRESENTATION

        result = builder.build("Cummings Otolaryngology", "7th")

        row = read_rows(result.manifest_path)[0]
        assert row["chapter_or_title"] == "Inner Ear"
        assert row["source_type"] == "presentation"
        assert row["citation_key"] == "cummings-inner-ear"

    def test_collection_is_saved(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("Ch. 1.pdf")])

        result = builder.build("Gray's Anatomy", "2023", "Henry Gray")

        expected = SavedCollection(
            name="Gray's Anatomy",
            year="2023",
            authors="Henry Gray",
            default_source_type=SourceType.TEXTBOOK,
        )
        assert result.collection == expected
        assert load_config(config.config_path).saved_collections == [expected]

    def test_collection_is_upserted_by_name(self, config, make_pdf):
        builder = ManifestBuilder(config)
        builder.add_files([make_pdf("a.pdf")])
        builder.build("Book", "2023", "First Author")
        builder.build("Other", "1999")
        builder.build("Book", "2024", "Second Author")

        saved = load_config(config.config_path).saved_collections
        assert [c.name for c in saved] == ["Book", "Other"]
        assert saved[0].year == "2024"
        assert saved[0].authors == "Second Author"


class TestPrefill:
    """Tests for ManifestBuilder.prefill()."""

    def test_no_saved_collections(self, config):
        builder = ManifestBuilder(config)
        assert builder.prefill(None, None, None) == ("", "", "")

    def test_defaults_to_last_saved_collection(self, config):
        config.config.upsert_collection(SavedCollection(name="Old", year="2001", authors="X"))
        config.config.upsert_collection(SavedCollection(name="Recent", year="2020", authors="Y"))

        builder = ManifestBuilder(config)
        assert builder.prefill(None, None, None) == ("Recent", "2020", "Y")

    def test_matching_name_fills_missing_fields(self, config):
        config.config.upsert_collection(SavedCollection(name="Book", year="2001", authors="X"))

        builder = ManifestBuilder(config)
        assert builder.prefill("Book", "", None) == ("Book", "2001", "X")
        assert builder.prefill("Book", "2030", None) == ("Book", "2030", "X")

    def test_unknown_name_is_left_alone(self, config):
        config.config.upsert_collection(SavedCollection(name="Book", year="2001", authors="X"))

        builder = ManifestBuilder(config)
        assert builder.prefill("New Book", None, None) == ("New Book", "", "")


def test_manifest_filename_converts_to_utc():
    local = pendulum.datetime(2026, 10, 17, 14, 34, 56, tz="Europe/Berlin")
    assert manifest_filename("book", local) == "book-2026-10-17T12-34-56.manifest.csv"
