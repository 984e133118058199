"""Tests for data models."""

import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from casefile.models import (
    NO_EXTENSION,
    AnalysisResult,
    DuplicateInfo,
    FileEntry,
    FileRecord,
    FileTypeInfo,
    NamingStats,
    format_timestamp,
    parse_timestamp,
)


def make_record(name: str, extension: str = "", **kwargs) -> FileRecord:
    """Helper to create file records."""
    defaults = {"size": 100, "modified": 1_700_000_000.0, "depth": 1}
    defaults.update(kwargs)
    return FileRecord(path=f"/case/{name}", name=name, extension=extension, **defaults)


class TestFileRecord:
    def test_stem_strips_extension(self):
        record = make_record("Report.PDF", "pdf")
        assert record.stem == "Report"

    def test_stem_without_extension(self):
        record = make_record("Makefile")
        assert record.stem == "Makefile"

    def test_extension_key_sentinel(self):
        assert make_record("Makefile").extension_key == NO_EXTENSION
        assert make_record("a.txt", "txt").extension_key == "txt"

    def test_is_immutable(self):
        record = make_record("a.txt", "txt")
        with pytest.raises(ValidationError):
            record.size = 5


class TestTimestamps:
    def test_format_is_fixed(self):
        value = format_timestamp(datetime(2023, 5, 1, 14, 30).timestamp())
        assert value == "2023-05-01 14:30"

    def test_parse_round_trip(self):
        value = format_timestamp(1_700_000_000.0)
        assert format_timestamp(parse_timestamp(value).timestamp()) == value


class TestFileEntry:
    def test_from_record(self):
        record = make_record("a.txt", "txt", size=42, depth=3)
        entry = FileEntry.from_record(record)

        assert entry.path == "/case/a.txt"
        assert entry.name == "a.txt"
        assert entry.extension == "txt"
        assert entry.size == 42
        assert entry.depth == 3
        assert entry.modified == format_timestamp(record.modified)


class TestNamingStats:
    def test_classified_count(self):
        stats = NamingStats(camel_case_count=1, snake_case_count=2, kebab_case_count=3)
        assert stats.classified_count == 6


class TestAnalysisResult:
    def test_defaults_describe_empty_folder(self):
        result = AnalysisResult()
        assert result.total_files == 0
        assert result.oldest_file is None
        assert result.newest_file is None
        assert result.avg_file_age_days == 0.0
        assert result.largest_files == []

    def test_unclassified_name_count(self):
        result = AnalysisResult(
            total_files=5,
            naming_stats=NamingStats(camel_case_count=1, snake_case_count=1, kebab_case_count=1),
        )
        assert result.unclassified_name_count == 2

    def test_json_field_names(self):
        result = AnalysisResult(
            total_files=1,
            total_size=10,
            file_types={"txt": FileTypeInfo(count=1, total_size=10, average_size=10)},
            duplicate_patterns=[DuplicateInfo(pattern="a", count=2, files=["/a", "/a (1)"])],
        )
        data = json.loads(result.to_json())

        assert set(data) == {
            "total_files",
            "total_size",
            "total_folders",
            "file_types",
            "largest_files",
            "oldest_file",
            "newest_file",
            "avg_file_age_days",
            "max_depth",
            "hidden_file_count",
            "duplicate_patterns",
            "naming_stats",
        }
        assert data["file_types"]["txt"] == {"count": 1, "total_size": 10, "average_size": 10}
        assert data["naming_stats"] == {
            "camel_case_count": 0,
            "snake_case_count": 0,
            "kebab_case_count": 0,
        }
        assert data["oldest_file"] is None

    def test_is_immutable(self):
        result = AnalysisResult()
        with pytest.raises(ValidationError):
            result.total_files = 3
