"""Data models for casefile."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Extension key used for files without an extension
NO_EXTENSION = "no-extension"

# Fixed display format for serialized timestamps
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def display_text(value: str) -> str:
    """
    Make an OS string safe to encode as UTF-8.

    Undecodable bytes in file names arrive as lone surrogates; they are
    replaced with U+FFFD.
    """
    return value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def format_timestamp(mtime: float) -> str:
    """Format a POSIX modification time as a local-time display string."""
    return datetime.fromtimestamp(mtime).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> datetime:
    """Parse a display string produced by format_timestamp."""
    return datetime.strptime(value, TIMESTAMP_FORMAT)


class FileRecord(BaseModel):
    """Metadata snapshot for one file at the moment it was visited."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Absolute path of the file")
    name: str = Field(..., description="Base name including extension")
    extension: str = Field("", description="Lowercase extension without the dot")
    size: int = Field(0, description="Size in bytes")
    modified: float = Field(..., description="Last-modified POSIX timestamp")
    depth: int = Field(..., description="Depth relative to the root (children of root are 1)")
    hidden: bool = Field(False, description="Whether the file is hidden")

    @property
    def stem(self) -> str:
        """Base name with the extension removed."""
        if self.extension:
            return self.name[: -(len(self.extension) + 1)]
        return self.name

    @property
    def extension_key(self) -> str:
        """Key used in the file type table."""
        return self.extension or NO_EXTENSION


class FileEntry(BaseModel):
    """A file as reported to callers."""

    model_config = ConfigDict(frozen=True)

    path: str
    name: str
    extension: str
    size: int
    modified: str = Field(..., description="Local time, formatted with TIMESTAMP_FORMAT")
    depth: int

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileEntry":
        return cls(
            path=record.path,
            name=record.name,
            extension=record.extension,
            size=record.size,
            modified=format_timestamp(record.modified),
            depth=record.depth,
        )


class FileTypeInfo(BaseModel):
    """Per-extension statistics."""

    model_config = ConfigDict(frozen=True)

    count: int = 0
    total_size: int = 0
    average_size: int = 0


class DuplicateInfo(BaseModel):
    """Files sharing one normalized name pattern."""

    model_config = ConfigDict(frozen=True)

    pattern: str
    count: int
    files: list[str] = Field(default_factory=list)


class NamingStats(BaseModel):
    """Counts of file names per naming convention."""

    model_config = ConfigDict(frozen=True)

    camel_case_count: int = 0
    snake_case_count: int = 0
    kebab_case_count: int = 0

    @property
    def classified_count(self) -> int:
        """Number of names that matched any convention."""
        return self.camel_case_count + self.snake_case_count + self.kebab_case_count


class EntryError(BaseModel):
    """A file or folder that was skipped during the scan."""

    model_config = ConfigDict(frozen=True)

    path: str
    reason: str


class AnalysisResult(BaseModel):
    """Complete folder analysis result."""

    model_config = ConfigDict(frozen=True)

    total_files: int = 0
    total_size: int = 0
    total_folders: int = 0
    file_types: dict[str, FileTypeInfo] = Field(default_factory=dict)
    largest_files: list[FileEntry] = Field(default_factory=list)
    oldest_file: FileEntry | None = None
    newest_file: FileEntry | None = None
    avg_file_age_days: float = 0.0
    max_depth: int = 0
    hidden_file_count: int = 0
    duplicate_patterns: list[DuplicateInfo] = Field(default_factory=list)
    naming_stats: NamingStats = Field(default_factory=NamingStats)

    @property
    def unclassified_name_count(self) -> int:
        """Files whose names match no recognized naming convention."""
        return self.total_files - self.naming_stats.classified_count

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize with the public field names."""
        return self.model_dump_json(indent=indent)
