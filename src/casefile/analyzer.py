"""Folder analysis and case notes for casefile."""

import logging
import threading
from datetime import datetime
from pathlib import Path

from casefile.aggregator import Aggregator
from casefile.config import Settings, load_settings
from casefile.models import AnalysisResult, EntryError, FileEntry
from casefile.patterns import DuplicatePatternDetector, NamingConventionClassifier
from casefile.walker import PathWalker

logger = logging.getLogger(__name__)

# Thresholds for case notes
DEEP_STRUCTURE_DEPTH = 5
LARGE_COLLECTION_FILES = 1000


def assemble_result(
    walker: PathWalker,
    aggregator: Aggregator,
    duplicates: DuplicatePatternDetector,
    naming: NamingConventionClassifier,
    now: datetime,
) -> AnalysisResult:
    """
    Merge the terminal state of a finished scan into one AnalysisResult.

    Args:
        walker: Exhausted walker (provides the folder count)
        aggregator: Totals, file types, largest files and extrema
        duplicates: Duplicate name pattern groups
        naming: Naming convention tallies
        now: Analysis timestamp used for file ages

    Returns:
        Immutable AnalysisResult
    """
    oldest = aggregator.oldest
    newest = aggregator.newest

    return AnalysisResult(
        total_files=aggregator.total_files,
        total_size=aggregator.total_size,
        total_folders=walker.folder_count,
        file_types=aggregator.file_types(),
        largest_files=[FileEntry.from_record(r) for r in aggregator.top_files.ranked()],
        oldest_file=FileEntry.from_record(oldest) if oldest else None,
        newest_file=FileEntry.from_record(newest) if newest else None,
        avg_file_age_days=aggregator.average_age_days(now),
        max_depth=aggregator.max_depth,
        hidden_file_count=aggregator.hidden_file_count,
        duplicate_patterns=duplicates.groups(),
        naming_stats=naming.stats(),
    )


class FolderAnalyzer:
    """
    One analysis of one folder.

    The tree is walked once; every record is fed to the aggregator, the
    duplicate detector and the naming classifier. After run() returns,
    diagnostics lists the entries that were skipped.
    """

    def __init__(
        self,
        path: str | Path,
        settings: Settings | None = None,
        cancel_event: threading.Event | None = None,
    ):
        self.settings = settings or load_settings()
        self.walker = PathWalker(
            str(path),
            follow_symlinks=self.settings.follow_symlinks,
            max_workers=self.settings.max_workers,
            cancel_event=cancel_event,
        )

    @property
    def diagnostics(self) -> list[EntryError]:
        return [EntryError(path=e.path, reason=e.reason) for e in self.walker.errors]

    def run(self, now: datetime | None = None) -> AnalysisResult:
        """
        Walk the folder and build the result.

        Raises:
            RootUnreadable: If the folder cannot be read
            Cancelled: If the cancel event was set during the scan
        """
        aggregator = Aggregator(top_files=self.settings.top_files)
        duplicates = DuplicatePatternDetector()
        naming = NamingConventionClassifier()

        for record in self.walker.walk():
            aggregator.add(record)
            duplicates.add(record)
            naming.add(record)

        result = assemble_result(
            self.walker,
            aggregator,
            duplicates,
            naming,
            now or datetime.now().astimezone(),
        )
        logger.info(
            "Analyzed %s: %d files, %d folders, %d bytes",
            self.walker.root,
            result.total_files,
            result.total_folders,
            result.total_size,
        )
        return result


def analyze_folder(
    path: str | Path,
    *,
    settings: Settings | None = None,
    cancel_event: threading.Event | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """
    Analyze a folder tree.

    Args:
        path: Root folder (~ and environment variables are expanded)
        settings: Analysis settings (default: loaded from config file)
        cancel_event: Set it from another thread to abort the scan
        now: Analysis timestamp for file ages (default: current time)

    Returns:
        AnalysisResult describing the folder
    """
    return FolderAnalyzer(path, settings=settings, cancel_event=cancel_event).run(now=now)


def get_findings(result: AnalysisResult) -> list[str]:
    """
    Derive notable observations from an analysis.

    Args:
        result: AnalysisResult

    Returns:
        List of human-readable findings (may be empty)
    """
    findings = []

    patterns = len(result.duplicate_patterns)
    if patterns > 0:
        findings.append(f"{patterns} potential duplicate pattern{'s' if patterns != 1 else ''}")

    if result.hidden_file_count > 0:
        findings.append(f"{result.hidden_file_count} hidden files detected")

    if result.max_depth > DEEP_STRUCTURE_DEPTH:
        findings.append(f"Deep folder structure detected (depth: {result.max_depth})")

    if result.total_files > LARGE_COLLECTION_FILES:
        findings.append(f"Large file collection: {result.total_files}+ files")

    return findings


def get_top_file_types(result: AnalysisResult, top_n: int = 5) -> list[tuple[str, int, float]]:
    """
    Get the most common file types.

    Args:
        result: AnalysisResult
        top_n: Number of file types to return

    Returns:
        List of (extension, count, percent of all files)
    """
    top = []
    for ext, info in list(result.file_types.items())[:top_n]:
        percent = (info.count / result.total_files) * 100 if result.total_files > 0 else 0
        top.append((ext, info.count, percent))
    return top


def get_suspects(result: AnalysisResult, top_n: int = 3) -> list[FileEntry]:
    """Get the top N largest files."""
    return result.largest_files[:top_n]


def format_size(size_bytes: int) -> str:
    """
    Format bytes to human-readable string (binary units).

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size string
    """
    if size_bytes <= 0:
        return "0 B"
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} TB"
