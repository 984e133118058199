"""File name heuristics: duplicate patterns and naming conventions."""

import re
import threading
from enum import Enum

from casefile.models import DuplicateInfo, FileRecord, NamingStats

# Trailing markers stripped from a name before grouping
COPY_MARKERS = (
    re.compile(r" \(\d+\)$"),  # report (1)
    re.compile(r"[_-]copy$"),  # report_copy, report-copy
    re.compile(r"[_-]v\d+$"),  # report_v2, report-v2
    re.compile(r"[ _-]\d+$"),  # report 2, report_2, report-2
)


def normalize_name(stem: str) -> str:
    """
    Reduce a file name (without extension) to its duplicate-pattern key.

    Each marker is stripped at most once, in order, so "report_v2 (1)"
    becomes "report" but "photo_2023_01" only loses its last number.
    Returns an empty string when nothing is left.
    """
    key = stem.lower()
    for marker in COPY_MARKERS:
        key = marker.sub("", key)
    return " ".join(key.split())


class DuplicatePatternDetector:
    """Group files whose names normalize to the same key."""

    def __init__(self):
        self._lock = threading.Lock()
        self._groups: dict[str, set[str]] = {}

    def add(self, record: FileRecord) -> None:
        key = normalize_name(record.stem)
        if not key:
            return
        with self._lock:
            self._groups.setdefault(key, set()).add(record.path)

    def groups(self) -> list[DuplicateInfo]:
        """Groups with two or more files, largest first then by pattern."""
        found = [
            DuplicateInfo(pattern=key, count=len(paths), files=sorted(paths))
            for key, paths in self._groups.items()
            if len(paths) >= 2
        ]
        found.sort(key=lambda group: (-group.count, group.pattern))
        return found


class NamingStyle(str, Enum):
    """Recognized file naming conventions."""

    KEBAB = "kebab_case"
    SNAKE = "snake_case"
    CAMEL = "camel_case"


def classify_name(stem: str) -> NamingStyle | None:
    """
    Classify a file name (without extension) by naming convention.

    Rules are checked in order: kebab-case, snake_case, camelCase. Names
    matching none (single lowercase words, ALLCAPS, mixed separators,
    leading digits) return None.
    """
    has_hyphen = "-" in stem
    has_underscore = "_" in stem
    has_upper = any(c.isupper() for c in stem)

    if has_hyphen and not has_underscore and not has_upper:
        return NamingStyle.KEBAB
    if has_underscore and not has_hyphen and not has_upper:
        return NamingStyle.SNAKE
    if not has_hyphen and not has_underscore and stem[:1].islower() and has_upper:
        return NamingStyle.CAMEL
    return None


class NamingConventionClassifier:
    """Tally file names per naming convention."""

    def __init__(self):
        self._lock = threading.Lock()
        self._counts = {style: 0 for style in NamingStyle}

    def add(self, record: FileRecord) -> None:
        style = classify_name(record.stem)
        if style is None:
            return
        with self._lock:
            self._counts[style] += 1

    def stats(self) -> NamingStats:
        return NamingStats(
            camel_case_count=self._counts[NamingStyle.CAMEL],
            snake_case_count=self._counts[NamingStyle.SNAKE],
            kebab_case_count=self._counts[NamingStyle.KEBAB],
        )
