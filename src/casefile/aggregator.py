"""Single-pass aggregation of file records."""

import heapq
import threading
from datetime import datetime

from casefile.models import FileRecord, FileTypeInfo

SECONDS_PER_DAY = 86400


class TopFiles:
    """
    Fixed-capacity selection of the largest files seen so far.

    Equal sizes rank by encounter order: the earlier file ranks higher and
    is kept when the collection is full.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        # Min-heap of (size, -sequence, record); the root is the next to evict
        self._heap: list[tuple[int, int, FileRecord]] = []
        self._sequence = 0

    def __len__(self) -> int:
        return len(self._heap)

    def offer(self, record: FileRecord) -> bool:
        """Insert record if it belongs among the largest. Returns True if kept."""
        item = (record.size, -self._sequence, record)
        self._sequence += 1

        if len(self._heap) < self.capacity:
            heapq.heappush(self._heap, item)
            return True
        if record.size > self._heap[0][0]:
            heapq.heapreplace(self._heap, item)
            return True
        return False

    def ranked(self) -> list[FileRecord]:
        """Kept records, largest first."""
        return [record for _, _, record in sorted(self._heap, key=lambda i: (-i[0], -i[1]))]


class Aggregator:
    """Running totals, per-extension stats, largest files and age extrema."""

    def __init__(self, top_files: int = 10):
        self._lock = threading.Lock()

        self.total_files = 0
        self.total_size = 0
        self.hidden_file_count = 0
        self.max_depth = 0
        self.oldest: FileRecord | None = None
        self.newest: FileRecord | None = None
        self.top_files = TopFiles(top_files)

        # extension key -> [count, total_size]
        self._extensions: dict[str, list[int]] = {}
        self._modified_sum = 0.0

    def add(self, record: FileRecord) -> None:
        """Fold one record into the running state."""
        with self._lock:
            self.total_files += 1
            self.total_size += record.size
            self._modified_sum += record.modified

            stats = self._extensions.setdefault(record.extension_key, [0, 0])
            stats[0] += 1
            stats[1] += record.size

            self.top_files.offer(record)

            if self.oldest is None or record.modified < self.oldest.modified:
                self.oldest = record
            if self.newest is None or record.modified > self.newest.modified:
                self.newest = record

            if record.hidden:
                self.hidden_file_count += 1
            if record.depth > self.max_depth:
                self.max_depth = record.depth

    def file_types(self) -> dict[str, FileTypeInfo]:
        """
        Per-extension statistics, ordered by count descending then extension.
        """
        ordered = sorted(self._extensions.items(), key=lambda item: (-item[1][0], item[0]))
        return {
            ext: FileTypeInfo(count=count, total_size=size, average_size=size // count)
            for ext, (count, size) in ordered
        }

    def average_age_days(self, now: datetime) -> float:
        """Mean age of all files in days, relative to now (0 when empty)."""
        if self.total_files == 0:
            return 0.0
        total_age = now.timestamp() * self.total_files - self._modified_sum
        return total_age / self.total_files / SECONDS_PER_DAY
