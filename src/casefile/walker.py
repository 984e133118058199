"""Directory traversal for casefile.

Walks a folder tree depth-first with an explicit stack, producing one
FileRecord per regular file. Stat calls for the files of each folder run
on a small thread pool; records are yielded in a stable order (entries
sorted by name) so repeated scans of an unchanged tree give the same
sequence.
"""

import logging
import os
import stat
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Generator, Hashable

from casefile.config import expand_path
from casefile.errors import Cancelled, EntryUnreadable, RootUnreadable
from casefile.models import FileRecord, display_text

logger = logging.getLogger(__name__)


def is_hidden(name: str, st: os.stat_result | None = None) -> bool:
    """
    Check whether a file is hidden.

    A leading dot always marks a file hidden. Platform hidden attributes
    (Windows file attributes, BSD/macOS UF_HIDDEN flag) are honored when
    the stat result carries them.
    """
    if name.startswith("."):
        return True
    if st is None:
        return False

    attributes = getattr(st, "st_file_attributes", None)
    if attributes is not None and attributes & stat.FILE_ATTRIBUTE_HIDDEN:
        return True

    flags = getattr(st, "st_flags", None)
    if flags is not None and flags & stat.UF_HIDDEN:
        return True

    return False


def split_extension(name: str) -> str:
    """Lowercase extension of a file name without the dot ('' if none)."""
    return os.path.splitext(name)[1][1:].lower()


def directory_identity(path: str, follow_symlinks: bool = True) -> Hashable:
    """
    Canonical identity of a folder, used to visit each folder once.

    Uses (device, inode) where the platform reports inodes, otherwise the
    resolved real path.
    """
    st = os.stat(path, follow_symlinks=follow_symlinks)
    if st.st_ino:
        return (st.st_dev, st.st_ino)
    return os.path.realpath(path)


class PathWalker:
    """
    Enumerate the files under a root folder.

    After walk() is exhausted, folder_count, max_depth and errors describe
    the traversal.
    """

    def __init__(
        self,
        root: str,
        follow_symlinks: bool = True,
        max_workers: int = 4,
        cancel_event: threading.Event | None = None,
    ):
        self.root = os.path.abspath(expand_path(root))
        self.follow_symlinks = follow_symlinks
        self.max_workers = max_workers
        self.cancel_event = cancel_event

        self.folder_count = 0
        self.max_depth = 0
        self.errors: list[EntryUnreadable] = []
        self._errors_lock = threading.Lock()

    def _record_error(self, path: str, error: Exception | str) -> None:
        reason = error.strerror if isinstance(error, OSError) and error.strerror else str(error)
        skipped = EntryUnreadable(display_text(path), reason)
        logger.debug(str(skipped))
        with self._errors_lock:
            self.errors.append(skipped)

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            logger.info("Scan of %s cancelled", self.root)
            raise Cancelled(self.root)

    def _open_root(self) -> Hashable:
        if not os.path.exists(self.root):
            raise RootUnreadable(self.root, "path does not exist")
        if not os.path.isdir(self.root):
            raise RootUnreadable(self.root, "not a directory")
        try:
            return directory_identity(self.root)
        except OSError as e:
            raise RootUnreadable(self.root, e.strerror or str(e)) from e

    def _list_directory(self, path: str) -> list[os.DirEntry]:
        with os.scandir(path) as entries:
            return sorted(entries, key=lambda entry: entry.name)

    def _stat_file(self, entry: os.DirEntry, depth: int) -> FileRecord | None:
        try:
            st = entry.stat(follow_symlinks=self.follow_symlinks)
        except OSError as e:
            self._record_error(entry.path, e)
            return None

        return FileRecord(
            path=display_text(entry.path),
            name=display_text(entry.name),
            extension=split_extension(display_text(entry.name)),
            size=st.st_size,
            modified=st.st_mtime,
            depth=depth,
            hidden=is_hidden(entry.name, st),
        )

    def _classify(
        self, entries: list[os.DirEntry]
    ) -> tuple[list[os.DirEntry], list[os.DirEntry]]:
        files: list[os.DirEntry] = []
        folders: list[os.DirEntry] = []

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=self.follow_symlinks):
                    folders.append(entry)
                elif entry.is_file(follow_symlinks=self.follow_symlinks):
                    files.append(entry)
                elif self.follow_symlinks and entry.is_symlink() and not os.path.exists(entry.path):
                    self._record_error(entry.path, "broken symbolic link")
            except (PermissionError, OSError) as e:
                self._record_error(entry.path, e)

        return files, folders

    def walk(self) -> Generator[FileRecord, None, None]:
        """
        Yield a FileRecord for every regular file under the root.

        Raises:
            RootUnreadable: If the root cannot be listed
            Cancelled: If cancel_event is set between folder expansions
        """
        visited = {self._open_root()}
        stack: list[tuple[str, int]] = [(self.root, 0)]
        logger.info("Scanning %s", self.root)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            while stack:
                self._check_cancelled()
                directory, depth = stack.pop()

                try:
                    entries = self._list_directory(directory)
                except (PermissionError, OSError) as e:
                    if directory == self.root:
                        raise RootUnreadable(self.root, e.strerror or str(e)) from e
                    self._record_error(directory, e)
                    continue

                files, folders = self._classify(entries)

                # map() keeps submission order
                for record in executor.map(lambda entry: self._stat_file(entry, depth + 1), files):
                    if record is not None:
                        yield record

                # Reversed so the stack pops folders in name order
                for entry in reversed(folders):
                    try:
                        identity = directory_identity(entry.path, self.follow_symlinks)
                    except (PermissionError, OSError) as e:
                        self._record_error(entry.path, e)
                        continue

                    if identity in visited:
                        logger.debug("Already visited %s, skipping", entry.path)
                        continue

                    visited.add(identity)
                    self.folder_count += 1
                    self.max_depth = max(self.max_depth, depth + 1)
                    stack.append((entry.path, depth + 1))

        logger.info(
            "Finished scanning %s: %d folders, %d skipped entries",
            self.root,
            self.folder_count,
            len(self.errors),
        )
