"""Exceptions raised by the analysis engine."""


class CasefileError(Exception):
    """Base class for casefile errors."""


class RootUnreadable(CasefileError):
    """The root path is missing, not a directory, or cannot be opened."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class EntryUnreadable(CasefileError):
    """A single file or folder inside the tree could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Skipped {path}: {reason}")


class Cancelled(CasefileError):
    """The scan was cancelled before it finished."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Analysis of {path} was cancelled")
