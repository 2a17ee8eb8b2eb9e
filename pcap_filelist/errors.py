"""
Exception types raised by the capture file list.

Only problems with *authoritative* input surface here: the filename named
by the event, or the directory itself during a full scan. Per-candidate
problems found while scanning a directory are logged and skipped.
"""

from __future__ import annotations


class PcapFileListError(Exception):
    """Base class for every error raised by this package."""


class NoFileAvailable(PcapFileListError):
    """Seed mode was entered without a seed file."""

    def __init__(self) -> None:
        super().__init__("No file available")


class InvalidFileName(PcapFileListError):
    """The event's capture file does not conform to the naming template."""

    def __init__(self, name: str, pattern: str) -> None:
        super().__init__(f"Invalid file name in event: {name!r} does not match {pattern!r}")
        self.name = name
        self.pattern = pattern


class InvalidTimestamp(PcapFileListError):
    """The timestamp field of the event's capture file is not an integer."""

    def __init__(self, name: str, raw: str | None) -> None:
        super().__init__(f"Invalid timestamp in file name {name!r}: {raw!r}")
        self.name = name
        self.raw = raw


class DirectoryUnreadable(PcapFileListError):
    """A directory could not be enumerated."""

    def __init__(self, directory: str, reason: object) -> None:
        super().__init__(f"Can't open directory {directory}: {reason}")
        self.directory = directory
        self.reason = reason


class OutOfFiles(PcapFileListError):
    """Normal end-of-sequence signal from `PcapFileList.get_next`."""

    def __init__(self) -> None:
        super().__init__("No more files")


class InvalidEvent(PcapFileListError):
    """An event record could not be decoded."""


class ConfigError(PcapFileListError):
    """Configuration file is missing or does not validate."""
