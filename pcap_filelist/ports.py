"""
Hexagonal interfaces (Ports) for the file list.

The file list never touches the file system directly; it asks a directory
listing port for entry names. Keep this small so it is easy to fake in tests.
"""

from __future__ import annotations

from typing import List, Protocol


class DirectoryListingPort(Protocol):
    """
    Enumerates the entries of one directory, non-recursively.
    """

    def list_entries(self, directory: str) -> List[str]:
        """
        Return the base names found in `directory`, in whatever order the
        implementation chooses; callers treat that order as opaque.

        Raises DirectoryUnreadable when the directory cannot be enumerated.
        """
        ...
