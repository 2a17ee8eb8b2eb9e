"""
Filesystem-backed DirectoryListingPort adapter.

Lists the entries of a single directory (no recursion) sorted by name, the
same order the capture tools' own directory readers report. It does NOT open
files and does not filter by type: whether a name belongs to the capture set
is decided by the naming rule.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

from ..errors import DirectoryUnreadable
from ..ports import DirectoryListingPort


@dataclass(frozen=True)
class FilesystemDirectoryListing(DirectoryListingPort):
    """
    Enumerate directory entries from the local file system.

    Parameters
    ----------
    sort_names : bool
        Sort entries by name (default). Set False to keep the raw
        `os.listdir` order.
    """

    sort_names: bool = True

    def list_entries(self, directory: str) -> List[str]:
        try:
            names = os.listdir(directory)
        except OSError as e:
            # FileNotFoundError, NotADirectoryError, PermissionError, ...
            raise DirectoryUnreadable(directory, e.strerror or e) from e
        if self.sort_names:
            names.sort()
        return names
