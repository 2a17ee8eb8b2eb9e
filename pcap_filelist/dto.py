"""
Data Transfer Objects (DTOs) shared by the naming rule and the file list.

These are small, immutable, and independent of any I/O.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, Optional

MatchStatus = Literal["matched", "invalid", "unmatched"]


# === Event input ===
@dataclass(frozen=True)
class EventReference:
    """Ground truth handed in by the caller: which capture file the event came from."""
    capture_file: Optional[str] = None   # bare file name; None selects full-scan mode

    def __post_init__(self) -> None:
        # Normalize to a base name; "" means no known file.
        name = self.capture_file
        if name is not None:
            name = os.path.basename(name)
            object.__setattr__(self, "capture_file", name or None)

    @property
    def has_capture_file(self) -> bool:
        return self.capture_file is not None


# === Per-candidate classification ===
@dataclass(frozen=True)
class CandidateMatch:
    """
    Result of running one directory entry through a MatchingRule.

    status:
      * "unmatched": the name does not follow the template at all
      * "invalid"  : it matches, but a field does not parse as an integer
      * "matched"  : it matches and every active field parsed
    """
    name: str
    status: MatchStatus
    thread: Optional[int] = None         # None when the template carries no thread token
    timestamp: Optional[int] = None      # epoch seconds
    raw_thread: Optional[str] = None
    raw_timestamp: Optional[str] = None

    @property
    def conforms(self) -> bool:
        """True when the name follows the template (valid or not)."""
        return self.status != "unmatched"

    @property
    def thread_valid(self) -> bool:
        return self.raw_thread is None or self.thread is not None

    @property
    def timestamp_valid(self) -> bool:
        return self.timestamp is not None
