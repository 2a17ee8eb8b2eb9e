"""
pcap_filelist: find the rotated capture files that belong to an event.

Public API (stable):
- compile_template           (naming template -> MatchingRule)
- MatchingRule               (tests / parses capture file names)
- build_file_list            (seed or full-scan list for an event)
- PcapFileList               (ordered paths + get_next accessor)
- EventReference, read_event (event input)
- DirectoryListingPort       (directory adapter interface)
- FilesystemDirectoryListing (local file-system adapter)
- FileListConfig, load_config
- Errors: PcapFileListError, NoFileAvailable, InvalidFileName,
  InvalidTimestamp, DirectoryUnreadable, OutOfFiles, InvalidEvent, ConfigError
"""

from __future__ import annotations

# Configuration
from .config import FileListConfig, load_config

# Naming
from .naming.pattern import ABSENT, MatchingRule, compile_template

# Ports
from .ports import DirectoryListingPort

# Adapters
from .intake.directory_fs import FilesystemDirectoryListing
from .intake.event_reader import read_event, read_event_file

# File list
from .listing.file_list import PcapFileList, build_file_list

# DTOs
from .dto import CandidateMatch, EventReference

# Errors
from .errors import (
    ConfigError,
    DirectoryUnreadable,
    InvalidEvent,
    InvalidFileName,
    InvalidTimestamp,
    NoFileAvailable,
    OutOfFiles,
    PcapFileListError,
)

__all__ = [
    "FileListConfig",
    "load_config",
    "ABSENT",
    "MatchingRule",
    "compile_template",
    "DirectoryListingPort",
    "FilesystemDirectoryListing",
    "read_event",
    "read_event_file",
    "PcapFileList",
    "build_file_list",
    "CandidateMatch",
    "EventReference",
    "ConfigError",
    "DirectoryUnreadable",
    "InvalidEvent",
    "InvalidFileName",
    "InvalidTimestamp",
    "NoFileAvailable",
    "OutOfFiles",
    "PcapFileListError",
]
