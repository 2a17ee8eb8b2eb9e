"""
Capture file list: which rotated pcap files belong to an event.

Two ways to build a list:

- seed mode: the event names a known capture file. The list starts with that
  file and continues with every later file (strictly greater timestamp) that
  was written by the same capture thread.
- full-scan mode: no known file. The list holds every file in the directory
  whose name follows the template.

Both do exactly one directory enumeration and keep the collaborator's order.
A directory that cannot be read is only a warning in seed mode (the seed is
still returned) but an error in full-scan mode, where there is nothing else
to return.

The list is then drained with `get_next()` until it raises `OutOfFiles`.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Iterator, List, Literal, Optional, Sequence, Tuple, Union

from ..dto import CandidateMatch, EventReference
from ..errors import (
    DirectoryUnreadable,
    InvalidFileName,
    InvalidTimestamp,
    NoFileAvailable,
    OutOfFiles,
)
from ..intake.directory_fs import FilesystemDirectoryListing
from ..naming.pattern import MatchingRule, compile_template
from ..ports import DirectoryListingPort

logger = logging.getLogger(__name__)

ListState = Literal["available", "exhausted"]


class PcapFileList:
    """
    Ordered, de-duplicated capture file paths with a forward-only cursor.

    The paths never change after construction; only the cursor moves.
    `get_next` advances the cursor under a lock, so a list shared between
    threads hands out each path once.
    """

    def __init__(
        self,
        files: Sequence[str],
        rule: MatchingRule,
        *,
        directory: str,
        seed_name: Optional[str] = None,
    ) -> None:
        self._files: Tuple[str, ...] = tuple(dict.fromkeys(files))
        self.rule = rule
        self.directory = directory
        self.seed_name = seed_name
        self._index = 0
        self._lock = threading.Lock()

    # ----------------------------- Builders -------------------------------

    @classmethod
    def from_seed(
        cls,
        directory: str,
        capture_file: str,
        rule: MatchingRule,
        *,
        listing: Optional[DirectoryListingPort] = None,
        sort_by_timestamp: bool = False,
    ) -> "PcapFileList":
        """Seed file plus later files of the same thread."""
        seed_path = os.path.join(directory, capture_file) if capture_file else ""
        files = build_seed_list(
            [seed_path] if seed_path else [],
            rule,
            listing or FilesystemDirectoryListing(),
            sort_by_timestamp=sort_by_timestamp,
        )
        return cls(files, rule, directory=directory, seed_name=os.path.basename(seed_path))

    @classmethod
    def from_directory(
        cls,
        directory: str,
        rule: MatchingRule,
        *,
        listing: Optional[DirectoryListingPort] = None,
        sort_by_timestamp: bool = False,
    ) -> "PcapFileList":
        """Every file in `directory` that follows the template."""
        files = build_full_list(
            directory,
            rule,
            listing or FilesystemDirectoryListing(),
            sort_by_timestamp=sort_by_timestamp,
        )
        return cls(files, rule, directory=directory)

    # ----------------------------- Accessor -------------------------------

    def get_next(self) -> str:
        """
        Return the next path and advance.

        Raises OutOfFiles once every path has been handed out, and keeps
        raising it on every later call.
        """
        with self._lock:
            if self._index < len(self._files):
                path = self._files[self._index]
                self._index += 1
                return path
        raise OutOfFiles()

    def __iter__(self) -> Iterator[str]:
        """Drain the remaining paths through `get_next`."""
        while True:
            try:
                yield self.get_next()
            except OutOfFiles:
                return

    def __len__(self) -> int:
        return len(self._files)

    @property
    def files(self) -> Tuple[str, ...]:
        return self._files

    @property
    def position(self) -> int:
        return self._index

    @property
    def remaining(self) -> int:
        return len(self._files) - self._index

    @property
    def state(self) -> ListState:
        return "available" if self.remaining > 0 else "exhausted"

    def __repr__(self) -> str:
        return (
            f"PcapFileList(directory={self.directory!r}, files={len(self._files)}, "
            f"position={self._index}, seed={self.seed_name!r})"
        )


# === Scanning ===


def build_seed_list(
    files: List[str],
    rule: MatchingRule,
    listing: DirectoryListingPort,
    *,
    sort_by_timestamp: bool = False,
) -> List[str]:
    """
    Extend a one-element seed list with the later files of the seed's thread.

    Raises NoFileAvailable, InvalidFileName or InvalidTimestamp when the seed
    itself is unusable. Problems with any other entry only skip that entry.
    """
    if not files:
        raise NoFileAvailable()

    seed_path = files[0]
    join_dir = os.path.dirname(seed_path)
    scan_dir = join_dir or os.curdir
    seed_name = os.path.basename(seed_path)
    logger.debug("Scanning directory: %s", scan_dir)

    seed = rule.classify(seed_name)
    if not seed.conforms:
        logger.error("file %s does not match file format", seed_name)
        raise InvalidFileName(seed_name, rule.pattern.pattern)
    if not seed.thread_valid:
        # Unknown thread: no candidate can match it, but the seed is still usable.
        logger.warning("Can't parse thread field %r of %s", seed.raw_thread, seed_name)
    if not rule.has_timestamp:
        logger.warning("file format %s carries no timestamp, can't order %s", rule.template, seed_name)
        raise InvalidTimestamp(seed_name, None)
    if not seed.timestamp_valid:
        logger.warning("Can't parse timestamp field %r of %s", seed.raw_timestamp, seed_name)
        raise InvalidTimestamp(seed_name, seed.raw_timestamp)

    try:
        names = listing.list_entries(scan_dir)
    except DirectoryUnreadable as e:
        logger.warning("%s", e)
        names = []

    later: List[Tuple[int, str]] = []
    for name in names:
        if name == seed_name:
            continue
        cand = rule.classify(name)
        if _is_later_same_thread(cand, seed, rule):
            logger.info("Adding file %s", name)
            later.append((cand.timestamp, os.path.join(join_dir, name)))

    if sort_by_timestamp:
        later.sort(key=lambda item: item[0])
    return [seed_path] + [path for _, path in later]


def _is_later_same_thread(cand: CandidateMatch, seed: CandidateMatch, rule: MatchingRule) -> bool:
    if not cand.conforms:
        return False
    if rule.uses_thread:
        if not cand.thread_valid:
            logger.warning("Can't parse thread field %r of %s", cand.raw_thread, cand.name)
            return False
        if cand.thread != seed.thread:
            logger.debug("Skipping file %s: thread %s", cand.name, cand.thread)
            return False
    if not cand.timestamp_valid:
        logger.warning("Can't parse timestamp field %r of %s", cand.raw_timestamp, cand.name)
        return False
    if cand.timestamp > seed.timestamp:
        return True
    logger.debug("Skipping file %s", cand.name)
    return False


def build_full_list(
    directory: str,
    rule: MatchingRule,
    listing: DirectoryListingPort,
    *,
    sort_by_timestamp: bool = False,
) -> List[str]:
    """
    Every entry of `directory` whose name follows the template.

    Raises DirectoryUnreadable if the directory cannot be enumerated.
    """
    logger.debug("Scanning directory: %s", directory)
    try:
        names = listing.list_entries(directory)
    except DirectoryUnreadable as e:
        logger.error("%s", e)
        raise

    accepted: List[Tuple[Optional[int], str]] = []
    for name in names:
        cand = rule.classify(name)
        if not cand.conforms:
            continue
        logger.info("Adding file %s", name)
        accepted.append((cand.timestamp, os.path.join(directory, name)))

    if sort_by_timestamp:
        # Files without a usable timestamp go last, in enumeration order.
        accepted.sort(key=lambda item: (item[0] is None, item[0] or 0))
    return [path for _, path in accepted]


# === Facade ===


def build_file_list(
    directory: str,
    event: Optional[EventReference],
    template: Union[str, MatchingRule],
    *,
    listing: Optional[DirectoryListingPort] = None,
    sort_by_timestamp: bool = False,
) -> PcapFileList:
    """
    Compile `template` once and build the list for `event`.

    Seed mode when the event names a capture file, full-scan mode otherwise.
    Errors on the authoritative input propagate; nothing partial is returned.
    """
    rule = template if isinstance(template, MatchingRule) else compile_template(template)
    if event is not None and event.has_capture_file:
        return PcapFileList.from_seed(
            directory,
            event.capture_file,
            rule,
            listing=listing,
            sort_by_timestamp=sort_by_timestamp,
        )
    logger.debug("Scanning will start soon")
    return PcapFileList.from_directory(
        directory,
        rule,
        listing=listing,
        sort_by_timestamp=sort_by_timestamp,
    )
