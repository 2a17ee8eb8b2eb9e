import logging
import os

import pytest

from pcap_filelist.errors import DirectoryUnreadable
from pcap_filelist.utils import LOGGER_NAME


class FakeListing:
    """DirectoryListingPort returning a fixed order, or failing."""

    def __init__(self, names=None, fail=False):
        self.names = list(names or [])
        self.fail = fail
        self.calls = []

    def list_entries(self, directory):
        self.calls.append(directory)
        if self.fail:
            raise DirectoryUnreadable(directory, "Permission denied")
        return list(self.names)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """init_logging() detaches the package logger from root; undo it for caplog."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_listing():
    return FakeListing


@pytest.fixture
def capture_dir(tmp_path):
    """Directory with a small rotated capture set (template cap.%n.%t.pcap)."""
    for name in (
        "cap.1.100.pcap",
        "cap.1.150.pcap",
        "cap.1.50.pcap",
        "cap.2.200.pcap",
        "cap.x.300.pcap",
        "notes.txt",
    ):
        (tmp_path / name).write_bytes(b"")
    return tmp_path


@pytest.fixture
def touch():
    def _touch(directory, *names):
        for name in names:
            open(os.path.join(str(directory), name), "w").close()
    return _touch
