from .directory_fs import FilesystemDirectoryListing
from .event_reader import EveEvent, read_event, read_event_file

__all__ = ["FilesystemDirectoryListing", "EveEvent", "read_event", "read_event_file"]
