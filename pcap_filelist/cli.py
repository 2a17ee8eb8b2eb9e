"""
Command line entry point.

Prints the capture files relevant to an event, one path per line, in the
order a consumer would pull them:

  pcap-filelist --dir /var/log/suricata --template 'log.%n.%t.pcap' \
      --capture-file log.1.1700000000.pcap

Without --capture-file/--event every conforming file in the directory is
listed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from .config import FileListConfig, config_from_mapping, load_config
from .dto import EventReference
from .errors import ConfigError, OutOfFiles, PcapFileListError
from .intake.event_reader import read_event_file
from .listing.file_list import build_file_list
from .utils import init_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pcap-filelist",
        description="List rotated capture files relevant to an event.",
    )
    ap.add_argument("--config", "-c", help="YAML configuration file.")
    ap.add_argument("--dir", "-d", dest="pcap_directory", help="Directory holding capture files.")
    ap.add_argument("--template", "-t", dest="filename_template", help="File naming template (%%n, %%i, %%t).")
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--capture-file", "-f", help="Known capture file of the event (bare name).")
    src.add_argument("--event", "-e", help="Path to a JSON event carrying 'capture_file'.")
    ap.add_argument("--sort", dest="sort_by_timestamp", action="store_true", default=None,
                    help="Order files by their timestamp.")
    ap.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...).")
    return ap


def _resolve_config(args: argparse.Namespace) -> FileListConfig:
    cfg = load_config(args.config)
    overrides: Dict[str, Any] = {
        k: v
        for k, v in (
            ("pcap_directory", args.pcap_directory),
            ("filename_template", args.filename_template),
            ("sort_by_timestamp", args.sort_by_timestamp),
            ("log_level", args.log_level),
        )
        if v is not None
    }
    if not overrides:
        return cfg
    # Command line beats file and environment.
    return config_from_mapping({**cfg.model_dump(), **overrides}, env={})


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        init_logging(args.log_level or "INFO")
        logger.error("%s", e)
        return EXIT_ERROR

    try:
        init_logging(cfg.log_level, cfg.log_file)
    except OSError as e:
        init_logging(cfg.log_level)
        logger.error("Can't open log file %s: %s", cfg.log_file, e)
        return EXIT_ERROR

    try:
        if args.event:
            event = read_event_file(args.event)
        else:
            event = EventReference(capture_file=args.capture_file)
        file_list = build_file_list(
            cfg.pcap_directory,
            event,
            cfg.filename_template,
            sort_by_timestamp=cfg.sort_by_timestamp,
        )
    except PcapFileListError as e:
        logger.error("%s", e)
        return EXIT_ERROR

    while True:
        try:
            path = file_list.get_next()
        except OutOfFiles:
            break
        sys.stdout.write(path + "\n")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
