"""
Event intake.

Alerts produced while Suricata reads or logs pcap carry the name of the
capture file they came from in the `capture_file` field of the EVE JSON
record. This module turns one such record into an `EventReference`; the
rest of the record is ignored.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from ..dto import EventReference
from ..errors import InvalidEvent


class EveEvent(BaseModel):
    """The few EVE fields the file list cares about."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    capture_file: Optional[str] = None
    event_type: Optional[str] = None
    timestamp: Optional[str] = None
    flow_id: Optional[int] = None

    def to_reference(self) -> EventReference:
        return EventReference(capture_file=self.capture_file)


def read_event(record: Union[str, bytes, Mapping[str, Any]]) -> EventReference:
    """
    Decode one EVE record (JSON text or an already-parsed mapping).

    Raises InvalidEvent if the text is not JSON, is not an object, or has
    fields of the wrong type.
    """
    if isinstance(record, (str, bytes)):
        try:
            record = json.loads(record)
        except json.JSONDecodeError as e:
            raise InvalidEvent(f"Event is not valid JSON: {e}") from e
    if not isinstance(record, Mapping):
        raise InvalidEvent(f"Event must be a JSON object, got {type(record).__name__}")
    try:
        event = EveEvent.model_validate(dict(record))
    except ValidationError as e:
        raise InvalidEvent(f"Event does not validate: {e}") from e
    return event.to_reference()


def read_event_file(path: Union[str, Path]) -> EventReference:
    """Read an event from a file holding a single JSON object."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidEvent(f"Can't read event file {p}: {e}") from e
    return read_event(text)
