"""
Naming-template compiler.

Capture tools that rotate their output (Suricata's pcap-log, for instance)
name each file from a template with three substitution tokens:

  %n -- thread number
  %i -- thread id (only honored when %n is absent)
  %t -- timestamp, Unix epoch seconds

`compile_template` turns such a template into a `MatchingRule` that tests a
base name for conformance and extracts the thread and timestamp fields.
Everything that is not an active token is escaped and matched literally.
No file-system access happens here.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional

from ..dto import CandidateMatch

logger = logging.getLogger(__name__)

THREAD_NUMBER_TOKEN = "%n"
THREAD_ID_TOKEN = "%i"
TIMESTAMP_TOKEN = "%t"

# Group ordinal used when the template has no thread token.
ABSENT = -1

_CAPTURE = r"([0-9]+)"
_DIGITS = r"[0-9]+"
_TOKEN_LEN = 2

# Fields are parsed as signed 64-bit integers.
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class MatchingRule:
    """
    Compiled form of a naming template.

    Attributes:
        template: The template the rule was compiled from.
        pattern: Regular expression with one capturing group per active token.
        thread_group: Ordinal of the thread group, or ABSENT.
        timestamp_group: Ordinal of the timestamp group.
    """
    template: str
    pattern: re.Pattern[str]
    thread_group: int
    timestamp_group: int

    @property
    def uses_thread(self) -> bool:
        return self.thread_group != ABSENT

    @property
    def has_timestamp(self) -> bool:
        # A template without %t still gets an ordinal; it just never captures.
        return self.pattern.groups >= self.timestamp_group

    def classify(self, name: str) -> CandidateMatch:
        """
        Run one base name through the rule.

        A template without any token matches nothing. Without %t the
        timestamp of a matching name is None.
        """
        if self.pattern.groups == 0:
            return CandidateMatch(name=name, status="unmatched")
        m = self.pattern.fullmatch(name)
        if m is None:
            return CandidateMatch(name=name, status="unmatched")

        raw_ts = m.group(self.timestamp_group) if self.has_timestamp else None
        raw_thread = m.group(self.thread_group) if self.uses_thread else None
        ts = parse_field(raw_ts) if raw_ts is not None else None
        thread = parse_field(raw_thread) if raw_thread is not None else None

        ok = (raw_ts is None or ts is not None) and (raw_thread is None or thread is not None)
        return CandidateMatch(
            name=name,
            status="matched" if ok else "invalid",
            thread=thread,
            timestamp=ts,
            raw_thread=raw_thread,
            raw_timestamp=raw_ts,
        )

    def matches(self, name: str) -> bool:
        """True if `name` follows the template (field values are not checked)."""
        return self.classify(name).conforms


def parse_field(raw: Optional[str]) -> Optional[int]:
    """Parse a captured digit run; None when it does not fit in an int64."""
    if raw is None:
        return None
    try:
        value = int(raw, 10)
    except ValueError:
        return None
    if value > INT64_MAX:
        return None
    return value


def compile_template(template: str) -> MatchingRule:
    """
    Compile a naming template into a MatchingRule.

    Only the first occurrence of each token is active. Group ordinals follow
    the order in which the thread and timestamp tokens appear; without a
    thread token the timestamp is always group 1.
    """
    thread_token = THREAD_NUMBER_TOKEN if THREAD_NUMBER_TOKEN in template else THREAD_ID_TOKEN
    thread_pos = template.find(thread_token)
    ts_pos = template.find(TIMESTAMP_TOKEN)

    if thread_pos == -1:
        thread_group, ts_group = ABSENT, 1
    elif ts_pos == -1 or thread_pos < ts_pos:
        thread_group, ts_group = 1, 2
    else:
        thread_group, ts_group = 2, 1

    subs: Dict[int, str] = {}
    if thread_pos != -1:
        subs[thread_pos] = _CAPTURE
    if ts_pos != -1:
        subs[ts_pos] = _CAPTURE
    if thread_token == THREAD_NUMBER_TOKEN:
        # %i loses to %n but still stands for digits in the file name.
        ignored = template.find(THREAD_ID_TOKEN)
        if ignored != -1:
            subs[ignored] = _DIGITS

    parts = []
    cursor = 0
    for pos in sorted(subs):
        parts.append(re.escape(template[cursor:pos]))
        parts.append(subs[pos])
        cursor = pos + _TOKEN_LEN
    parts.append(re.escape(template[cursor:]))
    regexp = "".join(parts)

    logger.debug("Using regexp: %s", regexp)
    return MatchingRule(
        template=template,
        pattern=re.compile(regexp),
        thread_group=thread_group,
        timestamp_group=ts_group,
    )
