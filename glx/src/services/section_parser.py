"""
Tokenizer for the section markers embedded in job logs.

A marker is written by the runner as plain text on its own segment:

    section_start:<timestamp>:<name>[<flags>]
    section_end:<timestamp>:<name>[<flags>]

The segment following a start marker is the section's display title.
"""

import re
from typing import Iterable, Iterator, List, Optional

from glx.src.models.log import (
    AnomalyKind,
    ParseAnomaly,
    ParseEvent,
    Section,
    SectionClose,
    SectionKind,
    SectionOpen,
    Segment,
    TextSegment,
)
from glx.src.services.ansi import split_segments

SECTION_PREFIXES = ("section_start:", "section_end:")

_SECTION_RE = re.compile(
    r"^section_(?P<kind>start|end):(?P<timestamp>-?\d{1,19}):(?P<name>[^\s\[\]:]+)"
    r"(?:\[(?P<flags>[^\]]*)\])?$"
)

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

def parse_section(text: str) -> Optional[Section]:
    """Parse a section marker. Returns None for anything else."""
    match = _SECTION_RE.match(text.strip())
    if not match:
        return None

    timestamp = int(match.group("timestamp"))
    if not _INT64_MIN <= timestamp <= _INT64_MAX:
        return None

    return Section(
        kind=SectionKind.START if match.group("kind") == "start" else SectionKind.END,
        timestamp=timestamp,
        name=match.group("name"),
        collapsed=match.group("flags") == "collapsed=true",
    )

def _is_marker_like(text: str) -> bool:
    return text.strip().startswith(SECTION_PREFIXES)

def _resolve_pending(pending: Section, title: str = "") -> ParseEvent:
    if pending.kind is SectionKind.START:
        return SectionOpen(section=pending, title=title)
    return SectionClose(section=pending)

def parse_line(segments: Iterable[Segment]) -> List[ParseEvent]:
    """
    Turn the segments of one log line into parse events.

    A marker is held until the next segment: for a start marker that segment
    is the title, for an end marker it is either another marker or text. A
    marker still held at the end of the line is emitted without a title.
    """
    events: List[ParseEvent] = []
    pending: Optional[Section] = None

    for segment in segments:
        section = parse_section(segment.text)
        if section is None and _is_marker_like(segment.text):
            events.append(ParseAnomaly(
                kind=AnomalyKind.MALFORMED_HEADER,
                detail=f"Malformed section marker: {segment.text.strip()!r}",
            ))

        if pending is None:
            if section is None:
                events.append(TextSegment(segment=segment))
            pending = section
            continue

        if pending.kind is SectionKind.START:
            events.append(_resolve_pending(pending, "" if section else segment.text.strip()))
        else:
            events.append(_resolve_pending(pending))
            if section is None:
                events.append(TextSegment(segment=segment))
        pending = section

    if pending is not None:
        events.append(_resolve_pending(pending))
    return events

def parse_log(lines: Iterable[str]) -> Iterator[List[ParseEvent]]:
    """Yield the parse events of each line of a log."""
    for line in lines:
        yield parse_line(split_segments(line))
