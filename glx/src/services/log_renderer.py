"""
Filtered rendering of a parsed job log.
"""

import logging
from typing import Iterable, List, Optional

from glx.src.models.log import (
    AnomalyKind,
    LogFilter,
    ParseAnomaly,
    ParseEvent,
    Section,
    SectionClose,
    SectionOpen,
    Span,
    Style,
    TextSegment,
)
from glx.src.services.ansi import decode_log
from glx.src.services.section_parser import parse_log

logger = logging.getLogger(__name__)

RenderedLine = List[Span]

def format_duration(seconds: int) -> str:
    """Format a duration as H:MM:SSs, M:SSs or Ss."""
    seconds = max(0, seconds)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02}:{secs:02}s"
    if minutes:
        return f"{minutes}:{secs:02}s"
    return f"{secs}s"

def show_line(sections: List[Section], log_filter: LogFilter) -> bool:
    """Whether text inside the given stack of open sections is visible."""
    if log_filter.show_all:
        return True
    if log_filter.headers_requested and not sections:
        return True
    if log_filter.show_only_headers:
        return False

    wanted = log_filter.name_substring
    return (
        all(not s.collapsed or wanted in s.name for s in sections)
        and any(wanted in s.name for s in sections)
    )

class LogContext:
    """Per-render state: the stack of open sections and recorded anomalies."""

    def __init__(self) -> None:
        self.sections: List[Section] = []
        self.anomalies: List[ParseAnomaly] = []

    def open(self, section: Section) -> None:
        self.sections.append(section)

    def close(self, section: Section) -> Optional[Section]:
        """
        Pop the open section matching a close marker.

        Sections opened after the match are discarded. Returns None, leaving
        the stack untouched, when no open section has that name.
        """
        for index in range(len(self.sections) - 1, -1, -1):
            if self.sections[index].name == section.name:
                opened = self.sections[index]
                discarded = self.sections[index + 1:]
                del self.sections[index:]
                if discarded:
                    self.record(ParseAnomaly(
                        kind=AnomalyKind.INTERLEAVED_CLOSE,
                        detail=(
                            f"Section {section.name} closed while "
                            f"{', '.join(s.name for s in discarded)} still open"
                        ),
                    ))
                return opened

        self.record(ParseAnomaly(
            kind=AnomalyKind.UNMATCHED_CLOSE,
            detail=f"Section {section.name} closed but never opened",
        ))
        return None

    def record(self, anomaly: ParseAnomaly) -> None:
        logger.debug(anomaly.detail)
        self.anomalies.append(anomaly)

class LogRenderer:
    """
    Render parse events into styled output lines according to a LogFilter.

    In colored mode the text of a line is passed through with its original
    escape sequences and lines carrying section markers only produce their
    annotations. In plain mode every visible text segment is emitted
    without escape sequences.
    """

    def __init__(self, log_filter: LogFilter, colored: bool = False):
        self.filter = log_filter
        self.colored = colored
        self.context = LogContext()

    def render(self, raw: bytes) -> List[RenderedLine]:
        return self.render_lines(decode_log(raw))

    def render_lines(self, lines: Iterable[str]) -> List[RenderedLine]:
        self.context = LogContext()
        output: List[RenderedLine] = []
        for events in parse_log(lines):
            output.extend(self.render_events(events))

        if self.context.sections:
            names = ", ".join(s.name for s in self.context.sections)
            logger.warning(f"Job log ended with unclosed sections: {names}")
            self.context.anomalies.append(ParseAnomaly(
                kind=AnomalyKind.UNCLOSED_SECTION,
                detail=f"Unclosed sections at end of log: {names}",
            ))
        return output

    def render_events(self, events: List[ParseEvent]) -> List[RenderedLine]:
        """Render the events of one log line."""
        ctx = self.context
        visible = show_line(ctx.sections, self.filter)
        has_marker = any(isinstance(e, (SectionOpen, SectionClose)) for e in events)
        output: List[RenderedLine] = []
        spans: RenderedLine = []

        def annotate(span: Span) -> None:
            if spans:
                output.append(spans[:])
                spans.clear()
            output.append([span])

        for event in events:
            if isinstance(event, TextSegment):
                if visible and not (self.colored and has_marker):
                    spans.append(self._text_span(event))
            elif isinstance(event, SectionOpen):
                ctx.open(event.section)
                if self.filter.headers_requested:
                    annotate(Span(Style.CAPTION, f"> {event.title} [{event.section.name}]"))
                visible = show_line(ctx.sections, self.filter)
            elif isinstance(event, SectionClose):
                opened = ctx.close(event.section)
                if self.filter.headers_requested and opened is not None:
                    duration = format_duration(event.section.timestamp - opened.timestamp)
                    annotate(Span(Style.DURATION, f"< [{duration}]"))
                visible = show_line(ctx.sections, self.filter)
            elif isinstance(event, ParseAnomaly):
                ctx.record(event)

        if spans:
            output.append(spans)
        elif not events and visible:
            # blank line in the log
            output.append([])
        return output

    def _text_span(self, event: TextSegment) -> Span:
        segment = event.segment
        if self.colored:
            return Span(Style.ANSI, segment.effect + segment.text)
        return Span(Style.TEXT, segment.text)
