"""
Job log models: section markers, parse events and render filters.
"""

from enum import Enum
from typing import NamedTuple, Union

from pydantic import BaseModel

class SectionKind(str, Enum):
    START = "start"
    END = "end"

class Section(BaseModel):
    kind: SectionKind
    timestamp: int
    name: str
    collapsed: bool = False

    class Config:
        frozen = True

class Segment(NamedTuple):
    """A run of text on one log line with the escape sequences preceding it."""
    effect: str
    text: str

class AnomalyKind(str, Enum):
    MALFORMED_HEADER = "malformed_header"
    UNMATCHED_CLOSE = "unmatched_close"
    INTERLEAVED_CLOSE = "interleaved_close"
    UNCLOSED_SECTION = "unclosed_section"

class TextSegment(BaseModel):
    segment: Segment

class SectionOpen(BaseModel):
    section: Section
    title: str = ""

class SectionClose(BaseModel):
    section: Section

class ParseAnomaly(BaseModel):
    """Log format irregularity. Recorded, never raised."""
    kind: AnomalyKind
    detail: str

ParseEvent = Union[TextSegment, SectionOpen, SectionClose, ParseAnomaly]

class LogFilter(BaseModel):
    show_all: bool = False
    show_headers: bool = False
    show_only_headers: bool = False
    name_substring: str = "step_script"

    @property
    def headers_requested(self) -> bool:
        return self.show_all or self.show_headers or self.show_only_headers

class Style(str, Enum):
    TEXT = "text"
    ANSI = "ansi"
    CAPTION = "caption"
    DURATION = "duration"

class Span(NamedTuple):
    style: Style
    text: str
