"""Tests for section marker parsing."""

import pytest

from glx.src.models.log import (
    AnomalyKind,
    ParseAnomaly,
    SectionClose,
    SectionKind,
    SectionOpen,
    Segment,
    TextSegment,
)
from glx.src.services.section_parser import parse_line, parse_log, parse_section

ESC = "\x1b"

def test_parse_start_collapsed():
    section = parse_section("section_start:1000:foo[collapsed=true]")
    assert section.kind is SectionKind.START
    assert section.timestamp == 1000
    assert section.name == "foo"
    assert section.collapsed

def test_parse_end_without_flags():
    section = parse_section("section_end:1200:prepare_executor")
    assert section.kind is SectionKind.END
    assert section.name == "prepare_executor"
    assert not section.collapsed

@pytest.mark.parametrize("flags", ["collapsed=false", "collapsed=true,x=y", "hide_duration=true"])
def test_only_exact_collapsed_flag_collapses(flags):
    assert not parse_section(f"section_start:1:foo[{flags}]").collapsed

@pytest.mark.parametrize("text", [
    "section_start:abc:foo",
    "section_start::foo",
    "section_start:12",
    "section_start:12:",
    "section_end:99999999999999999999999:foo",
    "section_middle:1:foo",
    "$ echo section_start:1:foo",
    "",
])
def test_malformed_markers_are_not_sections(text):
    assert parse_section(text) is None

def test_oversized_timestamp_is_not_a_section():
    assert parse_section("section_start:" + "9" * 5000 + ":foo") is None

def test_plain_text_line():
    events = parse_line([Segment("", "hello world")])
    assert events == [TextSegment(segment=Segment("", "hello world"))]

def test_start_marker_consumes_title():
    events = parse_line([
        Segment(f"{ESC}[0K", "section_start:1000:build"),
        Segment(f"{ESC}[36;1m", "Building"),
    ])

    assert len(events) == 1
    assert isinstance(events[0], SectionOpen)
    assert events[0].section.name == "build"
    assert events[0].title == "Building"

def test_close_followed_by_open_on_one_line():
    events = parse_line([
        Segment("", "section_end:1100:build"),
        Segment(f"{ESC}[0K", "section_start:1100:test"),
        Segment(f"{ESC}[36;1m", "Testing"),
    ])

    assert [type(e) for e in events] == [SectionClose, SectionOpen]
    assert events[0].section.name == "build"
    assert events[1].section.name == "test"
    assert events[1].title == "Testing"

def test_pending_marker_flushed_at_end_of_line():
    close = parse_line([Segment("", "section_end:1100:build")])
    open_ = parse_line([Segment("", "section_start:1100:build")])

    assert isinstance(close[0], SectionClose)
    assert isinstance(open_[0], SectionOpen)
    assert open_[0].title == ""

def test_text_after_close_is_kept():
    events = parse_line([Segment("", "section_end:1:a"), Segment("", "trailing")])
    assert isinstance(events[0], SectionClose)
    assert events[1] == TextSegment(segment=Segment("", "trailing"))

def test_malformed_marker_degrades_to_text():
    events = parse_line([Segment("", "section_start:oops:foo")])

    assert isinstance(events[0], ParseAnomaly)
    assert events[0].kind is AnomalyKind.MALFORMED_HEADER
    assert events[1] == TextSegment(segment=Segment("", "section_start:oops:foo"))

def test_parse_log_from_raw_lines():
    lines = [
        f"{ESC}[0Ksection_start:1000:step_script\r{ESC}[0K{ESC}[0;m{ESC}[36;1mExecuting step{ESC}[0;m",
        f"{ESC}[32;1m$ make{ESC}[0;m",
        f"{ESC}[0Ksection_end:1010:step_script\r{ESC}[0K",
    ]

    events = list(parse_log(lines))

    assert isinstance(events[0][0], SectionOpen)
    assert events[0][0].title == "Executing step"
    assert events[1][0].segment.text == "$ make"
    assert isinstance(events[2][0], SectionClose)
