"""Tests for log decoding and ANSI segment splitting."""

from glx.src.models.log import Segment
from glx.src.services.ansi import decode_log, split_segments

ESC = "\x1b"

def test_decode_log_splits_on_newlines_only():
    raw = b"one\r\ntwo\rstill two\n\nfour\n"
    assert decode_log(raw) == ["one\r", "two\rstill two", "", "four"]

def test_decode_log_replaces_invalid_utf8():
    assert decode_log(b"caf\xe9") == ["caf�"]

def test_split_plain_line():
    assert split_segments("hello") == [Segment("", "hello")]

def test_split_keeps_preceding_effects():
    line = f"{ESC}[0Ksection_start:1:x\r{ESC}[0K{ESC}[36;1mTitle{ESC}[0;m"
    assert split_segments(line) == [
        Segment(f"{ESC}[0K", "section_start:1:x"),
        Segment(f"{ESC}[0K{ESC}[36;1m", "Title"),
    ]

def test_split_escape_only_line():
    assert split_segments(f"{ESC}[0K{ESC}[0;m") == []
