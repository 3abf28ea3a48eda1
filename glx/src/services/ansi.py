"""
Split raw job log output into lines and ANSI-aware text segments.
"""

import re
from typing import List

from glx.src.models.log import Segment

# CSI escape sequences: colors (SGR) as well as erase-line and cursor moves
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

def decode_log(raw: bytes) -> List[str]:
    """Decode a job log and split it on newlines only."""
    text = raw.decode("utf-8", errors="replace")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines

def split_segments(line: str) -> List[Segment]:
    """
    Split one log line into segments of text.

    Each segment carries the escape sequences found right before its text.
    Escape sequences with no text after them are dropped.
    """
    segments: List[Segment] = []
    effect = ""
    position = 0
    for match in _ANSI_ESCAPE_RE.finditer(line):
        text = line[position:match.start()].replace("\r", "")
        if text:
            segments.append(Segment(effect, text))
            effect = ""
        effect += match.group(0)
        position = match.end()

    text = line[position:].replace("\r", "")
    if text:
        segments.append(Segment(effect, text))
    return segments
