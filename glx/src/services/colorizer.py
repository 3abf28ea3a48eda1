"""
Terminal output for rendered logs and status words.
"""

import sys
from typing import Iterable, List, Optional, TextIO

from rich.console import Console
from rich.text import Text

from glx.src.models.log import Span, Style
from glx.src.models.status import ColorMode, Severity, Status, classify_status

SEVERITY_STYLES = {
    Severity.GOOD: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
    Severity.NEUTRAL: "",
}

SPAN_STYLES = {
    Style.TEXT: "",
    Style.CAPTION: "bold yellow",
    Style.DURATION: "yellow",
}

def build_console(mode: ColorMode, file: Optional[TextIO] = None, stderr: bool = False) -> Console:
    options = dict(file=file, stderr=stderr, highlight=False, soft_wrap=True, emoji=False)
    if mode == ColorMode.ALWAYS:
        return Console(force_terminal=True, **options)
    if mode == ColorMode.NEVER:
        return Console(color_system=None, no_color=True, **options)
    return Console(**options)

class Colorizer:
    """Turns style tags into colored or plain terminal output."""

    def __init__(self, console: Console):
        self.console = console

    @classmethod
    def for_mode(cls, mode: ColorMode, file: Optional[TextIO] = None) -> "Colorizer":
        return cls(build_console(mode, file=file or sys.stdout))

    @property
    def colored(self) -> bool:
        return self.console.color_system is not None

    def to_text(self, spans: Iterable[Span]) -> Text:
        text = Text()
        for span in spans:
            if span.style == Style.ANSI:
                text.append_text(Text.from_ansi(span.text))
            else:
                text.append(span.text, style=SPAN_STYLES.get(span.style, ""))
        return text

    def write_line(self, spans: Iterable[Span]) -> None:
        self.console.print(self.to_text(spans), markup=False)

    def write_lines(self, lines: List[List[Span]]) -> None:
        for spans in lines:
            self.write_line(spans)

    def status(self, status: Status) -> Text:
        return Text(status.value, style=SEVERITY_STYLES[classify_status(status)])

    def print(self, *parts, **kwargs) -> None:
        self.console.print(*parts, markup=False, **kwargs)
