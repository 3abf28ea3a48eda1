"""Tests for console construction and colored log output."""

from io import StringIO

import pytest

from glx.src.models.log import LogFilter, Span, Style
from glx.src.models.status import ColorMode, Status
from glx.src.services.colorizer import Colorizer, build_console
from glx.src.services.log_renderer import LogRenderer

ESC = "\x1b"

LOG = (
    b"\x1b[0Ksection_start:103:step_script\r\x1b[0K\x1b[36;1mExecuting step script\x1b[0;m\n"
    b"\x1b[32;1m$ make test\x1b[0;m\n"
    b"\x1b[0Ksection_end:168:step_script\r\x1b[0K\n"
)

@pytest.fixture(autouse=True)
def color_terminal(monkeypatch):
    monkeypatch.setenv("TERM", "xterm-256color")
    for name in ("NO_COLOR", "FORCE_COLOR", "COLORTERM"):
        monkeypatch.delenv(name, raising=False)

def colorizer(mode):
    buffer = StringIO()
    return Colorizer(build_console(mode, file=buffer)), buffer

def test_always_is_colored():
    assert colorizer(ColorMode.ALWAYS)[0].colored

def test_never_is_not_colored():
    assert not colorizer(ColorMode.NEVER)[0].colored

def test_ansi_span_keeps_its_color():
    out, buffer = colorizer(ColorMode.ALWAYS)

    out.write_line([Span(Style.ANSI, f"{ESC}[32mok{ESC}[0m")])

    assert f"{ESC}[32mok" in buffer.getvalue()

def test_never_writes_no_escape_sequences():
    out, buffer = colorizer(ColorMode.NEVER)

    out.write_line([Span(Style.ANSI, f"{ESC}[32mok{ESC}[0m"), Span(Style.CAPTION, " done")])

    assert buffer.getvalue() == "ok done\n"

def test_status_uses_severity_color():
    out, buffer = colorizer(ColorMode.ALWAYS)

    out.print(out.status(Status.FAILED))

    assert f"{ESC}[31mfailed" in buffer.getvalue()

def test_colored_log_prints_section_title_once():
    out, buffer = colorizer(ColorMode.ALWAYS)
    renderer = LogRenderer(LogFilter(show_headers=True), colored=out.colored)

    out.write_lines(renderer.render(LOG))

    output = buffer.getvalue()
    assert output.count("Executing step script") == 1
    assert "> Executing step script [step_script]" in output
    assert f"{ESC}[32;1m" in output or f"{ESC}[1;32m" in output
    assert "$ make test" in output
    assert "section_start" not in output
