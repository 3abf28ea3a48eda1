from glx.src.services.errors import (
    GlxError,
    ConfigError,
    BackendError,
    ResolutionError,
    NoProject,
    NoRef,
    RefDiverged,
    NoPipeline,
    NoJob,
    JobNotInPipeline,
    JobHasNoLog,
)
from glx.src.services.backend import Backend, GitLabBackend
from glx.src.services.resolver import RunResolver, JobSelection, pick_job
from glx.src.services.ansi import decode_log, split_segments
from glx.src.services.section_parser import parse_section, parse_line, parse_log
from glx.src.services.log_renderer import (
    LogRenderer,
    LogContext,
    format_duration,
    show_line,
)
from glx.src.services.colorizer import Colorizer, build_console

__all__ = [
    "GlxError",
    "ConfigError",
    "BackendError",
    "ResolutionError",
    "NoProject",
    "NoRef",
    "RefDiverged",
    "NoPipeline",
    "NoJob",
    "JobNotInPipeline",
    "JobHasNoLog",
    "Backend",
    "GitLabBackend",
    "RunResolver",
    "JobSelection",
    "pick_job",
    "decode_log",
    "split_segments",
    "parse_section",
    "parse_line",
    "parse_log",
    "LogRenderer",
    "LogContext",
    "format_duration",
    "show_line",
    "Colorizer",
    "build_console",
]
