from glx.src.models.status import (
    Status,
    Severity,
    ColorMode,
    LOG_SCOPES,
    has_log,
    classify_status,
)
from glx.src.models.gitlab import Project, Tag, Branch, Ref, ProtectedRef, Pipeline, Job
from glx.src.models.log import (
    SectionKind,
    Section,
    Segment,
    AnomalyKind,
    TextSegment,
    SectionOpen,
    SectionClose,
    ParseAnomaly,
    ParseEvent,
    LogFilter,
    Style,
    Span,
)

__all__ = [
    "Status",
    "Severity",
    "ColorMode",
    "LOG_SCOPES",
    "has_log",
    "classify_status",
    "Project",
    "ProtectedRef",
    "Tag",
    "Branch",
    "Ref",
    "Pipeline",
    "Job",
    "SectionKind",
    "Section",
    "Segment",
    "AnomalyKind",
    "TextSegment",
    "SectionOpen",
    "SectionClose",
    "ParseAnomaly",
    "ParseEvent",
    "LogFilter",
    "Style",
    "Span",
]
