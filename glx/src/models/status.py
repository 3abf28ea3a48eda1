"""
Run status enumeration and display severity.
"""

from enum import Enum

class Status(str, Enum):
    CREATED = "created"
    WAITING_FOR_RESOURCE = "waiting_for_resource"
    PREPARING = "preparing"
    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELED = "canceled"
    SKIPPED = "skipped"
    MANUAL = "manual"
    SCHEDULED = "scheduled"

class Severity(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    ERROR = "error"
    NEUTRAL = "neutral"

class ColorMode(str, Enum):
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

# Statuses for which a job has produced retrievable log output
LOG_STATUSES = frozenset({
    Status.RUNNING,
    Status.SUCCESS,
    Status.FAILED,
    Status.CANCELED,
})

# Default job scopes when looking for a job log
LOG_SCOPES = (Status.RUNNING, Status.SUCCESS, Status.FAILED, Status.CANCELED)

_SEVERITIES = {
    Status.SUCCESS: Severity.GOOD,
    Status.FAILED: Severity.ERROR,
    Status.CANCELED: Severity.ERROR,
    Status.CREATED: Severity.WARNING,
    Status.WAITING_FOR_RESOURCE: Severity.WARNING,
    Status.PREPARING: Severity.WARNING,
    Status.PENDING: Severity.WARNING,
    Status.RUNNING: Severity.WARNING,
    Status.SCHEDULED: Severity.WARNING,
    Status.SKIPPED: Severity.NEUTRAL,
    Status.MANUAL: Severity.NEUTRAL,
}

def has_log(status: Status) -> bool:
    return status in LOG_STATUSES

def classify_status(status: Status) -> Severity:
    """Map a pipeline or job status to its display severity."""
    return _SEVERITIES.get(status, Severity.NEUTRAL)
