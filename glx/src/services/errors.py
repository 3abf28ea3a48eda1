"""
Error types surfaced to the command line.
"""

from typing import Optional, Union

from glx.src.models.status import Status

class GlxError(Exception):
    """Base for every error the CLI reports and exits non-zero on."""
    hint: Optional[str] = None

class ConfigError(GlxError):
    """Raised when the configuration file can't be loaded."""
    pass

class BackendError(GlxError):
    """Raised when a call to the remote API fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404

    def wrap(self, context: str) -> "BackendError":
        """Return the same kind of error with context prefixed to its message."""
        wrapped = type(self)(f"{context}: {self.message}", status_code=self.status_code)
        wrapped.__cause__ = self
        return wrapped

class ResolutionError(GlxError):
    """Raised when a project, ref, pipeline or job can't be determined."""
    pass

class NoProject(ResolutionError):
    hint = "Specify one manually on the command line with --project"

    def __init__(self):
        super().__init__("Can't find a project name")

class NoRef(ResolutionError):
    hint = "Specify a tag or branch manually on the command line"

    def __init__(self, project: str, ref: Optional[str] = None):
        self.project = project
        self.ref = ref
        if ref:
            super().__init__(f"No tag or branch named '{ref}' in {project}")
        else:
            super().__init__(f"Can't find a tag or branch for {project}")

class RefDiverged(ResolutionError):
    hint = "Check the reference name or create it first"

    def __init__(self, project: str, expected: str, actual: str):
        self.project = project
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Reference '{expected}' resolved to '{actual}' in {project}"
        )

class NoPipeline(ResolutionError):
    hint = "Specify the pipeline id explicitly"

    def __init__(self, project: str, ref: str):
        self.project = project
        self.ref = ref
        super().__init__(f"Unable to determine the latest pipeline for {project} @ {ref}")

class NoJob(ResolutionError):
    hint = "Specify the job id explicitly"

    def __init__(self, project: str, ref: str, pipeline_id: int):
        self.project = project
        self.ref = ref
        self.pipeline_id = pipeline_id
        super().__init__(
            f"No job with a log in pipeline #{pipeline_id} for {project} @ {ref}"
        )

class JobNotInPipeline(ResolutionError):
    hint = "Pass the pipeline id the job belongs to with --pipeline"

    def __init__(self, project: str, job_id: int, pipeline_id: int):
        self.project = project
        self.job_id = job_id
        self.pipeline_id = pipeline_id
        super().__init__(f"Job #{job_id} is not part of pipeline #{pipeline_id} in {project}")

class JobHasNoLog(ResolutionError):
    hint = "Wait for the job to start or pick another job"

    def __init__(self, project: str, job_id: int, status: Union[Status, str]):
        self.project = project
        self.job_id = job_id
        self.status = Status(status)
        super().__init__(
            f"Job #{job_id} in {project} has no log (status: {self.status.value})"
        )
