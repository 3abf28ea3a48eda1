"""
Execution context handed to every command.
"""

from typing import Optional

from rich.console import Console

from glx.src.config import Settings
from glx.src.git import LocalRepo
from glx.src.models.gitlab import Project, Ref
from glx.src.services.backend import Backend
from glx.src.services.colorizer import Colorizer, build_console
from glx.src.services.resolver import RunResolver

class CliContext:
    """
    Everything a command needs, built once per invocation.

    Attributes:
        settings: Loaded configuration.
        backend: Remote API access.
        resolver: RunResolver over the backend.
        colorizer: Output for rendered results (stdout).
        err: Console for notices and errors (stderr).
        repo: Hints from the local git repository.
    """

    def __init__(
        self,
        settings: Settings,
        backend: Backend,
        colorizer: Colorizer,
        repo: Optional[LocalRepo] = None,
        err: Optional[Console] = None,
        open_links: bool = False,
        show_urls: bool = False,
    ):
        self.settings = settings
        self.backend = backend
        self.resolver = RunResolver(backend)
        self.colorizer = colorizer
        self.err = err or build_console(settings.color, stderr=True)
        self.repo = repo or LocalRepo()
        self.open_links = open_links
        self.show_urls = show_urls

    def project(self, explicit: Optional[str] = None) -> Project:
        return self.resolver.resolve_project(explicit, self.repo.project_path)

    def ref(self, explicit: Optional[str], project: Project, strict: bool = False) -> Ref:
        resolve = self.resolver.resolve_ref_strict if strict else self.resolver.resolve_ref
        return resolve(explicit, project, self.repo.tag, self.repo.branch)

    def close(self) -> None:
        close = getattr(self.backend, "close", None)
        if close is not None:
            close()
