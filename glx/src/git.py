"""
Hints taken from the local git repository: project path, branch and tag.
"""

import logging
import subprocess
from typing import List, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)

class LocalRepo(BaseModel):
    project_path: Optional[str] = None
    branch: Optional[str] = None
    tag: Optional[str] = None

def parse_remote_path(url: str) -> Optional[str]:
    """
    Extract the namespace/name path from a remote URL.

    Handles https://host/group/proj.git, ssh://git@host:22/group/proj.git
    and the scp-like git@host:group/proj.git forms.
    """
    url = url.strip()
    if not url:
        return None

    if "://" in url:
        path = url.split("://", 1)[1]
        path = path.split("/", 1)[1] if "/" in path else ""
    elif ":" in url:
        path = url.split(":", 1)[1]
    else:
        path = url

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    return path or None

def _git(args: List[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
            timeout=10,
        )
    except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        logger.debug(f"git {' '.join(args)} failed: {e}")
        return None
    output = result.stdout.strip()
    return output or None

def discover(cwd: Optional[str] = None) -> Optional[LocalRepo]:
    """Read hints from the git repository containing cwd, or None outside one."""
    if _git(["rev-parse", "--is-inside-work-tree"], cwd) != "true":
        return None

    branch = _git(["symbolic-ref", "--short", "-q", "HEAD"], cwd)

    remote = None
    if branch:
        remote = _git(["config", f"branch.{branch}.remote"], cwd)
    url = _git(["remote", "get-url", "--push", remote or "origin"], cwd)
    project_path = parse_remote_path(url) if url else None

    # Highest version tag pointing at HEAD, else the closest tag
    tags = _git(["tag", "--points-at", "HEAD", "--sort=-v:refname"], cwd)
    tag = tags.splitlines()[0] if tags else None
    if tag is None:
        tag = _git(["describe", "--tags", "--abbrev=0"], cwd)

    repo = LocalRepo(project_path=project_path, branch=branch, tag=tag)
    logger.debug(f"Local repository hints: {repo}")
    return repo
