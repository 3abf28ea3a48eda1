from glx.src.commands.branches import app as branches_app
from glx.src.commands.pipeline import app as pipeline_app
from glx.src.commands.project import app as project_app
from glx.src.commands.tags import app as tags_app

__all__ = ["branches_app", "pipeline_app", "project_app", "tags_app"]
