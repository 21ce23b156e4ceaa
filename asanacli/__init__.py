"""
asanacli: create Asana tasks from the command line.

Picks a workspace, projects, assignee, due date and custom fields, remembers
your last choices, and keeps a draft when a submission fails.
"""

__version__ = "1.0.0"

# Import the main CLI app for entry point
from .cli import app

__all__ = ["app", "__version__"]
