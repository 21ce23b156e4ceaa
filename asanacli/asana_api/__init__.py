"""
Asana API layer package.
Implements the REST client (client.py) and task submission (task_operations.py).

Only the dependency-free modules are re-exported here; utils.config imports
this package's errors.
"""

from .errors import AsanaError, SubmissionError, NetworkError, RejectedError, MalformedResponseError, ConfigError
from .data_models import CreatedTask, DraftTask, TaskCreationRequest

__all__ = [
    'AsanaError',
    'ConfigError',
    'CreatedTask',
    'DraftTask',
    'MalformedResponseError',
    'NetworkError',
    'RejectedError',
    'SubmissionError',
    'TaskCreationRequest',
]
