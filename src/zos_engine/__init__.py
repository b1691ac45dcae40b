"""
z/OSMF client engine.

Compares local and remote content, manages the workflow lifecycle and logs out
of APIML. Designed to be reusable by the CLI and by other Python callers.
"""

# Main orchestrator
from .comparer import CompareRunner
from .errors import (
    NotAFileError,
    PathNotFoundError,
    TransportError,
    ValidationError,
    ZosClientError,
)
from .logout import apiml_logout

# Core models
from .models import (
    ArchivedWorkflow,
    CompareOptions,
    ComparisonInput,
    ComparisonResult,
    DisplayMode,
    Session,
    SourceKind,
    SourceSpec,
)
from .workflows import archive_workflow, delete_archived_workflow, delete_workflow

__all__ = [
    # Models
    "Session",
    "SourceKind",
    "SourceSpec",
    "CompareOptions",
    "ComparisonInput",
    "ComparisonResult",
    "DisplayMode",
    "ArchivedWorkflow",
    # Errors
    "ZosClientError",
    "ValidationError",
    "NotAFileError",
    "PathNotFoundError",
    "TransportError",
    # Operations
    "CompareRunner",
    "apiml_logout",
    "archive_workflow",
    "delete_workflow",
    "delete_archived_workflow",
]
