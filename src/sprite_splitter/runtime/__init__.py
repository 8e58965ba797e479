"""Runtime utilities for output, validation, and version helpers."""

from .output import archive_output_path, setup_output_directory
from .validation import validate_input_path, validate_prefix
from .version import resolve_project_version

__all__ = [
    "archive_output_path",
    "resolve_project_version",
    "setup_output_directory",
    "validate_input_path",
    "validate_prefix",
]
