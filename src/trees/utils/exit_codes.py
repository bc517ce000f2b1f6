"""Exit codes for the trees CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes returned by trees commands."""

    SUCCESS = 0  # Success
    GENERAL_ERROR = 1  # General error
    INVALID_CONFIG = 2  # Invalid configuration
    MISSING_DEPS = 3  # git could not be run
    NOT_A_REPOSITORY = 4  # Path is not a git repository
    GIT_FAILED = 5  # git ran and reported a failure
    INTERRUPTED = 130  # User cancelled operation
