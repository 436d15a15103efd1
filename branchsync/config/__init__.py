"""Config module - run configuration and exit codes."""

from .schema import (
    DEFAULT_API_URL,
    DEFAULT_DESCRIPTION,
    DEFAULT_TIMEOUT,
    DEFAULT_TITLE,
    ExitCode,
    MergeConfig,
)

__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_DESCRIPTION",
    "DEFAULT_TIMEOUT",
    "DEFAULT_TITLE",
    "ExitCode",
    "MergeConfig",
]
