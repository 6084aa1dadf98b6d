"""Error union for the cleanup service."""

from __future__ import annotations

from sweep.core.clock import ParseError
from sweep.core.config import ConfigurationError
from sweep.platform.shell import ShellExecutionError

__all__ = ["CleanupError", "ConfigurationError", "ParseError", "ShellExecutionError"]

type CleanupError = ParseError | ShellExecutionError | ConfigurationError
