"""Error codes for CLI exit status.

The numeric values are process exit codes and should remain stable:
- 0: Success
- 1: User error (bad arguments, unknown node)
- 2: Configuration error (invalid options, unreadable config file)
- 3: Parse error (bad time expression, unparsable release identifier)
- 4: Shell error (remote query or removal failed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    PARSE_ERROR = 3
    SHELL_ERROR = 4
