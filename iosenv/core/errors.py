"""Error codes for CLI exit status.

These map to shell exit codes and are used by every command to signal the
kind of failure that occurred.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    The numeric values should remain stable:
    - 0: Success (toolchain ready, or nothing to check on this host)
    - 1: User error (bad --config path, invalid config file)
    - 2: Environment error (toolchain missing or partially installed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
