"""Exit codes for the CLI.

Values are used as process exit codes and should remain stable:
- 0: Success
- 1: User error (bad action input, unknown branch)
- 2: Environment error (gh missing or not authenticated)
- 4: Network error (GitHub API failure)
- 5: I/O error (cannot write action outputs)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
