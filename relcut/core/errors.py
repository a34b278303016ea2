"""Error codes for CLI exit status.

A release run either succeeds or fails; the code only tells the operator
which kind of thing went wrong so scripts can react (e.g. retry a push
after a network outage).
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad version, tag/branch already exists, nothing to commit)
    - 2: Environment error (not a git repository, checkout refused)
    - 4: Network error (fetch or push failed)
    - 5: I/O error (release notes could not be written)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
