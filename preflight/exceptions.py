"""
Exception types for the preflight module.

None of these escape a verifier. They are carried inside Outcome.error so a
caller can tell what degraded, and are written to the debug log.
"""

from typing import List, Optional


class PreflightError(Exception):
    """Base class for pre-flight verification errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CommandLaunchError(PreflightError):
    """
    Raised when an external tool could not be started at all.

    Attributes:
        args_list: The command line that was attempted
        cause: The underlying OSError
    """

    def __init__(self, args_list: List[str], cause: Optional[OSError] = None):
        self.args_list = list(args_list)
        self.cause = cause
        super().__init__(f"{self.args_list}: {cause}")


class CommandExitError(PreflightError):
    """
    Raised when an external tool ran but exited with a non-zero status.

    Attributes:
        args_list: The command line that was run
        returncode: The exit status
        output: Captured output of the command
    """

    def __init__(self, args_list: List[str], returncode: int, output: str = ""):
        self.args_list = list(args_list)
        self.returncode = returncode
        self.output = output
        super().__init__(f"{self.args_list}: exit status {returncode}")
