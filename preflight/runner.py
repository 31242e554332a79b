"""
External command interface for the preflight module.

All search-path lookups and process invocations go through CommandRunner,
so verifiers can be driven by a substitute runner in tests.
"""

import shutil
import subprocess
from typing import List, Optional

from .exceptions import CommandExitError, CommandLaunchError
from .models import Outcome


class CommandRunner:
    """
    Runs external tools synchronously.

    No timeout is applied: a hanging tool blocks the caller.
    """

    def which(self, name: str) -> Optional[str]:
        """
        Resolve an executable on the search path.

        Returns:
            The full path of the executable, or None if it cannot be found
        """
        return shutil.which(name)

    def run(self, args: List[str], combined: bool = False) -> Outcome:
        """
        Run a command and capture its output.

        Args:
            args: Command line, program first
            combined: If True, stderr is merged into the captured output

        Returns:
            Outcome whose value is the captured output. On a non-zero exit the
            outcome is degraded with CommandExitError but still carries the
            output; if the program cannot be started it is degraded with
            CommandLaunchError and carries "".
        """
        try:
            completed = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if combined else subprocess.PIPE,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as e:
            return Outcome.degraded_with(CommandLaunchError(args, e), "")

        output = completed.stdout or ""
        if completed.returncode != 0:
            return Outcome.degraded_with(
                CommandExitError(args, completed.returncode, output),
                output,
            )
        return Outcome.ok(output)
