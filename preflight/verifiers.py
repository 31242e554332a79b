"""
Presence and liveness verifiers.

verify_conf checks that expected configuration files exist; verify_bin
checks that expected binaries resolve on the search path and are running.
Both report problems as [WARN] diagnostics and never raise.
"""

import os
from typing import List, Optional

from common.reporter import DiagnosticReporter, get_reporter

from .exceptions import CommandLaunchError
from .models import BinaryReport, ConfigReport
from .runner import CommandRunner
from .utils import continue_with_error, join_names


DEFAULT_PS_TOOL = "ps"


def _non_blank(values) -> List[str]:
    return [v for v in values if v and v.strip()]


def verify_conf(
    *conf_paths: str,
    reporter: Optional[DiagnosticReporter] = None
) -> ConfigReport:
    """
    Check that each configuration file exists.

    Blank entries are skipped; other paths are checked exactly as given.
    Only paths that do not exist count as missing. Other stat errors
    (permissions, a file used as a directory) are logged at debug level and
    otherwise ignored.

    Args:
        conf_paths: Paths to check, in reporting order
        reporter: Reporter for the diagnostic (global one if None)

    Returns:
        ConfigReport listing the missing paths
    """
    reporter = reporter or get_reporter()
    missing = []

    for path in _non_blank(conf_paths):
        try:
            os.stat(path)
        except FileNotFoundError as e:
            continue_with_error(e)
            missing.append(path)
        except OSError as e:
            continue_with_error(e)

    if missing:
        reporter.warn(f"Missing kubernetes config files: {', '.join(missing)}")

    return ConfigReport(missing=tuple(missing))


def verify_bin(
    *bin_names: str,
    runner: Optional[CommandRunner] = None,
    reporter: Optional[DiagnosticReporter] = None,
    ps_tool: str = DEFAULT_PS_TOOL
) -> BinaryReport:
    """
    Check that each binary resolves on the search path and is running.

    All names are looked up with a single process listing:

        ps -C <name1,name2,...> -o cmd --no-headers

    A binary counts as running when its name occurs anywhere in that
    listing. This is a plain substring test, so "kubelet" is also found
    inside an unrelated command line that merely contains the word.

    Names that do not resolve are reported as missing and are not checked
    for running state, though they are still part of the ps filter.

    If ps cannot be started, no "not running" diagnostic is produced, while
    missing binaries are still reported. A non-zero ps exit status only means
    nothing matched; its output is still searched.

    Args:
        bin_names: Executable names, in reporting order
        runner: External command interface (a CommandRunner if None)
        reporter: Reporter for the diagnostics (global one if None)
        ps_tool: Process listing program

    Returns:
        BinaryReport with missing and not running names
    """
    runner = runner or CommandRunner()
    reporter = reporter or get_reporter()
    names = [n.strip() for n in _non_blank(bin_names)]
    missing = []
    not_running = []

    for name in names:
        if runner.which(name) is None:
            missing.append(name)
            continue_with_error(FileNotFoundError(f"{name}: executable file not found in $PATH"))

    listing_degraded = False
    output = ""
    if names:
        args = [ps_tool, "-C", join_names(names, ","), "-o", "cmd", "--no-headers"]
        outcome = runner.run(args)
        if outcome.degraded:
            continue_with_error(outcome.error)
        listing_degraded = isinstance(outcome.error, CommandLaunchError)
        output = outcome.value or ""

    if not listing_degraded:
        for name in names:
            if name not in missing and name not in output:
                not_running.append(name)

    if missing:
        reporter.warn(f"Missing kubernetes binaries: {join_names(missing)}")

    if not_running:
        reporter.warn(f"Kubernetes binaries not running: {join_names(not_running)}")

    return BinaryReport(
        missing=tuple(missing),
        not_running=tuple(not_running),
        listing_degraded=listing_degraded,
    )
