"""
Kubernetes version compatibility check.

Runs `kubectl version` and compares the Client and Server major/minor
versions found in its output against an expected pair. The output is only
loosely structured, so extraction is pattern based:

    Client Version: version.Info{Major:"1", Minor:"21", GitVersion:"v1.21.3", ...}
    Server Version: version.Info{Major:"1", Minor:"21", GitVersion:"v1.21.2", ...}
"""

import re
from typing import Optional, Sequence, Tuple

from common.reporter import DiagnosticReporter, get_reporter

from .exceptions import PreflightError
from .models import SubjectVersion, VersionReport, VersionStatus
from .runner import CommandRunner
from .utils import continue_with_error


DEFAULT_KUBECTL_TOOL = "kubectl"
DEFAULT_VERSION_ARGS = ("version",)

VERSION_SUBJECTS = ("Client", "Server")

REGEX_VERSION_MAJOR = re.compile(r'Major:"([0-9]+)"')
REGEX_VERSION_MINOR = re.compile(r'Minor:"([0-9]+)"')


def version_match(regex: re.Pattern, text: str) -> str:
    """Return the first capture group of regex in text, or "" if absent."""
    match = regex.search(text)
    if match is None:
        return ""
    return match.group(1)


def extract_version(subject: str, output: str) -> Tuple[str, str]:
    """
    Extract (major, minor) for one subject from kubectl output.

    Either part is "" when it cannot be found.
    """
    regex_version = re.compile(re.escape(subject) + r" Version: version.Info\{(.*)\}")
    match = regex_version.search(output)
    fragment = match.group(0) if match else ""

    major = version_match(REGEX_VERSION_MAJOR, fragment)
    minor = version_match(REGEX_VERSION_MINOR, fragment)
    return major, minor


def check_version(
    subject: str,
    output: str,
    exp_major: str,
    exp_minor: str
) -> Tuple[SubjectVersion, str]:
    """
    Compare one subject's version against the expected major/minor.

    Comparison is plain string equality, so "09" does not match "9".

    Args:
        subject: "Client" or "Server"
        output: Full kubectl version output
        exp_major: Expected major version
        exp_minor: Expected minor version

    Returns:
        Tuple of (SubjectVersion, message). The message is "" on a match.
    """
    major, minor = extract_version(subject, output)

    if not major or not minor:
        return (
            SubjectVersion(subject=subject, status=VersionStatus.NOT_FOUND),
            f"Couldn't find {subject} version from kubectl output '{output}'",
        )

    if major != exp_major or minor != exp_minor:
        return (
            SubjectVersion(subject, major, minor, VersionStatus.MISMATCH),
            f"Unexpected {subject} version {major}.{minor}",
        )

    return SubjectVersion(subject, major, minor, VersionStatus.MATCH), ""


def verify_kube_version(
    major: str,
    minor: str,
    runner: Optional[CommandRunner] = None,
    reporter: Optional[DiagnosticReporter] = None,
    kubectl_tool: str = DEFAULT_KUBECTL_TOOL,
    version_args: Sequence[str] = DEFAULT_VERSION_ARGS
) -> VersionReport:
    """
    Check that kubectl reports the expected Client and Server versions.

    kubectl might not be on the user's path; in that case the check is
    skipped with a warning and nothing is run.

    Args:
        major: Expected major version
        minor: Expected minor version
        runner: External command interface (a CommandRunner if None)
        reporter: Reporter for the diagnostics (global one if None)
        kubectl_tool: Version reporting program
        version_args: Arguments that make the program print its version

    Returns:
        VersionReport with per-subject results
    """
    runner = runner or CommandRunner()
    reporter = reporter or get_reporter()

    if runner.which(kubectl_tool) is None:
        err = FileNotFoundError(f"{kubectl_tool}: executable file not found in $PATH")
        continue_with_error(err, reporter.sprint_warn("Kubernetes version check skipped"), reporter)
        return VersionReport(skipped=True)

    outcome = runner.run([kubectl_tool, *version_args], combined=True)
    if outcome.degraded:
        message = f"Kubernetes version check skipped with error {outcome.error}"
        continue_with_error(outcome.error, reporter.sprint_warn(message), reporter)
        return VersionReport(skipped=True, error=outcome.error)

    subjects = {}
    for subject in VERSION_SUBJECTS:
        result, message = check_version(subject, outcome.value, major, minor)
        subjects[subject] = result
        if message:
            continue_with_error(PreflightError(message), reporter.sprint_warn(message), reporter)

    return VersionReport(subjects=subjects)
