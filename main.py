"""
kube-preflight - Main Entry Point

Runs the pre-flight checks that precede a Kubernetes configuration audit:
1. Config files: expected configuration files exist on disk
2. Binaries: expected binaries are on the PATH and running
3. Version: kubectl Client/Server versions match the expected MAJOR.MINOR

Problems are printed as [WARN] lines on stderr. They do not change the exit
status unless --strict is given.

Usage:
    python main.py [--binaries LIST] [--config-files LIST] [--kube-version MAJOR.MINOR]

Examples:
    python main.py
    python main.py --binaries kubelet,kube-proxy --kube-version 1.21
    python main.py --config ./node.yaml --skip-version-check -v
"""

import argparse
import sys
from typing import List, Optional

from common.config import (
    get_logging_config,
    get_preflight_config,
    use_config_file,
)
from common.preflight_logger import init_logger
from common.reporter import DiagnosticReporter, reporter_from_config
from preflight.models import VersionExpectation
from preflight.runner import CommandRunner
from preflight.utils import clean_ids, join_names
from preflight.verifiers import verify_bin, verify_conf
from preflight.version import verify_kube_version


def run_preflight(
    binaries: List[str],
    config_files: List[str],
    expected: Optional[VersionExpectation],
    reporter: DiagnosticReporter,
    runner: Optional[CommandRunner] = None
) -> List[str]:
    """
    Run the pre-flight checks in order: config files, binaries, version.

    Args:
        binaries: Binaries to verify (skipped if empty)
        config_files: Config files to verify (skipped if empty)
        expected: Expected kubectl version, or None to skip the version check
        reporter: Reporter for the diagnostics
        runner: External command interface

    Returns:
        Names of the checks that reported a problem
    """
    preflight_config = get_preflight_config()
    tools = preflight_config.get("tools") or {}
    runner = runner or CommandRunner()
    failed = []

    if config_files:
        if not verify_conf(*config_files, reporter=reporter).ok:
            failed.append("config files")

    if binaries:
        report = verify_bin(
            *binaries,
            runner=runner,
            reporter=reporter,
            ps_tool=tools.get("ps", "ps"),
        )
        if not report.ok:
            failed.append("binaries")

    if expected is not None:
        report = verify_kube_version(
            expected.major,
            expected.minor,
            runner=runner,
            reporter=reporter,
            kubectl_tool=tools.get("kubectl", "kubectl"),
            version_args=preflight_config.get("version_args") or ["version"],
        )
        if not report.ok:
            failed.append("kubernetes version")

    return failed


def _expected_version(args, preflight_config) -> Optional[VersionExpectation]:
    if args.skip_version_check:
        return None
    if args.kube_version:
        return args.kube_version

    configured = preflight_config.get("expected_version") or {}
    major = str(configured.get("major", "") or "")
    minor = str(configured.get("minor", "") or "")
    if not major or not minor:
        return None
    return VersionExpectation(major=major, minor=minor)


def config_list(value, key: str) -> List[str]:
    """
    Normalize a list setting from the configuration.

    A string is read as a comma-separated list, a list or tuple is taken
    item by item, and a missing value is an empty list.

    Raises:
        ValueError: For any other type, or a list item that is not a string
    """
    if value is None:
        return []
    if isinstance(value, str):
        return clean_ids(value)
    if isinstance(value, (list, tuple)):
        if not all(isinstance(item, str) for item in value):
            raise ValueError(f"Configuration key '{key}' must contain only strings")
        return list(value)
    raise ValueError(
        f"Configuration key '{key}' must be a list or a comma-separated string, "
        f"got {type(value).__name__}"
    )


def _parse_version(text: str) -> VersionExpectation:
    try:
        return VersionExpectation.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='kube-preflight - Environment checks before a Kubernetes configuration audit',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py
  python main.py --binaries kubelet,kube-proxy --kube-version 1.21
  python main.py --config ./node.yaml --skip-version-check -v
        """
    )

    parser.add_argument(
        '--config',
        type=str,
        help='Path to a YAML/JSON configuration file (default: config.yaml in the project root)'
    )

    parser.add_argument(
        '--binaries',
        type=clean_ids,
        help='Comma-separated binaries to verify (overrides preflight.binaries)'
    )

    parser.add_argument(
        '--config-files',
        type=clean_ids,
        help='Comma-separated config files to verify (overrides preflight.config_files)'
    )

    parser.add_argument(
        '--kube-version',
        type=_parse_version,
        help='Expected kubectl MAJOR.MINOR version (overrides preflight.expected_version)'
    )

    parser.add_argument(
        '--skip-version-check',
        action='store_true',
        help='Do not run the kubectl version check'
    )

    parser.add_argument(
        '--strict',
        action='store_true',
        help='Exit with status 1 if any check reported a problem'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=None,
        help='Increase log verbosity (-v shows underlying errors)'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the kube-preflight CLI.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    reporter = DiagnosticReporter()

    if args.config:
        try:
            use_config_file(args.config)
        except (OSError, ValueError) as e:
            reporter.exit_with_error(e)

    try:
        logging_config = get_logging_config()
        preflight_config = get_preflight_config()
        reporter = reporter_from_config()
    except (OSError, ValueError) as e:
        reporter.exit_with_error(e)

    verbosity = args.verbose if args.verbose is not None else int(logging_config.get("verbosity") or 0)
    init_logger(
        verbosity=verbosity,
        log_file=logging_config.get("log_file") or None,
        log_format=logging_config.get("format") or "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        binaries = args.binaries
        if binaries is None:
            binaries = config_list(preflight_config.get("binaries"), "preflight.binaries")
        config_files = args.config_files
        if config_files is None:
            config_files = config_list(preflight_config.get("config_files"), "preflight.config_files")
    except ValueError as e:
        reporter.exit_with_error(e)

    failed = run_preflight(
        binaries=binaries,
        config_files=config_files,
        expected=_expected_version(args, preflight_config),
        reporter=reporter,
    )

    if failed and args.strict:
        reporter.exit_with_error(f"Pre-flight checks reported problems: {join_names(failed)}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
