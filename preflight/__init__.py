# kube-preflight - Pre-flight Verification Module
# Checks config files, binaries and kubectl versions before an audit run

from .models import (
    Outcome,
    VersionExpectation,
    VersionStatus,
    SubjectVersion,
    ConfigReport,
    BinaryReport,
    VersionReport
)
from .runner import CommandRunner
from .verifiers import verify_conf, verify_bin
from .version import verify_kube_version, check_version

__all__ = [
    'Outcome',
    'VersionExpectation',
    'VersionStatus',
    'SubjectVersion',
    'ConfigReport',
    'BinaryReport',
    'VersionReport',
    'CommandRunner',
    'verify_conf',
    'verify_bin',
    'verify_kube_version',
    'check_version',
]
