"""
Data models for the preflight module.
Defines the outcome and report structures returned by the verifiers.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Outcome:
    """
    Result of a step that never raises.

    A degraded outcome still carries a usable value (often an empty string)
    together with the error that caused the degradation.

    Attributes:
        value: The produced value, or a fallback when degraded
        error: The underlying error, None on success
    """
    value: Any = None
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, value: Any = None) -> 'Outcome':
        return cls(value=value)

    @classmethod
    def degraded_with(cls, error: BaseException, value: Any = None) -> 'Outcome':
        return cls(value=value, error=error)

    @property
    def degraded(self) -> bool:
        """True when the step hit an error and fell back."""
        return self.error is not None


@dataclass(frozen=True)
class VersionExpectation:
    """
    Baseline major/minor version a deployment is audited against.

    Both parts are strings and are compared by string equality, so "09"
    and "9" are different versions.
    """
    major: str
    minor: str

    @classmethod
    def parse(cls, text: str) -> 'VersionExpectation':
        """
        Parse "MAJOR.MINOR" (e.g. "1.21").

        Raises:
            ValueError: If the text is not two dot-separated digit runs
        """
        parts = text.strip().split('.')
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Expected MAJOR.MINOR, got '{text}'")
        return cls(major=parts[0], minor=parts[1])

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


class VersionStatus(Enum):
    """
    Comparison result for one version subject.

    MATCH: Both major and minor equal the expectation
    MISMATCH: Extracted, but different from the expectation
    NOT_FOUND: The subject's version could not be extracted
    """
    MATCH = "match"
    MISMATCH = "mismatch"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SubjectVersion:
    """Extracted version of one subject ("Client" or "Server")."""
    subject: str
    major: str = ""
    minor: str = ""
    status: VersionStatus = VersionStatus.NOT_FOUND


@dataclass(frozen=True)
class ConfigReport:
    """What verify_conf found missing."""
    missing: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.missing


@dataclass(frozen=True)
class BinaryReport:
    """
    What verify_bin found.

    Attributes:
        missing: Names that did not resolve on the search path
        not_running: Resolved names absent from the process listing
        listing_degraded: True if the process listing tool could not be run
    """
    missing: Tuple[str, ...] = ()
    not_running: Tuple[str, ...] = ()
    listing_degraded: bool = False

    @property
    def ok(self) -> bool:
        return not self.missing and not self.not_running and not self.listing_degraded


@dataclass(frozen=True)
class VersionReport:
    """
    What verify_kube_version found.

    Attributes:
        skipped: True if the check could not run (tool missing or failed)
        error: The underlying error when skipped because the tool failed
        subjects: Per-subject results, keyed by subject name
    """
    skipped: bool = False
    error: Optional[BaseException] = None
    subjects: Dict[str, SubjectVersion] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        if self.skipped:
            return False
        return all(s.status == VersionStatus.MATCH for s in self.subjects.values())
