"""
Utility functions for the preflight module.
Provides name-list joining/parsing and the shared error-continuation helper.
"""

from typing import Iterable, List, Optional, Union

from rich.text import Text

from common.preflight_logger import get_logger
from common.reporter import DiagnosticReporter, get_reporter


def join_names(names: Iterable[str], sep: str = ", ") -> str:
    """
    Join names into a single separator-delimited string.

    Each name is stripped of surrounding whitespace and blank names are
    dropped, so the result never starts or ends with a separator and never
    contains two separators in a row.

    Args:
        names: Names in the order they should appear
        sep: Separator placed between names

    Returns:
        The joined string, or "" when no non-blank names remain

    Examples:
        >>> join_names(["kubelet", "", " kube-proxy "])
        'kubelet, kube-proxy'
        >>> join_names(["kubelet", "kube-proxy"], ",")
        'kubelet,kube-proxy'
    """
    return sep.join(n.strip() for n in names if n and n.strip())


def clean_ids(text: str) -> List[str]:
    """
    Parse a user-supplied comma-separated list.

    Leading and trailing commas are ignored, each item is stripped of
    spaces, and empty items are dropped.

    Examples:
        >>> clean_ids(",kubelet, kube-proxy,")
        ['kubelet', 'kube-proxy']
    """
    text = text.strip(",")
    return [item.strip() for item in text.split(",") if item.strip()]


def continue_with_error(
    err: Optional[BaseException],
    message: Union[str, Text, None] = None,
    reporter: Optional[DiagnosticReporter] = None
) -> None:
    """
    Record an error and carry on.

    The raw error goes to the debug log; the optional message (usually a
    rendered diagnostic line) goes to the operator. Callers record the
    degraded state in their own reports.

    Args:
        err: Underlying error, or None
        message: Line to show on stderr, or None for nothing
        reporter: Reporter used to show the message (global one if None)
    """
    if err is not None:
        get_logger().debug(err)

    if message:
        (reporter or get_reporter()).print_line(message)
