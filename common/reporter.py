"""
Diagnostic reporter module for kube-preflight.

Writes severity-tagged diagnostic lines to stderr:

    [WARN] Missing kubernetes config files: /etc/kubernetes/admin.conf

The severity tag is colorized using a color table supplied at construction.
Lines are built as Rich Text objects so message content (raw tool output,
file paths with brackets) is never interpreted as console markup.
"""

from enum import Enum
from typing import Mapping, Optional

from rich.console import Console
from rich.text import Text


# =============================================================================
# Severity States
# =============================================================================

class State(Enum):
    """Severity states understood by the reporter."""
    PASS = "PASS"
    FAIL = "FAIL"
    WARN = "WARN"
    INFO = "INFO"


DEFAULT_COLORS: Mapping[State, str] = {
    State.PASS: "green",
    State.FAIL: "red",
    State.WARN: "yellow",
    State.INFO: "blue",
}


# =============================================================================
# DiagnosticReporter Class
# =============================================================================

class DiagnosticReporter:
    """
    Emits colored diagnostic lines to the operator.

    The color table is an explicit, read-only configuration value. Two
    reporters built with different tables never influence each other.
    """

    def __init__(
        self,
        colors: Optional[Mapping[State, str]] = None,
        console: Optional[Console] = None
    ):
        """
        Initialize the reporter.

        Args:
            colors: Mapping of State to a Rich color/style name.
                    States missing from the mapping are rendered unstyled.
            console: Optional Rich Console. If None, one writing to stderr is created.
        """
        self.colors = dict(DEFAULT_COLORS if colors is None else colors)
        self.console = console or Console(stderr=True)

    def render(self, state: State, message: str) -> Text:
        """
        Build a "[STATE] message" line without printing it.

        Args:
            state: Severity of the diagnostic
            message: Human-readable message

        Returns:
            Rich Text for the diagnostic line
        """
        text = Text()
        text.append("[")
        text.append(state.value, style=self.colors.get(state) or "")
        text.append("] ")
        text.append(message)
        return text

    def sprint_warn(self, message: str) -> Text:
        """Render a WARN line without printing it."""
        return self.render(State.WARN, message)

    def emit(self, state: State, message: str) -> None:
        """Print a diagnostic line with the given severity."""
        self.print_line(self.render(state, message))

    def warn(self, message: str) -> None:
        """Print a WARN diagnostic line."""
        self.emit(State.WARN, message)

    def print_line(self, line) -> None:
        """Print an already rendered line (Text or plain string) as-is."""
        if isinstance(line, str):
            line = Text(line)
        self.console.print(line, soft_wrap=True)

    def exit_with_error(self, err, code: int = 1) -> None:
        """
        Print an error and terminate the process.

        Only callers that decide to escalate use this; verifiers never do.

        Raises:
            SystemExit: Always, with the given exit code
        """
        self.console.print()
        self.print_line(str(err))
        raise SystemExit(code)


# =============================================================================
# Global Reporter Instance
# =============================================================================

_reporter: Optional[DiagnosticReporter] = None


def colors_from_names(names: Mapping[str, str]) -> dict:
    """
    Convert a {"WARN": "yellow", ...} mapping into a {State: color} table.

    Raises:
        ValueError: If a key is not a known state name
    """
    table = {}
    for name, color in names.items():
        try:
            state = State(str(name).upper())
        except ValueError:
            raise ValueError(f"Unknown state in color table: {name}") from None
        table[state] = color
    return table


def get_reporter() -> DiagnosticReporter:
    """Get the global reporter, creating one with default colors if needed."""
    global _reporter
    if _reporter is None:
        _reporter = DiagnosticReporter()
    return _reporter


def init_reporter(
    colors: Optional[Mapping[State, str]] = None,
    console: Optional[Console] = None
) -> DiagnosticReporter:
    """Initialize the global reporter."""
    global _reporter
    _reporter = DiagnosticReporter(colors=colors, console=console)
    return _reporter


def reporter_from_config(console: Optional[Console] = None) -> DiagnosticReporter:
    """Initialize the global reporter using the colors in the configuration."""
    from .config import get_reporter_config

    colors = dict(DEFAULT_COLORS)
    colors.update(colors_from_names(get_reporter_config()["colors"] or {}))
    return init_reporter(colors=colors, console=console)
