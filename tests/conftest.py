import io

import pytest
from rich.console import Console

import common.config as config_module
from common.preflight_logger import close_logger
from common.reporter import DiagnosticReporter
from preflight.exceptions import CommandExitError, CommandLaunchError
from preflight.models import Outcome


class FakeRunner:
    """
    Stand-in for CommandRunner.

    `resolvable` is the set of names which() finds. run() returns the
    configured outcome and records every command line it was given.
    """

    def __init__(self, resolvable=(), output="", error=None):
        self.resolvable = set(resolvable)
        self.output = output
        self.error = error
        self.which_calls = []
        self.calls = []

    def which(self, name):
        self.which_calls.append(name)
        if name in self.resolvable:
            return f"/usr/bin/{name}"
        return None

    def run(self, args, combined=False):
        self.calls.append((list(args), combined))
        if self.error is None:
            return Outcome.ok(self.output)
        return Outcome.degraded_with(self.error, self.output)

    def fail_launch(self):
        self.error = CommandLaunchError(["ps"], FileNotFoundError("ps"))
        self.output = ""
        return self

    def fail_exit(self, returncode=1):
        self.error = CommandExitError(["ps"], returncode, self.output)
        return self


class CapturingReporter(DiagnosticReporter):
    """DiagnosticReporter writing uncolored lines into memory."""

    def __init__(self, colors=None):
        self.buffer = io.StringIO()
        super().__init__(
            colors=colors,
            console=Console(file=self.buffer, color_system=None, width=400),
        )

    @property
    def text(self) -> str:
        return self.buffer.getvalue()

    @property
    def lines(self):
        return [line for line in self.text.splitlines() if line.startswith("[")]


@pytest.fixture
def reporter() -> CapturingReporter:
    return CapturingReporter()


@pytest.fixture
def fake_runner():
    return FakeRunner


@pytest.fixture
def fresh_config(monkeypatch):
    """Clear the cached configuration; monkeypatch restores it afterwards."""
    monkeypatch.setattr(config_module, "_config", None)
    monkeypatch.setattr(config_module, "_config_path", None)
    monkeypatch.delenv(config_module.CONFIG_ENV_VAR, raising=False)
    return config_module


@pytest.fixture(autouse=True)
def _close_logger():
    yield
    close_logger()
