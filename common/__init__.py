"""
Common utilities for kube-preflight.
"""

from .config import get_config, load_config
from .reporter import DiagnosticReporter, State, get_reporter
from .preflight_logger import get_logger, init_logger

__all__ = [
    'get_config',
    'load_config',
    'DiagnosticReporter',
    'State',
    'get_reporter',
    'get_logger',
    'init_logger',
]
