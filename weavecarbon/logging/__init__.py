"""Labeled console logging and the JSON Lines issue log."""

from .init import enable_debug, get_logger, log_summary, reset_logging, setup_logging
from .issue_log import IssueLogBuffer, validate_issue_line

__all__ = [
    "setup_logging",
    "get_logger",
    "enable_debug",
    "log_summary",
    "reset_logging",
    "IssueLogBuffer",
    "validate_issue_line",
]
