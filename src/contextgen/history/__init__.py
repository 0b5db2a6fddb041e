"""Commit history exports."""

from contextgen.history.git import GitHistoryProvider, parse_log_output
from contextgen.history.process import ProcessResult, ProcessRunner, SubprocessRunner

__all__ = [
    "GitHistoryProvider",
    "ProcessResult",
    "ProcessRunner",
    "SubprocessRunner",
    "parse_log_output",
]
