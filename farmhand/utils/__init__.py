"""
Utility modules for farmhand.

This package contains:
    - logger: Structured logging with structlog
    - shell: Git and shell helpers for the local checkout
"""

from farmhand.utils.logger import LogContext, get_logger, setup_logging
from farmhand.utils.shell import CommandOutput, copy_file, git_branch, run_all

__all__ = [
    "get_logger",
    "setup_logging",
    "LogContext",
    "CommandOutput",
    "copy_file",
    "git_branch",
    "run_all",
]
