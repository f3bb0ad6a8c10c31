"""Utility modules for agentmounts.

This module exports commonly used utility functions.
"""

from agentmounts.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_section,
    print_success,
    print_warning,
)
from agentmounts.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_section",
    "print_success",
    "print_warning",
    "run_command",
]
