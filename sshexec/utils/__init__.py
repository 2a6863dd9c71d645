"""Utilities for sshexec."""

from sshexec.utils.console import ColorfulFormatter, configure_logging

__all__ = [
    "ColorfulFormatter",
    "configure_logging",
]
