"""Utility modules for the release publisher."""

from release_publish.utils.shell import ShellError, is_command_available, run, strip_ansi
from release_publish.utils.version import add_tag_prefix, remove_tag_prefix

__all__ = [
    # Shell utilities
    "run",
    "strip_ansi",
    "is_command_available",
    "ShellError",
    # Tag utilities
    "add_tag_prefix",
    "remove_tag_prefix",
]
