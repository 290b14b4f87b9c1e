"""
Command for pulling the current shadow branch from a remote.
"""

from gitshadow.core import Shadow
from gitshadow.commands.restore import restore_files


def pull_branch(shadow: Shadow, remote: str) -> int:
    """Pull the checked out shadow branch, then restore tracked files."""
    shadow.storage.pull(remote)
    restore_files(shadow)
    print(f"Pulled from {remote}")
    return 0
