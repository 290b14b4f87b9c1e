"""
Command for pushing every shadow branch to a remote.
"""

from gitshadow.core import Shadow


def push_branches(shadow: Shadow, remote: str) -> int:
    """Push all shadow branches."""
    shadow.storage.push_all(remote)
    print(f"Pushed to {remote}")
    return 0
