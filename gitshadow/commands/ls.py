"""
Command for listing tracked files or shadow branches.
"""

from gitshadow.core import Shadow


def list_files(shadow: Shadow, branches: bool = False) -> int:
    """Print tracked files in registry order, or the shadow branches."""
    if branches:
        print(shadow.storage.list_branches())
        return 0

    for entry in shadow.registry.entries():
        print(entry)
    return 0
