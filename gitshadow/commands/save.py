"""
Command for saving tracked files to the shadow branch of the current branch.
"""

from typing import Optional

from gitshadow.core import Shadow
from gitshadow.utils.diff import copy_file


def save_files(shadow: Shadow, message: Optional[str] = None) -> int:
    """Copy tracked files into the shadow branch and commit any changes."""
    registry = shadow.registry
    branch = shadow.checkout_shadow_branch()

    for entry in registry.entries():
        local_path = registry.local_file(entry)
        if local_path.is_file():
            copy_file(local_path, registry.stored_file(entry))

    if shadow.storage.commit_all(message or f"save {branch}"):
        print(f"Saved to {branch}")
    else:
        print("No changes")
    return 0
