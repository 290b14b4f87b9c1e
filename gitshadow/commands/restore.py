"""
Command for restoring tracked files from the shadow repository.
"""

from typing import List

from gitshadow.core import Shadow
from gitshadow.utils.diff import copy_file


def restore_files(shadow: Shadow) -> int:
    """Check out the shadow branch of the current branch and copy files back."""
    branch = shadow.current_branch()
    storage = shadow.storage

    if storage.branch_exists(branch):
        storage.checkout(branch)
    else:
        fallback = storage.checkout_default()
        print(f"No shadow for '{branch}', using {fallback}")

    copy_back(shadow)
    return 0


def copy_back(shadow: Shadow) -> List[str]:
    """Copy every tracked file present in storage into the working tree."""
    registry = shadow.registry
    restored = []

    for entry in registry.entries():
        stored = registry.stored_file(entry)
        if stored.is_file():
            copy_file(stored, registry.local_file(entry))
            print(f"Restored {entry}")
            restored.append(entry)

    return restored
