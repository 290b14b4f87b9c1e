"""
Command for showing the state of every tracked file.
"""

from typing import List

from gitshadow.core import Shadow
from gitshadow.utils.diff import FileStatus, classify


def collect_status(shadow: Shadow) -> List[FileStatus]:
    """Classify each registry entry against its shadow copy."""
    registry = shadow.registry
    return [
        FileStatus(entry, classify(registry.local_file(entry), registry.stored_file(entry)))
        for entry in registry.entries()
    ]


def show_status(shadow: Shadow) -> int:
    """Print one classification line per tracked file."""
    print(f"Branch: {shadow.current_branch()}")
    print()

    for status in collect_status(shadow):
        print(status.format())

    return 0
