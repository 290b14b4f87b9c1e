"""
Command for showing differences between local files and the shadow, or between branches.
"""

import sys
from typing import Optional

from gitshadow.core import Shadow
from gitshadow.utils.diff import unified_diff


def show_diff(shadow: Shadow, first: Optional[str] = None, second: Optional[str] = None) -> int:
    """Diff two shadow refs, or each tracked file against its shadow copy."""
    if first and second:
        output = shadow.storage.diff_refs(first, second)
        if output:
            print(output)
        return 0

    registry = shadow.registry
    for entry in registry.entries():
        local_path = registry.local_file(entry)
        stored = registry.stored_file(entry)
        if local_path.is_file() and stored.is_file():
            sys.stdout.write(unified_diff(stored, local_path, entry))

    return 0
