"""
Command for showing shadow commit history.
"""

from typing import Optional

from gitshadow.core import Shadow


def show_log(shadow: Shadow, path: Optional[str] = None, count: int = 10) -> int:
    """Print one-line history, optionally limited to a single file."""
    entry = shadow.registry.normalize(path) if path else None
    output = shadow.storage.log(entry, count)
    if output:
        print(output)
    return 0
