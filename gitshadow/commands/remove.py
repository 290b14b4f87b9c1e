"""
Command for untracking a file.
"""

from gitshadow.core import Shadow


def remove_file(shadow: Shadow, path: str) -> int:
    """Drop a file from the registry and delete its shadow copy."""
    registry = shadow.registry
    entry = registry.normalize(path)

    registry.remove(entry)

    stored = registry.stored_file(entry)
    if stored.is_file():
        stored.unlink()

    shadow.storage.commit_all(f"remove {entry}")
    print(f"Removed {entry}")
    return 0
