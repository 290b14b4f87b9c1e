"""
Command for initializing the shadow repository of the current project.
"""

from gitshadow.core import Shadow
from gitshadow.utils.registry import REGISTRY_FILE


def init_shadow(shadow: Shadow) -> int:
    """Create the shadow repository unless it already exists."""
    storage = shadow.storage

    if storage.exists:
        print(f"Shadow already initialized at {storage.path}")
        return 0

    storage.initialize(REGISTRY_FILE)
    print(f"Initialized shadow at {storage.path}")
    return 0
