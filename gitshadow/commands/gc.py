"""
Command for compacting the shadow repository.
"""

from gitshadow.core import Shadow


def collect_garbage(shadow: Shadow) -> int:
    """Run an aggressive git gc, pruning unreachable objects immediately."""
    shadow.storage.gc()
    print("Garbage collection complete")
    return 0
