"""
Command for restoring historical versions from the shadow repository.
"""

from typing import Optional

from gitshadow.core import Shadow
from gitshadow.commands.restore import copy_back


def checkout_ref(shadow: Shadow, ref: str, path: Optional[str] = None) -> int:
    """Restore one file as of ``ref``, or check out ``ref`` entirely."""
    if path:
        entry = shadow.registry.normalize(path)
        content = shadow.storage.show_file(ref, entry)

        target = shadow.registry.local_file(entry)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)

        print(f"Restored {entry} from {ref}")
        return 0

    # May leave the shadow repository on a detached HEAD
    shadow.storage.checkout(ref)
    copy_back(shadow)
    return 0
