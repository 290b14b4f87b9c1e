"""
Command for pulling tracked files from another shadow branch.
"""

import logging

from gitshadow.core import Shadow
from gitshadow.commands.restore import restore_files


logger = logging.getLogger('gitshadow.storage')


def sync_from(shadow: Shadow, source: str) -> int:
    """Take every tracked file from ``source`` into the current shadow branch."""
    storage = shadow.storage
    shadow.checkout_shadow_branch()

    for entry in shadow.registry.entries():
        if storage.checkout_file(source, entry):
            logger.info("Synced %s from %s", entry, source)

    storage.commit_all(f"sync from {source}")
    restore_files(shadow)

    print(f"Synced from {source}")
    return 0
