"""
Command for tracking files in the shadow repository.
"""

import sys
import logging
from typing import List

from gitshadow.core import Shadow, MissingPathError
from gitshadow.utils.registry import expand_files
from gitshadow.utils.diff import copy_file


logger = logging.getLogger('gitshadow.registry')


def add_files(shadow: Shadow, paths: List[str]) -> int:
    """Register files (directories recursively) and mirror their content."""
    registry = shadow.registry
    shadow.checkout_shadow_branch()

    added_files = []
    missing = []

    for path in paths:
        entry = registry.normalize(path)
        local_path = registry.local_file(entry)

        if not local_path.exists():
            print(f"File not found: {path}", file=sys.stderr)
            missing.append(path)
            continue

        for file_entry in expand_files(entry, shadow.work_dir):
            if registry.add(file_entry):
                logger.info("Tracking %s", file_entry)
            copy_file(registry.local_file(file_entry), registry.stored_file(file_entry))
            added_files.append(file_entry)

    # Overlapping arguments expand to the same entry
    added_files = list(dict.fromkeys(added_files))

    if missing:
        raise MissingPathError(f"{len(missing)} path(s) not found: {', '.join(missing)}")

    if not shadow.storage.commit_all("add files"):
        print("No new files to add")
    elif len(added_files) == 1:
        print(f"Added {added_files[0]}")
    else:
        print(f"Added {len(added_files)} file(s)")

    return 0
