"""
Commands for installing the post-checkout hook that saves and restores on branch switch.
"""

import stat
import logging
from pathlib import Path

from gitshadow.core import Shadow


HOOK_NAME = 'post-checkout'
HOOK_MARKER = '# installed by shadow'

# $3 is 1 for branch checkouts and 0 for file checkouts
HOOK_SCRIPT = """#!/bin/sh
""" + HOOK_MARKER + """
if [ "$3" = "1" ]; then
    shadow save >/dev/null 2>&1 || true
    shadow restore >/dev/null 2>&1 || true
fi
"""

logger = logging.getLogger('gitshadow.cli')


def hook_path(shadow: Shadow) -> Path:
    return shadow.host.hooks_dir / HOOK_NAME


def install_hooks(shadow: Shadow) -> int:
    """Write the post-checkout hook into the host repository."""
    path = hook_path(shadow)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists() and HOOK_MARKER not in path.read_text():
        logger.warning("Replacing existing hook %s", path)

    path.write_text(HOOK_SCRIPT)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    print(f"Installed {HOOK_NAME} hook")
    return 0


def uninstall_hooks(shadow: Shadow) -> int:
    """Delete the post-checkout hook."""
    path = hook_path(shadow)
    if path.exists():
        path.unlink()
    print("Removed hooks")
    return 0
