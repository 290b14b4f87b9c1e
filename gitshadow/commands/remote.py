"""
Command for managing the shadow repository's remotes.
"""

from gitshadow.core import Shadow


def add_remote(shadow: Shadow, name: str, url: str) -> int:
    shadow.storage.add_remote(name, url)
    print(f"Added remote {name}")
    return 0


def remove_remote(shadow: Shadow, name: str) -> int:
    shadow.storage.remove_remote(name)
    print(f"Removed remote {name}")
    return 0


def list_remotes(shadow: Shadow) -> int:
    output = shadow.storage.list_remotes()
    if output:
        print(output)
    return 0
