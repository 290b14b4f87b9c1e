"""
Utilities for comparing working-tree files with their shadow copies.
"""

import difflib
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List


class FileState(str, Enum):
    """Where a tracked file exists and whether the copies agree."""
    MISSING = 'missing'
    NEW = 'new'
    DELETED = 'deleted'
    UNCHANGED = 'unchanged'
    MODIFIED = 'modified'


@dataclass
class FileStatus:
    """Status of one tracked file."""
    path: str
    state: FileState

    def format(self) -> str:
        return f"  {self.state.value:<12}{self.path}"


def files_equal(first: Path, second: Path) -> bool:
    """Compare two files byte for byte."""
    if first.stat().st_size != second.stat().st_size:
        return False
    return first.read_bytes() == second.read_bytes()


def classify(local_file: Path, stored_file: Path) -> FileState:
    """Classify a tracked file by presence in the working tree and in storage."""
    here = local_file.is_file()
    there = stored_file.is_file()

    if not here and not there:
        return FileState.MISSING
    if here and not there:
        return FileState.NEW
    if not here and there:
        return FileState.DELETED
    if files_equal(local_file, stored_file):
        return FileState.UNCHANGED
    return FileState.MODIFIED


def _read_lines(path: Path) -> List[str]:
    # Binary content is shown with replacement characters
    return path.read_bytes().decode('utf-8', errors='replace').splitlines(keepends=True)


def unified_diff(stored_file: Path, local_file: Path, name: str) -> str:
    """Unified diff from the shadow copy to the working-tree file."""
    lines = difflib.unified_diff(
        _read_lines(stored_file),
        _read_lines(local_file),
        fromfile=f"shadow:{name}",
        tofile=f"local:{name}",
    )
    output = []
    for line in lines:
        if not line.endswith('\n'):
            line += '\n\\ No newline at end of file\n'
        output.append(line)
    return ''.join(output)


def copy_file(source: Path, target: Path) -> None:
    """Copy a file, creating the target's parent directories."""
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
