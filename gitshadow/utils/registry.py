"""
The tracked-file registry: the .shadowconfig manifest inside the shadow repository.
"""

import os
import logging
from pathlib import Path, PurePosixPath
from typing import Iterator, List

from ..core import ShadowError


REGISTRY_FILE = '.shadowconfig'

logger = logging.getLogger('gitshadow.registry')


def parse_registry(text: str) -> List[str]:
    """Parse registry text into its entries, in file order."""
    entries = []
    for line in text.splitlines():
        line = line.strip()
        # Skip empty lines and comments
        if not line or line.startswith('#'):
            continue
        entries.append(line)
    return entries


def normalize_path(path: str, work_dir: Path) -> str:
    """Express ``path`` relative to the working directory in POSIX form."""
    candidate = Path(path)
    if candidate.is_absolute():
        try:
            candidate = candidate.resolve().relative_to(work_dir.resolve())
        except ValueError:
            raise ShadowError(f"Path is outside the repository: {path}")

    parts = PurePosixPath(candidate.as_posix()).parts
    if '..' in parts:
        raise ShadowError(f"Path is outside the repository: {path}")
    if not parts:
        # The working directory itself
        return '.'
    return PurePosixPath(*parts).as_posix()


def expand_files(path: str, work_dir: Path) -> Iterator[str]:
    """Yield ``path`` itself, or every file below it when it is a directory."""
    full_path = work_dir / path
    if full_path.is_file():
        yield path
        return

    for root, dirs, files in os.walk(full_path):
        # Skip .git directory
        if '.git' in dirs:
            dirs.remove('.git')
        dirs.sort()

        for name in sorted(files):
            file_path = Path(root) / name
            yield file_path.relative_to(work_dir).as_posix()


class Registry:
    """Ordered list of relative paths whose content is mirrored."""

    def __init__(self, storage_path: Path, work_dir: Path):
        self.storage_path = Path(storage_path)
        self.work_dir = Path(work_dir)

    @property
    def path(self) -> Path:
        """Path to the .shadowconfig file."""
        return self.storage_path / REGISTRY_FILE

    def _read_lines(self) -> List[str]:
        if not self.path.exists():
            return []
        return self.path.read_text(encoding='utf-8').splitlines()

    def entries(self) -> List[str]:
        """Active entries, comments and blank lines excluded."""
        if not self.path.exists():
            return []
        return parse_registry(self.path.read_text(encoding='utf-8'))

    def __contains__(self, entry: str) -> bool:
        return entry in self._read_lines()

    def add(self, entry: str) -> bool:
        """Append ``entry`` unless an identical line exists. Returns True if appended."""
        if entry in self:
            return False

        text = self.path.read_text(encoding='utf-8') if self.path.exists() else ''
        if text and not text.endswith('\n'):
            text += '\n'
        self.path.write_text(text + entry + '\n', encoding='utf-8')
        logger.debug("Registered %s", entry)
        return True

    def remove(self, entry: str) -> int:
        """Drop every line equal to ``entry``. Returns the number removed."""
        lines = self._read_lines()
        kept = [line for line in lines if line != entry]
        removed = len(lines) - len(kept)
        self.path.write_text(''.join(line + '\n' for line in kept), encoding='utf-8')
        if removed:
            logger.debug("Unregistered %s", entry)
        return removed

    def normalize(self, path: str) -> str:
        return normalize_path(path, self.work_dir)

    def local_file(self, entry: str) -> Path:
        """Working-tree location of a registry entry."""
        return self.work_dir / entry

    def stored_file(self, entry: str) -> Path:
        """Shadow-repository location of a registry entry."""
        return self.storage_path / entry
