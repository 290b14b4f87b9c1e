"""
Utility modules for gitshadow.
"""

from .registry import (
    REGISTRY_FILE,
    Registry,
    parse_registry,
    normalize_path,
    expand_files
)

from .diff import (
    FileState,
    FileStatus,
    files_equal,
    classify,
    unified_diff,
    copy_file
)

__all__ = [
    # registry utilities
    'REGISTRY_FILE',
    'Registry',
    'parse_registry',
    'normalize_path',
    'expand_files',

    # diff utilities
    'FileState',
    'FileStatus',
    'files_equal',
    'classify',
    'unified_diff',
    'copy_file'
]
