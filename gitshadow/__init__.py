"""
gitshadow - keep branch-specific untracked files in a parallel Git repository.

Files such as ``.env`` stay out of the main repository while their content is
saved and restored per branch from a shadow repository.
"""

__version__ = "0.1.0"
__author__ = "gitshadow"
