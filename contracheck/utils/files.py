"""
File discovery utilities
"""

import os
from typing import Iterable, List

SKIPPED_DIRS = {".git", "__pycache__", ".venv", "venv", "build", "dist", ".tox"}


def collect_python_files(paths: Iterable[str]) -> List[str]:
    """
    Expand files and directories into a sorted list of Python files.

    Directories are walked recursively, skipping VCS, cache and build dirs.
    Paths that are neither are kept so the caller can report them.
    """
    files = []
    for path in paths:
        if os.path.isdir(path):
            for root, dirs, names in os.walk(path):
                dirs[:] = sorted(d for d in dirs if d not in SKIPPED_DIRS)
                files.extend(os.path.join(root, n) for n in sorted(names) if n.endswith(".py"))
        else:
            files.append(path)
    return files
