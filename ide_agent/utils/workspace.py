from __future__ import annotations

import os
from typing import Tuple

"""Workspace root utilities to constrain file access.

Every operation path is interpreted relative to one workspace root. A leading
'/' is tolerated (agents often write '/src/app.py') and stripped, but the
resolved path must stay inside the root.
"""

# Directories never reported in snapshots.
DEPENDENCY_CACHE_DIRS = frozenset(
    {"node_modules", "__pycache__", "venv", ".venv", "site-packages"}
)


def normalize_root(root: str) -> str:
    s = os.path.expanduser(str(root or "").strip())
    return os.path.realpath(os.path.abspath(s))


def ensure_within_root(root: str, abs_path: str) -> Tuple[bool, str]:
    """Return (ok, normalized_abs) if path is within root.

    Both inputs must be absolute. The second value is the normalized absolute path.
    """
    p = os.path.abspath(abs_path)
    try:
        common = os.path.commonpath([root, os.path.realpath(p)])
    except ValueError:
        return False, p
    return common == root, p


def join_in_root(root: str, path: str) -> str:
    rel = str(path or "").strip().replace("\\", "/").lstrip("/")
    return os.path.join(root, *[part for part in rel.split("/") if part])


def to_relative(root: str, abs_path: str) -> str:
    return os.path.relpath(abs_path, root).replace(os.sep, "/")


def is_hidden(name: str) -> bool:
    return name.startswith(".")
