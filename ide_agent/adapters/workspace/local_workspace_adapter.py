"""
Local file system adapter implementation of the workspace port.
"""

import logging
import os
import shutil

from typing_extensions import override

from ide_agent.exceptions import WorkspaceError
from ide_agent.ports.workspace.workspace_port import WorkspacePort
from ide_agent.utils.workspace import (
    ensure_within_root,
    join_in_root,
    normalize_root,
    to_relative,
)


class LocalWorkspaceAdapter(WorkspacePort):
    """Workspace backed by a directory on the local file system."""

    def __init__(self, root: str, logger: logging.Logger | None = None):
        """
        Initialize the adapter.

        Args:
            root: Workspace root directory; it must already exist
            logger: Logger instance to use for logging. If None, a default logger will be created.

        Raises:
            WorkspaceError: If the root is not an existing directory
        """
        self._root: str = normalize_root(root)
        self._logger: logging.Logger = logger or logging.getLogger(__name__)
        if not os.path.isdir(self._root):
            raise WorkspaceError(f"Workspace root is not a directory: {self._root}")

    @property
    @override
    def root(self) -> str:
        return self._root

    @override
    def resolve(self, path: str) -> str:
        if not path or not str(path).strip():
            raise WorkspaceError("Path must be a non-empty string")
        ok, full = ensure_within_root(self._root, join_in_root(self._root, path))
        if not ok:
            raise WorkspaceError(f"Path is outside of the workspace root: {path}")
        return full

    @override
    def exists(self, path: str) -> bool:
        return os.path.lexists(self.resolve(path))

    @override
    def is_dir(self, path: str) -> bool:
        return os.path.isdir(self.resolve(path))

    @override
    def read_bytes(self, path: str) -> bytes:
        full = self.resolve(path)
        try:
            with open(full, "rb") as f:
                return f.read()
        except OSError as e:
            raise WorkspaceError(f"Cannot read {path}: {e}")

    @override
    def read_text(self, path: str) -> str:
        data = self.read_bytes(path)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            raise WorkspaceError(f"File is not valid UTF-8 text: {path}")

    @override
    def write_bytes(self, path: str, data: bytes) -> list[str]:
        full = self.resolve(path)
        created = self._make_dirs_abs(os.path.dirname(full))
        try:
            with open(full, "wb") as f:
                f.write(data)
        except OSError as e:
            raise WorkspaceError(f"Cannot write {path}: {e}")
        self._logger.debug(f"Wrote {len(data)} bytes to {path}")
        return created

    @override
    def write_text(self, path: str, content: str) -> list[str]:
        return self.write_bytes(path, content.encode("utf-8"))

    @override
    def make_dirs(self, path: str) -> list[str]:
        return self._make_dirs_abs(self.resolve(path))

    def _make_dirs_abs(self, full: str) -> list[str]:
        missing: list[str] = []
        cur = full
        while cur != self._root and not os.path.exists(cur):
            missing.append(cur)
            cur = os.path.dirname(cur)
        try:
            os.makedirs(full, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(f"Cannot create directory {full}: {e}")
        return [to_relative(self._root, d) for d in reversed(missing)]

    @override
    def remove_file(self, path: str) -> None:
        try:
            os.remove(self.resolve(path))
        except OSError as e:
            raise WorkspaceError(f"Cannot delete {path}: {e}")

    @override
    def remove_tree(self, path: str) -> None:
        full = self.resolve(path)
        if full == self._root:
            raise WorkspaceError("Refusing to delete the workspace root")
        try:
            shutil.rmtree(full)
        except OSError as e:
            raise WorkspaceError(f"Cannot delete directory {path}: {e}")

    @override
    def remove_empty_dirs(self, paths: list[str]) -> None:
        for rel in sorted(paths, key=lambda p: p.count("/"), reverse=True):
            full = self.resolve(rel)
            try:
                if os.path.isdir(full) and not os.listdir(full):
                    os.rmdir(full)
            except OSError as e:
                raise WorkspaceError(f"Cannot remove directory {rel}: {e}")

    @override
    def list_entries(self, path: str = "") -> list[tuple[str, bool]]:
        full = self.resolve(path) if path else self._root
        # symlinks are reported as leaves, never as directories to descend into
        try:
            with os.scandir(full) as entries:
                return [(e.name, e.is_dir(follow_symlinks=False)) for e in entries]
        except OSError as e:
            raise WorkspaceError(f"Cannot list {path or '.'}: {e}")
