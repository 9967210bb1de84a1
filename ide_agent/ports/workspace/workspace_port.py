"""
Workspace port interface defining the contract for storage under one workspace root.
"""

from abc import ABC, abstractmethod


class WorkspacePort(ABC):
    """
    Port interface for a single workspace's file tree.

    All ``path`` arguments are relative to the workspace root.
    """

    @property
    @abstractmethod
    def root(self) -> str:
        """Absolute path of the workspace root."""
        pass

    @abstractmethod
    def resolve(self, path: str) -> str:
        """
        Resolve a workspace-relative path to an absolute path.

        Raises:
            WorkspaceError: If the path is empty or escapes the workspace root
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def is_dir(self, path: str) -> bool:
        pass

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """
        Read a file's raw content.

        Raises:
            WorkspaceError: If the file cannot be read
        """
        pass

    @abstractmethod
    def read_text(self, path: str) -> str:
        """
        Read a file as UTF-8 text without newline translation.

        Raises:
            WorkspaceError: If the file cannot be read or decoded
        """
        pass

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> list[str]:
        """
        Write a file, creating missing parent directories.

        Returns:
            Workspace-relative directories created for the write, outermost first

        Raises:
            WorkspaceError: If the write fails
        """
        pass

    @abstractmethod
    def write_text(self, path: str, content: str) -> list[str]:
        """UTF-8 variant of :meth:`write_bytes`."""
        pass

    @abstractmethod
    def make_dirs(self, path: str) -> list[str]:
        """
        Create a directory and its parents. Existing directories are not an error.

        Returns:
            Workspace-relative directories that did not exist before, outermost first
        """
        pass

    @abstractmethod
    def remove_file(self, path: str) -> None:
        pass

    @abstractmethod
    def remove_tree(self, path: str) -> None:
        pass

    @abstractmethod
    def remove_empty_dirs(self, paths: list[str]) -> None:
        """Remove the given directories, deepest first, skipping any that are not empty."""
        pass

    @abstractmethod
    def list_entries(self, path: str = "") -> list[tuple[str, bool]]:
        """
        List the direct children of a directory.

        Symbolic links are not followed: a link to a directory is reported
        with ``is_directory`` False.

        Returns:
            (name, is_directory) pairs
        """
        pass
