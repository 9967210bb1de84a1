"""
Pytest configuration and shared fixtures.
"""

import os
import tempfile
from unittest.mock import MagicMock

import pytest

from ide_agent.adapters.workspace.local_workspace_adapter import LocalWorkspaceAdapter
from ide_agent.container import DependencyContainer
from ide_agent.use_cases.mutations.edit_engine import TransactionalEditEngine
from ide_agent.use_cases.mutations.primitives import MutationPrimitives


@pytest.fixture
def temp_directory():
    """
    Create a temporary workspace for testing file operations.

    Returns:
        Path to the temporary directory
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        # Create some test files
        with open(os.path.join(temp_dir, "test1.txt"), "w") as f:
            f.write("This is a test file.")

        with open(os.path.join(temp_dir, "test2.py"), "w") as f:
            f.write("line1\nline2\nline3")

        # Create a subdirectory with a file
        subdir = os.path.join(temp_dir, "subdir")
        os.makedirs(subdir)
        with open(os.path.join(subdir, "test3.md"), "w") as f:
            f.write("# Test Markdown\n\nThis is a test.")

        yield os.path.realpath(temp_dir)


@pytest.fixture
def mock_logger():
    """
    Create a mock logger for testing.

    Returns:
        Mock logger instance
    """
    return MagicMock()


@pytest.fixture
def workspace(temp_directory, mock_logger):
    """Local workspace adapter rooted at the temporary directory."""
    return LocalWorkspaceAdapter(temp_directory, mock_logger)


@pytest.fixture
def primitives(workspace, mock_logger):
    return MutationPrimitives(workspace, mock_logger)


@pytest.fixture
def engine(primitives, mock_logger):
    """Transactional edit engine over the temporary workspace."""
    return TransactionalEditEngine(primitives, mock_logger)


@pytest.fixture
def dependency_container(temp_directory, mock_logger):
    """
    Create a dependency container bound to the temporary workspace.

    Returns:
        DependencyContainer instance with mocked logger
    """
    container = DependencyContainer(workspace_root=temp_directory)
    # Replace the logger with our mock
    container._logger = mock_logger
    return container


@pytest.fixture
def read_file(temp_directory):
    """Read a workspace file as text, relative to the temporary root."""

    def _read(rel: str) -> str:
        with open(os.path.join(temp_directory, rel), "rb") as f:
            return f.read().decode("utf-8")

    return _read


@pytest.fixture
def tree_snapshot(temp_directory):
    """Map every path under the workspace to its bytes (None for directories)."""

    def _snapshot() -> dict[str, bytes | None]:
        return snapshot_tree(temp_directory)

    return _snapshot


def snapshot_tree(root: str) -> dict[str, bytes | None]:
    """Map every path under ``root`` to its bytes (None for directories)."""
    tree: dict[str, bytes | None] = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for d in dirnames:
            tree[os.path.relpath(os.path.join(dirpath, d), root)] = None
        for name in filenames:
            full = os.path.join(dirpath, name)
            with open(full, "rb") as f:
                tree[os.path.relpath(full, root)] = f.read()
    return tree
