"""
Use case for listing the workspace tree and building per-turn workspace context.
"""

import logging
from typing import Optional

from ide_agent.entities.workspace import Selection, WorkspaceContext, WorkspaceStructure
from ide_agent.ports.workspace.workspace_port import WorkspacePort
from ide_agent.utils.workspace import DEPENDENCY_CACHE_DIRS, is_hidden


class WorkspaceSnapshotUseCase:
    """Read-only, uncached view of the files and directories under the workspace root."""

    def __init__(
        self, workspace: WorkspacePort, logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the use case.

        Args:
            workspace: Workspace to enumerate
            logger: Logger instance to use for logging
        """
        self._workspace = workspace
        self._logger = logger or logging.getLogger(__name__)

    def execute(self) -> WorkspaceStructure:
        """
        List files and directories recursively, relative to the root.

        Hidden entries and dependency-cache directories (and everything below
        them) are skipped. Symbolic links are listed as files and never walked.
        Results reflect the current on-disk state.
        """
        files: list[str] = []
        directories: list[str] = []
        pending = [""]
        while pending:
            rel = pending.pop()
            for name, is_dir in self._workspace.list_entries(rel):
                if is_hidden(name):
                    continue
                child = f"{rel}/{name}" if rel else name
                if is_dir:
                    if name in DEPENDENCY_CACHE_DIRS:
                        continue
                    directories.append(child)
                    pending.append(child)
                else:
                    files.append(child)
        self._logger.debug(
            f"Workspace snapshot: {len(files)} files, {len(directories)} directories"
        )
        return WorkspaceStructure(files=sorted(files), directories=sorted(directories))

    def context(
        self,
        current_file: Optional[str] = None,
        selection: Optional[Selection] = None,
        open_files: Optional[list[str]] = None,
    ) -> WorkspaceContext:
        """Build the workspace context block for one conversation turn."""
        structure = self.execute()
        return WorkspaceContext(
            workspace_path=self._workspace.root,
            files=structure.files,
            directories=structure.directories,
            open_files=list(open_files or []),
            current_file=current_file,
            selection=selection,
        )
