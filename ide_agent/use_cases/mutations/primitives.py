"""
Mutation primitives: single-target file operations and line edits.

Every primitive returns an OperationResult. Storage failures are caught here
and reported as OPERATION_FAILED instead of propagating.
"""

import logging
from typing import Optional

from ide_agent.entities.operations import (
    ErrorKind,
    LineEdit,
    MutationOperation,
    OperationResult,
    OperationType,
)
from ide_agent.exceptions import WorkspaceError
from ide_agent.ports.workspace.workspace_port import WorkspacePort
from ide_agent.use_cases.mutations.line_edits import (
    InvalidLineRange,
    UnknownEditType,
    apply_edit,
    edit_type,
    join_lines,
    split_lines,
)


class MutationPrimitives:
    """Atomic operations on one workspace, each touching a single path."""

    def __init__(
        self, workspace: WorkspacePort, logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the primitives.

        Args:
            workspace: Workspace the operations are applied to
            logger: Logger instance to use for logging
        """
        self._workspace = workspace
        self._logger = logger or logging.getLogger(__name__)

    @property
    def workspace(self) -> WorkspacePort:
        return self._workspace

    def create(
        self, path: str, content: Optional[str], overwrite_allowed: bool = False
    ) -> OperationResult:
        """
        Create a file, making parent directories as needed.

        Fails with FILE_EXISTS when the target exists and overwrite is not allowed.
        """
        try:
            if self._workspace.exists(path) and not overwrite_allowed:
                self._logger.warning(f"File creation blocked - already exists: {path}")
                return OperationResult.failure(
                    ErrorKind.FILE_EXISTS,
                    f"File {path} already exists. Set overwrite: true to override.",
                    path,
                )
            self._workspace.write_text(path, content or "")
            self._logger.info(f"Created file {path}")
            return OperationResult.ok(f"Created file {path}", path)
        except (WorkspaceError, OSError) as e:
            return self._failed(path, e)

    def edit(self, path: str, content: Optional[str]) -> OperationResult:
        """Overwrite an existing file. Fails with FILE_NOT_FOUND when it is absent."""
        try:
            if not self._workspace.exists(path):
                self._logger.warning(f"Edit failed - file not found: {path}")
                return self._not_found(path)
            self._workspace.write_text(path, content or "")
            self._logger.info(f"Updated file {path}")
            return OperationResult.ok(f"Updated file {path}", path)
        except (WorkspaceError, OSError) as e:
            return self._failed(path, e)

    def delete(self, path: str) -> OperationResult:
        """Remove a file or a whole directory. Fails with FILE_NOT_FOUND when it is absent."""
        try:
            if not self._workspace.exists(path):
                self._logger.warning(f"Delete failed - file not found: {path}")
                return self._not_found(path)
            if self._workspace.is_dir(path):
                self._workspace.remove_tree(path)
                self._logger.info(f"Deleted directory {path}")
                return OperationResult.ok(f"Deleted directory {path}", path)
            self._workspace.remove_file(path)
            self._logger.info(f"Deleted file {path}")
            return OperationResult.ok(f"Deleted file {path}", path)
        except (WorkspaceError, OSError) as e:
            return self._failed(path, e)

    def make_directory(self, path: str) -> OperationResult:
        """Create a directory recursively. Idempotent."""
        try:
            self._workspace.make_dirs(path)
            self._logger.info(f"Created directory {path}")
            return OperationResult.ok(f"Created directory {path}", path)
        except (WorkspaceError, OSError) as e:
            return self._failed(path, e)

    def apply_operation(self, operation: MutationOperation) -> OperationResult:
        """Dispatch a MutationOperation to its primitive and echo it on the result."""
        try:
            kind = OperationType(operation.type)
        except ValueError:
            self._logger.error(f"Invalid operation type: {operation.type}")
            return OperationResult.failure(
                ErrorKind.INVALID_OPERATION,
                f"Unknown operation type: {operation.type}",
                operation.path,
                operation,
            )

        if kind is OperationType.CREATE:
            result = self.create(
                operation.path, operation.content, operation.metadata.overwrite
            )
        elif kind is OperationType.EDIT:
            result = self.edit(operation.path, operation.content)
        elif kind is OperationType.DELETE:
            result = self.delete(operation.path)
        else:
            result = self.make_directory(operation.path)
        result.item = operation
        return result

    def apply_line_edit(self, line_edit: LineEdit) -> OperationResult:
        """
        Apply a line edit: read, split, transform, rejoin and write back through ``edit``.

        The edit type is checked before storage is touched.
        """
        path = line_edit.path
        try:
            kind = edit_type(line_edit)
        except UnknownEditType as e:
            self._logger.error(str(e))
            return OperationResult.failure(
                ErrorKind.INVALID_EDIT_TYPE, str(e), path, line_edit
            )

        try:
            if not self._workspace.exists(path) or self._workspace.is_dir(path):
                return self._not_found(path, line_edit)
            lines = split_lines(self._workspace.read_text(path))
            try:
                new_lines = apply_edit(lines, line_edit)
            except InvalidLineRange as e:
                self._logger.warning(f"Invalid line numbers for {path}: {e}")
                return OperationResult.failure(
                    ErrorKind.INVALID_LINE_NUMBERS,
                    f"Invalid line numbers for file {path}",
                    path,
                    line_edit,
                )
        except (WorkspaceError, OSError) as e:
            return self._failed(path, e, line_edit)

        written = self.edit(path, join_lines(new_lines))
        if not written.success:
            written.item = line_edit
            return written
        return OperationResult.ok(
            f"Successfully applied {kind.value} edit to {path}", path, line_edit
        )

    def _not_found(self, path: str, item=None) -> OperationResult:
        return OperationResult.failure(
            ErrorKind.FILE_NOT_FOUND, f"File {path} does not exist", path, item
        )

    def _failed(self, path: str, error: Exception, item=None) -> OperationResult:
        self._logger.error(f"Operation failed on {path}: {error}")
        return OperationResult.failure(
            ErrorKind.OPERATION_FAILED, f"Operation failed: {error}", path, item
        )
