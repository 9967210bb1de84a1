"""
Transactional edit engine.

A batch is applied as a saga: every successfully applied item records a
compensating action built from a pre-image captured just before the item ran.
On the first failing item forward progress stops and the recorded
compensations run in reverse order, so a failed batch leaves the workspace as
it was before the batch started.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from ide_agent.entities.operations import (
    BatchItem,
    BatchResult,
    BatchState,
    ErrorKind,
    LineEdit,
    MutationOperation,
    OperationResult,
    OperationType,
)
from ide_agent.exceptions import WorkspaceError
from ide_agent.ports.workspace.workspace_port import WorkspacePort
from ide_agent.use_cases.mutations.line_edits import (
    UnknownEditType,
    apply_unchecked,
    edit_type,
    invert,
    join_lines,
    split_lines,
)
from ide_agent.use_cases.mutations.primitives import MutationPrimitives

_LOCKS: dict[str, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def workspace_lock(root: str) -> threading.RLock:
    """Return the lock serialising batches on the workspace at ``root``."""
    with _LOCKS_GUARD:
        lock = _LOCKS.get(root)
        if lock is None:
            lock = threading.RLock()
            _LOCKS[root] = lock
        return lock


@dataclass
class PreImage:
    """State of one path before a forward action touched it."""

    path: str
    kind: str  # "absent" | "file" | "directory"
    content: bytes = b""
    # directory trees: relative child path -> bytes, or None for sub-directories
    entries: dict[str, Optional[bytes]] = field(default_factory=dict)


@dataclass
class Step:
    """A forward action that succeeded, paired with its compensating action."""

    item: BatchItem
    result: OperationResult
    compensate: Callable[[], None]
    description: str


class TransactionalEditEngine:
    """Applies ordered batches of operations and line edits with all-or-nothing semantics."""

    def __init__(
        self,
        primitives: MutationPrimitives,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the engine.

        Args:
            primitives: Mutation primitives bound to the target workspace
            logger: Logger instance to use for logging
        """
        self._primitives = primitives
        self._workspace: WorkspacePort = primitives.workspace
        self._logger = logger or logging.getLogger(__name__)

    def apply(self, item: BatchItem) -> BatchResult:
        """Apply a single item as a one-item batch."""
        return self.apply_batch([item])

    def apply_batch(self, items: Sequence[BatchItem]) -> BatchResult:
        """
        Apply items in order; on the first failure compensate every applied item.

        Args:
            items: Ordered MutationOperation / LineEdit values

        Returns:
            BatchResult whose outcome is the first forward failure, if any
        """
        with workspace_lock(self._workspace.root):
            state = BatchState.PENDING
            self._logger.debug(f"Batch of {len(items)} item(s): {state.value}")
            state = BatchState.APPLYING
            self._logger.info(f"Applying batch of {len(items)} item(s)")

            results: list[OperationResult] = []
            steps: list[Step] = []
            failed_index: Optional[int] = None
            for index, item in enumerate(items):
                result, compensate = self._forward(item)
                results.append(result)
                if not result.success:
                    failed_index = index
                    break
                steps.append(
                    Step(item, result, compensate or _noop, _describe(item))
                )

            if failed_index is None:
                state = BatchState.COMMITTED
                self._logger.info(f"Batch committed ({len(results)} item(s))")
                return BatchResult(
                    success=True,
                    state=state,
                    message="All operations completed successfully",
                    results=results,
                )

            failure = results[failed_index]
            self._logger.warning(
                f"Item {failed_index + 1} of {len(items)} failed "
                f"({failure.error.value if failure.error else 'error'}): {failure.message}"
            )
            state = BatchState.ROLLING_BACK
            rollback_errors = self._compensate(steps)
            state = BatchState.ROLLED_BACK
            self._logger.info(
                f"Batch rolled back ({len(steps)} item(s) reverted, "
                f"{len(rollback_errors)} compensation error(s))"
            )
            kind = "Code edit" if isinstance(items[failed_index], LineEdit) else "File operation"
            return BatchResult(
                success=False,
                state=state,
                message=f"{kind} failed: {failure.message}",
                results=results,
                failed_index=failed_index,
                rollback_errors=rollback_errors,
            )

    # ------------------------- forward actions -------------------------

    def _forward(
        self, item: BatchItem
    ) -> tuple[OperationResult, Optional[Callable[[], None]]]:
        try:
            if isinstance(item, LineEdit):
                return self._forward_line_edit(item)
            if isinstance(item, MutationOperation):
                return self._forward_operation(item)
        except (WorkspaceError, OSError) as e:
            self._logger.error(f"Operation failed on {getattr(item, 'path', None)}: {e}")
            return (
                OperationResult.failure(
                    ErrorKind.OPERATION_FAILED,
                    f"Operation failed: {e}",
                    getattr(item, "path", None),
                    item,
                ),
                None,
            )
        return (
            OperationResult.failure(
                ErrorKind.INVALID_OPERATION,
                f"Unknown batch item: {type(item).__name__}",
                getattr(item, "path", None),
            ),
            None,
        )

    def _forward_operation(
        self, op: MutationOperation
    ) -> tuple[OperationResult, Optional[Callable[[], None]]]:
        try:
            kind = OperationType(op.type)
        except ValueError:
            return self._primitives.apply_operation(op), None

        if kind is OperationType.MKDIR:
            created = self._missing_dirs(op.path, include_self=True)
            result = self._primitives.apply_operation(op)
            return result, lambda: self._workspace.remove_empty_dirs(created)

        created = (
            self._missing_dirs(op.path, include_self=False)
            if kind is OperationType.CREATE
            else []
        )
        before = self._capture(op.path)
        result = self._primitives.apply_operation(op)

        def compensate() -> None:
            self._restore(before)
            self._workspace.remove_empty_dirs(created)

        return result, compensate

    def _forward_line_edit(
        self, line_edit: LineEdit
    ) -> tuple[OperationResult, Optional[Callable[[], None]]]:
        try:
            edit_type(line_edit)
        except UnknownEditType:
            return self._primitives.apply_line_edit(line_edit), None

        original: list[str] = []
        if self._workspace.exists(line_edit.path) and not self._workspace.is_dir(
            line_edit.path
        ):
            original = split_lines(self._workspace.read_text(line_edit.path))

        result = self._primitives.apply_line_edit(line_edit)
        if not result.success:
            return result, None

        inverse = invert(line_edit, original)
        applied = apply_unchecked(original, line_edit)
        return result, lambda: self._revert_line_edit(inverse, applied)

    # ------------------------- compensation -------------------------

    def _compensate(self, steps: list[Step]) -> list[str]:
        errors: list[str] = []
        for step in reversed(steps):
            try:
                step.compensate()
                self._logger.info(f"Reverted {step.description}")
            except Exception as e:
                # remaining compensations still run
                self._logger.error(f"Failed to revert {step.description}: {e}")
                errors.append(f"{step.description}: {e}")
        return errors

    def _revert_line_edit(self, inverse: LineEdit, applied: list[str]) -> None:
        current = self._workspace.read_text(inverse.path)
        # an empty rejoin is ambiguous between [] and [""]; prefer the known sequence
        lines = applied if current == join_lines(applied) else split_lines(current)
        restored = apply_unchecked(lines, inverse)
        result = self._primitives.edit(inverse.path, join_lines(restored))
        if not result.success:
            raise WorkspaceError(result.message)

    def _capture(self, path: str) -> PreImage:
        if not self._workspace.exists(path):
            return PreImage(path=path, kind="absent")
        if not self._workspace.is_dir(path):
            return PreImage(
                path=path, kind="file", content=self._workspace.read_bytes(path)
            )
        entries: dict[str, Optional[bytes]] = {}
        pending = [""]
        while pending:
            rel = pending.pop()
            base = f"{path}/{rel}" if rel else path
            for name, is_dir in self._workspace.list_entries(base):
                child = f"{rel}/{name}" if rel else name
                if is_dir:
                    entries[child] = None
                    pending.append(child)
                else:
                    entries[child] = self._workspace.read_bytes(f"{path}/{child}")
        return PreImage(path=path, kind="directory", entries=entries)

    def _restore(self, image: PreImage) -> None:
        path = image.path
        if image.kind == "absent":
            if self._workspace.exists(path):
                if self._workspace.is_dir(path):
                    self._workspace.remove_tree(path)
                else:
                    self._workspace.remove_file(path)
            return
        if image.kind == "file":
            self._workspace.write_bytes(path, image.content)
            return
        self._workspace.make_dirs(path)
        for child in sorted(image.entries):
            data = image.entries[child]
            if data is None:
                self._workspace.make_dirs(f"{path}/{child}")
            else:
                self._workspace.write_bytes(f"{path}/{child}", data)

    def _missing_dirs(self, path: str, include_self: bool) -> list[str]:
        parts = [p for p in path.replace("\\", "/").strip("/").split("/") if p]
        if not include_self:
            parts = parts[:-1]
        missing: list[str] = []
        for i in range(1, len(parts) + 1):
            rel = "/".join(parts[:i])
            if not self._workspace.exists(rel):
                missing.append(rel)
        return missing


def _describe(item: BatchItem) -> str:
    kind = getattr(item.type, "value", item.type)
    return f"{kind} {item.path}"


def _noop() -> None:
    return None
