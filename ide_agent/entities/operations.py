"""
Mutation domain entities: file operations, line edits and their results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class ErrorKind(str, Enum):
    """Structured error kinds reported in an OperationResult."""

    FILE_EXISTS = "FILE_EXISTS"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    INVALID_LINE_NUMBERS = "INVALID_LINE_NUMBERS"
    INVALID_EDIT_TYPE = "INVALID_EDIT_TYPE"
    INVALID_OPERATION = "INVALID_OPERATION"
    OPERATION_FAILED = "OPERATION_FAILED"


class OperationType(str, Enum):
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    MKDIR = "mkdir"


class EditType(str, Enum):
    INSERT = "insert"
    REPLACE = "replace"
    DELETE = "delete"


def _variant(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass
class OperationMetadata:
    """Optional descriptive metadata attached to a file operation."""

    file_type: Optional[str] = None
    description: Optional[str] = None
    requires: list[str] = field(default_factory=list)
    overwrite: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"overwrite": self.overwrite}
        if self.file_type is not None:
            data["fileType"] = self.file_type
        if self.description is not None:
            data["description"] = self.description
        if self.requires:
            data["requires"] = list(self.requires)
        return data


@dataclass
class MutationOperation:
    """
    Whole-file operation on a single workspace-relative path.

    ``type`` is kept as a plain string so that unrecognised variants coming
    from an agent can reach the engine and be rejected there.
    """

    type: str
    path: str
    content: Optional[str] = None
    metadata: OperationMetadata = field(default_factory=OperationMetadata)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": _variant(self.type), "path": self.path}
        if self.content is not None:
            data["content"] = self.content
        data["metadata"] = self.metadata.to_dict()
        return data


@dataclass
class LineEdit:
    """Line-range edit on an existing file. Line numbers are 1-based and inclusive."""

    type: str
    path: str
    start_line: Optional[int]
    end_line: Optional[int] = None
    content: Optional[str] = None
    description: str = ""

    @property
    def last_line(self) -> Optional[int]:
        """Inclusive end of the range, defaulting to the start line."""
        return self.end_line if self.end_line is not None else self.start_line

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": _variant(self.type),
            "path": self.path,
            "startLine": self.start_line,
            "description": self.description,
        }
        if self.end_line is not None:
            data["endLine"] = self.end_line
        if self.content is not None:
            data["content"] = self.content
        return data


BatchItem = Union[MutationOperation, LineEdit]


@dataclass
class OperationResult:
    """Outcome of applying one batch item."""

    success: bool
    message: str
    path: Optional[str] = None
    error: Optional[ErrorKind] = None
    item: Optional[BatchItem] = None

    @classmethod
    def ok(
        cls, message: str, path: Optional[str], item: Optional[BatchItem] = None
    ) -> "OperationResult":
        return cls(success=True, message=message, path=path, item=item)

    @classmethod
    def failure(
        cls,
        error: ErrorKind,
        message: str,
        path: Optional[str],
        item: Optional[BatchItem] = None,
    ) -> "OperationResult":
        return cls(success=False, message=message, path=path, error=error, item=item)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.success,
            "message": self.message,
            "path": self.path,
        }
        if self.error is not None:
            data["error"] = self.error.value
        if self.item is not None:
            data["item"] = self.item.to_dict()
        return data


class BatchState(str, Enum):
    """Lifecycle of a batch inside the edit engine."""

    PENDING = "pending"
    APPLYING = "applying"
    COMMITTED = "committed"
    ROLLING_BACK = "rolling_back"
    ROLLED_BACK = "rolled_back"


@dataclass
class BatchResult:
    """Outcome of a whole batch: the first failure, if any, is the batch outcome."""

    success: bool
    state: BatchState
    message: str
    results: list[OperationResult] = field(default_factory=list)
    failed_index: Optional[int] = None
    rollback_errors: list[str] = field(default_factory=list)

    @property
    def error(self) -> Optional[ErrorKind]:
        if self.failed_index is None:
            return None
        return self.results[self.failed_index].error

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.success,
            "state": self.state.value,
            "message": self.message,
            "operations": [r.to_dict() for r in self.results],
        }
        if self.error is not None:
            data["error"] = self.error.value
        if self.failed_index is not None:
            data["failedIndex"] = self.failed_index
        if self.rollback_errors:
            data["rollbackErrors"] = list(self.rollback_errors)
        return data


@dataclass
class AgentResponse:
    """A complete proposal from the agent: a message plus operations and edits."""

    message: Optional[str]
    operations: list[MutationOperation] = field(default_factory=list)
    edits: list[LineEdit] = field(default_factory=list)

    def batch(self) -> list[BatchItem]:
        """Operations first, then edits, in the order they were proposed."""
        items: list[BatchItem] = []
        items.extend(self.operations)
        items.extend(self.edits)
        return items
