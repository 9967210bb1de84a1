"""
Typed argument payloads for the declared tools.

Each tool name maps to exactly one pydantic model; unknown fields are rejected
so a payload either matches the declared schema or is refused before dispatch.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ide_agent.entities.operations import (
    LineEdit,
    MutationOperation,
    OperationMetadata,
)
from ide_agent.exceptions import ToolArgumentsError, UnknownToolError

FILE_SYSTEM_TOOL_NAME = "file_system_operation"
CODE_EDIT_TOOL_NAME = "code_edit"


class MetadataArguments(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    file_type: Optional[str] = Field(None, alias="fileType")
    description: Optional[str] = None
    requires: Optional[list[str]] = None
    overwrite: Optional[bool] = None


class FileSystemOperationArguments(BaseModel):
    """Arguments of the ``file_system_operation`` tool."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["create", "edit", "delete", "mkdir"]
    path: str = Field(..., min_length=1)
    content: Optional[str] = None
    metadata: Optional[MetadataArguments] = None

    def to_item(self) -> MutationOperation:
        meta = self.metadata or MetadataArguments()
        return MutationOperation(
            type=self.type,
            path=self.path,
            content=self.content,
            metadata=OperationMetadata(
                file_type=meta.file_type,
                description=meta.description,
                requires=list(meta.requires or []),
                overwrite=bool(meta.overwrite),
            ),
        )


class CodeEditArguments(BaseModel):
    """Arguments of the ``code_edit`` tool."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    type: Literal["insert", "replace", "delete"]
    path: str = Field(..., min_length=1)
    start_line: int = Field(..., alias="startLine")
    end_line: Optional[int] = Field(None, alias="endLine")
    content: Optional[str] = None
    description: str

    def to_item(self) -> LineEdit:
        return LineEdit(
            type=self.type,
            path=self.path,
            start_line=self.start_line,
            end_line=self.end_line,
            content=self.content,
            description=self.description,
        )


ToolArguments = Union[FileSystemOperationArguments, CodeEditArguments]

TOOL_ARGUMENT_MODELS: dict[str, type[BaseModel]] = {
    FILE_SYSTEM_TOOL_NAME: FileSystemOperationArguments,
    CODE_EDIT_TOOL_NAME: CodeEditArguments,
}


def parse_tool_arguments(name: str, raw: Union[str, dict, None]) -> ToolArguments:
    """
    Parse a raw tool payload into the argument model declared for ``name``.

    Raises:
        UnknownToolError: If ``name`` is not a declared tool
        ToolArgumentsError: If the payload is not JSON or does not match the schema
    """
    model = TOOL_ARGUMENT_MODELS.get(name)
    if model is None:
        raise UnknownToolError(f"Unknown tool: {name}")
    try:
        if isinstance(raw, dict):
            parsed = model.model_validate(raw)
        else:
            parsed = model.model_validate_json(raw or "")
    except ValidationError as e:
        raise ToolArgumentsError(f"Malformed arguments for {name}: {e}") from e
    return parsed  # type: ignore[return-value]
