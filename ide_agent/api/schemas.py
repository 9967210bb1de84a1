"""
Pydantic models for API requests and responses.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ide_agent.entities.conversation import ConversationMessage
from ide_agent.entities.operations import (
    AgentResponse,
    LineEdit,
    MutationOperation,
    OperationMetadata,
)
from ide_agent.entities.workspace import Selection


class MessageSchema(BaseModel):
    """Schema for a conversation message."""

    model_config = ConfigDict(populate_by_name=True)

    role: str = Field(..., description="user, assistant, system or tool")
    content: Optional[str] = Field(None, description="Message text")
    tool_calls: Optional[List[dict[str, Any]]] = Field(
        None, description="Tool invocations, OpenAI wire shape or flat {id, name, arguments}"
    )
    tool_call_id: Optional[str] = Field(None, description="Id answered by a tool message")

    def to_entity(self) -> ConversationMessage:
        return ConversationMessage.from_dict(self.model_dump())


class SelectionSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file: str
    start_line: int = Field(..., alias="startLine")
    end_line: int = Field(..., alias="endLine")


class ChatRequest(BaseModel):
    """Schema for a collaborator chat request."""

    model_config = ConfigDict(populate_by_name=True)

    messages: List[MessageSchema] = Field(..., description="Conversation history")
    files: List[str] = Field(default_factory=list, description="Files open in the editor")
    current_file: Optional[str] = Field(None, alias="currentFile")
    selection: Optional[SelectionSchema] = None

    def selection_entity(self) -> Optional[Selection]:
        if self.selection is None:
            return None
        return Selection(
            file=self.selection.file,
            start_line=self.selection.start_line,
            end_line=self.selection.end_line,
        )


class ChatResponse(BaseModel):
    """Schema for a completed chat turn."""

    success: bool = Field(..., description="False when any tool operation failed")
    message: dict[str, Any] = Field(..., description="Final assistant message")
    usage: dict[str, Any] = Field(default_factory=dict, description="Merged token usage")
    tool_results: List[dict[str, Any]] = Field(
        default_factory=list, description="Batch result per tool invocation"
    )
    error: Optional[str] = Field(None, description="Why the turn is unsuccessful")


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    error: str = Field(..., description="Error message")
    details: Optional[Any] = Field(None, description="Optional diagnostic detail")


class MetadataSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_type: Optional[str] = Field(None, alias="fileType")
    description: Optional[str] = None
    requires: Optional[List[str]] = None
    overwrite: Optional[bool] = None


class OperationSchema(BaseModel):
    """Schema for a proposed file operation; validated structurally by the use case."""

    type: Optional[str] = None
    path: Optional[str] = None
    content: Optional[str] = None
    metadata: Optional[MetadataSchema] = None

    def to_entity(self) -> MutationOperation:
        meta = self.metadata or MetadataSchema()
        return MutationOperation(
            type=self.type or "",
            path=self.path or "",
            content=self.content,
            metadata=OperationMetadata(
                file_type=meta.file_type,
                description=meta.description,
                requires=list(meta.requires or []),
                overwrite=bool(meta.overwrite),
            ),
        )


class EditSchema(BaseModel):
    """Schema for a proposed line edit."""

    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = None
    path: Optional[str] = None
    start_line: Optional[int] = Field(None, alias="startLine")
    end_line: Optional[int] = Field(None, alias="endLine")
    content: Optional[str] = None
    description: str = ""

    def to_entity(self) -> LineEdit:
        return LineEdit(
            type=self.type or "",
            path=self.path or "",
            start_line=self.start_line,
            end_line=self.end_line,
            content=self.content,
            description=self.description,
        )


class AgentResponseRequest(BaseModel):
    """Schema for a complete agent proposal submitted for execution."""

    message: Optional[str] = None
    operations: List[OperationSchema] = Field(default_factory=list)
    edits: List[EditSchema] = Field(default_factory=list)

    def to_entity(self) -> AgentResponse:
        return AgentResponse(
            message=self.message,
            operations=[o.to_entity() for o in self.operations],
            edits=[e.to_entity() for e in self.edits],
        )


class WorkspaceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    workspace_path: str = Field(..., alias="workspacePath")
    files: List[str]
    directories: List[str]


class FileContentResponse(BaseModel):
    path: str
    content: str
