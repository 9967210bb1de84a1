"""
FastAPI router definitions for the API endpoints.
"""

from typing import Any

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from ide_agent.api.dependencies import (
    get_execute_response_uc,
    get_orchestrator,
    get_snapshot_uc,
    get_workspace,
)
from ide_agent.api.schemas import (
    AgentResponseRequest,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    FileContentResponse,
    WorkspaceResponse,
)
from ide_agent.exceptions import (
    BaseAppError,
    ReasoningEngineError,
    ResponseValidationError,
    ToolError,
    WorkspaceError,
)
from ide_agent.use_cases.chat.orchestrator import ChatTurnRequest

router = APIRouter()


def error_response(status_code: int, error: str, details: Any = None) -> JSONResponse:
    """Build an ``{error, details}`` JSON response."""
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def status_for(exc: BaseAppError) -> int:
    """HTTP status code for an application error."""
    if isinstance(exc, ReasoningEngineError):
        return 502
    if isinstance(exc, ToolError):
        return 400
    if isinstance(exc, ResponseValidationError):
        return 422
    if isinstance(exc, WorkspaceError):
        return 400
    return 500


def details_for(exc: BaseAppError) -> Any:
    if isinstance(exc, ResponseValidationError):
        return exc.problems
    if isinstance(exc, ReasoningEngineError) and exc.status_code is not None:
        return {"status_code": exc.status_code}
    return None


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
def chat(body: ChatRequest):
    """
    Run one conversation turn, applying any tool calls the engine makes.

    Args:
        body: Conversation history plus the editor state

    Returns:
        ChatResponse: Final assistant message, merged usage and per-call results
    """
    request = ChatTurnRequest(
        messages=[m.to_entity() for m in body.messages],
        open_files=list(body.files),
        current_file=body.current_file,
        selection=body.selection_entity(),
    )
    result = get_orchestrator().run_turn(request)
    return ChatResponse(
        success=result.success,
        message=result.message.to_dict(),
        usage=result.usage,
        tool_results=[r.to_dict() for r in result.tool_results],
        error=result.error,
    )


@router.post(
    "/operations",
    responses={422: {"model": ErrorResponse}},
)
def execute_operations(body: AgentResponseRequest):
    """
    Validate a complete agent response and apply it as one batch.

    Returns:
        The batch result; ``success`` is False when the batch was rolled back
    """
    result = get_execute_response_uc().execute(body.to_entity())
    return result.to_dict()


@router.get("/workspace", response_model=WorkspaceResponse)
def workspace_structure():
    """List the workspace tree (hidden entries and dependency caches excluded)."""
    snapshot = get_snapshot_uc()
    structure = snapshot.execute()
    return WorkspaceResponse(
        workspace_path=get_workspace().root,
        files=structure.files,
        directories=structure.directories,
    )


@router.get(
    "/workspace/file",
    response_model=FileContentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def read_file(path: str = Query(..., description="File path relative to the workspace root")):
    """Return the text content of a workspace file."""
    workspace = get_workspace()
    if not workspace.exists(path) or workspace.is_dir(path):
        return error_response(404, f"File {path} does not exist")
    return FileContentResponse(path=path, content=workspace.read_text(path))
