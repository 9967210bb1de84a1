"""
FastAPI dependency functions for retrieving use cases from the container.
"""

from ide_agent.container import container
from ide_agent.ports.workspace.workspace_port import WorkspacePort
from ide_agent.use_cases.chat.orchestrator import ToolCallOrchestrator
from ide_agent.use_cases.mutations.execute_response import ExecuteAgentResponseUseCase
from ide_agent.use_cases.workspace.snapshot import WorkspaceSnapshotUseCase


def get_orchestrator() -> ToolCallOrchestrator:
    """
    Get the tool-call orchestrator from the container.

    Returns:
        ToolCallOrchestrator: The orchestrator instance
    """
    return container.get_orchestrator()


def get_execute_response_uc() -> ExecuteAgentResponseUseCase:
    """
    Get the execute agent response use case from the container.

    Returns:
        ExecuteAgentResponseUseCase: The use case instance
    """
    return container.get_execute_response_use_case()


def get_snapshot_uc() -> WorkspaceSnapshotUseCase:
    return container.get_snapshot_use_case()


def get_workspace() -> WorkspacePort:
    return container.get_workspace()
