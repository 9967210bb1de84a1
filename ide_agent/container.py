"""
Dependency injection container for managing application dependencies.
"""

import logging
from typing import Optional

from ide_agent.adapters.llm.openai_adapter import OpenAIAdapter
from ide_agent.adapters.workspace.local_workspace_adapter import LocalWorkspaceAdapter
from ide_agent.config.settings import settings
from ide_agent.ports.llm.llm_port import ReasoningEnginePort
from ide_agent.ports.llm.tools_port import ToolsHandlerPort
from ide_agent.ports.workspace.workspace_port import WorkspacePort
from ide_agent.use_cases.chat.orchestrator import ToolCallOrchestrator
from ide_agent.use_cases.mutations.edit_engine import TransactionalEditEngine
from ide_agent.use_cases.mutations.execute_response import ExecuteAgentResponseUseCase
from ide_agent.use_cases.mutations.primitives import MutationPrimitives
from ide_agent.use_cases.tools.workspace_tools import WorkspaceToolsHandler
from ide_agent.use_cases.workspace.snapshot import WorkspaceSnapshotUseCase


class DependencyContainer:
    """
    Container for managing application dependencies using dependency injection.

    Workspace-bound instances are built once per workspace root; the root
    defaults to the configured one.
    """

    def __init__(self, workspace_root: Optional[str] = None):
        self._instances = {}
        self._logger = logging.getLogger(__name__)
        self._workspace_root = workspace_root

    @property
    def workspace_root(self) -> str:
        return self._workspace_root or settings.workspace_root

    def _get(self, key: str, factory):
        if key not in self._instances:
            self._instances[key] = factory()
        return self._instances[key]

    def get_workspace(self) -> WorkspacePort:
        """
        Get the workspace adapter instance.

        Returns:
            WorkspacePort implementation bound to the workspace root
        """
        return self._get(
            "workspace", lambda: LocalWorkspaceAdapter(self.workspace_root, self._logger)
        )

    def get_primitives(self) -> MutationPrimitives:
        return self._get(
            "primitives", lambda: MutationPrimitives(self.get_workspace(), self._logger)
        )

    def get_edit_engine(self) -> TransactionalEditEngine:
        """
        Get the transactional edit engine with injected primitives.

        Returns:
            Configured TransactionalEditEngine
        """
        return self._get(
            "edit_engine",
            lambda: TransactionalEditEngine(self.get_primitives(), self._logger),
        )

    def get_execute_response_use_case(self) -> ExecuteAgentResponseUseCase:
        return self._get(
            "execute_response_use_case",
            lambda: ExecuteAgentResponseUseCase(self.get_edit_engine(), self._logger),
        )

    def get_snapshot_use_case(self) -> WorkspaceSnapshotUseCase:
        return self._get(
            "snapshot_use_case",
            lambda: WorkspaceSnapshotUseCase(self.get_workspace(), self._logger),
        )

    def get_tools_handler(self) -> ToolsHandlerPort:
        """
        Registry of the workspace mutation tools backed by the edit engine.
        """
        return self._get(
            "tools_handler",
            lambda: WorkspaceToolsHandler(self.get_edit_engine(), self._logger),
        )

    def get_reasoning_engine(self) -> ReasoningEnginePort:
        """
        Get the reasoning engine adapter instance.

        Returns:
            ReasoningEnginePort implementation
        """
        return self._get("reasoning_engine", lambda: OpenAIAdapter(logger=self._logger))

    def get_orchestrator(self) -> ToolCallOrchestrator:
        """
        Get the tool-call orchestrator with injected dependencies.

        Returns:
            Configured ToolCallOrchestrator
        """
        return self._get(
            "orchestrator",
            lambda: ToolCallOrchestrator(
                self.get_reasoning_engine(),
                self.get_tools_handler(),
                self.get_snapshot_use_case(),
                self._logger,
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
            ),
        )

    def reset(self):
        """Reset all instances (useful for testing)."""
        self._instances.clear()


# Global container instance
container = DependencyContainer()
