"""
Port and types for LLM tools (function calls), independent of the provider.
"""

from abc import ABC, abstractmethod
from typing import TypedDict

from ide_agent.entities.operations import BatchResult
from ide_agent.entities.tool_arguments import ToolArguments


class ToolSpec(TypedDict):
    """Specification for a tool that can be called by an LLM."""

    name: str
    description: str
    parameters: dict[str, object]  # JSON Schema


class ToolsHandlerPort(ABC):
    """
    Port interface for handling LLM tools (function calls).

    Parsing and dispatch are separate steps so that every invocation of a
    turn can be checked before any of them runs.
    """

    @abstractmethod
    def available_tools(self) -> list[ToolSpec]:
        """
        Get a list of available tools.

        Returns:
            List of tool specifications
        """
        pass

    @abstractmethod
    def parse(self, name: str, arguments: str) -> ToolArguments:
        """
        Parse and validate raw invocation arguments.

        Raises:
            UnknownToolError: If the tool name is unknown
            ToolArgumentsError: If the arguments are malformed
        """
        pass

    @abstractmethod
    def dispatch(self, arguments: ToolArguments) -> BatchResult:
        """
        Run parsed arguments as a batch.

        Returns:
            Result of the batch, successful or not
        """
        pass
