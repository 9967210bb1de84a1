"""
Reasoning engine port interface defining the contract for chat-completion implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ide_agent.entities.conversation import ConversationMessage, EngineReply


class ReasoningEnginePort(ABC):
    """Port interface for the external reasoning engine."""

    @abstractmethod
    def complete(
        self,
        messages: list[ConversationMessage],
        tools: Optional[list[dict[str, Any]]] = None,
        **kwargs: Any,
    ) -> EngineReply:
        """
        Submit a conversation and return the engine's next message.

        Args:
            messages: Full conversation, system message first
            tools: Tool declarations in chat-completions format; None disables tools
            **kwargs: Additional model-specific parameters (temperature, max_tokens, ...)

        Returns:
            The reply message (possibly carrying tool invocations) and token usage

        Raises:
            ReasoningEngineError: If the engine is unreachable, times out or answers with an error
        """
        pass

    def get_model_info(self) -> dict[str, Any]:
        """
        Get information about the current model configuration.

        Returns:
            Dictionary with model configuration details
        """
        return {"provider": "Unknown", "model": "Unknown"}
