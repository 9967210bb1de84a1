"""
OpenAI-compatible adapter implementation of the reasoning engine port.
"""

import json
import logging
from collections.abc import Iterable
from typing import Any, Optional, cast

from openai import APIConnectionError, APIStatusError, APITimeoutError, OpenAI, OpenAIError
from openai.types.chat import ChatCompletionMessageParam, ChatCompletionToolParam
from typing_extensions import override

from ide_agent.config.settings import settings
from ide_agent.entities.conversation import (
    ConversationMessage,
    EngineReply,
    ToolInvocation,
)
from ide_agent.exceptions import ReasoningEngineError
from ide_agent.ports.llm.llm_port import ReasoningEnginePort


class OpenAIAdapter(ReasoningEnginePort):
    """Chat-completions implementation of the reasoning engine port."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        api_base: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        logger: logging.Logger | None = None,
        client: OpenAI | None = None,
    ):
        """
        Initialize the OpenAI adapter.

        Args:
            api_key: API key (defaults to settings)
            model: Model name (defaults to settings)
            api_base: API base URL (defaults to settings)
            timeout: Per-request timeout in seconds (defaults to settings)
            max_retries: Client retries on transient failures (defaults to settings)
            logger: Logger instance to use for logging. If None, a default logger will be created.
            client: Preconfigured client, mainly for tests
        """
        self.model: str = model or settings.openai_model
        self.api_base: str | None = api_base or settings.openai_api_base
        self.timeout: float = timeout if timeout is not None else settings.request_timeout
        self._logger: logging.Logger = logger or logging.getLogger(__name__)

        if client is not None:
            self.client: OpenAI = client
        else:
            self.client = OpenAI(
                api_key=api_key or settings.require_api_key(),
                base_url=self.api_base,
                timeout=self.timeout,
                max_retries=max_retries if max_retries is not None else settings.max_retries,
            )

    def _to_wire(
        self, messages: list[ConversationMessage]
    ) -> list[ChatCompletionMessageParam]:
        return cast(list[ChatCompletionMessageParam], [m.to_dict() for m in messages])

    def _extract_reply(self, response: Any) -> EngineReply:
        """
        Convert a chat-completions response into an EngineReply.

        Raises:
            ReasoningEngineError: If the response carries no message
        """
        choices = getattr(response, "choices", None) or []
        if not choices or getattr(choices[0], "message", None) is None:
            raise ReasoningEngineError("Invalid response format from the reasoning engine")
        msg = choices[0].message

        tool_calls: list[ToolInvocation] = []
        for tc in getattr(msg, "tool_calls", None) or []:
            function = getattr(tc, "function", None)
            if function is None:
                continue
            arguments = function.arguments
            if not isinstance(arguments, str):
                arguments = json.dumps(arguments, ensure_ascii=False)
            tool_calls.append(
                ToolInvocation(id=tc.id, name=function.name, arguments=arguments)
            )

        usage: dict[str, Any] = {}
        raw_usage = getattr(response, "usage", None)
        if raw_usage is not None:
            usage = raw_usage.model_dump() if hasattr(raw_usage, "model_dump") else dict(raw_usage)

        return EngineReply(
            message=ConversationMessage(
                role="assistant", content=msg.content, tool_calls=tool_calls
            ),
            usage=usage,
        )

    @override
    def complete(
        self,
        messages: list[ConversationMessage],
        tools: Optional[list[dict[str, Any]]] = None,
        **kwargs: Any,
    ) -> EngineReply:
        """
        Send the conversation to the chat-completions endpoint.

        Raises:
            ReasoningEngineError: On connection errors, timeouts, error statuses or empty replies
        """
        params: dict[str, Any] = {
            "model": self.model,
            "messages": self._to_wire(messages),
            "temperature": kwargs.get("temperature", settings.temperature),
            "max_tokens": kwargs.get("max_tokens", settings.max_tokens),
        }
        if tools:
            params["tools"] = cast(Iterable[ChatCompletionToolParam], tools)
            params["tool_choice"] = kwargs.get("tool_choice", "auto")

        try:
            response = self.client.chat.completions.create(**params)
        except APITimeoutError as e:
            self._logger.error(f"Reasoning engine timed out after {self.timeout}s")
            raise ReasoningEngineError(f"Reasoning engine timed out: {e}") from e
        except APIStatusError as e:
            self._logger.error(f"Reasoning engine error status {e.status_code}: {e}")
            raise ReasoningEngineError(
                f"Reasoning engine error: {e.status_code}", status_code=e.status_code
            ) from e
        except APIConnectionError as e:
            self._logger.error(f"Reasoning engine unreachable: {e}")
            raise ReasoningEngineError(f"Reasoning engine unreachable: {e}") from e
        except OpenAIError as e:
            raise ReasoningEngineError(f"Reasoning engine request failed: {e}") from e

        return self._extract_reply(response)

    @override
    def get_model_info(self) -> dict[str, Any]:
        return {"provider": "openai-compatible", "model": self.model, "api_base": self.api_base}
