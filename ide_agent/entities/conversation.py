"""
Conversation entities exchanged with the reasoning engine.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class ToolInvocation:
    """A tool call requested by the reasoning engine. ``arguments`` is the raw JSON string."""

    id: str
    name: str
    arguments: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ToolInvocation":
        """Accept both the OpenAI wire shape and a flat ``{id, name, arguments}`` dict."""
        function = data.get("function") or {}
        name = function.get("name", data.get("name"))
        arguments = function.get("arguments", data.get("arguments", ""))
        if isinstance(arguments, dict):
            arguments = json.dumps(arguments, ensure_ascii=False)
        return cls(
            id=str(data.get("id") or ""),
            name=str(name or ""),
            arguments=arguments if isinstance(arguments, str) else str(arguments),
        )


@dataclass
class ConversationMessage:
    role: str
    content: Optional[str] = ""
    tool_calls: list[ToolInvocation] = field(default_factory=list)
    tool_call_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            data["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConversationMessage":
        return cls(
            role=str(data.get("role") or "user"),
            content=data.get("content"),
            tool_calls=[
                ToolInvocation.from_dict(tc) for tc in (data.get("tool_calls") or [])
            ],
            tool_call_id=data.get("tool_call_id"),
        )

    @classmethod
    def tool_result(cls, tool_call_id: str, content: str) -> "ConversationMessage":
        return cls(role="tool", content=content, tool_call_id=tool_call_id)


@dataclass
class EngineReply:
    """One completion returned by the reasoning engine."""

    message: ConversationMessage
    usage: dict[str, Any] = field(default_factory=dict)
