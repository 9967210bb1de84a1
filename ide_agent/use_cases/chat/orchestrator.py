"""
Two-phase tool-calling protocol with the reasoning engine.

    AWAITING_INITIAL -> DISPATCHING_TOOLS -> AWAITING_FINAL -> DONE
    AWAITING_INITIAL -> DONE                 (plain reply, no tool calls)

Every invocation of a turn is parsed before any of them is dispatched, so a
malformed or unknown call aborts the turn with the workspace untouched. Once
dispatching starts, each invocation runs as its own batch and a failed batch
does not stop the following ones; all results are reported back to the engine.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ide_agent.entities.conversation import ConversationMessage, ToolInvocation
from ide_agent.entities.operations import BatchResult
from ide_agent.entities.tool_arguments import ToolArguments
from ide_agent.entities.workspace import Selection
from ide_agent.exceptions import ToolError
from ide_agent.ports.llm.llm_port import ReasoningEnginePort
from ide_agent.ports.llm.tools_port import ToolsHandlerPort
from ide_agent.use_cases.chat.prompt import generate_system_prompt
from ide_agent.use_cases.workspace.snapshot import WorkspaceSnapshotUseCase


class ProtocolState(str, Enum):
    AWAITING_INITIAL = "awaiting_initial"
    DISPATCHING_TOOLS = "dispatching_tools"
    AWAITING_FINAL = "awaiting_final"
    DONE = "done"


@dataclass
class ChatTurnRequest:
    """A collaborator message plus the editor state that frames it."""

    messages: list[ConversationMessage]
    open_files: list[str] = field(default_factory=list)
    current_file: Optional[str] = None
    selection: Optional[Selection] = None


@dataclass
class ToolResult:
    invocation: ToolInvocation
    result: BatchResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "toolCallId": self.invocation.id,
            "name": self.invocation.name,
            "result": self.result.to_dict(),
        }


@dataclass
class TurnResult:
    success: bool
    message: ConversationMessage
    usage: dict[str, Any] = field(default_factory=dict)
    tool_results: list[ToolResult] = field(default_factory=list)
    states: list[ProtocolState] = field(default_factory=list)
    error: Optional[str] = None


def merge_usage(*usages: dict[str, Any]) -> dict[str, Any]:
    """Sum numeric usage counters across requests (nested detail dicts included)."""
    merged: dict[str, Any] = {}
    for usage in usages:
        for key, value in (usage or {}).items():
            current = merged.get(key)
            if isinstance(value, bool) or value is None:
                merged.setdefault(key, value)
            elif isinstance(value, (int, float)) and isinstance(current, (int, float)):
                merged[key] = current + value
            elif isinstance(value, dict) and isinstance(current, dict):
                merged[key] = merge_usage(current, value)
            else:
                merged[key] = value
    return merged


class ToolCallOrchestrator:
    """Drives one conversation turn: initial request, tool dispatch, final request."""

    def __init__(
        self,
        engine: ReasoningEnginePort,
        tools: ToolsHandlerPort,
        snapshot: WorkspaceSnapshotUseCase,
        logger: Optional[logging.Logger] = None,
        **engine_params: Any,
    ):
        """
        Initialize the orchestrator.

        Args:
            engine: Reasoning engine port
            tools: Tools handler that parses and dispatches invocations
            snapshot: Workspace snapshot provider for the context block
            logger: Logger instance to use for logging
            **engine_params: Extra parameters forwarded on every engine request
        """
        self._engine = engine
        self._tools = tools
        self._snapshot = snapshot
        self._logger = logger or logging.getLogger(__name__)
        self._engine_params = engine_params

    def _to_openai_tools(self) -> list[dict[str, Any]]:
        return [
            {
                "type": "function",
                "function": {
                    "name": spec["name"],
                    "description": spec["description"],
                    "parameters": spec["parameters"],
                    "strict": True,
                },
            }
            for spec in self._tools.available_tools()
        ]

    def _enter(self, trace: list[ProtocolState], state: ProtocolState) -> None:
        trace.append(state)
        self._logger.debug(f"Chat turn state: {state.value}")

    def run_turn(self, request: ChatTurnRequest) -> TurnResult:
        """
        Run one turn of the protocol.

        Returns:
            TurnResult; ``success`` is False when any dispatched batch failed

        Raises:
            ReasoningEngineError: If either engine request fails; no later phase runs
            UnknownToolError: If an invocation names an undeclared tool; nothing is dispatched
            ToolArgumentsError: If an invocation's arguments are malformed; nothing is dispatched
        """
        trace: list[ProtocolState] = []
        self._enter(trace, ProtocolState.AWAITING_INITIAL)

        context = self._snapshot.context(
            current_file=request.current_file,
            selection=request.selection,
            open_files=request.open_files,
        )
        system = ConversationMessage(
            role="system",
            content=generate_system_prompt(context, self._tools.available_tools()),
        )
        conversation = [system, *request.messages]

        first = self._engine.complete(
            conversation, tools=self._to_openai_tools(), **self._engine_params
        )
        calls = first.message.tool_calls
        if not calls:
            self._enter(trace, ProtocolState.DONE)
            return TurnResult(
                success=True, message=first.message, usage=first.usage, states=trace
            )

        self._enter(trace, ProtocolState.DISPATCHING_TOOLS)
        parsed = self._parse_all(calls)

        tool_results: list[ToolResult] = []
        tool_messages: list[ConversationMessage] = []
        for call, arguments in parsed:
            batch = self._tools.dispatch(arguments)
            if not batch.success:
                self._logger.warning(f"Tool call {call.id} ({call.name}) failed: {batch.message}")
            tool_results.append(ToolResult(call, batch))
            tool_messages.append(
                ConversationMessage.tool_result(
                    call.id, json.dumps(batch.to_dict(), ensure_ascii=False)
                )
            )

        self._enter(trace, ProtocolState.AWAITING_FINAL)
        final = self._engine.complete(
            [*conversation, first.message, *tool_messages], **self._engine_params
        )
        self._enter(trace, ProtocolState.DONE)

        failed = [r for r in tool_results if not r.result.success]
        error = None
        if failed:
            error = "One or more tool operations failed: " + "; ".join(
                r.result.message for r in failed
            )
        return TurnResult(
            success=not failed,
            message=final.message,
            usage=merge_usage(first.usage, final.usage),
            tool_results=tool_results,
            states=trace,
            error=error,
        )

    def _parse_all(
        self, calls: list[ToolInvocation]
    ) -> list[tuple[ToolInvocation, ToolArguments]]:
        parsed: list[tuple[ToolInvocation, ToolArguments]] = []
        for call in calls:
            try:
                parsed.append((call, self._tools.parse(call.name, call.arguments)))
            except ToolError as e:
                self._logger.error(f"Aborting turn on tool call {call.id}: {e}")
                raise
        return parsed
